"""CLI entrypoints for tocgen commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from .config import ConfigError, TocConfig, config_from_mapping, load_config
from .contents import TableOfContents
from .headings.selectors import SelectorError
from .logging import configure_logging, get_logger

LOGGER = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Log pipeline decisions (skipped selectors, match counts) to stderr.",
    )


def _add_io_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="HTML file to process, or '-' to read stdin.")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .tocgen.yml (defaults to the one next to the input file).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the result to this file instead of stdout.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tocgen",
        description="Anchor HTML headings and build a table of contents.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Rewrite headings with anchors and print the table of contents.",
    )
    _add_verbose_option(build_parser, suppress_default=True)
    _add_io_options(build_parser)
    build_parser.add_argument(
        "-s",
        "--selectors",
        default="",
        help="Selectors and markers, e.g. 'h2 h3|h4 .note embed'.",
    )
    build_parser.add_argument(
        "--page-url",
        default=None,
        help="Address of the rendered page, used for microdata.",
    )
    build_parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a configuration option (repeatable).",
    )
    build_parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON object with toc, content and entries.",
    )

    shortcode_parser = subparsers.add_parser(
        "shortcode",
        help="Replace the [contents] shortcode with the table of contents.",
    )
    _add_verbose_option(shortcode_parser, suppress_default=True)
    _add_io_options(shortcode_parser)

    strip_parser = subparsers.add_parser(
        "strip",
        help="Remove the [contents] shortcode from a document.",
    )
    _add_verbose_option(strip_parser, suppress_default=True)
    _add_io_options(strip_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tocgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        document = _read_input(args.path)
        config = _resolve_config(args)
        contents = TableOfContents(config)

        if args.command == "build":
            outcome = contents.make_contents(document, args.selectors, page_url=args.page_url)
            if not outcome.found:
                LOGGER.warning("No table of contents produced for %s", args.path)
            if args.json:
                payload = {
                    "toc": outcome.toc,
                    "content": outcome.content,
                    "entries": [asdict(entry) for entry in outcome.entries],
                }
                output = json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
            else:
                output = outcome.toc + ("\n" if outcome.toc else "") + outcome.content
        elif args.command == "shortcode":
            output = contents.apply_shortcode(document)
        elif args.command == "strip":
            output = contents.strip_shortcode(document)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, SelectorError) as exc:
        parser.exit(1, f"tocgen {args.command} failed: {exc}\n")

    _write_output(output, args.output)


def _resolve_config(args: argparse.Namespace) -> TocConfig:
    if args.config is not None:
        if not args.config.exists():
            raise FileNotFoundError(f"Config file not found: {args.config}")
        config = load_config(args.config)
    elif args.path != "-":
        config = load_config(Path(args.path).expanduser().resolve().parent)
    else:
        config = load_config(Path.cwd())

    overrides = getattr(args, "overrides", None) or []
    if overrides:
        config = config_from_mapping(_parse_overrides(overrides), base=config)
    return config


def _parse_overrides(items: list[str]) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ConfigError(f"Expected KEY=VALUE, got {item!r}")
        parsed[key.strip()] = value
    return parsed


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    source = Path(path).expanduser()
    if not source.is_file():
        raise FileNotFoundError(f"Input file not found: {path}")
    return source.read_text(encoding="utf-8")


def _write_output(text: str, target: Optional[Path]) -> None:
    if target is None:
        sys.stdout.write(text)
        return
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")


if __name__ == "__main__":
    main(sys.argv[1:])

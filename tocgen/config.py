"""Configuration loading for tocgen (.tocgen.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import yaml

CONFIG_FILENAME = ".tocgen.yml"

ANCHOR_TYPES = ("id", "a")

LeaveTags = Union[str, Tuple[str, ...]]

_TAG_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9:-]*")
_MARGIN_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-z%]*)\s*$", re.IGNORECASE)


class ConfigError(RuntimeError):
    """Raised when options cannot be parsed or hold invalid values."""


@dataclass(frozen=True)
class TocConfig:
    """Options consumed by a single table-of-contents run.

    Instances are immutable; use :meth:`with_overrides` to derive a copy for
    one invocation.
    """

    margin: str = "2em"
    selectors: Tuple[str, ...] = ("h2", "h3", "h4")
    to_menu: str = "contents ↑"
    title: str = "Table of Contents:"
    js: str = ""
    min_found: int = 1
    min_length: int = 500
    page_url: str = ""
    shortcode: str = "contents"
    spec: str = ""
    anchor_type: str = "id"
    anchor_attr_name: str = "id"
    markup: bool = False
    anchor_link: str = ""
    tomenu_simcount: int = 800
    leave_tags: LeaveTags = "all"
    as_table: Optional[Tuple[str, str]] = None
    embed: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.selectors, str):
            object.__setattr__(self, "selectors", tuple(self.selectors.split()))
        else:
            object.__setattr__(self, "selectors", tuple(self.selectors))
        object.__setattr__(self, "leave_tags", normalise_leave_tags(self.leave_tags))
        if self.as_table is not None:
            object.__setattr__(self, "as_table", _as_table_pair(self.as_table))

        if self.anchor_type not in ANCHOR_TYPES:
            raise ConfigError(
                f"anchor_type must be one of {', '.join(ANCHOR_TYPES)}, got {self.anchor_type!r}"
            )
        for name in ("min_found", "min_length", "tomenu_simcount"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer, got {value!r}")
        if not self.shortcode.strip():
            raise ConfigError("shortcode name must not be empty")
        parse_margin(self.margin)

    @property
    def to_menu_enabled(self) -> bool:
        return bool(self.to_menu)

    def with_overrides(self, **changes: Any) -> "TocConfig":
        """Return a copy with ``changes`` applied (validated again)."""
        return replace(self, **changes)


def normalise_leave_tags(value: Any) -> LeaveTags:
    """Coerce the tag-preservation policy to ``"all"``, ``"none"`` or a tuple of tag names.

    Accepted inputs: booleans, ``"all"``/``"none"``, a PHP-style allow-list
    string such as ``"<b><code>"``, a space/comma separated string, or a list.
    """
    if value is True or value is None:
        return "all"
    if value is False:
        return "none"
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"all", "true", "yes", "1"}:
            return "all"
        if lowered in {"", "none", "false", "no", "0"}:
            return "none"
        names = re.split(r"[<>\s,]+", lowered)
    elif isinstance(value, Sequence):
        names = [str(item).strip().strip("<>").lower() for item in value]
    else:
        raise ConfigError(f"Unsupported leave_tags value: {value!r}")

    result: List[str] = []
    for name in names:
        if not name:
            continue
        if not _TAG_NAME_PATTERN.fullmatch(name):
            raise ConfigError(f"Invalid tag name in leave_tags: {name!r}")
        if name not in result:
            result.append(name)
    return tuple(result) if result else "none"


def parse_margin(margin: str) -> Optional[Tuple[float, str]]:
    """Split ``"2em"`` into ``(2.0, "em")``; unit defaults to ``px``, zero or empty gives None."""
    if not margin or not margin.strip():
        return None
    match = _MARGIN_PATTERN.match(margin)
    if not match:
        raise ConfigError(f"Invalid margin value: {margin!r}")
    amount = float(match.group(1))
    if amount == 0:
        return None
    return amount, (match.group(2) or "px").lower()


def config_from_mapping(
    data: Mapping[str, Any], *, base: Optional[TocConfig] = None
) -> TocConfig:
    """Build a config from loosely typed mapping data (YAML, JSON, CLI)."""
    base = base or TocConfig()
    known = {item.name for item in fields(TocConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")

    changes: Dict[str, Any] = {}
    for key, value in data.items():
        if value is None:
            continue
        if key in {"min_found", "min_length", "tomenu_simcount"}:
            coerced = _as_int(value)
            if coerced is None:
                raise ConfigError(f"{key} must be an integer, got {value!r}")
            changes[key] = coerced
        elif key in {"markup", "embed"}:
            flag = _as_bool(value)
            if flag is None:
                raise ConfigError(f"{key} must be a boolean, got {value!r}")
            changes[key] = flag
        elif key == "to_menu" and isinstance(value, bool):
            # ``to_menu: false`` disables the link; ``true`` keeps the default label
            changes[key] = base.to_menu if value else ""
        elif key == "selectors":
            changes[key] = tuple(_as_str_list(value) if not isinstance(value, str) else value.split())
        elif key == "leave_tags":
            changes[key] = value
        elif key == "as_table":
            changes[key] = None if value is False else value
        else:
            text = _as_str(value)
            if text is None:
                raise ConfigError(f"{key} must be a string, got {value!r}")
            changes[key] = text

    return base.with_overrides(**changes)


def load_config(config_path: Path) -> TocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return TocConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return config_from_mapping(data)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_table_pair(value: Any) -> Tuple[str, str]:
    if isinstance(value, str):
        parts = value.split("|")
    elif isinstance(value, Sequence):
        parts = [str(item) for item in value]
    else:
        raise ConfigError(f"as_table must be 'Title|Description' or a pair, got {value!r}")
    if len(parts) != 2:
        raise ConfigError(f"as_table needs exactly two captions, got {len(parts)}")
    return parts[0].strip(), parts[1].strip()


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "ANCHOR_TYPES",
    "CONFIG_FILENAME",
    "ConfigError",
    "TocConfig",
    "config_from_mapping",
    "load_config",
    "normalise_leave_tags",
    "parse_margin",
]

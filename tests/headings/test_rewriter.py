"""Tests for in-place heading rewriting."""

from __future__ import annotations

from tocgen.config import TocConfig
from tocgen.headings.extractor import build_rule, find_headings
from tocgen.headings.levels import resolve_levels
from tocgen.headings.rewriter import DocumentRewriter
from tocgen.headings.selectors import parse_selectors

LINKED_INNER = 'Read <a href="/x">the <b>docs</b></a> <img src="i.png">now'


def _rewrite(document: str, config: TocConfig, spec: str = "h2"):
    parsed = parse_selectors(spec)
    headings = find_headings(document, build_rule(parsed.selectors))
    levels = resolve_levels(parsed.selectors, parsed.spec_text)
    return DocumentRewriter(config).rewrite(document, headings, levels)


def test_id_is_injected_and_text_outside_headings_is_kept(relaxed_config) -> None:
    document = "<p>lead</p><h2>Intro</h2><p>body</p>"
    rewritten, entries = _rewrite(document, relaxed_config)

    assert rewritten == '<p>lead</p><h2 id="intro">Intro</h2><p>body</p>'
    assert [(e.anchor, e.text, e.level, e.tag, e.position) for e in entries] == [
        ("intro", "Intro", 0, "h2", 1)
    ]


def test_entries_carry_levels_from_selectors(relaxed_config) -> None:
    document = "<h2>A</h2><h3>B</h3><h4>C</h4><h2>D</h2>"
    _, entries = _rewrite(document, relaxed_config, "h2 h3 h4")
    assert [(e.anchor, e.level) for e in entries] == [("a", 0), ("b", 1), ("c", 2), ("d", 0)]


def test_duplicate_headings_get_unique_anchors(relaxed_config) -> None:
    rewritten, entries = _rewrite("<h2>FAQ</h2><h2>FAQ</h2>", relaxed_config)
    assert [e.anchor for e in entries] == ["faq", "faq-2"]
    assert rewritten == '<h2 id="faq">FAQ</h2><h2 id="faq-2">FAQ</h2>'


def test_existing_id_supplies_the_anchor_and_is_replaced(relaxed_config) -> None:
    rewritten, entries = _rewrite('<h2 class="x" id="Custom ID">Title</h2>', relaxed_config)
    assert entries[0].anchor == "custom-id"
    assert rewritten == '<h2 id="custom-id" class="x">Title</h2>'


def test_empty_id_falls_back_to_heading_text(relaxed_config) -> None:
    rewritten, entries = _rewrite('<h2 id="">Title</h2>', relaxed_config)
    assert entries[0].anchor == "title"
    assert rewritten == '<h2 id="title">Title</h2>'


def test_without_anchor_attribute_old_id_is_discarded(relaxed_config) -> None:
    config = relaxed_config.with_overrides(anchor_attr_name="")
    rewritten, entries = _rewrite('<h2 id="old">New name</h2>', config)
    assert entries[0].anchor == "new-name"
    assert rewritten == '<h2 id="new-name">New name</h2>'


def test_custom_anchor_attribute_is_kept_on_the_element(relaxed_config) -> None:
    config = relaxed_config.with_overrides(anchor_attr_name="data-anchor")
    rewritten, entries = _rewrite('<h2 data-anchor="Setup">Install</h2>', config)
    assert entries[0].anchor == "setup"
    assert rewritten == '<h2 id="setup" data-anchor="Setup">Install</h2>'


def test_anchor_element_mode(relaxed_config) -> None:
    config = relaxed_config.with_overrides(anchor_type="a")
    rewritten, _ = _rewrite("<p>x</p><h2>Intro</h2>", config)
    assert rewritten == '<p>x</p><a class="tocgen-anchor" name="intro"></a>\n<h2>Intro</h2>'


def test_anchor_element_is_not_duplicated_on_rerun(relaxed_config) -> None:
    config = relaxed_config.with_overrides(anchor_type="a")
    once, _ = _rewrite("<h2>Intro</h2>", config)
    twice, _ = _rewrite(once, config)
    assert twice == once


def test_anchor_link_glyph_is_prepended(relaxed_config) -> None:
    config = relaxed_config.with_overrides(anchor_link="#")
    rewritten, entries = _rewrite("<h2>Intro</h2>", config)
    assert rewritten == (
        '<h2 id="intro"><a rel="nofollow" class="tocgen-anchlink" href="#intro">#</a> Intro</h2>'
    )
    assert entries[0].text == "Intro"

    again, entries = _rewrite(rewritten, config)
    assert again == rewritten
    assert entries[0].text == "Intro"


def test_leave_tags_all_drops_only_links_and_images(relaxed_config) -> None:
    _, entries = _rewrite(f"<h2>{LINKED_INNER}</h2>", relaxed_config)
    assert entries[0].text == "Read the <b>docs</b> now"
    assert entries[0].anchor == "read-the-docs-now"


def test_leave_tags_none_strips_all_markup(relaxed_config) -> None:
    config = relaxed_config.with_overrides(leave_tags="none")
    _, entries = _rewrite(f"<h2>{LINKED_INNER}</h2>", config)
    assert entries[0].text == "Read the docs now"


def test_leave_tags_allow_list(relaxed_config) -> None:
    config = relaxed_config.with_overrides(leave_tags="<b>")
    _, entries = _rewrite(f"<h2>{LINKED_INNER} <i>!</i></h2>", config)
    assert entries[0].text == "Read the <b>docs</b> now !"


def _spaced_document() -> str:
    return "<h2>A</h2>" + "x" * 10 + "<h2>B</h2>" + "y" * 60 + "<h2>C</h2>"


def test_back_to_top_link_needs_enough_distance(relaxed_config) -> None:
    config = relaxed_config.with_overrides(to_menu="up", tomenu_simcount=50)
    rewritten, _ = _rewrite(_spaced_document(), config)

    link = '<a rel="nofollow" class="tocgen-gotop" href="#tocmenu">up</a>'
    assert rewritten.count(link) == 1
    assert link + '<h2 id="c">C</h2>' in rewritten
    assert rewritten.startswith('<h2 id="a">A</h2>')


def test_back_to_top_threshold_is_inclusive(relaxed_config) -> None:
    config = relaxed_config.with_overrides(to_menu="up", tomenu_simcount=70)
    rewritten, _ = _rewrite(_spaced_document(), config)
    assert rewritten.count("tocgen-gotop") == 1


def test_back_to_top_link_uses_page_url(relaxed_config) -> None:
    config = relaxed_config.with_overrides(
        to_menu="up", tomenu_simcount=0, page_url="https://example.com/post"
    )
    rewritten, _ = _rewrite("<h2>A</h2>", config)
    assert rewritten.startswith(
        '<a rel="nofollow" class="tocgen-gotop" href="https://example.com/post#tocmenu">up</a>'
    )


def test_disabled_menu_link_adds_nothing(relaxed_config) -> None:
    config = relaxed_config.with_overrides(tomenu_simcount=0)
    rewritten, _ = _rewrite(_spaced_document(), config)
    assert "tocgen-gotop" not in rewritten


def test_table_mode_reads_following_paragraph(relaxed_config) -> None:
    config = relaxed_config.with_overrides(as_table=("Section", "Summary"))
    document = "<h2>A</h2>\n<p>First <em>para</em></p><h2>B</h2><div>none</div>"
    _, entries = _rewrite(document, config)
    assert [e.description for e in entries] == ["First <em>para</em>", ""]


def test_list_mode_has_no_description(relaxed_config) -> None:
    _, entries = _rewrite("<h2>A</h2><p>First</p>", relaxed_config)
    assert entries[0].description == ""

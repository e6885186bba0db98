from __future__ import annotations

import re

import pytest

from browsercompat.model import (
    DESKTOP_CATALOG,
    MOBILE_CATALOG,
    BrowserSupport,
    CompatBlock,
    Flag,
    NoteRegistry,
    SupportStatement,
)
from browsercompat.parse_compat import parse_compat_block
from browsercompat.render_html import (
    build_flag_note,
    collect_notes,
    format_version_status,
    no_data_message,
    render_aggregate_table,
    render_compat,
    render_feature_table,
    render_notes,
    render_support_cell,
    render_table_head,
    render_tabs,
)
from browsercompat.strings import make_strings

UNKNOWN = format_version_status(None)

_CELL_RE = re.compile(r"<td>(.*?)</td>")
_ANCHOR_RE = re.compile(r'<a href="#compatNote_(\d+)">(\d+)</a>')
_NOTE_RE = re.compile(r'<p id="compatNote_(\d+)">(\d+)\. (.*?)</p>')


def _single(**fields: object) -> BrowserSupport:
    statement = SupportStatement(**fields)  # type: ignore[arg-type]
    return BrowserSupport(kind="single", statements=(statement,))


def _feature(support: dict[str, object]) -> dict[str, object]:
    return {"__compat": {"basic_support": {"support": support}}}


def _rows(table: str) -> list[list[str]]:
    return [_CELL_RE.findall(row) for row in table.split("<tr>")[2:]]


def _sample_block() -> CompatBlock:
    return parse_compat_block(
        {
            "basic_support": {
                "support": {
                    "firefox": {"version_added": "10", "notes": "Shared caveat."},
                    "chrome": [
                        {"version_added": "20"},
                        {
                            "version_added": "15",
                            "flag": {"type": "preference", "name": "enable-x"},
                        },
                    ],
                }
            },
            "zeta_feature": {
                "description": "<code>zeta</code> handling",
                "support": {
                    "safari": {
                        "version_added": True,
                        "notes": ["Shared caveat.", "Only on macOS."],
                    },
                },
            },
            "alpha_feature": {
                "support": {"edge": {"version_added": False}},
            },
        }
    )


def test_version_status_markers_are_distinct() -> None:
    yes = format_version_status(True)
    no = format_version_status(False)

    assert len({yes, no, UNKNOWN}) == 3
    assert "(Yes)" in yes
    assert ">No<" in no
    assert ">?<" in UNKNOWN
    assert 'title="Compatibility unknown; please update this."' in UNKNOWN
    assert format_version_status("52") == "52"
    assert format_version_status(True) == yes


def test_version_status_uses_localized_strings() -> None:
    strings = make_strings({"supportsShort_yes": "(Oui)", "supportsShort_no": "Non"})

    assert "(Oui)" in format_version_status(True, strings)
    assert ">Non<" in format_version_status(False, strings)


def test_flag_note_preference_firefox_and_chrome() -> None:
    statement = SupportStatement(
        version_added="40",
        flag=Flag(type="preference", name="dom.feature.enabled", value_to_set="true"),
    )

    firefox = build_flag_note(statement, "firefox")
    chrome = build_flag_note(statement, "chrome")

    assert firefox == (
        "From version 40: this feature is behind the <code>dom.feature.enabled</code> "
        "preference (needs to be set to <code>true</code>). "
        "To change preferences in Firefox, visit about:config."
    )
    assert chrome.endswith("To change preferences in Chrome, visit chrome://flags.")
    assert "about:config" not in chrome


def test_flag_note_other_browser_has_no_instruction() -> None:
    statement = SupportStatement(flag=Flag(type="preference", name="x"))

    assert build_flag_note(statement, "safari") == (
        "This feature is behind the <code>x</code> preference."
    )


def test_flag_note_compile_flag_with_version_range() -> None:
    statement = SupportStatement(
        version_added="5",
        version_removed="9",
        flag=Flag(type="compile_flag", name="ENABLE_X", value_to_set="1"),
    )
    removed_only = SupportStatement(
        version_added=True,
        version_removed="9",
        flag=Flag(type="compile_flag", name="ENABLE_X"),
    )

    assert build_flag_note(statement, "firefox") == (
        "From version 5 until version 9 (exclusive): this feature is behind the "
        "<code>ENABLE_X</code> compile flag (needs to be set to <code>1</code>)."
    )
    assert build_flag_note(removed_only, "chrome") == (
        "Until version 9 (exclusive): this feature is behind the <code>ENABLE_X</code> "
        "compile flag."
    )


def test_flag_note_without_flag_is_empty() -> None:
    assert build_flag_note(SupportStatement(version_added="1"), "firefox") == ""


def test_collect_notes_order_and_dedupe() -> None:
    registry = collect_notes(_sample_block())

    assert registry.notes == (
        "Shared caveat.",
        "From version 15: this feature is behind the <code>enable-x</code> preference. "
        "To change preferences in Chrome, visit chrome://flags.",
        "Only on macOS.",
    )
    assert registry.position("Only on macOS.") == 3
    assert registry.position("never seen") is None


def test_collect_notes_is_fresh_per_call() -> None:
    block = _sample_block()

    first = collect_notes(block)
    first.add("leaked")
    second = collect_notes(block)

    assert "leaked" not in second
    assert len(second) == 3


def test_identical_flag_sentences_share_one_note() -> None:
    block = parse_compat_block(
        {
            "basic_support": {
                "support": {"firefox": {"flag": {"type": "preference", "name": "p"}}},
            },
            "other": {
                "support": {"firefox": {"flag": {"type": "preference", "name": "p"}}},
            },
        }
    )

    registry = collect_notes(block)
    table = render_feature_table(block, DESKTOP_CATALOG)

    assert len(registry) == 1
    assert table.count('<a href="#compatNote_1">1</a>') == 2


def test_support_cell_absent_renders_unknown() -> None:
    assert render_support_cell(BrowserSupport(kind="absent"), "firefox") == UNKNOWN


def test_support_cell_single_statement_details() -> None:
    support = _single(
        version_added="4",
        version_removed="30",
        prefix="-moz-",
        alternative_name="mozThing",
    )

    cell = render_support_cell(support, "firefox")

    assert cell.startswith("4 — 30 ")
    assert ">-moz-</span>" in cell
    assert cell.endswith(" (as <code>mozThing</code>)")


def test_support_cell_unknown_removal() -> None:
    cell = render_support_cell(_single(version_added="1", version_removed=True), "ie")

    assert cell == "1 — ?"


def test_support_cell_not_removed_when_false() -> None:
    assert render_support_cell(_single(version_added="1", version_removed=False), "ie") == "1"


def test_support_cell_multiple_statements_are_paragraphs() -> None:
    support = BrowserSupport(
        kind="multiple",
        statements=(SupportStatement(version_added="20"), SupportStatement(version_added=False)),
    )

    cell = render_support_cell(support, "chrome")

    assert cell == f"<p>20</p><p>{format_version_status(False)}</p>"


def test_support_cell_footnotes_disabled_without_registry() -> None:
    cell = render_support_cell(_single(version_added="3", notes=("A note.",)), "firefox")

    assert cell == "3"


def test_support_cell_footnote_anchors_sorted_as_text() -> None:
    registry = NoteRegistry()
    for index in range(1, 11):
        registry.add(f"Note {index}.")
    support = _single(version_added="7", notes=("Note 2.", "Note 10."))

    cell = render_support_cell(support, "firefox", registry=registry)

    assert [m[0] for m in _ANCHOR_RE.findall(cell)] == ["10", "2"]
    assert cell == (
        '7 <sup><a href="#compatNote_10">10</a></sup> <sup><a href="#compatNote_2">2</a></sup>'
    )


def test_support_cell_flag_anchor_appended() -> None:
    statement = SupportStatement(version_added="5", flag=Flag(type="compile_flag", name="F"))
    registry = NoteRegistry()
    registry.add("Unrelated.")
    registry.add(build_flag_note(statement, "safari"))

    cell = render_support_cell(
        BrowserSupport(kind="single", statements=(statement,)), "safari", registry=registry
    )

    assert cell == '5 <sup><a href="#compatNote_2">2</a></sup>'


def test_table_head_follows_catalog_order() -> None:
    head = render_table_head(MOBILE_CATALOG)

    assert head.startswith('<table class="compat-table"><tbody><tr><th>Feature</th>')
    names = re.findall(r"<th>(.*?)</th>", head)[1:]
    assert names == [name for _browser_id, name in MOBILE_CATALOG.browsers]


def test_feature_table_rows_keep_declaration_order() -> None:
    block = parse_compat_block(
        {
            "zeta_feature": {"description": "Zeta", "support": {}},
            "basic_support": {"support": {"firefox": {"version_added": "10"}}},
            "alpha_feature": {"support": {}},
        }
    )

    table = render_feature_table(block, DESKTOP_CATALOG)
    labels = [row[0] for row in _rows(table)]

    assert labels == ["Basic support", "Zeta", "<code>alpha_feature</code>"]


def test_feature_table_and_notes_numbering_agree() -> None:
    block = _sample_block()

    notes_html = render_notes(block)
    notes = {int(num): text for num, _label, text in _NOTE_RE.findall(notes_html)}
    registry = collect_notes(block)

    for catalog in (DESKTOP_CATALOG, MOBILE_CATALOG):
        table = render_feature_table(block, catalog)
        for number, label in _ANCHOR_RE.findall(table):
            assert number == label
            assert notes[int(number)] == registry.notes[int(number) - 1]

    assert sorted(notes) == [1, 2, 3]
    assert render_notes(registry) == notes_html


def test_feature_table_cells_reference_shared_note() -> None:
    table = render_feature_table(_sample_block(), DESKTOP_CATALOG)
    basic, zeta, alpha = _rows(table)
    browser_ids = DESKTOP_CATALOG.browser_ids

    firefox_cell = basic[1 + browser_ids.index("firefox")]
    safari_cell = zeta[1 + browser_ids.index("safari")]
    chrome_cell = basic[1 + browser_ids.index("chrome")]

    assert firefox_cell == '10 <sup><a href="#compatNote_1">1</a></sup>'
    assert '<a href="#compatNote_1">1</a>' in safari_cell
    assert '<a href="#compatNote_3">3</a>' in safari_cell
    assert chrome_cell == '<p>20</p><p>15 <sup><a href="#compatNote_2">2</a></sup></p>'
    assert zeta[0] == "<code>zeta</code> handling"
    assert alpha[1 + browser_ids.index("edge")] == format_version_status(False)
    assert alpha[1 + browser_ids.index("ie")] == UNKNOWN


def test_aggregate_table_sorted_without_footnotes() -> None:
    features = {
        "zoom": parse_compat_block(
            {"basic_support": {"support": {"chrome": {"version_added": "1", "notes": "n"}}}}
        ).basic_support,
        "align": parse_compat_block({"basic_support": {"support": {}}}).basic_support,
    }

    table = render_aggregate_table(features, DESKTOP_CATALOG)
    rows = _rows(table)

    assert [row[0] for row in rows] == ["<code>align</code>", "<code>zoom</code>"]
    assert "compatNote" not in table
    assert rows[1][1] == "1"
    assert all(cell == UNKNOWN for cell in rows[0][1:])


def test_tabs_mark_default_catalog() -> None:
    assert '<li class="selected"><a href="javascript:;">Desktop</a></li>' in render_tabs()
    assert '<li class="selected"><a href="javascript:;">Mobile</a></li>' in render_tabs("mobile")


def test_render_compat_feature_end_to_end() -> None:
    data = {"api": {"SomeAPI": _feature({"firefox": {"version_added": "10"}})}}

    output = render_compat(data, "api.SomeAPI")

    desktop = output.split('<div id="compat-desktop">')[1].split("</div>")[0]
    mobile = output.split('<div id="compat-mobile">')[1].split("</div>")[0]
    (basic,) = _rows(desktop)
    assert basic[0] == "Basic support"
    for browser_id, cell in zip(DESKTOP_CATALOG.browser_ids, basic[1:]):
        assert cell == ("10" if browser_id == "firefox" else UNKNOWN)
    (mobile_basic,) = _rows(mobile)
    assert all(cell == UNKNOWN for cell in mobile_basic[1:])
    assert output.count('class="compat-table"') == 2
    assert "compatNote" not in output


def test_render_compat_container_end_to_end() -> None:
    data = {
        "api": {
            "SomeContainer": {
                "Zebra": _feature({"chrome": {"version_added": "5", "notes": "x"}}),
                "Apple": _feature({"safari": {"version_added": True}}),
            }
        }
    }

    output = render_compat(data, "api.SomeContainer")
    desktop = output.split('<div id="compat-desktop">')[1].split("</div>")[0]

    assert [row[0] for row in _rows(desktop)] == ["<code>Apple</code>", "<code>Zebra</code>"]
    assert "compatNote" not in output
    assert output.startswith('<div class="htab">')


def test_render_compat_feature_with_notes_section() -> None:
    data = {"css": {"prop": _feature({"firefox": {"version_added": "3", "notes": "Caveat."}})}}

    output = render_compat(data, "css.prop")

    assert output.endswith('<p id="compatNote_1">1. Caveat.</p>')
    assert output.count('<a href="#compatNote_1">1</a>') == 1


@pytest.mark.parametrize(
    "query",
    [
        "api.Missing",
        "api.SomeAPI",
        "api.SomeAPI.deeper",
        "",
        "api..SomeAPI",
        "api.Scalar",
        "api.Empty",
        "api.NullCompat",
        "api.ListCompat",
    ],
)
def test_render_compat_missing_returns_message(query: str) -> None:
    data = {
        "api": {
            "SomeAPI": {"__compat": {}},
            "Scalar": 3,
            "Empty": {},
            "NullCompat": {"__compat": None},
            "ListCompat": {"__compat": ["basic_support"]},
        }
    }

    output = render_compat(data, query)

    assert output == no_data_message(query)
    assert "<table" not in output


def test_no_data_message_names_query() -> None:
    message = no_data_message("css.nothing")

    assert message == (
        'No compatibility data found. Please contribute data for "css.nothing" to the '
        '<a href="https://github.com/mdn/browser-compat-data">'
        "MDN compatibility data repository</a>."
    )


def test_localized_titles_are_attribute_escaped() -> None:
    strings = make_strings(
        {
            "supportsShort_unknown_title": 'Say "hi"',
            "supportsShort_yes_title": "a<b",
            "prefix_title": '"prefixed"',
        }
    )

    unknown = format_version_status(None, strings)
    yes = format_version_status(True, strings)
    prefixed = render_support_cell(_single(version_added="1", prefix="-o-"), "opera", strings)

    assert 'title="Say &quot;hi&quot;"' in unknown
    assert 'title="a&lt;b"' in yes
    assert 'title="&quot;prefixed&quot;"' in prefixed

"""HTML compat table renderer."""

from __future__ import annotations

from collections.abc import Mapping

from .constants import FLAG_PREFERENCE_INSTRUCTIONS, NOTE_ANCHOR_PREFIX
from .dataset import lookup_path
from .model import (
    CATALOGS,
    AggregateView,
    BrowserCatalog,
    BrowserSupport,
    CatalogKey,
    CompatBlock,
    CompatView,
    NoteRegistry,
    SupportStatement,
    Subfeature,
    VersionValue,
)
from .parse_compat import parse_view
from .strings import Strings, default_strings
from .util.html import code, debug_log, escape


def format_version_status(value: VersionValue, strings: Strings = default_strings) -> str:
    """Render one version_added value as inline markup."""
    if value is None:
        return (
            '<span class="bc-unknown" style="color: rgb(255, 153, 0);" '
            f'title="{escape(strings("supportsShort_unknown_title"))}">'
            f'{strings("supportsShort_unknown")}</span>'
        )
    if value is True:
        return (
            '<span class="bc-yes" style="color: #888;" '
            f'title="{escape(strings("supportsShort_yes_title"))}">'
            f'{strings("supportsShort_yes")}</span>'
        )
    if value is False:
        return f'<span class="bc-no" style="color: #888;">{strings("supportsShort_no")}</span>'
    return value


def build_flag_note(statement: SupportStatement, browser_id: str) -> str:
    """Describe the flag gating a statement; the text doubles as its dedupe key."""
    flag = statement.flag
    if flag is None:
        return ""

    lead = ""
    if isinstance(statement.version_added, str):
        lead = f"From version {statement.version_added}"
    if isinstance(statement.version_removed, str):
        if lead:
            lead += f" until version {statement.version_removed} (exclusive)"
        else:
            lead = f"Until version {statement.version_removed} (exclusive)"

    subject = "This"
    if lead:
        lead += ":"
        subject = " this"

    flag_text = f"{subject} feature is behind the {code(flag.name)}"
    value_clause = ""
    if flag.value_to_set is not None:
        value_clause = f" (needs to be set to {code(flag.value_to_set)})"

    if flag.type == "preference":
        output = f"{lead}{flag_text} preference{value_clause}."
        instruction = FLAG_PREFERENCE_INSTRUCTIONS.get(browser_id)
        if instruction:
            output += f" {instruction}"
        return output
    if flag.type == "compile_flag":
        return f"{lead}{flag_text} compile flag{value_clause}."

    debug_log(f"unrecognized flag type {flag.type!r} for {flag.name!r}")
    return f"{lead}{flag_text} {escape(flag.type)}{value_clause}."


def statement_notes(statement: SupportStatement, browser_id: str) -> list[str]:
    """Notes attached to a statement, followed by its flag sentence if any."""
    notes = list(statement.notes)
    if statement.flag is not None:
        notes.append(build_flag_note(statement, browser_id))
    return notes


def collect_notes(block: CompatBlock) -> NoteRegistry:
    """Collect distinct notes of every row, browser and statement in order."""
    registry = NoteRegistry()
    for row in block.rows:
        for browser_id, support in row.support.items():
            for statement in support.statements:
                for note in statement_notes(statement, browser_id):
                    registry.add(note)
    return registry


def _note_anchor(number: int) -> str:
    return f'<sup><a href="#{NOTE_ANCHOR_PREFIX}{number}">{number}</a></sup>'


def _footnote_anchors(
    statement: SupportStatement, browser_id: str, registry: NoteRegistry
) -> str:
    anchors: list[str] = []
    for note in statement_notes(statement, browser_id):
        number = registry.position(note)
        if number is None:
            debug_log(f"note for {browser_id!r} missing from registry: {note[:40]!r}")
            continue
        anchors.append(_note_anchor(number))
    # Sorted as markup text, so "10" lands before "2".
    return " ".join(sorted(anchors))


def _format_statement(
    statement: SupportStatement,
    browser_id: str,
    strings: Strings,
    registry: NoteRegistry | None,
) -> str:
    output = format_version_status(statement.version_added, strings)

    removed = statement.version_removed
    if isinstance(removed, str):
        output += f" — {removed}"
    elif removed is True:
        output += " — ?"

    if statement.prefix:
        output += (
            f' <span class="inlineIndicator prefixBox prefixBoxInline" '
            f'title="{escape(strings("prefix_title"))}">{escape(statement.prefix)}</span>'
        )
    if statement.alternative_name:
        output += f" (as {code(statement.alternative_name)})"

    if registry is not None:
        anchors = _footnote_anchors(statement, browser_id, registry)
        if anchors:
            output += f" {anchors}"
    return output


def render_support_cell(
    support: BrowserSupport,
    browser_id: str,
    strings: Strings = default_strings,
    registry: NoteRegistry | None = None,
) -> str:
    """Render the content of one table cell; no registry disables footnotes."""
    if support.kind == "absent" or not support.statements:
        return format_version_status(None, strings)
    if support.kind == "multiple":
        return "".join(
            f"<p>{_format_statement(statement, browser_id, strings, registry)}</p>"
            for statement in support.statements
        )
    return _format_statement(support.statements[0], browser_id, strings, registry)


def render_table_head(catalog: BrowserCatalog, strings: Strings = default_strings) -> str:
    cells = "".join(f"<th>{name}</th>" for _browser_id, name in catalog.browsers)
    return f'<table class="compat-table"><tbody><tr><th>{strings("feature")}</th>{cells}</tr>'


def _render_row(
    label: str,
    row: Subfeature,
    catalog: BrowserCatalog,
    strings: Strings,
    registry: NoteRegistry | None,
) -> str:
    cells = "".join(
        "<td>"
        + render_support_cell(row.support_for(browser_id), browser_id, strings, registry)
        + "</td>"
        for browser_id in catalog.browser_ids
    )
    return f"<tr><td>{label}</td>{cells}</tr>"


def render_aggregate_table(
    features: Mapping[str, Subfeature],
    catalog: BrowserCatalog,
    strings: Strings = default_strings,
) -> str:
    """Summary table: one basic-support row per feature, sorted by name."""
    rows = "".join(
        _render_row(code(name), features[name], catalog, strings, None)
        for name in sorted(features)
    )
    return f"{render_table_head(catalog, strings)}{rows}</tbody></table>"


def _row_label(row: Subfeature) -> str:
    return row.description if row.description else code(row.key)


def render_feature_table(
    block: CompatBlock,
    catalog: BrowserCatalog,
    strings: Strings = default_strings,
    registry: NoteRegistry | None = None,
) -> str:
    """Detailed table: basic support first, then sub-features in declaration order."""
    if registry is None:
        registry = collect_notes(block)

    rows = [
        _render_row(
            strings("feature_basicsupport"), block.basic_support, catalog, strings, registry
        )
    ]
    rows.extend(
        _render_row(_row_label(row), row, catalog, strings, registry)
        for row in block.subfeatures
    )
    return f"{render_table_head(catalog, strings)}{''.join(rows)}</tbody></table>"


def render_notes(source: CompatBlock | NoteRegistry) -> str:
    """Numbered footnote paragraphs matching the anchors in the feature table."""
    registry = source if isinstance(source, NoteRegistry) else collect_notes(source)
    return "".join(
        f'<p id="{NOTE_ANCHOR_PREFIX}{number}">{number}. {note}</p>'
        for number, note in enumerate(registry, start=1)
    )


def render_tabs(default_catalog: CatalogKey = "desktop", strings: Strings = default_strings) -> str:
    items: list[str] = []
    for catalog in CATALOGS:
        selected = ' class="selected"' if catalog.key == default_catalog else ""
        label = strings(f"browserType_{catalog.key}")
        items.append(f'<li{selected}><a href="javascript:;">{label}</a></li>')
    return (
        '<div class="htab">'
        '<a id="AutoCompatibilityTable" name="AutoCompatibilityTable"></a>'
        f"<ul>{''.join(items)}</ul></div>"
    )


def no_data_message(query: str, strings: Strings = default_strings) -> str:
    return strings("compat_nodata").replace("{query}", escape(query))


def render_view(
    view: CompatView,
    strings: Strings = default_strings,
    default_catalog: CatalogKey = "desktop",
) -> str:
    """Render a parsed view: tabs, one table per catalog and, for features, notes."""
    parts = [render_tabs(default_catalog, strings)]
    if isinstance(view, AggregateView):
        for catalog in CATALOGS:
            table = render_aggregate_table(view.features, catalog, strings)
            parts.append(f'<div id="compat-{catalog.key}">{table}</div>')
        return "".join(parts)

    registry = collect_notes(view.block)
    for catalog in CATALOGS:
        table = render_feature_table(view.block, catalog, strings, registry)
        parts.append(f'<div id="compat-{catalog.key}">{table}</div>')
    parts.append(render_notes(registry))
    return "".join(parts)


def render_compat(
    data: Mapping[str, object],
    query: str,
    strings: Strings = default_strings,
    default_catalog: CatalogKey = "desktop",
) -> str:
    """Render the compat tables for a dotted-path query into the dataset."""
    view = parse_view(lookup_path(data, query), query)
    if view is None:
        return no_data_message(query, strings)
    return render_view(view, strings, default_catalog)

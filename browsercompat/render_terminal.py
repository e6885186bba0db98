"""Terminal renderer for compat views."""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .constants import TERMINAL_STATUS_LABELS
from .model import (
    AggregateView,
    BrowserCatalog,
    BrowserSupport,
    CompatView,
    NoteRegistry,
    SupportStatement,
    Subfeature,
    VersionValue,
)
from .render_html import collect_notes, statement_notes
from .strings import Strings, default_strings
from .util.html import fragment_text
from .util.text import ellipsize

_LABEL_WIDTH = 40
_STATUS_STYLE_MAP = {
    "yes": "green3",
    "no": "red3",
    "unknown": "dark_orange",
}


def _version_text(value: VersionValue) -> Text:
    if value is None:
        return Text(TERMINAL_STATUS_LABELS["unknown"], style=_STATUS_STYLE_MAP["unknown"])
    if value is True:
        return Text(TERMINAL_STATUS_LABELS["yes"], style=_STATUS_STYLE_MAP["yes"])
    if value is False:
        return Text(TERMINAL_STATUS_LABELS["no"], style=_STATUS_STYLE_MAP["no"])
    return Text(value)


def _statement_text(
    statement: SupportStatement, browser_id: str, registry: NoteRegistry | None
) -> Text:
    line = _version_text(statement.version_added)
    if isinstance(statement.version_removed, str):
        line.append(f" — {statement.version_removed}")
    elif statement.version_removed is True:
        line.append(" — ?")
    if statement.prefix:
        line.append(f" [{statement.prefix}]", style="dim")
    if statement.alternative_name:
        line.append(f" (as {statement.alternative_name})")

    if registry is not None:
        numbers = sorted(
            number
            for note in statement_notes(statement, browser_id)
            if (number := registry.position(note)) is not None
        )
        if numbers:
            line.append(f" [{', '.join(str(number) for number in numbers)}]", style="cyan")
    return line


def support_text(
    support: BrowserSupport, browser_id: str, registry: NoteRegistry | None = None
) -> Text:
    """Plain-text rendering of one support cell."""
    if support.kind == "absent" or not support.statements:
        return _version_text(None)
    return Text("\n").join(
        _statement_text(statement, browser_id, registry) for statement in support.statements
    )


def _build_table(
    catalog: BrowserCatalog,
    rows: list[tuple[str, Subfeature]],
    strings: Strings,
    registry: NoteRegistry | None,
) -> Table:
    table = Table(show_lines=True, header_style="bold")
    table.add_column(strings("feature"), style="bold")
    for _browser_id, name in catalog.browsers:
        table.add_column(name)

    for label, row in rows:
        table.add_row(
            Text(ellipsize(label, _LABEL_WIDTH)),
            *[
                support_text(row.support_for(browser_id), browser_id, registry)
                for browser_id in catalog.browser_ids
            ],
        )
    return table


def render_terminal(
    view: CompatView,
    catalog: BrowserCatalog,
    strings: Strings = default_strings,
) -> Panel:
    """Render a parsed view as a Rich panel for one catalog."""
    if isinstance(view, AggregateView):
        rows = [(name, view.features[name]) for name in sorted(view.features)]
        table = _build_table(catalog, rows, strings, None)
        return Panel(table, border_style="blue", title=view.query)

    registry = collect_notes(view.block)
    rows = [(fragment_text(strings("feature_basicsupport")), view.block.basic_support)]
    rows.extend(
        (fragment_text(row.description) if row.description else row.key, row)
        for row in view.block.subfeatures
    )
    parts: list[Table | Text] = [_build_table(catalog, rows, strings, registry)]
    if len(registry):
        parts.append(Text(""))
        parts.append(Text(strings("compat_notes"), style="bold"))
        for number, note in enumerate(registry, start=1):
            parts.append(Text(f"{number}. {fragment_text(note)}"))
    return Panel(Group(*parts), border_style="blue", title=view.query)

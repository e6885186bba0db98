"""HTML helpers built around justhtml."""

from __future__ import annotations

import html
import logging
import os
from typing import Any

from justhtml import JustHTML

from ..constants import DEBUG_ENV_VAR
from .text import normalize_whitespace

Node = Any
LOGGER = logging.getLogger(__name__)


def parse_document(markup: str) -> JustHTML:
    """Parse HTML without sanitization to preserve all structural tags."""
    return JustHTML(markup, sanitize=False)


def first(node: Node, selector: str) -> Node | None:
    """Return the first selector match or None."""
    matches = all_nodes(node, selector)
    return matches[0] if matches else None


def all_nodes(node: Node, selector: str) -> list[Node]:
    """Return all selector matches, guarding selector/runtime errors."""
    try:
        if hasattr(node, "query"):
            return list(node.query(selector))
    except Exception:
        return []
    return []


def text(node: Node | None) -> str:
    """Extract normalized text from a node."""
    if node is None:
        return ""
    try:
        if hasattr(node, "to_text"):
            return normalize_whitespace(node.to_text())
        if hasattr(node, "data") and isinstance(node.data, str):
            return normalize_whitespace(node.data)
    except Exception:
        return ""
    return ""


def fragment_text(markup: str) -> str:
    """Convert an inline HTML fragment (a note, a description) to plain text."""
    if "<" not in markup and "&" not in markup:
        return normalize_whitespace(markup)
    doc = parse_document(f'<div class="bc-fragment">{markup}</div>')
    return text(first(doc, "div.bc-fragment"))


def escape(value: str) -> str:
    """Escape identifier text (keys, flag names) for inclusion in markup."""
    return html.escape(value, quote=True)


def code(value: str) -> str:
    return f"<code>{escape(value)}</code>"


def debug_enabled() -> bool:
    """Check debug mode env flag."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip() == "1"


def debug_log(message: str) -> None:
    """Emit debug logs to stderr in debug mode only."""
    if debug_enabled():
        LOGGER.debug("%s", message)

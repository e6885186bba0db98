"""Dataset loading and dotted-path lookup."""

from __future__ import annotations

from collections.abc import Mapping
import json
from pathlib import Path
from typing import Any, cast

from .exceptions import DataFileError
from .http import fetch_dataset
from .util.html import debug_log


def is_remote(source: str) -> bool:
    return source.startswith("http://") or source.startswith("https://")


def load_dataset(source: str) -> dict[str, Any]:
    """Load a compat dataset from a local JSON file or an http(s) URL."""
    if is_remote(source):
        return fetch_dataset(source)

    try:
        payload = json.loads(Path(source).read_text(encoding="utf-8"))
    except OSError as exc:
        raise DataFileError(source, cause=exc.__class__.__name__) from exc
    except json.JSONDecodeError as exc:
        raise DataFileError(source, cause="invalid JSON") from exc
    if not isinstance(payload, dict):
        raise DataFileError(source, cause="expected a JSON object")
    return payload


def lookup_path(data: Mapping[str, object], query: str) -> object | None:
    """Walk nested mappings by dot-separated segments; None on any miss."""
    segments = query.strip().split(".")
    if not all(segments):
        debug_log(f"malformed query {query!r}")
        return None

    node: object = data
    for segment in segments:
        if not isinstance(node, Mapping):
            debug_log(f"lookup of {query!r} stopped at non-mapping before {segment!r}")
            return None
        node_map = cast(Mapping[str, object], node)
        if segment not in node_map:
            debug_log(f"lookup of {query!r} missed segment {segment!r}")
            return None
        node = node_map[segment]
    return node

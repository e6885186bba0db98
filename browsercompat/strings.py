"""Localized string lookup."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import json
from pathlib import Path

from .constants import DEFAULT_STRINGS
from .exceptions import DataFileError

Strings = Callable[[str], str]


def make_strings(overrides: Mapping[str, str] | None = None) -> Strings:
    """Build a lookup over the default strings plus any overrides.

    Unknown keys resolve to the key itself.
    """
    table = dict(DEFAULT_STRINGS)
    if overrides:
        table.update(overrides)

    def lookup(key: str) -> str:
        return table.get(key, key)

    return lookup


default_strings: Strings = make_strings()


def load_strings(path: str | Path) -> Strings:
    """Load string overrides from a JSON object of key -> text."""
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise DataFileError(str(path), cause=exc.__class__.__name__) from exc
    except json.JSONDecodeError as exc:
        raise DataFileError(str(path), cause="invalid JSON") from exc
    if not isinstance(payload, dict):
        raise DataFileError(str(path), cause="expected a JSON object")
    return make_strings({str(key): str(value) for key, value in payload.items()})

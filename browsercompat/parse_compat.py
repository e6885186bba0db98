"""Compat data parser: raw dataset mappings into typed models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from .constants import BASIC_SUPPORT_KEY, COMPAT_KEY
from .model import (
    ABSENT_SUPPORT,
    AggregateView,
    BrowserSupport,
    CompatBlock,
    CompatView,
    FeatureView,
    Flag,
    SupportStatement,
    Subfeature,
    VersionValue,
)
from .util.html import debug_log


def _optional_str(value: object) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _version_value(value: object) -> VersionValue:
    if isinstance(value, (bool, str)):
        return value
    return None


def _parse_notes(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list):
        return tuple(item for item in value if isinstance(item, str))
    return ()


def _flag_value(value: object) -> str | None:
    # JSON spelling for booleans, as the dataset authors wrote them.
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None or value == "":
        return None
    return str(value)


def _parse_flag(value: object) -> Flag | None:
    if not isinstance(value, Mapping):
        return None
    flag_map = cast(Mapping[str, object], value)
    flag_type = flag_map.get("type")
    name = flag_map.get("name")
    if not isinstance(flag_type, str) or not isinstance(name, str):
        return None
    return Flag(
        type=flag_type,
        name=name,
        value_to_set=_flag_value(flag_map.get("value_to_set")),
    )


def parse_support_statement(raw: Mapping[str, object]) -> SupportStatement:
    """Build a support statement from one raw statement mapping."""
    return SupportStatement(
        version_added=_version_value(raw.get("version_added")),
        version_removed=_version_value(raw.get("version_removed")),
        prefix=_optional_str(raw.get("prefix")),
        alternative_name=_optional_str(raw.get("alternative_name")),
        notes=_parse_notes(raw.get("notes")),
        flag=_parse_flag(raw.get("flag")),
    )


def parse_browser_support(raw: object) -> BrowserSupport:
    """Classify raw per-browser support data as absent, single or multiple."""
    if isinstance(raw, Mapping):
        statement = parse_support_statement(cast(Mapping[str, object], raw))
        return BrowserSupport(kind="single", statements=(statement,))
    if isinstance(raw, list):
        statements = tuple(
            parse_support_statement(cast(Mapping[str, object], item))
            for item in raw
            if isinstance(item, Mapping)
        )
        if statements:
            return BrowserSupport(kind="multiple", statements=statements)
    return ABSENT_SUPPORT


def parse_subfeature(key: str, raw: object) -> Subfeature:
    if not isinstance(raw, Mapping):
        return Subfeature(key=key)
    entry = cast(Mapping[str, object], raw)

    support: dict[str, BrowserSupport] = {}
    raw_support = entry.get("support")
    if isinstance(raw_support, Mapping):
        for browser_id, browser_data in cast(Mapping[str, object], raw_support).items():
            support[browser_id] = parse_browser_support(browser_data)

    return Subfeature(
        key=key,
        description=_optional_str(entry.get("description")),
        support=support,
    )


def parse_compat_block(raw: object) -> CompatBlock:
    """Parse a `__compat` payload, keeping the mapping's key order."""
    if not isinstance(raw, Mapping):
        return CompatBlock()
    rows = tuple(
        parse_subfeature(str(key), value)
        for key, value in cast(Mapping[str, object], raw).items()
    )
    return CompatBlock(rows=rows)


def is_feature_node(node: object) -> bool:
    return isinstance(node, Mapping) and COMPAT_KEY in node


def _basic_support_of(node: object) -> Subfeature:
    if not is_feature_node(node):
        return Subfeature(key=BASIC_SUPPORT_KEY)
    compat = cast(Mapping[str, object], node)[COMPAT_KEY]
    return parse_compat_block(compat).basic_support


def parse_view(node: object, query: str) -> CompatView | None:
    """Decide how a looked-up dataset node should be rendered.

    Returns None when there is nothing to render.
    """
    if not isinstance(node, Mapping) or not node:
        debug_log(f"no data node for {query!r}")
        return None

    node_map = cast(Mapping[str, object], node)
    if COMPAT_KEY in node_map:
        compat = node_map[COMPAT_KEY]
        if not isinstance(compat, Mapping) or not compat:
            debug_log(f"{query!r} has an empty compat block")
            return None
        debug_log(f"{query!r} is a feature node")
        return FeatureView(query=query, block=parse_compat_block(compat))

    features = {
        str(name): _basic_support_of(child)
        for name, child in node_map.items()
        if isinstance(child, Mapping)
    }
    if not features:
        debug_log(f"{query!r} has no child features")
        return None
    debug_log(f"{query!r} is a container with {len(features)} features")
    return AggregateView(query=query, features=features)

"""Data models for compatibility data and rendering."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Literal, Union

from .constants import BASIC_SUPPORT_KEY, DESKTOP_BROWSERS, MOBILE_BROWSERS

# None means unknown; True/False are "yes"/"no" without a version number.
VersionValue = Union[str, bool, None]
CatalogKey = Literal["desktop", "mobile"]


@dataclass(frozen=True)
class Flag:
    type: str
    name: str
    value_to_set: str | None = None


@dataclass(frozen=True)
class SupportStatement:
    version_added: VersionValue = None
    # None and False both mean "not removed"; True means removed in an unknown version.
    version_removed: VersionValue = None
    prefix: str | None = None
    alternative_name: str | None = None
    notes: tuple[str, ...] = ()
    flag: Flag | None = None


@dataclass(frozen=True)
class BrowserSupport:
    kind: Literal["absent", "single", "multiple"]
    statements: tuple[SupportStatement, ...] = ()


ABSENT_SUPPORT = BrowserSupport(kind="absent")


@dataclass(frozen=True)
class Subfeature:
    key: str
    description: str | None = None
    support: dict[str, BrowserSupport] = field(default_factory=dict, hash=False)

    def support_for(self, browser_id: str) -> BrowserSupport:
        return self.support.get(browser_id, ABSENT_SUPPORT)


@dataclass(frozen=True)
class CompatBlock:
    """Rows of one feature's compat data, in declaration order."""

    rows: tuple[Subfeature, ...] = ()

    @property
    def basic_support(self) -> Subfeature:
        for row in self.rows:
            if row.key == BASIC_SUPPORT_KEY:
                return row
        return Subfeature(key=BASIC_SUPPORT_KEY)

    @property
    def subfeatures(self) -> tuple[Subfeature, ...]:
        return tuple(row for row in self.rows if row.key != BASIC_SUPPORT_KEY)


@dataclass(frozen=True)
class BrowserCatalog:
    key: CatalogKey
    browsers: tuple[tuple[str, str], ...]

    @property
    def browser_ids(self) -> tuple[str, ...]:
        return tuple(browser_id for browser_id, _name in self.browsers)


DESKTOP_CATALOG = BrowserCatalog(key="desktop", browsers=DESKTOP_BROWSERS)
MOBILE_CATALOG = BrowserCatalog(key="mobile", browsers=MOBILE_BROWSERS)
CATALOGS: tuple[BrowserCatalog, ...] = (DESKTOP_CATALOG, MOBILE_CATALOG)


class NoteRegistry:
    """Ordered, distinct note strings collected from one compat block.

    Membership and positions compare note text by value, so identical wording
    from unrelated statements shares one entry.
    """

    def __init__(self) -> None:
        self._notes: list[str] = []

    def add(self, note: str) -> None:
        if note not in self._notes:
            self._notes.append(note)

    def position(self, note: str) -> int | None:
        """Return the 1-based footnote number for a note, or None if unknown."""
        try:
            return self._notes.index(note) + 1
        except ValueError:
            return None

    @property
    def notes(self) -> tuple[str, ...]:
        return tuple(self._notes)

    def __contains__(self, note: object) -> bool:
        return note in self._notes

    def __iter__(self) -> Iterator[str]:
        return iter(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NoteRegistry):
            return NotImplemented
        return self._notes == other._notes

    def __repr__(self) -> str:
        return f"NoteRegistry({self._notes!r})"


@dataclass(frozen=True)
class FeatureView:
    query: str
    block: CompatBlock


@dataclass(frozen=True)
class AggregateView:
    query: str
    # Feature name -> that feature's basic support row.
    features: dict[str, Subfeature] = field(default_factory=dict, hash=False)


CompatView = Union[FeatureView, AggregateView]

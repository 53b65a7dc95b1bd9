"""Searchable entry index with a ranked, filtered view."""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from app_launcher.core.entry import Entry
from app_launcher.core.fuzzy import fuzzy_score


@dataclass(frozen=True)
class RankedEntry:
    """An entry with its match score for the current query."""

    entry: Entry
    score: int


def score_entry(entry: Entry, query: str) -> int | None:
    """Score an entry against a query.

    An empty query matches everything with score 0. Otherwise the best of
    the title and generic name scores is used; None means no match.
    """
    if not query:
        return 0

    scores = [fuzzy_score(entry.title, query)]
    if entry.generic_name is not None:
        scores.append(fuzzy_score(entry.generic_name, query))

    matched = [s for s in scores if s is not None]
    if not matched:
        return None
    return max(matched)


def rank_entries(entries: Iterable[Entry], query: str) -> list[RankedEntry]:
    """Filter and rank entries for a query.

    Entries are ordered by descending score; equal scores keep ascending
    title order (plain string comparison).
    """
    ranked: list[RankedEntry] = []
    for entry in entries:
        score = score_entry(entry, query)
        if score is not None:
            ranked.append(RankedEntry(entry=entry, score=score))

    ranked.sort(key=lambda r: (-r.score, r.entry.title))
    return ranked


class SearchIndex:
    """Holds the full entry set, the query, and the ranked view.

    The index is owned by the caller; the entry list and the filtered view
    are swapped together under a lock so readers never see a partial load.
    """

    def __init__(
        self,
        entries: Iterable[Entry] | None = None,
        icons: Mapping[str, Path] | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._entries: list[Entry] = list(entries or [])
        self._icons: dict[str, Path] = dict(icons or {})
        self._query = ""
        self._filtered: list[RankedEntry] = []
        self._selection = 0
        self._generation = 0
        self._applied_ticket = -1
        self._tickets = itertools.count()
        self._update_filtered()

    @property
    def entries(self) -> list[Entry]:
        """All entries, in discovery order."""
        with self._lock:
            return list(self._entries)

    @property
    def query(self) -> str:
        return self._query

    @property
    def filtered(self) -> list[Entry]:
        """Entries matching the current query, best first."""
        with self._lock:
            return [r.entry for r in self._filtered]

    @property
    def ranked(self) -> list[RankedEntry]:
        """Filtered entries with their scores, best first."""
        with self._lock:
            return list(self._filtered)

    @property
    def generation(self) -> int:
        """Number of entry sets swapped in so far."""
        return self._generation

    @property
    def selection(self) -> int:
        """Index of the selected entry in the filtered view."""
        return self._selection

    @property
    def selected(self) -> Entry | None:
        with self._lock:
            if not self._filtered:
                return None
            return self._filtered[self._selection].entry

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: str) -> Entry | None:
        """Find an entry by id."""
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None

    def icon_path(self, entry: Entry) -> Path | None:
        """Resolved icon file for an entry, if any."""
        if not entry.icon:
            return None
        with self._lock:
            return self._icons.get(entry.icon)

    def next_ticket(self) -> int:
        """Take a load ticket; tickets increase across every loader of this index."""
        with self._lock:
            return next(self._tickets)

    def set_query(self, text: str) -> None:
        """Change the query, recompute the view and reset the selection."""
        with self._lock:
            self._query = text
            self._update_filtered()

    def replace(
        self,
        entries: Iterable[Entry],
        icons: Mapping[str, Path] | None = None,
        ticket: int | None = None,
    ) -> bool:
        """Swap in a complete entry set.

        Args:
            entries: The new entries
            icons: Logical icon name to file mapping for the new entries
            ticket: Load ticket; a result older than one already applied is dropped

        Returns:
            True if the entries were applied
        """
        entries = list(entries)
        with self._lock:
            if ticket is not None:
                if ticket < self._applied_ticket:
                    return False
                self._applied_ticket = ticket
            self._entries = entries
            self._icons = dict(icons or {})
            self._generation += 1
            self._update_filtered()
        return True

    def select(self, index: int) -> None:
        """Move the selection, clamped into the filtered view."""
        with self._lock:
            last = max(len(self._filtered) - 1, 0)
            self._selection = min(max(index, 0), last)

    def move_selection(self, delta: int) -> None:
        self.select(self._selection + delta)

    def select_first(self) -> None:
        self.select(0)

    def select_last(self) -> None:
        self.select(len(self._filtered) - 1)

    def _update_filtered(self) -> None:
        self._filtered = rank_entries(self._entries, self._query)
        self._selection = 0

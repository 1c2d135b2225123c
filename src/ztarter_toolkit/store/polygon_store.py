"""
Module: store.polygon_store

Purpose:
    The deduplicated polygon collection. Holds polygon records in order,
    the set of level sources already ingested, and an optional tag.
    Supports merge-in of another store and ordering by bounding-box area.

Key Classes:
    - PolygonStore: Mutable record collection + ingested source set
    - MergeReport: What a merge added and skipped

Invariants:
    - Every record's source is in `sources`
    - `sources` may also hold sources that contributed zero polygons

Dependencies:
    - core.models: Identifier, PolygonRecord

Used By:
    - extractor.pipeline: Directory ingestion
    - store.persistence: Binary snapshots
    - builder.assembler: Sampling
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Set

from ztarter_toolkit.core.models import Identifier, PolygonRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeReport:
    """
    Outcome of PolygonStore.merge().

    Attributes:
        added: Number of records moved into the receiver
        skipped: Number of records dropped as duplicate sources
        skipped_sources: Sources the receiver already contained
        new_sources: Sources first seen by the receiver in this merge
    """
    added: int
    skipped: int
    skipped_sources: frozenset[Identifier]
    new_sources: frozenset[Identifier]


@dataclass
class PolygonStore:
    """
    Deduplicated collection of polygon records.

    Attributes:
        records: Polygon records in store order
        sources: Identifiers of every ingested level
        tag: Optional free-text label carried through persistence

    Example:
        >>> store = PolygonStore()
        >>> store.add_source(Identifier.from_text("a.lev"), [])
        >>> len(store), len(store.sources)
        (0, 1)
    """

    records: List[PolygonRecord] = field(default_factory=list)
    sources: Set[Identifier] = field(default_factory=set)
    tag: Optional[str] = None
    _area_sorted: bool = field(init=False, default=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Check the source invariant on construction."""
        missing = {r.source for r in self.records} - self.sources
        if missing:
            raise ValueError(
                f"Records reference sources missing from the source set: "
                f"{sorted(str(s) for s in missing)}"
            )

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PolygonRecord]:
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        """True when the store has no polygon records."""
        return not self.records

    @property
    def is_sorted_by_area(self) -> bool:
        """True when records are known to be in ascending area order."""
        return self._area_sorted

    def contains_source(self, source: Identifier) -> bool:
        return source in self.sources

    def records_from(self, source: Identifier) -> List[PolygonRecord]:
        """All records contributed by one source, in store order."""
        return [r for r in self.records if r.source == source]

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────────

    def add_source(self, source: Identifier, records: Iterable[PolygonRecord]) -> int:
        """
        Append the records of one ingested level and mark it as seen.

        A level with no records is still marked as seen.

        Args:
            source: Identifier of the ingested level
            records: Records extracted from that level

        Returns:
            Number of records appended

        Raises:
            ValueError: If a record's source differs from `source`
        """
        new_records = list(records)
        for record in new_records:
            if record.source != source:
                raise ValueError(
                    f"Record from {record.source} added under source {source}"
                )
        self.records.extend(new_records)
        self.sources.add(source)
        if new_records:
            self._area_sorted = False
        return len(new_records)

    def merge(self, other: PolygonStore) -> MergeReport:
        """
        Move every record of `other` into this store, skipping known sources.

        Records whose source this store already contains are dropped: the
        receiver wins. `other` is drained, leaving it with no records and
        no sources. Record order from `other` is not preserved.

        Args:
            other: Store to drain

        Returns:
            MergeReport describing what was added and skipped
        """
        if other is self:
            return MergeReport(0, 0, frozenset(), frozenset())

        new_sources: Set[Identifier] = set()
        skipped_sources: Set[Identifier] = set()
        added = 0
        skipped = 0

        while other.records:
            record = other.records.pop()
            if record.source in self.sources:
                if record.source not in skipped_sources:
                    logger.info(f"Store already contains {record.source}, skipping it.")
                skipped_sources.add(record.source)
                skipped += 1
                continue
            new_sources.add(record.source)
            self.records.append(record)
            added += 1

        # Sources with no records in `other` still count as ingested
        for source in other.sources:
            if source not in self.sources:
                new_sources.add(source)
        other.sources.clear()
        other._area_sorted = False

        self.sources.update(new_sources)
        if added:
            self._area_sorted = False

        logger.debug(
            f"Merged {added} records from {len(new_sources)} new sources "
            f"({skipped} records skipped)"
        )
        return MergeReport(
            added=added,
            skipped=skipped,
            skipped_sources=frozenset(skipped_sources),
            new_sources=frozenset(new_sources),
        )

    def sort_by_area(self) -> None:
        """Stable sort of records by ascending bounding-box area."""
        self.records.sort(key=lambda r: r.area)
        self._area_sorted = True

    # ─────────────────────────────────────────────────────────────────────────
    # Views
    # ─────────────────────────────────────────────────────────────────────────

    def area_ordered(self) -> List[PolygonRecord]:
        """
        Records in ascending area order without mutating the store.

        Returns:
            The store's own list when already sorted, otherwise a sorted copy
        """
        if self._area_sorted:
            return self.records
        return sorted(self.records, key=lambda r: r.area)

    def copy(self) -> PolygonStore:
        """Shallow copy; records are immutable so this is safe to mutate."""
        clone = PolygonStore(list(self.records), set(self.sources), self.tag)
        clone._area_sorted = self._area_sorted
        return clone

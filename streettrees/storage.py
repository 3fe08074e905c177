import os
import sys
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, TextIO

from streettrees.errors import IntegrityViolation, SchemaViolation
from streettrees.indexing import OrderedTree
from streettrees.parsing import parse_line
from streettrees.records import BOROUGHS, TreeRecord, borough_index


class TreeCollection(OrderedTree):
    """
    Species index over street tree records.

    Besides the search tree itself it keeps per-borough counters, the list of
    distinct species names and an id lookup used to catch records that reuse
    a tree id for a different species.
    """

    # ------------------ Initialization ------------------
    def __init__(self):
        super().__init__()
        self._borough_counts: List[int] = [0] * len(BOROUGHS)
        self._species: List[str] = []
        self._species_totals: Dict[str, int] = {}
        self._records_by_id: Dict[int, TreeRecord] = {}
        self._last_matches: List[str] = []

    # ------------------ Accessors ------------------
    @property
    def total_trees(self) -> int:
        return len(self)

    @property
    def species(self) -> List[str]:
        """Distinct species names in first-seen order."""
        return list(self._species)

    @property
    def last_matches(self) -> List[str]:
        """Result of the most recent matching_species() call."""
        return list(self._last_matches)

    def borough_counts(self) -> Dict[str, int]:
        return dict(zip(BOROUGHS, self._borough_counts))

    def __str__(self) -> str:
        return f"There are a total of {len(self):,} trees in NYC."

    # ------------------ Core mutations ------------------
    def add(self, record: TreeRecord) -> bool:
        """
        Insert a record. Returns False for a duplicate (same species and id).

        Raises IntegrityViolation, leaving the collection untouched, when a
        stored record already uses this tree id with another species.
        """
        self._check_argument(record)
        stored = self._records_by_id.get(record.tree_id)
        if stored is not None:
            stored.check_integrity(record)

        if not super().add(record):
            return False

        self._records_by_id[record.tree_id] = record
        boro = borough_index(record.borough)
        if boro is not None:
            self._borough_counts[boro] += 1

        key = record.species.casefold()
        if key not in self._species_totals:
            self._species_totals[key] = 0
            self._species.append(record.species)
        self._species_totals[key] += 1
        return True

    def remove(self, record: TreeRecord) -> bool:
        """Remove the record equal to the given one and roll back its aggregates."""
        self._check_argument(record)
        stored = self._records_by_id.get(record.tree_id)
        if stored is None or stored != record:
            return False
        if not super().remove(record):
            return False

        # aggregates follow the stored record, the key may differ in other fields
        del self._records_by_id[stored.tree_id]
        boro = borough_index(stored.borough)
        if boro is not None:
            self._borough_counts[boro] -= 1

        key = stored.species.casefold()
        self._species_totals[key] -= 1
        if self._species_totals[key] == 0:
            del self._species_totals[key]
            self._species = [s for s in self._species if s.casefold() != key]
        return True

    # ------------------ Core queries ------------------
    def matching_species(self, query: str) -> List[str]:
        """Species names containing query (case-insensitive). An empty query matches all."""
        needle = (query or "").casefold()
        matches = [name for name in self._species if needle in name.casefold()]
        self._last_matches = matches
        return list(matches)

    def count_by_species(self, query: str) -> int:
        """Number of stored trees whose species contains query."""
        total = 0
        for name in self.matching_species(query):
            total += self._count_species(TreeRecord.probe(name))
        return total

    def count_by_borough(self, borough: str) -> int:
        boro = borough_index(borough)
        if boro is None:
            return 0
        return self._borough_counts[boro]

    def count_by_species_and_borough(self, query: str, borough: str) -> int:
        """Number of stored trees in borough whose species contains query."""
        if borough_index(borough) is None:
            return 0
        total = 0
        for name in self.matching_species(query):
            total += self._count_species(TreeRecord.probe(name, borough), borough)
        return total

    def _count_species(self, probe: TreeRecord, borough: Optional[str] = None) -> int:
        """
        Count records with the probe's species, optionally restricted to a borough.

        Species is the primary sort key, so a subtree is only entered when it
        can still hold that species: left when the node's species is not below
        the probe's, right when it is not above.
        """
        count = 0
        stack = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            rec = node.get_element()
            cmp = rec.compare_species(probe)
            if cmp == 0 and (borough is None or rec.in_borough(borough)):
                count += 1
            if cmp >= 0 and node._left is not None:
                stack.append(node._left)
            if cmp <= 0 and node._right is not None:
                stack.append(node._right)
        return count


# ------------------ Data ingestion ------------------
@dataclass
class IngestReport:
    lines_read: int = 0
    accepted: int = 0
    skipped: int = 0
    duplicates: int = 0
    integrity_violations: int = 0

    def summary_lines(self) -> List[str]:
        return [
            "--- Ingestion Summary ---",
            f"Lines read: {self.lines_read:,}",
            f"Trees ingested: {self.accepted:,}",
            f"Lines skipped (schema): {self.skipped:,}",
            f"Duplicates rejected: {self.duplicates:,}",
            f"Integrity violations: {self.integrity_violations:,}",
        ]


def ingest_lines(
    collection: TreeCollection,
    lines: Iterable[str],
    progress_every: int = 0,
    stream: Optional[TextIO] = None,
) -> IngestReport:
    """
    Parse census lines into collection. A malformed line is skipped, never
    partially stored; a record reusing a tree id for another species is
    reported and left out.
    """
    out = stream if stream is not None else sys.stdout
    report = IngestReport()

    for line in lines:
        report.lines_read += 1
        try:
            record = parse_line(line)
        except SchemaViolation:
            report.skipped += 1
            continue

        try:
            added = collection.add(record)
        except IntegrityViolation as e:
            report.integrity_violations += 1
            print(f"Warning: line {report.lines_read}: {e}", file=out)
            continue

        if not added:
            report.duplicates += 1
            continue

        report.accepted += 1
        if progress_every and report.accepted % progress_every == 0:
            print(f"Progress: {report.accepted:,} trees ingested...", file=out)

    return report


def ingest_file(
    collection: TreeCollection,
    file_path: str,
    progress_every: int = 0,
    stream: Optional[TextIO] = None,
) -> IngestReport:
    """Read a census CSV file into collection. Raises FileNotFoundError/OSError if it cannot be opened."""
    out = stream if stream is not None else sys.stdout
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"File not found at {file_path}")

    print(f"Ingesting data from: {file_path}", file=out)
    with open(file_path, mode="r", encoding="utf-8", errors="replace") as csvfile:
        report = ingest_lines(collection, csvfile, progress_every=progress_every, stream=out)

    for text in report.summary_lines():
        print(text, file=out)
    return report

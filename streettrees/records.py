"""
Street tree record stored in the species index.

Records order by species name (case-insensitive) and then by tree id, so all
trees of one species sit next to each other in an in-order walk.
"""

from dataclasses import asdict, dataclass
from functools import total_ordering
from typing import Any, Dict, Optional, Tuple

from streettrees.errors import IntegrityViolation, SchemaViolation

# Display order used by reports and the per-borough counters.
BOROUGHS: Tuple[str, ...] = ("Manhattan", "Bronx", "Brooklyn", "Queens", "Staten Island")
STATUSES = frozenset({"alive", "dead", "stump", ""})
HEALTHS = frozenset({"good", "fair", "poor", ""})


def borough_index(name: Optional[str]) -> Optional[int]:
    """Position of name in BOROUGHS (case-insensitive), or None."""
    if name is None:
        return None
    folded = name.strip().casefold()
    for i, boro in enumerate(BOROUGHS):
        if boro.casefold() == folded:
            return i
    return None


def _capitalize(s: str) -> str:
    return s[:1].upper() + s[1:].lower()


@total_ordering
@dataclass(frozen=True, eq=False)
class TreeRecord:
    """One street tree from the census. Validated on construction, immutable afterwards."""

    tree_id: int
    diameter: int
    status: str
    health: str
    species: str
    zipcode: int
    borough: str
    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        if isinstance(self.tree_id, bool) or not isinstance(self.tree_id, int) or self.tree_id <= 0:
            raise SchemaViolation(f"tree id must be a positive integer, got {self.tree_id!r}")
        if isinstance(self.diameter, bool) or not isinstance(self.diameter, int) or self.diameter < 0:
            raise SchemaViolation(f"trunk diameter must be a non-negative integer, got {self.diameter!r}")
        if (self.status or "").casefold() not in STATUSES:
            raise SchemaViolation(f"invalid status {self.status!r}")
        if (self.health or "").casefold() not in HEALTHS:
            raise SchemaViolation(f"invalid health {self.health!r}")
        if not isinstance(self.species, str) or not self.species.strip():
            raise SchemaViolation("species name must be a non-empty string")
        if isinstance(self.zipcode, bool) or not isinstance(self.zipcode, int) or not 0 <= self.zipcode <= 99999:
            raise SchemaViolation(f"zip code must be within 0-99999, got {self.zipcode!r}")
        if borough_index(self.borough) is None:
            raise SchemaViolation(f"invalid borough {self.borough!r}")
        # missing status/health are stored as ""
        if self.status is None:
            object.__setattr__(self, "status", "")
        if self.health is None:
            object.__setattr__(self, "health", "")

    @classmethod
    def probe(cls, species: str, borough: str = BOROUGHS[0]) -> "TreeRecord":
        """Synthetic record that only carries a species (and borough) to compare against."""
        return cls(1, 0, "", "", species, 0, borough, 0.0, 0.0)

    # ------------------ Ordering ------------------
    @property
    def sort_key(self) -> Tuple[str, int]:
        return (self.species.casefold(), self.tree_id)

    def __eq__(self, other):
        if not isinstance(other, TreeRecord):
            return NotImplemented
        return self.sort_key == other.sort_key

    def __lt__(self, other):
        if not isinstance(other, TreeRecord):
            return NotImplemented
        return self.sort_key < other.sort_key

    def __hash__(self):
        return hash(self.sort_key)

    def same_species(self, other: "TreeRecord") -> bool:
        """True if both records name the same species, ignoring case."""
        return self.species.casefold() == other.species.casefold()

    def compare_species(self, other: "TreeRecord") -> int:
        """-1, 0 or 1 comparing species names only, ignoring ids."""
        mine, theirs = self.species.casefold(), other.species.casefold()
        return (mine > theirs) - (mine < theirs)

    def in_borough(self, name: str) -> bool:
        """True if this tree stands in the named borough (case-insensitive)."""
        return self.borough.casefold() == (name or "").strip().casefold()

    def check_integrity(self, other: "TreeRecord") -> None:
        """Raise IntegrityViolation if other reuses this tree id for another species."""
        if self.tree_id == other.tree_id and not self.same_species(other):
            raise IntegrityViolation(self.tree_id, self.species, other.species)

    # ------------------ Rendering ------------------
    def to_dict(self) -> Dict[str, Any]:
        """Plain field mapping, used by the JSON API."""
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"{_capitalize(self.species)} has id '{self.tree_id}', diameter of {self.diameter}, "
            f"status '{_capitalize(self.status)}', health '{_capitalize(self.health)}', "
            f"zipcode {self.zipcode:05d}, and is located in {self.borough.title()}."
        )

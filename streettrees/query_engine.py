"""
Species popularity reports on top of a TreeCollection.

The console program and the web API both go through QueryEngine so they
print and serve the same numbers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from streettrees.records import BOROUGHS
from streettrees.storage import TreeCollection

CITY_LABEL = "NYC"


def percentage(matches: int, total: int) -> float:
    """100 * matches / total, or 0 when total is 0."""
    if total == 0:
        return 0.0
    return 100.0 * matches / total


@dataclass
class ReportRow:
    label: str
    matches: int
    total: int

    @property
    def percentage(self) -> float:
        return percentage(self.matches, self.total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "matches": self.matches,
            "total": self.total,
            "percentage": round(self.percentage, 2),
        }


@dataclass
class SpeciesReport:
    query: str
    species: List[str]
    rows: List[ReportRow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "species": list(self.species),
            "rows": [r.to_dict() for r in self.rows],
        }


# ------------------ Query Engine ------------------
class QueryEngine:
    def __init__(self, trees: TreeCollection):
        self.trees = trees

    def matching_species(self, query: str) -> List[str]:
        return self.trees.matching_species(query)

    def species_report(self, query: str) -> Optional[SpeciesReport]:
        """Citywide and per-borough counts for species matching query, or None if nothing matches."""
        species = self.trees.matching_species(query)
        if not species:
            return None

        rows = [ReportRow(CITY_LABEL, self.trees.count_by_species(query), self.trees.total_trees)]
        for boro in BOROUGHS:
            rows.append(ReportRow(
                boro,
                self.trees.count_by_species_and_borough(query, boro),
                self.trees.count_by_borough(boro),
            ))
        return SpeciesReport(query=query, species=species, rows=rows)


def format_report(report: SpeciesReport) -> str:
    lines = ["", "All matching species: "]
    lines.extend(f"   {name}" for name in report.species)
    lines.append("")
    lines.append("Popularity in the city: ")
    for row in report.rows:
        lines.append(f"   {row.label:<15s}:{row.matches:>10,}({row.total:,}){row.percentage:7.2f}%")
    return "\n".join(lines)

"""
Synthetic dataset generator.

Writes lines shaped like the street tree census dump (41 columns with a
header row) so the loader, CLI and API can be exercised without the real
file.
"""

import random
from typing import List, Optional, Sequence

from streettrees.parsing import (
    COL_BOROUGH,
    COL_DIAMETER,
    COL_HEALTH,
    COL_SPECIES,
    COL_STATUS,
    COL_TREE_ID,
    COL_X,
    COL_Y,
    COL_ZIPCODE,
    FIELD_COUNT,
)
from streettrees.records import BOROUGHS

HEADER = [
    "tree_id", "block_id", "created_at", "tree_dbh", "stump_diam", "curb_loc",
    "status", "health", "spc_latin", "spc_common", "steward", "guards",
    "sidewalk", "user_type", "problems", "root_stone", "root_grate",
    "root_other", "trunk_wire", "trnk_light", "trnk_other", "brch_light",
    "brch_shoe", "brch_other", "address", "zipcode", "zip_city", "cb_num",
    "borocode", "boroname", "cncldist", "st_assem", "st_senate", "nta",
    "nta_name", "boro_ct", "state", "latitude", "longitude", "x_sp", "y_sp",
]

DEFAULT_SPECIES = (
    "London planetree", "honeylocust", "Callery pear", "pin oak",
    "Norway maple", "littleleaf linden", "cherry", "Japanese zelkova",
    "ginkgo", "Sophora", "red maple", "green ash", "American linden",
    "silver maple", "sweetgum", "northern red oak", "swamp white oak",
)

BOROUGH_ZIPS = {
    "Manhattan": (10001, 10282),
    "Bronx": (10451, 10475),
    "Brooklyn": (11201, 11256),
    "Queens": (11004, 11697),
    "Staten Island": (10301, 10314),
}


def _quote(value: str) -> str:
    return f'"{value}"' if "," in value else value


def make_line(
    tree_id: int,
    species: str,
    borough: str,
    diameter: int = 10,
    status: str = "Alive",
    health: str = "Good",
    zipcode: int = 10001,
    x: float = 1000000.0,
    y: float = 200000.0,
) -> str:
    """One census line with the columns the loader reads filled in."""
    # unused columns hold a placeholder so the trailing entry is never empty
    fields = ["0"] * FIELD_COUNT
    fields[1] = str(100000 + tree_id)
    fields[2] = "08/27/2015"
    fields[COL_TREE_ID] = str(tree_id)
    fields[COL_DIAMETER] = str(diameter)
    fields[COL_STATUS] = status
    fields[COL_HEALTH] = health
    fields[8] = "Platanus x acerifolia"
    fields[COL_SPECIES] = species
    fields[24] = f"{tree_id} BROADWAY, APT 1"
    fields[COL_ZIPCODE] = f"{zipcode:05d}"
    fields[COL_BOROUGH] = borough
    fields[36] = "New York"
    fields[COL_X] = f"{x:.3f}"
    fields[COL_Y] = f"{y:.3f}"
    return ",".join(_quote(v) for v in fields)


def generate(count: int, seed: Optional[int] = None, species: Optional[Sequence[str]] = None) -> List[str]:
    """Header plus count census lines with unique ids and random species/boroughs."""
    rng = random.Random(seed)
    names = list(species or DEFAULT_SPECIES)
    lines = [",".join(HEADER)]
    for tree_id in range(1, count + 1):
        borough = rng.choice(BOROUGHS)
        low, high = BOROUGH_ZIPS[borough]
        lines.append(make_line(
            tree_id=tree_id,
            species=rng.choice(names),
            borough=borough,
            diameter=rng.randint(0, 60),
            status=rng.choice(("Alive", "Alive", "Alive", "Dead", "Stump")),
            health=rng.choice(("Good", "Fair", "Poor", "")),
            zipcode=rng.randint(low, high),
            x=rng.uniform(913000.0, 1067000.0),
            y=rng.uniform(120000.0, 272000.0),
        ))
    return lines


def write_dataset(path: str, count: int, seed: Optional[int] = None) -> int:
    """Write a generated dataset to path and return the number of tree lines."""
    lines = generate(count, seed=seed)
    with open(path, mode="w", encoding="utf-8") as f:
        f.write("\n".join(lines))
        f.write("\n")
    return count

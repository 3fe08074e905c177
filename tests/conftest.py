import pytest

from streettrees.generator import write_dataset
from streettrees.storage import TreeCollection
from tests.helpers import make_record


@pytest.fixture
def scenario_trees():
    """oak (Manhattan), Oaktree (Bronx), pine (Manhattan)."""
    trees = TreeCollection()
    trees.add(make_record(1, "oak", "Manhattan"))
    trees.add(make_record(2, "Oaktree", "Bronx"))
    trees.add(make_record(3, "pine", "Manhattan"))
    return trees


@pytest.fixture
def dataset_path(tmp_path):
    """Census-shaped CSV with 300 generated trees."""
    path = tmp_path / "trees.csv"
    write_dataset(str(path), 300, seed=42)
    return path

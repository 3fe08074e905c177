from streettrees.generator import DEFAULT_SPECIES, HEADER, generate, write_dataset
from streettrees.parsing import FIELD_COUNT, parse_line, split_csv_line


def test_generate_is_reproducible():
    assert generate(50, seed=4) == generate(50, seed=4)


def test_generated_lines_parse():
    lines = generate(100, seed=2)
    assert split_csv_line(lines[0]) == HEADER
    assert len(HEADER) == FIELD_COUNT
    records = [parse_line(line) for line in lines[1:]]
    assert [r.tree_id for r in records] == list(range(1, 101))
    known = {s.lower() for s in DEFAULT_SPECIES}
    assert all(r.species in known for r in records)


def test_custom_species():
    records = [parse_line(line) for line in generate(10, seed=1, species=["baobab"])[1:]]
    assert {r.species for r in records} == {"baobab"}


def test_write_dataset(tmp_path):
    path = tmp_path / "out.csv"
    assert write_dataset(str(path), 25, seed=0) == 25
    assert len(path.read_text(encoding="utf-8").splitlines()) == 26

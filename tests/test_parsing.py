import pytest

from streettrees.errors import SchemaViolation
from streettrees.generator import HEADER, make_line
from streettrees.parsing import (
    COL_BOROUGH,
    COL_DIAMETER,
    COL_HEALTH,
    COL_STATUS,
    COL_TREE_ID,
    COL_X,
    COL_ZIPCODE,
    FIELD_COUNT,
    parse_line,
    parse_record,
    split_csv_line,
)


def test_split_plain_line():
    assert split_csv_line("a,b,c") == ["a", "b", "c"]


def test_split_keeps_commas_inside_quotes():
    assert split_csv_line('"x, y",z') == ["x, y", "z"]


def test_split_handles_smart_quotes():
    assert split_csv_line("“x, y”,z") == ["x, y", "z"]


def test_split_skips_whitespace_between_entries():
    """Leading whitespace is dropped, whitespace after an entry started is kept"""
    assert split_csv_line("  a , b") == ["a ", "b"]
    assert split_csv_line('" a b ",c') == [" a b ", "c"]


def test_split_keeps_empty_middle_entries_and_drops_trailing_empty():
    assert split_csv_line("a,,b") == ["a", "", "b"]
    assert split_csv_line("a,b,") == ["a", "b"]


def test_split_trims_last_entry():
    assert split_csv_line("a,b  \n") == ["a", "b"]


def test_generated_line_has_schema_width():
    assert len(split_csv_line(make_line(1, "pin oak", "Queens"))) == FIELD_COUNT


def test_parse_line_lowercases_strings():
    rec = parse_line(make_line(12, "Pin Oak", "Queens", status="Alive", health="Fair", zipcode=11375))
    assert rec.tree_id == 12
    assert rec.species == "pin oak"
    assert rec.borough == "queens"
    assert rec.status == "alive"
    assert rec.health == "fair"
    assert rec.zipcode == 11375


def test_parse_line_allows_empty_status_and_health():
    rec = parse_line(make_line(3, "ginkgo", "Bronx", status="", health=""))
    assert rec.status == ""
    assert rec.health == ""


def test_header_line_is_rejected():
    with pytest.raises(SchemaViolation):
        parse_line(",".join(HEADER))


def test_wrong_field_count_is_rejected():
    with pytest.raises(SchemaViolation):
        parse_record(["1"] * (FIELD_COUNT - 1))


@pytest.mark.parametrize("kwargs", [
    {"borough": "Hoboken"},
    {"status": "sick"},
    {"health": "great"},
    {"species": ""},
    {"zipcode": 100000},
    {"diameter": -2},
    {"tree_id": 0},
])
def test_out_of_domain_fields_are_rejected(kwargs):
    fields = {"tree_id": 4, "species": "elm", "borough": "Brooklyn"}
    fields.update(kwargs)
    with pytest.raises(SchemaViolation):
        parse_line(make_line(**fields))


def test_non_numeric_coordinates_are_rejected():
    fields = split_csv_line(make_line(4, "elm", "Brooklyn"))
    fields[40] = "north"
    with pytest.raises(SchemaViolation):
        parse_record(fields)


@pytest.mark.parametrize("column", [COL_TREE_ID, COL_DIAMETER, COL_ZIPCODE, COL_STATUS, COL_HEALTH, COL_BOROUGH])
def test_padded_fields_are_rejected(column):
    """Should skip a line whose integer or enumerated field carries surrounding whitespace"""
    fields = split_csv_line(make_line(5, "elm", "Manhattan"))
    fields[column] = fields[column] + " "
    with pytest.raises(SchemaViolation):
        parse_record(fields)


def test_padded_entries_in_a_raw_line_are_rejected():
    line = make_line(5, "elm", "Manhattan")
    with pytest.raises(SchemaViolation):
        parse_line(" 5 ," + line.split(",", 1)[1])
    with pytest.raises(SchemaViolation):
        parse_line(line.replace(",Manhattan,", ",Manhattan ,"))


def test_padded_coordinates_are_accepted():
    fields = split_csv_line(make_line(5, "elm", "Manhattan"))
    fields[COL_X] = " 1000.5 "
    assert parse_record(fields).x == 1000.5

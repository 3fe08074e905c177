"""
Line tokenizer and field schema for the street tree census dump.

The census file is read line by line; each line is split on commas, with
straight or smart double quotes protecting entries that contain commas.
Only lines with exactly FIELD_COUNT entries whose fields pass validation
become records.
"""

from typing import List, Sequence

from streettrees.errors import SchemaViolation
from streettrees.records import TreeRecord

QUOTES = frozenset({'"', "“", "”"})

FIELD_COUNT = 41

# Column positions inside a census line.
COL_TREE_ID = 0
COL_DIAMETER = 3
COL_STATUS = 6
COL_HEALTH = 7
COL_SPECIES = 9
COL_ZIPCODE = 25
COL_BOROUGH = 29
COL_X = 39
COL_Y = 40


def split_csv_line(line: str) -> List[str]:
    """Split one line into entries, honouring quoted entries that may contain commas."""
    entries: List[str] = []
    word: List[str] = []
    inside_quotes = False
    inside_entry = False

    for ch in line:
        if ch in QUOTES:
            inside_quotes = not inside_quotes
            inside_entry = inside_quotes
        elif ch.isspace():
            # whitespace between entries is dropped, inside an entry it is kept
            if inside_quotes or inside_entry:
                word.append(ch)
        elif ch == ",":
            if inside_quotes:
                word.append(ch)
            else:
                inside_entry = False
                entries.append("".join(word))
                word = []
        else:
            word.append(ch)
            inside_entry = True

    last = "".join(word)
    if last:
        entries.append(last.strip())
    return entries


def _exact(raw: str, name: str) -> str:
    """Reject entries padded with whitespace."""
    if raw != raw.strip():
        raise SchemaViolation(f"{name} has surrounding whitespace: {raw!r}")
    return raw


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(_exact(raw, name))
    except ValueError:
        raise SchemaViolation(f"{name} is not an integer: {raw!r}") from None


def _parse_float(raw: str, name: str) -> float:
    # decimal fields tolerate padding, integer and enumerated fields do not
    try:
        return float(raw.strip())
    except ValueError:
        raise SchemaViolation(f"{name} is not a number: {raw!r}") from None


def parse_record(fields: Sequence[str]) -> TreeRecord:
    """Build a TreeRecord from the entries of one census line. Strings are stored lower-cased."""
    if len(fields) != FIELD_COUNT:
        raise SchemaViolation(f"expected {FIELD_COUNT} fields, got {len(fields)}")

    return TreeRecord(
        tree_id=_parse_int(fields[COL_TREE_ID], "tree_id"),
        diameter=_parse_int(fields[COL_DIAMETER], "tree_dbh"),
        status=_exact(fields[COL_STATUS], "status").lower(),
        health=_exact(fields[COL_HEALTH], "health").lower(),
        species=fields[COL_SPECIES].lower(),
        zipcode=_parse_int(fields[COL_ZIPCODE], "zipcode"),
        borough=_exact(fields[COL_BOROUGH], "boroname").lower(),
        x=_parse_float(fields[COL_X], "x_sp"),
        y=_parse_float(fields[COL_Y], "y_sp"),
    )


def parse_line(line: str) -> TreeRecord:
    return parse_record(split_csv_line(line))

import io

import pytest

from streettrees import __version__
from streettrees.main import main


@pytest.fixture(autouse=True)
def quiet_progress(monkeypatch):
    monkeypatch.setenv("STREET_TREES_PROGRESS_EVERY", "0")


def run(args, text):
    out = io.StringIO()
    code = main(args, stdin=io.StringIO(text), stdout=out)
    return code, out.getvalue()


def test_missing_argument(capsys):
    assert main([]) == 1
    assert "expects a file name" in capsys.readouterr().err


def test_unreadable_file(tmp_path, capsys):
    missing = tmp_path / "nope.csv"
    assert main([str(missing)]) == 1
    assert f"the file '{missing}' does not exist" in capsys.readouterr().err


def test_version():
    code, out = run(["--version"], "")
    assert code == 0
    assert __version__ in out


def test_query_loop(dataset_path, capsys):
    code, out = run([str(dataset_path)], "maple\nbaobab\nQUIT\n")
    assert code == 0
    assert "All matching species: " in out
    assert "   norway maple" in out
    assert "Popularity in the city: " in out
    assert "   NYC            :" in out
    assert "There are no records of 'baobab' on NYC streets." in out
    assert out.rstrip().endswith("End of Program.")
    assert "Trees ingested: 300" in capsys.readouterr().err


def test_end_of_input_stops_the_loop(dataset_path):
    code, out = run([str(dataset_path)], "oak\n")
    assert code == 0
    assert "   pin oak" in out
    assert out.count("End of Program.") == 1


def test_bad_progress_setting(dataset_path, monkeypatch, capsys):
    """Should print a diagnostic and exit 1 instead of raising"""
    monkeypatch.setenv("STREET_TREES_PROGRESS_EVERY", "often")
    assert main([str(dataset_path)], stdin=io.StringIO("quit\n"), stdout=io.StringIO()) == 1
    assert "STREET_TREES_PROGRESS_EVERY must be an integer" in capsys.readouterr().err

from typer.testing import CliRunner

from anagrams.anagrams_core import Anagram
from anagrams.cli import app

runner = CliRunner()


def test_run_creates_and_reports(tmp_path):
    result = runner.invoke(app, ["run", "cat", "c", "--directory", str(tmp_path), "-q"])
    assert result.exit_code == 0, result.output
    assert "Anagram file not found!" in result.output
    assert "6 permutations successfully generated" in result.output
    assert "2 permutations selected out of 6" in result.output
    assert "Result reset from 2 to 6 permutations" in result.output
    assert (tmp_path / "cat.anagram").exists()
    report = (tmp_path / "cat.txt").read_text(encoding="utf-8").splitlines()
    assert report[0] == 'Anagram: "cat" (3 elements, 3 bytes), Permutations: 6'
    assert report[1] == 'Filter: "c", Matches: 2'
    assert report[3:] == ["0000001. cat", "0000002. cta"]


def test_run_reopens_existing(tmp_path):
    runner.invoke(app, ["run", "dog", "--directory", str(tmp_path), "-q"])
    result = runner.invoke(app, ["run", "dog", "--directory", str(tmp_path), "-q"])
    assert result.exit_code == 0, result.output
    assert 'source string "dog" successfully opened' in result.output
    assert "Integrity test successfully performed on 6 permutations" in result.output
    lines = (tmp_path / "dog.txt").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3 + 6


def test_run_rejects_bad_source(tmp_path):
    result = runner.invoke(app, ["run", "x", "--directory", str(tmp_path), "-q"])
    assert result.exit_code == 1
    assert not (tmp_path / "x.anagram").exists()


def test_run_single_arrangement(tmp_path):
    result = runner.invoke(app, ["run", "zz", "--directory", str(tmp_path), "-q"])
    assert result.exit_code == 0, result.output
    assert "Skipped: fewer than 2 permutations" in result.output


def test_generate_with_limit_then_info(tmp_path):
    path = tmp_path / "abcd.anagram"
    Anagram.create(path, "abcd").release()
    result = runner.invoke(app, ["generate", str(path), "--limit", "5"])
    assert result.exit_code == 0, result.output
    assert "(incomplete)" in result.output

    result = runner.invoke(app, ["info", str(path)])
    assert result.exit_code == 0, result.output
    assert "Permutations: 5" in result.output
    assert "Complete:     no" in result.output

    result = runner.invoke(app, ["generate", str(path)])
    assert "24 total (complete)" in result.output


def test_info_missing(tmp_path):
    result = runner.invoke(app, ["info", str(tmp_path / "missing.anagram")])
    assert result.exit_code == 1


def test_generate_limit_one_on_new_file(tmp_path):
    path = tmp_path / "abcd.anagram"
    Anagram.create(path, "abcd").release()
    result = runner.invoke(app, ["generate", str(path), "--limit", "1"])
    assert result.exit_code == 0, result.output
    assert "1 permutations added, 1 total (incomplete)" in result.output

    result = runner.invoke(app, ["generate", str(path), "--limit", "0"])
    assert "0 permutations added, 1 total (incomplete)" in result.output


def test_run_reports_corrupt_record(tmp_path):
    runner.invoke(app, ["run", "cat", "--directory", str(tmp_path), "-q"])
    path = tmp_path / "cat.anagram"
    data = bytearray(path.read_bytes())
    data[4 * 3:5 * 3] = b"\xffat"
    path.write_bytes(bytes(data))
    result = runner.invoke(app, ["run", "cat", "--directory", str(tmp_path), "-q"])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)

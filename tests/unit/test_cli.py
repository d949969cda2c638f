"""Tests for CLI tool."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from dbfcodec import decode


def run_cli(*args: str) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, "-m", "dbfcodec.cli.main", *args],
        capture_output=True,
        text=True,
    )


@pytest.fixture
def sample_file(tmp_path: Path, make_dbf) -> Path:
    """A three-record file with one deleted record."""
    path = tmp_path / "people.dbf"
    path.write_bytes(
        make_dbf(
            [("NAME", "C", 6, 0), ("AGE", "N", 3, 0)],
            [b" Alice  36", b"*Bob    41", b" Carol  29"],
            version=0x30,
        )
    )
    return path


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert "dbfcodec: dBase table codec" in result.stdout
    assert "--info" in result.stdout
    assert "--rewrite" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert "dbfcodec 0.1.0" in result.stdout


def test_cli_no_arguments() -> None:
    """Without a command the CLI prints help and succeeds."""
    result = run_cli()
    assert result.returncode == 0
    assert "usage:" in result.stdout


def test_cli_info(sample_file: Path) -> None:
    """Test CLI --info with a real table."""
    result = run_cli("--info", str(sample_file))
    assert result.returncode == 0
    assert "people.dbf" in result.stdout
    assert "Visual FoxPro" in result.stdout
    assert "Records: 3 stored, 2 live (1 deleted or unreadable)" in result.stdout
    assert "Header length: 97 bytes (computed 97)" in result.stdout
    assert "1. NAME" in result.stdout
    assert "N(3) @ 7" in result.stdout


def test_cli_info_missing_file() -> None:
    """Test CLI --info with missing file."""
    result = run_cli("--info", "nonexistent.dbf")
    assert result.returncode == 1
    assert "not found" in result.stderr.lower()


def test_cli_info_not_a_table(tmp_path: Path) -> None:
    path = tmp_path / "tiny.dbf"
    path.write_bytes(b"\x03\x00")
    result = run_cli("--info", str(path))
    assert result.returncode == 1
    assert "Error reading file" in result.stderr


def test_cli_rewrite(sample_file: Path, tmp_path: Path) -> None:
    """Test CLI --rewrite drops deleted records."""
    target = tmp_path / "out.dbf"
    result = run_cli("--rewrite", str(sample_file), str(target))

    assert result.returncode == 0
    assert "Wrote 2 rows" in result.stdout
    table = decode(target.read_bytes())
    assert table.header.version == 0x30
    assert table.to_records() == [
        {"NAME": "Alice", "AGE": 36.0},
        {"NAME": "Carol", "AGE": 29.0},
    ]


def test_cli_rewrite_strict_failure(tmp_path: Path, make_dbf) -> None:
    source = tmp_path / "bad.dbf"
    source.write_bytes(make_dbf([("AGE", "N", 3, 0)], [b" abc"]))

    result = run_cli("--strict", "--rewrite", str(source), str(tmp_path / "out.dbf"))

    assert result.returncode == 1
    assert "not a number" in result.stderr
    assert not (tmp_path / "out.dbf").exists()


def test_cli_bad_encoding(sample_file: Path) -> None:
    result = run_cli("--encoding", "utf-8", "--info", str(sample_file))
    assert result.returncode == 1
    assert "single-byte" in result.stderr

from pathlib import Path

import pytest

from rock_tower.domain.jets import Direction, JetParseError
from rock_tower.io.paths import read_jet_file, resolve_within_base, settle_log_path


def test_read_jet_file_uses_first_line(tmp_path: Path) -> None:
    path = tmp_path / "input.txt"
    path.write_text("\n<>>\nignored\n")
    assert read_jet_file(path) == (Direction.LEFT, Direction.RIGHT, Direction.RIGHT)


def test_read_jet_file_rejects_non_utf8(tmp_path: Path) -> None:
    path = tmp_path / "binary.txt"
    path.write_bytes(b">>\xff<<\n")
    with pytest.raises(JetParseError, match="UTF-8") as excinfo:
        read_jet_file(path)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_read_jet_file_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_jet_file(tmp_path / "absent.txt")


def test_settle_log_lives_under_logs(tmp_path: Path) -> None:
    assert settle_log_path(tmp_path) == tmp_path / "logs" / "settle_log.parquet"


def test_resolve_within_base_rejects_escape(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="escapes"):
        resolve_within_base(Path("../outside.png"), tmp_path)

from __future__ import annotations

from pathlib import Path

import pytest

from common.base.ops import rename_path


def test_rename_moves_entry(tmp_path: Path) -> None:
    src = tmp_path / "A B.txt"
    src.write_text("data", encoding="utf-8")

    rename_path(src, tmp_path / "a_b.txt")

    assert not src.exists()
    assert (tmp_path / "a_b.txt").read_text(encoding="utf-8") == "data"


def test_rename_refuses_to_overwrite(tmp_path: Path) -> None:
    src = tmp_path / "one.txt"
    dst = tmp_path / "two.txt"
    src.write_text("one", encoding="utf-8")
    dst.write_text("two", encoding="utf-8")

    with pytest.raises(FileExistsError):
        rename_path(src, dst)
    assert dst.read_text(encoding="utf-8") == "two"


def test_rename_missing_source(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        rename_path(tmp_path / "gone.txt", tmp_path / "new.txt")

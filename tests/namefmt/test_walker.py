from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from namefmt.config import NamingConfig
from namefmt.errors import RootPathError
from namefmt.walker import walk


def _touch(root: Path, *relatives: str) -> None:
    for relative in relatives:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def _names(root: Path, config: NamingConfig | None = None) -> list:
    return [str(d.path.relative_to(root)) for d in walk(root, config)]


def test_walk_recurses_pre_order(tmp_path: Path) -> None:
    _touch(tmp_path, "b.txt", "a.txt", "sub/c.txt", "sub/deeper/d.txt", "other/e.txt")

    assert _names(tmp_path) == [
        "a.txt",
        "b.txt",
        os.path.join("other", "e.txt"),
        os.path.join("sub", "c.txt"),
        os.path.join("sub", "deeper", "d.txt"),
    ]


def test_directories_are_not_yielded(tmp_path: Path) -> None:
    (tmp_path / "empty").mkdir()
    _touch(tmp_path, "only.txt")

    assert _names(tmp_path) == ["only.txt"]


def test_hidden_entries_skipped_unless_included(tmp_path: Path) -> None:
    _touch(tmp_path, ".hidden", ".git/config", "visible.txt")

    assert _names(tmp_path) == ["visible.txt"]
    included = _names(tmp_path, NamingConfig(include_hidden=True))
    assert ".hidden" in included
    assert os.path.join(".git", "config") in included


def test_exclude_patterns_prune_files_and_directories(tmp_path: Path) -> None:
    _touch(tmp_path, "keep.txt", "drop.log", "node_modules/pkg/index.js")
    config = NamingConfig(exclude=("*.log", "node_modules"))

    assert _names(tmp_path, config) == ["keep.txt"]


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlinks_are_not_followed(tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    root = tmp_path / "root"
    _touch(outside, "secret.txt")
    _touch(root, "real.txt")
    try:
        (root / "linked_dir").symlink_to(outside, target_is_directory=True)
        (root / "linked_file.txt").symlink_to(outside / "secret.txt")
    except OSError:
        pytest.skip("cannot create symlinks here")

    assert _names(root) == ["real.txt"]


def test_descriptor_carries_snapshot_and_metadata(tmp_path: Path) -> None:
    _touch(tmp_path, "Cargo.toml", "lib file.rs")
    (tmp_path / "src").mkdir()

    descriptors = list(walk(tmp_path))
    lib = next(d for d in descriptors if d.name == "lib file.rs")

    assert lib.extension == ".rs"
    assert lib.directory == tmp_path
    assert lib.siblings == frozenset({"Cargo.toml", "src"})
    assert lib.mtime is not None


def test_snapshot_ignores_renames_during_iteration(tmp_path: Path) -> None:
    _touch(tmp_path, "a.txt", "b.txt")

    iterator = walk(tmp_path)
    first = next(iterator)
    (tmp_path / "a.txt").rename(tmp_path / "zz.txt")
    second = next(iterator)

    assert first.name == "a.txt"
    assert second.name == "b.txt"
    assert "a.txt" in second.parent
    assert "zz.txt" not in second.parent
    assert list(iterator) == []


def test_single_file_root(tmp_path: Path) -> None:
    _touch(tmp_path, "package.json", "Main File.js", "other.txt")

    descriptors = list(walk(tmp_path / "Main File.js"))

    assert [d.name for d in descriptors] == ["Main File.js"]
    assert "package.json" in descriptors[0].siblings


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(RootPathError):
        list(walk(tmp_path / "missing"))


def test_very_deep_tree_is_walked(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    depth = 1200
    relative = "a"
    os.mkdir(relative)
    for _ in range(depth - 1):
        relative = os.path.join(relative, "a")
        os.mkdir(relative)
    Path(relative, "Deep File.txt").write_text("", encoding="utf-8")

    try:
        descriptors = list(walk(Path("a")))
        assert [d.name for d in descriptors] == ["Deep File.txt"]
        assert str(descriptors[0].path) == os.path.join(relative, "Deep File.txt")
    finally:
        # bottom-up removal, one level at a time
        os.remove(os.path.join(relative, "Deep File.txt"))
        while relative:
            os.rmdir(relative)
            relative = os.path.dirname(relative)


@pytest.mark.skipif(
    not hasattr(os, "geteuid") or os.geteuid() == 0,
    reason="permission bits are not enforced for root",
)
def test_unreadable_directory_is_skipped_with_warning(tmp_path: Path, caplog) -> None:
    _touch(tmp_path, "before.txt", "locked/inside.txt", "zafter/after.txt")
    locked = tmp_path / "locked"
    locked.chmod(0)

    try:
        with caplog.at_level(logging.WARNING, logger="namefmt"):
            names = _names(tmp_path)
    finally:
        locked.chmod(0o755)

    assert names == ["before.txt", os.path.join("zafter", "after.txt")]
    assert any(
        record.levelno == logging.WARNING and "locked" in record.getMessage()
        for record in caplog.records
    )

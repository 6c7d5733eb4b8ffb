from __future__ import annotations

import logging
from pathlib import Path

import pytest


TESTBED_FILES = [
    "file with spaces.txt",
    "FileWithMixedCase.rs",
    "another-file-with-dashes.js",
    "UPPERCASE_FILE.py",
    "my-executable.exe",
    "package-project/Cargo.toml",
    "package-project/src file.rs",
    "subdirectory/nested file with spaces.md",
    "subdirectory/CamelCaseFile.ts",
    "node-project/package.json",
    "node-project/main file.js",
]


@pytest.fixture
def testbed(tmp_path: Path) -> Path:
    root = tmp_path / "testbed"
    for relative in TESTBED_FILES:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
    (root / "package-project" / "Cargo.toml").write_text(
        '[package]\nname = "test-package"\nversion = "0.1.0"\n', encoding="utf-8"
    )
    (root / "node-project" / "package.json").write_text(
        '{\n  "name": "test-project",\n  "version": "1.0.0"\n}\n', encoding="utf-8"
    )
    return root


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    # Keep a developer's own ~/.config/namefmt out of the tests.
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    yield
    logger = logging.getLogger("namefmt")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    logger._initialized = False  # type: ignore[attr-defined]


def _snapshot_tree(root: Path) -> dict:
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def snapshot_tree():
    """Relative path -> file bytes for every file under a root."""
    return _snapshot_tree


from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from apps.cli import build_parser, cli_namefmt
from namefmt.config import default_config_path


def _stdout_lines(capsys) -> list:
    return [line for line in capsys.readouterr().out.splitlines() if line]


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])

    assert args.path == "."
    assert args.inplace is False
    assert args.timestamp is False
    assert args.config is None


def test_preview_prints_would_rename_lines(testbed: Path, capsys, snapshot_tree) -> None:
    before = snapshot_tree(testbed)

    code = cli_namefmt([str(testbed), "--no-progress"])

    lines = _stdout_lines(capsys)
    assert code == 0
    assert snapshot_tree(testbed) == before
    assert len(lines) == 8
    assert all(line.startswith("Would rename ") for line in lines)
    assert f"Would rename {testbed / 'file with spaces.txt'} to file_with_spaces.txt" in lines
    assert f"Would rename {testbed / 'node-project' / 'main file.js'} to main-file.js" in lines
    assert not any("my-executable.exe" in line for line in lines)
    assert not any("Cargo.toml" in line or "package.json" in line for line in lines)


def test_inplace_renames_files(testbed: Path, capsys) -> None:
    code = cli_namefmt([str(testbed), "--inplace", "--no-progress"])

    lines = _stdout_lines(capsys)
    assert code == 0
    assert len(lines) == 8
    assert all(line.startswith("Renamed ") for line in lines)
    assert (testbed / "file_with_spaces.txt").is_file()
    assert (testbed / "subdirectory" / "camel_case_file.ts").is_file()
    assert (testbed / "package-project" / "src_file.rs").is_file()
    assert (testbed / "node-project" / "main-file.js").is_file()

    assert cli_namefmt([str(testbed), "--no-progress"]) == 0
    assert _stdout_lines(capsys) == []


def test_timestamp_flag_prefixes_new_names(testbed: Path, capsys) -> None:
    code = cli_namefmt([str(testbed), "--timestamp", "--no-progress"])

    lines = _stdout_lines(capsys)
    assert code == 0
    assert lines
    for line in lines:
        new_name = line.rsplit(" to ", 1)[1]
        assert re.match(r"\d{4}_\d{2}_\d{2}__", new_name)


def test_recursion_reaches_nested_files(testbed: Path, capsys) -> None:
    cli_namefmt([str(testbed), "--no-progress"])

    output = capsys.readouterr().out
    assert "nested_file_with_spaces.md" in output
    assert "camel_case_file.ts" in output


def test_config_override_keeps_spaces(testbed: Path, tmp_path: Path, capsys) -> None:
    cfg_path = tmp_path / "custom.toml"
    cfg_path.write_text("replace_spaces = false\n", encoding="utf-8")

    code = cli_namefmt([str(testbed), "-c", str(cfg_path), "--no-progress"])

    output = capsys.readouterr().out
    assert code == 0
    assert "file_with_spaces.txt" not in output
    assert "file_with_mixed_case.rs" in output


def test_missing_config_is_fatal(testbed: Path, tmp_path: Path, capsys) -> None:
    code = cli_namefmt([str(testbed), "-c", str(tmp_path / "nope.toml")])

    captured = capsys.readouterr()
    assert code == 2
    assert captured.out == ""
    assert "Configuration file not found" in captured.err


def test_bad_root_is_fatal(tmp_path: Path, capsys) -> None:
    code = cli_namefmt([str(tmp_path / "missing"), "--no-progress"])

    captured = capsys.readouterr()
    assert code == 2
    assert "Path does not exist" in captured.err


def test_report_is_written(testbed: Path, tmp_path: Path, capsys) -> None:
    report = tmp_path / "reports" / "plan.csv"

    code = cli_namefmt([str(testbed), "--report", str(report), "--no-progress"])

    assert code == 0
    rows = report.read_text(encoding="utf-8").splitlines()
    assert rows[0] == "path,new_name,category,status,reason,message"
    assert len(rows) == 12


def test_init_and_show_config(capsys) -> None:
    assert cli_namefmt(["--init-config"]) == 0
    assert default_config_path().is_file()
    assert cli_namefmt(["--init-config"]) == 2

    capsys.readouterr()
    assert cli_namefmt(["--show-config"]) == 0
    shown = json.loads(capsys.readouterr().out)
    assert shown["replace_spaces"] is True
    assert shown["styles"] == {"regular": "snake_case", "executable": "kebab-case"}


def test_failures_exit_with_one(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / "A B.txt").write_text("", encoding="utf-8")

    def refuse(src, dst):
        raise OSError("read-only file system")

    monkeypatch.setattr("namefmt.executor.rename_path", refuse)

    assert cli_namefmt([str(tmp_path), "--inplace", "--no-progress"]) == 1
    assert "rename(s) failed" in capsys.readouterr().err


def test_keyboard_interrupt_exits_130(testbed: Path, monkeypatch) -> None:
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr("apps.cli.run", interrupted)

    assert cli_namefmt([str(testbed)]) == 130


def test_main_raises_system_exit(testbed: Path, monkeypatch) -> None:
    from apps import cli

    monkeypatch.setattr("sys.argv", ["namefmt", str(testbed), "--no-progress"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 0

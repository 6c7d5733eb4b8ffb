"""Utility helpers for performing file I/O with consistent defaults."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

import tomli
import yaml


DEFAULT_ENCODING = "utf-8"


def _to_path(path: Path | str) -> Path:
    return Path(path).expanduser()


def write_text(path: Path | str, content: str, encoding: str = DEFAULT_ENCODING) -> None:
    _to_path(path).write_text(content, encoding=encoding)


@contextmanager
def open_file(
    path: Path | str,
    mode: str = "r",
    *,
    encoding: str = DEFAULT_ENCODING,
    newline: Optional[str] = None,
) -> Iterator[Any]:
    path_obj = _to_path(path)
    kwargs: dict[str, Any] = {}
    is_binary = "b" in mode
    if is_binary:
        if newline is not None:
            raise ValueError("newline is not supported in binary mode")
    else:
        kwargs["encoding"] = encoding
        kwargs["newline"] = newline
    with open(path_obj, mode, **kwargs) as handle:
        yield handle


def read_yaml(path: Path | str) -> Mapping[str, Any] | list[Any]:
    with open_file(path, "r") as handle:
        data = yaml.safe_load(handle)
    return data if data is not None else {}


def write_yaml(path: Path | str, payload: Mapping[str, Any] | list[Any]) -> None:
    with open_file(path, "w") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False)


def read_toml(path: Path | str) -> dict[str, Any]:
    with open_file(path, "rb") as handle:
        return tomli.load(handle)

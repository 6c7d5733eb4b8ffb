"""
common.shared.utils

Progress helper shared across namefmt modules.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from tqdm import tqdm


class Progress:
    """
    Simple wrapper for tqdm progress bars that automatically closes
    on completion or interruption.
    """

    def __init__(self, iterable: Iterable[Any], desc: str = "Processing", disable: bool = False):
        self._tqdm = tqdm(
            iterable,
            desc=desc,
            unit="file",
            leave=False,
            dynamic_ncols=True,
            disable=disable,
        )

    def __iter__(self) -> Iterator[Any]:
        try:
            for item in self._tqdm:
                yield item
        finally:
            self._tqdm.close()

    def write(self, message: str) -> None:
        """Print a message above the progress bar on its own line."""
        self._tqdm.write(message)

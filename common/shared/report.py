"""
common.shared.report

Reporting utilities for namefmt runs.

 - CSV export of per-file outcomes
 - Human-readable count summaries
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from common.base.file_io import open_file
from common.base.fs import ensure_parent
from common.base.logging import get_logger

log = get_logger(__name__)


# ----------------------------------------------------------------------
# CSV WRITERS
# ----------------------------------------------------------------------

def write_csv(
    data: List[Dict[str, Any]],
    output_path: Path,
    fieldnames: Optional[Sequence[str]] = None,
) -> Path:
    """
    Write structured data to a CSV file.

    An empty ``data`` list still produces a header row when ``fieldnames``
    is given.
    """
    columns = list(fieldnames or (data[0].keys() if data else []))
    if not columns:
        log.warning("No data provided for CSV export.")
        return output_path

    ensure_parent(output_path)
    try:
        with open_file(output_path, "w", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=columns)
            writer.writeheader()
            writer.writerows(data)
        log.debug(f"📊 CSV report saved → {output_path}")
        return output_path
    except OSError as e:
        log.error(f"Failed to write CSV report: {e}")
        raise


# ----------------------------------------------------------------------
# HUMAN-READABLE SUMMARY
# ----------------------------------------------------------------------

def summarize_counts(title: str, summary: Dict[str, int]) -> str:
    """
    Return a formatted, human-readable summary string.
    Example:
        summarize_counts("Rename Summary", {"Renamed": 12, "Skipped": 3})
    """
    width = max((len(key) for key in summary), default=0)
    lines = [f"===== {title.upper()} ====="]
    for key, val in summary.items():
        lines.append(f"{key:<{width}} : {val}")
    lines.append("=" * (len(title) + 12))
    return "\n".join(lines)

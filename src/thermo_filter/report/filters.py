"""
Scan filter summary across MASIC scan stats files.

Groups every ``Scan Filter Text`` value found in a directory of
``_ScanStatsEx.txt`` files by its generic filter, recording one example
filter, the number of scans and the first file it was seen in.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from thermo_filter.config import (
    FILTER_SUMMARY_COLUMNS,
    FILTER_SUMMARY_FILENAME,
    SCAN_STATS_EX_SUFFIX,
)
from thermo_filter.parser.naming import make_generic_scan_filter
from thermo_filter.source.scan_stats import ScanStatsSource

logger = logging.getLogger(__name__)


@dataclass
class FilterSummaryRow:
    """One generic filter and where it was first seen."""

    generic_filter: str
    example_filter: str
    count: int
    first_dataset: str


def find_scan_stats_files(directory: Path) -> List[Path]:
    """Sorted _ScanStatsEx.txt files directly inside directory."""
    return sorted(Path(directory).glob(f"*{SCAN_STATS_EX_SUFFIX}"))


def summarize_scan_filters(directory: Path) -> pd.DataFrame:
    """
    Build the filter summary table for a directory.

    Args:
        directory: Directory holding _ScanStatsEx.txt files

    Returns:
        DataFrame with FILTER_SUMMARY_COLUMNS, rows in first-seen order;
        empty when no files (or no filters) are found
    """
    files = find_scan_stats_files(directory)
    if not files:
        logger.warning(f"No *{SCAN_STATS_EX_SUFFIX} files found in {directory}")
        return pd.DataFrame(columns=FILTER_SUMMARY_COLUMNS)

    rows: Dict[str, FilterSummaryRow] = {}

    for files_processed, path in enumerate(files, start=1):
        for filter_text in ScanStatsSource(path).filter_texts():
            if not filter_text.strip():
                continue

            generic = make_generic_scan_filter(filter_text)
            row = rows.get(generic)
            if row is None:
                rows[generic] = FilterSummaryRow(generic, filter_text, 1, path.name)
            else:
                row.count += 1

        logger.info(f"Processed {files_processed}/{len(files)}: {path.name}")

    logger.info(f"Found {len(rows)} generic filters in {len(files)} files")

    return pd.DataFrame(
        [
            [row.generic_filter, row.example_filter, row.count, row.first_dataset]
            for row in rows.values()
        ],
        columns=FILTER_SUMMARY_COLUMNS,
    )


def write_filter_summary(
    summary: pd.DataFrame,
    output_path: Optional[Path] = None,
    directory: Optional[Path] = None,
) -> Path:
    """
    Write the filter summary as a tab-separated file.

    Args:
        summary: Table from summarize_scan_filters
        output_path: Output file (default: <directory>/ScanFiltersFound.txt)
        directory: Directory used for the default output path

    Returns:
        Path of the written file
    """
    if output_path is None:
        output_path = Path(directory or ".") / FILTER_SUMMARY_FILENAME

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    summary.to_csv(output_path, sep="\t", index=False)
    logger.info(f"Scan filters written to: {output_path}")

    return output_path

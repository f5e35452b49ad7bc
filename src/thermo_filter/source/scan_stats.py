"""
ScanStatsSource - Read scan filters from MASIC scan statistics tables.

MASIC writes two tab-separated files per dataset:

* ``<dataset>_ScanStatsEx.txt`` with the trailer values of each scan,
  including the ``Scan Filter Text`` column
* ``<dataset>_ScanStats.txt`` with retention time, TIC and base peak values

The Ex file is required.  The plain file is merged in when it sits next
to it.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from thermo_filter.config import (
    SCAN_STATS_COLUMNS,
    SCAN_STATS_EX_COLUMNS,
    SCAN_STATS_EX_SUFFIX,
    SCAN_STATS_SUFFIX,
)
from thermo_filter.source.base import (
    RawScanRecord,
    RawScanSource,
    ScanStats,
    filter_is_ftms,
)

logger = logging.getLogger(__name__)


def read_scan_stats_table(path: Path) -> pd.DataFrame:
    """
    Read a MASIC table with every column as text.

    Args:
        path: Path to a tab-separated MASIC file

    Returns:
        DataFrame; empty when the file has no rows
    """
    try:
        return pd.read_csv(path, sep="\t", dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        logger.warning(f"Empty scan stats file: {path}")
        return pd.DataFrame()


def dataset_name_for(path: Path) -> str:
    """Dataset name implied by a _ScanStatsEx.txt file name."""
    name = Path(path).name
    if name.endswith(SCAN_STATS_EX_SUFFIX):
        return name[: -len(SCAN_STATS_EX_SUFFIX)]
    return Path(path).stem


class ScanStatsSource(RawScanSource):
    """Scan source backed by MASIC _ScanStatsEx.txt / _ScanStats.txt files."""

    def __init__(self, scan_stats_ex_path: Path):
        """
        Initialize the source.

        Args:
            scan_stats_ex_path: Path to the <dataset>_ScanStatsEx.txt file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        scan_stats_ex_path = Path(scan_stats_ex_path)
        if not scan_stats_ex_path.exists():
            raise FileNotFoundError(f"Scan stats file not found: {scan_stats_ex_path}")
        super().__init__(scan_stats_ex_path)
        self.dataset = dataset_name_for(scan_stats_ex_path)

    @property
    def scan_stats_path(self) -> Path:
        """Sibling _ScanStats.txt path (may not exist)."""
        return self.path.with_name(self.dataset + SCAN_STATS_SUFFIX)

    def read_table(self) -> pd.DataFrame:
        """
        Read the Ex table, merged with the plain stats table when present.

        Returns:
            DataFrame with one row per scan
        """
        df = read_scan_stats_table(self.path)

        scan_col = SCAN_STATS_EX_COLUMNS["scan_number"]
        if df.empty or scan_col not in df.columns:
            return df

        if self.scan_stats_path.exists():
            stats_df = read_scan_stats_table(self.scan_stats_path)
            wanted = [col for col in SCAN_STATS_COLUMNS.values() if col in stats_df.columns]
            if SCAN_STATS_COLUMNS["scan_number"] in wanted:
                df = df.merge(stats_df[wanted], on=scan_col, how="left", suffixes=("", "_stats"))
                df = df.fillna("")
                logger.debug(f"Merged scan statistics from {self.scan_stats_path.name}")

        return df

    def filter_texts(self) -> List[str]:
        """Filter text of every row, in file order."""
        df = read_scan_stats_table(self.path)
        filter_col = SCAN_STATS_EX_COLUMNS["filter_text"]
        if filter_col not in df.columns:
            logger.warning(f"{filter_col} not found in: {self.path.name}")
            return []
        return df[filter_col].tolist()

    def _load_records(self) -> Dict[int, RawScanRecord]:
        df = self.read_table()

        filter_col = SCAN_STATS_EX_COLUMNS["filter_text"]
        scan_col = SCAN_STATS_EX_COLUMNS["scan_number"]
        if filter_col not in df.columns or scan_col not in df.columns:
            logger.warning(f"{filter_col} or {scan_col} not found in: {self.path.name}")
            return {}

        stats_cols = set(SCAN_STATS_COLUMNS.values())
        trailer_cols = [
            col
            for col in df.columns
            if col not in (scan_col, filter_col, SCAN_STATS_EX_COLUMNS["dataset"])
            and col not in stats_cols
        ]

        records: Dict[int, RawScanRecord] = {}
        for row in df.to_dict(orient="records"):
            scan_number = _to_int(row.get(scan_col))
            if scan_number is None:
                logger.debug(f"Skipping row without a scan number in {self.path.name}")
                continue

            filter_text = str(row.get(filter_col, "")).strip()
            records[scan_number] = RawScanRecord(
                scan_number=scan_number,
                filter_text=filter_text,
                stats=_row_stats(row),
                trailer=[(col, str(row[col])) for col in trailer_cols],
                is_ftms=filter_is_ftms(filter_text),
            )

        return records


def _to_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number):
        return None
    return int(number)


def _to_float(value, default: float = 0.0) -> float:
    if value is None or value == "":
        return default
    number = pd.to_numeric(value, errors="coerce")
    if pd.isna(number):
        return default
    return float(number)


def _row_stats(row: Dict[str, str]) -> ScanStats:
    num_peaks = _to_int(row.get(SCAN_STATS_COLUMNS["num_peaks"]))
    return ScanStats(
        num_peaks=num_peaks if num_peaks is not None else -1,
        retention_time=_to_float(row.get(SCAN_STATS_COLUMNS["retention_time"])),
        total_ion_current=_to_float(row.get(SCAN_STATS_COLUMNS["total_ion_current"])),
        base_peak_mz=_to_float(row.get(SCAN_STATS_COLUMNS["base_peak_mz"])),
        base_peak_intensity=_to_float(row.get(SCAN_STATS_COLUMNS["base_peak_intensity"])),
    )

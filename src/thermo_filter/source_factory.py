"""
Factory for creating the appropriate scan source based on the input path.
"""

import re
from pathlib import Path
from typing import Optional

from thermo_filter.config import SUPPORTED_SOURCE_TYPES
from thermo_filter.source.base import RawScanSource

# File name patterns
SCAN_STATS_EX_PATTERN = re.compile(r"_ScanStatsEx\.txt$", re.IGNORECASE)
MZML_PATTERN = re.compile(r"\.mzML(\.gz)?$", re.IGNORECASE)


def detect_source_type(path: Path) -> str:
    """
    Detect the source type from a file name.

    Returns:
        'scanstats' or 'mzml'

    Raises:
        ValueError: If the file type is not recognized
    """
    name = Path(path).name
    if SCAN_STATS_EX_PATTERN.search(name):
        return "scanstats"
    elif MZML_PATTERN.search(name):
        return "mzml"
    else:
        raise ValueError(
            f"Unrecognized scan source: '{name}'. "
            f"Expected a _ScanStatsEx.txt (MASIC) or .mzML file."
        )


def create_source(path: Path, source_type: Optional[str] = None) -> RawScanSource:
    """
    Create the appropriate scan source for a file.

    Args:
        path: _ScanStatsEx.txt, .mzML or .mzML.gz file
        source_type: One of SUPPORTED_SOURCE_TYPES; detected from the file name if None

    Returns:
        A RawScanSource subclass instance

    Raises:
        ValueError: If the file type is not recognized
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if source_type is None:
        source_type = detect_source_type(path)
    elif source_type.lower() not in SUPPORTED_SOURCE_TYPES:
        raise ValueError(
            f"Unsupported source type: '{source_type}'. "
            f"Expected one of: {', '.join(SUPPORTED_SOURCE_TYPES)}."
        )
    source_type = source_type.lower()

    if source_type == "scanstats":
        from thermo_filter.source.scan_stats import ScanStatsSource

        return ScanStatsSource(path)

    from thermo_filter.source.mzml_source import MzMLScanSource

    return MzMLScanSource(path)

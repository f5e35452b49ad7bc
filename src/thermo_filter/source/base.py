"""
RawScanSource - Abstract base class for per-scan filter text providers.

A source supplies, for each scan number, the verbatim filter text plus the
scan statistics, trailer events and status log that are copied through
into ScanInfo unchanged.  Subclasses only implement ``_load_records``;
lookup and scan range helpers are shared here.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass
class ScanStats:
    """Scan statistics reported by the instrument file."""

    num_peaks: int = -1
    retention_time: float = 0.0  # minutes
    low_mass: float = 0.0
    high_mass: float = 0.0
    total_ion_current: float = 0.0
    base_peak_mz: float = 0.0
    base_peak_intensity: float = 0.0
    num_channels: int = 0
    uniform_time: bool = False
    frequency: float = 0.0
    is_centroided: bool = False


@dataclass
class RawScanRecord:
    """Everything a source knows about one scan."""

    scan_number: int
    filter_text: str = ""
    stats: ScanStats = field(default_factory=ScanStats)
    trailer: List[Tuple[str, str]] = field(default_factory=list)
    status_log: List[Tuple[str, str]] = field(default_factory=list)
    is_ftms: bool = False


def filter_is_ftms(filter_text: str) -> bool:
    """FT analyzer flag for sources that only have the filter text."""
    return filter_text.lstrip().upper().startswith("FTMS")


class RawScanSource(ABC):
    """
    Abstract provider of raw scan records.

    Records are loaded on first access and kept for the lifetime of the
    source.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._records: Optional[Dict[int, RawScanRecord]] = None

    @abstractmethod
    def _load_records(self) -> Dict[int, RawScanRecord]:
        """
        Load every scan record.

        Returns:
            Mapping of scan number to record
        """

    @property
    def records(self) -> Dict[int, RawScanRecord]:
        """All records keyed by scan number (loaded lazily)."""
        if self._records is None:
            self._records = self._load_records()
            logger.info(f"Loaded {len(self._records)} scans from {self.name}")
        return self._records

    @property
    def name(self) -> str:
        """Display name for log messages."""
        if self.path is not None:
            return self.path.name
        return self.__class__.__name__

    @property
    def scan_numbers(self) -> List[int]:
        """Sorted scan numbers."""
        return sorted(self.records)

    @property
    def scan_start(self) -> int:
        """First scan number, or 0 for an empty source."""
        numbers = self.scan_numbers
        return numbers[0] if numbers else 0

    @property
    def scan_end(self) -> int:
        """Last scan number, or 0 for an empty source."""
        numbers = self.scan_numbers
        return numbers[-1] if numbers else 0

    def num_scans(self) -> int:
        """Number of scans in the source."""
        return len(self.records)

    def read_scan(self, scan_number: int) -> Optional[RawScanRecord]:
        """
        Return the record for scan_number.

        Args:
            scan_number: Scan number

        Returns:
            RawScanRecord, or None if the source has no such scan
        """
        return self.records.get(scan_number)

    def iter_records(self) -> Iterator[RawScanRecord]:
        """Yield records in scan number order."""
        for scan_number in self.scan_numbers:
            yield self.records[scan_number]

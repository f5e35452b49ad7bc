"""
ScanInfoReader - Turn per-scan filter text into cached ScanInfo records.
"""

import logging
import threading
from typing import Iterator, List, Optional, Set

from thermo_filter.config import DEFAULT_SCAN_INFO_CACHE_SIZE
from thermo_filter.parser.classifier import determine_mrm_scan_type, validate_ms_scan
from thermo_filter.parser.extractors import (
    determine_ionization_mode,
    extract_mrm_masses,
    extract_ms_level,
    extract_parent_ion_mz,
)
from thermo_filter.scan.cache import ScanInfoCache
from thermo_filter.scan.models import (
    ActivationType,
    MRMScanType,
    ScanInfo,
    ScanInfoResult,
)
from thermo_filter.source.base import RawScanRecord, RawScanSource

logger = logging.getLogger(__name__)

# Trailer event names start with this, e.g. "Scan Event:"
SCAN_EVENT_PREFIX = "scan event"


class ScanInfoReader:
    """
    Reads scan metadata from a raw scan source.

    Workflow for each scan lookup:
    1. Return the cached ScanInfo if present
    2. Clamp the scan number to the source's scan range
    3. Classify the filter text (parent ion path for dependent scans,
       MS1 / MRM validation otherwise)
    4. Fill in polarity, activation type and MRM mass ranges
    5. Copy scan statistics through and cache the record

    Cache access is serialized with a lock, so one reader can be shared
    by worker threads.
    """

    def __init__(
        self,
        source: RawScanSource,
        scan_info_cache_max_size: int = DEFAULT_SCAN_INFO_CACHE_SIZE,
    ):
        """
        Initialize the reader.

        Args:
            source: Provider of per-scan filter text and statistics
            scan_info_cache_max_size: Maximum number of cached scans; 0 disables caching
        """
        self.source = source
        self.cache = ScanInfoCache(scan_info_cache_max_size)
        self.unrecognized_filters: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def scan_info_cache_max_size(self) -> int:
        """Maximum number of cached scans."""
        return self.cache.max_size

    @scan_info_cache_max_size.setter
    def scan_info_cache_max_size(self, value: int) -> None:
        with self._lock:
            self.cache.max_size = value

    def get_num_scans(self) -> int:
        """Number of scans in the source."""
        return self.source.num_scans()

    def get_scan_info(self, scan: int) -> ScanInfoResult:
        """
        Get the metadata for a scan.

        Args:
            scan: Scan number; clamped to the source's scan range on a cache miss

        Returns:
            ScanInfoResult; unsuccessful when the scan does not exist or its
            filter text is not recognized
        """
        with self._lock:
            cached = self.cache.get(scan)
        if cached is not None:
            return ScanInfoResult(success=True, scan_info=cached, filter_text=cached.filter_text)

        scan = self._clamp_scan_number(scan)
        record = self.source.read_scan(scan)
        if record is None:
            return ScanInfoResult(
                success=False,
                error_message=f"Scan {scan} not found in {self.source.name}",
            )

        scan_info = ScanInfo(scan_number=scan, filter_text=record.filter_text)
        scan_info.scan_events = list(record.trailer)

        if not self._classify(scan_info):
            return self._unrecognized(scan_info.filter_text)

        filter_text = scan_info.filter_text
        scan_info.ion_mode = determine_ionization_mode(filter_text)

        if scan_info.ms_level == 1:
            scan_info.activation_type = ActivationType.CID
        else:
            scan_info.activation_type = ActivationType.from_collision_mode(scan_info.collision_mode)

        if scan_info.mrm_scan_type != MRMScanType.NOT_MRM:
            scan_info.mrm_info = extract_mrm_masses(filter_text, scan_info.mrm_scan_type)

        self._copy_record(record, scan_info)

        with self._lock:
            self.cache.put(scan, scan_info)

        return ScanInfoResult(success=True, scan_info=scan_info, filter_text=filter_text)

    def iter_scan_info(self) -> Iterator[ScanInfoResult]:
        """Yield get_scan_info results for every scan in the source."""
        for scan_number in self.source.scan_numbers:
            yield self.get_scan_info(scan_number)

    def get_collision_energy(self, scan: int) -> List[float]:
        """
        Collision energies of every parent ion in a scan's filter.

        Secondary energies follow their primary energy when non-zero.

        Args:
            scan: Scan number

        Returns:
            List of energies; empty for MS1 scans and unknown scans
        """
        record = self.source.read_scan(self._clamp_scan_number(scan))
        if record is None or not record.filter_text:
            return []

        parent_ion = extract_parent_ion_mz(record.filter_text)
        if not parent_ion.success:
            return []

        energies: List[float] = []
        for ion in parent_ion.parent_ions:
            energies.append(ion.collision_energy)
            if ion.collision_energy2 > 0:
                energies.append(ion.collision_energy2)
        return energies

    def get_ms_level(self, scan: int) -> int:
        """MS level of a scan, or 0 if it cannot be determined."""
        result = self.get_scan_info(scan)
        if not result.success:
            return 0
        return result.scan_info.ms_level

    def get_retention_time(self, scan: int) -> float:
        """Retention time (minutes) of a scan, or 0.0 if it cannot be determined."""
        result = self.get_scan_info(scan)
        if not result.success:
            return 0.0
        return result.scan_info.retention_time

    def _clamp_scan_number(self, scan: int) -> int:
        if self.source.num_scans() == 0:
            return scan
        if scan < self.source.scan_start:
            return self.source.scan_start
        if scan > self.source.scan_end:
            return self.source.scan_end
        return scan

    def _event_number(self, scan_info: ScanInfo) -> int:
        event_number = 1
        found, value = scan_info.try_get_scan_event(SCAN_EVENT_PREFIX, partial_match_to_start=True)
        if found:
            try:
                event_number = int(value.strip())
            except ValueError:
                logger.debug(f"Ignoring non-numeric scan event '{value}' for scan {scan_info.scan_number}")

        if event_number <= 1:
            level = extract_ms_level(scan_info.filter_text)
            if level.success:
                event_number = level.ms_level

        return event_number

    def _classify(self, scan_info: ScanInfo) -> bool:
        """Populate level, parent ion and scan category; False if unrecognized."""
        filter_text = scan_info.filter_text
        scan_info.event_number = self._event_number(scan_info)

        if scan_info.event_number > 1:
            if not filter_text:
                # No filter to go on; assume a CID MS2 scan
                scan_info.ms_level = 2
                scan_info.parent_ion_mz = 0.0
                scan_info.collision_mode = "CID"
                return True

            parent_ion = extract_parent_ion_mz(filter_text)
            if parent_ion.success:
                scan_info.ms_level = max(parent_ion.ms_level, 2)
                scan_info.parent_ion_mz = parent_ion.parent_ion_mz
                scan_info.collision_mode = parent_ion.collision_mode
                scan_info.mrm_scan_type = determine_mrm_scan_type(filter_text)
                return True

            # Dependent scans can still be SIM, zoom or MRM scans
            return self._apply_validation(scan_info)

        if not filter_text:
            scan_info.ms_level = 1
            return True

        return self._apply_validation(scan_info)

    @staticmethod
    def _apply_validation(scan_info: ScanInfo) -> bool:
        validation = validate_ms_scan(scan_info.filter_text)
        if not validation.valid:
            return False

        scan_info.ms_level = validation.ms_level
        scan_info.sim_scan = validation.sim_scan
        scan_info.zoom_scan = validation.zoom_scan
        scan_info.mrm_scan_type = validation.mrm_scan_type
        scan_info.parent_ion_mz = 0.0
        return True

    def _unrecognized(self, filter_text: str) -> ScanInfoResult:
        error_message = f"Unknown format for Scan Filter: {filter_text}"

        with self._lock:
            first_time = filter_text not in self.unrecognized_filters
            self.unrecognized_filters.add(filter_text)

        if first_time:
            logger.error(error_message)
        else:
            logger.debug(error_message)

        return ScanInfoResult(success=False, filter_text=filter_text, error_message=error_message)

    @staticmethod
    def _copy_record(record: RawScanRecord, scan_info: ScanInfo) -> None:
        stats = record.stats
        scan_info.num_peaks = stats.num_peaks
        scan_info.retention_time = stats.retention_time
        scan_info.low_mass = stats.low_mass
        scan_info.high_mass = stats.high_mass
        scan_info.total_ion_current = stats.total_ion_current
        scan_info.base_peak_mz = stats.base_peak_mz
        scan_info.base_peak_intensity = stats.base_peak_intensity
        scan_info.num_channels = stats.num_channels
        scan_info.uniform_time = stats.uniform_time
        scan_info.frequency = stats.frequency
        scan_info.is_centroided = stats.is_centroided
        scan_info.is_ftms = record.is_ftms
        scan_info.status_log = list(record.status_log)


def open_reader(
    path,
    scan_info_cache_max_size: Optional[int] = None,
    source_type: Optional[str] = None,
) -> ScanInfoReader:
    """
    Create a reader for a file, choosing the source type from its name.

    Args:
        path: _ScanStatsEx.txt, .mzML or .mzML.gz file
        scan_info_cache_max_size: Cache capacity (default from config)
        source_type: Override the detected source type

    Returns:
        ScanInfoReader
    """
    from thermo_filter.source_factory import create_source

    if scan_info_cache_max_size is None:
        scan_info_cache_max_size = DEFAULT_SCAN_INFO_CACHE_SIZE
    return ScanInfoReader(create_source(path, source_type), scan_info_cache_max_size)

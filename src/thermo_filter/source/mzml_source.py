"""
MzMLScanSource - Read scan filters from mzML files converted from .raw.

Thermo conversions (msconvert, ThermoRawFileParser) keep the filter text
as the ``filter string`` cvParam of each scan.  Scan statistics come from
the spectrum cvParams, falling back to the peak arrays when absent.
"""

import gzip
import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
from pyteomics import mzml

from thermo_filter.source.base import (
    RawScanRecord,
    RawScanSource,
    ScanStats,
    filter_is_ftms,
)

logger = logging.getLogger(__name__)

SCAN_ID_PATTERN = re.compile(r"scan=(\d+)")

# Scan cvParam holding the scan event number in msconvert output
PRESET_SCAN_CONFIGURATION = "preset scan configuration"


def _first_scan(spectrum: Dict[str, Any]) -> Dict[str, Any]:
    scans = spectrum.get("scanList", {}).get("scan", [])
    return scans[0] if scans else {}


def _scan_number(spectrum: Dict[str, Any]) -> int:
    match = SCAN_ID_PATTERN.search(str(spectrum.get("id", "")))
    if match:
        return int(match.group(1))
    return int(spectrum.get("index", 0)) + 1


def _optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def spectrum_stats(spectrum: Dict[str, Any]) -> ScanStats:
    """
    Scan statistics for one pyteomics spectrum dict.

    Args:
        spectrum: Spectrum as yielded by pyteomics.mzml.read

    Returns:
        ScanStats
    """
    scan = _first_scan(spectrum)
    mz_array = np.asarray(spectrum.get("m/z array", []), dtype=float)
    intensity_array = np.asarray(spectrum.get("intensity array", []), dtype=float)

    low_mass = _optional_float(spectrum.get("lowest observed m/z"))
    high_mass = _optional_float(spectrum.get("highest observed m/z"))
    tic = _optional_float(spectrum.get("total ion current"))
    base_peak_mz = _optional_float(spectrum.get("base peak m/z"))
    base_peak_intensity = _optional_float(spectrum.get("base peak intensity"))

    if mz_array.size and intensity_array.size == mz_array.size:
        if low_mass is None:
            low_mass = float(np.min(mz_array))
        if high_mass is None:
            high_mass = float(np.max(mz_array))
        if tic is None:
            tic = float(np.sum(intensity_array))
        if base_peak_mz is None or base_peak_intensity is None:
            apex = int(np.argmax(intensity_array))
            base_peak_mz = float(mz_array[apex])
            base_peak_intensity = float(intensity_array[apex])

    num_peaks = spectrum.get("defaultArrayLength")
    if num_peaks is None:
        num_peaks = int(mz_array.size) if mz_array.size else -1

    return ScanStats(
        num_peaks=int(num_peaks),
        retention_time=_optional_float(scan.get("scan start time")) or 0.0,
        low_mass=low_mass or 0.0,
        high_mass=high_mass or 0.0,
        total_ion_current=tic or 0.0,
        base_peak_mz=base_peak_mz or 0.0,
        base_peak_intensity=base_peak_intensity or 0.0,
        is_centroided="centroid spectrum" in spectrum,
    )


class MzMLScanSource(RawScanSource):
    """Scan source backed by an mzML (optionally gzipped) file."""

    def __init__(self, mzml_path: Path):
        """
        Initialize the source.

        Args:
            mzml_path: Path to .mzML or .mzML.gz file

        Raises:
            FileNotFoundError: If the file does not exist
        """
        mzml_path = Path(mzml_path)
        if not mzml_path.exists():
            raise FileNotFoundError(f"mzML file not found: {mzml_path}")
        super().__init__(mzml_path)

    def _load_records(self) -> Dict[int, RawScanRecord]:
        if self.path.suffix.lower() == ".gz":
            with gzip.open(self.path, "rb") as handle:
                return self._read_spectra(handle)
        return self._read_spectra(str(self.path))

    def _read_spectra(self, source) -> Dict[int, RawScanRecord]:
        records: Dict[int, RawScanRecord] = {}
        without_filter = 0

        with mzml.read(source) as reader:
            for spectrum in reader:
                scan = _first_scan(spectrum)
                filter_text = scan.get("filter string") or spectrum.get("filter string") or ""
                if not filter_text:
                    without_filter += 1

                trailer = []
                scan_event = scan.get(PRESET_SCAN_CONFIGURATION)
                if scan_event is not None:
                    trailer.append(("Scan Event:", str(int(float(scan_event)))))

                scan_number = _scan_number(spectrum)
                records[scan_number] = RawScanRecord(
                    scan_number=scan_number,
                    filter_text=str(filter_text).strip(),
                    stats=spectrum_stats(spectrum),
                    trailer=trailer,
                    is_ftms=filter_is_ftms(str(filter_text)),
                )

        if without_filter:
            logger.warning(
                f"{without_filter} spectra in {self.name} have no filter string; "
                f"was the file converted from a Thermo .raw file?"
            )

        return records

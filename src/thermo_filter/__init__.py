"""
Thermo Filter Tools - Parse Thermo scan filter strings into scan metadata.

Classifies filter text by MS level and scan category, extracts parent ions
with their activation chain, builds generic filter signatures, and keeps a
bounded cache of per-scan metadata read from converted instrument files.
"""

__version__ = "1.0.0"
__author__ = "PRIDE Team"

from thermo_filter.core.reader import ScanInfoReader
from thermo_filter.parser import (
    determine_ionization_mode,
    determine_mrm_scan_type,
    extract_mrm_masses,
    extract_ms_level,
    extract_parent_ion_mz,
    get_scan_type_name,
    make_generic_scan_filter,
    validate_ms_scan,
)

__all__ = [
    "ScanInfoReader",
    "determine_ionization_mode",
    "determine_mrm_scan_type",
    "extract_mrm_masses",
    "extract_ms_level",
    "extract_parent_ion_mz",
    "get_scan_type_name",
    "make_generic_scan_filter",
    "validate_ms_scan",
    "__version__",
]

"""Thermo filter text parsing."""

from thermo_filter.parser.classifier import determine_mrm_scan_type, validate_ms_scan
from thermo_filter.parser.extractors import (
    determine_ionization_mode,
    extract_mrm_masses,
    extract_ms_level,
    extract_parent_ion_mz,
    extract_parent_ion_mz_only,
)
from thermo_filter.parser.naming import (
    capitalize_collision_mode,
    get_scan_type_name,
    make_generic_scan_filter,
    scan_is_ftms,
)

__all__ = [
    "capitalize_collision_mode",
    "determine_ionization_mode",
    "determine_mrm_scan_type",
    "extract_mrm_masses",
    "extract_ms_level",
    "extract_parent_ion_mz",
    "extract_parent_ion_mz_only",
    "get_scan_type_name",
    "make_generic_scan_filter",
    "scan_is_ftms",
    "validate_ms_scan",
]

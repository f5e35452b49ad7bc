"""
Generic filters and scan type names.

The generic filter strips scan-specific numbers from filter text so scans
acquired with the same method group together.  The scan type name is a
short label such as "HCD-HMSn" or "CID-SRM".
"""

from thermo_filter.config import (
    FTMS_TEXT,
    MRM_FULL_NL_TEXT,
    MRM_Q1MS_TEXT,
    MRM_Q3MS_TEXT,
    SIM_MS_TEXT,
)
from thermo_filter.parser.classifier import (
    contains_text,
    determine_mrm_scan_type,
    validate_ms_scan,
)
from thermo_filter.parser.extractors import extract_ms_level, extract_parent_ion_mz
from thermo_filter.parser.patterns import (
    COLLISION_SPEC_PATTERN,
    MZ_WITHOUT_COLLISION_ENERGY_PATTERN,
)
from thermo_filter.scan.models import MRMScanType


def capitalize_collision_mode(collision_mode: str) -> str:
    """Upper-case a collision mode, keeping the mixed case of EThcD and ETciD."""
    if collision_mode.lower() == "ethcd":
        return "EThcD"
    if collision_mode.lower() == "etcid":
        return "ETciD"
    return collision_mode.upper()


def scan_is_ftms(filter_text: str) -> bool:
    """True for filters acquired with a high resolution (FT) analyzer."""
    return contains_text(filter_text, FTMS_TEXT)


def make_generic_scan_filter(filter_text: str) -> str:
    """
    Remove scan-specific values from filter text.

    Examples::

        FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]   ->  FTMS + c NSI d Full ms2 0@hcd40.00
        + c d Full ms3 1312.95@45.00 873.85@45.00 [ 350.00-2000.00] ->  + c d Full ms3 0@45.00 0@45.00
        + c NSI Full ms2 1083.000 [300.000-1500.00]                 ->  + c NSI Full ms2
        c NSI Full cnl 162.053 [300.000-1200.000]                   ->  c NSI Full cnl

    Applying this twice gives the same result as applying it once.

    Args:
        filter_text: Thermo filter text

    Returns:
        Generic filter text; "MS" for empty input
    """
    if not filter_text or not filter_text.strip():
        return "MS"

    bracket_index = filter_text.find("[")
    if bracket_index > 0:
        generic = filter_text[:bracket_index].rstrip(" ")
    else:
        generic = filter_text.rstrip(" ")

    full_cnl_index = generic.lower().find(MRM_FULL_NL_TEXT.lower())
    if full_cnl_index > 0:
        return generic[: full_cnl_index + len(MRM_FULL_NL_TEXT)].strip()

    if generic.find("@") > 0:
        return COLLISION_SPEC_PATTERN.sub(" 0@", generic)

    match = MZ_WITHOUT_COLLISION_ENERGY_PATTERN.search(generic)
    if match:
        return generic[: match.start("mz")]

    return generic


def get_scan_type_name(filter_text: str) -> str:
    """
    Build a short scan type label from filter text.

    Given                                                          Name
    ITMS + c ESI Full ms [300.00-2000.00]                          MS
    FTMS + p NSI Full ms [400.00-2000.00]                          HMS
    ITMS + p ESI d Z ms [579.00-589.00]                            Zoom-MS
    ITMS + c ESI d Full ms2 583.26@cid35.00 [150.00-1180.00]       CID-MSn
    FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]       HCD-HMSn
    ITMS + c NSI d sa Full ms2 516.03@etd100.00 [50.00-2000.00]    SA_ETD-MSn
    + c d Full ms2 1312.95@45.00 [ 350.00-2000.00]                 MSn
    + c NSI SRM ms2 501.560@cid15.00 [507.259-507.261]             CID-SRM
    + p NSI Q1MS [179.652-184.582, 505.778-510.708]                Q1MS
    c NSI Full cnl 162.053 [300.000-1200.000]                      MRM_Full_NL

    Args:
        filter_text: Thermo filter text

    Returns:
        Scan type name; "MS" for empty or unrecognized filters
    """
    if not filter_text or not filter_text.strip():
        return "MS"

    collision_mode = ""
    sim_scan = False
    zoom_scan = False

    level = extract_ms_level(filter_text)
    ms_level = level.ms_level if level.success else 1

    parent_ion = extract_parent_ion_mz(filter_text) if ms_level > 1 else None

    if parent_ion is not None and parent_ion.success:
        ms_level = parent_ion.ms_level
        collision_mode = parent_ion.collision_mode
        mrm_scan_type = determine_mrm_scan_type(filter_text)
    else:
        # Also covers scans labelled MSn that are really MS1, SIM or MRM
        validation = validate_ms_scan(filter_text)
        if not validation.valid:
            return "MS"
        ms_level = validation.ms_level
        sim_scan = validation.sim_scan
        zoom_scan = validation.zoom_scan
        mrm_scan_type = validation.mrm_scan_type

    if mrm_scan_type in (MRMScanType.NOT_MRM, MRMScanType.SIM):
        if sim_scan:
            return SIM_MS_TEXT.strip()
        if zoom_scan:
            return "Zoom-MS"

        scan_type_name = "MSn" if ms_level > 1 else "MS"
        if scan_is_ftms(filter_text):
            scan_type_name = "H" + scan_type_name
        if ms_level > 1 and collision_mode:
            scan_type_name = capitalize_collision_mode(collision_mode) + "-" + scan_type_name
        return scan_type_name

    if mrm_scan_type == MRMScanType.MRM_QMS:
        if contains_text(filter_text, MRM_Q1MS_TEXT, 1):
            return MRM_Q1MS_TEXT.strip()
        if contains_text(filter_text, MRM_Q3MS_TEXT, 1):
            return MRM_Q3MS_TEXT.strip()
        return "MRM QMS"

    if mrm_scan_type == MRMScanType.SRM:
        if collision_mode:
            return collision_mode.upper() + "-SRM"
        return "CID-SRM"

    if mrm_scan_type == MRMScanType.FULL_NL:
        return "MRM_Full_NL"

    return "MRM"

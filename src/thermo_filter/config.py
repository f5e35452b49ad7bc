"""
Configuration constants and defaults for Thermo Filter Tools.

Filter text catalog
~~~~~~~~~~~~~~~~~~~
Thermo filter strings look like::

    FTMS + p NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]
    ITMS + c NSI r d sa Full ms2 1073.4800@etd120.55@cid20.00 [120.0000-2000.0000]
    + c NSI SRM ms2 501.560@cid15.00 [507.259-507.261, 635.319-635.32]

Most tags below end in a space on purpose.  Containment checks append a
space to the searched text, so a trailing-space tag only matches a whole
token and never a prefix of a longer one.
"""

from typing import Dict, List

# =============================================================================
# MS1 / zoom scan tags
# =============================================================================

MS_ONLY_C_TEXT = " c ms "
MS_ONLY_P_TEXT = " p ms "
MS_ONLY_P_NSI_TEXT = " p NSI ms "
MS_ONLY_PZ_TEXT = " p Z ms "  # Likely a zoom scan
MS_ONLY_DZ_TEXT = " d Z ms "  # Dependent zoom scan
MS_ONLY_DZ_MS2_TEXT = " d Z ms2 "  # Dependent MS2 zoom scan, reported as MS1
MS_ONLY_Z_TEXT = " NSI Z ms "  # Likely a zoom scan

FULL_MS_TEXT = "Full ms "
FULL_PR_TEXT = "Full pr "  # TSQ: Full parent scan, product mass
FULL_LOCK_MS_TEXT = "Full lock ms "  # Lock mass scan
SIM_MS_TEXT = "SIM ms "

MS1_TAGS: List[str] = [
    FULL_MS_TEXT,
    MS_ONLY_C_TEXT,
    MS_ONLY_P_TEXT,
    MS_ONLY_P_NSI_TEXT,
    FULL_PR_TEXT,
    FULL_LOCK_MS_TEXT,
]

ZOOM_TAGS: List[str] = [
    MS_ONLY_Z_TEXT,
    MS_ONLY_PZ_TEXT,
    MS_ONLY_DZ_TEXT,
]

# =============================================================================
# MRM tags
# =============================================================================

MRM_Q1MS_TEXT = "Q1MS "
MRM_Q3MS_TEXT = "Q3MS "
MRM_SRM_TEXT = "SRM ms2"
MRM_FULL_NL_TEXT = "Full cnl "  # MRM neutral loss; cnl starts with a c
MRM_SIM_PR_TEXT = "SIM pr "  # TSQ: fragmented parent, multiple product ranges; tracked as SRM
MRM_SIM_MSX_TEXT = "SIM msx "  # Q Exactive Plus: multiplexed SIM, tracked as SIM

MRM_QMS_TAGS: List[str] = [MRM_Q1MS_TEXT, MRM_Q3MS_TEXT]

# =============================================================================
# Activation tags
# =============================================================================

SA_TEXT = " sa Full ms"  # Supplemental activation
MSX_TEXT = " Full msx "  # Multiplexed parent ion selection (Q Exactive)
FTMS_TEXT = "FTMS"

# =============================================================================
# Regular expressions (compiled in thermo_filter.parser.patterns)
# =============================================================================

# Matches Full ms2 ... Full ms99, p ms2, SRM ms2, CRM ms3, Full msx ms2,
# Full lock ms2 (Q Exactive HF) and Z ms3 (dependent zoom MSn)
MS_LEVEL_REGEX = r"(?P<mode> p|Full|SRM|CRM|Full msx|Full lock|Z) ms(?P<level>[2-9]|[1-9][0-9]) "

ION_MODE_REGEX = r"[+-]"

MASS_LIST_REGEX = r"\[[0-9.]+-[0-9.]+.*\]"

MASS_RANGES_REGEX = r"(?P<start>[0-9.]+)-(?P<end>[0-9.]+)"

# Matches 1312.95@45.00, 756.98@cid35.00 and 902.5721@etd120.55@cid20.00
PARENT_ION_REGEX = (
    r"(?P<mz>[0-9.]+)@(?P<mode1>[a-z]*)(?P<energy1>[0-9.]+)"
    r"(?:@(?P<mode2>[a-z]+)(?P<energy2>[0-9.]+))?"
)

# Last parent ion m/z of a non-multiplexed filter
PARENT_ION_ONLY_NON_MSX_REGEX = (
    r"[Mm][Ss]\d*[^\[\r\n]* (?P<mz>[0-9.]+)@?[A-Za-z]*\d*\.?\d*(\[[^\]\r\n]\])?"
)

# First (most intense) parent ion m/z of a multiplexed filter
PARENT_ION_ONLY_MSX_REGEX = (
    r"[Mm][Ss]\d* (?P<mz>[0-9.]+)@?[A-Za-z]*\d*\.?\d*[^\[\r\n]*(\[[^\]\r\n]+\])?"
)

COLLISION_SPEC_REGEX = r"(?P<mz> [0-9.]+)@"

MZ_WITHOUT_COLLISION_ENERGY_REGEX = r"ms[2-9](?P<mz> [0-9.]+)$"

# =============================================================================
# Activation types
# =============================================================================

# Lower-cased collision mode (sa_ prefix removed) -> ActivationType member name
COLLISION_MODE_ACTIVATION: Dict[str, str] = {
    "cid": "CID",
    "mpd": "MPD",
    "ecd": "ECD",
    "pqd": "PQD",
    "etd": "ETD",
    "hcd": "HCD",
    "sa": "SA",
    "ptr": "PTR",
    "netd": "NETD",
    "nptr": "NPTR",
    "etcid": "ETD",
    "ethcd": "ETD",
}

# Chained activations folded into a single label
CHAINED_ACTIVATION_LABELS: Dict[str, str] = {
    "cid": "ETciD",
    "hcd": "EThcD",
}

# =============================================================================
# Scan info cache
# =============================================================================

# Maximum number of scans whose metadata is cached; 0 disables caching
DEFAULT_SCAN_INFO_CACHE_SIZE = 50000

# =============================================================================
# Scan sources
# =============================================================================

SUPPORTED_SOURCE_TYPES = ["scanstats", "mzml"]

SCAN_STATS_EX_SUFFIX = "_ScanStatsEx.txt"
SCAN_STATS_SUFFIX = "_ScanStats.txt"

# MASIC _ScanStatsEx.txt columns
SCAN_STATS_EX_COLUMNS: Dict[str, str] = {
    "dataset": "Dataset",
    "scan_number": "ScanNumber",
    "filter_text": "Scan Filter Text",
}

# MASIC _ScanStats.txt columns copied into scan statistics
SCAN_STATS_COLUMNS: Dict[str, str] = {
    "scan_number": "ScanNumber",
    "retention_time": "ScanTime",
    "total_ion_current": "TotalIonIntensity",
    "base_peak_intensity": "BasePeakIntensity",
    "base_peak_mz": "BasePeakMZ",
    "num_peaks": "IonCount",
}

# =============================================================================
# Filter summary report
# =============================================================================

FILTER_SUMMARY_FILENAME = "ScanFiltersFound.txt"

FILTER_SUMMARY_COLUMNS = ["Generic_Filter", "Example_Filter", "Count", "First_Dataset"]

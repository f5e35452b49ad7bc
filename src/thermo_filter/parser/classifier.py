"""
Scan category classification.

Decides from filter text alone whether a scan is a plain MS1, SIM or zoom
scan, or one of the MRM variants.  The rules are ordered and the first
match wins.
"""

from typing import Iterable

from thermo_filter.config import (
    MRM_FULL_NL_TEXT,
    MRM_QMS_TAGS,
    MRM_SIM_MSX_TEXT,
    MRM_SIM_PR_TEXT,
    MRM_SRM_TEXT,
    MS1_TAGS,
    MS_ONLY_DZ_MS2_TEXT,
    SIM_MS_TEXT,
    ZOOM_TAGS,
)
from thermo_filter.parser.extractors import extract_ms_level
from thermo_filter.scan.models import MRMScanType, ScanValidation


def contains_text(text: str, tag: str, start: int = 0) -> bool:
    """
    Case-insensitive containment check.

    A space is appended to text first, since most tags end in a space and
    must still match a token at the very end of the string.

    Args:
        text: Filter text to search
        tag: Tag to look for
        start: Smallest accepted index of the first occurrence; 1 rejects
            a tag at the very start of the text

    Returns:
        True if the first occurrence of tag is at or after start
    """
    return (text + " ").lower().find(tag.lower()) >= start


def contains_any(text: str, tags: Iterable[str], start: int = 0) -> bool:
    """True if any of tags is found by contains_text."""
    return any(contains_text(text, tag, start) for tag in tags)


def determine_mrm_scan_type(filter_text: str) -> MRMScanType:
    """
    Determine the MRM scan category of a filter.

    Args:
        filter_text: Thermo filter text

    Returns:
        MRMScanType; NOT_MRM for empty text or when no MRM tag is present
    """
    if not filter_text or not filter_text.strip():
        return MRMScanType.NOT_MRM

    if contains_any(filter_text, MRM_QMS_TAGS, 1):
        return MRMScanType.MRM_QMS
    if contains_text(filter_text, MRM_SRM_TEXT, 1):
        return MRMScanType.SRM
    if contains_text(filter_text, MRM_SIM_PR_TEXT, 1):
        # Not literally SRM, but the data looks the same
        return MRMScanType.SRM
    if contains_text(filter_text, MRM_SIM_MSX_TEXT, 1):
        return MRMScanType.SIM
    if contains_text(filter_text, MRM_FULL_NL_TEXT, 1):
        return MRMScanType.FULL_NL
    if contains_text(filter_text, SIM_MS_TEXT, 1):
        return MRMScanType.SIM

    return MRMScanType.NOT_MRM


def validate_ms_scan(filter_text: str) -> ScanValidation:
    """
    Check that a filter is a supported MS1-family or MRM scan.

    Ordinary MSn filters (level > 1 with no MS1 or MRM tag) are not valid;
    for those the returned level is the one found by extract_ms_level.

    " d Z ms2 " is reported as an MS1 zoom scan even though the scan is
    technically MS2.

    Args:
        filter_text: Thermo filter text

    Returns:
        ScanValidation with level, SIM/zoom flags and MRM category
    """
    if contains_any(filter_text, MS1_TAGS, 1):
        return ScanValidation(valid=True, ms_level=1)

    if contains_any(filter_text, ZOOM_TAGS, 1):
        return ScanValidation(valid=True, ms_level=1, zoom_scan=True)

    if contains_text(filter_text, MS_ONLY_DZ_MS2_TEXT, 1):
        return ScanValidation(valid=True, ms_level=1, zoom_scan=True)

    mrm_scan_type = determine_mrm_scan_type(filter_text)

    if mrm_scan_type in (MRMScanType.SIM, MRMScanType.MRM_QMS):
        return ScanValidation(
            valid=True, ms_level=1, sim_scan=True, mrm_scan_type=mrm_scan_type
        )
    if mrm_scan_type in (MRMScanType.SRM, MRMScanType.FULL_NL):
        return ScanValidation(valid=True, ms_level=2, mrm_scan_type=mrm_scan_type)

    level = extract_ms_level(filter_text)
    return ScanValidation(valid=False, ms_level=level.ms_level, mrm_scan_type=mrm_scan_type)

"""
Filter text extractors.

Pulls the MS level, parent ions and activation chain, MRM mass ranges and
ion polarity out of Thermo filter text.  None of these functions raise for
text that does not match; they report success through their result.
"""

import logging
from typing import List, Optional

from thermo_filter.config import CHAINED_ACTIVATION_LABELS, MSX_TEXT, SA_TEXT
from thermo_filter.parser.patterns import (
    ION_MODE_PATTERN,
    LEADING_NUMBER_PATTERN,
    MASS_LIST_PATTERN,
    MASS_RANGES_PATTERN,
    MS_LEVEL_PATTERN,
    PARENT_ION_ONLY_MSX_PATTERN,
    PARENT_ION_ONLY_NON_MSX_PATTERN,
    PARENT_ION_PATTERN,
)
from thermo_filter.scan.models import (
    ActivationType,
    IonMode,
    MRMInfo,
    MRMMassRange,
    MRMScanType,
    MSLevelResult,
    ParentIonInfo,
    ParentIonResult,
)

logger = logging.getLogger(__name__)

# MRM categories that carry a bracketed mass range list
_MRM_MASS_TYPES = (MRMScanType.SIM, MRMScanType.MRM_QMS, MRMScanType.SRM)


def _parse_float(text: Optional[str]) -> Optional[float]:
    """Parse a number, returning None instead of raising."""
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _truncate_at_bracket(text: str) -> str:
    bracket_index = text.find("[")
    if bracket_index > 0:
        return text[:bracket_index]
    return text


def _contains(text: str, tag: str) -> bool:
    return tag.lower() in text.lower()


def extract_ms_level(filter_text: str) -> MSLevelResult:
    """
    Find the msN token and split the filter around it.

    Looks for "Full ms2", "Full ms3", " p ms2", "SRM ms2", "CRM ms3",
    "Full msx ms2", "Full lock ms2" or " Z ms3".  The token must not
    start at index 0.

    Args:
        filter_text: Thermo filter text

    Returns:
        MSLevelResult with the level and the trimmed text after the token;
        level 1 and an empty remainder when not found
    """
    if not filter_text:
        return MSLevelResult(success=False)

    match = MS_LEVEL_PATTERN.search(filter_text)
    if match is None or match.start() <= 0:
        return MSLevelResult(success=False)

    return MSLevelResult(
        success=True,
        ms_level=int(match.group("level")),
        remainder=filter_text[match.end():].strip(),
    )


def _build_parent_ion(match, ms_level: int, supplemental_activation: bool) -> Optional[ParentIonInfo]:
    parent_mz = _parse_float(match.group("mz"))
    if parent_mz is None:
        logger.debug(f"Skipping parent ion token with unparseable m/z: {match.group(0)}")
        return None

    collision_mode = (match.group("mode1") or "").upper()
    collision_energy = _parse_float(match.group("energy1")) or 0.0

    collision_mode2 = (match.group("mode2") or "").upper()
    collision_energy2 = 0.0
    if collision_mode2:
        collision_energy2 = _parse_float(match.group("energy2")) or 0.0

    allow_secondary_activation = True
    if collision_mode == "ETD" and collision_mode2:
        chained_label = CHAINED_ACTIVATION_LABELS.get(collision_mode2.lower())
        if chained_label:
            collision_mode = chained_label
            allow_secondary_activation = False

    if allow_secondary_activation and collision_mode and supplemental_activation:
        collision_mode = "sa_" + collision_mode

    return ParentIonInfo(
        ms_level=ms_level,
        parent_ion_mz=parent_mz,
        collision_mode=collision_mode,
        collision_mode2=collision_mode2,
        collision_energy=collision_energy,
        collision_energy2=collision_energy2,
        activation_type=ActivationType.from_collision_mode(collision_mode),
    )


def _parse_bare_parent_mz(mz_text: str) -> Optional[float]:
    """
    Fallback for parent ions the main pattern did not match.

    With an "@" present, the number directly before the last "@" is used;
    otherwise the leading run of digits and decimal points.
    """
    at_index = mz_text.rfind("@")
    if at_index > 0:
        candidate = mz_text[:at_index]
        space_index = candidate.rfind(" ")
        if space_index > 0:
            candidate = candidate[space_index + 1:]
        return _parse_float(candidate)

    match = LEADING_NUMBER_PATTERN.match(mz_text)
    if match is None:
        return None
    return _parse_float(match.group(0))


def extract_parent_ion_mz(filter_text: str) -> ParentIonResult:
    """
    Parse the parent ion(s) and collision settings from filter text.

    Handles filters such as::

        + c d Full ms3 1312.95@45.00 873.85@45.00 [ 350.00-2000.00]
        ITMS + c NSI d sa Full ms2 467.16@etd100.00 [50.00-1880.00]
        FTMS + p NSI d Full msx ms2 712.85@hcd28.00 407.92@hcd28.00 [100.00-1475.00]
        ITMS + c NSI r d sa Full ms2 1073.4800@etd120.55@cid20.00 [120.0000-2000.0000]
        + c NSI SRM ms2 748.371 [701.368-701.370, 773.402-773.404]

    ETD followed by CID or HCD is reported as ETciD or EThcD.  Otherwise
    filters with " sa Full ms" get an "sa_" prefix on the collision mode.

    The best parent ion is the last one listed, except for multiplexed
    (" Full msx ") filters where it is the first.

    Args:
        filter_text: Thermo filter text

    Returns:
        ParentIonResult; unsuccessful for MS1 filters and for text with
        no parseable parent ion
    """
    level = extract_ms_level(filter_text)
    if not level.success:
        return ParentIonResult(success=False, ms_level=level.ms_level)

    ms_level = level.ms_level
    supplemental_activation = _contains(filter_text, SA_TEXT)
    multiplexed = _contains(filter_text, MSX_TEXT)

    mz_text = _truncate_at_bracket(level.remainder)

    parent_ions: List[ParentIonInfo] = []
    start = 0
    while True:
        match = PARENT_ION_PATTERN.search(mz_text, start)
        if match is None:
            break
        start = match.end()

        parent_ion = _build_parent_ion(match, ms_level, supplemental_activation)
        if parent_ion is not None:
            parent_ions.append(parent_ion)

        if start >= len(mz_text) - 1:
            break

    if parent_ions:
        best = parent_ions[0] if multiplexed else parent_ions[-1]
        return ParentIonResult(
            success=True,
            ms_level=best.ms_level,
            parent_ion_mz=best.parent_ion_mz,
            collision_mode=best.collision_mode,
            parent_ions=parent_ions,
            best_parent_ion=best,
        )

    parent_mz = _parse_bare_parent_mz(mz_text)
    if parent_mz is None:
        return ParentIonResult(success=False, ms_level=ms_level)

    logger.debug(f"Parent ion {parent_mz} parsed without activation from: {filter_text}")
    mz_only = ParentIonInfo(ms_level=ms_level, parent_ion_mz=parent_mz)
    return ParentIonResult(
        success=True,
        ms_level=ms_level,
        parent_ion_mz=parent_mz,
        parent_ions=[mz_only],
        best_parent_ion=mz_only,
    )


def extract_parent_ion_mz_only(filter_text: str) -> Optional[float]:
    """
    Quick parent ion m/z lookup with a single regular expression.

    For callers that only need the precursor m/z.  Returns the last
    parent ion listed, or the first one for multiplexed (msx) filters.

    Args:
        filter_text: Thermo filter text

    Returns:
        Parent ion m/z, or None when the filter has none
    """
    if not filter_text:
        return None

    if "msx" in filter_text.lower():
        matcher = PARENT_ION_ONLY_MSX_PATTERN
    else:
        matcher = PARENT_ION_ONLY_NON_MSX_PATTERN

    match = matcher.search(filter_text)
    if match is None:
        return None
    return _parse_float(match.group("mz"))


def extract_mrm_masses(filter_text: str, mrm_scan_type: MRMScanType) -> MRMInfo:
    """
    Parse the bracketed mass ranges of a SIM, MRM QMS or SRM filter.

    Examples::

        p NSI SIM ms [330.00-380.00]
        p NSI Q1MS [179.652-184.582, 505.778-510.708, 994.968-999.898]
        c NSI SRM ms2 489.270@cid17.00 [397.209-392.211, 579.289-579.291]

    Neutral loss scans (Full cnl) are not parsed.

    Args:
        filter_text: Thermo filter text
        mrm_scan_type: Category from determine_mrm_scan_type

    Returns:
        MRMInfo; empty for other categories or when no list is present
    """
    mrm_info = MRMInfo()

    if not filter_text or not filter_text.strip():
        return mrm_info

    if mrm_scan_type not in _MRM_MASS_TYPES:
        return mrm_info

    mass_list = MASS_LIST_PATTERN.search(filter_text)
    if mass_list is None:
        return mrm_info

    for match in MASS_RANGES_PATTERN.finditer(mass_list.group(0)):
        start_mass = _parse_float(match.group("start"))
        end_mass = _parse_float(match.group("end"))
        if start_mass is None or end_mass is None:
            mrm_info.skipped_pairs += 1
            continue
        mrm_info.mass_list.append(MRMMassRange(start_mass, end_mass))

    if mrm_info.skipped_pairs:
        logger.debug(f"Skipped {mrm_info.skipped_pairs} mass range(s) in: {filter_text}")

    return mrm_info


def determine_ionization_mode(filter_text: str) -> IonMode:
    """
    Determine the polarity from the first + or - sign.

    Args:
        filter_text: Thermo filter text

    Returns:
        IonMode; UNKNOWN when no sign precedes the mass range list
    """
    if not filter_text or not filter_text.strip():
        return IonMode.UNKNOWN

    match = ION_MODE_PATTERN.search(_truncate_at_bracket(filter_text))
    if match is None:
        return IonMode.UNKNOWN

    if match.group(0) == "+":
        return IonMode.POSITIVE
    return IonMode.NEGATIVE

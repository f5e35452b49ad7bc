"""
Scan metadata data model.

One ScanInfo per scan, any number of ParentIonInfo per filter string, and
the small result structures the parsing functions return instead of
raising for text that does not match.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from thermo_filter.config import COLLISION_MODE_ACTIVATION


class ActivationType(Enum):
    """Fragmentation technique, numbered as the instrument reports it."""

    UNKNOWN = -1
    CID = 0
    MPD = 1
    ECD = 2
    PQD = 3
    ETD = 4
    HCD = 5
    ANY_TYPE = 6
    SA = 7
    PTR = 8
    NETD = 9
    NPTR = 10

    @classmethod
    def from_collision_mode(cls, collision_mode: str) -> "ActivationType":
        """
        Map a collision mode label to an activation type.

        Chained labels (ETciD, EThcD) map to ETD, and a supplemental
        activation prefix is ignored, so "sa_ETD" is ETD as well.

        Args:
            collision_mode: Label as stored on ParentIonInfo

        Returns:
            Matching ActivationType, or UNKNOWN
        """
        if not collision_mode:
            return cls.UNKNOWN

        mode = collision_mode.lower()
        if mode.startswith("sa_"):
            mode = mode[3:]

        member = COLLISION_MODE_ACTIVATION.get(mode)
        if member is None:
            return cls.UNKNOWN
        return cls[member]


class MRMScanType(Enum):
    """Scan category derived from MRM / SIM tags."""

    NOT_MRM = 0
    MRM_QMS = 1
    SRM = 2
    FULL_NL = 3
    SIM = 4


class IonMode(Enum):
    """Scan polarity."""

    UNKNOWN = 0
    POSITIVE = 1
    NEGATIVE = 2


def _format_mz(value: float) -> str:
    # At least one and at most two decimals, e.g. 777.0 or 516.03
    text = f"{value:.2f}".rstrip("0")
    if text.endswith("."):
        text += "0"
    return text


@dataclass
class ParentIonInfo:
    """One activation event (precursor plus collision settings) in a filter."""

    ms_level: int = 1
    parent_ion_mz: float = 0.0
    collision_mode: str = ""
    collision_mode2: str = ""
    collision_energy: float = 0.0
    collision_energy2: float = 0.0
    activation_type: ActivationType = ActivationType.UNKNOWN

    def __str__(self) -> str:
        text = f"ms{self.ms_level} {_format_mz(self.parent_ion_mz)}"
        if not self.collision_mode:
            return text
        return f"{text}@{self.collision_mode}{self.collision_energy:.2f}"


@dataclass(frozen=True)
class MRMMassRange:
    """A start-end mass window; the central mass is always derived."""

    start_mass: float
    end_mass: float
    central_mass: float = field(init=False)

    def __post_init__(self):
        central = self.start_mass + (self.end_mass - self.start_mass) / 2
        object.__setattr__(self, "central_mass", round(central, 6))

    def __str__(self) -> str:
        return f"{self.start_mass:.3f}-{self.end_mass:.3f}"


@dataclass
class MRMInfo:
    """Mass ranges monitored by a SIM, MRM QMS or SRM scan."""

    mass_list: List[MRMMassRange] = field(default_factory=list)
    skipped_pairs: int = 0  # start-end pairs whose masses did not parse


@dataclass
class ScanInfo:
    """Metadata for a single scan, populated from its filter text."""

    scan_number: int
    ms_level: int = 1
    event_number: int = 1
    sim_scan: bool = False
    mrm_scan_type: MRMScanType = MRMScanType.NOT_MRM
    zoom_scan: bool = False
    filter_text: str = ""
    parent_ion_mz: float = 0.0
    collision_mode: str = ""
    activation_type: ActivationType = ActivationType.UNKNOWN
    ion_mode: IonMode = IonMode.UNKNOWN
    mrm_info: MRMInfo = field(default_factory=MRMInfo)
    # Scan statistics, copied through from the source
    num_peaks: int = -1
    retention_time: float = 0.0
    low_mass: float = 0.0
    high_mass: float = 0.0
    total_ion_current: float = 0.0
    base_peak_mz: float = 0.0
    base_peak_intensity: float = 0.0
    num_channels: int = 0
    uniform_time: bool = False
    frequency: float = 0.0
    is_centroided: bool = False
    is_ftms: bool = False
    scan_events: List[Tuple[str, str]] = field(default_factory=list)
    status_log: List[Tuple[str, str]] = field(default_factory=list)
    cache_date_utc: Optional[datetime] = None

    def store_scan_events(self, names: List[str], values: List[str]) -> None:
        """Replace the trailer events with parallel name/value lists."""
        self.scan_events = list(zip(names, values))

    def store_status_log(self, names: List[str], values: List[str]) -> None:
        """Replace the status log with parallel name/value lists."""
        self.status_log = list(zip(names, values))

    def try_get_scan_event(
        self, event_name: str, partial_match_to_start: bool = False
    ) -> Tuple[bool, str]:
        """
        Look up a trailer event value by name.

        Event names nearly always end in a colon, e.g. "Charge State:".

        Args:
            event_name: Event name to find (case-insensitive)
            partial_match_to_start: Match names that start with event_name

        Returns:
            (found, value); value is "" when not found
        """
        wanted = event_name.lower()
        for name, value in self.scan_events:
            if partial_match_to_start:
                if name.lower().startswith(wanted):
                    return True, value
            elif name.lower() == wanted:
                return True, value
        return False, ""

    def __str__(self) -> str:
        if not self.filter_text:
            return f"Scan {self.scan_number}: Generic ScanHeaderInfo"
        return f"Scan {self.scan_number}: {self.filter_text}"


# =============================================================================
# Parse results
# =============================================================================


@dataclass
class MSLevelResult:
    """Result of locating the msN token."""

    success: bool
    ms_level: int = 1
    remainder: str = ""  # text after the msN token, trimmed


@dataclass
class ParentIonResult:
    """Result of parent ion extraction."""

    success: bool
    ms_level: int = 1
    parent_ion_mz: float = 0.0
    collision_mode: str = ""
    parent_ions: List[ParentIonInfo] = field(default_factory=list)
    best_parent_ion: Optional[ParentIonInfo] = None


@dataclass
class ScanValidation:
    """Result of classifying a filter as an MS1-family or MRM scan."""

    valid: bool
    ms_level: int = 1
    sim_scan: bool = False
    mrm_scan_type: MRMScanType = MRMScanType.NOT_MRM
    zoom_scan: bool = False


@dataclass
class ScanInfoResult:
    """Outcome of a scan lookup."""

    success: bool
    scan_info: Optional[ScanInfo] = None
    filter_text: str = ""
    error_message: Optional[str] = None

"""Scan metadata model and cache."""

from thermo_filter.scan.cache import ScanInfoCache
from thermo_filter.scan.models import (
    ActivationType,
    IonMode,
    MRMInfo,
    MRMMassRange,
    MRMScanType,
    ParentIonInfo,
    ScanInfo,
)

__all__ = [
    "ActivationType",
    "IonMode",
    "MRMInfo",
    "MRMMassRange",
    "MRMScanType",
    "ParentIonInfo",
    "ScanInfo",
    "ScanInfoCache",
]

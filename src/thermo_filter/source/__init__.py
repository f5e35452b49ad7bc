"""Raw scan sources: per-scan filter text plus copied-through statistics."""

from thermo_filter.source.base import RawScanRecord, RawScanSource, ScanStats
from thermo_filter.source.memory import MemoryScanSource

__all__ = ["MemoryScanSource", "RawScanRecord", "RawScanSource", "ScanStats"]

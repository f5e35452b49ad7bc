"""Scan metadata reader."""

from thermo_filter.core.reader import ScanInfoReader, open_reader

__all__ = ["ScanInfoReader", "open_reader"]

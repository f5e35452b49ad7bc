"""Filter summary reports."""

from thermo_filter.report.filters import summarize_scan_filters, write_filter_summary

__all__ = ["summarize_scan_filters", "write_filter_summary"]

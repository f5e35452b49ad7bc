"""
Pytest configuration and fixtures for Thermo Filter Tools tests.
"""

import pytest
from pathlib import Path

from thermo_filter.source.base import RawScanRecord, ScanStats
from thermo_filter.source.memory import MemoryScanSource


# Path to test fixtures
FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return path to test fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def scan_stats_ex_path(fixtures_dir):
    """Return path to the sample MASIC _ScanStatsEx.txt file."""
    return fixtures_dir / "Sample_ScanStatsEx.txt"


@pytest.fixture
def sample_filters():
    """Return filter strings covering the common scan categories."""
    return {
        "ms1": "ITMS + c ESI Full ms [300.00-2000.00]",
        "ms1_ftms": "FTMS + p NSI Full ms [400.00-2000.00]",
        "zoom": "ITMS + p ESI d Z ms [579.00-589.00]",
        "cid": "ITMS + c ESI d Full ms2 583.26@cid35.00 [150.00-1180.00]",
        "hcd": "FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]",
        "sa_etd": "ITMS + c NSI d sa Full ms2 516.03@etd100.00 [50.00-2000.00]",
        "etcid": "ITMS + c NSI r d sa Full ms2 1073.4800@etd120.55@cid20.00 [120.0000-2000.0000]",
        "ms3": "+ c d Full ms3 1312.95@45.00 873.85@45.00 [ 350.00-2000.00]",
        "srm": "+ c NSI SRM ms2 501.560@cid15.00 [507.259-507.261, 635.319-635.32]",
        "srm_bare": "+ c NSI SRM ms2 748.371 [701.368-701.370, 773.402-773.404]",
        "q1ms": "+ p NSI Q1MS [179.652-184.582, 505.778-510.708, 994.968-999.898]",
        "sim": "+ p NSI SIM ms [330.00-380.00]",
        "full_nl": "c NSI Full cnl 162.053 [300.000-1200.000]",
    }


@pytest.fixture
def memory_source():
    """Return an in-memory source with MS1, MS2, SRM and unknown scans."""
    return MemoryScanSource([
        RawScanRecord(
            scan_number=10,
            filter_text="FTMS + p NSI Full ms [400.00-2000.00]",
            stats=ScanStats(num_peaks=1523, retention_time=1.25, total_ion_current=1.5e8),
            trailer=[("Charge State:", "0"), ("Scan Event:", "1")],
            status_log=[("Source Voltage (kV):", "2.10")],
            is_ftms=True,
        ),
        RawScanRecord(
            scan_number=11,
            filter_text="FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]",
            stats=ScanStats(num_peaks=212, retention_time=1.27, base_peak_mz=262.139),
            trailer=[("Charge State:", "2"), ("Scan Event:", "2")],
            is_ftms=True,
        ),
        RawScanRecord(
            scan_number=12,
            filter_text="ITMS + c NSI r d sa Full ms2 1073.4800@etd120.55@cid20.00 [120.0000-2000.0000]",
            trailer=[("Scan Event:", "3")],
        ),
        RawScanRecord(
            scan_number=13,
            filter_text="+ c NSI SRM ms2 501.560@cid15.00 [507.259-507.261, 635.319-635.32]",
            trailer=[("Scan Event:", "2")],
        ),
        RawScanRecord(
            scan_number=14,
            filter_text="",
            trailer=[("Scan Event:", "4")],
        ),
        RawScanRecord(
            scan_number=15,
            filter_text="FTMS + p NSI BOGUS [400.00-2000.00]",
            trailer=[("Scan Event:", "1")],
        ),
        RawScanRecord(
            scan_number=16,
            filter_text="FTMS + p NSI BOGUS [400.00-2000.00]",
            trailer=[("Scan Event:", "1")],
        ),
    ])


# Add pytest mark for slow tests
def pytest_addoption(parser):
    """Add custom pytest options."""
    parser.addoption(
        "--runslow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --runslow is specified."""
    if config.getoption("--runslow"):
        return

    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)

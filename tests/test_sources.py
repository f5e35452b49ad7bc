"""
Tests for raw scan sources - MASIC scan stats tables, mzML and in-memory.
"""

import pytest
from unittest import mock

import numpy as np

from thermo_filter.source.memory import MemoryScanSource
from thermo_filter.source.mzml_source import MzMLScanSource, spectrum_stats
from thermo_filter.source.scan_stats import ScanStatsSource, dataset_name_for


class TestScanStatsSource:
    """Tests for ScanStatsSource class."""

    def test_dataset_name(self, scan_stats_ex_path):
        """Test the dataset name from the file name."""
        assert dataset_name_for(scan_stats_ex_path) == "Sample"
        assert ScanStatsSource(scan_stats_ex_path).dataset == "Sample"

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ScanStatsSource(tmp_path / "Missing_ScanStatsEx.txt")

    def test_scan_range(self, scan_stats_ex_path):
        """Test scan numbers and range."""
        source = ScanStatsSource(scan_stats_ex_path)

        assert source.num_scans() == 10
        assert source.scan_start == 1
        assert source.scan_end == 10

    def test_filter_text_and_trailer(self, scan_stats_ex_path):
        """Test the filter text and trailer of an MS2 scan."""
        record = ScanStatsSource(scan_stats_ex_path).read_scan(2)

        assert record.filter_text == "FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]"
        assert record.is_ftms
        assert ("Scan Event", "2") in record.trailer
        assert ("Charge State", "2") in record.trailer
        assert all(name != "Dataset" for name, _ in record.trailer)

    def test_merges_scan_stats(self, scan_stats_ex_path):
        """Test that the sibling _ScanStats.txt values are merged in."""
        record = ScanStatsSource(scan_stats_ex_path).read_scan(2)

        assert record.stats.retention_time == pytest.approx(0.0205)
        assert record.stats.total_ion_current == pytest.approx(2510000)
        assert record.stats.base_peak_mz == pytest.approx(262.139)
        assert record.stats.num_peaks == 212

    def test_without_scan_stats(self, tmp_path):
        """Test an Ex file without a sibling stats file."""
        path = tmp_path / "Solo_ScanStatsEx.txt"
        path.write_text(
            "Dataset\tScanNumber\tScan Event\tScan Filter Text\n"
            "Solo\t1\t1\tFTMS + p NSI Full ms [400.00-2000.00]\n"
        )

        record = ScanStatsSource(path).read_scan(1)

        assert record.stats.num_peaks == -1
        assert record.stats.retention_time == 0.0

    def test_missing_filter_column(self, tmp_path):
        """Test a table without the Scan Filter Text column."""
        path = tmp_path / "NoFilter_ScanStatsEx.txt"
        path.write_text("Dataset\tScanNumber\nNoFilter\t1\n")

        source = ScanStatsSource(path)

        assert source.num_scans() == 0
        assert source.filter_texts() == []

    def test_filter_texts(self, fixtures_dir):
        """Test reading the filter column in file order."""
        filters = ScanStatsSource(fixtures_dir / "Tissue_ScanStatsEx.txt").filter_texts()

        assert len(filters) == 4
        assert filters[0] == "FTMS + p NSI Full ms [350.00-1800.00]"
        assert filters[3] == ""


class TestMemoryScanSource:
    """Tests for MemoryScanSource class."""

    def test_from_filters(self):
        """Test building a source from filter strings."""
        source = MemoryScanSource.from_filters(
            ["FTMS + p NSI Full ms [400.00-2000.00]", "ITMS + c ESI Full ms [300.00-2000.00]"],
            first_scan=100,
        )

        assert source.scan_numbers == [100, 101]
        assert source.read_scan(100).is_ftms
        assert not source.read_scan(101).is_ftms
        assert source.read_scan(5) is None

    def test_empty(self):
        """Test the scan range of an empty source."""
        source = MemoryScanSource([])

        assert source.scan_start == 0
        assert source.scan_end == 0
        assert list(source.iter_records()) == []


def _spectrum(scan_number, filter_text, **extra):
    spectrum = {
        "id": f"controllerType=0 controllerNumber=1 scan={scan_number}",
        "index": scan_number - 1,
        "scanList": {
            "count": 1,
            "scan": [{"filter string": filter_text, "scan start time": 12.5, "preset scan configuration": 2.0}],
        },
        "m/z array": np.array([100.0, 200.0, 300.0]),
        "intensity array": np.array([10.0, 50.0, 20.0]),
    }
    spectrum.update(extra)
    return spectrum


class TestMzMLScanSource:
    """Tests for MzMLScanSource with pyteomics mocked."""

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            MzMLScanSource(tmp_path / "missing.mzML")

    def test_reads_filters_and_stats(self, tmp_path):
        """Test records built from pyteomics spectra."""
        mzml_path = tmp_path / "sample.mzML"
        mzml_path.write_text("<mzML/>")

        spectra = [
            _spectrum(17, "FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]", **{"centroid spectrum": ""}),
            _spectrum(18, "ITMS + c ESI Full ms [300.00-2000.00]", **{"total ion current": 1000.0}),
        ]

        with mock.patch("thermo_filter.source.mzml_source.mzml.read") as mock_read:
            mock_read.return_value.__enter__.return_value = iter(spectra)
            source = MzMLScanSource(mzml_path)
            records = source.records

        assert sorted(records) == [17, 18]

        record = records[17]
        assert record.filter_text == "FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]"
        assert record.is_ftms
        assert record.trailer == [("Scan Event:", "2")]
        assert record.stats.retention_time == pytest.approx(12.5)
        assert record.stats.base_peak_mz == pytest.approx(200.0)
        assert record.stats.base_peak_intensity == pytest.approx(50.0)
        assert record.stats.total_ion_current == pytest.approx(80.0)
        assert record.stats.low_mass == pytest.approx(100.0)
        assert record.stats.high_mass == pytest.approx(300.0)
        assert record.stats.num_peaks == 3
        assert record.stats.is_centroided

        assert not records[18].is_ftms
        assert records[18].stats.total_ion_current == pytest.approx(1000.0)
        assert not records[18].stats.is_centroided

    def test_spectrum_without_filter(self, tmp_path, caplog):
        """Test that spectra without a filter string are kept and reported."""
        mzml_path = tmp_path / "converted.mzML"
        mzml_path.write_text("<mzML/>")

        spectrum = _spectrum(1, "")
        spectrum["id"] = "index=0"
        spectrum["index"] = 0

        with mock.patch("thermo_filter.source.mzml_source.mzml.read") as mock_read:
            mock_read.return_value.__enter__.return_value = iter([spectrum])
            records = MzMLScanSource(mzml_path).records

        assert records[1].filter_text == ""
        assert "no filter string" in caplog.text

    def test_spectrum_stats_without_arrays(self):
        """Test scan statistics from cvParams only."""
        stats = spectrum_stats({
            "defaultArrayLength": 0,
            "base peak m/z": 445.12,
            "base peak intensity": 8150000.0,
            "scanList": {"scan": [{"scan start time": 3.2}]},
        })

        assert stats.num_peaks == 0
        assert stats.base_peak_mz == pytest.approx(445.12)
        assert stats.retention_time == pytest.approx(3.2)
        assert stats.low_mass == 0.0

"""
Tests for the command-line interface.
"""

from click.testing import CliRunner

from thermo_filter import __version__
from thermo_filter.cli import cli


class TestParseCommand:
    """Tests for the parse command."""

    def test_parse_sa_etd(self):
        """Test parsing a supplemental activation ETD filter."""
        runner = CliRunner()
        result = runner.invoke(cli, ["parse", "ITMS + c NSI d sa Full ms2 516.03@etd100.00 [50.00-2000.00]"])

        assert result.exit_code == 0
        assert "SA_ETD-MSn" in result.output
        assert "ms2 516.03@sa_ETD100.00" in result.output
        assert "ITMS + c NSI d sa Full ms2 0@etd100.00" in result.output

    def test_parse_srm_ranges(self):
        """Test that SRM mass ranges are listed."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["parse", "+ c NSI SRM ms2 501.560@cid15.00 [507.259-507.261, 635.319-635.32]"]
        )

        assert result.exit_code == 0
        assert "CID-SRM" in result.output
        assert "507.259-507.261 (center 507.26)" in result.output

    def test_parse_unrecognized(self):
        """Test that unrecognized filters are labelled."""
        runner = CliRunner()
        result = runner.invoke(cli, ["parse", "FTMS + p NSI BOGUS [400.00-2000.00]"])

        assert result.exit_code == 0
        assert "unrecognized" in result.output

    def test_parse_requires_filter(self):
        """Test that at least one filter is required."""
        runner = CliRunner()
        result = runner.invoke(cli, ["parse"])

        assert result.exit_code != 0


class TestScanInfoCommand:
    """Tests for the scan-info command."""

    def test_selected_scans(self, scan_stats_ex_path):
        """Test showing selected scans."""
        runner = CliRunner()
        result = runner.invoke(cli, ["scan-info", str(scan_stats_ex_path), "-s", "2", "-s", "7"])

        assert result.exit_code == 0
        assert "10 scans" in result.output
        assert "Scan 2: ms2 HCD-HMSn parent=516.0300 mode=HCD" in result.output
        assert "Scan 7: ms2 CID-SRM" in result.output

    def test_all_scans_with_unrecognized(self, scan_stats_ex_path):
        """Test that an unrecognized filter gives exit code 1."""
        runner = CliRunner()
        result = runner.invoke(cli, ["scan-info", str(scan_stats_ex_path), "--cache-size", "0"])

        assert result.exit_code == 1
        assert "Unknown format for Scan Filter: FTMS + p NSI BOGUS" in result.output

    def test_explicit_source_type(self, tmp_path, scan_stats_ex_path):
        """Test reading a renamed scan stats file with --source-type."""
        path = tmp_path / "renamed.tsv"
        path.write_text(scan_stats_ex_path.read_text())

        runner = CliRunner()
        result = runner.invoke(cli, ["scan-info", str(path), "-t", "scanstats", "-s", "2"])

        assert result.exit_code == 0
        assert "Scan 2: ms2 HCD-HMSn" in result.output

    def test_unsupported_file(self, tmp_path):
        """Test an unsupported file type."""
        path = tmp_path / "sample.raw"
        path.write_bytes(b"\x00")

        runner = CliRunner()
        result = runner.invoke(cli, ["scan-info", str(path)])

        assert result.exit_code == 1
        assert "Unrecognized scan source" in result.output


class TestSummarizeCommand:
    """Tests for the summarize command."""

    def test_summarize(self, fixtures_dir, tmp_path):
        """Test writing the filter summary."""
        output_path = tmp_path / "ScanFiltersFound.txt"

        runner = CliRunner()
        result = runner.invoke(cli, ["summarize", str(fixtures_dir), "-o", str(output_path)])

        assert result.exit_code == 0
        assert "Found 9 generic filters" in result.output
        assert output_path.exists()

    def test_no_files(self, tmp_path):
        """Test a directory without scan stats files."""
        runner = CliRunner()
        result = runner.invoke(cli, ["summarize", str(tmp_path)])

        assert result.exit_code == 1
        assert "No _ScanStatsEx.txt files found" in result.output


class TestVersion:
    """Tests for the version option."""

    def test_version(self):
        """Test --version output."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

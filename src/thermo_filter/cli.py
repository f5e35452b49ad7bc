#!/usr/bin/env python3
"""
Thermo Filter Tools CLI - Command-line interface for inspecting Thermo
scan filter strings and the scan metadata derived from them.
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from thermo_filter import __version__
from thermo_filter.config import DEFAULT_SCAN_INFO_CACHE_SIZE, SUPPORTED_SOURCE_TYPES
from thermo_filter.utils.logging import get_logger, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="thermo-filter")
def cli():
    """Thermo Filter Tools - Parse Thermo scan filter strings."""
    pass


@cli.command("parse")
@click.argument("filter_texts", nargs=-1, required=True)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)",
)
def parse(filter_texts: Tuple[str, ...], verbose: int):
    """
    Parse one or more filter strings and print what they describe.

    \b
    Examples:
      thermo-filter parse "FTMS + c NSI d Full ms2 516.03@hcd40.00 [100.00-2000.00]"
      thermo-filter parse "+ p NSI Q1MS [179.652-184.582, 505.778-510.708]"
    """
    setup_logging(verbose)

    from thermo_filter.parser import (
        determine_ionization_mode,
        determine_mrm_scan_type,
        extract_mrm_masses,
        extract_parent_ion_mz,
        get_scan_type_name,
        make_generic_scan_filter,
        validate_ms_scan,
    )

    for filter_text in filter_texts:
        click.secho(filter_text, bold=True)

        parent_ion = extract_parent_ion_mz(filter_text)
        if parent_ion.success:
            ms_level = parent_ion.ms_level
            mrm_scan_type = determine_mrm_scan_type(filter_text)
            category = "MSn"
        else:
            validation = validate_ms_scan(filter_text)
            ms_level = validation.ms_level
            mrm_scan_type = validation.mrm_scan_type
            if not validation.valid:
                category = "unrecognized"
            elif validation.zoom_scan:
                category = "zoom"
            elif validation.sim_scan:
                category = "SIM"
            else:
                category = "MS1" if ms_level == 1 else "MS2"

        click.echo(f"  MS level:       {ms_level}")
        click.echo(f"  Category:       {category} ({mrm_scan_type.name})")
        click.echo(f"  Scan type:      {get_scan_type_name(filter_text)}")
        click.echo(f"  Generic filter: {make_generic_scan_filter(filter_text)}")
        click.echo(f"  Ion mode:       {determine_ionization_mode(filter_text).name}")

        if parent_ion.success:
            for ion in parent_ion.parent_ions:
                click.echo(f"  Parent ion:     {ion}")
            click.echo(f"  Collision mode: {parent_ion.collision_mode or '(none)'}")

        mrm_info = extract_mrm_masses(filter_text, mrm_scan_type)
        for mass_range in mrm_info.mass_list:
            click.echo(f"  Mass range:     {mass_range} (center {mass_range.central_mass})")

        click.echo()


@cli.command("scan-info")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--scan",
    "-s",
    "scans",
    multiple=True,
    type=int,
    help="Scan number to show (repeatable; default: all scans)",
)
@click.option(
    "--cache-size",
    default=DEFAULT_SCAN_INFO_CACHE_SIZE,
    type=int,
    help=f"Scan info cache capacity; 0 disables caching (default: {DEFAULT_SCAN_INFO_CACHE_SIZE})",
)
@click.option(
    "--source-type",
    "-t",
    type=click.Choice(SUPPORTED_SOURCE_TYPES, case_sensitive=False),
    default=None,
    help="Source type (default: detected from the file name)",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)",
)
def scan_info(
    path: Path,
    scans: Tuple[int, ...],
    cache_size: int,
    source_type: Optional[str],
    verbose: int,
):
    """
    Show the scan metadata derived from a _ScanStatsEx.txt or mzML file.

    \b
    Examples:
      thermo-filter scan-info Dataset_ScanStatsEx.txt
      thermo-filter scan-info sample.mzML -s 1 -s 2
    """
    setup_logging(verbose)
    logger = get_logger("cli")

    try:
        from thermo_filter.core.reader import open_reader
        from thermo_filter.parser import get_scan_type_name

        reader = open_reader(path, scan_info_cache_max_size=cache_size, source_type=source_type)
        click.echo(f"Source: {path} ({reader.get_num_scans()} scans)")

        if scans:
            results = [reader.get_scan_info(scan) for scan in scans]
        else:
            results = list(reader.iter_scan_info())

        failures = 0
        for result in results:
            if not result.success:
                failures += 1
                click.secho(f"  {result.error_message}", fg="red")
                continue

            info = result.scan_info
            click.echo(
                f"  Scan {info.scan_number}: ms{info.ms_level} "
                f"{get_scan_type_name(info.filter_text)} "
                f"parent={info.parent_ion_mz:.4f} "
                f"mode={info.collision_mode or '-'}"
            )

        logger.info(f"{len(results) - failures} of {len(results)} scans recognized")

        if failures:
            click.secho(f"{failures} scan(s) had unrecognized filters", fg="yellow")
            sys.exit(1)
        sys.exit(0)

    except (ValueError, FileNotFoundError) as e:
        click.secho(f"Error: {str(e)}", fg="red")
        if verbose >= 2:
            import traceback

            traceback.print_exc()
        sys.exit(1)


@cli.command("summarize")
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Output path (default: <directory>/ScanFiltersFound.txt)",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)",
)
def summarize(directory: Path, output: Optional[Path], verbose: int):
    """
    Summarize the scan filters found in MASIC _ScanStatsEx.txt files.

    \b
    Example:
      thermo-filter summarize /data/masic_results -o filters.txt
    """
    setup_logging(verbose)

    from thermo_filter.report.filters import (
        find_scan_stats_files,
        summarize_scan_filters,
        write_filter_summary,
    )

    if not find_scan_stats_files(directory):
        click.secho(f"No _ScanStatsEx.txt files found in {directory}", fg="red")
        sys.exit(1)

    summary = summarize_scan_filters(directory)
    output_path = write_filter_summary(summary, output, directory=directory)

    click.secho(f"Found {len(summary)} generic filters", fg="green")
    click.echo(f"  Scan filters written to: {output_path}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()

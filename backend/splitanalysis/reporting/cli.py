"""
CLI interface for split analysis.

Usage:
    splitanalysis analyze --file results.txt
    splitanalysis analyze --file results.txt --actual --save out/analysis.json
    splitanalysis analyze --url "https://example.org/export.txt" --search "Alice"
"""

import logging
import sys
from pathlib import Path

import click
import httpx

from splitanalysis.config import settings
from splitanalysis.features.winsplits.service import SplitAnalysisService
from splitanalysis.shared.constants import TimeDataType
from splitanalysis.shared.time_codec import FieldFormatError
from .report import ReportGenerator


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else getattr(logging, settings.log_level.upper())
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


@click.group()
@click.option("--debug", is_flag=True, default=settings.debug, help="Verbose logging")
def cli(debug):
    """Split time analysis for WinSplits Online exports."""
    setup_logging(debug)


@cli.command()
@click.option("--file", "file_path", type=click.Path(exists=True, dir_okay=False), help="Exported text file")
@click.option("--url", default=None, help="URL of an exported text file")
@click.option(
    "--actual/--relative",
    "actual",
    default=settings.time_data_type is TimeDataType.ACTUAL,
    help="Times in the export are actual times (default: relative)"
)
@click.option("--save", "save_path", default=None, type=click.Path(dir_okay=False), help="Write JSON to this path")
@click.option("--search", default=None, help="Only show athletes matching name or club")
def analyze(file_path, url, actual, save_path, search):
    """
    Analyze a WinSplits export.

    Prints best times and per-athlete mistake statistics.
    """
    if bool(file_path) == bool(url):
        raise click.UsageError("Give exactly one of --file or --url")

    service = SplitAnalysisService(TimeDataType.ACTUAL if actual else TimeDataType.RELATIVE)

    try:
        if file_path:
            dataset = service.analyze_file(file_path)
        else:
            dataset = service.analyze_url(url)
    except FieldFormatError as e:
        raise click.ClickException(f"Malformed export: {e}")
    except httpx.HTTPError as e:
        raise click.ClickException(f"Download failed: {e}")

    athletes = service.find_athletes(dataset, search) if search else None
    if search and not athletes:
        click.echo(f"No athletes matching {search!r}")

    generator = ReportGenerator()
    click.echo(generator.generate_console(dataset, athletes))

    if save_path:
        generator.save_json(dataset, Path(save_path))
        click.echo(f"JSON saved: {save_path}")


if __name__ == "__main__":
    cli()

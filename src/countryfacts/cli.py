import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from dotenv import load_dotenv

# Load environment variables BEFORE importing local modules that use them
load_dotenv()

from .audit import audit_dataset
from .config.countries import CountryRegistry
from .config.settings import Config, ConfigurationError
from .domain.enums import ExportFormat, IssueSeverity
from .export import dump_countries, to_json, to_yaml
from .types import CountryDataError
from .utils import setup_logging

app = typer.Typer(help="Country dataset: look up, list, audit and export country records")

MALFORMED_LABEL = "<malformed>"


def _load_config() -> Config:
    try:
        return Config()
    except ConfigurationError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(2)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    log_to_file: Annotated[bool, typer.Option("--log-to-file", help="Also write a timestamped log file under logs/")] = False,
):
    """
    Country dataset tools.

    Records are keyed by ISO 3166-1 alpha-2 code. Some records are error
    placeholders left by the process that generated the data; they are shown
    as-is and reported by the audit command.
    """
    config = _load_config()
    log_file = setup_logging(verbose, ctx.invoked_subcommand, log_to_file, level=config.logging.level)
    if log_file:
        typer.echo(f"Logging to: {log_file}", err=True)
    logging.debug(f"Configuration: {config!r}")


@app.command("show")
def show(
    code: Annotated[str, typer.Argument(help="Two-letter country code, e.g. 'FR'")],
    output_format: Annotated[ExportFormat, typer.Option("--format", "-f", help="Output format")] = ExportFormat.JSON,
):
    """
    Print the stored record for a country code.

    Examples:
        countryfacts show fr
        countryfacts show JP --format yaml
    """
    try:
        record = CountryRegistry.get(code)
    except CountryDataError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    if record is None:
        typer.echo(f"ERROR: Unknown country code: {code}", err=True)
        raise typer.Exit(1)

    key = CountryRegistry.normalize_code(code)
    if CountryRegistry.is_error_record(record):
        typer.echo(f"WARNING: record {key} is an error placeholder, not country data", err=True)

    if output_format == ExportFormat.YAML:
        typer.echo(to_yaml(record), nl=False)
    else:
        typer.echo(to_json(record))


@app.command("list")
def list_countries(
    region: Annotated[Optional[str], typer.Option("--region", "-r", help="Only records in this region")] = None,
):
    """
    List country codes with flag and name.

    Examples:
        countryfacts list
        countryfacts list --region Europe
    """
    try:
        countries = CountryRegistry.countries()
    except CountryDataError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    shown = 0
    for code in CountryRegistry.list_codes():
        record = countries[code]
        if CountryRegistry.is_error_record(record):
            if region is None:
                typer.echo(f"{code}  {MALFORMED_LABEL}")
                shown += 1
            continue
        if region is not None and str(record.get("region", "")).lower() != region.lower():
            continue
        flag = record.get("flag") or "  "
        typer.echo(f"{code}  {flag}  {record.get('name', '')}")
        shown += 1

    if region is not None and shown == 0:
        typer.echo(f"No records in region: {region}", err=True)
        raise typer.Exit(1)

    typer.echo(f"\n{shown} records", err=True)


@app.command("regions")
def regions():
    """List the regions used by the dataset with record counts."""
    try:
        counts = CountryRegistry.count_by_region()
        typer.echo("Regions")
        typer.echo("=" * 40)
        for name, count in counts.items():
            typer.echo(f"{name:<30} {count:>5}")
    except CountryDataError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)


@app.command("audit")
def audit(
    strict: Annotated[bool, typer.Option("--strict", help="Exit with status 1 when error-level findings exist")] = False,
    show_info: Annotated[bool, typer.Option("--show-info", help="Also list sentinel (N/A) values")] = False,
):
    """
    Report data-quality findings for the dataset.

    Nothing is changed; findings are meant for dataset maintainers.

    Examples:
        countryfacts audit
        countryfacts audit --strict
    """
    config = _load_config()
    try:
        report = audit_dataset(required_fields=config.dataset.required_fields)
    except CountryDataError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Dataset audit: {CountryRegistry.source()}")
    typer.echo("=" * 60)

    for code, issues in report.by_code().items():
        listed = [i for i in issues if show_info or i.severity != IssueSeverity.INFO]
        if not listed:
            continue
        typer.echo(f"\n{code}")
        for issue in listed:
            typer.echo(f"  [{issue.severity.value.upper()}] {issue.message}")

    summary = report.summary()
    typer.echo("\n" + "=" * 60)
    typer.echo(
        f"Records: {summary['records']}  Errors: {summary['errors']}  "
        f"Warnings: {summary['warnings']}  Sentinels: {summary['info']}"
    )
    if summary['malformed']:
        typer.echo(f"Error placeholders: {', '.join(summary['malformed'])}")

    if strict and not report.ok:
        raise typer.Exit(1)


@app.command("export")
def export_data(
    output_path: Annotated[Path, typer.Argument(help="File to write (.json, .yaml or .yml)")],
    output_format: Annotated[Optional[ExportFormat], typer.Option("--format", "-f", help="Override format inferred from the extension")] = None,
    metadata: Annotated[bool, typer.Option("--metadata", help="Wrap records with a metadata header")] = False,
    region: Annotated[Optional[str], typer.Option("--region", "-r", help="Only export records in this region")] = None,
):
    """
    Write the dataset to a JSON or YAML file.

    Examples:
        countryfacts export countries.json
        countryfacts export europe.yaml --region Europe
    """
    try:
        countries = CountryRegistry.countries()
        if region is not None:
            countries = {
                code: record for code, record in countries.items()
                if not CountryRegistry.is_error_record(record)
                and str(record.get("region", "")).lower() == region.lower()
            }
        written = dump_countries(countries, output_path, output_format, include_metadata=metadata)
    except (CountryDataError, OSError, ValueError, yaml.YAMLError) as e:
        typer.echo(f"ERROR: Export failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Exported {len(countries)} records to {written}")


@app.command("version")
def version():
    """Display version information."""
    from . import __version__
    typer.echo(f"countryfacts version: {__version__}")


if __name__ == "__main__":
    app()

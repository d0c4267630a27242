"""CLI commands for declinefit."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..config import DeclineFitConfig, generate_default_config

app = typer.Typer(
    name="declinefit",
    help="Arps decline curve fitting and production forecasting",
    add_completion=False,
)


def _load_config(config: Path | None) -> DeclineFitConfig:
    """Load config file or defaults, exiting on invalid values."""
    if config is None:
        return DeclineFitConfig()
    typer.echo(f"Loading config from {config}")
    try:
        return DeclineFitConfig.from_yaml(config)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def fit(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Production data file (CSV/TXT or Excel)",
            exists=True,
        )
    ],
    output: Annotated[
        Optional[Path],
        typer.Option(
            "-o", "--output",
            help="Output directory for result and forecast files",
        )
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option(
            "-c", "--config",
            help="YAML config file (use 'declinefit init' to generate template)",
            exists=True,
        )
    ] = None,
    months: Annotated[
        Optional[int],
        typer.Option(
            "-m", "--months",
            help="Forecast horizon in months, e.g. 12, 24 or 60 (overrides config)",
        )
    ] = None,
    economic_limit: Annotated[
        Optional[float],
        typer.Option(
            "--economic-limit",
            help="Stop the forecast below this rate (overrides config)",
        )
    ] = None,
    start_month: Annotated[
        Optional[int],
        typer.Option(
            "--start-month",
            help="Forecast start month (default: last observed month)",
        )
    ] = None,
    export_format: Annotated[
        Optional[str],
        typer.Option(
            "--format",
            help="Export format: csv or json (overrides config)",
        )
    ] = None,
) -> None:
    """Fit decline models to one production file and forecast it.

    Fits exponential and hyperbolic Arps models, selects the preferred one,
    prints a summary and, with --output, writes result and forecast files.

    Example:
        declinefit fit well.csv -m 24 -o results/
    """
    from ..batch.processor import fit_file
    from ..export.csv_export import format_summary

    dfc = _load_config(config)

    # CLI overrides
    if months is not None:
        dfc.forecast.months = months
    if economic_limit is not None:
        dfc.forecast.economic_limit = economic_limit
    if start_month is not None:
        dfc.forecast.start_month = start_month
    if export_format:
        dfc.output.format = export_format  # type: ignore

    try:
        dfc.validate()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    try:
        result = fit_file(input_file, dfc.forecast)
    except (OSError, ValueError, KeyError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    production = result.production
    selection = result.selection
    forecast = result.forecast

    typer.echo(f"Input: {input_file}")
    typer.echo(
        f"Records: {production.n_records} "
        f"({production.first_date} to {production.last_date})"
    )
    typer.echo("")
    typer.echo(format_summary(selection.best))
    typer.echo("")
    typer.echo("Model comparison:")
    for candidate in selection.all:
        marker = "*" if candidate is selection.best else " "
        typer.echo(
            f" {marker} {candidate.model.kind:<12} "
            f"R² = {candidate.r_squared:.4f}  AIC = {candidate.aic:.2f}"
        )

    if forecast.points:
        typer.echo("")
        typer.echo(
            f"Forecast: {len(forecast)} month(s) from month {forecast.points[0].month}, "
            f"cumulative {forecast.eur_at_end:.0f}"
        )

    if output:
        output.mkdir(parents=True, exist_ok=True)
        written = result.save(output, dfc.output, config=dfc)
        typer.echo("")
        for path in written:
            typer.echo(f"Saved: {path}")


@app.command()
def process(
    input_files: Annotated[
        list[Path],
        typer.Argument(
            help="Production data file(s), each fitted independently",
            exists=True,
        )
    ],
    output: Annotated[
        Path,
        typer.Option(
            "-o", "--output",
            help="Output directory for results",
        )
    ] = Path("output"),
    config: Annotated[
        Optional[Path],
        typer.Option(
            "-c", "--config",
            help="YAML config file",
            exists=True,
        )
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option(
            "-w", "--workers",
            help="Number of parallel workers (default: auto)",
        )
    ] = None,
    no_progress: Annotated[
        bool,
        typer.Option(
            "--no-progress",
            help="Hide the progress bar",
        )
    ] = False,
) -> None:
    """Fit and forecast many production files in parallel.

    Example:
        declinefit process wells/*.csv -o forecasts/
    """
    from ..batch.processor import BatchConfig, BatchProcessor

    dfc = _load_config(config)

    typer.echo(f"Processing {len(input_files)} file(s)...")
    processor = BatchProcessor(BatchConfig(workers=workers, config=dfc, output_dir=output))
    result = processor.run(input_files, output, show_progress=not no_progress)

    typer.echo("")
    typer.echo("Results:")
    typer.echo(f"  Successful: {result.successful}")
    typer.echo(f"  Failed: {result.failed}")

    if result.errors:
        typer.echo(f"\n{len(result.errors)} error(s) occurred. See {output}/errors.txt")

    typer.echo(f"\nOutput saved to: {output}/")


@app.command()
def init(
    output: Annotated[
        Path,
        typer.Option(
            "-o", "--output",
            help="Output file path",
        )
    ] = Path("declinefit.yaml"),
) -> None:
    """Generate a default configuration file.

    Examples:
        declinefit init -o my_config.yaml
    """
    if output.exists():
        overwrite = typer.confirm(f"{output} already exists. Overwrite?")
        if not overwrite:
            raise typer.Exit(0)

    generate_default_config(output)
    typer.echo(f"Config file created: {output}")

    typer.echo("\nEdit this file to customize settings, then use:")
    typer.echo(f"  declinefit fit data.csv --config {output}")


@app.command()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Production data file to inspect",
            exists=True,
        )
    ],
) -> None:
    """Display information about a production data file.

    Shows record count, date range, month span and rate range.
    """
    from ..data.loader import read_production_file

    typer.echo(f"Inspecting: {input_file}")
    typer.echo("")

    try:
        production = read_production_file(input_file)
    except (OSError, ValueError, KeyError) as e:
        typer.echo(f"Parse failed: {e}", err=True)
        raise typer.Exit(1)

    rates = production.rates
    typer.echo(f"Records: {production.n_records}")
    typer.echo(f"Date range: {production.first_date} to {production.last_date}")
    typer.echo(f"Months spanned: {production.last_month}")
    typer.echo(f"Rate range: {rates.min():.2f} to {rates.max():.2f}")
    typer.echo(f"Zero-rate records: {int((rates == 0).sum())}")

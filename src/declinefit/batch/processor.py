"""Batch processing of production files with parallel execution.

Each file is fitted independently; results are never combined.
"""

from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path

import pandas as pd
from tqdm import tqdm

from ..config import DeclineFitConfig, ForecastConfig, OutputConfig
from ..core.forecast import ForecastResult, generate_forecast
from ..core.selection import SelectionResult, select_best_fit
from ..data.loader import read_production_file
from ..data.parser import ParsedProduction
from ..export.csv_export import export_forecast_csv, export_results_csv
from ..export.json_export import JsonExporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    """Fit and forecast for one production file.

    Attributes:
        source: Input file path
        production: Parsed production series
        selection: Exponential and hyperbolic fits with the preferred one
        forecast: Forecast from the preferred model
    """
    source: Path
    production: ParsedProduction
    selection: SelectionResult
    forecast: ForecastResult

    def save(
        self,
        output_dir: Path,
        output_config: OutputConfig | None = None,
        config: DeclineFitConfig | None = None,
    ) -> list[Path]:
        """Write fit results (and forecast) to output_dir.

        Args:
            output_dir: Output directory (must exist)
            output_config: Output format settings
            config: Full configuration, embedded in JSON exports

        Returns:
            Paths of written files
        """
        output_config = output_config or OutputConfig()
        stem = self.source.stem
        forecast = self.forecast if output_config.write_forecast else None

        if output_config.format == "json":
            path = JsonExporter(config=config).save(
                self.selection,
                output_dir / f"{stem}.json",
                forecast=forecast,
                source=self.source.name,
            )
            return [path]

        written = []
        results_path = output_dir / f"{stem}_results.csv"
        results_path.write_text(export_results_csv(self.selection.best), encoding="utf-8")
        written.append(results_path)

        if forecast is not None:
            forecast_path = output_dir / f"{stem}_forecast.csv"
            forecast_path.write_text(export_forecast_csv(forecast.points), encoding="utf-8")
            written.append(forecast_path)

        return written

    def summary(self) -> dict:
        """Return one summary row for this file."""
        row = {"file": self.source.name}
        row.update(self.selection.best.summary())
        row.update({
            "records": self.production.n_records,
            "first_date": self.production.first_date.isoformat(),
            "last_date": self.production.last_date.isoformat(),
            "forecast_months": len(self.forecast),
            "forecast_cumulative": self.forecast.eur_at_end,
        })
        return row


def fit_file(
    filepath: Path | str,
    forecast_config: ForecastConfig | None = None,
) -> FileResult:
    """Parse a production file, select a decline model and forecast it.

    Args:
        filepath: Input file path
        forecast_config: Forecast settings (defaults if None)

    Returns:
        FileResult for the file

    Raises:
        ParseError: If the file has no valid records
        InsufficientDataError: If too few positive-rate points
        DegenerateDataError: If all points fall in one month
    """
    filepath = Path(filepath)
    forecast_config = forecast_config or ForecastConfig()

    production = read_production_file(filepath)
    selection = select_best_fit(production.time, production.rates)

    start_month = forecast_config.start_month
    if start_month is None:
        start_month = production.last_month

    forecast = generate_forecast(
        selection.best.model,
        forecast_config.months,
        economic_limit=forecast_config.economic_limit,
        start_month=start_month,
    )

    return FileResult(
        source=filepath,
        production=production,
        selection=selection,
        forecast=forecast,
    )


@dataclass
class BatchConfig:
    """Configuration for batch processing.

    Attributes:
        workers: Number of parallel workers (None = auto)
        config: Forecast and output settings
        output_dir: Output directory for results
    """
    workers: int | None = None
    config: DeclineFitConfig = field(default_factory=DeclineFitConfig)
    output_dir: Path | None = None


@dataclass
class BatchResult:
    """Results from batch processing.

    Attributes:
        files: Successfully processed files
        successful: Count of files fitted
        failed: Count of files that failed
        errors: List of (file path, error message) tuples
    """
    files: list[FileResult]
    successful: int
    failed: int
    errors: list[tuple[str, str]]

    def to_frame(self) -> pd.DataFrame:
        """Summary table with one row per fitted file."""
        return pd.DataFrame([f.summary() for f in self.files])


class BatchProcessor:
    """Fit many production files in parallel."""

    def __init__(self, config: BatchConfig | None = None):
        """Initialize batch processor.

        Args:
            config: Batch processing configuration
        """
        self.config = config or BatchConfig()

    def process(
        self,
        input_files: list[Path | str],
        show_progress: bool = True,
    ) -> BatchResult:
        """Fit each input file in a separate worker process.

        Args:
            input_files: Input file paths
            show_progress: Whether to show progress bar

        Returns:
            BatchResult with per-file results and failures
        """
        if not input_files:
            return BatchResult(files=[], successful=0, failed=0, errors=[])

        workers = self.config.workers
        if workers is None:
            workers = min(os.cpu_count() or 4, len(input_files))

        forecast_config = self.config.config.forecast
        results = []
        errors = []

        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(fit_file, filepath, forecast_config): str(Path(filepath))
                for filepath in input_files
            }

            iterator = as_completed(futures)
            if show_progress:
                iterator = tqdm(
                    iterator,
                    total=len(futures),
                    desc="Fitting files"
                )

            for future in iterator:
                filepath = futures[future]
                try:
                    results.append(future.result())
                except Exception as e:
                    errors.append((filepath, str(e)))
                    logger.error(f"Failed to process {filepath}: {e}")

        # Completion order is arbitrary; report in input order
        order = {str(Path(p)): i for i, p in enumerate(input_files)}
        results.sort(key=lambda r: order.get(str(r.source), len(order)))
        errors.sort(key=lambda e: order.get(e[0], len(order)))

        return BatchResult(
            files=results,
            successful=len(results),
            failed=len(errors),
            errors=errors,
        )

    def run(
        self,
        input_files: list[Path | str],
        output_dir: Path | str | None = None,
        show_progress: bool = True,
    ) -> BatchResult:
        """Run complete batch processing pipeline.

        Args:
            input_files: Input file paths
            output_dir: Output directory (overrides config)
            show_progress: Whether to show progress bars

        Returns:
            BatchResult with processed files
        """
        output_dir = Path(output_dir) if output_dir else self.config.output_dir
        if output_dir:
            output_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Processing {len(input_files)} file(s)")
        result = self.process(input_files, show_progress=show_progress)
        logger.info(
            f"Processing complete: {result.successful} successful, "
            f"{result.failed} failed"
        )

        if output_dir:
            self._save_outputs(result, output_dir)

        return result

    def _save_outputs(self, result: BatchResult, output_dir: Path) -> None:
        """Save all outputs to directory.

        Args:
            result: Batch processing result
            output_dir: Output directory
        """
        pf_config = self.config.config
        for file_result in result.files:
            file_result.save(output_dir, pf_config.output, config=pf_config)

        if result.files:
            summary_path = output_dir / "fit_summary.csv"
            result.to_frame().to_csv(summary_path, index=False)
            logger.info(f"Saved fit summary to {summary_path}")

        if result.errors:
            error_path = output_dir / "errors.txt"
            with open(error_path, "w") as f:
                for filepath, error in result.errors:
                    f.write(f"{filepath}: {error}\n")
            logger.info(f"Saved error log to {error_path}")

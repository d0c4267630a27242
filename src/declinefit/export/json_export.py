"""Export fit and forecast results in JSON format."""

from datetime import datetime
import json
from pathlib import Path
from typing import Any

from ..config import DeclineFitConfig
from ..core.forecast import ForecastResult
from ..core.models import FitResult
from ..core.selection import SelectionResult


class JsonExporter:
    """Export decline fits and forecasts in JSON format.

    Produces a structured document with both fitted models, the selected
    model type, and the forecast table. Undefined EUR is written as null.
    """

    def __init__(self, config: DeclineFitConfig | None = None):
        """Initialize exporter.

        Args:
            config: Configuration included in the export (optional)
        """
        self.config = config

    def _export_fit(self, fit: FitResult) -> dict[str, Any]:
        """Export a single fit result."""
        model = fit.model
        return {
            "model_type": model.kind,
            "qi": round(model.qi, 2),
            "di": round(model.di, 6),
            "b": round(model.b, 4),
            "r_squared": round(fit.r_squared, 6),
            "aic": round(fit.aic, 2),
            "eur": round(fit.eur, 2) if fit.has_eur else None,
            "data_points_used": fit.data_points_used,
        }

    def _export_forecast(self, forecast: ForecastResult) -> dict[str, Any]:
        """Export forecast points."""
        return {
            "eur_at_end": round(forecast.eur_at_end, 2),
            "points": [
                {
                    "month": p.month,
                    "rate": round(p.rate, 2),
                    "cumulative": round(p.cumulative, 2),
                }
                for p in forecast.points
            ],
        }

    def export(
        self,
        selection: SelectionResult,
        forecast: ForecastResult | None = None,
        source: str | None = None,
    ) -> dict[str, Any]:
        """Export selection and forecast to a JSON-compatible dict.

        Args:
            selection: Result of fitting both models
            forecast: Forecast from the selected model (optional)
            source: Input file name or label (optional)

        Returns:
            Export data dict
        """
        data: dict[str, Any] = {
            "generated": datetime.now().isoformat(timespec="seconds"),
            "source": source,
            "best_model": selection.best.model.kind,
            "fits": {
                fit.model.kind: self._export_fit(fit) for fit in selection.all
            },
            "forecast": self._export_forecast(forecast) if forecast is not None else None,
        }
        if self.config is not None:
            data["config"] = self.config.to_dict()
        return data

    def save(
        self,
        selection: SelectionResult,
        output_path: Path | str,
        forecast: ForecastResult | None = None,
        source: str | None = None,
    ) -> Path:
        """Export results and save to JSON file.

        Args:
            selection: Result of fitting both models
            output_path: Output file path
            forecast: Forecast from the selected model (optional)
            source: Input file name or label (optional)

        Returns:
            Path to saved file
        """
        output_path = Path(output_path)
        data = self.export(selection, forecast, source)

        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)

        return output_path

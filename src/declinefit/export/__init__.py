"""Export modules for fit and forecast results."""

from .csv_export import export_results_csv, export_forecast_csv, format_summary
from .json_export import JsonExporter

__all__ = [
    "export_results_csv",
    "export_forecast_csv",
    "format_summary",
    "JsonExporter",
]

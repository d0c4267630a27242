"""Arps decline curve fitting, model selection and production forecasting."""

from .errors import DeclineFitError, ParseError, InsufficientDataError, DegenerateDataError
from .data.parser import ProductionRecord, ParsedProduction, parse_production
from .core.models import DeclineModel, ExponentialModel, HyperbolicModel, FitResult, predict_rate
from .core.fitting import fit_exponential, fit_hyperbolic
from .core.selection import SelectionResult, select_best_fit
from .core.forecast import ForecastPoint, ForecastResult, generate_forecast
from .export.csv_export import export_results_csv, export_forecast_csv, format_summary

__all__ = [
    "DeclineFitError",
    "ParseError",
    "InsufficientDataError",
    "DegenerateDataError",
    "ProductionRecord",
    "ParsedProduction",
    "parse_production",
    "DeclineModel",
    "ExponentialModel",
    "HyperbolicModel",
    "FitResult",
    "predict_rate",
    "fit_exponential",
    "fit_hyperbolic",
    "SelectionResult",
    "select_best_fit",
    "ForecastPoint",
    "ForecastResult",
    "generate_forecast",
    "export_results_csv",
    "export_forecast_csv",
    "format_summary",
]

"""Core decline curve models, fitting, selection and forecasting."""

from .models import (
    DeclineModel,
    ExponentialModel,
    HyperbolicModel,
    FitResult,
    predict_rate,
)
from .fitting import fit_exponential, fit_hyperbolic, solve_3x3
from .selection import SelectionResult, select_best_fit, HYPERBOLIC_R2_MARGIN
from .forecast import (
    ForecastPoint,
    ForecastResult,
    generate_forecast,
    FORECAST_PRESETS,
    DEFAULT_ECONOMIC_LIMIT,
)

__all__ = [
    "DeclineModel",
    "ExponentialModel",
    "HyperbolicModel",
    "FitResult",
    "predict_rate",
    "fit_exponential",
    "fit_hyperbolic",
    "solve_3x3",
    "SelectionResult",
    "select_best_fit",
    "HYPERBOLIC_R2_MARGIN",
    "ForecastPoint",
    "ForecastResult",
    "generate_forecast",
    "FORECAST_PRESETS",
    "DEFAULT_ECONOMIC_LIMIT",
]

"""Text exports of fit and forecast results.

Pure formatting: every function returns a string and performs no I/O.
Lines are joined with "\\n" and carry no trailing newline.

Results table:

```csv
Parameter,Value
Model Type,hyperbolic
qi (initial rate),1000.00
Di (decline rate),0.080000
b-factor,0.5000
R²,0.998000
AIC,-130.20
EUR,25000.00
```
"""

from collections.abc import Iterable

from ..core.forecast import ForecastPoint
from ..core.models import FitResult, HyperbolicModel


NOT_AVAILABLE = "N/A"


def _b_factor(fit: FitResult) -> str:
    if isinstance(fit.model, HyperbolicModel):
        return f"{fit.model.b:.4f}"
    return "0"


def export_results_csv(fit: FitResult) -> str:
    """Export fit parameters and statistics as a Parameter,Value table.

    Args:
        fit: Fit result to export

    Returns:
        CSV text
    """
    model = fit.model
    eur = f"{fit.eur:.2f}" if fit.has_eur else NOT_AVAILABLE

    lines = [
        "Parameter,Value",
        f"Model Type,{model.kind}",
        f"qi (initial rate),{model.qi:.2f}",
        f"Di (decline rate),{model.di:.6f}",
        f"b-factor,{_b_factor(fit)}",
        f"R²,{fit.r_squared:.6f}",
        f"AIC,{fit.aic:.2f}",
        f"EUR,{eur}",
    ]
    return "\n".join(lines)


def export_forecast_csv(points: Iterable[ForecastPoint]) -> str:
    """Export forecast points as a Month,Rate,Cumulative table.

    Args:
        points: Forecast points in month order

    Returns:
        CSV text
    """
    lines = ["Month,Rate,Cumulative"]
    for p in points:
        lines.append(f"{p.month},{p.rate:.2f},{p.cumulative:.2f}")
    return "\n".join(lines)


def format_summary(fit: FitResult) -> str:
    """Format a human-readable multi-line summary of a fit."""
    model = fit.model
    parts = [
        f"Model: {model.kind}",
        f"qi = {model.qi:.2f} bbl/month",
        f"Di = {model.di * 100:.2f}%/month",
    ]
    if isinstance(model, HyperbolicModel):
        parts.append(f"b = {model.b:.4f}")
    parts.append(f"R² = {fit.r_squared:.4f}")
    parts.append(f"EUR = {fit.eur:.0f} bbl" if fit.has_eur else f"EUR = {NOT_AVAILABLE}")
    return "\n".join(parts)

"""Production forecasting from a fitted decline model."""

from dataclasses import dataclass

from .models import DeclineModel, predict_rate


# Conventional forecast horizons (months); any non-negative integer works
FORECAST_PRESETS = (12, 24, 60)

DEFAULT_ECONOMIC_LIMIT = 1.0


@dataclass(frozen=True)
class ForecastPoint:
    """Forecast rate and cumulative production at one month.

    Attributes:
        month: Month offset from first production
        rate: Predicted rate
        cumulative: Production accumulated since the first forecast month
    """
    month: int
    rate: float
    cumulative: float


@dataclass(frozen=True)
class ForecastResult:
    """Forecast series.

    Attributes:
        points: Forecast points; the first is the seed month with cumulative 0
        eur_at_end: Cumulative production at the last point
    """
    points: tuple[ForecastPoint, ...]
    eur_at_end: float

    def __len__(self) -> int:
        return len(self.points)


def generate_forecast(
    model: DeclineModel,
    months: int,
    economic_limit: float = DEFAULT_ECONOMIC_LIMIT,
    start_month: int = 0,
) -> ForecastResult:
    """Project a decline model forward month by month.

    Emits month offsets 0..months from start_month. The first month is always
    emitted; after that the forecast stops before the first month whose rate
    falls below economic_limit. Cumulative production is integrated with the
    trapezoidal rule between consecutive months.

    Args:
        model: Fitted decline model
        months: Number of months to forecast beyond start_month
        economic_limit: Minimum rate; forecast stops below this
        start_month: Month offset of the first forecast point

    Returns:
        ForecastResult with emitted points and final cumulative
    """
    points = []
    cumulative = 0.0
    prev_rate = 0.0

    for m in range(months + 1):
        t = start_month + m
        rate = predict_rate(model, t)

        if m > 0:
            if rate < economic_limit:
                break
            cumulative += (prev_rate + rate) / 2

        points.append(ForecastPoint(month=t, rate=rate, cumulative=cumulative))
        prev_rate = rate

    return ForecastResult(points=tuple(points), eur_at_end=cumulative)

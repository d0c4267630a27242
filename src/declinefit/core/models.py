"""Arps decline curve models.

A decline model is one of exactly two shapes:

    Exponential:  q(t) = qi * exp(-Di * t)
    Hyperbolic:   q(t) = qi / (1 + b * Di * t)^(1/b)

Where:
    q(t) = Production rate at time t (months)
    qi   = Initial production rate at t=0
    Di   = Initial nominal decline rate (fraction/month)
    b    = Hyperbolic exponent, fitted inside [0.01, 0.99]

DeclineModel is a closed union of the two frozen dataclasses below rather
than a class hierarchy; code consuming a model handles both shapes
explicitly (see predict_rate).

Estimated ultimate recovery (EUR):
    Exponential (Di > 0):
        EUR = qi / Di
    Hyperbolic (b < 1, Di > 0), to economic limit qf:
        EUR = qi^b / ((1-b) * Di) * (qi^(1-b) - qf^(1-b))

References:
    Arps, J.J. (1945). "Analysis of Decline Curves". Trans. AIME, 160, 228-247.
"""

from dataclasses import dataclass, field
import math
from typing import Literal, Union

import numpy as np


@dataclass(frozen=True)
class ExponentialModel:
    """Exponential decline model.

    Attributes:
        qi: Initial rate at t=0
        di: Decline rate (fraction/month). May be <= 0 for a non-declining
            series, which still yields a model with a poor fit.
    """
    qi: float
    di: float

    kind: Literal["exponential"] = field(default="exponential", init=False)

    @property
    def b(self) -> float:
        """Exponential is the b=0 limit of the hyperbolic family."""
        return 0.0

    def rate(self, t: np.ndarray | float) -> np.ndarray:
        """Calculate production rate at time t.

        Args:
            t: Time in months (scalar or array)

        Returns:
            Production rate array
        """
        t = np.atleast_1d(np.asarray(t, dtype=float))
        return self.qi * np.exp(-self.di * t)


@dataclass(frozen=True)
class HyperbolicModel:
    """Hyperbolic decline model.

    Attributes:
        qi: Initial rate at t=0
        di: Initial nominal decline rate (fraction/month)
        b: Hyperbolic exponent (dimensionless)
    """
    qi: float
    di: float
    b: float

    kind: Literal["hyperbolic"] = field(default="hyperbolic", init=False)

    def rate(self, t: np.ndarray | float) -> np.ndarray:
        """Calculate production rate at time t.

        Rate is zero wherever 1 + b*Di*t is non-positive.

        Args:
            t: Time in months (scalar or array)

        Returns:
            Production rate array
        """
        t = np.atleast_1d(np.asarray(t, dtype=float))
        base = 1 + self.b * self.di * t
        q = np.zeros_like(t)
        mask = base > 0
        q[mask] = self.qi / np.power(base[mask], 1 / self.b)
        return q


DeclineModel = Union[ExponentialModel, HyperbolicModel]


def predict_rate(model: DeclineModel, t: float) -> float:
    """Predict the rate of a decline model at a single time.

    Args:
        model: Exponential or hyperbolic model
        t: Time in months

    Returns:
        Production rate

    Raises:
        TypeError: If model is not one of the two decline shapes
    """
    if isinstance(model, ExponentialModel):
        return float(model.qi * np.exp(-model.di * t))
    if isinstance(model, HyperbolicModel):
        base = 1 + model.b * model.di * t
        if base <= 0:
            return 0.0
        return float(model.qi / base ** (1 / model.b))
    raise TypeError(f"Unsupported decline model: {type(model).__name__}")


@dataclass(frozen=True)
class FitResult:
    """Result of fitting a decline model to production data.

    Attributes:
        model: Fitted decline model
        r_squared: Coefficient of determination (negative for poor fits)
        aic: Akaike Information Criterion
        eur: Estimated ultimate recovery; math.inf when undefined
        data_points_used: Number of positive-rate points fitted
    """
    model: DeclineModel
    r_squared: float
    aic: float
    eur: float
    data_points_used: int = 0

    @property
    def has_eur(self) -> bool:
        """Check if EUR is defined (finite)."""
        return math.isfinite(self.eur)

    def summary(self) -> dict:
        """Return summary dictionary of fit results."""
        return {
            "model_type": self.model.kind,
            "qi": self.model.qi,
            "di": self.model.di,
            "di_annual": self.model.di * 12,
            "b": self.model.b,
            "r_squared": self.r_squared,
            "aic": self.aic,
            "eur": self.eur if self.has_eur else None,
            "data_points_used": self.data_points_used,
        }

"""Model selection between exponential and hyperbolic fits."""

from dataclasses import dataclass

import numpy as np

from .fitting import fit_exponential, fit_hyperbolic
from .models import FitResult


# Hyperbolic must beat exponential R² by more than this to be preferred
HYPERBOLIC_R2_MARGIN = 0.005


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of fitting both decline models.

    Attributes:
        best: Preferred fit
        all: Both fits, ordered (exponential, hyperbolic)
    """
    best: FitResult
    all: tuple[FitResult, FitResult]

    @property
    def exponential(self) -> FitResult:
        return self.all[0]

    @property
    def hyperbolic(self) -> FitResult:
        return self.all[1]


def compare_fits(exponential: FitResult, hyperbolic: FitResult) -> FitResult:
    """Pick the preferred of an exponential and a hyperbolic fit.

    The 3-parameter hyperbolic model wins only when its R² exceeds the
    exponential R² by more than HYPERBOLIC_R2_MARGIN; otherwise the simpler
    exponential model is kept.

    Args:
        exponential: Exponential fit result
        hyperbolic: Hyperbolic fit result

    Returns:
        The preferred FitResult
    """
    if hyperbolic.r_squared > exponential.r_squared + HYPERBOLIC_R2_MARGIN:
        return hyperbolic
    return exponential


def select_best_fit(time: np.ndarray | list, rates: np.ndarray | list) -> SelectionResult:
    """Fit both decline models and select the preferred one.

    Args:
        time: Time array in months
        rates: Production rate array

    Returns:
        SelectionResult with best fit and both fits

    Raises:
        InsufficientDataError: If either fit lacks positive-rate points
        DegenerateDataError: If the regression input has no time spread
    """
    exp_fit = fit_exponential(time, rates)
    hyp_fit = fit_hyperbolic(time, rates)

    return SelectionResult(
        best=compare_fits(exp_fit, hyp_fit),
        all=(exp_fit, hyp_fit),
    )

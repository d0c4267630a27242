"""Decline curve fitting for exponential and hyperbolic Arps models.

Features:
- Exponential fit by log-linear least squares (closed form)
- Hyperbolic fit by Levenberg-Marquardt, seeded from the exponential fit
- R², AIC and EUR for every fit

Levenberg-Marquardt
-------------------

Each iteration solves the damped normal equations

    (JᵀJ + λI) δ = Jᵀr

for the step δ in (qi, Di, b). A large λ makes the step behave like gradient
descent, a small λ like Gauss-Newton. λ is halved after an accepted step and
multiplied by 5 after a rejected one. ∂q/∂b is taken by forward difference
because the analytic expression is unstable as b approaches 0.

The solver never raises: a singular system, convergence or the iteration cap
all end the loop with the best parameters found so far.
"""

import logging

import numpy as np
from scipy.stats import linregress

from ..errors import DegenerateDataError, InsufficientDataError
from .models import ExponentialModel, FitResult, HyperbolicModel

logger = logging.getLogger(__name__)

# Levenberg-Marquardt settings
MAX_ITERATIONS = 200
INITIAL_LAMBDA = 0.01
LAMBDA_DECREASE = 0.5
LAMBDA_INCREASE = 5.0
CONVERGENCE_TOLERANCE = 1e-10
B_DERIVATIVE_STEP = 1e-6
B_INITIAL = 0.5

# Parameter clamps applied to every candidate step
QI_MIN = 1.0
DI_MIN = 1e-6
B_MIN = 0.01
B_MAX = 0.99

# Seed floor for Di taken from the exponential fit
DI_SEED_MIN = 0.001

# Economic limit used by the closed-form hyperbolic EUR
EUR_ECONOMIC_LIMIT = 1.0

PIVOT_TOLERANCE = 1e-15


def _positive_points(
    time: np.ndarray | list,
    rates: np.ndarray | list,
) -> tuple[np.ndarray, np.ndarray]:
    """Keep only points with rate > 0."""
    t = np.asarray(time, dtype=float)
    q = np.asarray(rates, dtype=float)
    mask = q > 0
    return t[mask], q[mask]


def _calculate_metrics(
    observed: np.ndarray,
    predicted: np.ndarray,
    n_params: int,
) -> dict:
    """Calculate fit quality metrics.

    Args:
        observed: Observed values
        predicted: Predicted values
        n_params: Number of model parameters

    Returns:
        Dictionary with r_squared and aic
    """
    n = len(observed)
    residuals = observed - predicted
    ss_res = float(np.sum(residuals ** 2))
    ss_tot = float(np.sum((observed - np.mean(observed)) ** 2))

    # Constant series counts as fully explained
    r_squared = 1 - ss_res / ss_tot if ss_tot > 0 else 1.0

    aic = n * np.log(ss_res / n + 1e-15) + 2 * n_params

    return {
        'r_squared': float(r_squared),
        'aic': float(aic),
    }


def fit_exponential(time: np.ndarray | list, rates: np.ndarray | list) -> FitResult:
    """Fit exponential decline by linear regression of ln(q) on t.

        ln(q) = ln(qi) - Di * t

    Args:
        time: Time array in months
        rates: Production rate array (zero/negative rates are ignored)

    Returns:
        FitResult with ExponentialModel

    Raises:
        InsufficientDataError: If fewer than 2 points have rate > 0
        DegenerateDataError: If all usable points share the same time
    """
    t, q = _positive_points(time, rates)
    n = len(t)
    if n < 2:
        raise InsufficientDataError(
            f"Need at least 2 positive data points for exponential fit, got {n}"
        )

    denom = n * np.sum(t * t) - np.sum(t) ** 2
    if abs(denom) < PIVOT_TOLERANCE:
        raise DegenerateDataError(
            "Degenerate data for exponential fit: all points share the same time"
        )

    slope, intercept, _, _, _ = linregress(t, np.log(q))

    qi = float(np.exp(intercept))
    di = float(-slope)
    if di <= 0:
        logger.warning(f"Rates are not declining (Di={di:.6f}); EUR is undefined")

    model = ExponentialModel(qi=qi, di=di)
    metrics = _calculate_metrics(q, model.rate(t), n_params=2)
    eur = qi / di if di > 0 else float('inf')

    return FitResult(
        model=model,
        r_squared=metrics['r_squared'],
        aic=metrics['aic'],
        eur=eur,
        data_points_used=n,
    )


def _hyperbolic_rate(t: np.ndarray, qi: float, di: float, b: float) -> np.ndarray:
    return qi / np.power(1 + b * di * t, 1 / b)


def _jacobian_and_residuals(
    t: np.ndarray,
    q: np.ndarray,
    qi: float,
    di: float,
    b: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Build the n x 3 Jacobian of q(t) and the residual vector.

    Returns:
        Tuple of (jacobian, residuals) with residuals = observed - predicted
    """
    base = 1 + b * di * t
    inv_b = 1 / b
    pred = qi / np.power(base, inv_b)
    residuals = q - pred

    d_qi = 1 / np.power(base, inv_b)
    d_di = -qi * t / np.power(base, inv_b + 1)

    b_plus = b + B_DERIVATIVE_STEP
    d_b = (_hyperbolic_rate(t, qi, di, b_plus) - pred) / B_DERIVATIVE_STEP

    return np.column_stack([d_qi, d_di, d_b]), residuals


def solve_3x3(a: list[list[float]], rhs: list[float]) -> list[float] | None:
    """Solve a 3x3 linear system by Gaussian elimination with partial pivoting.

    Args:
        a: 3x3 coefficient matrix (not modified)
        rhs: Right-hand side vector (not modified)

    Returns:
        Solution vector, or None if the matrix is singular
    """
    m = [list(row) for row in a]
    v = list(rhs)

    for col in range(3):
        pivot = max(range(col, 3), key=lambda row: abs(m[row][col]))
        m[col], m[pivot] = m[pivot], m[col]
        v[col], v[pivot] = v[pivot], v[col]

        if abs(m[col][col]) < PIVOT_TOLERANCE:
            return None

        for row in range(col + 1, 3):
            factor = m[row][col] / m[col][col]
            for j in range(col, 3):
                m[row][j] -= factor * m[col][j]
            v[row] -= factor * v[col]

    x = [0.0, 0.0, 0.0]
    for i in range(2, -1, -1):
        total = v[i]
        for j in range(i + 1, 3):
            total -= m[i][j] * x[j]
        x[i] = total / m[i][i]
    return x


def _levenberg_marquardt(
    t: np.ndarray,
    q: np.ndarray,
    qi: float,
    di: float,
    b: float,
) -> tuple[float, float, float]:
    """Refine (qi, Di, b) by damped least squares.

    Args:
        t: Time array (positive-rate points only)
        q: Rate array
        qi, di, b: Starting parameters

    Returns:
        Tuple of fitted (qi, di, b)
    """
    lam = INITIAL_LAMBDA
    reason = "iteration cap"

    for iteration in range(MAX_ITERATIONS):
        jac, residuals = _jacobian_and_residuals(t, q, qi, di, b)

        jtj = jac.T @ jac
        jtr = jac.T @ residuals

        damped = [
            [float(jtj[i][j]) + (lam if i == j else 0.0) for j in range(3)]
            for i in range(3)
        ]
        delta = solve_3x3(damped, [float(x) for x in jtr])
        if delta is None:
            reason = "singular system"
            break

        cand_qi = max(qi + delta[0], QI_MIN)
        cand_di = max(di + delta[1], DI_MIN)
        cand_b = min(max(b + delta[2], B_MIN), B_MAX)

        old_sse = float(np.sum(residuals ** 2))
        new_sse = float(np.sum((q - _hyperbolic_rate(t, cand_qi, cand_di, cand_b)) ** 2))

        if new_sse < old_sse:
            qi, di, b = cand_qi, cand_di, cand_b
            lam *= LAMBDA_DECREASE
            if abs(old_sse - new_sse) / (old_sse + 1e-15) < CONVERGENCE_TOLERANCE:
                reason = "converged"
                break
        else:
            lam *= LAMBDA_INCREASE

    logger.debug(
        f"Levenberg-Marquardt stopped after {iteration + 1} iteration(s): {reason}"
    )
    return qi, di, b


def _hyperbolic_eur(qi: float, di: float, b: float) -> float:
    """Closed-form hyperbolic EUR to EUR_ECONOMIC_LIMIT; inf when undefined."""
    if b >= 1 or di <= 0:
        return float('inf')
    qf = EUR_ECONOMIC_LIMIT
    return qi ** b / ((1 - b) * di) * (qi ** (1 - b) - qf ** (1 - b))


def fit_hyperbolic(time: np.ndarray | list, rates: np.ndarray | list) -> FitResult:
    """Fit hyperbolic decline by Levenberg-Marquardt.

        q(t) = qi / (1 + b * Di * t)^(1/b)

    Starting values come from the exponential fit (Di floored at 0.001) with
    b = 0.5. Fitted b always lies in [0.01, 0.99].

    Args:
        time: Time array in months
        rates: Production rate array (zero/negative rates are ignored)

    Returns:
        FitResult with HyperbolicModel

    Raises:
        InsufficientDataError: If fewer than 3 points have rate > 0
        DegenerateDataError: If the exponential seed fit is degenerate
    """
    t, q = _positive_points(time, rates)
    n = len(t)
    if n < 3:
        raise InsufficientDataError(
            f"Need at least 3 positive data points for hyperbolic fit, got {n}"
        )

    seed = fit_exponential(time, rates)
    qi, di, b = _levenberg_marquardt(
        t, q,
        qi=seed.model.qi,
        di=max(seed.model.di, DI_SEED_MIN),
        b=B_INITIAL,
    )

    model = HyperbolicModel(qi=float(qi), di=float(di), b=float(b))
    metrics = _calculate_metrics(q, model.rate(t), n_params=3)

    return FitResult(
        model=model,
        r_squared=metrics['r_squared'],
        aic=metrics['aic'],
        eur=float(_hyperbolic_eur(model.qi, model.di, model.b)),
        data_points_used=n,
    )

"""Tests for decline curve models."""

import math

import numpy as np
import pytest

from declinefit.core.models import (
    ExponentialModel,
    FitResult,
    HyperbolicModel,
    predict_rate,
)


class TestExponentialModel:
    """Tests for ExponentialModel."""

    def test_kind_and_b(self):
        model = ExponentialModel(qi=1000, di=0.05)
        assert model.kind == "exponential"
        assert model.b == 0.0

    def test_rate(self):
        model = ExponentialModel(qi=1000, di=0.05)

        assert model.rate(0)[0] == pytest.approx(1000)
        assert model.rate(10)[0] == pytest.approx(1000 * np.exp(-0.5))

    def test_rate_vectorized(self):
        model = ExponentialModel(qi=1000, di=0.05)
        rates = model.rate([0, 12, 24])

        assert rates.shape == (3,)
        assert np.all(np.diff(rates) < 0)

    def test_immutable(self):
        model = ExponentialModel(qi=1000, di=0.05)
        with pytest.raises(AttributeError):
            model.qi = 500


class TestHyperbolicModel:
    """Tests for HyperbolicModel."""

    def test_kind(self):
        assert HyperbolicModel(qi=1000, di=0.08, b=0.5).kind == "hyperbolic"

    def test_rate(self):
        model = HyperbolicModel(qi=1000, di=0.08, b=0.5)

        assert model.rate(0)[0] == pytest.approx(1000)
        expected = 1000 / np.power(1 + 0.5 * 0.08 * 12, 2)
        assert model.rate(12)[0] == pytest.approx(expected)

    def test_rate_zero_when_base_non_positive(self):
        """Test negative decline drives 1 + b*Di*t below zero."""
        model = HyperbolicModel(qi=1000, di=-0.5, b=0.5)
        assert model.rate(10)[0] == 0.0


class TestPredictRate:
    """Tests for predict_rate dispatch."""

    def test_exponential(self):
        model = ExponentialModel(qi=1000, di=0.05)
        assert predict_rate(model, 0) == pytest.approx(1000)
        assert predict_rate(model, 10) == pytest.approx(1000 * math.exp(-0.5))

    def test_hyperbolic(self):
        model = HyperbolicModel(qi=1000, di=0.08, b=0.5)
        expected = 1000 / math.pow(1 + 0.5 * 0.08 * 12, 2)
        assert predict_rate(model, 12) == pytest.approx(expected)

    def test_matches_vectorized_rate(self):
        model = HyperbolicModel(qi=800, di=0.06, b=0.3)
        assert predict_rate(model, 7) == pytest.approx(model.rate(7)[0])

    def test_hyperbolic_non_positive_base(self):
        model = HyperbolicModel(qi=1000, di=-0.5, b=0.5)
        assert predict_rate(model, 10) == 0.0

    def test_unknown_model_raises(self):
        with pytest.raises(TypeError, match="Unsupported decline model"):
            predict_rate(object(), 1)


class TestFitResult:
    """Tests for FitResult."""

    def test_has_eur(self):
        model = ExponentialModel(qi=1000, di=0.05)
        assert FitResult(model=model, r_squared=0.99, aic=-10.0, eur=20000.0).has_eur
        assert not FitResult(model=model, r_squared=0.99, aic=-10.0, eur=math.inf).has_eur

    def test_summary(self):
        model = HyperbolicModel(qi=1000, di=0.08, b=0.5)
        result = FitResult(model=model, r_squared=0.99, aic=-10.0, eur=math.inf, data_points_used=24)
        summary = result.summary()

        assert summary["model_type"] == "hyperbolic"
        assert summary["b"] == 0.5
        assert summary["di_annual"] == pytest.approx(0.96)
        assert summary["eur"] is None
        assert summary["data_points_used"] == 24

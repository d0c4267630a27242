"""Tests for CSV and summary text exports."""

import math

import numpy as np
import pytest

from declinefit.core.forecast import ForecastPoint, generate_forecast
from declinefit.core.models import ExponentialModel, FitResult, HyperbolicModel
from declinefit.core.selection import select_best_fit
from declinefit.data.parser import parse_production
from declinefit.errors import ParseError
from declinefit.export.csv_export import (
    export_forecast_csv,
    export_results_csv,
    format_summary,
)


def _hyperbolic_fit():
    model = HyperbolicModel(qi=1000.0, di=0.08, b=0.5)
    return FitResult(model=model, r_squared=0.998, aic=-130.2, eur=25000.0)


def _exponential_fit(eur=20000.0):
    model = ExponentialModel(qi=1000.0, di=0.05)
    return FitResult(model=model, r_squared=0.99, aic=-100.0, eur=eur)


class TestExportResultsCsv:
    """Tests for export_results_csv."""

    def test_hyperbolic_exact(self):
        expected = (
            "Parameter,Value\n"
            "Model Type,hyperbolic\n"
            "qi (initial rate),1000.00\n"
            "Di (decline rate),0.080000\n"
            "b-factor,0.5000\n"
            "R²,0.998000\n"
            "AIC,-130.20\n"
            "EUR,25000.00"
        )
        assert export_results_csv(_hyperbolic_fit()) == expected

    def test_exponential_b_factor(self):
        lines = export_results_csv(_exponential_fit()).split("\n")

        assert lines[1] == "Model Type,exponential"
        assert lines[4] == "b-factor,0"

    def test_undefined_eur(self):
        lines = export_results_csv(_exponential_fit(eur=math.inf)).split("\n")
        assert lines[-1] == "EUR,N/A"

    @pytest.mark.parametrize("kind", ["exponential", "hyperbolic"])
    def test_values_parse_back_rounded(self, kind):
        """Test each exported value reads back as the fitted value rounded."""
        t = np.arange(36, dtype=float)
        selection = select_best_fit(t, 1000 / np.power(1 + 0.7 * 0.1 * t, 1 / 0.7))
        fit = selection.exponential if kind == "exponential" else selection.hyperbolic

        rows = dict(line.split(",", 1) for line in export_results_csv(fit).split("\n")[1:])

        assert rows["Model Type"] == kind
        assert float(rows["qi (initial rate)"]) == round(fit.model.qi, 2)
        assert float(rows["Di (decline rate)"]) == round(fit.model.di, 6)
        assert float(rows["b-factor"]) == round(fit.model.b, 4)
        assert float(rows["R²"]) == round(fit.r_squared, 6)
        assert float(rows["AIC"]) == round(fit.aic, 2)
        assert float(rows["EUR"]) == round(fit.eur, 2)

    def test_no_trailing_newline(self):
        assert not export_results_csv(_hyperbolic_fit()).endswith("\n")


class TestExportForecastCsv:
    """Tests for export_forecast_csv."""

    def test_exact(self):
        points = [
            ForecastPoint(month=0, rate=1000.0, cumulative=0.0),
            ForecastPoint(month=1, rate=951.229, cumulative=975.614),
        ]
        expected = "Month,Rate,Cumulative\n0,1000.00,0.00\n1,951.23,975.61"

        assert export_forecast_csv(points) == expected

    def test_empty(self):
        assert export_forecast_csv([]) == "Month,Rate,Cumulative"

    def test_rows_match_forecast(self):
        forecast = generate_forecast(ExponentialModel(qi=1000, di=0.05), 12)
        lines = export_forecast_csv(forecast.points).split("\n")

        assert len(lines) == len(forecast) + 1
        assert lines[-1].startswith("12,")

    def test_output_parses_back(self):
        """Test forecast rows are readable by the production parser."""
        forecast = generate_forecast(ExponentialModel(qi=1000, di=0.05), 12)
        text = export_forecast_csv(forecast.points)
        rows = [line.split(",") for line in text.split("\n")[1:]]

        assert [int(r[0]) for r in rows] == list(range(13))
        assert float(rows[0][1]) == 1000.0

    def test_results_table_not_production_data(self):
        """Test a results table is rejected by the production parser."""
        with pytest.raises(ParseError):
            parse_production(export_results_csv(_hyperbolic_fit()))


class TestFormatSummary:
    """Tests for format_summary."""

    def test_hyperbolic(self):
        expected = (
            "Model: hyperbolic\n"
            "qi = 1000.00 bbl/month\n"
            "Di = 8.00%/month\n"
            "b = 0.5000\n"
            "R² = 0.9980\n"
            "EUR = 25000 bbl"
        )
        assert format_summary(_hyperbolic_fit()) == expected

    def test_exponential_has_no_b_line(self):
        summary = format_summary(_exponential_fit())

        assert "b = " not in summary
        assert summary.startswith("Model: exponential")

    def test_undefined_eur(self):
        summary = format_summary(_exponential_fit(eur=math.inf))
        assert summary.split("\n")[-1] == "EUR = N/A"

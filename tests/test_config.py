"""Tests for config.py validation and from_dict."""

import pytest
import logging
from pathlib import Path

from declinefit.config import (
    DeclineFitConfig,
    ForecastConfig,
    OutputConfig,
    generate_default_config,
)


class TestForecastConfig:
    """Tests for ForecastConfig defaults."""

    def test_defaults(self):
        fc = ForecastConfig()
        assert fc.months == 60
        assert fc.economic_limit == 1.0
        assert fc.start_month is None

    def test_is_preset(self):
        assert ForecastConfig(months=24).is_preset
        assert not ForecastConfig(months=36).is_preset


class TestDeclineFitConfigValidation:
    """Tests for DeclineFitConfig.validate()."""

    def test_valid_default_config(self):
        config = DeclineFitConfig()
        config.validate()  # Should not raise

    def test_invalid_months(self):
        config = DeclineFitConfig()
        config.forecast.months = 0
        with pytest.raises(ValueError, match="months.*must be at least 1"):
            config.validate()

    def test_invalid_economic_limit(self):
        config = DeclineFitConfig()
        config.forecast.economic_limit = -1.0
        with pytest.raises(ValueError, match="economic_limit.*must not be negative"):
            config.validate()

    def test_invalid_start_month(self):
        config = DeclineFitConfig()
        config.forecast.start_month = -3
        with pytest.raises(ValueError, match="start_month.*must not be negative"):
            config.validate()

    def test_invalid_format(self):
        config = DeclineFitConfig()
        config.output.format = "xml"
        with pytest.raises(ValueError, match="format.*must be csv or json"):
            config.validate()

    def test_wrong_types_reported(self):
        config = DeclineFitConfig.from_dict({
            "forecast": {"months": "abc", "economic_limit": "low", "start_month": 2.5},
            "output": {"write_forecast": "yes"},
        })
        with pytest.raises(ValueError, match="Invalid configuration") as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "months ('abc') must be an integer" in message
        assert "economic_limit ('low') must be a number" in message
        assert "start_month (2.5) must be an integer" in message
        assert "write_forecast ('yes') must be true or false" in message

    def test_boolean_months_rejected(self):
        config = DeclineFitConfig()
        config.forecast.months = True
        with pytest.raises(ValueError, match="months.*must be an integer"):
            config.validate()

    def test_integer_economic_limit_accepted(self):
        config = DeclineFitConfig.from_dict({"forecast": {"economic_limit": 5}})
        config.validate()  # Should not raise

    def test_multiple_errors_reported(self):
        config = DeclineFitConfig()
        config.forecast.months = 0
        config.output.format = "xml"
        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "months" in message
        assert "format" in message


class TestFromDict:
    """Tests for DeclineFitConfig.from_dict()."""

    def test_empty_dict(self):
        config = DeclineFitConfig.from_dict({})
        assert config.forecast.months == 60
        assert config.output.format == "csv"

    def test_partial_section(self):
        config = DeclineFitConfig.from_dict({"forecast": {"months": 24}})
        assert config.forecast.months == 24
        assert config.forecast.economic_limit == 1.0

    def test_empty_section(self):
        config = DeclineFitConfig.from_dict({"output": None})
        assert config.output == OutputConfig()

    def test_unknown_key_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="declinefit.config"):
            config = DeclineFitConfig.from_dict({"forecast": {"months": 12, "horizon": 5}})

        assert config.forecast.months == 12
        assert "horizon" in caplog.text

    def test_unknown_section_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="declinefit.config"):
            DeclineFitConfig.from_dict({"plots": {"dpi": 300}})

        assert "plots" in caplog.text


class TestYaml:
    """Tests for YAML round-trips and the default template."""

    def test_to_yaml_and_back(self, tmp_path: Path):
        config = DeclineFitConfig()
        config.forecast.months = 12
        config.forecast.start_month = 6
        config.output.format = "json"

        path = tmp_path / "config.yaml"
        config.to_yaml(path)

        assert DeclineFitConfig.from_yaml(path) == config

    def test_from_yaml_string_months(self, tmp_path: Path):
        path = tmp_path / "typo.yaml"
        path.write_text('forecast:\n  months: "abc"\n')

        with pytest.raises(ValueError, match="Invalid configuration"):
            DeclineFitConfig.from_yaml(path)

    def test_from_yaml_validates(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text("forecast:\n  months: -1\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            DeclineFitConfig.from_yaml(path)

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert DeclineFitConfig.from_yaml(path) == DeclineFitConfig()

    def test_generate_default_config(self, tmp_path: Path):
        path = generate_default_config(tmp_path / "declinefit.yaml")

        assert path.exists()
        assert DeclineFitConfig.from_yaml(path) == DeclineFitConfig()

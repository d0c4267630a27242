"""Configuration file support for declinefit.

Supports YAML config files with forecast and output settings.
CLI flags override config file values.
"""

from dataclasses import asdict, dataclass, field, fields as dataclass_fields
import logging
from pathlib import Path
from typing import ClassVar, Literal

import yaml

from .core.forecast import DEFAULT_ECONOMIC_LIMIT, FORECAST_PRESETS

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    # YAML booleans load as bool, which subclasses int
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return _is_int(value) or isinstance(value, float)


@dataclass
class ForecastConfig:
    """Forecast parameters.

    Attributes:
        months: Forecast horizon in months (presets: 12, 24, 60)
        economic_limit: Rate below which the forecast stops (default 1.0)
        start_month: Month offset of the first forecast point. None uses the
            last observed month of the input series.
    """
    months: int = 60
    economic_limit: float = DEFAULT_ECONOMIC_LIMIT
    start_month: int | None = None

    @property
    def is_preset(self) -> bool:
        """Check if the horizon is one of the conventional presets."""
        return self.months in FORECAST_PRESETS


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        format: Export format - 'csv' or 'json' (default: csv)
        write_forecast: Write the forecast table alongside fit results
    """
    format: Literal["csv", "json"] = "csv"
    write_forecast: bool = True


@dataclass
class DeclineFitConfig:
    """Complete declinefit configuration.

    Attributes:
        forecast: Forecast parameters
        output: Output configuration
    """
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid
        """
        errors = []
        fc = self.forecast

        if not _is_int(fc.months):
            errors.append(f"forecast.months ({fc.months!r}) must be an integer")
        elif fc.months < 1:
            errors.append(
                f"forecast.months ({fc.months}) must be at least 1"
            )
        if not _is_number(fc.economic_limit):
            errors.append(
                f"forecast.economic_limit ({fc.economic_limit!r}) must be a number"
            )
        elif fc.economic_limit < 0:
            errors.append(
                f"forecast.economic_limit ({fc.economic_limit}) must not be negative"
            )
        if fc.start_month is not None:
            if not _is_int(fc.start_month):
                errors.append(
                    f"forecast.start_month ({fc.start_month!r}) must be an integer or null"
                )
            elif fc.start_month < 0:
                errors.append(
                    f"forecast.start_month ({fc.start_month}) must not be negative"
                )
        if self.output.format not in ("csv", "json"):
            errors.append(
                f"output.format ({self.output.format}) must be csv or json"
            )
        if not isinstance(self.output.write_forecast, bool):
            errors.append(
                f"output.write_forecast ({self.output.write_forecast!r}) must be true or false"
            )

        if errors:
            raise ValueError("Invalid configuration:\n  - " + "\n  - ".join(errors))

    @classmethod
    def from_yaml(cls, filepath: Path | str) -> "DeclineFitConfig":
        """Load configuration from YAML file.

        Args:
            filepath: Path to YAML config file

        Returns:
            DeclineFitConfig instance

        Raises:
            ValueError: If configuration values are invalid
        """
        filepath = Path(filepath)
        with open(filepath) as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data)
        config.validate()
        return config

    @staticmethod
    def _filter_unknown_keys(
        section_data: dict,
        dataclass_type: type,
        section_name: str,
    ) -> dict:
        """Filter unknown keys from a config section and warn about them.

        Args:
            section_data: Raw config dictionary for a section
            dataclass_type: The dataclass type to validate against
            section_name: Section name for error messages

        Returns:
            Filtered dictionary with only known keys
        """
        known_keys = {f.name for f in dataclass_fields(dataclass_type)}
        unknown_keys = set(section_data) - known_keys
        if unknown_keys:
            logger.warning(
                f"Unknown key(s) in '{section_name}' config section: "
                f"{', '.join(sorted(unknown_keys))}. "
                f"Valid keys: {', '.join(sorted(known_keys))}"
            )
        return {k: v for k, v in section_data.items() if k in known_keys}

    _SECTION_TYPES: ClassVar[dict[str, type]] = {
        "forecast": ForecastConfig,
        "output": OutputConfig,
    }

    @classmethod
    def from_dict(cls, data: dict) -> "DeclineFitConfig":
        """Create configuration from dictionary.

        Unknown sections and keys are logged as warnings and ignored.

        Args:
            data: Configuration dictionary

        Returns:
            DeclineFitConfig instance
        """
        config = cls()

        unknown_sections = set(data) - set(cls._SECTION_TYPES)
        if unknown_sections:
            logger.warning(
                f"Unknown top-level config section(s): {', '.join(sorted(unknown_sections))}. "
                f"Valid sections: {', '.join(sorted(cls._SECTION_TYPES))}"
            )

        for section, dtype in cls._SECTION_TYPES.items():
            if section in data:
                section_data = cls._filter_unknown_keys(data[section] or {}, dtype, section)
                setattr(config, section, dtype(**section_data))

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary."""
        return asdict(self)

    def to_yaml(self, filepath: Path | str) -> None:
        """Save configuration to YAML file.

        Args:
            filepath: Output file path
        """
        filepath = Path(filepath)
        with open(filepath, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def generate_default_config(filepath: Path | str) -> Path:
    """Generate a default configuration file.

    Args:
        filepath: Output file path

    Returns:
        Path to created file
    """
    filepath = Path(filepath)

    content = """# declinefit configuration file

# Production forecast
forecast:
  months: 60              # Horizon in months (presets: 12, 24, 60)
  economic_limit: 1.0     # Stop forecasting below this rate
  start_month: null       # null = start at the last observed month

# Output options
output:
  format: csv             # Export format: csv or json
  write_forecast: true    # Also write the forecast table
"""

    with open(filepath, "w") as f:
        f.write(content)

    return filepath

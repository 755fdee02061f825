"""
Configuration & Parameters for the Bedtime Estimator
====================================================

All configuration dataclasses for the linear sleep regression:
- RegressionCoefficients: Fitted intercept and per-feature coefficients
- InputLimits: Valid ranges and form defaults for the three inputs
- EstimatorConfig: Master configuration container

The coefficient table is fixed at model-fit time. It is consumed here as
opaque data; no training happens in this package.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple
import json
import logging
import math
import os

from core.exceptions import ModelUnavailable

logger = logging.getLogger(__name__)

COEFFICIENTS_PATH_ENV = "BEDTIME_COEFFICIENTS_PATH"

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class RegressionCoefficients:
    """
    Linear model: predicted_sleep_h = intercept + c_wake * wake_s
                                      + c_sleep * sleep_goal_h
                                      + c_coffee * cups
    """

    intercept: float = 0.4
    c_wake: float = -2.5e-6    # per second after midnight
    c_sleep: float = 0.97      # per hour of sleep goal
    c_coffee: float = 0.075    # per cup of coffee

    @classmethod
    def from_mapping(cls, table: Mapping[str, Any]) -> 'RegressionCoefficients':
        """Build from a parsed coefficient table, rejecting anything unusable."""
        if not isinstance(table, Mapping):
            raise ModelUnavailable(
                f"Coefficient table must be a mapping, got {type(table).__name__}"
            )

        values = {}
        for f in fields(cls):
            if f.name not in table:
                raise ModelUnavailable(f"Coefficient table is missing '{f.name}'")
            raw = table[f.name]
            if isinstance(raw, bool):
                raise ModelUnavailable(f"Coefficient '{f.name}' is not numeric: {raw!r}")
            try:
                value = float(raw)
            except (TypeError, ValueError, OverflowError) as e:
                raise ModelUnavailable(
                    f"Coefficient '{f.name}' is not numeric: {raw!r}"
                ) from e
            if not math.isfinite(value):
                raise ModelUnavailable(f"Coefficient '{f.name}' is not finite: {raw!r}")
            values[f.name] = value

        return cls(**values)

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class InputLimits:
    """Valid input ranges and the defaults shown by the form"""

    wake_range_seconds: Tuple[int, int] = (0, SECONDS_PER_DAY)  # half-open
    sleep_range_hours: Tuple[float, float] = (4.0, 12.0)
    sleep_step_hours: float = 0.25
    coffee_range_cups: Tuple[int, int] = (0, 20)

    default_wake_seconds: int = 7 * SECONDS_PER_HOUR  # 07:00
    default_sleep_hours: float = 8.0
    default_coffee_cups: int = 0


@dataclass
class EstimatorConfig:
    """Master configuration container"""
    coefficients: Optional[RegressionCoefficients]
    input_limits: InputLimits = field(default_factory=InputLimits)
    source: str = "builtin"

    @classmethod
    def default_config(cls):
        """Pre-trained coefficient table shipped with the package."""
        return cls(coefficients=RegressionCoefficients())

    @classmethod
    def unavailable(cls, reason: str = "unavailable"):
        """Config with no coefficient table; every estimate falls back."""
        return cls(coefficients=None, source=reason)

    @classmethod
    def from_json_file(cls, path):
        """
        Load a coefficient table from a JSON object such as
        {"intercept": 0.4, "c_wake": -2.5e-06, "c_sleep": 0.97, "c_coffee": 0.075}
        """
        path = Path(path)
        try:
            with path.open('r', encoding='utf-8') as fh:
                table = json.load(fh)
        except FileNotFoundError as e:
            raise ModelUnavailable(f"Coefficient table not found: {path}") from e
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ModelUnavailable(f"Coefficient table unreadable: {path} ({e})") from e

        coefficients = RegressionCoefficients.from_mapping(table)
        logger.info(f"Loaded regression coefficients from {path}")
        return cls(coefficients=coefficients, source=str(path))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None):
        """Use BEDTIME_COEFFICIENTS_PATH when set, else the built-in table."""
        environ = os.environ if environ is None else environ
        path = environ.get(COEFFICIENTS_PATH_ENV, "").strip()
        if not path:
            return cls.default_config()
        return cls.from_json_file(path)

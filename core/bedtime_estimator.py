"""
Bedtime Estimation Engine
=========================

Evaluates the pre-trained linear sleep model and turns its prediction into a
recommended bedtime:

    predicted_sleep = intercept + c_wake * wake_s + c_sleep * goal_h + c_coffee * cups
    bedtime         = (wake_s - predicted_sleep * 3600) mod 24 h

Pure arithmetic over the fixed coefficient table; no state is kept between
calls, so a UI can simply call again on every input change.
"""

from numbers import Real
from typing import Optional
import logging
import math

import numpy as np

from core.exceptions import (
    BedtimeEstimatorError,
    FALLBACK_MESSAGE,
    InvalidInput,
    ModelUnavailable,
)
from core.parameters import (
    EstimatorConfig,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
)
from core.time_of_day import CLOCK_12H, CLOCK_24H, format_time_of_day
from models.data_models import BedtimeRecommendation, BedtimeRequest

logger = logging.getLogger(__name__)


def _finite_number(field_name: str, value, reason: str) -> float:
    """Convert a real-valued argument to float, raising InvalidInput on anything else."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInput(field_name, value, reason)
    try:
        number = float(value)
    except (OverflowError, ValueError, TypeError) as e:
        raise InvalidInput(field_name, value, "too large to evaluate") from e
    if not math.isfinite(number):
        raise InvalidInput(field_name, value, "must be finite")
    return number


class BedtimeEstimator:
    """
    Linear-regression bedtime calculator.

    The coefficient vector is built once from the config; a config without
    coefficients yields an estimator whose every call raises
    ModelUnavailable (or shows the fallback via estimate_display).
    """

    def __init__(self, config: EstimatorConfig = None):
        self.config = config or EstimatorConfig.default_config()
        self.limits = self.config.input_limits

        coefficients = self.config.coefficients
        if coefficients is None:
            self._weights = None
            self._intercept = None
        else:
            self._intercept = coefficients.intercept
            self._weights = np.array(
                [coefficients.c_wake, coefficients.c_sleep, coefficients.c_coffee],
                dtype=float,
            )
            self._weights.setflags(write=False)

    @property
    def is_available(self) -> bool:
        return self._weights is not None

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, wake_time, sleep_goal, caffeine) -> BedtimeRequest:
        """Check ranges and return a normalized request, or raise InvalidInput."""
        wake_lo, wake_hi = self.limits.wake_range_seconds
        sleep_lo, sleep_hi = self.limits.sleep_range_hours
        coffee_lo, coffee_hi = self.limits.coffee_range_cups

        wake = _finite_number('wake_time', wake_time, "must be seconds since midnight")
        if not (wake_lo <= wake < wake_hi):
            raise InvalidInput('wake_time', wake_time, f"must be in [{wake_lo}, {wake_hi})")

        sleep = _finite_number('sleep_goal', sleep_goal, "must be a number of hours")
        if not (sleep_lo <= sleep <= sleep_hi):
            raise InvalidInput('sleep_goal', sleep_goal, f"must be in [{sleep_lo}, {sleep_hi}]")

        # 3.0 cups is fine, 2.5 cups is not
        cups = _finite_number('caffeine', caffeine, "must be a whole number of cups")
        if not cups.is_integer():
            raise InvalidInput('caffeine', caffeine, "must be a whole number of cups")
        if not (coffee_lo <= cups <= coffee_hi):
            raise InvalidInput('caffeine', caffeine, f"must be in [{coffee_lo}, {coffee_hi}]")

        return BedtimeRequest(
            wake_time_seconds=wake_time,
            sleep_goal_hours=sleep,
            coffee_cups=int(cups),
        )

    # ------------------------------------------------------------------
    # Model evaluation
    # ------------------------------------------------------------------

    def _evaluate(self, request: BedtimeRequest) -> float:
        if not self.is_available:
            raise ModelUnavailable(
                f"No regression coefficients loaded (source: {self.config.source})"
            )

        features = np.array(
            [request.wake_time_seconds, request.sleep_goal_hours, request.coffee_cups],
            dtype=float,
        )
        predicted = float(self._intercept + np.dot(self._weights, features))

        if not math.isfinite(predicted):
            raise ModelUnavailable(
                f"Model produced a non-finite prediction: {predicted}",
                context={"request": request},
            )
        if predicted <= 0.0 or predicted > 24.0:
            logger.warning(
                f"Predicted sleep of {predicted:.2f}h is outside a single day; "
                f"bedtime will wrap"
            )
        return predicted

    def predict_sleep(self, wake_time, sleep_goal, caffeine) -> float:
        """Predicted actual sleep in hours."""
        return self._evaluate(self.validate(wake_time, sleep_goal, caffeine))

    def recommend(self, request: BedtimeRequest) -> BedtimeRecommendation:
        request = self.validate(
            request.wake_time_seconds, request.sleep_goal_hours, request.coffee_cups
        )
        predicted = self._evaluate(request)
        bedtime_seconds = (request.wake_time_seconds - predicted * SECONDS_PER_HOUR) % SECONDS_PER_DAY

        logger.debug(
            f"wake={request.wake_time_seconds}s goal={request.sleep_goal_hours}h "
            f"coffee={request.coffee_cups} -> sleep={predicted:.3f}h "
            f"bedtime={format_time_of_day(bedtime_seconds)}"
        )
        return BedtimeRecommendation(
            request=request,
            predicted_sleep_hours=predicted,
            bedtime_seconds=bedtime_seconds,
        )

    def estimate(self, wake_time, sleep_goal, caffeine, clock: str = CLOCK_24H) -> str:
        """
        Recommended bedtime as a time of day ('HH:MM' by default).

        Raises:
            InvalidInput: an argument is outside its range
            ModelUnavailable: no usable coefficient table
        """
        if clock not in (CLOCK_24H, CLOCK_12H):
            raise InvalidInput('clock', clock, f"must be '{CLOCK_24H}' or '{CLOCK_12H}'")

        request = BedtimeRequest(
            wake_time_seconds=wake_time,
            sleep_goal_hours=sleep_goal,
            coffee_cups=caffeine,
        )
        return self.recommend(request).formatted(clock)

    def estimate_display(self, wake_time, sleep_goal, caffeine, clock: str = CLOCK_24H) -> str:
        """UI text: the recommendation, or the fallback message on any estimator error."""
        try:
            bedtime = self.estimate(wake_time, sleep_goal, caffeine, clock)
        except BedtimeEstimatorError as e:
            logger.error(f"Bedtime estimate failed: {e.message}")
            return e.user_message
        return f"Your ideal bedtime is {bedtime}"


def load_estimator(config: Optional[EstimatorConfig] = None) -> BedtimeEstimator:
    """
    Build an estimator from `config`, or from the environment when omitted.

    A coefficient table that fails to load is logged and replaced by an
    unavailable config so callers keep running and show the fallback.
    """
    if config is None:
        try:
            config = EstimatorConfig.from_env()
        except ModelUnavailable as e:
            logger.error(f"Regression coefficients unavailable: {e.message}")
            config = EstimatorConfig.unavailable(reason=e.message)
    return BedtimeEstimator(config)


__all__ = ['BedtimeEstimator', 'load_estimator', 'FALLBACK_MESSAGE']

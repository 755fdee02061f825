"""
data_models.py - Core Data Structures
======================================

Inputs and results of a bedtime estimate.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional
import math


# ============================================================================
# REQUEST
# ============================================================================

@dataclass(frozen=True)
class BedtimeRequest:
    """The three form inputs"""
    wake_time_seconds: int      # Seconds since midnight, [0, 86400)
    sleep_goal_hours: float     # [4, 12]
    coffee_cups: int            # [0, 20]

    @classmethod
    def default(cls, limits: Optional[Any] = None) -> 'BedtimeRequest':
        """07:00 wake, 8 hours, no coffee"""
        limits = limits or _default_limits()
        return cls(
            wake_time_seconds=limits.default_wake_seconds,
            sleep_goal_hours=limits.default_sleep_hours,
            coffee_cups=limits.default_coffee_cups,
        )

    def clamped(self, limits: Optional[Any] = None) -> 'BedtimeRequest':
        """
        Force every field into range the way the form widgets do:
        wake time wraps around midnight, the sleep goal snaps to the
        stepper grid, coffee is pinned to the picker's bounds.
        """
        limits = limits or _default_limits()
        wake_lo, wake_hi = limits.wake_range_seconds
        sleep_lo, sleep_hi = limits.sleep_range_hours
        coffee_lo, coffee_hi = limits.coffee_range_cups

        # Non-finite readings fall back to the form defaults
        wake = _finite_or(self.wake_time_seconds, limits.default_wake_seconds)
        sleep = _finite_or(self.sleep_goal_hours, limits.default_sleep_hours)
        coffee = _finite_or(self.coffee_cups, limits.default_coffee_cups)

        wake = wake_lo + int(wake - wake_lo) % (wake_hi - wake_lo)

        step = limits.sleep_step_hours
        sleep = min(max(sleep, sleep_lo), sleep_hi)
        if step > 0:
            sleep = sleep_lo + round((sleep - sleep_lo) / step) * step
            sleep = min(sleep, sleep_hi)

        coffee = int(min(max(round(coffee), coffee_lo), coffee_hi))

        return replace(
            self,
            wake_time_seconds=wake,
            sleep_goal_hours=sleep,
            coffee_cups=coffee,
        )


def _finite_or(value, default) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return float(default)
    return number if math.isfinite(number) else float(default)


def _default_limits():
    # Lazy import to avoid circular dependency (core imports this module)
    from core.parameters import InputLimits
    return InputLimits()


# ============================================================================
# RESULT
# ============================================================================

@dataclass(frozen=True)
class BedtimeRecommendation:
    """Model output for one request"""
    request: BedtimeRequest
    predicted_sleep_hours: float
    bedtime_seconds: float      # Wrapped into [0, 86400)

    @property
    def bedtime(self) -> str:
        return self.formatted()

    def formatted(self, clock: Optional[str] = None) -> str:
        from core.time_of_day import CLOCK_24H, format_time_of_day
        return format_time_of_day(self.bedtime_seconds, clock or CLOCK_24H)

    @property
    def message(self) -> str:
        return f"Your ideal bedtime is {self.bedtime}"

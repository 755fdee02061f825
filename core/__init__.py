"""
Core Bedtime Estimator Components
=================================

Main exports for the linear sleep-regression bedtime calculator.
"""

from core.exceptions import (
    BedtimeEstimatorError,
    InvalidInput,
    ModelUnavailable,
    FALLBACK_MESSAGE,
)

from core.parameters import (
    RegressionCoefficients,
    InputLimits,
    EstimatorConfig,
)

from core.time_of_day import (
    seconds_from_hhmm,
    seconds_from_datetime,
    format_time_of_day,
)

from core.bedtime_estimator import BedtimeEstimator, load_estimator

__all__ = [
    # Errors
    'BedtimeEstimatorError',
    'InvalidInput',
    'ModelUnavailable',
    'FALLBACK_MESSAGE',
    # Parameters
    'RegressionCoefficients',
    'InputLimits',
    'EstimatorConfig',
    # Time of day
    'seconds_from_hhmm',
    'seconds_from_datetime',
    'format_time_of_day',
    # Main model
    'BedtimeEstimator',
    'load_estimator',
]

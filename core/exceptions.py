"""
Exception hierarchy for the bedtime estimator

Each error carries a user_message that a UI can show as-is.
"""

from typing import Any, Dict, Optional

FALLBACK_MESSAGE = "Error calculating bedtime"


class BedtimeEstimatorError(Exception):
    """Base exception for all estimator errors"""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.user_message = user_message or FALLBACK_MESSAGE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "context": self.context,
        }


class InvalidInput(BedtimeEstimatorError):
    """An argument is outside its valid range"""

    def __init__(self, field_name: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid {field_name}={_describe(value)}: {reason}",
            context={"field": field_name, "value": value},
        )
        self.field_name = field_name


def _describe(value: Any) -> str:
    try:
        return repr(value)
    except ValueError:
        # int above the interpreter's digit limit
        return f"<{type(value).__name__} too large to display>"


class ModelUnavailable(BedtimeEstimatorError):
    """Regression coefficients are missing or corrupt"""

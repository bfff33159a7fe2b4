"""
Workbench Exceptions.

Domain errors are raised as WorkbenchError so API views can render them
consistently.
"""

from typing import Any


class WorkbenchError(Exception):
    """
    Base exception for all Workbench errors.

    Usage:
        raise WorkbenchError("INVALID_STATUS", current="completed", expected="waiting")

    Attributes:
        code: Error code (INVALID_STATUS, INVALID_DATES, etc.)
        details: Additional context as keyword arguments
    """

    def __init__(self, code: str, **details: Any):
        self.code = code
        self.details = details
        message = f"{code}: {details}" if details else code
        super().__init__(message)

    def as_dict(self) -> dict:
        """Return error as dictionary for API responses."""
        return {"code": self.code, **self.details}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"WorkbenchError({self.code}: {details_str})"
        return f"WorkbenchError({self.code})"


# Error codes
# INVALID_STATUS: Work item transition not allowed from its current status
# INVALID_DATES: Schedule dates missing, reversed or on a weekend
# MISSING_DURATION: Work item has neither working days nor hours
# EMPTY_VISIBLE_ROLES: Calendar event built without any viewer role
# INVALID_VISIBLE_ROLES: Visible roles given as a bare string or with blank names

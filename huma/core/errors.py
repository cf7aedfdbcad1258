from __future__ import annotations


class AppError(Exception):
    """
    Error raised by the service layer and rendered by the app's exception handler.
    """

    def __init__(self, message: str, status_code: int = 500, error_code: str = "INTERNAL_ERROR"):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code


class PeriodValidationError(AppError):
    """
    A period, anchor date or history window the caller can fix.
    """

    def __init__(self, message: str):
        super().__init__(message, status_code=400, error_code="VALIDATION_ERROR")

"""
app/exceptions.py

Exception hierarchy for the mobile post directory.

Every exception carries exactly one error code; the HTTP layer renders it as
an error envelope with the code's status.
"""

from __future__ import annotations

from app.error_codes import (
    STORAGE_UNAVAILABLE_MESSAGE,
    ErrorCode,
    default_message_for,
    http_status_for,
)


class MobilePostError(Exception):
    """
    Base exception; subclasses pin the error code.
    """

    code: ErrorCode = ErrorCode.SERVER_ERROR

    def __init__(self, message: str | None = None, *, field: str | None = None) -> None:
        self.message = message or default_message_for(self.code)
        self.field = field
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return http_status_for(self.code)


class ValidationFailure(MobilePostError):
    """Malformed or out-of-range input, rejected before storage access."""

    code = ErrorCode.INVALID_PARAMETER


class MissingRequiredFieldError(ValidationFailure):
    code = ErrorCode.MISSING_REQUIRED_FIELD


class NoUpdatableFieldsError(ValidationFailure):
    code = ErrorCode.NO_UPDATABLE_FIELDS


class InvalidParameterError(ValidationFailure):
    code = ErrorCode.INVALID_PARAMETER


class InvalidTimeFormatError(ValidationFailure):
    code = ErrorCode.INVALID_TIME_FORMAT


class InvalidLanguageError(ValidationFailure):
    code = ErrorCode.INVALID_LANGUAGE


class InvalidNumericValueError(ValidationFailure):
    code = ErrorCode.INVALID_NUMERIC_VALUE


class RecordNotFoundError(MobilePostError):
    code = ErrorCode.RECORD_NOT_FOUND

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Mobile post with id {record_id} not found.")
        self.record_id = record_id


class DuplicateRecordError(MobilePostError):
    code = ErrorCode.DUPLICATE_RECORD


class StorageError(MobilePostError):
    """Unexpected storage failure."""

    code = ErrorCode.SERVER_ERROR


class StorageUnavailableError(StorageError):
    """Storage could not be reached; callers may retry."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or STORAGE_UNAVAILABLE_MESSAGE)

    @property
    def status_code(self) -> int:
        return 503


class BatchSourceError(StorageUnavailableError):
    """The import batch source could not be read."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Import source is unavailable. Please try again later.")


class UnauthorizedError(MobilePostError):
    code = ErrorCode.UNAUTHORIZED

"""
app/error_codes.py

Process-wide error-code registry.

Codes are grouped by category prefix:

    01xx  validation      -> 400
    02xx  not found       -> 404
    03xx  conflict        -> 409
    04xx  server/storage  -> 500 (503 for storage connectivity)
    05xx  unauthorized    -> 401

The lookup tables are read-only views built once at import time.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ErrorCode(str, Enum):
    MISSING_REQUIRED_FIELD = "0101"
    NO_UPDATABLE_FIELDS = "0102"
    INVALID_PARAMETER = "0103"
    INVALID_TIME_FORMAT = "0104"
    INVALID_LANGUAGE = "0105"
    INVALID_NUMERIC_VALUE = "0106"
    RECORD_NOT_FOUND = "0201"
    DUPLICATE_RECORD = "0301"
    SERVER_ERROR = "0401"
    UNAUTHORIZED = "0501"


ERROR_MESSAGES: Mapping[ErrorCode, str] = MappingProxyType(
    {
        ErrorCode.MISSING_REQUIRED_FIELD: "Required field is missing.",
        ErrorCode.NO_UPDATABLE_FIELDS: "No updatable fields were provided.",
        ErrorCode.INVALID_PARAMETER: "Invalid parameter value.",
        ErrorCode.INVALID_TIME_FORMAT: "Time must be a valid time in HH:MM format.",
        ErrorCode.INVALID_LANGUAGE: "Invalid language. Allowed values: en, tc, sc, all.",
        ErrorCode.INVALID_NUMERIC_VALUE: "Invalid numeric value.",
        ErrorCode.RECORD_NOT_FOUND: "Record not found.",
        ErrorCode.DUPLICATE_RECORD: "Duplicate record.",
        ErrorCode.SERVER_ERROR: "Internal server error.",
        ErrorCode.UNAUTHORIZED: "Unauthorized.",
    }
)

_STATUS_BY_CATEGORY: Mapping[str, int] = MappingProxyType(
    {
        "01": 400,
        "02": 404,
        "03": 409,
        "04": 500,
        "05": 401,
    }
)

ERROR_HTTP_STATUS: Mapping[ErrorCode, int] = MappingProxyType(
    {code: _STATUS_BY_CATEGORY[code.value[:2]] for code in ErrorCode}
)

STORAGE_UNAVAILABLE_MESSAGE = "Database connection error. Please try again later."


def http_status_for(code: ErrorCode) -> int:
    """
    Return the HTTP status for an error code.
    """

    return ERROR_HTTP_STATUS[code]


def default_message_for(code: ErrorCode) -> str:
    return ERROR_MESSAGES[code]

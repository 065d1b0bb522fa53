"""
app/validators package marker.
"""

from app.validators.mobile_post_validator import (
    FieldViolation,
    MobilePostValidator,
    parse_float,
    parse_int,
    time_to_minutes,
    validate_coordinates,
    validate_day_of_week,
    validate_language,
    validate_pagination,
    validate_required_groups,
    validate_time,
)

__all__ = [
    "FieldViolation",
    "MobilePostValidator",
    "parse_float",
    "parse_int",
    "time_to_minutes",
    "validate_coordinates",
    "validate_day_of_week",
    "validate_language",
    "validate_pagination",
    "validate_required_groups",
    "validate_time",
]

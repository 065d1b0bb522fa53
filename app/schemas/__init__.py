"""
app/schemas package marker.
"""

from app.schemas.envelope import (
    ApiEnvelope,
    ErrorEnvelope,
    ErrorHeader,
    PageMeta,
    SuccessEnvelope,
    SuccessHeader,
    build_error,
    build_success,
    error_response,
    success_response,
)
from app.schemas.mobile_post import (
    ImportIrregularityResponse,
    ImportReportResponse,
    LocalizedMobilePost,
    MobilePostCreateRequest,
    MobilePostUpdateRequest,
    MultilingualMobilePost,
)

__all__ = [
    "ApiEnvelope",
    "ErrorEnvelope",
    "ErrorHeader",
    "ImportIrregularityResponse",
    "ImportReportResponse",
    "LocalizedMobilePost",
    "MobilePostCreateRequest",
    "MobilePostUpdateRequest",
    "MultilingualMobilePost",
    "PageMeta",
    "SuccessEnvelope",
    "SuccessHeader",
    "build_error",
    "build_success",
    "error_response",
    "success_response",
]

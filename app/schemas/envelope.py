"""
app/schemas/envelope.py

Uniform response envelope.

A response is either a success (``header.success`` is True, carries
``message``, ``result`` and optionally ``meta``) or an error
(``header.success`` is False, carries ``err_code``/``err_msg`` and never a
``result``).
"""

from __future__ import annotations

from typing import Any, Literal, Union

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, model_serializer

from app.error_codes import ErrorCode, default_message_for, http_status_for


class PageMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0, alias="totalPages")


class SuccessHeader(BaseModel):
    success: Literal[True] = True
    message: str


class ErrorHeader(BaseModel):
    success: Literal[False] = False
    err_code: ErrorCode
    err_msg: str


class SuccessEnvelope(BaseModel):
    header: SuccessHeader
    result: Any
    meta: PageMeta | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_meta(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if self.meta is None:
            data.pop("meta", None)
        return data


class ErrorEnvelope(BaseModel):
    header: ErrorHeader


ApiEnvelope = Union[SuccessEnvelope, ErrorEnvelope]


def build_success(message: str, result: Any, meta: PageMeta | None = None) -> SuccessEnvelope:
    return SuccessEnvelope(
        header=SuccessHeader(message=message),
        result=jsonable_encoder(result),
        meta=meta,
    )


def build_error(code: ErrorCode, message: str | None = None) -> ErrorEnvelope:
    return ErrorEnvelope(
        header=ErrorHeader(err_code=code, err_msg=message or default_message_for(code)),
    )


def success_response(
    message: str,
    result: Any,
    *,
    meta: PageMeta | None = None,
    status_code: int = 200,
) -> JSONResponse:
    envelope = build_success(message, result, meta)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(mode="json", by_alias=True),
    )


def error_response(
    code: ErrorCode,
    message: str | None = None,
    *,
    status_code: int | None = None,
) -> JSONResponse:
    envelope = build_error(code, message)
    return JSONResponse(
        status_code=status_code or http_status_for(code),
        content=envelope.model_dump(mode="json"),
    )

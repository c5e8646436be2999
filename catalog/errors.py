from __future__ import annotations

import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .categories.exceptions import (
    CategoryNotFoundError,
    CircularReferenceError,
    HierarchyDepthExceededError,
)

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    RESOURCE_NOT_FOUND = (4006, 404, "The requested resource was not found")
    CIRCULAR_CATEGORY_REFERENCE = (
        5010, 500, "The category hierarchy contains a circular reference",
    )
    CATEGORY_DEPTH_EXCEEDED = (
        5011, 500, "The category hierarchy exceeds the maximum allowed depth",
    )

    def __init__(self, code: int, http_status: int, description: str) -> None:
        self.code = code
        self.http_status = http_status
        self.description = description


class ExceptionResponse(BaseModel):
    business_error_code: int
    business_error_description: str
    error: str


def _error_response(code: ErrorCode, exc: Exception) -> JSONResponse:
    body = ExceptionResponse(
        business_error_code=code.code,
        business_error_description=code.description,
        error=str(exc),
    )
    return JSONResponse(status_code=code.http_status, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Map hierarchy failures to HTTP: not-found is 404, corrupt data is 500."""

    @app.exception_handler(CategoryNotFoundError)
    async def _not_found(request: Request, exc: CategoryNotFoundError) -> JSONResponse:
        return _error_response(ErrorCode.RESOURCE_NOT_FOUND, exc)

    @app.exception_handler(CircularReferenceError)
    async def _circular(request: Request, exc: CircularReferenceError) -> JSONResponse:
        logger.error("Data integrity fault on %s: %s", request.url.path, exc)
        return _error_response(ErrorCode.CIRCULAR_CATEGORY_REFERENCE, exc)

    @app.exception_handler(HierarchyDepthExceededError)
    async def _too_deep(request: Request, exc: HierarchyDepthExceededError) -> JSONResponse:
        logger.error("Data integrity fault on %s: %s", request.url.path, exc)
        return _error_response(ErrorCode.CATEGORY_DEPTH_EXCEEDED, exc)

#!/usr/bin/env python3
"""
Error handlers for the web application.

Every error is returned in the same envelope:
    {"success": false, "error": "...", "type": "..."}
"""

import logging
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse

from core.exceptions import MatchingError, ProfileNotFound, StoreUnavailable

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": error,
            "type": error_type
        }
    )


async def matching_exception_handler(
    request: Request,
    exc: MatchingError
) -> JSONResponse:
    """
    Handle core matching exceptions.

    ProfileNotFound is the normal state of a user who has not finished
    onboarding, so it maps to a 404 without an error log.
    """
    if isinstance(exc, ProfileNotFound):
        logger.info(f"No profile for {exc.user_id} in {request.url.path}")
        return _error_response(404, str(exc), exc.__class__.__name__)

    status_code = 500
    if isinstance(exc, StoreUnavailable):
        status_code = 503

    logger.error(f"Matching error in {request.url.path}: {exc}", exc_info=True)
    return _error_response(status_code, str(exc), exc.__class__.__name__)


async def value_error_handler(
    request: Request,
    exc: ValueError
) -> JSONResponse:
    """Handle invalid input raised by the core (e.g. pairing a user with itself)."""
    return _error_response(400, str(exc), "InvalidRequest")


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """
    Handle FastAPI HTTP exceptions with consistent format.
    """
    return _error_response(exc.status_code, exc.detail, "HTTPException")


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")

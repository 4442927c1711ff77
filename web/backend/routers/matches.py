#!/usr/bin/env python3
"""
Match endpoints - ranked suggestions, pairwise preview and regeneration.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from core.config_loader import WebConfig
from ..config import get_config
from ..dependencies import get_match_service
from ..services.match_service import MatchService
from ..models.responses import (
    BatchRegenerationResponse,
    PreviewResponse,
    RegenerationResponse,
    SuggestionsResponse,
)

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/api/matches", tags=["matches"])


def add_rate_limit_handlers(app):
    """Add rate limit exception handlers to the FastAPI app."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


async def _rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": f"Rate limit exceeded: {exc.detail}",
            "type": "RateLimitExceeded"
        }
    )


# Set by create_app() from the config the app was built with
_rate_limits = {}


def configure_rate_limits(web_config: WebConfig) -> None:
    _rate_limits['regenerate_all'] = web_config.regenerate_all_rate_limit


def _regenerate_all_limit() -> str:
    limit = _rate_limits.get('regenerate_all')
    if limit is None:
        limit = get_config().web.regenerate_all_rate_limit
    return limit


@router.post("/regenerate-all", response_model=BatchRegenerationResponse)
@limiter.limit(_regenerate_all_limit)
def regenerate_all_matches(
    request: Request,
    service: MatchService = Depends(get_match_service)
):
    """
    Recompute suggestions for every profile.

    Runs synchronously; per-user failures are reported in `failures`
    rather than failing the request.
    """
    logger.info("Full match regeneration requested")
    return service.regenerate_all()


@router.get("/{user_id}", response_model=SuggestionsResponse)
def get_suggestions(
    user_id: str,
    include_advanced: bool = Query(
        default=False,
        description="Also return pending/connected pairs"
    ),
    limit: Optional[int] = Query(default=None, ge=1, le=500, description="Maximum results to return"),
    service: MatchService = Depends(get_match_service)
):
    """
    Get a user's match suggestions, best first.

    Ordered by compatibility score, then the candidate's profile
    completeness. Returns 404 when the user has not created a profile yet.
    """
    return service.get_suggestions(user_id, include_advanced=include_advanced, limit=limit)


@router.get("/{user_id}/preview/{other_id}", response_model=PreviewResponse)
def preview_pair(
    user_id: str,
    other_id: str,
    service: MatchService = Depends(get_match_service)
):
    """
    Score other_id for user_id without storing anything.

    Non-qualifying pairs are still scored; `qualifies` tells whether a
    suggestion would be created.
    """
    return service.get_preview(user_id, other_id)


@router.post("/{user_id}/regenerate", response_model=RegenerationResponse)
def regenerate_user_matches(
    user_id: str,
    service: MatchService = Depends(get_match_service)
):
    """
    Recompute and reconcile a user's suggestions.

    Called after a profile update. A user without a profile is a no-op
    (`profile_found: false`).
    """
    return service.regenerate_user(user_id)

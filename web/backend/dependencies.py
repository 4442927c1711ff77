#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

The AppContext lives on app.state. create_app() can be handed a prebuilt
context; otherwise one is built from config on first use. Tests override
get_regenerator / get_suggestion_service to swap in fakes.
"""

import threading
from fastapi import Depends, Request

from core.app_context import AppContext
from core.regenerator import MatchRegenerator, SuggestionService
from .config import get_config
from .services.match_service import MatchService

_context_lock = threading.Lock()


def get_app_context(request: Request) -> AppContext:
    """Return the application's AppContext, building it lazily."""
    app = request.app
    context = getattr(app.state, 'context', None)
    if context is None:
        with _context_lock:
            context = getattr(app.state, 'context', None)
            if context is None:
                context = AppContext.build(get_config())
                app.state.context = context
    return context


def get_regenerator(request: Request) -> MatchRegenerator:
    return get_app_context(request).regenerator


def get_suggestion_service(request: Request) -> SuggestionService:
    return get_app_context(request).suggestion_service


def get_match_service(
    regenerator: MatchRegenerator = Depends(get_regenerator),
    suggestions: SuggestionService = Depends(get_suggestion_service)
) -> MatchService:
    return MatchService(regenerator, suggestions)

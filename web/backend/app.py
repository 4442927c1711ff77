#!/usr/bin/env python3
"""
StudyMatch Matches API - FastAPI Application

Exposes ranked match suggestions, pairwise previews and regeneration.

Usage:
    python main.py serve
    uvicorn web.backend.app:app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException

from core.app_context import AppContext
from core.exceptions import MatchingError
from .config import get_config
from .exceptions import (
    matching_exception_handler,
    value_error_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import matches_router, add_rate_limit_handlers, configure_rate_limits

logger = logging.getLogger(__name__)


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        context: Prebuilt AppContext. When omitted one is built from
            config.yaml on the first request.
    """
    app = FastAPI(
        title="StudyMatch API",
        description="API for study partner match suggestions",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.context = context

    # Configure rate limiting
    config = context.config if context is not None else get_config()
    configure_rate_limits(config.web)
    add_rate_limit_handlers(app)

    # Register exception handlers
    app.add_exception_handler(MatchingError, matching_exception_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(matches_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "studymatch-api"}

    return app


app = create_app()


def main():
    """Run the web server."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    config = get_config()

    logger.info(f"Starting StudyMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()

"""API route handlers."""

from .matches import router as matches_router, add_rate_limit_handlers, configure_rate_limits

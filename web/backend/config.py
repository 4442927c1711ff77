#!/usr/bin/env python3
"""
Configuration access for the web application.

The web layer reads the same config.yaml as the CLI, through
core.config_loader, so scoring weights stay identical in both.
"""

from pathlib import Path
from functools import lru_cache

from core.config_loader import AppConfig, load_config


@lru_cache()
def get_config() -> AppConfig:
    """
    Get application configuration with caching.

    Loads from the project's config.yaml and applies environment variable
    overrides. Result is cached for the life of the process.
    """
    return load_config(str(get_project_root() / 'config.yaml'))


def get_project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent.parent

"""Cargo relay API package.

This module provides the FastAPI service layer around the core cargo
enrichment and webhook delivery pipeline.
"""

from .server import create_app  # noqa: F401

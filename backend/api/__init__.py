"""
Stamp Card API package.

Provides the FastAPI application for the conference stamp card service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]

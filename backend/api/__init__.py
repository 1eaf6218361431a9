"""
Chatter API package.

Provides the FastAPI application serving the GraphQL endpoint.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]

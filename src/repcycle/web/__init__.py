"""Web API for repcycle."""

from .app import create_app

__all__ = ["create_app"]

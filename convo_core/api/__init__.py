"""
REST API for conversation management.

Usage:
    uvicorn convo_core.api.app:app --port 8432
"""

from .app import app, create_app

__all__ = ['app', 'create_app']

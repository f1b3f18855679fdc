"""
Block Directory HTTP Server

FastAPI application and routes for the block directory service.
"""

from .main import create_app

__all__ = ["create_app"]

"""
HTTP API of the overlay engine

    from api import create_app
"""

from .main import create_app

__all__ = ["create_app"]

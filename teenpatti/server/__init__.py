"""
Teen Patti Server - FastAPI + WebSocket Server Layer
"""

from teenpatti.server.app import app, create_app

__all__ = ["app", "create_app"]

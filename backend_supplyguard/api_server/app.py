"""
FastAPI/ASGI application entrypoint.

Builds the app from process settings (read once here).
Run with: uvicorn backend_supplyguard.api_server.app:app --host 0.0.0.0 --port 5000
"""

from backend_supplyguard.api_server.server import create_app

app = create_app()

__all__ = ["app"]

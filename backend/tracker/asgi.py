"""ASGI entry point for servers: `uvicorn tracker.asgi:app`."""

from .main import create_app

app = create_app()

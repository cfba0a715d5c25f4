"""
ASGI entry point.

The FastAPI application is built by `actions_api.create_app()`; this module
creates it from the environment so `uvicorn api:app` works.
"""

from actions_api import create_app

app = create_app()

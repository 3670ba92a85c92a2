"""
Name: Backend ASGI Entrypoint (app.main)

Responsibilities:
  - Re-export the FastAPI app so `uvicorn app.main:app` works
  - Keep the import path stable for servers, scripts and tests

Notes/Constraints:
  - No configuration or IO should live here
"""

from app.api.main import app

__all__ = ["app"]

"""
App assembly entry point.

Re-exports the FastAPI `app` from `bitbinder.api.main` for ASGI servers
(`uvicorn app:app`).
"""

from bitbinder.api.main import app  # noqa: F401

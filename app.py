"""
App assembly entry point.

Re-exports the FastAPI `app` from `users_service.api.main` so
``uvicorn app:app`` works from the repository root.
"""

from users_service.api.main import app  # noqa: F401

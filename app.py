"""
App assembly entry point.

Re-exports the FastAPI `app` from `cadernos.api.main` so servers can be
pointed at `app:app`.
"""

from cadernos.api.main import app  # noqa: F401

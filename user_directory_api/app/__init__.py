"""
Application package initializer.

The project is split into a service layer (``services``) that owns the
in‑memory user records, Pydantic payload schemas (``schemas``) and a
versioned HTTP layer (``api/v1``) that translates requests into service
calls.  ``core`` holds configuration and logging setup.
"""

from .main import app, create_app  # noqa: F401

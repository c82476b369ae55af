"""
API package for the workout tracker.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: exception handlers producing the error envelope
- routers/: API route handlers
- schemas/: request and response models
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_clock,
    get_current_principal,
    get_db_session,
    get_settings,
    require_admin,
    require_permissions,
)

__all__ = [
    "get_clock",
    "get_current_principal",
    "get_db_session",
    "get_settings",
    "require_admin",
    "require_permissions",
]

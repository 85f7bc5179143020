# File: backend/app/api/v1/health.py
# Version: v0.2.0
"""
Healthcheck router: liveness plus app identity and enzyme catalogue size.
"""
from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter

from backend.app.core.config import settings
from backend.app.core.restriction.enzymes import ENZYME_DB

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> Dict[str, Any]:
    """Return a minimal health payload."""
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "enzymes": len(ENZYME_DB),
    }

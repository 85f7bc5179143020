# File: backend/app/api/v1/options.py
# Version: v0.1.0
"""
Design options endpoints:
- GET /api/v1/options   ← current options (initialized from defaults on first call)
- PUT /api/v1/options   ← validates & persists new options
"""
from __future__ import annotations

from fastapi import APIRouter

from backend.app.config.config_options import ensure_current_exists, save_current_options
from backend.app.core.primer.parameters import DesignOptions

router = APIRouter(prefix="/v1/options", tags=["options"])


@router.get("", response_model=DesignOptions)
def get_options():
    """Return the current editable design options."""
    _, opts = ensure_current_exists()
    return opts


@router.put("", response_model=DesignOptions)
def update_options(payload: DesignOptions):
    """Validate and persist new design options."""
    save_current_options(payload)
    return payload

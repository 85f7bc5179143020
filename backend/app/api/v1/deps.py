# File: backend/app/api/v1/deps.py
# Version: v0.1.0
"""
Shared router helpers.

- `resolve_options`: request options, or the stored ones (defaults fallback)
- `http_error`: map engine errors to HTTPException (404 unknown enzyme, 400 otherwise)
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException

from backend.app.config.config_options import load_current_options
from backend.app.core.errors import PrimerWeaverError, UnknownEnzymeError
from backend.app.core.primer.parameters import DesignOptions


def resolve_options(options: Optional[DesignOptions]) -> DesignOptions:
    return options if options is not None else load_current_options()


def http_error(exc: PrimerWeaverError) -> HTTPException:
    if isinstance(exc, UnknownEnzymeError):
        return HTTPException(status_code=404, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))

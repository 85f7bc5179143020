# File: backend/app/api/v1/features.py
# Version: v0.1.0
"""
Feature endpoints:
- POST /api/v1/features/detect   ← known features located on a plasmid
"""
from __future__ import annotations

from fastapi import APIRouter

from backend.app.core.dna.features import detect_features
from backend.app.core.dna.sequence import normalize_strict
from backend.app.core.errors import PrimerWeaverError
from backend.app.schemas.features import FeatureDetectRequest, FeatureDetectResponse, FeatureOut

from .deps import http_error

router = APIRouter(prefix="/v1/features", tags=["features"])


@router.post("/detect", response_model=FeatureDetectResponse)
def detect(payload: FeatureDetectRequest) -> FeatureDetectResponse:
    try:
        seq = normalize_strict(payload.sequence)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc

    found = detect_features(seq, [f.model_dump() for f in payload.features])
    return FeatureDetectResponse(features=[FeatureOut.from_core(f) for f in found])

# File: backend/app/api/v1/structure.py
# Version: v0.1.0
"""
Secondary-structure endpoints (heuristic NN scans, no DP folding):
- POST /api/v1/structure/hairpin
- POST /api/v1/structure/dimer   ← self-dimer when `b` is omitted
- POST /api/v1/structure/matrix  ← all-vs-all dimer matrix for a primer set
"""
from __future__ import annotations

from fastapi import APIRouter

from backend.app.core.dna.sequence import normalize_strict
from backend.app.core.errors import PrimerWeaverError
from backend.app.core.primer.scoring import build_primer_dimer_matrix
from backend.app.core.primer.structure import dimer_scan, hairpin_scan, self_dimer_scan
from backend.app.schemas.structure import (
    DimerMatrixRequest,
    DimerMatrixResponse,
    DimerOut,
    DimerRequest,
    DimerResponse,
    HairpinOut,
    HairpinRequest,
    HairpinResponse,
)

from .deps import http_error

router = APIRouter(prefix="/v1/structure", tags=["structure"])


@router.post("/hairpin", response_model=HairpinResponse)
def hairpin(payload: HairpinRequest) -> HairpinResponse:
    try:
        seq = normalize_strict(payload.sequence)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc
    hp = hairpin_scan(seq)
    return HairpinResponse(length=len(seq), hairpin=HairpinOut.from_core(hp) if hp else None)


@router.post("/dimer", response_model=DimerResponse)
def dimer(payload: DimerRequest) -> DimerResponse:
    try:
        a = normalize_strict(payload.a)
        b = normalize_strict(payload.b) if payload.b else None
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc
    d = self_dimer_scan(a) if b is None else dimer_scan(a, b)
    return DimerResponse(dimer=DimerOut.from_core(d) if d else None)


@router.post("/matrix", response_model=DimerMatrixResponse)
def dimer_matrix(payload: DimerMatrixRequest) -> DimerMatrixResponse:
    m = build_primer_dimer_matrix([p.model_dump() for p in payload.primers])
    return DimerMatrixResponse.from_core(m)

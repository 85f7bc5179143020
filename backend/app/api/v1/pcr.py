# File: backend/app/api/v1/pcr.py
# Version: v0.1.0
"""
PCR endpoints:
- POST /api/v1/pcr/products    ← both arcs amplified on a circular template
- POST /api/v1/pcr/amplicons   ← seed-and-extend amplicon search on a linear template
"""
from __future__ import annotations

from fastapi import APIRouter

from backend.app.core.dna.circular import DIRECTION_INWARD, DIRECTION_OUTWARD, pcr_product_candidates
from backend.app.core.dna.sequence import normalize_strict
from backend.app.core.errors import PrimerWeaverError
from backend.app.core.primer.offtarget import find_amplicons
from backend.app.schemas.pcr import (
    AmpliconOut,
    AmpliconRequest,
    AmpliconResponse,
    ArcOut,
    ProductsRequest,
    ProductsResponse,
)

from .deps import http_error

router = APIRouter(prefix="/v1/pcr", tags=["pcr"])


@router.post("/products", response_model=ProductsResponse)
def products(payload: ProductsRequest) -> ProductsResponse:
    try:
        seq = normalize_strict(payload.sequence)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc

    c = pcr_product_candidates(seq, payload.f3, payload.r3)
    return ProductsResponse(
        length=len(seq),
        arcA=ArcOut(seq=c.arc_a, length=c.len_a, direction=DIRECTION_INWARD),
        arcB=ArcOut(seq=c.arc_b, length=c.len_b, direction=DIRECTION_OUTWARD),
        shorter=ArcOut.from_core(c.shorter),
        longer=ArcOut.from_core(c.longer),
    )


@router.post("/amplicons", response_model=AmpliconResponse)
def amplicons(payload: AmpliconRequest) -> AmpliconResponse:
    try:
        template = normalize_strict(payload.template)
        fwd = normalize_strict(payload.forward)
        rev = normalize_strict(payload.reverse)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc

    hits = find_amplicons(template, fwd, rev, payload.seedLen, payload.maxMismatchRatio)
    return AmpliconResponse(amplicons=[AmpliconOut.from_core(a) for a in hits])

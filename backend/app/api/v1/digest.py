# File: backend/app/api/v1/digest.py
# Version: v0.1.0
"""
Restriction endpoints:
- GET  /api/v1/enzymes                ← built-in catalogue (optional ?enzymeClass=typeII|typeIIS)
- POST /api/v1/digest                 ← Type II digest, linear or circular
- POST /api/v1/digest/type-iis        ← Type IIS cut positions with local context
- POST /api/v1/ligation/check         ← can two fragment ends be joined
- POST /api/v1/ligation/overhangs     ← identical / complementary overhang matrix

Unknown enzyme names give 404.
"""
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException

from backend.app.core.dna.sequence import normalize_strict
from backend.app.core.errors import PrimerWeaverError
from backend.app.core.restriction.digest import (
    compute_type_iis_overhangs,
    digest_circular_type_ii,
    digest_linear_multi_type_ii,
    scan_forbidden_sites,
)
from backend.app.core.restriction.enzymes import EnzymeClass, list_enzymes
from backend.app.core.restriction.ligation import annotate_type_ii_termini, build_overhang_matrix, can_ligate
from backend.app.schemas.digest import (
    DigestRequest,
    DigestResponse,
    EnzymeOut,
    FragmentOut,
    LigationCheckRequest,
    LigationCheckResponse,
    OverhangMatrixRequest,
    OverhangMatrixResponse,
    OverhangNodeOut,
    TypeIISCutOut,
    TypeIISRequest,
    TypeIISResponse,
)

from .deps import http_error

router = APIRouter(prefix="/v1", tags=["restriction"])


@router.get("/enzymes", response_model=List[EnzymeOut])
def enzymes(enzymeClass: Optional[EnzymeClass] = None) -> List[EnzymeOut]:
    return [EnzymeOut.from_core(e) for e in list_enzymes(enzymeClass)]


@router.post("/digest", response_model=DigestResponse)
def digest(payload: DigestRequest) -> DigestResponse:
    if payload.annotateTermini and (payload.topology != "linear" or len(payload.enzymes) != 1):
        raise HTTPException(status_code=400, detail="annotateTermini needs a linear digest with exactly one enzyme.")

    try:
        seq = normalize_strict(payload.sequence)
        if payload.topology == "circular":
            frags = digest_circular_type_ii(seq, payload.enzymes)
        elif payload.annotateTermini:
            frags = annotate_type_ii_termini(seq, payload.enzymes[0])
        else:
            frags = digest_linear_multi_type_ii(seq, payload.enzymes)
        sites = scan_forbidden_sites(seq, payload.enzymes)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc

    return DigestResponse(
        length=len(seq),
        topology=payload.topology,
        fragments=[FragmentOut.from_core(f) for f in frags],
        bands=sorted((f.length for f in frags), reverse=True),
        sites=sites,
    )


@router.post("/digest/type-iis", response_model=TypeIISResponse)
def digest_type_iis(payload: TypeIISRequest) -> TypeIISResponse:
    try:
        seq = normalize_strict(payload.sequence)
        cuts = compute_type_iis_overhangs(seq, payload.enzyme, payload.window)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc
    return TypeIISResponse(enzyme=payload.enzyme, cuts=[TypeIISCutOut.from_core(c) for c in cuts])


@router.post("/ligation/check", response_model=LigationCheckResponse)
def ligation_check(payload: LigationCheckRequest) -> LigationCheckResponse:
    return LigationCheckResponse(ligatable=can_ligate(payload.left.to_core(), payload.right.to_core()))


@router.post("/ligation/overhangs", response_model=OverhangMatrixResponse)
def overhang_matrix(payload: OverhangMatrixRequest) -> OverhangMatrixResponse:
    nodes = build_overhang_matrix([o.model_dump() for o in payload.overhangs])
    return OverhangMatrixResponse(nodes=[OverhangNodeOut.from_core(n) for n in nodes])

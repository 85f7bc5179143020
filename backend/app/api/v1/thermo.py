# File: backend/app/api/v1/thermo.py
# Version: v0.2.0
"""
Thermodynamics endpoints:
- POST /api/v1/thermo/tm           ← NN Tm, reference Tm and duplex ΔG of one sequence
- POST /api/v1/thermo/qc           ← single primer or primer pair QC
- POST /api/v1/thermo/overlap      ← best assembly overlap between two fragments
- POST /api/v1/thermo/composition  ← base counts and sequence complexity

If `options` is omitted, the stored design options are used.
"""
from __future__ import annotations

from fastapi import APIRouter

from backend.app.core.dna.sequence import base_composition, gc_pct, normalize_strict, seq_complexity
from backend.app.core.errors import PrimerWeaverError
from backend.app.core.primer.overlaps import find_best_overlap
from backend.app.core.primer.scoring import PrimerQC, qc_primer_pair, qc_single_primer
from backend.app.core.primer.thermodynamics import check_tm_inputs, duplex_dg37, tm_nn, tm_reference
from backend.app.schemas.common import Classification, finite_or_none
from backend.app.schemas.structure import DimerOut, HairpinOut
from backend.app.schemas.thermo import (
    CompositionRequest,
    CompositionResponse,
    OverlapOut,
    OverlapRequest,
    OverlapResponse,
    PrimerQCOut,
    QCRequest,
    QCResponse,
    TmRequest,
    TmResponse,
)

from .deps import http_error, resolve_options

router = APIRouter(prefix="/v1/thermo", tags=["thermo"])


@router.post("/tm", response_model=TmResponse)
def melting_temperature(payload: TmRequest) -> TmResponse:
    opts = resolve_options(payload.options)
    try:
        seq = normalize_strict(payload.sequence)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc

    error = None
    try:
        check_tm_inputs(seq, opts.Na_mM, opts.Mg_mM, opts.conc_nM)
    except PrimerWeaverError as exc:
        error = str(exc)

    return TmResponse(
        sequence=seq,
        length=len(seq),
        gc=gc_pct(seq),
        tm=finite_or_none(tm_nn(seq, opts.Na_mM, opts.Mg_mM, opts.conc_nM)),
        tmReference=finite_or_none(tm_reference(seq, opts.Na_mM, opts.Mg_mM, opts.conc_nM)),
        dg37=finite_or_none(duplex_dg37(seq)),
        error=error,
    )


def _qc_out(q: PrimerQC) -> PrimerQCOut:
    return PrimerQCOut(
        sequence=q.seq,
        length=q.length,
        gc=q.gc,
        tm=finite_or_none(q.tm),
        tmReference=finite_or_none(q.tm_reference),
        hairpin=HairpinOut.from_core(q.hairpin) if q.hairpin else None,
        selfDimer=DimerOut.from_core(q.self_dimer) if q.self_dimer else None,
        threePrimeDG=finite_or_none(q.three_prime_dg),
        homopolymer=q.homopolymer,
        gcClamp=q.gc_clamp,
        tmInRange=q.tm_in_range,
        score=q.score,
        label=q.label,
    )


@router.post("/qc", response_model=QCResponse)
def primer_qc(payload: QCRequest) -> QCResponse:
    opts = resolve_options(payload.options)
    try:
        fwd = normalize_strict(payload.forward)
        rev = normalize_strict(payload.reverse) if payload.reverse else None
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc

    if rev is None:
        return QCResponse(forward=_qc_out(qc_single_primer(fwd, opts)))

    pair = qc_primer_pair(fwd, rev, opts)
    return QCResponse(
        forward=_qc_out(pair.fwd),
        reverse=_qc_out(pair.rev),
        crossDimer=DimerOut.from_core(pair.cross_dimer) if pair.cross_dimer else None,
        crossDimerClass=Classification.from_core(pair.cross_dimer_class),
    )


@router.post("/overlap", response_model=OverlapResponse)
def overlap(payload: OverlapRequest) -> OverlapResponse:
    opts = resolve_options(payload.options)
    try:
        a = normalize_strict(payload.a)
        b = normalize_strict(payload.b)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc
    best = find_best_overlap(a, b, opts)
    return OverlapResponse(overlap=OverlapOut.from_core(best) if best else None)


@router.post("/composition", response_model=CompositionResponse)
def composition(payload: CompositionRequest) -> CompositionResponse:
    try:
        seq = normalize_strict(payload.sequence)
    except PrimerWeaverError as exc:
        raise http_error(exc) from exc
    return CompositionResponse.from_core(base_composition(seq), seq_complexity(seq))

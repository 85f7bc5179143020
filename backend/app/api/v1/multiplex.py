# File: backend/app/api/v1/multiplex.py
# Version: v0.1.0
"""
Multiplex PCR endpoints:
- POST /api/v1/multiplex/design   ← design one pair per target, off-target check, optional pooling
- POST /api/v1/multiplex/pool     ← pool user-supplied primer pairs (conflict graph or size-only)

If `options` is omitted, the stored design options are used.
"""
from __future__ import annotations

from fastapi import APIRouter

from backend.app.core.dna.sequence import normalize
from backend.app.core.primer.designer import design_multiplex_primers, to_pooling_pairs
from backend.app.core.primer.pooling import pool_by_size, pool_primers
from backend.app.schemas.multiplex import (
    MultiplexDesignRequest,
    MultiplexDesignResponse,
    PoolingOut,
    PoolRequest,
    TargetResultOut,
)

from .deps import resolve_options

router = APIRouter(prefix="/v1/multiplex", tags=["multiplex"])


@router.post("/design", response_model=MultiplexDesignResponse)
def design(payload: MultiplexDesignRequest) -> MultiplexDesignResponse:
    opts = resolve_options(payload.options)
    targets = [t.to_core() for t in payload.targets]
    results = design_multiplex_primers(
        targets,
        opts,
        check_off_target=payload.checkOffTarget,
        overlap_fwd=normalize(payload.overlapFwd),
        overlap_rev=normalize(payload.overlapRev),
    )

    pooling = None
    if payload.pool:
        pooling = PoolingOut.from_core(pool_primers(to_pooling_pairs(results), opts))

    return MultiplexDesignResponse(
        results=[TargetResultOut.from_core(r) for r in results],
        pooling=pooling,
    )


@router.post("/pool", response_model=PoolingOut)
def pool(payload: PoolRequest) -> PoolingOut:
    opts = resolve_options(payload.options)
    pairs = [p.to_core() for p in payload.pairs]
    if payload.strategy == "size":
        return PoolingOut.from_pools(pool_by_size(pairs, opts.sizeTolerance))
    return PoolingOut.from_core(pool_primers(pairs, opts))

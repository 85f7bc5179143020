# File: backend/app/schemas/multiplex.py
# Version: v0.1.0
"""
Pydantic schemas for multiplex primer design and pooling.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, conint

from backend.app.core.primer.designer import DesignedPrimer, MultiplexResult
from backend.app.core.primer.offtarget import TargetRecord
from backend.app.core.primer.parameters import DesignOptions
from backend.app.core.primer.pooling import Pool, PoolingPair, PoolingResult

from .common import SequenceStr, finite_or_none


class TargetIn(BaseModel):
    name: str = Field(..., min_length=1)
    seq: SequenceStr
    expectedLength: Optional[conint(gt=0)] = None

    def to_core(self) -> TargetRecord:
        return TargetRecord(self.name, self.seq, self.expectedLength)


class MultiplexDesignRequest(BaseModel):
    targets: List[TargetIn] = Field(..., min_length=1)
    options: Optional[DesignOptions] = None
    checkOffTarget: bool = True
    overlapFwd: str = Field("", description="5' tail added to every forward primer.")
    overlapRev: str = Field("", description="5' tail added to every reverse primer.")
    pool: bool = Field(True, description="Also pool the successful pairs.")


class PrimerOut(BaseModel):
    seq: str
    length: int
    tm: Optional[float] = None
    fullTm: Optional[float] = None
    gc: float
    start: int
    end: int
    coreSeq: str
    overlapSeq: str = ""

    @classmethod
    def from_core(cls, p: DesignedPrimer) -> "PrimerOut":
        return cls(
            seq=p.seq,
            length=p.length,
            tm=finite_or_none(p.tm),
            fullTm=finite_or_none(p.full_tm),
            gc=p.gc,
            start=p.start,
            end=p.end,
            coreSeq=p.core_seq,
            overlapSeq=p.overlap_seq,
        )


class OffTargetOut(BaseModel):
    targetName: str
    targetIndex: int
    ampliconLengths: List[int] = Field(default_factory=list)


class TargetResultOut(BaseModel):
    name: str
    success: bool
    error: str = ""
    forward: Optional[PrimerOut] = None
    reverse: Optional[PrimerOut] = None
    productLength: Optional[int] = None
    offTargets: List[OffTargetOut] = Field(default_factory=list)

    @classmethod
    def from_core(cls, r: MultiplexResult) -> "TargetResultOut":
        out = cls(
            name=r.target.name,
            success=r.success,
            error=r.error,
            offTargets=[
                OffTargetOut(
                    targetName=h.target_name,
                    targetIndex=h.target_index,
                    ampliconLengths=[a.length for a in h.amplicons],
                )
                for h in r.off_targets
            ],
        )
        if r.primers is not None:
            out.forward = PrimerOut.from_core(r.primers.forward)
            out.reverse = PrimerOut.from_core(r.primers.reverse)
            out.productLength = r.primers.product_length
        return out


class PairIn(BaseModel):
    name: str = Field(..., min_length=1)
    forward: SequenceStr
    reverse: SequenceStr
    productLength: Optional[conint(gt=0)] = None
    offTargets: List[str] = Field(default_factory=list, description="Names of templates this pair amplifies off-target.")

    def to_core(self) -> PoolingPair:
        return PoolingPair(self.name, self.forward, self.reverse, self.productLength, frozenset(self.offTargets))


class PoolRequest(BaseModel):
    pairs: List[PairIn] = Field(default_factory=list)
    options: Optional[DesignOptions] = None
    strategy: Literal["conflict", "size"] = Field(
        "conflict", description="conflict: colour the conflict graph; size: first-fit by product size only."
    )


class PoolMemberOut(BaseModel):
    index: int
    name: str
    forward: str
    reverse: str
    productLength: Optional[int] = None


class PoolOut(BaseModel):
    pool: int = Field(..., ge=1)
    members: List[PoolMemberOut] = Field(default_factory=list)

    @classmethod
    def from_core(cls, p: Pool) -> "PoolOut":
        return cls(
            pool=p.number,
            members=[
                PoolMemberOut(
                    index=m.index,
                    name=m.name,
                    forward=m.forward,
                    reverse=m.reverse,
                    productLength=m.product_length,
                )
                for m in p.members
            ],
        )


class ConflictOut(BaseModel):
    i: int
    j: int
    reasons: List[str]


class PoolingOut(BaseModel):
    poolCount: int
    colors: List[int] = Field(default_factory=list)
    pools: List[PoolOut] = Field(default_factory=list)
    conflicts: List[ConflictOut] = Field(default_factory=list)

    @classmethod
    def from_core(cls, r: PoolingResult) -> "PoolingOut":
        return cls(
            poolCount=r.pool_count,
            colors=list(r.colors),
            pools=[PoolOut.from_core(p) for p in r.pools],
            conflicts=[ConflictOut(i=c.i, j=c.j, reasons=list(c.reasons)) for c in r.conflicts],
        )

    @classmethod
    def from_pools(cls, pools: List[Pool]) -> "PoolingOut":
        """Size-only pooling: no graph, so no colours or conflicts."""
        return cls(poolCount=len(pools), pools=[PoolOut.from_core(p) for p in pools])


class MultiplexDesignResponse(BaseModel):
    results: List[TargetResultOut] = Field(default_factory=list)
    pooling: Optional[PoolingOut] = None

# File: backend/app/schemas/pcr.py
# Version: v0.2.0
"""
Pydantic schemas for circular PCR products and amplicon search.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, confloat, conint

from backend.app.core.dna.circular import Arc
from backend.app.core.primer.offtarget import Amplicon

from .common import SequenceStr


class ProductsRequest(BaseModel):
    sequence: SequenceStr = Field(..., description="Circular template (plasmid).")
    f3: int = Field(..., description="0-based position of the forward primer's 3' end; reduced modulo length.")
    r3: int = Field(..., description="0-based position of the reverse primer's 3' end; reduced modulo length.")


class ArcOut(BaseModel):
    seq: str
    length: int
    direction: str

    @classmethod
    def from_core(cls, a: Arc) -> "ArcOut":
        return cls(seq=a.seq, length=a.length, direction=a.direction)


class ProductsResponse(BaseModel):
    length: int
    arcA: ArcOut
    arcB: ArcOut
    shorter: ArcOut
    longer: ArcOut


class AmpliconRequest(BaseModel):
    template: SequenceStr
    forward: SequenceStr
    reverse: SequenceStr
    seedLen: Optional[conint(ge=1)] = Field(None, description="Exact 3' seed for both primers; default min(10, len(forward), len(reverse)).")
    maxMismatchRatio: confloat(ge=0, le=1) = 0.2


class AmpliconOut(BaseModel):
    fwdPos: int
    revPos: int
    start: int
    end: int
    length: int
    seq: str

    @classmethod
    def from_core(cls, a: Amplicon) -> "AmpliconOut":
        return cls(fwdPos=a.fwd_pos, revPos=a.rev_pos, start=a.start, end=a.end, length=a.length, seq=a.seq)


class AmpliconResponse(BaseModel):
    amplicons: List[AmpliconOut] = Field(default_factory=list)

# File: backend/app/schemas/structure.py
# Version: v0.1.0
"""
Pydantic schemas for hairpin / dimer scans and the all-vs-all dimer matrix.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from backend.app.core.primer.scoring import DimerMatrix
from backend.app.core.primer.structure import (
    DimerCandidate,
    HairpinCandidate,
    classify_dg,
)

from .common import Classification, SequenceStr, finite_or_none


class HairpinRequest(BaseModel):
    sequence: SequenceStr


class HairpinOut(BaseModel):
    dg: Optional[float] = None
    stemLength: int
    loopLength: int
    start: int = Field(..., ge=0, description="0-based index of the stem's first base.")
    end: int = Field(..., ge=0, description="0-based exclusive end of the fold.")
    stemSeq: str
    classification: Classification

    @classmethod
    def from_core(cls, h: HairpinCandidate) -> "HairpinOut":
        return cls(
            dg=finite_or_none(h.dg),
            stemLength=h.stem_length,
            loopLength=h.loop_length,
            start=h.start,
            end=h.end,
            stemSeq=h.stem_seq,
            classification=Classification.from_core(classify_dg(h.dg)),
        )


class HairpinResponse(BaseModel):
    length: int
    hairpin: Optional[HairpinOut] = None


class DimerRequest(BaseModel):
    a: SequenceStr
    b: Optional[SequenceStr] = Field(None, description="Omit for a self-dimer scan of `a`.")


class DimerOut(BaseModel):
    dg: Optional[float] = None
    overlap: str
    offset: int
    touches3: bool
    aStart: int
    aEnd: int
    classification: Classification

    @classmethod
    def from_core(cls, d: DimerCandidate) -> "DimerOut":
        return cls(
            dg=finite_or_none(d.dg),
            overlap=d.overlap,
            offset=d.offset,
            touches3=d.touches3,
            aStart=d.a_start,
            aEnd=d.a_end,
            classification=Classification.from_core(classify_dg(d.dg, d.touches3)),
        )


class DimerResponse(BaseModel):
    dimer: Optional[DimerOut] = None


class LabeledSeqIn(BaseModel):
    label: Optional[str] = None
    seq: str = ""


class DimerMatrixRequest(BaseModel):
    primers: List[LabeledSeqIn] = Field(..., min_length=1)


class DimerCellOut(BaseModel):
    dg: Optional[float] = None
    touches3: bool
    classification: Classification


class DimerMatrixResponse(BaseModel):
    labels: List[str]
    matrix: List[List[Optional[DimerCellOut]]] = Field(
        default_factory=list, description="Symmetric; null where either sequence is empty."
    )

    @classmethod
    def from_core(cls, m: DimerMatrix) -> "DimerMatrixResponse":
        rows = [
            [
                DimerCellOut(
                    dg=finite_or_none(c.dg),
                    touches3=c.touches3,
                    classification=Classification.from_core(c.classification),
                )
                if c is not None
                else None
                for c in row
            ]
            for row in m.matrix
        ]
        return cls(labels=[p.label for p in m.primers], matrix=rows)

# File: backend/app/schemas/thermo.py
# Version: v0.2.0
"""
Pydantic schemas for Tm, primer QC, overlap and composition endpoints.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from backend.app.core.dna.sequence import BaseComposition, Complexity
from backend.app.core.primer.overlaps import OverlapMatch
from backend.app.core.primer.parameters import DesignOptions

from .common import Classification, SequenceStr, finite_or_none
from .structure import DimerOut, HairpinOut


class TmRequest(BaseModel):
    sequence: SequenceStr = Field(..., description="IUPAC DNA; case-insensitive, non-IUPAC characters are dropped.")
    options: Optional[DesignOptions] = Field(None, description="Overrides the stored design options.")


class TmResponse(BaseModel):
    sequence: str
    length: int
    gc: float
    tm: Optional[float] = Field(None, description="Worst-case NN Tm (°C); null if not computable.")
    tmReference: Optional[float] = Field(None, description="Biopython Tm_NN cross-check; null for ambiguous bases.")
    dg37: Optional[float] = Field(None, description="Non-symmetric duplex ΔG at 37 °C (kcal/mol).")
    error: Optional[str] = Field(None, description="Why tm is null, when it is.")


class QCRequest(BaseModel):
    forward: SequenceStr
    reverse: Optional[SequenceStr] = Field(None, description="If given, pair QC with cross-dimer.")
    options: Optional[DesignOptions] = None


class PrimerQCOut(BaseModel):
    sequence: str
    length: int
    gc: float
    tm: Optional[float] = None
    tmReference: Optional[float] = None
    hairpin: Optional[HairpinOut] = None
    selfDimer: Optional[DimerOut] = None
    threePrimeDG: Optional[float] = None
    homopolymer: bool
    gcClamp: bool
    tmInRange: bool
    score: int
    label: str


class QCResponse(BaseModel):
    forward: PrimerQCOut
    reverse: Optional[PrimerQCOut] = None
    crossDimer: Optional[DimerOut] = None
    crossDimerClass: Optional[Classification] = None


class OverlapRequest(BaseModel):
    a: SequenceStr = Field(..., description="Upstream fragment; the overlap is taken from its 3' end.")
    b: SequenceStr = Field(..., description="Downstream fragment.")
    options: Optional[DesignOptions] = None


class OverlapOut(BaseModel):
    seq: str
    length: int
    gc: float
    tm: Optional[float] = None
    dg: Optional[float] = None
    tmDiff: Optional[float] = None
    aStart: int
    aEnd: int
    bStart: int
    bEnd: int

    @classmethod
    def from_core(cls, o: OverlapMatch) -> "OverlapOut":
        return cls(
            seq=o.seq,
            length=o.length,
            gc=o.gc,
            tm=finite_or_none(o.tm),
            dg=finite_or_none(o.dg),
            tmDiff=finite_or_none(o.tm_diff),
            aStart=o.a_start,
            aEnd=o.a_end,
            bStart=o.b_start,
            bEnd=o.b_end,
        )


class OverlapResponse(BaseModel):
    overlap: Optional[OverlapOut] = None


class CompositionRequest(BaseModel):
    sequence: SequenceStr


class CompositionResponse(BaseModel):
    length: int
    A: int
    C: int
    G: int
    T: int
    other: int = Field(..., description="Ambiguous IUPAC symbols.")
    gcPct: float
    entropy: float = Field(..., description="Shannon entropy over A/C/G/T (bits).")
    repeatRatio: float
    lowComplexity: bool

    @classmethod
    def from_core(cls, comp: BaseComposition, cx: Complexity) -> "CompositionResponse":
        return cls(
            length=comp.length,
            A=comp.A,
            C=comp.C,
            G=comp.G,
            T=comp.T,
            other=comp.other,
            gcPct=comp.gc_pct,
            entropy=cx.entropy,
            repeatRatio=cx.repeat_ratio,
            lowComplexity=cx.low_complexity,
        )

# File: backend/app/schemas/digest.py
# Version: v0.1.0
"""
Pydantic schemas for the enzyme catalogue, digestion and ligation endpoints.
"""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, conint

from backend.app.core.restriction.digest import Fragment, TypeIISOverhang
from backend.app.core.restriction.enzymes import Enzyme
from backend.app.core.restriction.ligation import AnnotatedFragment, OverhangNode, Terminus

from .common import SequenceStr


class EnzymeOut(BaseModel):
    name: str
    enzymeClass: str = Field(..., description="typeII | typeIIS")
    site: str
    sticky: str = ""
    cut5: Optional[int] = None
    rc: str = ""
    overhang: Optional[int] = None
    cutF: Optional[int] = None
    cutR: Optional[int] = None

    @classmethod
    def from_core(cls, e: Enzyme) -> "EnzymeOut":
        return cls(
            name=e.name,
            enzymeClass=e.enzyme_class.value,
            site=e.site,
            sticky=e.sticky,
            cut5=e.cut5,
            rc=e.rc,
            overhang=e.overhang,
            cutF=e.cut_f,
            cutR=e.cut_r,
        )


class DigestRequest(BaseModel):
    sequence: SequenceStr
    enzymes: List[str] = Field(..., min_length=1, description="Case-sensitive enzyme names, e.g. ['EcoRI', 'BamHI'].")
    topology: Literal["linear", "circular"] = "linear"
    annotateTermini: bool = Field(False, description="Linear single-enzyme digests only: type both fragment ends.")


class CutRefOut(BaseModel):
    enzyme: str
    cutTop: int


class TerminusOut(BaseModel):
    type: str
    seq: str = ""


class FragmentOut(BaseModel):
    start: int
    end: int = Field(..., description="Exclusive; smaller than start for a fragment spanning the origin.")
    length: int
    seq: str
    leftCuts: List[CutRefOut] = Field(default_factory=list)
    rightCuts: List[CutRefOut] = Field(default_factory=list)
    left: Optional[TerminusOut] = None
    right: Optional[TerminusOut] = None

    @classmethod
    def from_core(cls, f: Fragment) -> "FragmentOut":
        out = cls(
            start=f.start,
            end=f.end,
            length=f.length,
            seq=f.seq,
            leftCuts=[CutRefOut(enzyme=c.enzyme, cutTop=c.cut_top) for c in f.left_cuts],
            rightCuts=[CutRefOut(enzyme=c.enzyme, cutTop=c.cut_top) for c in f.right_cuts],
        )
        if isinstance(f, AnnotatedFragment):
            out.left = TerminusOut(type=f.left.type, seq=f.left.seq)
            out.right = TerminusOut(type=f.right.type, seq=f.right.seq)
        return out


class DigestResponse(BaseModel):
    length: int
    topology: str
    fragments: List[FragmentOut] = Field(default_factory=list)
    bands: List[int] = Field(default_factory=list, description="Fragment lengths, largest first.")
    sites: Dict[str, List[int]] = Field(default_factory=dict, description="Recognition-site starts per enzyme.")


class TypeIISRequest(BaseModel):
    sequence: SequenceStr
    enzyme: str = Field(..., examples=["BsaI"])
    window: Optional[conint(ge=1)] = Field(None, description="Context width around each cut; default = overhang length.")


class TypeIISCutOut(BaseModel):
    siteType: Literal["F", "R"]
    siteStart: int
    siteEnd: int
    cutPos: int
    upstream: str
    downstream: str

    @classmethod
    def from_core(cls, o: TypeIISOverhang) -> "TypeIISCutOut":
        return cls(
            siteType=o.site_type,
            siteStart=o.site_start,
            siteEnd=o.site_end,
            cutPos=o.cut_pos,
            upstream=o.upstream,
            downstream=o.downstream,
        )


class TypeIISResponse(BaseModel):
    enzyme: str
    cuts: List[TypeIISCutOut] = Field(default_factory=list)


class TerminusIn(BaseModel):
    type: Literal["blunt", "sticky", "unknown"]
    seq: str = ""

    def to_core(self) -> Terminus:
        return Terminus(self.type, self.seq)


class LigationCheckRequest(BaseModel):
    left: TerminusIn
    right: TerminusIn


class LigationCheckResponse(BaseModel):
    ligatable: bool


class OverhangIn(BaseModel):
    label: Optional[str] = None
    seq: str = ""


class OverhangMatrixRequest(BaseModel):
    overhangs: List[OverhangIn] = Field(..., min_length=1)


class OverhangNodeOut(BaseModel):
    index: int
    label: str
    seq: str
    same: List[int] = Field(default_factory=list, description="Indices with an identical overhang.")
    rc: List[int] = Field(default_factory=list, description="Indices with the reverse-complement overhang.")

    @classmethod
    def from_core(cls, n: OverhangNode) -> "OverhangNodeOut":
        return cls(index=n.index, label=n.label, seq=n.seq, same=list(n.same), rc=list(n.rc))


class OverhangMatrixResponse(BaseModel):
    nodes: List[OverhangNodeOut] = Field(default_factory=list)

# File: backend/app/schemas/features.py
# Version: v0.1.0
"""
Pydantic schemas for plasmid feature detection.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from backend.app.core.dna.features import DetectedFeature

from .common import SequenceStr


class FeatureRefIn(BaseModel):
    name: str = "feature"
    sequence: str = Field(..., description="Reference sequence; entries under 150 nt are ignored.")
    type: str = ""


class FeatureDetectRequest(BaseModel):
    sequence: SequenceStr
    features: List[FeatureRefIn] = Field(..., min_length=1)


class FeatureOut(BaseModel):
    name: str
    start: int
    end: int
    kind: str
    strand: str

    @classmethod
    def from_core(cls, f: DetectedFeature) -> "FeatureOut":
        return cls(name=f.name, start=f.start, end=f.end, kind=f.kind, strand=f.strand)


class FeatureDetectResponse(BaseModel):
    features: List[FeatureOut] = Field(default_factory=list)

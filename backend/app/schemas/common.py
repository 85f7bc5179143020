# File: backend/app/schemas/common.py
# Version: v0.1.0
"""
Shared schema pieces.

Core functions report failed numerics as NaN; responses carry them as null.
"""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, Field, constr

from backend.app.core.primer.structure import DGClassification

SequenceStr = constr(strip_whitespace=True, min_length=1)


def finite_or_none(x: Optional[float]) -> Optional[float]:
    if x is None or not math.isfinite(x):
        return None
    return float(x)


class Classification(BaseModel):
    label: str = Field(..., description="'very strong' | 'strong' | 'moderate' | 'weak' | 'none', 3' prefixed when relevant")
    cls: str = Field(..., description="ok | warn | bad")

    @classmethod
    def from_core(cls, c: DGClassification) -> "Classification":
        return cls(label=c.label, cls=c.cls.value)

# File: backend/app/core/primer/parameters.py
# Version: v2.0.0
"""
Pydantic model for the flat per-call design options.

Key names follow the JSON options object exchanged with clients
(`Na_mM`, `tmTarget`, `conflictThreshold`, ...). Every core entry point that
needs conditions or thresholds accepts an optional `DesignOptions`; omitted
means defaults.

Usage:
    from backend.app.core.primer.parameters import DesignOptions
    opts = DesignOptions(Na_mM=50, Mg_mM=1.5)
"""

from __future__ import annotations

from pydantic import BaseModel, Field, confloat, conint, model_validator

from . import constants as C


class DesignOptions(BaseModel):
    # Reaction conditions
    Na_mM: float = Field(C.DEFAULT_NA_MM, description="Monovalent cation concentration (mM)")
    Mg_mM: float = Field(C.DEFAULT_MG_MM, description="Mg2+ concentration (mM)")
    conc_nM: float = Field(C.DEFAULT_CONC_NM, description="Total primer concentration (nM)")

    # Tm targeting
    tmTarget: float = Field(C.DEFAULT_TM_TARGET, description="Target primer Tm (°C)")
    tmTolerance: confloat(ge=0) = Field(C.DEFAULT_TM_TOLERANCE, description="Accepted |Tm - tmTarget| (°C)")
    bindingTmTolerance: confloat(ge=0) = Field(
        C.DEFAULT_BINDING_TM_TOLERANCE, description="Tolerance used while searching binding sites (°C)"
    )

    # Primer shape
    minLen: conint(ge=2) = Field(C.DEFAULT_MIN_LEN, description="Minimum primer length")
    maxLen: conint(ge=2) = Field(C.DEFAULT_MAX_LEN, description="Maximum primer length")
    homopolymerMax: conint(ge=1) = Field(C.DEFAULT_HOMOPOLYMER_MAX, description="Run length flagged as homopolymer")

    # Pooling
    conflictThreshold: float = Field(C.DEFAULT_CONFLICT_THRESHOLD, description="ΔG for non-3' cross-dimer conflicts")
    sizeTolerance: conint(ge=0) = Field(C.DEFAULT_SIZE_TOLERANCE, description="Min product size separation (bp); 0 disables")

    # Seed-and-extend matching
    seedLen: conint(ge=1, le=10) = Field(C.DEFAULT_SEED_LEN, description="Exact 3' seed length")
    maxMismatchRatio: confloat(ge=0, le=1) = Field(
        C.DEFAULT_MAX_MISMATCH_RATIO, description="Mismatch fraction tolerated 5' of the seed"
    )

    @model_validator(mode="after")
    def _check_lengths(self) -> "DesignOptions":
        if self.maxLen < self.minLen:
            raise ValueError("maxLen must be >= minLen")
        return self

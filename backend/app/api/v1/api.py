# File: backend/app/api/v1/api.py
# Version: v0.9.0
"""
v1 API aggregator.

Routers included under /api:
- health
- options (stored design options)
- thermo (Tm, primer QC)
- structure (hairpin / dimer scans)
- digest (enzyme catalogue, Type II / Type IIS digestion)
- pcr (circular products, amplicon search)
- features (plasmid feature detection)
- multiplex (multiplex design and pooling)
"""
from __future__ import annotations

from fastapi import APIRouter

from . import health as health_router
from . import options as options_router
from . import thermo as thermo_router
from . import structure as structure_router
from . import digest as digest_router
from . import pcr as pcr_router
from . import features as features_router
from . import multiplex as multiplex_router

# All v1 JSON APIs live under /api via api_router
api_router = APIRouter()
api_router.include_router(health_router.router)
api_router.include_router(options_router.router)
api_router.include_router(thermo_router.router)
api_router.include_router(structure_router.router)
api_router.include_router(digest_router.router)
api_router.include_router(pcr_router.router)
api_router.include_router(features_router.router)
api_router.include_router(multiplex_router.router)

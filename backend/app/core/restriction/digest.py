# File: backend/app/core/restriction/digest.py
# Version: v0.1.0
"""
Restriction digestion on linear and circular templates.

Implements:
- Exact recognition-site scan (overlapping hits allowed)
- Type II cut positions, single/multi-enzyme linear digest, circular digest
- Type IIS motif scan on both orientations, cut positions and local context
- Forbidden-site scan and predicted band sizes

Coordinates are 0-based on the forward strand; fragments are [start, end).
Circular fragments may wrap (end < start). Enzyme names are validated through
`require_enzyme`; an enzyme of the wrong class contributes no cuts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Union

from backend.app.core.dna.circular import rotate_circular, subseq_circular
from backend.app.core.dna.sequence import normalize

from .enzymes import Enzyme, require_enzyme

log = logging.getLogger(__name__)

EnzymeNames = Union[str, Iterable[str]]


def _as_names(names: EnzymeNames) -> List[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


def _scan_exact(s: str, motif: str) -> List[int]:
    if not motif:
        return []
    m = len(motif)
    return [i for i in range(len(s) - m + 1) if s[i:i + m] == motif]


def find_enzyme_sites(seq: str, name: str) -> List[int]:
    """0-based start positions of the recognition site (exact, overlapping)."""
    enz = require_enzyme(name)
    return _scan_exact(normalize(seq), enz.site)


# ------------------------------------------------------------------------------
# Type II
# ------------------------------------------------------------------------------


@dataclass
class TypeIICut:
    site_start: int
    site_end: int  # exclusive
    cut_top: int
    cut_bottom: int


@dataclass
class CutRef:
    enzyme: str
    cut_top: int


@dataclass
class Fragment:
    start: int
    end: int
    length: int
    seq: str
    left_cuts: List[CutRef] = field(default_factory=list)
    right_cuts: List[CutRef] = field(default_factory=list)


def _type_ii_cuts(s: str, enz: Enzyme) -> List[TypeIICut]:
    if not enz.is_type_ii or enz.cut5 is None:
        return []
    size = len(enz.site)
    c = enz.cut5
    return [
        TypeIICut(site_start=p, site_end=p + size, cut_top=p + c, cut_bottom=p + (size - c))
        for p in _scan_exact(s, enz.site)
    ]


def compute_cuts_type_ii(seq: str, name: str) -> List[TypeIICut]:
    """Top/bottom strand cut positions for each site; [] for non-Type II enzymes."""
    return _type_ii_cuts(normalize(seq), require_enzyme(name))


def _collect_type_ii_cuts(s: str, names: List[str], modulo: Optional[int] = None) -> Dict[int, List[CutRef]]:
    cuts_at: Dict[int, List[CutRef]] = {}
    for name in names:
        enz = require_enzyme(name)
        cuts = _type_ii_cuts(s, enz)
        if not enz.is_type_ii:
            log.debug("Skipping %s: not a Type II enzyme", name)
        for c in cuts:
            pos = c.cut_top % modulo if modulo else c.cut_top
            cuts_at.setdefault(pos, []).append(CutRef(name, pos))
    return cuts_at


def _linear_fragments(s: str, cuts_at: Dict[int, List[CutRef]]) -> List[Fragment]:
    points = sorted({0, len(s), *cuts_at})
    frags: List[Fragment] = []
    for start, end in zip(points, points[1:]):
        if end <= start:
            continue
        frags.append(
            Fragment(
                start=start,
                end=end,
                length=end - start,
                seq=s[start:end],
                left_cuts=list(cuts_at.get(start, [])),
                right_cuts=list(cuts_at.get(end, [])),
            )
        )
    return frags


def digest_linear_type_ii(seq: str, name: str) -> List[Fragment]:
    """Linear digest with one enzyme; no cut gives the whole [0, L) fragment."""
    s = normalize(seq)
    cuts_at = _collect_type_ii_cuts(s, [name])
    if not cuts_at:
        return [Fragment(0, len(s), len(s), s)]
    return _linear_fragments(s, cuts_at)


def digest_linear_multi_type_ii(seq: str, names: EnzymeNames) -> List[Fragment]:
    """Linear digest with the union of cuts of several enzymes."""
    s = normalize(seq)
    if not s:
        return []
    cuts_at = _collect_type_ii_cuts(s, _as_names(names))
    log.debug("Linear digest: %d cut positions on %d bp", len(cuts_at), len(s))
    if not cuts_at:
        return [Fragment(0, len(s), len(s), s)]
    return _linear_fragments(s, cuts_at)


def digest_circular_type_ii(seq: str, names: EnzymeNames) -> List[Fragment]:
    """
    Circular digest. Fragments run between consecutive sorted cuts, the last
    one wrapping through the origin. One cut opens the circle into a single
    full-length fragment; no cut leaves it intact.
    """
    s = normalize(seq)
    L = len(s)
    if not L:
        return []

    cuts_at = _collect_type_ii_cuts(s, _as_names(names), modulo=L)
    positions = sorted(cuts_at)
    log.debug("Circular digest: %d cut positions on %d bp", len(positions), L)
    if not positions:
        return [Fragment(0, L, L, s)]

    frags: List[Fragment] = []
    n = len(positions)
    for i, start in enumerate(positions):
        end = positions[(i + 1) % n]
        # single cut: the opened circle reads from the cut
        piece = rotate_circular(s, start) if start == end else subseq_circular(s, start, end)
        frags.append(
            Fragment(
                start=start,
                end=end,
                length=len(piece),
                seq=piece,
                left_cuts=list(cuts_at[start]),
                right_cuts=list(cuts_at[end]),
            )
        )
    return frags


# ------------------------------------------------------------------------------
# Type IIS
# ------------------------------------------------------------------------------


@dataclass
class TypeIISSites:
    forward: List[int] = field(default_factory=list)
    reverse: List[int] = field(default_factory=list)


@dataclass
class TypeIISCut:
    site_type: str  # "F" forward motif, "R" reverse-complement motif
    site_start: int
    site_end: int
    cut_pos: int


@dataclass
class TypeIISOverhang(TypeIISCut):
    upstream: str = ""
    downstream: str = ""


def _type_iis_sites(s: str, enz: Enzyme) -> TypeIISSites:
    return TypeIISSites(_scan_exact(s, enz.site), _scan_exact(s, enz.rc))


def find_type_iis_sites(seq: str, name: str) -> TypeIISSites:
    """Exact hits of the forward motif and of its reverse complement."""
    return _type_iis_sites(normalize(seq), require_enzyme(name))


def _type_iis_cuts(s: str, enz: Enzyme) -> List[TypeIISCut]:
    if not enz.is_type_iis:
        return []
    sites = _type_iis_sites(s, enz)
    cuts: List[TypeIISCut] = []

    if enz.site and enz.cut_f is not None:
        size = len(enz.site)
        for p in sites.forward:
            cuts.append(TypeIISCut("F", p, p + size, p + size + enz.cut_f))

    if enz.rc and enz.cut_r is not None:
        size = len(enz.rc)
        for p in sites.reverse:
            cuts.append(TypeIISCut("R", p, p + size, p - enz.cut_r))

    return cuts


def compute_cuts_type_iis(seq: str, name: str) -> List[TypeIISCut]:
    """
    Forward motif cuts `cutF` bp after the motif end; reverse motif cuts `cutR`
    bp before the motif start. Positions are not clamped and may fall outside
    [0, L] near the ends. Non-Type IIS enzymes give [].
    """
    return _type_iis_cuts(normalize(seq), require_enzyme(name))


def compute_type_iis_overhangs(seq: str, name: str, window: Optional[int] = None) -> List[TypeIISOverhang]:
    """Cut position clamped to [0, L] with `window` bases on each side."""
    enz = require_enzyme(name)
    if not enz.is_type_iis:
        return []
    s = normalize(seq)
    L = len(s)
    w = window or enz.overhang or 4

    out: List[TypeIISOverhang] = []
    for c in _type_iis_cuts(s, enz):
        pos = max(0, min(L, c.cut_pos))
        out.append(
            TypeIISOverhang(
                site_type=c.site_type,
                site_start=c.site_start,
                site_end=c.site_end,
                cut_pos=pos,
                upstream=s[max(0, pos - w):pos],
                downstream=s[pos:min(L, pos + w)],
            )
        )
    return out


# ------------------------------------------------------------------------------
# Summaries
# ------------------------------------------------------------------------------


def scan_forbidden_sites(seq: str, names: EnzymeNames) -> Dict[str, List[int]]:
    """Enzyme name -> site positions, for enzymes with at least one site."""
    s = normalize(seq)
    out: Dict[str, List[int]] = {}
    for name in _as_names(names):
        positions = _scan_exact(s, require_enzyme(name).site)
        if positions:
            out[name] = positions
    return out


def predict_digest_bands_linear(seq: str, names: EnzymeNames) -> List[int]:
    """Fragment lengths of a linear multi-enzyme digest, largest first."""
    return sorted((f.length for f in digest_linear_multi_type_ii(seq, names)), reverse=True)

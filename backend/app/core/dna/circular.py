# File: backend/app/core/dna/circular.py
# Version: v0.1.0
"""
Circular coordinate helpers for plasmid templates.

Coordinates are 0-based and reduced modulo the sequence length L into [0, L).
Subsequences use slice semantics (start inclusive, end exclusive) but may wrap
across the origin; equal start/end means the whole circle.

PCR products on a circle: a primer pair with 3' ends at f3 and r3 amplifies one
of two complementary arcs. Both are reported so the caller can pick.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .sequence import normalize

DIRECTION_INWARD = "f3→r3"
DIRECTION_OUTWARD = "r3→f3"


def subseq_circular(seq: str, start: int, end: int) -> str:
    s = normalize(seq)
    L = len(s)
    if not L:
        return ""
    a = start % L
    b = end % L
    if a < b:
        return s[a:b]
    if a > b:
        return s[a:] + s[:b]
    return s


def rotate_circular(seq: str, offset: int) -> str:
    """Re-anchor the origin so that position `offset` becomes index 0."""
    s = normalize(seq)
    L = len(s)
    if not L:
        return ""
    off = offset % L
    return s[off:] + s[:off]


def dist_plus(length: int, frm: int, to: int) -> int:
    """Arc length moving in the + direction from `frm` to `to` (0..L-1)."""
    return (to - frm + length) % length


def pcr_product_seq(seq: str, f3: int, r3: int) -> str:
    """Arc from f3 to r3 along + direction, both endpoints included."""
    s = normalize(seq)
    L = len(s)
    if not L:
        return ""
    f = f3 % L
    n = dist_plus(L, f, r3 % L) + 1
    return rotate_circular(s, f)[:n]


@dataclass
class Arc:
    seq: str = ""
    length: int = 0
    direction: str = ""


@dataclass
class ProductCandidates:
    arc_a: str = ""
    arc_b: str = ""
    len_a: int = 0
    len_b: int = 0
    shorter: Arc = field(default_factory=Arc)
    longer: Arc = field(default_factory=Arc)


def pcr_product_candidates(seq: str, f3: int, r3: int) -> ProductCandidates:
    """
    Both PCR arcs for one primer pair on a circular template.

    arc_a runs f3 -> r3 ("inward"), arc_b runs r3 -> f3 ("outward"). Each counts
    both endpoints, so len_a + len_b == L + 2. When f3 == r3 the inward arc is
    the single shared base and the outward arc is the full lap ending on that
    base again (L + 1).
    """
    s = normalize(seq)
    L = len(s)
    if not L:
        return ProductCandidates()

    f = f3 % L
    r = r3 % L

    len_a = dist_plus(L, f, r) + 1
    arc_a = pcr_product_seq(s, f, r)
    if f == r:
        len_b = L + 1
        arc_b = rotate_circular(s, r) + s[r]
    else:
        len_b = dist_plus(L, r, f) + 1
        arc_b = pcr_product_seq(s, r, f)

    a = Arc(arc_a, len_a, DIRECTION_INWARD)
    b = Arc(arc_b, len_b, DIRECTION_OUTWARD)
    shorter, longer = (a, b) if len_a <= len_b else (b, a)
    return ProductCandidates(arc_a, arc_b, len_a, len_b, shorter, longer)

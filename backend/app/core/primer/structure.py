# File: backend/app/core/primer/structure.py
# Version: v0.1.0
"""
Approximate secondary-structure scanners for primers.

Implements:
- Hairpin scan: O(n^2) stem growth around every (i, j) window, stem ΔG from the
  worst-case NN model (self-complementary correction applied) plus a loop
  entropy penalty
- Dimer scan: slide revcomp(b) along a, evaluate contiguous complementary runs
- 3'-end stability and qualitative ΔG classification

These are heuristics, not DP folding. All scans treat IUPAC ambiguity
pessimistically (any possible pairing counts as a pair).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from backend.app.core.dna.sequence import is_complementary, normalize, reverse_complement

from .constants import (
    DG_MODERATE,
    DG_STRONG,
    DG_VERY_STRONG,
    DIMER_MIN_RUN,
    HAIRPIN_MIN_LOOP,
    HAIRPIN_MIN_STEM,
    LOOP_PENALTY,
    LOOP_PENALTY_IMPOSSIBLE,
    THREE_PRIME_WINDOW,
)
from .thermodynamics import duplex_dg37


def get_loop_penalty(length: int) -> float:
    """Hairpin loop penalty (kcal/mol); linear beyond 9 nt, 999 below 3 nt."""
    if length < 3:
        return LOOP_PENALTY_IMPOSSIBLE
    if length in LOOP_PENALTY:
        return LOOP_PENALTY[length]
    return 4.6 + 0.1 * (length - 9)


@dataclass
class HairpinCandidate:
    dg: float
    stem_length: int
    loop_length: int
    start: int
    end: int
    stem_seq: str


def hairpin_scan(seq: str) -> Optional[HairpinCandidate]:
    """Most stable hairpin of `seq`, or None when no stem >= 3 with loop >= 3 exists."""
    s = normalize(seq)
    n = len(s)
    best: Optional[HairpinCandidate] = None

    for i in range(n):
        for j in range(i + HAIRPIN_MIN_STEM + HAIRPIN_MIN_LOOP, n):
            stem = 0
            while (
                i + stem < j - HAIRPIN_MIN_LOOP - stem
                and is_complementary(s[i + stem], s[j - 1 - stem])
            ):
                stem += 1

            if stem < HAIRPIN_MIN_STEM:
                continue
            loop = (j - i) - 2 * stem
            if loop < HAIRPIN_MIN_LOOP:
                continue

            stem_seq = s[i:i + stem] + reverse_complement(s[j - stem:j])
            dg = duplex_dg37(stem_seq, True) + get_loop_penalty(loop)
            if not math.isfinite(dg):
                continue
            if best is None or dg < best.dg:
                best = HairpinCandidate(dg, stem, loop, i, j, stem_seq)

    return best


@dataclass
class DimerCandidate:
    dg: float
    overlap: str
    offset: int
    touches3: bool
    # a-coordinates of the reported run, inclusive
    a_start: int
    a_end: int


def dimer_scan(seq_a: str, seq_b: str) -> Optional[DimerCandidate]:
    """
    Most stable contiguous duplex between `seq_a` and `seq_b`.

    revcomp(b) is slid along a at offsets -(len(b)-1) .. len(a)-1. `touches3`
    is set when the last base of the run sits on the final base of a.
    """
    a = normalize(seq_a)
    rb = reverse_complement(normalize(seq_b))
    la = len(a)
    lb = len(rb)
    if not la or not lb:
        return None

    best: Optional[DimerCandidate] = None

    def flush(run: str, offset: int, last_ai: int) -> None:
        nonlocal best
        if len(run) < DIMER_MIN_RUN:
            return
        dg = duplex_dg37(run, False)
        if not math.isfinite(dg):
            return
        if best is None or dg < best.dg:
            best = DimerCandidate(
                dg=dg,
                overlap=run,
                offset=offset,
                touches3=last_ai == la - 1,
                a_start=last_ai - len(run) + 1,
                a_end=last_ai,
            )

    for offset in range(-lb + 1, la):
        lo = max(0, -offset)
        hi = min(lb, la - offset)
        run = ""
        for i in range(lo, hi):
            ai = offset + i
            if is_complementary(a[ai], rb[i]):
                run += a[ai]
            else:
                flush(run, offset, ai - 1)
                run = ""
        flush(run, offset, offset + hi - 1)

    return best


def self_dimer_scan(seq: str) -> Optional[DimerCandidate]:
    return dimer_scan(seq, seq)


class Severity(str, Enum):
    OK = "ok"
    WARN = "warn"
    BAD = "bad"


@dataclass(frozen=True)
class DGClassification:
    label: str
    cls: Severity


def classify_dg(dg: Optional[float], touches3: bool = False) -> DGClassification:
    if dg is None or not math.isfinite(dg):
        return DGClassification("none", Severity.OK)

    if dg <= DG_VERY_STRONG:
        label, cls = "very strong", Severity.BAD
    elif dg <= DG_STRONG:
        label, cls = "strong", Severity.BAD
    elif dg <= DG_MODERATE:
        label, cls = "moderate", Severity.WARN
    else:
        label, cls = "weak", Severity.OK

    if touches3 and cls is not Severity.OK:
        label = "3' " + label
    return DGClassification(label, cls)


def three_prime_dg(seq: str, window: int = THREE_PRIME_WINDOW) -> float:
    """Symmetric duplex ΔG of the 3'-terminal `window` bases; NaN below 2 nt."""
    s = normalize(seq)
    if len(s) < 2:
        return math.nan
    w = min(window, len(s))
    return duplex_dg37(s[-w:], True)

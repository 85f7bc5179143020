# File: backend/app/core/primer/overlaps.py
# Version: v0.1.0
"""
Overlap evaluation for Gibson / In-Fusion style junctions.

`find_best_overlap` takes the 3' end of fragment A and tries every length in
[max(5, minLen), max(that, maxLen)], keeping the one whose Tm is closest to
`tmTarget`. The matching range on revcomp(B) is reported alongside.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from backend.app.core.dna.sequence import gc_pct, normalize, reverse_complement

from .parameters import DesignOptions
from .thermodynamics import duplex_dg37, tm_nn

MIN_OVERLAP_LEN = 5


@dataclass
class OverlapEval:
    seq: str
    length: int
    gc: float
    tm: float
    dg: float
    tm_diff: float


def eval_overlap(seq: str, options: Optional[DesignOptions] = None) -> OverlapEval:
    opts = options or DesignOptions()
    s = normalize(seq)
    tm = tm_nn(s, opts.Na_mM, opts.Mg_mM, opts.conc_nM)
    return OverlapEval(
        seq=s,
        length=len(s),
        gc=gc_pct(s),
        tm=tm,
        dg=duplex_dg37(s, True),
        tm_diff=abs(tm - opts.tmTarget) if math.isfinite(tm) else math.nan,
    )


@dataclass
class OverlapMatch(OverlapEval):
    a_start: int = 0
    a_end: int = 0
    b_start: int = 0
    b_end: int = 0


def find_best_overlap(seq_a: str, seq_b: str, options: Optional[DesignOptions] = None) -> Optional[OverlapMatch]:
    opts = options or DesignOptions()
    a = normalize(seq_a)
    b_rc = reverse_complement(normalize(seq_b))
    if not a or not b_rc:
        return None

    lo = max(MIN_OVERLAP_LEN, opts.minLen)
    hi = max(lo, opts.maxLen)

    best: Optional[OverlapMatch] = None
    for n in range(lo, hi + 1):
        if n > len(a) or n > len(b_rc):
            break
        r = eval_overlap(a[len(a) - n:], opts)
        if not math.isfinite(r.tm):
            continue
        if best is None or r.tm_diff < best.tm_diff:
            best = OverlapMatch(
                seq=r.seq,
                length=r.length,
                gc=r.gc,
                tm=r.tm,
                dg=r.dg,
                tm_diff=r.tm_diff,
                a_start=len(a) - n,
                a_end=len(a),
                b_start=len(b_rc) - n,
                b_end=len(b_rc),
            )
    return best

# File: backend/app/core/primer/scoring.py
# Version: v0.3.0
"""
Heuristic QC scoring for single primers and primer pairs.

Higher score is better (0..100). Starting from 100:
- length outside 15..35 nt                       -20
- |Tm - tmTarget| > 5 °C: -20, > 3 °C: -10; Tm NaN -30
- GC outside 30..70 %                            -10
- hairpin ΔG <= -5: -20, <= -3: -10
- self-dimer ΔG <= -7: -25, <= -5: -15
- 3'-end ΔG <= -5                                -10
- homopolymer run                                -10
Floored at 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from backend.app.core.dna.sequence import gc_pct, has_3gc_clamp, has_homopolymer, normalize

from .parameters import DesignOptions
from .structure import (
    DGClassification,
    DimerCandidate,
    HairpinCandidate,
    classify_dg,
    dimer_scan,
    hairpin_scan,
    self_dimer_scan,
    three_prime_dg,
)
from .thermodynamics import tm_nn, tm_reference

QC_LEN_MIN = 15
QC_LEN_MAX = 35
QC_GC_MIN = 30.0
QC_GC_MAX = 70.0


@dataclass
class PrimerQC:
    seq: str
    length: int
    gc: float
    tm: float
    tm_reference: float
    hairpin: Optional[HairpinCandidate]
    self_dimer: Optional[DimerCandidate]
    three_prime_dg: float
    homopolymer: bool
    gc_clamp: bool
    tm_in_range: bool  # |tm - tmTarget| <= tmTolerance
    score: int

    @property
    def label(self) -> str:
        return score_label(self.score)


def qc_single_primer(seq: str, options: Optional[DesignOptions] = None) -> PrimerQC:
    opts = options or DesignOptions()
    s = normalize(seq)
    n = len(s)
    gc = gc_pct(s)
    tm = tm_nn(s, opts.Na_mM, opts.Mg_mM, opts.conc_nM)
    hp = hairpin_scan(s)
    sd = self_dimer_scan(s)
    dg3 = three_prime_dg(s)
    homo = has_homopolymer(s, opts.homopolymerMax)

    score = 100
    if n < QC_LEN_MIN or n > QC_LEN_MAX:
        score -= 20

    if math.isfinite(tm):
        diff = abs(tm - opts.tmTarget)
        if diff > 5:
            score -= 20
        elif diff > 3:
            score -= 10
    else:
        score -= 30

    if gc < QC_GC_MIN or gc > QC_GC_MAX:
        score -= 10

    if hp is not None and hp.dg <= -5:
        score -= 20
    elif hp is not None and hp.dg <= -3:
        score -= 10

    if sd is not None and sd.dg <= -7:
        score -= 25
    elif sd is not None and sd.dg <= -5:
        score -= 15

    if math.isfinite(dg3) and dg3 <= -5:
        score -= 10

    if homo:
        score -= 10

    return PrimerQC(
        seq=s,
        length=n,
        gc=gc,
        tm=tm,
        tm_reference=tm_reference(s, opts.Na_mM, opts.Mg_mM, opts.conc_nM),
        hairpin=hp,
        self_dimer=sd,
        three_prime_dg=dg3,
        homopolymer=homo,
        gc_clamp=has_3gc_clamp(s),
        tm_in_range=math.isfinite(tm) and abs(tm - opts.tmTarget) <= opts.tmTolerance,
        score=max(0, score),
    )


def score_label(score: float) -> str:
    if score >= 90:
        return "Excellent"
    if score >= 75:
        return "Good"
    if score >= 60:
        return "Fair"
    if score > 0:
        return "Poor"
    return "Fail"


@dataclass
class PairQC:
    fwd: PrimerQC
    rev: PrimerQC
    cross_dimer: Optional[DimerCandidate]

    @property
    def cross_dimer_class(self) -> DGClassification:
        if self.cross_dimer is None:
            return classify_dg(None)
        return classify_dg(self.cross_dimer.dg, self.cross_dimer.touches3)


def qc_primer_pair(fwd: str, rev: str, options: Optional[DesignOptions] = None) -> PairQC:
    return PairQC(
        fwd=qc_single_primer(fwd, options),
        rev=qc_single_primer(rev, options),
        cross_dimer=dimer_scan(fwd, rev),
    )


@dataclass
class DimerCell:
    dg: float
    touches3: bool
    classification: DGClassification


@dataclass
class LabeledPrimer:
    label: str
    seq: str


@dataclass
class DimerMatrix:
    primers: List[LabeledPrimer]
    matrix: List[List[Optional[DimerCell]]]


def build_primer_dimer_matrix(primers: Sequence[Mapping[str, str]]) -> DimerMatrix:
    """
    Symmetric all-vs-all dimer matrix; the diagonal holds self-dimers.

    `primers` items carry `seq` and optionally `label`/`name`. Cells are None
    when either sequence is empty; a pair with no qualifying run gets a NaN
    cell classified "none".
    """
    items = [
        LabeledPrimer(p.get("label") or p.get("name") or f"primer_{i + 1}", normalize(p.get("seq") or ""))
        for i, p in enumerate(primers)
    ]
    n = len(items)
    matrix: List[List[Optional[DimerCell]]] = [[None] * n for _ in range(n)]

    for i in range(n):
        for j in range(i, n):
            a, b = items[i].seq, items[j].seq
            if not a or not b:
                continue
            d = dimer_scan(a, b)
            if d is None:
                cell = DimerCell(math.nan, False, classify_dg(None))
            else:
                cell = DimerCell(d.dg, d.touches3, classify_dg(d.dg, d.touches3))
            matrix[i][j] = matrix[j][i] = cell

    return DimerMatrix(primers=items, matrix=matrix)

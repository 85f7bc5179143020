# File: backend/app/core/primer/designer.py
# Version: v2.0.0
"""
Anchored primer design for multiplex PCR targets.

What this file does
-------------------
- Forward primer: a prefix of the target, length in [minLen, min(maxLen, L)].
- Reverse primer: a suffix of the target, reverse-complemented.
- Each side picks the length whose NN Tm is closest to `tmTarget`, preferring
  candidates within `bindingTmTolerance`; otherwise the closest overall.
- Optional 5' overlap tails (cloning) are prepended after selection. Tm is
  always reported on the core (annealing) sequence; `full_tm` covers the tail.
- Multiplex mode designs every target, rejects products deviating more than
  10 % from `expected_length`, then checks each pair for amplification on the
  other targets.

Coordinates
-----------
- `start` and `end` are 0-based on the target, with `end` exclusive.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from backend.app.core.dna.sequence import gc_pct, normalize, reverse_complement

from .constants import EXPECTED_LENGTH_TOLERANCE
from .offtarget import OffTargetHit, TargetRecord, check_off_target_amplification
from .parameters import DesignOptions
from .pooling import PoolingPair
from .thermodynamics import tm_nn

log = logging.getLogger(__name__)


# --- Diagnostics / DTOs --------------------------------------------------------------------------

@dataclass
class CandidateRow:
    side: str                # 'F' or 'R'
    start: int               # +strand slice start on the target
    length: int
    seq: str                 # +strand slice (not yet reverse-complemented for 'R')
    tm: float
    within_tolerance: bool


@dataclass
class BindingSite:
    seq: str
    length: int
    tm: float
    start: int
    end: int
    candidates: List[CandidateRow] = field(default_factory=list, repr=False)


@dataclass
class DesignedPrimer:
    seq: str                 # overlap + core, 5'->3'
    length: int
    tm: float                # core only
    full_tm: float
    gc: float
    start: int
    end: int
    core_seq: str
    overlap_seq: str = ""


@dataclass
class DesignedPair:
    forward: DesignedPrimer
    reverse: DesignedPrimer
    product_length: int


def find_primer_binding_site(
    sequence: str, is_forward: bool, options: Optional[DesignOptions] = None
) -> Optional[BindingSite]:
    """
    Scan lengths anchored at the 5' end (forward) or 3' end (reverse) of the
    target. Returns None when no length gives a finite Tm.
    """
    opts = options or DesignOptions()
    s = normalize(sequence)
    L = len(s)

    rows: List[CandidateRow] = []
    best: Optional[CandidateRow] = None
    best_in_tol: Optional[CandidateRow] = None

    for n in range(opts.minLen, min(opts.maxLen, L) + 1):
        start = 0 if is_forward else L - n
        piece = s[start:start + n]
        tm = tm_nn(piece, opts.Na_mM, opts.Mg_mM, opts.conc_nM)
        if not math.isfinite(tm):
            continue
        diff = abs(tm - opts.tmTarget)
        row = CandidateRow("F" if is_forward else "R", start, n, piece, tm, diff <= opts.bindingTmTolerance)
        rows.append(row)

        if row.within_tolerance and (best_in_tol is None or diff < abs(best_in_tol.tm - opts.tmTarget)):
            best_in_tol = row
        if best is None or diff < abs(best.tm - opts.tmTarget):
            best = row

    pick = best_in_tol or best
    if pick is None:
        return None
    return BindingSite(pick.seq, pick.length, pick.tm, pick.start, pick.start + pick.length, rows)


def _designed(core: str, site: BindingSite, overlap: str, opts: DesignOptions) -> DesignedPrimer:
    full = overlap + core
    full_tm = tm_nn(full, opts.Na_mM, opts.Mg_mM, opts.conc_nM) if overlap else site.tm
    return DesignedPrimer(
        seq=full,
        length=len(full),
        tm=site.tm,
        full_tm=full_tm,
        gc=gc_pct(full),
        start=site.start,
        end=site.end,
        core_seq=core,
        overlap_seq=overlap,
    )


def design_primer_pair(
    target_seq: str,
    options: Optional[DesignOptions] = None,
    overlap_fwd: str = "",
    overlap_rev: str = "",
) -> Optional[DesignedPair]:
    """Forward + reverse primer for one target; None if either side fails."""
    opts = options or DesignOptions()
    fwd = find_primer_binding_site(target_seq, True, opts)
    if fwd is None:
        return None
    rev = find_primer_binding_site(target_seq, False, opts)
    if rev is None:
        return None

    return DesignedPair(
        forward=_designed(fwd.seq, fwd, normalize(overlap_fwd), opts),
        reverse=_designed(reverse_complement(rev.seq), rev, normalize(overlap_rev), opts),
        product_length=rev.end - fwd.start,
    )


# --- Multiplex -----------------------------------------------------------------------------------

@dataclass
class MultiplexResult:
    target: TargetRecord
    success: bool
    primers: Optional[DesignedPair] = None
    error: str = ""
    off_targets: List[OffTargetHit] = field(default_factory=list)


def design_multiplex_primers(
    targets: Sequence[TargetRecord],
    options: Optional[DesignOptions] = None,
    check_off_target: bool = True,
    overlap_fwd: str = "",
    overlap_rev: str = "",
) -> List[MultiplexResult]:
    opts = options or DesignOptions()
    results: List[MultiplexResult] = []

    for t in targets:
        pair = design_primer_pair(t.seq, opts, overlap_fwd, overlap_rev)
        if pair is None:
            log.debug("Target %s: no primer pair", t.name)
            results.append(MultiplexResult(t, False, error="Unable to design primer pair"))
            continue

        if t.expected_length:
            diff = abs(pair.product_length - t.expected_length)
            if diff > t.expected_length * EXPECTED_LENGTH_TOLERANCE:
                log.debug("Target %s: product %d bp vs expected %d bp", t.name, pair.product_length, t.expected_length)
                results.append(
                    MultiplexResult(
                        t,
                        False,
                        error=(
                            f"Product length mismatch: expected {t.expected_length} bp, "
                            f"actual {pair.product_length} bp"
                        ),
                    )
                )
                continue

        results.append(MultiplexResult(t, True, primers=pair))

    if check_off_target:
        for i, r in enumerate(results):
            if not r.success or r.primers is None:
                continue
            # Core sequences only: overlap tails do not anneal in early cycles
            r.off_targets = check_off_target_amplification(
                r.primers.forward.core_seq,
                r.primers.reverse.core_seq,
                targets,
                i,
                opts.seedLen,
                opts.maxMismatchRatio,
            )

    ok = sum(1 for r in results if r.success)
    log.info("Designed %d/%d targets", ok, len(results))
    return results


def to_pooling_pairs(results: Sequence[MultiplexResult]) -> List[PoolingPair]:
    """Successful designs as pooling input, in the same order."""
    pairs: List[PoolingPair] = []
    for r in results:
        if not r.success or r.primers is None:
            continue
        pairs.append(
            PoolingPair(
                name=r.target.name,
                forward=r.primers.forward.seq,
                reverse=r.primers.reverse.seq,
                product_length=r.primers.product_length,
                off_target_names=frozenset(h.target_name for h in r.off_targets),
            )
        )
    return pairs

# File: backend/app/core/primer/offtarget.py
# Version: v0.3.0
"""
Seed-and-extend primer matching and amplicon prediction.

Approach:
- Ungapped comparison of a primer against a template window.
- The 3'-terminal seed must match exactly (polymerase extension needs it).
- The 5' remainder tolerates a fraction of mismatches.
- Reverse primers are scanned as revcomp(rev) along the forward strand, so a
  hit position is already a forward coordinate.
- Both primers of a pair share one seed length, min(10, len(fwd), len(rev)).

Matching is literal symbol equality; IUPAC codes are not expanded here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from backend.app.core.dna.sequence import normalize, reverse_complement

from .constants import DEFAULT_MAX_MISMATCH_RATIO, DEFAULT_SEED_LEN


def _effective_seed(primer_len: int, seed_len: Optional[int]) -> int:
    if seed_len is None:
        seed_len = DEFAULT_SEED_LEN
    return max(1, min(seed_len, primer_len))


def primer_matches_with_mismatch(
    template: str,
    pos: int,
    primer: str,
    seed_len: Optional[int] = None,
    max_mismatch_ratio: float = DEFAULT_MAX_MISMATCH_RATIO,
) -> bool:
    """
    True if `primer` can prime at template[pos : pos + len(primer)].

    The last `seed_len` bases (default min(10, len(primer))) must match exactly;
    mismatches / len(5' part) must be <= `max_mismatch_ratio`.
    """
    n = len(primer)
    if not n or pos < 0 or pos + n > len(template):
        return False

    window = template[pos:pos + n]
    seed = _effective_seed(n, seed_len)
    if primer[n - seed:] != window[n - seed:]:
        return False

    five = n - seed
    if five == 0:
        return True
    mism = sum(1 for i in range(five) if primer[i] != window[i])
    return mism / five <= max_mismatch_ratio


def _scan(template: str, primer: str, seed_len: Optional[int], max_mismatch_ratio: float) -> List[int]:
    if not primer:
        return []
    return [
        i
        for i in range(len(template) - len(primer) + 1)
        if primer_matches_with_mismatch(template, i, primer, seed_len, max_mismatch_ratio)
    ]


@dataclass
class Amplicon:
    fwd_pos: int
    rev_pos: int
    start: int
    end: int  # exclusive
    length: int
    seq: str


def find_amplicons(
    template: str,
    fwd: str,
    rev: str,
    seed_len: Optional[int] = None,
    max_mismatch_ratio: float = DEFAULT_MAX_MISMATCH_RATIO,
) -> List[Amplicon]:
    """
    Products of a primer pair on a linear template.

    `rev_pos` is where revcomp(rev) matches the forward strand. Every forward
    hit f and reverse hit r with f < r yields [f, r + len(rev)).
    """
    tpl = normalize(template)
    f = normalize(fwd)
    r_rc = reverse_complement(normalize(rev))
    if seed_len is None:
        seed_len = min(DEFAULT_SEED_LEN, len(f), len(r_rc))

    hits_f = _scan(tpl, f, seed_len, max_mismatch_ratio)
    hits_r = _scan(tpl, r_rc, seed_len, max_mismatch_ratio)

    out: List[Amplicon] = []
    for fp in hits_f:
        for rp in hits_r:
            if fp >= rp:
                continue
            end = rp + len(r_rc)
            out.append(Amplicon(fp, rp, fp, end, end - fp, tpl[fp:end]))
    return out


@dataclass
class TargetRecord:
    name: str
    seq: str
    expected_length: Optional[int] = None


@dataclass
class OffTargetHit:
    target_name: str
    target_index: int
    amplicons: List[Amplicon] = field(default_factory=list)


def check_off_target_amplification(
    fwd: str,
    rev: str,
    targets: Sequence[TargetRecord],
    current_index: int,
    seed_len: Optional[int] = None,
    max_mismatch_ratio: float = DEFAULT_MAX_MISMATCH_RATIO,
) -> List[OffTargetHit]:
    """Amplicons of (fwd, rev) on every target except `current_index`."""
    hits: List[OffTargetHit] = []
    for i, t in enumerate(targets):
        if i == current_index:
            continue
        amps = find_amplicons(t.seq, fwd, rev, seed_len, max_mismatch_ratio)
        if amps:
            hits.append(OffTargetHit(t.name, i, amps))
    return hits

# File: backend/app/core/dna/features.py
# Version: v0.1.0
"""
Approximate detection of known plasmid features (markers, origins, promoters).

Each reference feature is searched on both strands of the plasmid:
- a central seed (up to 12 nt) of the feature anchors candidate positions,
- the full feature is then compared ungapped and accepted with at most
  5% mismatches,
- the strand with fewer mismatches wins (forward on ties).

Reference entries shorter than 150 nt are skipped as too noisy. Where detected
features overlap, the longest one at the leftmost position is kept.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple

from .sequence import normalize, reverse_complement

log = logging.getLogger(__name__)

MIN_FEATURE_LEN = 150
MAX_MISMATCH_FRAC = 0.05
FEATURE_SEED_LEN = 12

_NON_ACGT = re.compile(r"[^ACGT]")
_ORI = re.compile(r"\bori\b")
_CDS = re.compile(r"\b(cds|orf)\b")


@dataclass
class DetectedFeature:
    name: str
    start: int
    end: int  # exclusive
    kind: str
    strand: str  # "+" or "-"

    @property
    def length(self) -> int:
        return self.end - self.start


def best_approx_match(haystack: str, pattern: str, max_mismatch_frac: float = MAX_MISMATCH_FRAC) -> Tuple[int, int]:
    """
    (index, mismatches) of the best ungapped placement of `pattern`, or
    (-1, len(pattern) + 1) when no placement is within the mismatch budget.
    """
    H, P = len(haystack), len(pattern)
    if not H or not P or P > H:
        return -1, P + 1

    max_mm = int(P * max_mismatch_frac)
    seed_len = min(FEATURE_SEED_LEN, P)
    seed_start = (P - seed_len) // 2
    seed = pattern[seed_start:seed_start + seed_len]

    best_idx, best_mm = -1, P + 1
    pos = haystack.find(seed)
    while pos != -1:
        start = pos - seed_start
        if 0 <= start and start + P <= H:
            mm = 0
            for j in range(P):
                if haystack[start + j] != pattern[j]:
                    mm += 1
                    if mm > max_mm:
                        break
            if mm <= max_mm and mm < best_mm:
                best_idx, best_mm = start, mm
        pos = haystack.find(seed, pos + 1)
    return best_idx, best_mm


def feature_kind(name: str, declared: str = "") -> str:
    """Kind from keywords in the name, else the declared type."""
    low = name.lower()
    if "terminator" in low:
        return "terminator"
    if "promoter" in low:
        return "promoter"
    if "origin" in low or _ORI.search(low):
        return "origin"
    if _CDS.search(low) or "gene" in low:
        return "cds"
    return declared or ""


def detect_features(seq: str, feature_db: Iterable[Mapping[str, str]]) -> List[DetectedFeature]:
    """
    Known features found in `seq`, non-overlapping, sorted by start.

    `feature_db` entries are mappings with `name`, `sequence` (or `seq`) and an
    optional `type`.
    """
    s = normalize(seq)
    rc = reverse_complement(s)
    L = len(s)

    found: List[DetectedFeature] = []
    for entry in feature_db:
        pattern = _NON_ACGT.sub("", (entry.get("sequence") or entry.get("seq") or "").upper())
        if len(pattern) < MIN_FEATURE_LEN:
            continue
        name = entry.get("name") or "feature"
        P = len(pattern)

        f_idx, f_mm = best_approx_match(s, pattern)
        r_idx, r_mm = best_approx_match(rc, pattern)
        if f_idx == -1 and r_idx == -1:
            continue

        kind = feature_kind(name, entry.get("type") or "")
        if r_idx == -1 or (f_idx != -1 and f_mm <= r_mm):
            found.append(DetectedFeature(name, f_idx, f_idx + P, kind, "+"))
        else:
            start = L - (r_idx + P)
            found.append(DetectedFeature(name, start, start + P, kind, "-"))

    found.sort(key=lambda f: (f.start, -f.length))
    kept: List[DetectedFeature] = []
    for f in found:
        if all(f.end <= k.start or f.start >= k.end for k in kept):
            kept.append(f)
    log.debug("Feature scan: %d hits, %d kept on %d bp", len(found), len(kept), L)
    return kept

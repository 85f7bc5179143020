# File: backend/app/core/dna/sequence.py
# Version: v0.1.0
"""
IUPAC-aware DNA sequence basics.

Implements:
- Normalization to the IUPAC DNA alphabet (U -> T, I/P/X -> N)
- Concrete base sets and ambiguity-aware complementarity
- Complement / reverse complement
- GC percentage, homopolymer detection, 3' GC clamp
- Composition and a simple complexity metric

The ambiguity tables come from Biopython (`Bio.Data.IUPACData`) and are extended
with the symbols accepted on input (U, I, P, X).
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from Bio.Data.IUPACData import ambiguous_dna_complement, ambiguous_dna_values

from backend.app.core.errors import InvalidSequenceError

_INVALID_RE = re.compile(r"[^ACGTURYSWKMBDHVNIPX]")
_EXTENDED_RE = re.compile(r"[IPX]")

# symbol -> concrete bases (sorted, deterministic enumeration order)
IUPAC_BASES: Mapping[str, Tuple[str, ...]] = MappingProxyType(
    {
        **{sym: tuple(sorted(bases)) for sym, bases in ambiguous_dna_values.items()},
        "U": ("T",),
        "I": ("A", "C", "G", "T"),
        "P": ("A", "C", "G", "T"),
        "X": ("A", "C", "G", "T"),
    }
)

IUPAC_COMPLEMENT: Mapping[str, str] = MappingProxyType(
    {
        **ambiguous_dna_complement,
        "U": "A",
        "I": "N",
        "P": "N",
        "X": "N",
    }
)

_WATSON_CRICK = {"A": "T", "C": "G", "G": "C", "T": "A"}


def normalize(raw: str) -> str:
    """Uppercase, keep IUPAC DNA symbols only, map U->T and I/P/X->N."""
    if not raw:
        return ""
    up = _INVALID_RE.sub("", raw.upper())
    return _EXTENDED_RE.sub("N", up.replace("U", "T"))


def normalize_strict(raw: str) -> str:
    """Like `normalize`, but an empty result raises InvalidSequenceError."""
    s = normalize(raw)
    if not s:
        raise InvalidSequenceError("Sequence is empty after IUPAC normalization.")
    return s


def base_set(symbol: str) -> Tuple[str, ...]:
    """Concrete bases for an IUPAC symbol; unknown symbols give ()."""
    return IUPAC_BASES.get((symbol or "").upper(), ())


def is_complementary(b1: str, b2: str) -> bool:
    """True if at least one concrete pairing of b1 and b2 is Watson-Crick."""
    s2 = base_set(b2)
    if not s2:
        return False
    return any(_WATSON_CRICK[x] in s2 for x in base_set(b1))


def complement(seq: str) -> str:
    return "".join(IUPAC_COMPLEMENT.get(b, "N") for b in (seq or "").upper())


def reverse_complement(seq: str) -> str:
    """Reverse, then complement each symbol independently (IUPAC-aware)."""
    return complement((seq or "")[::-1])


def gc_pct(seq: str) -> float:
    s = (seq or "").upper()
    if not s:
        return 0.0
    return 100.0 * (s.count("G") + s.count("C")) / len(s)


def has_homopolymer(seq: str, max_run: int = 4) -> bool:
    """Return True if any A/C/G/T run reaches `max_run` (case-insensitive)."""
    if not seq or max_run <= 1:
        return False
    pattern = "|".join(f"{b}{{{max_run},}}" for b in "ACGT")
    return re.search(pattern, seq, flags=re.IGNORECASE) is not None


def has_3gc_clamp(seq: str) -> bool:
    s = normalize(seq)
    return bool(s) and s[-1] in ("G", "C")


@dataclass
class BaseComposition:
    A: int
    C: int
    G: int
    T: int
    other: int
    length: int
    gc_pct: float


def base_composition(seq: str) -> BaseComposition:
    s = normalize(seq)
    counts = {b: s.count(b) for b in "ACGT"}
    other = len(s) - sum(counts.values())
    return BaseComposition(other=other, length=len(s), gc_pct=gc_pct(s), **counts)


@dataclass
class Complexity:
    length: int
    entropy: float
    repeat_ratio: float
    low_complexity: bool


def seq_complexity(seq: str) -> Complexity:
    """
    Shannon entropy (bits) over A/C/G/T frequencies plus the fraction of
    adjacent identical bases. Flags low complexity when entropy < 1.2 or
    repeat ratio > 0.6.
    """
    s = normalize(seq)
    n = len(s)
    if not n:
        return Complexity(0, 0.0, 0.0, False)

    counts = [s.count(b) for b in "ACGT"]
    total = sum(counts)
    entropy = 0.0
    for c in counts:
        if c:
            p = c / total
            entropy -= p * math.log2(p)

    repeats = sum(1 for i in range(n - 1) if s[i] == s[i + 1])
    repeat_ratio = repeats / (n - 1) if n > 1 else 0.0
    return Complexity(n, entropy, repeat_ratio, entropy < 1.2 or repeat_ratio > 0.6)

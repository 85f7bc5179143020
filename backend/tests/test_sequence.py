# File: backend/tests/test_sequence.py
# Version: v0.1.0
"""
IUPAC normalization, complementarity and composition helpers.
"""
import math

import pytest

from backend.app.core.dna.sequence import (
    base_composition,
    base_set,
    complement,
    gc_pct,
    has_3gc_clamp,
    has_homopolymer,
    is_complementary,
    normalize,
    normalize_strict,
    reverse_complement,
    seq_complexity,
)
from backend.app.core.errors import InvalidSequenceError, PrimerWeaverError


def test_normalize_maps_and_drops_symbols():
    assert normalize("acgu xIPX-") == "ACGTNNNN"
    assert normalize("ACGT\nRYKM\t") == "ACGTRYKM"
    assert normalize("") == ""
    assert normalize("1234!") == ""


def test_normalize_strict_rejects_empty():
    with pytest.raises(InvalidSequenceError):
        normalize_strict("12 34")
    # engine errors stay ValueErrors for generic callers
    with pytest.raises(ValueError):
        normalize_strict("")
    assert issubclass(InvalidSequenceError, PrimerWeaverError)
    assert normalize_strict(" ac gt ") == "ACGT"


def test_base_sets():
    assert base_set("A") == ("A",)
    assert base_set("R") == ("A", "G")
    assert base_set("N") == ("A", "C", "G", "T")
    assert base_set("u") == ("T",)
    assert base_set("Z") == ()
    assert base_set("") == ()


def test_is_complementary_with_ambiguity():
    assert is_complementary("A", "T")
    assert is_complementary("G", "C")
    assert not is_complementary("A", "A")
    assert not is_complementary("G", "T")
    # R = A/G, Y = C/T -> A:T is possible
    assert is_complementary("R", "Y")
    assert is_complementary("N", "A")
    assert not is_complementary("A", "Z")


def test_reverse_complement():
    assert complement("ACGT") == "TGCA"
    assert reverse_complement("AACGTR") == "YACGTT"
    assert reverse_complement("") == ""
    for s in ("ACGTTGCA", "GATTACA", "RYKMSWBDHVN", "acgtn"):
        assert reverse_complement(reverse_complement(s)) == s.upper()


def test_gc_pct():
    assert gc_pct("") == 0.0
    assert gc_pct("GGCC") == 100.0
    assert gc_pct("atgc") == 50.0
    assert gc_pct("AAAN") == 0.0


def test_homopolymer_and_clamp():
    assert has_homopolymer("ATTTTGC", 4)
    assert not has_homopolymer("ATTTGC", 4)
    assert has_homopolymer("gcaaaa", 4)
    assert not has_homopolymer("AAAAAA", 1)
    assert not has_homopolymer("", 4)

    assert has_3gc_clamp("ATG")
    assert has_3gc_clamp("aac")
    assert not has_3gc_clamp("ATA")
    assert not has_3gc_clamp("")


def test_base_composition_counts_ambiguity_as_other():
    comp = base_composition("ACGTN")
    assert (comp.A, comp.C, comp.G, comp.T, comp.other) == (1, 1, 1, 1, 1)
    assert comp.length == 5
    assert math.isclose(comp.gc_pct, 40.0)


def test_seq_complexity():
    low = seq_complexity("AAAAAAAA")
    assert low.entropy == 0.0
    assert low.repeat_ratio == 1.0
    assert low.low_complexity

    high = seq_complexity("ACGTACGT")
    assert math.isclose(high.entropy, 2.0)
    assert high.repeat_ratio == 0.0
    assert not high.low_complexity

    empty = seq_complexity("")
    assert empty.length == 0 and not empty.low_complexity

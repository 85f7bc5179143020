# File: backend/tests/test_structure.py
# Version: v0.2.0
"""
Hairpin and dimer scans, 3'-end stability and ΔG classification.
"""
import math

from backend.app.core.dna.sequence import is_complementary, reverse_complement
from backend.app.core.primer.structure import (
    Severity,
    classify_dg,
    dimer_scan,
    get_loop_penalty,
    hairpin_scan,
    self_dimer_scan,
    three_prime_dg,
)
from backend.app.core.primer.thermodynamics import duplex_dg37


def test_loop_penalty():
    assert get_loop_penalty(2) == 999.0
    assert get_loop_penalty(3) == 5.7
    assert get_loop_penalty(9) == 4.6
    assert math.isclose(get_loop_penalty(12), 4.9)


def test_hairpin_absent():
    assert hairpin_scan("") is None
    assert hairpin_scan("ACGT") is None
    assert hairpin_scan("AAAAAAAAAAAA") is None


def test_hairpin_found_and_consistent():
    hp = hairpin_scan("GGGGAAAACCCC")
    assert hp is not None
    assert hp.stem_length >= 3
    assert hp.loop_length >= 3
    assert hp.end - hp.start == 2 * hp.stem_length + hp.loop_length
    assert len(hp.stem_seq) == 2 * hp.stem_length
    assert math.isfinite(hp.dg)


def _all_hairpin_dgs(seq):
    """ΔG of every qualifying (i, j) window, stems grown from both ends inward."""
    out = []
    n = len(seq)
    for i in range(n):
        for j in range(i + 6, n):
            stem = 0
            while i + stem < j - 3 - stem and is_complementary(seq[i + stem], seq[j - 1 - stem]):
                stem += 1
            loop = (j - i) - 2 * stem
            if stem < 3 or loop < 3:
                continue
            left = seq[i:i + stem]
            right = seq[j - stem:j]
            out.append(duplex_dg37(left + reverse_complement(right), True) + get_loop_penalty(loop))
    return out


def test_hairpin_is_global_minimum():
    for seq in ("GCGCAATTTGCGCAAGCGC", "ACGGATCCTTTTGGATCCGT", "GAGCTCAAACCGAGCTCTTTT"):
        dgs = _all_hairpin_dgs(seq)
        hp = hairpin_scan(seq)
        assert dgs, seq
        assert math.isclose(hp.dg, min(dgs), abs_tol=1e-9)


def test_hairpin_dg_is_symmetric_stem_plus_loop():
    hp = hairpin_scan("ACGGATCCTTTTGGATCCGT")
    expected = duplex_dg37(hp.stem_seq, True) + get_loop_penalty(hp.loop_length)
    assert math.isclose(hp.dg, expected)
    # the self-complementary correction makes the stem term less stable
    assert hp.dg > duplex_dg37(hp.stem_seq) + get_loop_penalty(hp.loop_length)


def test_hairpin_ambiguous_stem():
    # R pairs with Y, extending a GGG/CCC stem to four pairs
    hp = hairpin_scan("GGGRAAAAYCCC")
    assert (hp.start, hp.end) == (0, 12)
    assert (hp.stem_length, hp.loop_length) == (4, 4)
    assert "R" in hp.stem_seq
    assert math.isclose(hp.dg, duplex_dg37(hp.stem_seq, True) + get_loop_penalty(4))
    assert math.isclose(hp.dg, min(_all_hairpin_dgs("GGGRAAAAYCCC")))


def test_dimer_empty_input():
    assert dimer_scan("", "ACGT") is None
    assert dimer_scan("ACGT", "") is None


def test_dimer_no_complementary_run():
    # A never pairs with revcomp(C...) = G...
    assert dimer_scan("AAAAAAAA", "CCCCCCCC") is None


def test_self_dimer_poly_a():
    d = self_dimer_scan("AAAA")
    assert d == dimer_scan("AAAA", "AAAA")
    assert d.overlap == "AAAA"
    assert d.offset == 0
    assert (d.a_start, d.a_end) == (0, 3)
    assert d.touches3


def test_dimer_run_at_three_prime_end():
    d = dimer_scan("TTTTTTGGGG", "GGGG")
    assert d.overlap == "GGGG"
    assert d.offset == 6
    assert (d.a_start, d.a_end) == (6, 9)
    assert d.touches3
    assert math.isclose(d.dg, duplex_dg37("GGGG"))


def test_dimer_run_away_from_three_prime_end():
    d = dimer_scan("GGGGTTTTTT", "GGGG")
    assert d.overlap == "GGGG"
    assert (d.a_start, d.a_end) == (0, 3)
    assert not d.touches3


def test_touches3_for_run_starting_inside_window():
    # window a[2..5] = AGGG against revcomp(b) = GCCC: the run starts one base
    # into the window and still ends on the last base of a
    d = dimer_scan("TTAGGG", "GGGC")
    assert d.overlap == "GGG"
    assert d.offset == 2
    assert (d.a_start, d.a_end) == (3, 5)
    assert d.touches3


def test_touches3_matches_reported_coordinates():
    for a, b in (("ACGTTGCAAT", "ATTGCAACGT"), ("GATTACAGGC", "GCCTG"), ("CCGGAATT", "AATTCCGG")):
        d = dimer_scan(a, b)
        if d is None:
            continue
        assert d.touches3 == (d.a_end == len(a) - 1)
        assert d.a_end - d.a_start + 1 == len(d.overlap)
        assert a[d.a_start:d.a_end + 1] == d.overlap


def test_classify_dg():
    assert classify_dg(-8.0).label == "very strong"
    assert classify_dg(-7.0).cls is Severity.BAD
    assert classify_dg(-8.0, True).label == "3' very strong"
    assert classify_dg(-6.0).label == "strong"
    assert classify_dg(-5.0).cls is Severity.BAD
    moderate = classify_dg(-4.0, True)
    assert (moderate.label, moderate.cls) == ("3' moderate", Severity.WARN)
    weak = classify_dg(-1.0, True)
    assert (weak.label, weak.cls) == ("weak", Severity.OK)
    assert classify_dg(None).label == "none"
    assert classify_dg(math.nan, True).label == "none"


def test_three_prime_dg():
    assert math.isnan(three_prime_dg("A"))
    assert math.isclose(three_prime_dg("ACGTGC"), duplex_dg37("GTGC", True))
    assert math.isclose(three_prime_dg("GC"), duplex_dg37("GC", True))

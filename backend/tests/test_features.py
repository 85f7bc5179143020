# File: backend/tests/test_features.py
# Version: v0.1.0
"""
Approximate plasmid feature detection on both strands.
"""
import random

from backend.app.core.dna.features import best_approx_match, detect_features, feature_kind
from backend.app.core.dna.sequence import reverse_complement

_rng = random.Random(11)


def _rand(n):
    return "".join(_rng.choice("ACGT") for _ in range(n))


AMP = _rand(300)
ORI = _rand(200)
SHORT = _rand(100)
S1, S2, S3 = _rand(40), _rand(35), _rand(50)
PLASMID = S1 + AMP + S2 + reverse_complement(ORI) + S3 + SHORT

DB = [
    {"name": "AmpR", "sequence": AMP, "type": "marker"},
    {"name": "pMB1 ori", "sequence": ORI},
    {"name": "tiny tag", "sequence": SHORT, "type": "tag"},
]


def _mutate(seq, positions):
    swap = {"A": "C", "C": "G", "G": "T", "T": "A"}
    chars = list(seq)
    for i in positions:
        chars[i] = swap[chars[i]]
    return "".join(chars)


def test_features_on_both_strands():
    feats = detect_features(PLASMID, DB)
    assert [f.name for f in feats] == ["AmpR", "pMB1 ori"]

    amp, ori = feats
    assert (amp.start, amp.end, amp.strand, amp.kind) == (len(S1), len(S1) + 300, "+", "marker")
    ori_start = len(S1) + 300 + len(S2)
    assert (ori.start, ori.end, ori.strand, ori.kind) == (ori_start, ori_start + 200, "-", "origin")


def test_short_references_are_ignored():
    assert detect_features(PLASMID, DB[2:]) == []


def test_mismatch_budget():
    # 5% of 300 nt = 15 mismatches; the central seed is left intact
    ok = _mutate(AMP, range(15))
    too_many = _mutate(AMP, range(16))
    assert [f.name for f in detect_features(PLASMID, [{"name": "a", "seq": ok}])] == ["a"]
    assert detect_features(PLASMID, [{"name": "a", "seq": too_many}]) == []


def test_overlapping_features_keep_longest():
    db = [
        {"name": "AmpR fragment", "sequence": AMP[:200]},
        {"name": "AmpR", "sequence": AMP.lower()},
    ]
    (only,) = detect_features(PLASMID, db)
    assert only.name == "AmpR"
    assert only.length == 300


def test_no_match_and_empty_input():
    assert detect_features(PLASMID, [{"name": "x", "sequence": _rand(200)}]) == []
    assert detect_features("", DB) == []
    assert detect_features(PLASMID, []) == []


def test_best_approx_match():
    assert best_approx_match(PLASMID, AMP) == (len(S1), 0)
    assert best_approx_match("ACGT", AMP) == (-1, 301)
    assert best_approx_match("", "ACGT") == (-1, 5)


def test_feature_kind():
    assert feature_kind("T7 promoter", "misc") == "promoter"
    assert feature_kind("rrnB terminator") == "terminator"
    assert feature_kind("ColE1 origin") == "origin"
    assert feature_kind("f1 ori") == "origin"
    assert feature_kind("lacZ gene") == "cds"
    assert feature_kind("GFP CDS") == "cds"
    assert feature_kind("Oriental", "misc") == "misc"
    assert feature_kind("AmpR", "marker") == "marker"

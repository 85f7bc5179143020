# File: backend/tests/test_restriction.py
# Version: v0.1.0
"""
Enzyme catalogue, Type II / Type IIS digestion and ligation end model.
"""
import pytest

from backend.app.core.errors import UnknownEnzymeError
from backend.app.core.restriction.digest import (
    CutRef,
    TypeIICut,
    TypeIISCut,
    compute_cuts_type_ii,
    compute_cuts_type_iis,
    compute_type_iis_overhangs,
    digest_circular_type_ii,
    digest_linear_multi_type_ii,
    digest_linear_type_ii,
    find_enzyme_sites,
    find_type_iis_sites,
    predict_digest_bands_linear,
    scan_forbidden_sites,
)
from backend.app.core.restriction.enzymes import (
    ENZYME_DB,
    EnzymeClass,
    get_enzyme,
    list_enzymes,
    require_enzyme,
)
from backend.app.core.restriction.ligation import (
    END_BLUNT,
    END_STICKY,
    END_UNKNOWN,
    Overhang,
    Terminus,
    annotate_type_ii_termini,
    build_overhang_matrix,
    can_ligate,
)

ECO = "AAGAATTCAA"  # EcoRI site at 2, top-strand cut at 3
ECO_BAM = "AAGAATTCAAGGATCCAA"  # EcoRI cut at 3, BamHI cut at 11


# ---------- catalogue ----------

def test_enzyme_lookup():
    eco = get_enzyme("EcoRI")
    assert eco.site == "GAATTC"
    assert eco.sticky == "AATT"
    assert eco.is_type_ii and not eco.is_blunt
    assert get_enzyme("EcoRV").is_blunt
    assert get_enzyme("ecori") is None
    assert get_enzyme("Nope") is None


def test_require_enzyme_raises():
    with pytest.raises(UnknownEnzymeError) as ei:
        require_enzyme("Nope")
    assert ei.value.name == "Nope"
    assert "Nope" in str(ei.value)
    # also usable as a lookup miss
    with pytest.raises(KeyError):
        require_enzyme("Nope")


def test_catalogue_is_read_only():
    with pytest.raises(TypeError):
        ENZYME_DB["Fake"] = ENZYME_DB["EcoRI"]


def test_list_enzymes_by_class():
    names = [e.name for e in list_enzymes(EnzymeClass.TYPE_IIS)]
    assert names == ["BbsI", "BsaI", "Esp3I", "PaqCI"]
    everything = list_enzymes()
    assert len(everything) == len(ENZYME_DB)
    assert [e.name for e in everything] == sorted(e.name for e in everything)


# ---------- Type II ----------

def test_find_sites_overlapping():
    assert find_enzyme_sites(ECO, "EcoRI") == [2]
    assert find_enzyme_sites("cgcgcg", "BstUI") == [0, 2]
    assert find_enzyme_sites("AAAA", "EcoRI") == []


def test_compute_cuts_type_ii():
    assert compute_cuts_type_ii(ECO, "EcoRI") == [TypeIICut(2, 8, 3, 7)]
    assert compute_cuts_type_ii("AAGGTCTCAA", "BsaI") == []


def test_linear_single_enzyme():
    frags = digest_linear_type_ii(ECO, "EcoRI")
    assert [(f.start, f.end, f.seq) for f in frags] == [(0, 3, "AAG"), (3, 10, "AATTCAA")]
    assert frags[0].right_cuts == [CutRef("EcoRI", 3)]
    assert frags[1].left_cuts == [CutRef("EcoRI", 3)]


def test_linear_without_cut_is_whole_sequence():
    frags = digest_linear_type_ii("AAAA", "EcoRI")
    assert len(frags) == 1
    assert (frags[0].start, frags[0].end, frags[0].length) == (0, 4, 4)


def test_linear_multi():
    assert digest_linear_multi_type_ii("", ["EcoRI"]) == []
    frags = digest_linear_multi_type_ii(ECO_BAM, ["EcoRI", "BamHI"])
    assert [(f.start, f.end) for f in frags] == [(0, 3), (3, 11), (11, 18)]
    assert sum(f.length for f in frags) == len(ECO_BAM)
    assert frags[1].left_cuts == [CutRef("EcoRI", 3)]
    assert frags[1].right_cuts == [CutRef("BamHI", 11)]
    # a plain string is one enzyme name
    assert len(digest_linear_multi_type_ii(ECO_BAM, "EcoRI")) == 2


def test_circular_digest():
    whole = digest_circular_type_ii("AAAA", ["EcoRI"])
    assert [(f.start, f.end, f.length) for f in whole] == [(0, 4, 4)]

    opened = digest_circular_type_ii(ECO, ["EcoRI"])
    assert len(opened) == 1
    assert (opened[0].start, opened[0].end, opened[0].length) == (3, 3, len(ECO))
    assert opened[0].seq == "AATTCAAAAG"

    frags = digest_circular_type_ii(ECO_BAM, ["EcoRI", "BamHI"])
    assert [(f.start, f.end, f.seq) for f in frags] == [(3, 11, "AATTCAAG"), (11, 3, "GATCCAAAAG")]
    assert sum(f.length for f in frags) == len(ECO_BAM)


def test_unknown_enzyme_in_digest():
    with pytest.raises(UnknownEnzymeError):
        digest_linear_multi_type_ii(ECO, ["EcoRI", "Nope"])
    with pytest.raises(UnknownEnzymeError):
        digest_circular_type_ii(ECO, "Nope")


def test_wrong_class_contributes_no_cuts():
    frags = digest_linear_multi_type_ii(ECO, ["BsaI"])
    assert len(frags) == 1 and frags[0].length == len(ECO)


def test_forbidden_sites_and_bands():
    assert scan_forbidden_sites(ECO, ["EcoRI", "BamHI"]) == {"EcoRI": [2]}
    assert predict_digest_bands_linear(ECO_BAM, ["EcoRI", "BamHI"]) == [8, 7, 3]


# ---------- Type IIS ----------

def test_type_iis_forward_motif():
    seq = "AAGGTCTCAAAAAAAAAA"
    assert find_type_iis_sites(seq, "BsaI").forward == [2]
    assert compute_cuts_type_iis(seq, "BsaI") == [TypeIISCut("F", 2, 8, 9)]

    (oh,) = compute_type_iis_overhangs(seq, "BsaI")
    assert oh.cut_pos == 9
    assert oh.upstream == "CTCA"
    assert oh.downstream == "AAAA"


def test_type_iis_reverse_motif():
    seq = "AAAAAAAAGAGACCAA"
    sites = find_type_iis_sites(seq, "BsaI")
    assert sites.forward == [] and sites.reverse == [8]
    assert compute_cuts_type_iis(seq, "BsaI") == [TypeIISCut("R", 8, 14, 3)]


def test_type_iis_overhang_clamped():
    seq = "GAGACCAAAA"
    assert compute_cuts_type_iis(seq, "BsaI")[0].cut_pos == -5
    (oh,) = compute_type_iis_overhangs(seq, "BsaI", window=4)
    assert oh.cut_pos == 0
    assert oh.upstream == ""
    assert oh.downstream == "GAGA"


def test_type_iis_on_type_ii_enzyme():
    assert compute_cuts_type_iis(ECO, "EcoRI") == []
    assert compute_type_iis_overhangs(ECO, "EcoRI") == []


# ---------- ligation ----------

def test_annotate_termini():
    sticky = annotate_type_ii_termini(ECO, "EcoRI")
    assert all(f.left == Terminus(END_STICKY, "AATT") for f in sticky)
    assert all(f.right.type == END_STICKY for f in sticky)

    blunt = annotate_type_ii_termini("AAGATATCAA", "EcoRV")
    assert len(blunt) == 2
    assert blunt[0].right.type == END_BLUNT

    unknown = annotate_type_ii_termini("AAGGTCTCAA", "BsaI")
    assert unknown[0].left.type == END_UNKNOWN


def test_can_ligate():
    assert can_ligate(Terminus(END_STICKY, "AATT"), Terminus(END_STICKY, "AATT"))
    assert can_ligate(Terminus(END_STICKY, "ACGG"), Terminus(END_STICKY, "CCGT"))
    assert can_ligate(Terminus(END_BLUNT), Terminus(END_BLUNT))
    assert not can_ligate(Terminus(END_STICKY, "AATT"), Terminus(END_BLUNT))
    assert not can_ligate(Terminus(END_STICKY, "ACGG"), Terminus(END_STICKY, "ACGT"))
    assert not can_ligate(Terminus(END_STICKY, ""), Terminus(END_STICKY, ""))
    assert not can_ligate(Terminus(END_UNKNOWN), Terminus(END_UNKNOWN))
    assert not can_ligate(None, Terminus(END_BLUNT))


def test_overhang_matrix():
    nodes = build_overhang_matrix(
        [
            Overhang("a", "ACGG"),
            {"label": "b", "seq": "CCGT"},
            {"name": "c", "seq": "acgg"},
            {"seq": ""},
        ]
    )
    assert [n.label for n in nodes] == ["a", "b", "c", "overhang_4"]
    assert (nodes[0].same, nodes[0].rc) == ([2], [1])
    assert (nodes[1].same, nodes[1].rc) == ([], [0, 2])
    assert (nodes[2].same, nodes[2].rc) == ([0], [1])
    assert (nodes[3].same, nodes[3].rc) == ([], [])

# File: backend/app/core/restriction/ligation.py
# Version: v0.1.0
"""
Minimal sticky/blunt end model for ligation checks.

- `annotate_type_ii_termini`: linear digest fragments with both ends typed from
  the enzyme (sticky motif or blunt)
- `can_ligate`: two ends join if both blunt, or both sticky with identical or
  reverse-complementary overhangs
- `build_overhang_matrix`: pairwise identical / reverse-complement overhangs
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Union

from backend.app.core.dna.sequence import normalize, reverse_complement

from .digest import Fragment, digest_linear_type_ii
from .enzymes import require_enzyme

END_BLUNT = "blunt"
END_STICKY = "sticky"
END_UNKNOWN = "unknown"


@dataclass(frozen=True)
class Terminus:
    type: str = END_UNKNOWN
    seq: str = ""


@dataclass
class AnnotatedFragment(Fragment):
    left: Terminus = field(default_factory=Terminus)
    right: Terminus = field(default_factory=Terminus)


def annotate_type_ii_termini(seq: str, name: str) -> List[AnnotatedFragment]:
    enz = require_enzyme(name)
    if not enz.is_type_ii:
        end = Terminus(END_UNKNOWN, "")
    elif enz.sticky:
        end = Terminus(END_STICKY, normalize(enz.sticky))
    else:
        end = Terminus(END_BLUNT, "")

    return [
        AnnotatedFragment(
            start=f.start,
            end=f.end,
            length=f.length,
            seq=f.seq,
            left_cuts=f.left_cuts,
            right_cuts=f.right_cuts,
            left=end,
            right=end,
        )
        for f in digest_linear_type_ii(seq, name)
    ]


def can_ligate(end_a: Optional[Terminus], end_b: Optional[Terminus]) -> bool:
    if end_a is None or end_b is None:
        return False
    if end_a.type == END_BLUNT and end_b.type == END_BLUNT:
        return True
    if end_a.type != END_STICKY or end_b.type != END_STICKY:
        return False

    sa = normalize(end_a.seq)
    sb = normalize(end_b.seq)
    if not sa or not sb:
        return False
    return sa == sb or reverse_complement(sa) == sb


@dataclass
class Overhang:
    label: str
    seq: str


@dataclass
class OverhangNode:
    index: int
    label: str
    seq: str
    same: List[int] = field(default_factory=list)
    rc: List[int] = field(default_factory=list)


def build_overhang_matrix(overhangs: Iterable[Union[Overhang, Mapping[str, str]]]) -> List[OverhangNode]:
    """
    For each overhang, indices of the others with an identical sequence (`same`)
    or the reverse-complement sequence (`rc`). Empty sequences match nothing.
    """
    nodes: List[OverhangNode] = []
    for i, o in enumerate(overhangs):
        if isinstance(o, Overhang):
            label, raw = o.label, o.seq
        else:
            label, raw = o.get("label") or o.get("name") or "", o.get("seq") or ""
        nodes.append(OverhangNode(i, label or f"overhang_{i + 1}", normalize(raw)))

    for i, a in enumerate(nodes):
        for b in nodes[i + 1:]:
            if not a.seq or not b.seq:
                continue
            if a.seq == b.seq:
                a.same.append(b.index)
                b.same.append(a.index)
            elif reverse_complement(a.seq) == b.seq:
                a.rc.append(b.index)
                b.rc.append(a.index)
    return nodes

# File: backend/app/core/primer/pooling.py
# Version: v0.1.0
"""
Multiplex-PCR pooling by greedy colouring of a conflict graph.

Nodes are primer pairs (0..N-1, caller order). Two pairs conflict when any of:
- dimer:      a severe cross-dimer between their primers
- size:       both product lengths known and |Δ| < size tolerance (tolerance > 0)
- off-target: both pairs amplify on a common non-target template

Colouring walks nodes in caller order and takes the smallest colour unused by
already-coloured neighbours. The result depends on input order; a minimum
colouring is not attempted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

import networkx as nx

from .constants import DEFAULT_CONFLICT_THRESHOLD, DEFAULT_SIZE_TOLERANCE, THREE_PRIME_CONFLICT_DG
from .parameters import DesignOptions
from .structure import dimer_scan

log = logging.getLogger(__name__)

REASON_DIMER = "dimer"
REASON_SIZE = "size"
REASON_OFF_TARGET = "off-target"


@dataclass
class PoolingPair:
    name: str
    forward: str
    reverse: str
    product_length: Optional[int] = None
    off_target_names: FrozenSet[str] = field(default_factory=frozenset)


def has_severe_cross_dimer_conflict(
    pair_a: PoolingPair, pair_b: PoolingPair, threshold: float = DEFAULT_CONFLICT_THRESHOLD
) -> bool:
    """
    Check Fa×Fb, Fa×Rb, Ra×Fb, Ra×Rb. A 3'-touching dimer is severe at
    ΔG <= -3 (polymerase can extend it); any other dimer at ΔG <= threshold.
    """
    combos = (
        (pair_a.forward, pair_b.forward),
        (pair_a.forward, pair_b.reverse),
        (pair_a.reverse, pair_b.forward),
        (pair_a.reverse, pair_b.reverse),
    )
    for a, b in combos:
        d = dimer_scan(a, b)
        if d is None:
            continue
        if d.touches3 and d.dg <= THREE_PRIME_CONFLICT_DG:
            return True
        if not d.touches3 and d.dg <= threshold:
            return True
    return False


def _conflict_reasons(
    a: PoolingPair, b: PoolingPair, conflict_threshold: float, size_tolerance: int
) -> Tuple[str, ...]:
    reasons: List[str] = []
    if has_severe_cross_dimer_conflict(a, b, conflict_threshold):
        reasons.append(REASON_DIMER)
    if (
        size_tolerance > 0
        and a.product_length is not None
        and b.product_length is not None
        and abs(a.product_length - b.product_length) < size_tolerance
    ):
        reasons.append(REASON_SIZE)
    if a.off_target_names & b.off_target_names:
        reasons.append(REASON_OFF_TARGET)
    return tuple(reasons)


def build_conflict_graph(
    pairs: Sequence[PoolingPair],
    conflict_threshold: float = DEFAULT_CONFLICT_THRESHOLD,
    size_tolerance: int = DEFAULT_SIZE_TOLERANCE,
) -> nx.Graph:
    """Undirected graph over pair indices; each edge carries `reasons`."""
    graph = nx.Graph()
    graph.add_nodes_from(range(len(pairs)))
    for i in range(len(pairs)):
        for j in range(i + 1, len(pairs)):
            reasons = _conflict_reasons(pairs[i], pairs[j], conflict_threshold, size_tolerance)
            if reasons:
                graph.add_edge(i, j, reasons=reasons)
    return graph


def _input_order(graph: nx.Graph, colors: Dict[int, int]) -> List[int]:
    return sorted(graph.nodes)


def greedy_color(graph: nx.Graph) -> List[int]:
    """Colour per node index (0-based), nodes visited in index order."""
    coloring = nx.greedy_color(graph, strategy=_input_order)
    return [coloring[n] for n in sorted(graph.nodes)]


@dataclass
class PoolMember:
    index: int
    name: str
    forward: str
    reverse: str
    product_length: Optional[int] = None


@dataclass
class Pool:
    number: int  # 1-based
    members: List[PoolMember] = field(default_factory=list)


@dataclass
class Conflict:
    i: int
    j: int
    reasons: Tuple[str, ...]


@dataclass
class PoolingResult:
    pools: List[Pool] = field(default_factory=list)
    colors: List[int] = field(default_factory=list)
    pool_count: int = 0
    conflicts: List[Conflict] = field(default_factory=list)


def _member(index: int, p: PoolingPair) -> PoolMember:
    return PoolMember(index, p.name, p.forward, p.reverse, p.product_length)


def pool_primers(pairs: Sequence[PoolingPair], options: Optional[DesignOptions] = None) -> PoolingResult:
    """Assign every pair to a pool so that no two conflicting pairs share one."""
    opts = options or DesignOptions()
    if not pairs:
        return PoolingResult()

    graph = build_conflict_graph(pairs, opts.conflictThreshold, opts.sizeTolerance)
    colors = greedy_color(graph)

    pools = [Pool(number=c + 1) for c in range(max(colors) + 1)]
    for i, c in enumerate(colors):
        pools[c].members.append(_member(i, pairs[i]))

    conflicts = [Conflict(i, j, data["reasons"]) for i, j, data in sorted(graph.edges(data=True))]
    log.info("Pooled %d pairs into %d pools (%d conflicts)", len(pairs), len(pools), len(conflicts))
    return PoolingResult(pools=pools, colors=colors, pool_count=len(pools), conflicts=conflicts)


def pool_by_size(pairs: Sequence[PoolingPair], size_tolerance: int = DEFAULT_SIZE_TOLERANCE) -> List[Pool]:
    """
    First-fit pooling by product size alone (ascending size). A pair joins the
    first pool where every member differs by >= size_tolerance bp.

    Pairs without a product length are left out, unless no pair has one, in
    which case all pairs share a single pool.
    """
    if not pairs:
        return []

    sized = [(i, p) for i, p in enumerate(pairs) if p.product_length is not None]
    if not sized:
        return [Pool(1, [_member(i, p) for i, p in enumerate(pairs)])]

    pools: List[Pool] = []
    for i, p in sorted(sized, key=lambda item: item[1].product_length):
        for pool in pools:
            if all(abs(m.product_length - p.product_length) >= size_tolerance for m in pool.members):
                pool.members.append(_member(i, p))
                break
        else:
            pools.append(Pool(len(pools) + 1, [_member(i, p)]))
    return pools

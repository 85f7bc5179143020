# File: backend/app/cli/multiplex_cli.py
# Version: v0.1.0
"""
CLI for multiplex primer design, pooling and restriction digests.

Subcommands:
- design: multi-FASTA targets -> one primer pair per target, off-target check,
          pools; writes primers.fasta and primers.json into --outdir
- pool:   JSON list of primer pairs -> pools (stdout or --out)
- digest: FASTA + enzyme names -> fragments per record (stdout or --out)

Design options come from --params-json (DesignOptions keys), or from the stored
options file when omitted.

Usage:
    python -m backend.app.cli.multiplex_cli design \
        --fasta backend/data/input/targets.fasta \
        --outdir backend/data/out/multiplex \
        [--params-json backend/app/config/design_options.json] \
        [--expected-lengths 250,310] [--overlap-fwd ...] [--overlap-rev ...] [--no-off-target]

    python -m backend.app.cli.multiplex_cli pool --pairs pairs.json [--out pools.json]

    python -m backend.app.cli.multiplex_cli digest --fasta plasmid.fasta \
        --enzymes EcoRI,BamHI [--circular] [--out digest.json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from Bio import SeqIO

from backend.app.config.config_options import load_current_options
from backend.app.core.dna.sequence import normalize, normalize_strict
from backend.app.core.primer.designer import design_multiplex_primers, to_pooling_pairs
from backend.app.core.primer.offtarget import TargetRecord
from backend.app.core.primer.parameters import DesignOptions
from backend.app.core.primer.pooling import pool_primers
from backend.app.core.restriction.digest import (
    digest_circular_type_ii,
    digest_linear_multi_type_ii,
    scan_forbidden_sites,
)
from backend.app.schemas.digest import FragmentOut
from backend.app.schemas.multiplex import (
    MultiplexDesignResponse,
    PairIn,
    PoolingOut,
    TargetResultOut,
)

log = logging.getLogger("multiplex_cli")


# ---------- IO helpers ----------

def read_targets(path: Path, expected: Optional[List[int]] = None) -> List[TargetRecord]:
    """All FASTA records as targets; `expected` lengths are matched by position."""
    targets: List[TargetRecord] = []
    for i, rec in enumerate(SeqIO.parse(str(path), "fasta")):
        exp = expected[i] if expected and i < len(expected) else None
        targets.append(TargetRecord(rec.id, normalize_strict(str(rec.seq)), exp))
    if not targets:
        raise ValueError(f"No FASTA records found in {path}.")
    return targets


def load_options(path: Optional[Path]) -> DesignOptions:
    if path is None:
        return load_current_options()
    return DesignOptions.model_validate(json.loads(path.read_text(encoding="utf-8")))


def write_json(payload: dict, out: Optional[Path]) -> None:
    text = json.dumps(payload, indent=2)
    if out is None:
        print(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text + "\n", encoding="utf-8")


def write_primers_fasta(out: Path, response: MultiplexDesignResponse) -> None:
    pool_of = {}
    if response.pooling is not None:
        for p in response.pooling.pools:
            for m in p.members:
                pool_of[m.name] = p.pool

    lines: List[str] = []
    for r in response.results:
        if not r.success or r.forward is None or r.reverse is None:
            continue
        pool = pool_of.get(r.name, "")
        for side, primer in (("F", r.forward), ("R", r.reverse)):
            tm = f"{primer.tm:.1f}" if primer.tm is not None else "nan"
            lines.append(f">{r.name}_{side} pool={pool} tm={tm} gc={primer.gc:.1f} len={primer.length}")
            lines.append(primer.seq)
    out.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")


# ---------- Subcommands ----------

def run_design(args: argparse.Namespace) -> None:
    expected = [int(x) for x in args.expected_lengths.split(",")] if args.expected_lengths else None
    targets = read_targets(args.fasta, expected)
    opts = load_options(args.params_json)
    log.info("Designing %d targets (Tm target %.1f °C)", len(targets), opts.tmTarget)

    results = design_multiplex_primers(
        targets,
        opts,
        check_off_target=not args.no_off_target,
        overlap_fwd=normalize(args.overlap_fwd),
        overlap_rev=normalize(args.overlap_rev),
    )
    pooling = pool_primers(to_pooling_pairs(results), opts)
    response = MultiplexDesignResponse(
        results=[TargetResultOut.from_core(r) for r in results],
        pooling=PoolingOut.from_core(pooling),
    )

    args.outdir.mkdir(parents=True, exist_ok=True)
    out_fa = args.outdir / "primers.fasta"
    write_primers_fasta(out_fa, response)
    write_json(response.model_dump(mode="json"), args.outdir / "primers.json")

    ok = sum(1 for r in results if r.success)
    print(f"[OK] Wrote {out_fa} ({ok}/{len(results)} targets, {pooling.pool_count} pools).")


def run_pool(args: argparse.Namespace) -> None:
    raw = json.loads(args.pairs.read_text(encoding="utf-8"))
    if isinstance(raw, dict):
        raw = raw.get("pairs", [])
    pairs = [PairIn.model_validate(item).to_core() for item in raw]
    opts = load_options(args.params_json)
    result = pool_primers(pairs, opts)
    write_json(PoolingOut.from_core(result).model_dump(mode="json"), args.out)


def run_digest(args: argparse.Namespace) -> None:
    names = [n.strip() for n in args.enzymes.split(",") if n.strip()]
    if not names:
        raise ValueError("At least one enzyme name is required.")

    records = []
    for rec in SeqIO.parse(str(args.fasta), "fasta"):
        seq = normalize_strict(str(rec.seq))
        if args.circular:
            frags = digest_circular_type_ii(seq, names)
        else:
            frags = digest_linear_multi_type_ii(seq, names)
        log.info("%s: %d fragments", rec.id, len(frags))
        records.append(
            {
                "id": rec.id,
                "length": len(seq),
                "topology": "circular" if args.circular else "linear",
                "sites": scan_forbidden_sites(seq, names),
                "bands": sorted((f.length for f in frags), reverse=True),
                "fragments": [FragmentOut.from_core(f).model_dump(mode="json") for f in frags],
            }
        )
    if not records:
        raise ValueError(f"No FASTA records found in {args.fasta}.")
    write_json({"enzymes": names, "records": records}, args.out)


# ---------- Main ----------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Multiplex PCR design / pooling / digest CLI")
    p.add_argument("--log-level", dest="log_level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging level (default: INFO)")
    sub = p.add_subparsers(dest="command", required=True)

    d = sub.add_parser("design", help="Design and pool primers for multi-FASTA targets")
    d.add_argument("--fasta", required=True, type=Path, help="Multi-FASTA with one record per target")
    d.add_argument("--outdir", required=True, type=Path)
    d.add_argument("--params-json", type=Path, help="JSON with DesignOptions keys")
    d.add_argument("--expected-lengths", help="Comma-separated expected product sizes, in FASTA order")
    d.add_argument("--overlap-fwd", default="", help="5' tail for every forward primer")
    d.add_argument("--overlap-rev", default="", help="5' tail for every reverse primer")
    d.add_argument("--no-off-target", action="store_true", help="Skip off-target amplification check")
    d.set_defaults(func=run_design)

    pl = sub.add_parser("pool", help="Pool existing primer pairs")
    pl.add_argument("--pairs", required=True, type=Path,
                    help="JSON list of {name, forward, reverse, productLength?, offTargets?}")
    pl.add_argument("--params-json", type=Path, help="JSON with DesignOptions keys")
    pl.add_argument("--out", type=Path, help="Output JSON (default: stdout)")
    pl.set_defaults(func=run_pool)

    dg = sub.add_parser("digest", help="Type II restriction digest of FASTA records")
    dg.add_argument("--fasta", required=True, type=Path)
    dg.add_argument("--enzymes", required=True, help="Comma-separated enzyme names, e.g. EcoRI,BamHI")
    dg.add_argument("--circular", action="store_true", help="Treat records as circular")
    dg.add_argument("--out", type=Path, help="Output JSON (default: stdout)")
    dg.set_defaults(func=run_digest)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        args.func(args)
    except Exception as ex:
        print(f"[ERROR] {ex}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()

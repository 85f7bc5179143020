# File: backend/tests/test_cli.py
# Version: v0.1.0
"""
multiplex_cli subcommands against temp FASTA / JSON files.
"""
import json

import pytest

from backend.app.cli.multiplex_cli import main


def _fasta(path, records):
    path.write_text("".join(f">{name}\n{seq}\n" for name, seq in records), encoding="utf-8")
    return path


def test_digest_command(tmp_path):
    fa = _fasta(tmp_path / "p.fasta", [("p1", "AAGAATTCAAGGATCCAA")])
    out = tmp_path / "digest.json"
    main(["digest", "--fasta", str(fa), "--enzymes", "EcoRI,BamHI", "--circular", "--out", str(out)])

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["enzymes"] == ["EcoRI", "BamHI"]
    (rec,) = data["records"]
    assert rec["topology"] == "circular"
    assert rec["bands"] == [10, 8]
    assert rec["sites"] == {"EcoRI": [2], "BamHI": [10]}


def test_unknown_enzyme_exits_2(tmp_path, capsys):
    fa = _fasta(tmp_path / "p.fasta", [("p1", "AAGAATTCAA")])
    with pytest.raises(SystemExit) as ei:
        main(["digest", "--fasta", str(fa), "--enzymes", "Nope"])
    assert ei.value.code == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_design_command(tmp_path, puc19_head, capsys):
    fa = _fasta(tmp_path / "targets.fasta", [("t1", puc19_head), ("short", "ACGTACGT")])
    outdir = tmp_path / "out"
    main(["design", "--fasta", str(fa), "--outdir", str(outdir), "--overlap-fwd", "GGTCTC"])

    assert "[OK]" in capsys.readouterr().out
    fasta_lines = (outdir / "primers.fasta").read_text(encoding="utf-8").splitlines()
    assert fasta_lines[0].startswith(">t1_F pool=1")
    assert fasta_lines[1].startswith("GGTCTC")
    assert fasta_lines[2].startswith(">t1_R pool=1")

    data = json.loads((outdir / "primers.json").read_text(encoding="utf-8"))
    assert [r["success"] for r in data["results"]] == [True, False]
    assert data["pooling"]["poolCount"] == 1


def test_pool_command(tmp_path):
    pairs = tmp_path / "pairs.json"
    pairs.write_text(
        json.dumps(
            {
                "pairs": [
                    {"name": "a", "forward": "A" * 20, "reverse": "A" * 20, "productLength": 100},
                    {"name": "b", "forward": "A" * 20, "reverse": "A" * 20, "productLength": 300},
                ]
            }
        ),
        encoding="utf-8",
    )
    out = tmp_path / "pools.json"
    main(["pool", "--pairs", str(pairs), "--out", str(out)])

    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["poolCount"] == 2
    assert data["conflicts"][0]["reasons"] == ["dimer"]

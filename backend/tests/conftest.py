# File: backend/tests/conftest.py
# Version: v0.2.0
"""
Test bootstrap: ensure project root is on sys.path so 'backend.*' imports work.

This avoids requiring editable installs or extra plugins. It keeps tests hermetic
to the repo layout (works in CI and locally).

Stored design options are redirected to a per-test temp file, so API and CLI
tests never touch backend/app/config/design_options.json.
"""
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]  # repo root (../.. from this file)
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.app.core.config import settings  # noqa: E402

# pUC19 1-250: realistic GC content, no homopolymer runs at the ends
PUC19_HEAD = (
    "TCGCGCGTTTCGGTGATGACGGTGAAAACCTCTGACACATGCAGCTCCCGGAGACGGTCACAGCTTGTCTGTAAGCGGATG"
    "CCGGGAGCAGACAAGCCCGTCAGGGCGCGTCAGCGGGTGTTGGCGGGTGTCGGGGCTGGCTTAACTATGCGGCATCAGAGCAG"
    "ATTGTACTGAGAGTGCACCATATGCGGTGTGAAATACCGCACAGATGCGTAAGGAGAAAATACCGCATCAGGC"
)


@pytest.fixture(autouse=True)
def options_file(tmp_path, monkeypatch):
    path = tmp_path / "design_options.json"
    monkeypatch.setattr(settings, "OPTIONS_PATH", path)
    return path


@pytest.fixture
def puc19_head():
    return PUC19_HEAD

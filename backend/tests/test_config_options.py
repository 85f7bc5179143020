# File: backend/tests/test_config_options.py
# Version: v0.1.0
"""
Design options: defaults file, stored options and validation.
"""
import json

import pytest
from pydantic import ValidationError

from backend.app.config.config_options import (
    ensure_current_exists,
    load_current_options,
    load_default_options,
    save_current_options,
)
from backend.app.core.primer.parameters import DesignOptions


def test_default_file_matches_model_defaults():
    assert load_default_options() == DesignOptions()


def test_missing_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "absent.json"
    assert load_current_options(path) == DesignOptions()
    assert not path.exists()


def test_partial_file_takes_model_defaults(tmp_path):
    path = tmp_path / "opts.json"
    path.write_text(json.dumps({"tmTarget": 58.5, "Mg_mM": 1.5}), encoding="utf-8")
    opts = load_current_options(path)
    assert opts.tmTarget == 58.5
    assert opts.Mg_mM == 1.5
    assert opts.minLen == DesignOptions().minLen


def test_ensure_and_save(options_file):
    created, opts = ensure_current_exists()
    assert created and opts == DesignOptions()
    assert options_file.exists()

    save_current_options(opts.model_copy(update={"sizeTolerance": 0}))
    created, again = ensure_current_exists()
    assert not created
    assert again.sizeTolerance == 0
    assert not options_file.with_suffix(".json.tmp").exists()


def test_invalid_options():
    with pytest.raises(ValidationError):
        DesignOptions(minLen=30, maxLen=20)
    with pytest.raises(ValidationError):
        DesignOptions(seedLen=11)
    with pytest.raises(ValidationError):
        DesignOptions(maxMismatchRatio=1.5)

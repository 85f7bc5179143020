# File: backend/app/config/config_options.py
# Version: v0.1.0
"""
Design options loader/saver.

- Reads defaults from: backend/app/config/design_options_default.json
- Reads/writes current from: `settings.OPTIONS_PATH`
  (default backend/app/config/design_options.json)
- Validates payloads with DesignOptions (Pydantic) from core/primer/parameters.py

Usage:
    from backend.app.config.config_options import load_current_options, save_current_options

Keys follow the flat options object used by the API, for example:

  {
    "Na_mM": 50.0,
    "Mg_mM": 0.0,
    "conc_nM": 500.0,
    "tmTarget": 60.0,
    "minLen": 15,
    "maxLen": 40,
    "conflictThreshold": -6.0,
    "sizeTolerance": 20
  }

Missing keys take model defaults.

Thread-safety:
- Uses atomic writes (tmp + replace) to avoid partial/dirty writes.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional, Tuple

from backend.app.core.config import settings
from backend.app.core.primer.parameters import DesignOptions

# Resolve config directory relative to this file
_THIS_DIR = Path(__file__).resolve().parent
DEFAULT_FILE = _THIS_DIR / "design_options_default.json"


def _current_file(path: Optional[Path] = None) -> Path:
    return Path(path) if path is not None else Path(settings.OPTIONS_PATH)


def _read_json(path: Path) -> dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _atomic_write_json(path: Path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    with tmp.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    os.replace(tmp, path)


def load_default_options() -> DesignOptions:
    """Load default design options from design_options_default.json."""
    return DesignOptions.model_validate(_read_json(DEFAULT_FILE) or {})


def load_current_options(path: Optional[Path] = None, fallback_to_default: bool = True) -> DesignOptions:
    """
    Load current (editable) design options.
    If the file is missing/empty and fallback is True, return defaults.
    """
    payload = _read_json(_current_file(path))
    if not payload and fallback_to_default:
        return load_default_options()
    return DesignOptions.model_validate(payload or {})


def save_current_options(options: DesignOptions, path: Optional[Path] = None) -> None:
    """Persist current options (atomic write)."""
    _atomic_write_json(_current_file(path), options.model_dump())


def ensure_current_exists(path: Optional[Path] = None) -> Tuple[bool, DesignOptions]:
    """
    Ensure the current options file exists; if not, initialize from defaults.
    Returns (created, options).
    """
    target = _current_file(path)
    if target.exists():
        return False, load_current_options(target)
    defaults = load_default_options()
    save_current_options(defaults, target)
    return True, defaults

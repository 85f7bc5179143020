# File: backend/app/core/primer/constants.py
# Version: v0.2.0
"""
Constants and defaults for the Primer subsystem.

- Nearest-neighbor table: SantaLucia (1998) / Allawi (1997) DNA/DNA in 1 M Na+.
  Units: dH kcal/mol, dS cal/(mol*K).
- Hairpin loop entropy penalties (kcal/mol), approximated from SantaLucia (2004).
- Default per-call design options (see `parameters.DesignOptions`).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Tuple

NN_PARAMS: Mapping[str, Tuple[float, float]] = MappingProxyType(
    {
        "AA": (-7.9, -22.2), "TT": (-7.9, -22.2),
        "AT": (-7.2, -20.4), "TA": (-7.2, -21.3),
        "CA": (-8.5, -22.7), "TG": (-8.5, -22.7),
        "GT": (-8.4, -22.4), "AC": (-8.4, -22.4),
        "CT": (-7.8, -21.0), "AG": (-7.8, -21.0),
        "GA": (-8.2, -22.2), "TC": (-8.2, -22.2),
        "CG": (-10.6, -27.2), "GC": (-9.8, -24.4),
        "GG": (-8.0, -19.9), "CC": (-8.0, -19.9),
    }
)

# Initiation correction applied once per duplex
INIT_DH = 0.2
INIT_DS = -5.7

SYMMETRY_DS = -1.4  # cal/(mol*K), self-complementary duplex

T_REF_K = 310.15  # 37 °C
KELVIN = 273.15
R_GAS = 1.987  # cal/(mol*K)

LOOP_PENALTY: Mapping[int, float] = MappingProxyType(
    {3: 5.7, 4: 5.6, 5: 4.9, 6: 4.4, 7: 4.5, 8: 4.6, 9: 4.6}
)
LOOP_PENALTY_IMPOSSIBLE = 999.0

HAIRPIN_MIN_STEM = 3
HAIRPIN_MIN_LOOP = 3
DIMER_MIN_RUN = 2

# ΔG classification thresholds (kcal/mol)
DG_VERY_STRONG = -7.0
DG_STRONG = -5.0
DG_MODERATE = -3.0

# Per-call defaults
DEFAULT_NA_MM = 50.0
DEFAULT_MG_MM = 0.0
DEFAULT_CONC_NM = 500.0
DEFAULT_TM_TARGET = 60.0
DEFAULT_TM_TOLERANCE = 5.0
DEFAULT_BINDING_TM_TOLERANCE = 2.5
DEFAULT_MIN_LEN = 15
DEFAULT_MAX_LEN = 40
DEFAULT_HOMOPOLYMER_MAX = 4
DEFAULT_CONFLICT_THRESHOLD = -6.0
DEFAULT_SIZE_TOLERANCE = 20
DEFAULT_SEED_LEN = 10
DEFAULT_MAX_MISMATCH_RATIO = 0.2

THREE_PRIME_WINDOW = 4

# A 3'-touching dimer at or below this ΔG is extendable by polymerase
THREE_PRIME_CONFLICT_DG = -3.0

# Accepted deviation of a designed product from its expected length
EXPECTED_LENGTH_TOLERANCE = 0.1

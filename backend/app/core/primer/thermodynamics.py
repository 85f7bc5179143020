# File: backend/app/core/primer/thermodynamics.py
# Version: v0.2.0
"""
Nearest-neighbor thermodynamics for primer properties.

Implements:
- Worst-case (most stable) dH/dS accumulation over IUPAC ambiguity
- Duplex ΔG at 37 °C, with optional self-complementary symmetry correction
- Salt/Mg-corrected Tm (SantaLucia 1998 entropy form, Na_eq = Na + 4*sqrt(Mg))
- Reference Tm through Biopython's MeltingTemp for concrete sequences

Failure policy:
- Numeric failures return None / NaN so pairwise scans never abort.
- `check_tm_inputs` raises the typed error behind a NaN for callers that need
  to explain it (API / CLI).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from Bio.SeqUtils import MeltingTemp as mt

from backend.app.core.dna.sequence import base_set, normalize
from backend.app.core.errors import (
    InsufficientLengthError,
    NonPositiveConcentrationError,
    PrimerWeaverError,
    UnresolvableThermodynamicsError,
)

from .constants import (
    DEFAULT_CONC_NM,
    DEFAULT_NA_MM,
    INIT_DH,
    INIT_DS,
    KELVIN,
    NN_PARAMS,
    R_GAS,
    SYMMETRY_DS,
    T_REF_K,
)


@dataclass(frozen=True)
class DuplexEstimate:
    """Accumulated dH (kcal/mol) and dS (cal/mol·K) under worst-case pairing."""

    dh: float
    ds: float

    def dg(self, temp_k: float = T_REF_K) -> float:
        return self.dh - (temp_k * self.ds) / 1000.0


def _step_dg(dh: float, ds: float) -> float:
    return dh - (T_REF_K * ds) / 1000.0


def accumulate_worst_case(seq: str) -> Optional[DuplexEstimate]:
    """
    Sum NN contributions choosing, at each step, the concrete dinucleotide with
    the lowest ΔG37 among all expansions of the two IUPAC symbols.

    Returns None if the normalized sequence has fewer than 2 bases or a step
    has no entry in the table.
    """
    s = normalize(seq)
    if len(s) < 2:
        return None

    dh = 0.0
    ds = 0.0
    for i in range(len(s) - 1):
        best = None
        for x in base_set(s[i]):
            for y in base_set(s[i + 1]):
                p = NN_PARAMS.get(x + y)
                if p is None:
                    continue
                if best is None or _step_dg(*p) < _step_dg(*best):
                    best = p
        if best is None:
            return None
        dh += best[0]
        ds += best[1]

    return DuplexEstimate(dh + INIT_DH, ds + INIT_DS)


def duplex_dg37(seq: str, is_symmetric: bool = False) -> float:
    """ΔG37 (kcal/mol) of the worst-case duplex; NaN if it cannot be computed."""
    acc = accumulate_worst_case(seq)
    if acc is None:
        return math.nan
    ds = acc.ds + SYMMETRY_DS if is_symmetric else acc.ds
    return acc.dh - (T_REF_K * ds) / 1000.0


def _monovalent_eq_mm(na_mm: float, mg_mm: float) -> float:
    return na_mm + 4.0 * math.sqrt(max(mg_mm, 0.0))


def check_tm_inputs(seq: str, na_mm: float, mg_mm: float, conc_nm: float) -> DuplexEstimate:
    """
    Validate Tm inputs and return the duplex estimate.

    Raises:
        InsufficientLengthError: fewer than 2 bases after normalization
        NonPositiveConcentrationError: conc_nm <= 0 or Na_eq <= 0
        UnresolvableThermodynamicsError: a step has no valid NN entry
    """
    s = normalize(seq)
    if len(s) < 2:
        raise InsufficientLengthError(f"Tm needs at least 2 nt, got {len(s)}.")
    if conc_nm <= 0:
        raise NonPositiveConcentrationError(f"Primer concentration must be > 0 nM (got {conc_nm}).")
    if _monovalent_eq_mm(na_mm, mg_mm) <= 0:
        raise NonPositiveConcentrationError(
            f"Effective monovalent concentration must be > 0 mM (Na={na_mm}, Mg={mg_mm})."
        )
    acc = accumulate_worst_case(s)
    if acc is None:
        raise UnresolvableThermodynamicsError(f"No NN pairing for sequence {s!r}.")
    return acc


def tm_nn(
    seq: str,
    na_mm: float = DEFAULT_NA_MM,
    mg_mm: float = 0.0,
    conc_nm: float = DEFAULT_CONC_NM,
) -> float:
    """
    Melting temperature (°C) from worst-case NN parameters.

    dS_eff = dS + R*ln(Cp/4) + 0.368*(N-1)*ln([Na_eq])
    Tm     = dH*1000 / dS_eff - 273.15

    Returns NaN on invalid input (see `check_tm_inputs`).
    """
    try:
        acc = check_tm_inputs(seq, na_mm, mg_mm, conc_nm)
    except PrimerWeaverError:
        return math.nan

    n = len(normalize(seq))
    cp = conc_nm * 1e-9
    na_eq = _monovalent_eq_mm(na_mm, mg_mm) / 1000.0

    ds_eff = acc.ds + R_GAS * math.log(cp / 4.0) + 0.368 * (n - 1) * math.log(na_eq)
    return (acc.dh * 1000.0) / ds_eff - KELVIN


def tm_simple(seq: str, conc_nm: float = DEFAULT_CONC_NM, na_mm: float = DEFAULT_NA_MM) -> float:
    """Quick Tm at 50 mM Na+, no Mg2+ (overlap checks)."""
    return tm_nn(seq, na_mm, 0.0, conc_nm)


def tm_reference(
    seq: str,
    na_mm: float = DEFAULT_NA_MM,
    mg_mm: float = 0.0,
    conc_nm: float = DEFAULT_CONC_NM,
) -> float:
    """
    Cross-check Tm (°C) with Biopython's Tm_NN (Allawi & SantaLucia table,
    salt correction 5). Only concrete A/C/G/T sequences are accepted; anything
    else gives NaN. Strand concentrations are split so that the effective
    term matches Cp/4 used by `tm_nn`.
    """
    s = normalize(seq)
    if len(s) < 2 or set(s) - set("ACGT") or conc_nm <= 0:
        return math.nan
    half = conc_nm / 2.0
    try:
        return float(mt.Tm_NN(s, Na=na_mm, Mg=mg_mm, dnac1=half, dnac2=half))
    except ValueError:
        return math.nan

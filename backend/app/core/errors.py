# File: backend/app/core/errors.py
# Version: v0.1.0
"""
Typed errors for the design engine.

Core computations report numeric failures as sentinels (NaN / None / empty list)
so that exhaustive pairwise scans keep going past a single bad input. These
exceptions are raised only where a caller asks for strict validation
(`normalize_strict`, `check_tm_inputs`) or names something that does not exist
(`require_enzyme`). The API and CLI layers turn them into 4xx responses or a
non-zero exit status.
"""

from __future__ import annotations


class PrimerWeaverError(ValueError):
    """Base class for all engine errors."""


class InvalidSequenceError(PrimerWeaverError):
    """Sequence is empty once non-IUPAC characters are removed."""


class InsufficientLengthError(PrimerWeaverError):
    """Sequence is shorter than the two bases needed for one NN step."""


class UnresolvableThermodynamicsError(PrimerWeaverError):
    """A dinucleotide step has no concrete pairing in the NN table."""


class NonPositiveConcentrationError(PrimerWeaverError):
    """Primer or effective monovalent concentration is <= 0."""


class UnknownEnzymeError(PrimerWeaverError, KeyError):
    """Enzyme name is not present in the reference database."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown enzyme: {name!r}")

    def __str__(self) -> str:
        return self.args[0]

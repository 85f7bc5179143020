# File: backend/app/core/restriction/enzymes.py
# Version: v0.1.0
"""
Built-in restriction enzyme reference.

Two raw tables are merged at import time into `ENZYME_DB`, a read-only mapping
name -> Enzyme:
- Type II:  (site, cut5, sticky). `cut5` is the top-strand cut offset from the
  site start; `sticky` is the 5' overhang motif ("" for blunt cutters).
- Type IIS: (site, rc, overhang, cutF, cutR). Forward motif cuts `cutF` bp after
  its end; reverse motif cuts `cutR` bp before its start.

Lookups are case-sensitive (`EcoRI`, not `ecori`).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from backend.app.core.errors import UnknownEnzymeError


class EnzymeClass(str, Enum):
    TYPE_II = "typeII"
    TYPE_IIS = "typeIIS"


@dataclass(frozen=True)
class Enzyme:
    name: str
    enzyme_class: EnzymeClass
    site: str
    sticky: str = ""
    cut5: Optional[int] = None
    rc: str = ""
    overhang: Optional[int] = None
    cut_f: Optional[int] = None
    cut_r: Optional[int] = None

    @property
    def is_type_ii(self) -> bool:
        return self.enzyme_class is EnzymeClass.TYPE_II

    @property
    def is_type_iis(self) -> bool:
        return self.enzyme_class is EnzymeClass.TYPE_IIS

    @property
    def is_blunt(self) -> bool:
        return self.is_type_ii and not self.sticky


# name: (site, cut5, sticky)
_RAW_TYPE_II: Dict[str, Tuple[str, int, str]] = {
    "AatII": ("GACGTC", 5, "ACGT"),
    "Acc65I": ("GGTACC", 1, "GTAC"),
    "AclI": ("AACGTT", 2, "CG"),
    "AfeI": ("AGCGCT", 3, ""),
    "AflII": ("CTTAAG", 1, "TTAA"),
    "AgeI": ("ACCGGT", 1, "CCGG"),
    "AluI": ("AGCT", 2, ""),
    "ApaI": ("GGGCCC", 5, "GGCC"),
    "ApaLI": ("GTGCAC", 1, "TGCA"),
    "AscI": ("GGCGCGCC", 2, "CGCG"),
    "AseI": ("ATTAAT", 2, "TA"),
    "AsiSI": ("GCGATCGC", 5, "AT"),
    "AvrII": ("CCTAGG", 1, "CTAG"),
    "BamHI": ("GGATCC", 1, "GATC"),
    "BclI": ("TGATCA", 1, "GATC"),
    "BglII": ("AGATCT", 1, "GATC"),
    "BmtI": ("GCTAGC", 5, "CTAG"),
    "BsiWI": ("CGTACG", 1, "GTAC"),
    "BspDI": ("ATCGAT", 2, "CG"),
    "BspEI": ("TCCGGA", 1, "CCGG"),
    "BspHI": ("TCATGA", 1, "CATG"),
    "BsrGI": ("TGTACA", 1, "GTAC"),
    "BssHII": ("GCGCGC", 1, "CGCG"),
    "BstBI": ("TTCGAA", 2, "CG"),
    "BstUI": ("CGCG", 2, ""),
    "ClaI": ("ATCGAT", 2, "CG"),
    "DraI": ("TTTAAA", 3, ""),
    "EagI": ("CGGCCG", 1, "GGCC"),
    "Eco53kI": ("GAGCTC", 3, ""),
    "EcoRI": ("GAATTC", 1, "AATT"),
    "EcoRV": ("GATATC", 3, ""),
    "FseI": ("GGCCGGCC", 6, "CCGG"),
    "FspI": ("TGCGCA", 3, ""),
    "HaeIII": ("GGCC", 2, ""),
    "HhaI": ("GCGC", 3, "CG"),
    "HindIII": ("AAGCTT", 1, "AGCT"),
    "HpaI": ("GTTAAC", 3, ""),
    "HpaII": ("CCGG", 1, "CG"),
    "HpyCH4IV": ("ACGT", 1, "CG"),
    "HpyCH4V": ("TGCA", 2, ""),
    "KasI": ("GGCGCC", 1, "GCGC"),
    "KpnI": ("GGTACC", 5, "GTAC"),
    "MauBI": ("CGCGCGCG", 2, "CGCG"),
    "MfeI": ("CAATTG", 1, "AATT"),
    "MluI": ("ACGCGT", 1, "CGCG"),
    "MreI": ("CGCCGGCG", 2, "CCGG"),
    "MscI": ("TGGCCA", 3, ""),
    "MseI": ("TTAA", 1, "TA"),
    "MspI": ("CCGG", 1, "CG"),
    "NaeI": ("GCCGGC", 3, ""),
    "NarI": ("GGCGCC", 2, "CG"),
    "NcoI": ("CCATGG", 1, "CATG"),
    "NdeI": ("CATATG", 2, "TA"),
    "NgoMIV": ("GCCGGC", 1, "CCGG"),
    "NheI": ("GCTAGC", 1, "CTAG"),
    "NotI": ("GCGGCCGC", 2, "GGCC"),
    "NruI": ("TCGCGA", 3, ""),
    "NsiI": ("ATGCAT", 5, "TGCA"),
    "PacI": ("TTAATTAA", 5, "AT"),
    "PaeR7I": ("CTCGAG", 1, "TCGA"),
    "PciI": ("ACATGT", 1, "CATG"),
    "PhoI": ("GGCC", 2, ""),
    "PluTI": ("GGCGCC", 5, "GCGC"),
    "PmeI": ("GTTTAAAC", 4, ""),
    "PmlI": ("CACGTG", 3, ""),
    "PsiI": ("TTATAA", 3, ""),
    "PspOMI": ("GGGCCC", 1, "GGCC"),
    "PstI": ("CTGCAG", 5, "TGCA"),
    "PvuI": ("CGATCG", 4, "AT"),
    "PvuII": ("CAGCTG", 3, ""),
    "RsaI": ("GTAC", 2, ""),
    "SacI": ("GAGCTC", 5, "AGCT"),
    "SacII": ("CCGCGG", 4, "GC"),
    "SalI": ("GTCGAC", 1, "TCGA"),
    "SbfI": ("CCTGCAGG", 6, "TGCA"),
    "ScaI": ("AGTACT", 3, ""),
    "SfoI": ("GGCGCC", 3, ""),
    "SgrAI": ("CRCCGGYG", 2, "CCGG"),
    "SmaI": ("CCCGGG", 3, ""),
    "SmlI": ("CTYRAG", 1, "TYRA"),
    "SnaBI": ("TACGTA", 3, ""),
    "SphI": ("GCATGC", 5, "CATG"),
    "SrfI": ("GCCCGGGC", 4, ""),
    "SspI": ("AATATT", 3, ""),
    "StuI": ("AGGCCT", 3, ""),
    "SwaI": ("ATTTAAAT", 4, ""),
    "TaqI": ("TCGA", 1, "CG"),
    "TauI": ("GCSGC", 4, "CSG"),
    "TspMI": ("CCCGGG", 1, "CCGG"),
    "XbaI": ("TCTAGA", 1, "CTAG"),
    "XhoI": ("CTCGAG", 1, "TCGA"),
    "XmaI": ("CCCGGG", 1, "CCGG"),
    "ZraI": ("GACGTC", 3, ""),
}

# name: (site, rc, overhang, cutF, cutR)
_RAW_TYPE_IIS: Dict[str, Tuple[str, str, int, int, int]] = {
    "BsaI": ("GGTCTC", "GAGACC", 4, 1, 5),
    "Esp3I": ("CGTCTC", "GAGACG", 4, 1, 5),
    "BbsI": ("GAAGAC", "GTCTTC", 4, 2, 6),
    "PaqCI": ("CACCTGC", "GCAGGTG", 4, 4, 8),
}


def _build_db() -> Mapping[str, Enzyme]:
    db: Dict[str, Enzyme] = {}
    for name, (site, cut5, sticky) in _RAW_TYPE_II.items():
        db[name] = Enzyme(name, EnzymeClass.TYPE_II, site, sticky=sticky, cut5=cut5)
    for name, (site, rc, overhang, cut_f, cut_r) in _RAW_TYPE_IIS.items():
        db[name] = Enzyme(
            name, EnzymeClass.TYPE_IIS, site, rc=rc, overhang=overhang, cut_f=cut_f, cut_r=cut_r
        )
    return MappingProxyType(db)


ENZYME_DB: Mapping[str, Enzyme] = _build_db()


def get_enzyme(name: str) -> Optional[Enzyme]:
    """Enzyme by exact name, or None when it is not in the database."""
    return ENZYME_DB.get(name)


def require_enzyme(name: str) -> Enzyme:
    enz = ENZYME_DB.get(name)
    if enz is None:
        raise UnknownEnzymeError(name)
    return enz


def list_enzymes(enzyme_class: Optional[EnzymeClass] = None) -> List[Enzyme]:
    """All enzymes (optionally of one class), sorted by name."""
    out = [e for e in ENZYME_DB.values() if enzyme_class is None or e.enzyme_class == enzyme_class]
    return sorted(out, key=lambda e: e.name)

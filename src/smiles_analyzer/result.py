# src/smiles_analyzer/result.py
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .errors import AnalyzerError


@dataclass(frozen=True)
class LipinskiEvaluation:
    """
    Rule-of-Five checks. ``logp`` is None when no logP value was supplied;
    an unknown rule is never counted as a violation.
    """

    mw: bool
    logp: Optional[bool]
    hbd: bool
    hba: bool
    violations: int
    drug_like: bool


@dataclass(frozen=True)
class AnalysisResult:
    """
    Outcome of analysing one SMILES string.

    When ``is_valid`` is False every quantitative field is None
    ("unavailable") and ``reason_code`` / ``reason`` say why.
    """

    smiles: str
    is_valid: bool
    reason_code: Optional[str] = None
    reason: Optional[str] = None

    # -------- structure --------
    atom_count: Optional[int] = None            # heavy (non-hydrogen) atoms
    bond_count: Optional[int] = None            # bonds between heavy atoms
    ring_count: Optional[int] = None
    aromatic_ring_count: Optional[int] = None
    heteroatom_count: Optional[int] = None
    rotatable_bond_count: Optional[int] = None
    fragment_count: Optional[int] = None
    formal_charge: Optional[int] = None

    # -------- composition --------
    formula: Optional[str] = None
    molecular_weight: Optional[float] = None

    # -------- Lipinski --------
    hbd_count: Optional[int] = None
    hba_count: Optional[int] = None
    logp: Optional[float] = None                # caller supplied
    lipinski: Optional[LipinskiEvaluation] = None

    @classmethod
    def invalid(cls, smiles: str, error: AnalyzerError, logp: Optional[float] = None) -> "AnalysisResult":
        return cls(
            smiles=smiles,
            is_valid=False,
            reason_code=error.reason_code,
            reason=str(error),
            logp=logp,
        )

    def to_record(self) -> Dict[str, Any]:
        """Flat dict of scalars (Lipinski fields prefixed ``lipinski_``)."""
        record = asdict(self)
        lipinski = record.pop("lipinski")
        for key in ("mw", "logp", "hbd", "hba", "violations", "drug_like"):
            record[f"lipinski_{key}"] = lipinski[key] if lipinski is not None else None
        return record

"""
smiles_analyzer.crosscheck

Compare the analyzer's descriptors with RDKit's for the same SMILES.

- RDKit parses and sanitizes the SMILES once (MolFromSmiles, sanitize=True).
- The shared descriptors are compared field by field; molecular weight
  uses a tolerance because the analyzer rounds it.
- The result is a structured CrossCheckReport; nothing is raised for a
  disagreement, so the caller decides whether a mismatch matters.

Rotatable bonds are not compared: RDKit's default SMARTS definition differs
from the terminal-group rule used here.

Usage:
    from smiles_analyzer.crosscheck import crosscheck_with_rdkit
    report = crosscheck_with_rdkit("CC(=O)Oc1ccccc1C(=O)O")
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from rdkit import Chem
from rdkit import RDLogger
from rdkit.Chem import Descriptors, Lipinski, rdMolDescriptors

from .config import AnalyzerConfig, DEFAULT_ANALYZER_CONFIG
from .core import analyze_smiles
from .result import AnalysisResult

# -------------------------
# Silence RDKit console logging (parse errors would otherwise land on stderr)
# Comment out the next line to debug RDKit output
RDLogger.DisableLog('rdApp.*')

COMPARED_FIELDS = (
    "atom_count",
    "ring_count",
    "aromatic_ring_count",
    "heteroatom_count",
    "formula",
    "molecular_weight",
    "hbd_count",
    "hba_count",
)

_FORMULA_CHARGE = re.compile(r"[+-]\d*$")


@dataclass
class CrossCheckReport:
    smiles: str
    analyzer_valid: bool
    rdkit_valid: bool
    ours: Dict[str, Any] = field(default_factory=dict)
    reference: Dict[str, Any] = field(default_factory=dict)
    mismatches: Dict[str, Tuple[Any, Any]] = field(default_factory=dict)

    @property
    def agrees(self) -> bool:
        return self.analyzer_valid == self.rdkit_valid and not self.mismatches


def rdkit_descriptors(smiles: str) -> Optional[Dict[str, Any]]:
    """RDKit values for the compared fields, or None if RDKit rejects the SMILES."""
    try:
        mol = Chem.MolFromSmiles(smiles, sanitize=True)
    except Exception:
        return None
    if mol is None:
        return None

    return {
        "atom_count": mol.GetNumHeavyAtoms(),
        "ring_count": rdMolDescriptors.CalcNumRings(mol),
        "aromatic_ring_count": rdMolDescriptors.CalcNumAromaticRings(mol),
        "heteroatom_count": rdMolDescriptors.CalcNumHeteroatoms(mol),
        "formula": _FORMULA_CHARGE.sub("", rdMolDescriptors.CalcMolFormula(mol)),
        "molecular_weight": Descriptors.MolWt(mol),
        "hbd_count": Lipinski.NHOHCount(mol),
        "hba_count": Lipinski.NOCount(mol),
    }


def crosscheck_with_rdkit(
    smiles: str,
    result: Optional[AnalysisResult] = None,
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
    mw_tolerance: float = 0.1,
) -> CrossCheckReport:
    """
    Cross-check one SMILES. Pass ``result`` to reuse an existing analysis;
    otherwise the SMILES is analysed with ``config``.
    """
    if result is None:
        result = analyze_smiles(smiles, config)

    reference = rdkit_descriptors(smiles)
    report = CrossCheckReport(
        smiles=smiles,
        analyzer_valid=result.is_valid,
        rdkit_valid=reference is not None,
    )
    if not result.is_valid or reference is None:
        return report

    report.reference = reference
    report.ours = {name: getattr(result, name) for name in COMPARED_FIELDS}

    for name in COMPARED_FIELDS:
        ours, theirs = report.ours[name], reference[name]
        if name == "molecular_weight":
            if abs(ours - theirs) > mw_tolerance:
                report.mismatches[name] = (ours, round(theirs, 3))
        elif ours != theirs:
            report.mismatches[name] = (ours, theirs)

    return report

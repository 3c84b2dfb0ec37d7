# src/smiles_analyzer/properties.py
"""
Descriptors computed from a ring-annotated ``Molecule``.

Every number here comes from the molecular graph; there are no
estimates. logP is not computed: the caller may supply one.
"""

from collections import Counter
from typing import Dict, Optional

from .config import AnalyzerConfig, DEFAULT_ANALYZER_CONFIG
from .elements import get_element
from .molecule import BondOrder, Molecule
from .result import AnalysisResult, LipinskiEvaluation

HBA_ELEMENTS = {"N", "O"}


def element_counts(molecule: Molecule) -> Dict[str, int]:
    """Element -> count, hydrogens included (implicit, bracket and explicit)."""
    counts: Counter = Counter()
    for atom in molecule.atoms:
        counts[atom.symbol] += 1
        if atom.hydrogens:
            counts["H"] += atom.hydrogens
    return dict(counts)


def hill_formula(counts: Dict[str, int]) -> str:
    """Hill notation: C if present, then H, then the rest alphabetically. A count of 1 is omitted."""
    counts = {k: v for k, v in counts.items() if v > 0}
    order = [el for el in ("C", "H") if el in counts]
    order += sorted(k for k in counts if k not in ("C", "H"))
    return "".join(f"{el}{counts[el] if counts[el] != 1 else ''}" for el in order)


def molecular_weight(counts: Dict[str, int]) -> float:
    return sum(get_element(symbol).weight * n for symbol, n in counts.items())


def heteroatom_count(molecule: Molecule) -> int:
    return sum(1 for a in molecule.atoms if a.symbol not in ("C", "H"))


def rotatable_bond_count(molecule: Molecule) -> int:
    """
    Non-ring single bonds whose endpoints both have at least two heavy
    neighbours; bonds to terminal groups (methyl, hydroxyl, halogen) are
    excluded.
    """
    count = 0
    for bond in molecule.heavy_bonds:
        if bond.order is not BondOrder.SINGLE or bond.in_ring:
            continue
        if molecule.heavy_degree(bond.begin) < 2 or molecule.heavy_degree(bond.end) < 2:
            continue
        count += 1
    return count


def hbd_count(molecule: Molecule) -> int:
    """Number of N-H and O-H bonds."""
    return sum(
        molecule.total_hydrogens(a.index)
        for a in molecule.atoms
        if a.symbol in HBA_ELEMENTS
    )


def hba_count(molecule: Molecule) -> int:
    """Number of N and O atoms."""
    return sum(1 for a in molecule.atoms if a.symbol in HBA_ELEMENTS)


def evaluate_lipinski(
    mw: float,
    hbd: int,
    hba: int,
    logp: Optional[float] = None,
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
) -> LipinskiEvaluation:
    mw_ok = mw <= config.mw_limit
    logp_ok = None if logp is None else logp <= config.logp_limit
    hbd_ok = hbd <= config.hbd_limit
    hba_ok = hba <= config.hba_limit
    violations = sum(1 for ok in (mw_ok, logp_ok, hbd_ok, hba_ok) if ok is False)
    return LipinskiEvaluation(
        mw=mw_ok,
        logp=logp_ok,
        hbd=hbd_ok,
        hba=hba_ok,
        violations=violations,
        drug_like=violations <= config.max_violations,
    )


def evaluate(
    molecule: Molecule,
    logp: Optional[float] = None,
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
) -> AnalysisResult:
    """Compute the full ``AnalysisResult`` for a ring-annotated molecule."""
    counts = element_counts(molecule)
    mw = molecular_weight(counts)
    donors = hbd_count(molecule)
    acceptors = hba_count(molecule)

    return AnalysisResult(
        smiles=molecule.smiles,
        is_valid=True,
        atom_count=len(molecule.heavy_atoms),
        bond_count=len(molecule.heavy_bonds),
        ring_count=len(molecule.rings),
        aromatic_ring_count=len(molecule.aromatic_rings),
        heteroatom_count=heteroatom_count(molecule),
        rotatable_bond_count=rotatable_bond_count(molecule),
        fragment_count=molecule.fragment_count,
        formal_charge=molecule.formal_charge,
        formula=hill_formula(counts),
        molecular_weight=round(mw, config.weight_precision),
        hbd_count=donors,
        hba_count=acceptors,
        logp=logp,
        lipinski=evaluate_lipinski(mw, donors, acceptors, logp, config),
    )

"""
test_properties.py - Descriptors, Hill formula and Lipinski rules
"""

import sys

from smiles_analyzer.config import AnalyzerConfig, STRICT_LIPINSKI_CONFIG
from smiles_analyzer.core import analyze_smiles, run_pipeline
from smiles_analyzer.properties import (
    element_counts,
    evaluate_lipinski,
    hba_count,
    hbd_count,
    hill_formula,
    rotatable_bond_count,
)


def test_hill_formula_ordering():
    assert hill_formula({"C": 1, "H": 4}) == "CH4"
    assert hill_formula({"H": 6, "C": 2, "O": 1}) == "C2H6O"
    assert hill_formula({"C": 6, "H": 5, "Br": 1}) == "C6H5Br"
    assert hill_formula({"Cl": 4, "C": 1}) == "CCl4"
    # hydrogen still leads when there is no carbon
    assert hill_formula({"H": 2, "O": 1}) == "H2O"
    assert hill_formula({"Cl": 1, "H": 1}) == "HCl"
    assert hill_formula({"Cl": 1, "H": 4, "N": 1}) == "H4ClN"
    assert hill_formula({"Na": 1, "Cl": 1}) == "ClNa"


def test_formula_without_carbon():
    assert analyze_smiles("Cl").formula == "HCl"
    assert analyze_smiles("F").formula == "HF"
    assert analyze_smiles("OCl").formula == "HClO"
    assert analyze_smiles("[NH4+].[Cl-]").formula == "H4ClN"
    assert analyze_smiles("N").formula == "H3N"


def test_formula_never_has_count_one():
    for smiles in ("C", "CO", "CCl", "C(=O)=O", "ClC(Cl)Cl", "c1ccncc1"):
        formula = analyze_smiles(smiles).formula
        assert "1" not in formula, formula
    assert analyze_smiles("C").formula == "CH4"


def test_element_counts_include_all_hydrogens():
    assert element_counts(run_pipeline("[H]O[H]")) == {"H": 2, "O": 1}
    assert element_counts(run_pipeline("[NH4+]")) == {"N": 1, "H": 4}
    assert element_counts(run_pipeline("c1ccccc1")) == {"C": 6, "H": 6}


def test_explicit_hydrogens_are_not_heavy_atoms():
    result = analyze_smiles("[H]O[H]")
    assert result.formula == "H2O"
    assert result.atom_count == 1
    assert result.bond_count == 0


def test_molecular_weight_precision():
    assert analyze_smiles("C").molecular_weight == 16.0
    precise = analyze_smiles("CC(=O)OC1=CC=CC=C1C(=O)O", AnalyzerConfig(weight_precision=2))
    assert precise.molecular_weight == 180.16


def test_rotatable_bonds():
    assert rotatable_bond_count(run_pipeline("CC")) == 0
    assert rotatable_bond_count(run_pipeline("CCCC")) == 1
    assert rotatable_bond_count(run_pipeline("C1CCCCC1")) == 0
    assert rotatable_bond_count(run_pipeline("c1ccccc1CC")) == 1
    assert rotatable_bond_count(run_pipeline("C=CC=C")) == 1
    assert rotatable_bond_count(run_pipeline("c1ccc(cc1)c1ccccc1")) == 1


def test_hydrogen_bond_donors_and_acceptors():
    ethanol = run_pipeline("CCO")
    assert (hbd_count(ethanol), hba_count(ethanol)) == (1, 1)

    glycine = run_pipeline("NCC(=O)O")
    assert (hbd_count(glycine), hba_count(glycine)) == (3, 3)

    assert hbd_count(run_pipeline("[NH4+]")) == 4
    assert hbd_count(run_pipeline("CN(C)C")) == 0


def test_heteroatoms():
    assert analyze_smiles("ClCCBr").heteroatom_count == 2
    assert analyze_smiles("CCCC").heteroatom_count == 0


def test_lipinski_without_logp():
    ok = evaluate_lipinski(300.0, 1, 2)
    assert ok.logp is None
    assert ok.violations == 0 and ok.drug_like

    bad = evaluate_lipinski(600.0, 6, 11)
    assert (bad.mw, bad.hbd, bad.hba) == (False, False, False)
    assert bad.violations == 3
    assert not bad.drug_like


def test_lipinski_with_logp():
    one = evaluate_lipinski(300.0, 1, 2, logp=6.2)
    assert one.logp is False
    assert one.violations == 1 and one.drug_like

    assert evaluate_lipinski(300.0, 1, 2, logp=4.9).logp is True
    assert not evaluate_lipinski(300.0, 1, 2, logp=6.2, config=STRICT_LIPINSKI_CONFIG).drug_like


def test_charge_and_fragments():
    salt = analyze_smiles("C[NH3+].[Cl-]")
    assert salt.fragment_count == 2
    assert salt.formal_charge == 0
    assert salt.formula == "CH6ClN"
    assert analyze_smiles("CC(=O)[O-]").formal_charge == -1


if __name__ == "__main__":
    from console_runner import run_module

    sys.exit(run_module("Property Evaluator Test Script", globals()))

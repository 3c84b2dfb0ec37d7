"""
test_core.py - End-to-end analysis of single SMILES strings

Features:
1. Checks reference molecules (aspirin, palmitic acid, the dashboard samples)
2. Checks that every failure becomes an invalid result with a reason code
3. Runs standalone (python tests/test_core.py) or under pytest
"""

import sys

from smiles_analyzer import (
    SAMPLE_MOLECULES,
    AnalysisResult,
    analyze_smiles,
    is_valid_smiles,
)

ASPIRIN = "CC(=O)OC1=CC=CC=C1C(=O)O"
PALMITIC_ACID = "O=C(O)CCCCCCCCCCCCCCC"


def test_aspirin():
    """Kekule aspirin: one aromatic ring, no Lipinski violations."""
    result = analyze_smiles(ASPIRIN)
    print(f"Input SMILES: {ASPIRIN}")
    print(f"Formula: {result.formula}, MW: {result.molecular_weight}")

    assert result.is_valid
    assert result.atom_count == 13
    assert result.bond_count == 13
    assert result.ring_count == 1
    assert result.aromatic_ring_count == 1
    assert result.heteroatom_count == 4
    assert result.rotatable_bond_count == 3
    assert result.formula == "C9H8O4"
    assert abs(result.molecular_weight - 180.16) < 0.05
    assert (result.hbd_count, result.hba_count) == (1, 4)
    assert result.lipinski.violations == 0
    assert result.lipinski.drug_like


def test_aromatic_aspirin_matches_kekule():
    kekule = analyze_smiles(ASPIRIN)
    aromatic = analyze_smiles("CC(=O)Oc1ccccc1C(=O)O")
    for name in ("atom_count", "ring_count", "aromatic_ring_count", "formula",
                 "molecular_weight", "rotatable_bond_count", "hbd_count", "hba_count"):
        assert getattr(kekule, name) == getattr(aromatic, name), name


def test_palmitic_acid():
    result = analyze_smiles(PALMITIC_ACID)
    assert result.is_valid
    assert result.ring_count == 0
    assert result.rotatable_bond_count == 14
    assert result.heteroatom_count == 2
    assert result.formula == "C16H32O2"


def test_dashboard_samples():
    expected = {
        "Aspirin": ("C9H8O4", 1, 1),
        "N-methylpiperazine aryl ether": ("C12H18N2O", 2, 1),
        "Sulfonamide": ("C12H12N2O2S", 2, 2),
        "Biphenyl": ("C12H10", 2, 2),
        "Palmitic acid": ("C16H32O2", 0, 0),
    }
    for name, smiles in SAMPLE_MOLECULES:
        result = analyze_smiles(smiles)
        print(f"{name}: {result.formula} rings={result.ring_count}/{result.aromatic_ring_count}")
        assert result.is_valid, result.reason
        assert (result.formula, result.ring_count, result.aromatic_ring_count) == expected[name]


def test_analysis_is_deterministic():
    for _, smiles in SAMPLE_MOLECULES:
        assert analyze_smiles(smiles) == analyze_smiles(smiles)
        assert analyze_smiles(smiles).to_record() == analyze_smiles(smiles).to_record()


def test_invalid_smiles_has_no_numbers():
    result = analyze_smiles("invalid_smiles_string")
    assert not result.is_valid
    assert result.reason_code == "syntax_error"
    record = result.to_record()
    for key, value in record.items():
        if key in ("smiles", "is_valid", "reason_code", "reason"):
            continue
        assert value is None, key


def test_reason_codes():
    assert analyze_smiles("CC(C").reason_code == "structure_error"
    assert analyze_smiles("C1CC").reason_code == "structure_error"
    assert analyze_smiles("C[C@H](O)N").reason_code == "unsupported_feature"
    assert analyze_smiles("C C").reason_code == "syntax_error"
    # a ring digit with nothing to attach to is rejected while tokenizing
    assert analyze_smiles("1CC").reason_code == "syntax_error"
    assert analyze_smiles("C[NH4+]").reason_code == "structure_error"
    assert analyze_smiles("").reason_code == "empty_input"
    assert analyze_smiles("   ").reason_code == "empty_input"


def test_logp_is_passed_through():
    unknown = analyze_smiles(ASPIRIN)
    assert unknown.logp is None and unknown.lipinski.logp is None

    known = analyze_smiles(ASPIRIN, logp=1.19)
    assert known.logp == 1.19
    assert known.lipinski.logp is True

    greasy = analyze_smiles(PALMITIC_ACID, logp=6.4)
    assert greasy.lipinski.logp is False
    assert greasy.lipinski.violations == 1
    assert greasy.lipinski.drug_like


def test_record_is_flat():
    record = analyze_smiles(ASPIRIN).to_record()
    assert record["formula"] == "C9H8O4"
    assert record["lipinski_violations"] == 0
    assert record["lipinski_logp"] is None
    assert "lipinski" not in record
    assert all(not isinstance(v, (dict, list)) for v in record.values())


def test_is_valid_smiles():
    assert is_valid_smiles("c1ccccc1")
    assert not is_valid_smiles("c1cccc")
    assert not is_valid_smiles("")


def test_invalid_result_constructor():
    result = analyze_smiles("C)")
    assert isinstance(result, AnalysisResult)
    assert result.smiles == "C)"
    assert "unmatched ')'" in result.reason


if __name__ == "__main__":
    from console_runner import run_module

    sys.exit(run_module("SMILES Analyzer Test Script", globals()))

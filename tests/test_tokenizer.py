"""
test_tokenizer.py - SMILES tokenizer
"""

import sys

import pytest

from smiles_analyzer.errors import SmilesSyntaxError, UnsupportedFeatureError
from smiles_analyzer.molecule import BondOrder
from smiles_analyzer.tokenizer import (
    ATOM,
    BOND,
    BRANCH_CLOSE,
    BRANCH_OPEN,
    DOT,
    RING_CLOSURE,
    tokenize,
)


def kinds(smiles):
    return [t.kind for t in tokenize(smiles)]


def test_organic_subset_and_branches():
    tokens = list(tokenize("CC(=O)Cl"))
    assert [t.kind for t in tokens] == [ATOM, ATOM, BRANCH_OPEN, BOND, ATOM, BRANCH_CLOSE, ATOM]
    assert tokens[3].bond is BondOrder.DOUBLE
    assert tokens[-1].atom.symbol == "Cl"
    assert tokens[-1].position == 6


def test_aromatic_atoms_are_flagged():
    tokens = list(tokenize("c1ccncc1"))
    atoms = [t.atom for t in tokens if t.kind == ATOM]
    assert [a.symbol for a in atoms] == ["C", "C", "C", "N", "C", "C"]
    assert all(a.aromatic for a in atoms)
    assert all(a.hydrogens is None for a in atoms)


def test_bracket_atoms():
    nh4 = next(tokenize("[NH4+]")).atom
    assert (nh4.symbol, nh4.hydrogens, nh4.charge, nh4.bracket) == ("N", 4, 1, True)

    iron = next(tokenize("[Fe+2]")).atom
    assert (iron.symbol, iron.charge, iron.hydrogens) == ("Fe", 2, 0)

    oxide = next(tokenize("[O--]")).atom
    assert oxide.charge == -2

    pyrrole_n = next(tokenize("[nH]")).atom
    assert pyrrole_n.aromatic and pyrrole_n.symbol == "N" and pyrrole_n.hydrogens == 1

    hydrogen = next(tokenize("[H]")).atom
    assert hydrogen.symbol == "H" and hydrogen.hydrogens == 0


def test_ring_closure_numbers():
    tokens = list(tokenize("C%10CC%10"))
    rings = [t.ring_number for t in tokens if t.kind == RING_CLOSURE]
    assert rings == [10, 10]
    assert kinds("C1CC1") == [ATOM, RING_CLOSURE, ATOM, ATOM, RING_CLOSURE]


def test_fragment_separator():
    assert kinds("[Na+].[Cl-]") == [ATOM, DOT, ATOM]


def test_tokenize_is_lazy():
    stream = tokenize("CC?")
    assert next(stream).kind == ATOM
    assert next(stream).kind == ATOM
    with pytest.raises(SmilesSyntaxError):
        next(stream)


@pytest.mark.parametrize("smiles", [
    "C[NH4",      # unterminated bracket
    "CC]",        # unmatched close bracket
    "C[[N]]",     # nested bracket
    "1CC",        # ring digit before any atom
    "C C",        # whitespace
    "CCé",        # non-ASCII
    "C?",         # unknown character
    "[Xx]",       # unknown element
    "[]",         # empty bracket
    "C%1",        # short %nn
])
def test_syntax_errors(smiles):
    with pytest.raises(SmilesSyntaxError) as info:
        list(tokenize(smiles))
    assert info.value.reason_code == "syntax_error"


@pytest.mark.parametrize("smiles", [
    "C[C@H](N)O",     # tetrahedral stereo
    "F/C=C/F",        # double-bond stereo
    "[13CH4]",        # isotope
    "*C",             # wildcard
    "[CH3:1]C",       # atom class
    "C$C",            # quadruple bond
])
def test_unsupported_features(smiles):
    with pytest.raises(UnsupportedFeatureError) as info:
        list(tokenize(smiles))
    assert info.value.reason_code == "unsupported_feature"


def test_error_reports_position():
    with pytest.raises(SmilesSyntaxError) as info:
        list(tokenize("CCC?C"))
    assert info.value.position == 3
    assert "position 3" in str(info.value)


if __name__ == "__main__":
    from console_runner import run_module

    sys.exit(run_module("Tokenizer Test Script", {
        k: v for k, v in globals().items()
        if k not in ("test_syntax_errors", "test_unsupported_features")
    }))

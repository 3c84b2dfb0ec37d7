# src/smiles_analyzer/tokenizer.py
"""
SMILES tokenizer.

``tokenize`` is a generator: tokens are produced lazily and the stream
cannot be rewound; call it again on the same string to start over.

Supported: organic-subset atoms (aliphatic and aromatic), bracket atoms
with hydrogen count and charge, bond symbols ``- = # :``, ring closures
``0-9`` and ``%nn``, branches and the ``.`` separator.

Rejected as unsupported: stereo markers (``@ / \\``), isotopes, atom
classes, the ``*`` wildcard and quadruple bonds (``$``).
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from .elements import (
    AROMATIC_ORGANIC_SUBSET,
    AROMATIC_SYMBOLS,
    ELEMENTS,
    ORGANIC_SUBSET,
)
from .errors import SmilesSyntaxError, UnsupportedFeatureError
from .molecule import BondOrder

# Token kinds
ATOM = "atom"
BOND = "bond"
RING_CLOSURE = "ring_closure"
BRANCH_OPEN = "branch_open"
BRANCH_CLOSE = "branch_close"
DOT = "dot"

BOND_SYMBOLS = {
    "-": BondOrder.SINGLE,
    "=": BondOrder.DOUBLE,
    "#": BondOrder.TRIPLE,
    ":": BondOrder.AROMATIC,
}


@dataclass(frozen=True)
class AtomSpec:
    symbol: str                         # capitalised element symbol
    aromatic: bool = False
    charge: int = 0
    hydrogens: Optional[int] = None     # None -> implicit (organic subset)
    bracket: bool = False


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    position: int
    atom: Optional[AtomSpec] = None
    bond: Optional[BondOrder] = None
    ring_number: Optional[int] = None


def tokenize(smiles: str) -> Iterator[Token]:
    """Yield the tokens of ``smiles`` left to right."""
    if not isinstance(smiles, str):
        raise TypeError(f"SMILES must be str, got {type(smiles).__name__}")

    i = 0
    n = len(smiles)
    seen_atom = False

    while i < n:
        ch = smiles[i]

        if not ch.isascii() or ch.isspace():
            raise SmilesSyntaxError(f"illegal character {ch!r}", i)

        # -------- bracket atom --------
        if ch == "[":
            end = smiles.find("]", i + 1)
            if end == -1:
                raise SmilesSyntaxError("unterminated bracket atom", i)
            body = smiles[i + 1:end]
            if "[" in body:
                raise SmilesSyntaxError("unmatched '['", i)
            yield Token(ATOM, smiles[i:end + 1], i, atom=_parse_bracket(body, i))
            seen_atom = True
            i = end + 1
            continue

        if ch == "]":
            raise SmilesSyntaxError("unmatched ']'", i)

        # -------- organic subset --------
        two = smiles[i:i + 2]
        if two in ("Cl", "Br"):
            yield Token(ATOM, two, i, atom=AtomSpec(two))
            seen_atom = True
            i += 2
            continue
        if ch in ORGANIC_SUBSET:
            yield Token(ATOM, ch, i, atom=AtomSpec(ch))
            seen_atom = True
            i += 1
            continue
        if ch in AROMATIC_ORGANIC_SUBSET:
            yield Token(ATOM, ch, i, atom=AtomSpec(AROMATIC_SYMBOLS[ch], aromatic=True))
            seen_atom = True
            i += 1
            continue
        if ch == "*":
            raise UnsupportedFeatureError("wildcard atom '*'", i)

        # -------- bonds --------
        if ch in BOND_SYMBOLS:
            yield Token(BOND, ch, i, bond=BOND_SYMBOLS[ch])
            i += 1
            continue
        if ch in "/\\":
            raise UnsupportedFeatureError(f"double-bond stereo marker {ch!r}", i)
        if ch == "$":
            raise UnsupportedFeatureError("quadruple bond '$'", i)

        # -------- ring closures --------
        if ch.isdigit() or ch == "%":
            if not seen_atom:
                raise SmilesSyntaxError("ring-closure digit before any atom", i)
            if ch == "%":
                digits = smiles[i + 1:i + 3]
                if len(digits) != 2 or not digits.isdigit():
                    raise SmilesSyntaxError("'%' must be followed by two digits", i)
                yield Token(RING_CLOSURE, smiles[i:i + 3], i, ring_number=int(digits))
                i += 3
            else:
                yield Token(RING_CLOSURE, ch, i, ring_number=int(ch))
                i += 1
            continue

        # -------- structure --------
        if ch == "(":
            yield Token(BRANCH_OPEN, ch, i)
        elif ch == ")":
            yield Token(BRANCH_CLOSE, ch, i)
        elif ch == ".":
            yield Token(DOT, ch, i)
        else:
            raise SmilesSyntaxError(f"unrecognized character {ch!r}", i)
        i += 1


def _parse_bracket(body: str, position: int) -> AtomSpec:
    """
    Parse the inside of ``[...]``: symbol, optional H count, optional charge.
    ``position`` is the offset of the opening bracket, used in error messages.
    """
    if not body:
        raise SmilesSyntaxError("empty bracket atom", position)

    j = 0
    n = len(body)

    if body[0].isdigit():
        raise UnsupportedFeatureError("isotope notation", position)

    # ---------- element symbol ----------
    aromatic = False
    if body[:2] in ("se", "as"):
        symbol = AROMATIC_SYMBOLS[body[:2]]
        aromatic = True
        j = 2
    elif body[0] in AROMATIC_ORGANIC_SUBSET:
        symbol = AROMATIC_SYMBOLS[body[0]]
        aromatic = True
        j = 1
    elif body[0].isupper():
        if n > 1 and body[1].islower() and body[:2] in ELEMENTS:
            symbol = body[:2]
            j = 2
        elif body[0] in ELEMENTS:
            symbol = body[0]
            j = 1
        else:
            raise SmilesSyntaxError(f"unknown element in [{body}]", position)
    elif body[0] == "*":
        raise UnsupportedFeatureError("wildcard atom '*'", position)
    else:
        raise SmilesSyntaxError(f"unknown element in [{body}]", position)

    # ---------- chirality ----------
    if j < n and body[j] == "@":
        raise UnsupportedFeatureError("tetrahedral stereo marker '@'", position)

    # ---------- hydrogen count ----------
    hydrogens = 0
    if j < n and body[j] == "H":
        j += 1
        start = j
        while j < n and body[j].isdigit():
            j += 1
        hydrogens = int(body[start:j]) if j > start else 1

    # ---------- charge ----------
    charge = 0
    if j < n and body[j] in "+-":
        sign = 1 if body[j] == "+" else -1
        j += 1
        start = j
        while j < n and body[j].isdigit():
            j += 1
        if j > start:
            charge = sign * int(body[start:j])
        else:
            charge = sign
            while j < n and body[j] == body[start - 1]:
                charge += sign
                j += 1

    # ---------- atom class ----------
    if j < n and body[j] == ":":
        raise UnsupportedFeatureError("atom class", position)

    if j != n:
        raise SmilesSyntaxError(f"unexpected {body[j:]!r} in bracket atom [{body}]", position)

    return AtomSpec(symbol, aromatic=aromatic, charge=charge, hydrogens=hydrogens, bracket=True)

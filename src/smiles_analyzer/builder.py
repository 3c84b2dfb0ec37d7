# src/smiles_analyzer/builder.py
"""
Token stream -> ``Molecule``.

A cursor tracks the atom new atoms bond to; ``(`` pushes the cursor on an
explicit branch stack and ``)`` restores it. Ring-closure numbers live in
an open table (number -> pending atom, pending bond order) until the same
number closes them.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .config import AnalyzerConfig, DEFAULT_ANALYZER_CONFIG
from .elements import PI_BOND_ACCEPTORS, allowed_valences, get_element, max_valence
from .errors import StructureError, UnsupportedFeatureError
from .molecule import Atom, Bond, BondOrder, Molecule
from .tokenizer import (
    ATOM,
    BOND,
    BRANCH_CLOSE,
    BRANCH_OPEN,
    DOT,
    RING_CLOSURE,
    AtomSpec,
    Token,
    tokenize,
)

logger = logging.getLogger(__name__)


@dataclass
class _DraftAtom:
    spec: AtomSpec
    position: int
    bonds: List[BondOrder] = field(default_factory=list)


@dataclass
class _OpenRing:
    atom: int
    order: Optional[BondOrder]
    position: int


def build_molecule(
    tokens: Iterable[Token],
    smiles: str = "",
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
) -> Molecule:
    """
    Assemble the molecular graph from ``tokens``.

    Raises StructureError for unmatched branches, dangling ring closures,
    duplicate bonds and valence violations.
    """
    atoms: List[_DraftAtom] = []
    bonds: List[Tuple[int, int, BondOrder]] = []
    bonded: set = set()

    cursor: Optional[int] = None
    branch_stack: List[int] = []
    open_rings: Dict[int, _OpenRing] = {}
    pending: Optional[Token] = None
    previous_kind: Optional[str] = None

    def add_bond(a: int, b: int, order: Optional[BondOrder], position: int) -> None:
        if a == b:
            raise StructureError("ring closure onto the same atom", position)
        key = frozenset((a, b))
        if key in bonded:
            raise StructureError(f"duplicate bond between atoms {a} and {b}", position)
        if order is None:
            both_aromatic = atoms[a].spec.aromatic and atoms[b].spec.aromatic
            order = BondOrder.AROMATIC if both_aromatic else BondOrder.SINGLE
        bonded.add(key)
        bonds.append((a, b, order))
        atoms[a].bonds.append(order)
        atoms[b].bonds.append(order)

    for tok in tokens:
        if tok.kind == ATOM:
            index = len(atoms)
            atoms.append(_DraftAtom(tok.atom, tok.position))
            if cursor is not None:
                add_bond(cursor, index, pending.bond if pending else None, tok.position)
            cursor = index
            pending = None

        elif tok.kind == BOND:
            if cursor is None:
                raise StructureError(f"bond {tok.text!r} has no preceding atom", tok.position)
            if pending is not None:
                raise StructureError("consecutive bond symbols", tok.position)
            pending = tok

        elif tok.kind == BRANCH_OPEN:
            if cursor is None:
                raise StructureError("branch has no preceding atom", tok.position)
            if pending is not None:
                raise StructureError("bond symbol before '('", tok.position)
            branch_stack.append(cursor)

        elif tok.kind == BRANCH_CLOSE:
            if not branch_stack:
                raise StructureError("unmatched ')'", tok.position)
            if previous_kind == BRANCH_OPEN:
                raise StructureError("empty branch '()'", tok.position)
            if pending is not None:
                raise StructureError("bond symbol before ')'", tok.position)
            cursor = branch_stack.pop()

        elif tok.kind == RING_CLOSURE:
            if cursor is None:
                raise StructureError("ring closure has no preceding atom", tok.position)
            order = pending.bond if pending else None
            opened = open_rings.pop(tok.ring_number, None)
            if opened is None:
                open_rings[tok.ring_number] = _OpenRing(cursor, order, tok.position)
            else:
                if order is not None and opened.order is not None and order != opened.order:
                    raise StructureError(
                        f"conflicting bond symbols on ring closure {tok.ring_number}",
                        tok.position,
                    )
                add_bond(opened.atom, cursor, order or opened.order, tok.position)
            pending = None

        elif tok.kind == DOT:
            if not config.allow_fragments:
                raise UnsupportedFeatureError("multi-component SMILES ('.')", tok.position)
            if cursor is None or pending is not None:
                raise StructureError("'.' must separate two atoms", tok.position)
            if branch_stack:
                raise StructureError("'.' inside a branch", tok.position)
            cursor = None

        previous_kind = tok.kind

    # ---------- end of input ----------
    if pending is not None:
        raise StructureError(f"dangling bond symbol {pending.text!r}", pending.position)
    if branch_stack:
        raise StructureError("unmatched '('")
    if open_rings:
        numbers = ", ".join(str(k) for k in sorted(open_rings))
        first = min(r.position for r in open_rings.values())
        raise StructureError(f"unclosed ring bond(s): {numbers}", first)
    if not atoms:
        raise StructureError("no atoms")
    if previous_kind == DOT:
        raise StructureError("'.' must separate two atoms")

    final_atoms = tuple(
        Atom(
            index=i,
            symbol=draft.spec.symbol,
            aromatic=draft.spec.aromatic,
            charge=draft.spec.charge,
            hydrogens=_hydrogen_count(i, draft),
            bracket=draft.spec.bracket,
            position=draft.position,
        )
        for i, draft in enumerate(atoms)
    )
    final_bonds = tuple(Bond(a, b, order) for a, b, order in bonds)

    logger.debug("built %d atoms, %d bonds from %r", len(final_atoms), len(final_bonds), smiles)
    return Molecule(smiles, final_atoms, final_bonds)


def parse_smiles(smiles: str, config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG) -> Molecule:
    """Tokenize and build in one step (no ring perception)."""
    return build_molecule(tokenize(smiles), smiles, config)


def _hydrogen_count(index: int, draft: _DraftAtom) -> int:
    """
    Hydrogens on an atom, checking the valence invariant on the way.

    Bracket atoms carry exactly the hydrogens written. Organic-subset atoms
    take the lowest allowed valence that fits their bonds; aromatic
    acceptors (c, n, b, p) reserve one unit for the ring pi bond when no
    explicit multiple bond already supplies it.
    """
    spec = draft.spec
    element = get_element(spec.symbol)
    used = sum(order.valence for order in draft.bonds)

    if spec.bracket:
        hydrogens = spec.hydrogens or 0
        limit = max_valence(element, spec.charge)
        if used + hydrogens > limit:
            raise StructureError(
                f"valence {used + hydrogens} exceeds maximum {limit} for {spec.symbol} (atom {index})",
                draft.position,
            )
        return hydrogens

    if spec.aromatic and spec.symbol in PI_BOND_ACCEPTORS:
        has_aromatic = BondOrder.AROMATIC in draft.bonds
        has_multiple = BondOrder.DOUBLE in draft.bonds or BondOrder.TRIPLE in draft.bonds
        if has_aromatic and not has_multiple and used + 1 <= element.default_valence:
            used += 1

    for valence in allowed_valences(element):
        if valence >= used:
            return valence - used

    raise StructureError(
        f"valence {used} exceeds maximum {max(element.valences)} for {spec.symbol} (atom {index})",
        draft.position,
    )

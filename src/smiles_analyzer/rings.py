# src/smiles_analyzer/rings.py
"""
Ring perception: smallest set of smallest rings (SSSR) and aromaticity.

SSSR
----
The ring basis has ``bonds - atoms + components`` members (cyclomatic
number). Candidates (Horton's set, limited to ``max_ring_size`` atoms)
are taken smallest first while linearly independent over GF(2)
(edge-incidence bit vectors). If the candidates do not fill the basis
(macrocycles above the cap), fundamental cycles of a BFS spanning forest
built in parse order complete it: each non-tree bond plus the tree path
between its endpoints.

Aromaticity
-----------
A ring is aromatic when every member contributes a known number of pi
electrons and the total is 4n+2 (simplified Hueckel). Rings are re-checked
until nothing changes, so a Kekule double bond shared with an aromatic
neighbour ring counts for fused systems such as naphthalene.
"""

import logging
from collections import deque
from dataclasses import replace
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from .config import AnalyzerConfig, DEFAULT_ANALYZER_CONFIG
from .errors import StructureError
from .molecule import Atom, Bond, BondOrder, Molecule, Ring

logger = logging.getLogger(__name__)

_LONE_PAIR_DONORS = {"N", "P", "As"}
_CHALCOGENS = {"O", "S", "Se", "Te"}
_ELECTRONEGATIVE = {"N", "O", "S", "Se"}


def detect_rings(
    molecule: Molecule,
    config: AnalyzerConfig = DEFAULT_ANALYZER_CONFIG,
) -> Molecule:
    """
    Return a copy of ``molecule`` with rings, atom ring memberships and bond
    ring flags filled in. Aromatic bonds outside any ring become single.
    """
    paths = find_sssr(molecule, max_ring_size=config.max_ring_size)
    flags = perceive_aromaticity(molecule, paths)
    rings = tuple(Ring(tuple(path), aromatic) for path, aromatic in zip(paths, flags))

    membership: List[Set[int]] = [set() for _ in molecule.atoms]
    ring_pairs: Set[FrozenSet[int]] = set()
    for ri, ring in enumerate(rings):
        for a in ring.atoms:
            membership[a].add(ri)
        ring_pairs.update(ring.bond_pairs)

    for atom in molecule.atoms:
        if atom.aromatic and not membership[atom.index]:
            raise StructureError(
                f"aromatic atom {atom.symbol.lower()} (atom {atom.index}) is not in a ring",
                atom.position,
            )

    bonds = []
    for bond in molecule.bonds:
        in_ring = bond.pair in ring_pairs
        order = bond.order
        if order is BondOrder.AROMATIC and not in_ring:
            order = BondOrder.SINGLE
        bonds.append(Bond(bond.begin, bond.end, order, in_ring))

    atoms = tuple(replace(atom, rings=frozenset(membership[atom.index])) for atom in molecule.atoms)

    logger.debug(
        "%r: %d rings (%d aromatic)",
        molecule.smiles, len(rings), sum(1 for r in rings if r.aromatic),
    )
    return replace(molecule, atoms=atoms, bonds=tuple(bonds), rings=rings)


# -------------------------
# SSSR
# -------------------------
def cyclomatic_number(molecule: Molecule) -> int:
    return len(molecule.bonds) - len(molecule.atoms) + molecule.fragment_count


def find_sssr(molecule: Molecule, max_ring_size: int = 12) -> List[Tuple[int, ...]]:
    """Ring paths of the SSSR, each rotated to start at its lowest atom index."""
    needed = cyclomatic_number(molecule)
    if needed == 0:
        return []

    edge_index = {bond.pair: i for i, bond in enumerate(molecule.bonds)}
    basis = _Gf2Basis()
    selected: List[Tuple[int, ...]] = []
    seen: Set[FrozenSet[int]] = set()

    def take(paths: Iterable[Sequence[int]]) -> None:
        for path in paths:
            if len(selected) == needed:
                return
            key = frozenset(path)
            if key in seen:
                continue
            if basis.add(_edge_vector(path, edge_index)):
                seen.add(key)
                selected.append(_canonical_path(path))

    candidates = _horton_candidates(molecule, max_ring_size)
    take(sorted(candidates, key=lambda p: (len(p), sorted(p))))

    if len(selected) < needed:
        logger.debug(
            "%r: %d/%d rings within size %d, using spanning-tree cycles",
            molecule.smiles, len(selected), needed, max_ring_size,
        )
        take(sorted(_fundamental_cycles(molecule), key=lambda p: (len(p), sorted(p))))

    return sorted(selected, key=lambda p: sorted(p))


def _horton_candidates(molecule: Molecule, max_ring_size: int) -> List[Tuple[int, ...]]:
    """
    Horton's candidate set: for every root atom and every bond (x, y)
    outside the root's BFS tree, the cycle root..x - y..root, kept when the
    two tree paths meet only at the root and the cycle fits the size cap.
    A minimum cycle basis always lies within this set.
    """
    candidates: Dict[FrozenSet[int], Tuple[int, ...]] = {}
    for root in range(len(molecule.atoms)):
        parent, dist = _bfs_tree(molecule, root)
        for bond in molecule.bonds:
            x, y = bond.begin, bond.end
            if x not in dist or y not in dist:
                continue
            if parent[x] == y or parent[y] == x:
                continue
            if dist[x] + dist[y] + 1 > max_ring_size:
                continue
            to_x = _unwind(parent, x)
            to_y = _unwind(parent, y)
            if set(to_x[1:]) & set(to_y[1:]):
                continue
            path = to_x + tuple(reversed(to_y[1:]))
            if len(path) >= 3:
                candidates.setdefault(frozenset(path), path)
    return list(candidates.values())


def _bfs_tree(molecule: Molecule, root: int) -> Tuple[Dict[int, int], Dict[int, int]]:
    """Parent and distance maps of the BFS tree from ``root`` (neighbours in index order)."""
    parent = {root: -1}
    dist = {root: 0}
    queue = deque([root])
    while queue:
        current = queue.popleft()
        for nbr in molecule.neighbors(current):
            if nbr not in parent:
                parent[nbr] = current
                dist[nbr] = dist[current] + 1
                queue.append(nbr)
    return parent, dist


def _fundamental_cycles(molecule: Molecule) -> List[Tuple[int, ...]]:
    """One cycle per non-tree bond of a BFS spanning forest (parse order)."""
    parent: Dict[int, int] = {}
    depth: Dict[int, int] = {}
    tree: Set[FrozenSet[int]] = set()
    for root in range(len(molecule.atoms)):
        if root in parent:
            continue
        parent[root] = -1
        depth[root] = 0
        queue = deque([root])
        while queue:
            current = queue.popleft()
            for nbr in molecule.neighbors(current):
                if nbr not in parent:
                    parent[nbr] = current
                    depth[nbr] = depth[current] + 1
                    tree.add(frozenset((current, nbr)))
                    queue.append(nbr)

    cycles = []
    for bond in molecule.bonds:
        if bond.pair in tree:
            continue
        u, v = bond.begin, bond.end
        left, right = [u], [v]
        while depth[u] > depth[v]:
            u = parent[u]
            left.append(u)
        while depth[v] > depth[u]:
            v = parent[v]
            right.append(v)
        while u != v:
            u, v = parent[u], parent[v]
            left.append(u)
            right.append(v)
        right.pop()  # common ancestor already in left
        cycles.append(tuple(left + right[::-1]))
    return cycles


def _unwind(parent: Dict[int, int], node: int) -> Tuple[int, ...]:
    path = []
    while node != -1:
        path.append(node)
        node = parent[node]
    return tuple(reversed(path))


def _canonical_path(path: Sequence[int]) -> Tuple[int, ...]:
    """Rotate to the lowest index, walking toward its lower-numbered neighbour."""
    path = list(path)
    k = path.index(min(path))
    path = path[k:] + path[:k]
    if len(path) > 2 and path[-1] < path[1]:
        path = [path[0]] + path[:0:-1]
    return tuple(path)


def _edge_vector(path: Sequence[int], edge_index: Dict[FrozenSet[int], int]) -> int:
    vector = 0
    n = len(path)
    for i in range(n):
        vector |= 1 << edge_index[frozenset((path[i], path[(i + 1) % n]))]
    return vector


class _Gf2Basis:
    """Incremental Gaussian elimination over GF(2) on int bit vectors."""

    def __init__(self):
        self.rows: Dict[int, int] = {}  # pivot bit -> row

    def add(self, vector: int) -> bool:
        while vector:
            pivot = vector.bit_length() - 1
            row = self.rows.get(pivot)
            if row is None:
                self.rows[pivot] = vector
                return True
            vector ^= row
        return False


# -------------------------
# Aromaticity
# -------------------------
def perceive_aromaticity(molecule: Molecule, paths: Sequence[Sequence[int]]) -> List[bool]:
    """Aromatic flag per ring path, iterated to a fixed point for fused systems."""
    ring_pairs = [set(Ring(tuple(p)).bond_pairs) for p in paths]
    aromatic = [False] * len(paths)
    aromatic_pairs: Set[FrozenSet[int]] = set()

    changed = True
    while changed:
        changed = False
        for ri, path in enumerate(paths):
            if aromatic[ri]:
                continue
            total = 0
            for index in path:
                electrons = _pi_electrons(molecule, index, ring_pairs[ri], aromatic_pairs)
                if electrons is None:
                    break
                total += electrons
            else:
                if total % 4 == 2:
                    aromatic[ri] = True
                    aromatic_pairs.update(ring_pairs[ri])
                    changed = True
    return aromatic


def _pi_electrons(
    molecule: Molecule,
    index: int,
    ring_pairs: Set[FrozenSet[int]],
    aromatic_pairs: Set[FrozenSet[int]],
) -> Optional[int]:
    """
    Pi electrons ``index`` donates to the ring described by ``ring_pairs``;
    None when the atom cannot take part in an aromatic ring (sp3, triple bond).
    """
    atom = molecule.atoms[index]
    ring_orders = []
    exo_double: List[Tuple[int, Bond]] = []
    for nbr, bond in molecule.adjacency[index]:
        if bond.order is BondOrder.TRIPLE:
            return None
        if bond.pair in ring_pairs:
            ring_orders.append(bond.order)
        elif bond.order is BondOrder.DOUBLE:
            exo_double.append((nbr, bond))

    if BondOrder.DOUBLE in ring_orders:
        return 1

    if exo_double:
        if any(bond.pair in aromatic_pairs for _, bond in exo_double):
            return 1
        if atom.symbol == "C" and all(
            molecule.atoms[nbr].symbol in _ELECTRONEGATIVE for nbr, _ in exo_double
        ):
            return 0
        return None

    if BondOrder.AROMATIC in ring_orders:
        return _aromatic_atom_electrons(molecule, atom)

    # Kekule form, no double bond touching the atom
    if atom.symbol in _LONE_PAIR_DONORS:
        if atom.charge > 0:
            return None
        if molecule.total_hydrogens(index) > 0 or molecule.degree(index) == 3 or atom.charge < 0:
            return 2
        return None
    if atom.symbol in _CHALCOGENS:
        return 2 if atom.charge == 0 else None
    if atom.symbol == "C":
        if atom.charge == -1:
            return 2
        if atom.charge == 1:
            return 0
        return None
    if atom.symbol == "B":
        return 0
    return None


def _aromatic_atom_electrons(molecule: Molecule, atom: Atom) -> int:
    """Contribution of a lowercase aromatic atom with no double bond attached."""
    if atom.symbol == "C":
        if atom.charge < 0:
            return 2
        if atom.charge > 0:
            return 0
        return 1
    if atom.symbol in _LONE_PAIR_DONORS:
        if atom.charge > 0:
            return 1
        if atom.charge < 0 or molecule.total_hydrogens(atom.index) > 0 or molecule.degree(atom.index) == 3:
            return 2
        return 1
    if atom.symbol in _CHALCOGENS:
        return 1 if atom.charge > 0 else 2
    if atom.symbol == "B":
        return 0
    return 1

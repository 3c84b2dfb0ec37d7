# src/smiles_analyzer/molecule.py
"""
Immutable molecular graph produced by the structure builder.

Atoms, bonds and rings are frozen dataclasses; a ``Molecule`` is built
once per analysis and only ever replaced (``dataclasses.replace``), never
mutated.
"""

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from .errors import StructureError


class BondOrder(Enum):
    SINGLE = "-"
    DOUBLE = "="
    TRIPLE = "#"
    AROMATIC = ":"

    @property
    def valence(self) -> int:
        """Valence units consumed on each endpoint (aromatic counts as 1)."""
        return _BOND_VALENCE[self]


_BOND_VALENCE = {
    BondOrder.SINGLE: 1,
    BondOrder.DOUBLE: 2,
    BondOrder.TRIPLE: 3,
    BondOrder.AROMATIC: 1,
}


@dataclass(frozen=True)
class Atom:
    index: int
    symbol: str
    aromatic: bool = False
    charge: int = 0
    hydrogens: int = 0                      # implicit (organic subset) or written in brackets
    bracket: bool = False
    position: Optional[int] = None          # offset in the source SMILES
    rings: FrozenSet[int] = frozenset()     # indices into Molecule.rings

    @property
    def is_hydrogen(self) -> bool:
        return self.symbol == "H"

    @property
    def in_ring(self) -> bool:
        return bool(self.rings)


@dataclass(frozen=True)
class Bond:
    begin: int
    end: int
    order: BondOrder = BondOrder.SINGLE
    in_ring: bool = False

    @property
    def pair(self) -> FrozenSet[int]:
        return frozenset((self.begin, self.end))


@dataclass(frozen=True)
class Ring:
    atoms: Tuple[int, ...]      # closed path; atoms[-1] bonds back to atoms[0]
    aromatic: bool = False

    @property
    def size(self) -> int:
        return len(self.atoms)

    @property
    def bond_pairs(self) -> List[FrozenSet[int]]:
        n = len(self.atoms)
        return [frozenset((self.atoms[i], self.atoms[(i + 1) % n])) for i in range(n)]


@dataclass(frozen=True)
class Molecule:
    smiles: str
    atoms: Tuple[Atom, ...]
    bonds: Tuple[Bond, ...]
    rings: Tuple[Ring, ...] = ()

    def __post_init__(self):
        n = len(self.atoms)
        for bond in self.bonds:
            if not (0 <= bond.begin < n and 0 <= bond.end < n):
                raise StructureError(
                    f"bond {bond.begin}-{bond.end} references a missing atom"
                )
            if bond.begin == bond.end:
                raise StructureError(f"atom {bond.begin} is bonded to itself")

    # ---------- adjacency ----------

    @cached_property
    def adjacency(self) -> Tuple[Tuple[Tuple[int, Bond], ...], ...]:
        """Per atom: ``(neighbour index, bond)`` pairs sorted by neighbour index."""
        table: List[List[Tuple[int, Bond]]] = [[] for _ in self.atoms]
        for bond in self.bonds:
            table[bond.begin].append((bond.end, bond))
            table[bond.end].append((bond.begin, bond))
        return tuple(tuple(sorted(row, key=lambda item: item[0])) for row in table)

    @cached_property
    def bond_lookup(self) -> Dict[FrozenSet[int], Bond]:
        return {bond.pair: bond for bond in self.bonds}

    def neighbors(self, index: int) -> List[int]:
        return [nbr for nbr, _ in self.adjacency[index]]

    def degree(self, index: int) -> int:
        return len(self.adjacency[index])

    def heavy_degree(self, index: int) -> int:
        """Number of bonded non-hydrogen atoms."""
        return sum(1 for nbr, _ in self.adjacency[index] if not self.atoms[nbr].is_hydrogen)

    def total_hydrogens(self, index: int) -> int:
        """Implicit/bracket hydrogens plus explicit ``[H]`` neighbours."""
        explicit = sum(1 for nbr, _ in self.adjacency[index] if self.atoms[nbr].is_hydrogen)
        return self.atoms[index].hydrogens + explicit

    # ---------- views ----------

    @property
    def heavy_atoms(self) -> List[Atom]:
        return [a for a in self.atoms if not a.is_hydrogen]

    @property
    def heavy_bonds(self) -> List[Bond]:
        return [
            b for b in self.bonds
            if not (self.atoms[b.begin].is_hydrogen or self.atoms[b.end].is_hydrogen)
        ]

    @property
    def aromatic_rings(self) -> List[Ring]:
        return [r for r in self.rings if r.aromatic]

    @property
    def formal_charge(self) -> int:
        return sum(a.charge for a in self.atoms)

    @cached_property
    def fragment_count(self) -> int:
        """Connected components; a ring bond may join parts written apart with '.'."""
        seen: Set[int] = set()
        components = 0
        for start in range(len(self.atoms)):
            if start in seen:
                continue
            components += 1
            stack = [start]
            seen.add(start)
            while stack:
                current = stack.pop()
                for nbr in self.neighbors(current):
                    if nbr not in seen:
                        seen.add(nbr)
                        stack.append(nbr)
        return components

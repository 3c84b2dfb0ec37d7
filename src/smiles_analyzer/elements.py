# src/smiles_analyzer/elements.py
"""
Fixed periodic-table lookup used by the parser and the property evaluator.

Atomic weights are IUPAC conventional standard atomic weights.
``valences`` lists the allowed valence states in increasing order; the
first one is the default used for implicit hydrogens.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Element:
    symbol: str
    atomic_number: int
    weight: float
    valences: Tuple[int, ...]
    group: int = 0          # main-group number (1, 2, 13..18); 0 for d/f-block

    @property
    def default_valence(self) -> int:
        return self.valences[0]


_TABLE = [
    # symbol, Z, weight, valences, group
    ("H", 1, 1.008, (1,), 1),
    ("He", 2, 4.0026, (0,), 18),
    ("Li", 3, 6.94, (1,), 1),
    ("Be", 4, 9.0122, (2,), 2),
    ("B", 5, 10.81, (3,), 13),
    ("C", 6, 12.011, (4,), 14),
    ("N", 7, 14.007, (3, 5), 15),
    ("O", 8, 15.999, (2,), 16),
    ("F", 9, 18.998, (1,), 17),
    ("Ne", 10, 20.180, (0,), 18),
    ("Na", 11, 22.990, (1,), 1),
    ("Mg", 12, 24.305, (2,), 2),
    ("Al", 13, 26.982, (3,), 13),
    ("Si", 14, 28.085, (4,), 14),
    ("P", 15, 30.974, (3, 5), 15),
    ("S", 16, 32.06, (2, 4, 6), 16),
    ("Cl", 17, 35.45, (1, 3, 5, 7), 17),
    ("Ar", 18, 39.948, (0,), 18),
    ("K", 19, 39.098, (1,), 1),
    ("Ca", 20, 40.078, (2,), 2),
    ("Ti", 22, 47.867, (2, 3, 4), 0),
    ("V", 23, 50.942, (2, 3, 4, 5), 0),
    ("Cr", 24, 51.996, (2, 3, 6), 0),
    ("Mn", 25, 54.938, (2, 3, 4, 7), 0),
    ("Fe", 26, 55.845, (2, 3), 0),
    ("Co", 27, 58.933, (2, 3), 0),
    ("Ni", 28, 58.693, (2,), 0),
    ("Cu", 29, 63.546, (1, 2), 0),
    ("Zn", 30, 65.38, (2,), 0),
    ("Ga", 31, 69.723, (3,), 13),
    ("Ge", 32, 72.630, (4,), 14),
    ("As", 33, 74.922, (3, 5), 15),
    ("Se", 34, 78.971, (2, 4, 6), 16),
    ("Br", 35, 79.904, (1, 3, 5, 7), 17),
    ("Kr", 36, 83.798, (0, 2), 18),
    ("Rb", 37, 85.468, (1,), 1),
    ("Sr", 38, 87.62, (2,), 2),
    ("Mo", 42, 95.95, (2, 3, 4, 5, 6), 0),
    ("Ru", 44, 101.07, (2, 3, 4, 8), 0),
    ("Rh", 45, 102.91, (3,), 0),
    ("Pd", 46, 106.42, (2, 4), 0),
    ("Ag", 47, 107.87, (1,), 0),
    ("Cd", 48, 112.41, (2,), 0),
    ("In", 49, 114.82, (3,), 13),
    ("Sn", 50, 118.71, (2, 4), 14),
    ("Sb", 51, 121.76, (3, 5), 15),
    ("Te", 52, 127.60, (2, 4, 6), 16),
    ("I", 53, 126.90, (1, 3, 5, 7), 17),
    ("Xe", 54, 131.29, (0, 2, 4, 6), 18),
    ("Cs", 55, 132.91, (1,), 1),
    ("Ba", 56, 137.33, (2,), 2),
    ("Gd", 64, 157.25, (3,), 0),
    ("Pt", 78, 195.08, (2, 4), 0),
    ("Au", 79, 196.97, (1, 3), 0),
    ("Hg", 80, 200.59, (1, 2), 0),
    ("Tl", 81, 204.38, (1, 3), 13),
    ("Pb", 82, 207.2, (2, 4), 14),
    ("Bi", 83, 208.98, (3, 5), 15),
]

ELEMENTS: Dict[str, Element] = {
    symbol: Element(symbol, z, weight, valences, group)
    for symbol, z, weight, valences, group in _TABLE
}
_BY_ATOMIC_NUMBER: Dict[int, Element] = {e.atomic_number: e for e in ELEMENTS.values()}

# Atoms that may be written without brackets
ORGANIC_SUBSET = {"B", "C", "N", "O", "P", "S", "F", "Cl", "Br", "I"}

# Lowercase (aromatic) spellings and the element they stand for
AROMATIC_SYMBOLS = {
    "b": "B", "c": "C", "n": "N", "o": "O", "p": "P", "s": "S",
    "se": "Se", "as": "As",
}
AROMATIC_ORGANIC_SUBSET = {"b", "c", "n", "o", "p", "s"}

# Elements that gain one valence unit from the ring pi bond when written aromatic
PI_BOND_ACCEPTORS = {"B", "C", "N", "P", "As"}


def get_element(symbol: str) -> Element:
    """Look up an element by its capitalised symbol; KeyError if unknown."""
    return ELEMENTS[symbol]


def max_valence(element: Element, charge: int = 0) -> int:
    """Largest valence the element may carry at the given formal charge."""
    return max(allowed_valences(element, charge), default=0)


def allowed_valences(element: Element, charge: int = 0) -> Tuple[int, ...]:
    """
    Allowed valence states at a formal charge.

    A charged p-block atom takes the valences of its isoelectronic neutral
    neighbour: N+ behaves like C, O- like F, P- like S. Second-row atoms
    cannot expand their octet and keep only the first of those states.
    s-block and d-block charges do not change the bond budget.
    """
    if charge == 0 or element.group < 13:
        return element.valences
    partner = _BY_ATOMIC_NUMBER.get(element.atomic_number - charge)
    if partner is None or partner.group < 13:
        return ()
    if element.atomic_number <= 10:
        return partner.valences[:1]
    return partner.valences

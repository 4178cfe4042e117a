"""Periodic-table data and physical constants for the MUCAL engine.

Symbols cover Z = 1..103.  Atomic weights up to Z = 98, edge energies and
cross-section tables are not stored here; they come from the Elam, Ravel &
Sieber compilation shipped with **xraydb** and are attached to each element
by :mod:`mucalc.core.elements`.

References
----------
Atomic weights beyond Z = 98 are the mass numbers of the longest-lived
isotopes.

Elam, W.T., Ravel, B.D. & Sieber, J.R. (2002).
*Radiation Physics and Chemistry* **63**, 121–128.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Physical constants
# ---------------------------------------------------------------------------
AVOGADRO_BARN_CM2: float = 0.602214076
"""Avogadro constant × 1 barn in cm², so that σ[b/atom] = μ/ρ × A / 0.6022."""

EV_PER_KEV: float = 1000.0


# ---------------------------------------------------------------------------
# Elements, index + 1 == Z
# ---------------------------------------------------------------------------
ELEMENTS: tuple[str, ...] = (
    "H", "He", "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar", "K", "Ca",
    "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr", "Rb", "Sr", "Y", "Zr",
    "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd", "In", "Sn",
    "Sb", "Te", "I", "Xe", "Cs", "Ba", "La", "Ce", "Pr", "Nd",
    "Pm", "Sm", "Eu", "Gd", "Tb", "Dy", "Ho", "Er", "Tm", "Yb",
    "Lu", "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt", "Au", "Hg",
    "Tl", "Pb", "Bi", "Po", "At", "Rn", "Fr", "Ra", "Ac", "Th",
    "Pa", "U", "Np", "Pu", "Am", "Cm", "Bk", "Cf", "Es", "Fm",
    "Md", "No", "Lr",
)
"""Element symbols ordered by atomic number (``ELEMENTS[z - 1]``)."""

EXTRA_ATOMIC_WEIGHTS: dict[str, float] = {
    "Es": 252.0, "Fm": 257.0, "Md": 258.0, "No": 259.0, "Lr": 262.0,
}
"""Mass numbers of the longest-lived isotopes beyond the xraydb element table.

Weights of Z <= :data:`ELAM_MAX_Z` come from ``xraydb.atomic_mass``.
"""

ELEMENT_TO_Z: dict[str, int] = {sym: i + 1 for i, sym in enumerate(ELEMENTS)}

MAX_Z: int = len(ELEMENTS)

ELAM_MAX_Z: int = 98
"""Highest atomic number covered by the Elam tables in xraydb."""

MISSING_DATA_Z: tuple[int, ...] = (83, 84, 86, 87, 88, 90, 92)
"""Atomic numbers whose cross-section coefficients are known to be incomplete."""


# ---------------------------------------------------------------------------
# Absorption edges
# ---------------------------------------------------------------------------
EDGES: tuple[str, ...] = ("K", "L1", "L2", "L3", "M")

EDGE_LABELS: dict[str, str] = {
    "K": "K edge",
    "L1": "L1 edge",
    "L2": "L2 edge",
    "L3": "L3 edge",
    "M": "M edge",
}

XRAYDB_EDGE_NAMES: dict[str, str] = {
    "K": "K",
    "L1": "L1",
    "L2": "L2",
    "L3": "L3",
    "M": "M1",
}
"""Edge name → IUPAC level used by xraydb.  ``M`` is the M1 (highest) edge."""


# ---------------------------------------------------------------------------
# Tabulated support of the cross-section data (keV)
# ---------------------------------------------------------------------------
ENERGY_MIN_KEV: float = 0.1
ENERGY_MAX_KEV: float = 800.0

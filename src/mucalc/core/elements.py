"""Process-wide, read-only element table.

Symbols, atomic numbers and weights come from :mod:`mucalc.constants`;
absorption-edge energies and jump ratios are read once from the Elam
database via **xraydb**.  The table is built on first use and cached for
the lifetime of the process; nothing in it is mutated afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

try:
    import xraydb
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'xraydb' package is required for the MUCAL element table.  "
        "Install it with:  pip install xraydb>=4.5"
    ) from _exc

from mucalc.constants import (
    AVOGADRO_BARN_CM2,
    EDGES,
    ELAM_MAX_Z,
    ELEMENTS,
    EXTRA_ATOMIC_WEIGHTS,
    EV_PER_KEV,
    MISSING_DATA_Z,
    XRAYDB_EDGE_NAMES,
)
from mucalc.errors import MissingData, UnknownEdge, UnknownElement

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Element:
    """Static data for one chemical element.

    Attributes
    ----------
    symbol : str
        Chemical symbol, e.g. ``"Ru"``.
    z : int
        Atomic number (1–103).
    atomic_weight : float
        Standard atomic weight (g/mol).
    edges : Mapping[str, float]
        Edge name → edge energy (keV).  Edges the element does not have, or
        that are not tabulated, are absent.
    jump_ratios : Mapping[str, float]
        Edge name → photoabsorption jump ratio across that edge.
    has_data : bool
        ``False`` when cross-section data are incomplete or unavailable.
    """

    symbol: str
    z: int
    atomic_weight: float
    edges: Mapping[str, float] = field(default_factory=dict, repr=False)
    jump_ratios: Mapping[str, float] = field(default_factory=dict, repr=False)
    has_data: bool = True

    @property
    def edge_sequence(self) -> tuple[tuple[str, float], ...]:
        """Edges as ``(name, keV)`` pairs in ascending energy order."""
        return tuple(sorted(self.edges.items(), key=lambda item: item[1]))

    @property
    def barns_per_atom_factor(self) -> float:
        """Multiplier converting cm²/g into barns/atom."""
        return self.atomic_weight / AVOGADRO_BARN_CM2

    def edge_energy(self, edge: str) -> float:
        name = normalize_edge(edge)
        try:
            return self.edges[name]
        except KeyError:
            raise MissingData(f"{self.symbol} has no tabulated {name} edge") from None


def normalize_edge(edge: str) -> str:
    """Return the canonical edge name (``"l3"`` → ``"L3"``)."""
    name = str(edge).strip().upper()
    if name not in EDGES:
        raise UnknownEdge(f"Unknown edge {edge!r}; expected one of {', '.join(EDGES)}")
    return name


class ElementTable:
    """Immutable lookup of :class:`Element` records by symbol and by Z."""

    def __init__(self, elements: Iterable[Element]):
        by_symbol = {}
        by_z = {}
        for elem in elements:
            if elem.symbol in by_symbol or elem.z in by_z:
                raise ValueError(f"Duplicate element entry: {elem.symbol} (Z={elem.z})")
            by_symbol[elem.symbol] = elem
            by_z[elem.z] = elem
        self._by_symbol = MappingProxyType(by_symbol)
        self._by_z = MappingProxyType(by_z)

    def __len__(self) -> int:
        return len(self._by_symbol)

    def __iter__(self) -> Iterator[Element]:
        return (self._by_z[z] for z in sorted(self._by_z))

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._by_symbol

    def lookup(self, symbol: str) -> Element:
        """Return the element for *symbol* (case-sensitive, surrounding blanks ignored)."""
        key = str(symbol).strip()
        try:
            return self._by_symbol[key]
        except KeyError:
            raise UnknownElement(f"Unknown element symbol: {symbol!r}") from None

    def lookup_z(self, z: int) -> Element:
        try:
            return self._by_z[int(z)]
        except (KeyError, TypeError, ValueError):
            raise UnknownElement(f"Unknown atomic number: {z!r}") from None

    def edge_energy(self, symbol: str, edge: str) -> float:
        """Return the *edge* energy (keV) of *symbol*."""
        return self.lookup(symbol).edge_energy(edge)

    def has_element_data(self, symbol: str) -> bool:
        """Return ``False`` for flagged elements and for unknown symbols."""
        elem = self._by_symbol.get(str(symbol).strip())
        return elem is not None and elem.has_data


def _load_element(z: int, symbol: str) -> Element:
    edges: dict[str, float] = {}
    jumps: dict[str, float] = {}
    weight = EXTRA_ATOMIC_WEIGHTS.get(symbol)
    if z <= ELAM_MAX_Z:
        weight = float(xraydb.atomic_mass(symbol))
        levels = xraydb.xray_edges(symbol)
        for name in EDGES:
            level = levels.get(XRAYDB_EDGE_NAMES[name])
            if level is None:
                continue
            energy_eV, _fyield, jump_ratio = level
            if energy_eV and energy_eV > 0:
                edges[name] = float(energy_eV) / EV_PER_KEV
                jumps[name] = float(jump_ratio)

    return Element(
        symbol=symbol,
        z=z,
        atomic_weight=weight,
        edges=MappingProxyType(edges),
        jump_ratios=MappingProxyType(jumps),
        has_data=z <= ELAM_MAX_Z and z not in MISSING_DATA_Z,
    )


@lru_cache(maxsize=None)
def get_element_table() -> ElementTable:
    """Return the process-wide element table, building it on first call."""
    table = ElementTable(_load_element(i + 1, sym) for i, sym in enumerate(ELEMENTS))
    logger.debug("Element table built: %d elements", len(table))
    return table


# ---------------------------------------------------------------------------
# Module-level convenience API
# ---------------------------------------------------------------------------
def get_z(symbol: str) -> int:
    """Return the atomic number of *symbol*; raises :class:`UnknownElement`."""
    return get_element_table().lookup(symbol).z


def get_edge_energy(atom: str, edge: str) -> float:
    """Return the *edge* energy of *atom* in keV."""
    return get_element_table().edge_energy(atom, edge)


def has_element_data(symbol: str) -> bool:
    """Return ``True`` when *symbol* has complete cross-section data."""
    return get_element_table().has_element_data(symbol)

"""Per-element X-ray cross sections (the ``mucal`` engine).

Photoabsorption, coherent and incoherent scattering cross sections are
evaluated from the tabulated Elam log-log splines in **xraydb**.  The
photoabsorption tables are discontinuous at every absorption edge, so the
edge handling is made explicit here: an element's edges are walked in
ascending energy order and the probe energy is placed in the segment above
every edge it has reached.  An energy that sits on an edge (within
:data:`EDGE_TOLERANCE`) belongs to the post-edge segment.

The table nodes that carry a jump do not coincide exactly with the edge
energies reported by ``xraydb.xray_edges``.  Each edge is therefore matched
to its jump in the photoabsorption table (:func:`edge_jumps`) and the photo
probe is clamped to the side of that jump its segment lies on, so the
discontinuity appears exactly at the tabulated edge energy.

Reference
---------
Elam, W.T., Ravel, B.D. & Sieber, J.R. (2002).
*Radiation Physics and Chemistry* **63**, 121–128.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

try:
    import xraydb
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'xraydb' package is required for the MUCAL cross-section engine.  "
        "Install it with:  pip install xraydb>=4.5"
    ) from _exc

from mucalc.constants import ENERGY_MAX_KEV, ENERGY_MIN_KEV, EV_PER_KEV
from mucalc.core.elements import Element, get_element_table
from mucalc.errors import EnergyOutOfRange, MissingData

logger = logging.getLogger(__name__)

EDGE_TOLERANCE = 1e-9
"""Relative distance below which an energy is considered to sit on an edge."""

JUMP_MARGIN = 1e-9
"""Relative distance kept from the jump nodes when clamping photo probes."""

JUMP_MATCH_TOLERANCE = 1e-3
"""Largest log-energy distance between an edge and its tabulated jump."""


@dataclass(frozen=True)
class EdgeJump:
    """Where one absorption edge sits in the Elam photoabsorption table.

    The table stores an edge as two adjacent nodes: the pre-edge value at
    ``below_eV`` and the post-edge value at ``above_eV``.  The spline between
    the two nodes is an interpolation artefact, never a physical value.
    Edges without a tabulated jump (below the table) use ``edge_eV`` for both.
    """

    name: str
    edge_eV: float
    below_eV: float
    above_eV: float


@dataclass(frozen=True)
class CrossSectionResult:
    """Cross sections of one element.

    Scalars from :func:`mucal`, 1-D arrays from :func:`cross_sections`.
    Units are cm²/g unless barns/atom were requested.

    Attributes
    ----------
    photo : float | np.ndarray
        Photoelectric absorption.
    coherent : float | np.ndarray
        Coherent (Rayleigh) scattering.
    incoherent : float | np.ndarray
        Incoherent (Compton) scattering.
    total : float | np.ndarray
        ``photo + coherent + incoherent``.
    """

    photo: float | np.ndarray
    coherent: float | np.ndarray
    incoherent: float | np.ndarray
    total: float | np.ndarray

    def as_dict(self) -> dict[str, float]:
        return {
            "photo": self.photo,
            "coherent": self.coherent,
            "incoherent": self.incoherent,
            "total": self.total,
        }


def resolve_element(element: str | Element) -> Element:
    """Return the :class:`Element` for *element*, rejecting flagged elements."""
    elem = element if isinstance(element, Element) else get_element_table().lookup(element)
    if not elem.has_data:
        raise MissingData(
            f"Cross-section data for {elem.symbol} (Z={elem.z}) are incomplete"
        )
    return elem


def check_energies(energy_keV) -> np.ndarray:
    """Validate energies (keV) and return them as a 1-D float array."""
    arr = np.atleast_1d(np.asarray(energy_keV, dtype=np.float64))
    if arr.ndim != 1:
        raise EnergyOutOfRange("Energies must be a scalar or a 1-D sequence")
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0):
        raise EnergyOutOfRange(f"Energy must be a finite value > 0 keV, got {energy_keV}")
    if np.any(arr < ENERGY_MIN_KEV) or np.any(arr > ENERGY_MAX_KEV):
        raise EnergyOutOfRange(
            f"Energy outside the tabulated range "
            f"{ENERGY_MIN_KEV:g}–{ENERGY_MAX_KEV:g} keV: {energy_keV}"
        )
    return arr


def edge_segment(element: str | Element, energy_keV: float) -> str | None:
    """Return the highest edge at or below *energy_keV*.

    ``None`` means the energy lies below every tabulated edge.  An energy
    on an edge (relative distance ≤ :data:`EDGE_TOLERANCE`) counts as above it.
    """
    elem = element if isinstance(element, Element) else get_element_table().lookup(element)
    segment = None
    for name, edge_keV in elem.edge_sequence:
        if energy_keV < edge_keV * (1.0 - EDGE_TOLERANCE):
            break
        segment = name
    return segment


def _photo_table(symbol: str) -> tuple[np.ndarray, np.ndarray]:
    db = xraydb.get_xraydb()
    tab = db.tables["photoabsorption"]
    row = db.query(tab).filter(tab.c.element == symbol).all()[0]
    return np.array(json.loads(row.log_energy)), np.array(json.loads(row.log_photoabsorption))


@lru_cache(maxsize=None)
def _jumps_for(symbol: str, edges: tuple[tuple[str, float], ...]) -> tuple[EdgeJump, ...]:
    log_e, log_mu = _photo_table(symbol)
    # photoabsorption only rises with energy across an edge
    rising = np.flatnonzero(np.diff(log_mu) > 0)
    centres = 0.5 * (log_e[rising] + log_e[rising + 1])

    claimed: dict[int, tuple[float, str]] = {}
    for name, edge_keV in edges:
        if rising.size == 0:
            break
        dist = np.abs(centres - math.log(edge_keV * EV_PER_KEV))
        best = int(np.argmin(dist))
        if dist[best] > JUMP_MATCH_TOLERANCE:
            continue
        if best not in claimed or dist[best] < claimed[best][0]:
            claimed[best] = (float(dist[best]), name)
    owner = {name: idx for idx, (_dist, name) in claimed.items()}

    jumps = []
    for name, edge_keV in edges:
        edge_eV = edge_keV * EV_PER_KEV
        if name in owner:
            i = rising[owner[name]]
            jumps.append(EdgeJump(name, edge_eV, float(np.exp(log_e[i])), float(np.exp(log_e[i + 1]))))
        else:
            logger.debug("%s: no tabulated photoabsorption jump for the %s edge", symbol, name)
            jumps.append(EdgeJump(name, edge_eV, edge_eV, edge_eV))
    return tuple(jumps)


def edge_jumps(element: str | Element) -> tuple[EdgeJump, ...]:
    """Return the tabulated photoabsorption jump of every edge, ascending.

    Raises
    ------
    UnknownElement, MissingData
    """
    elem = resolve_element(element)
    return _jumps_for(elem.symbol, elem.edge_sequence)


def _photo_probe_eV(elem: Element, energies_keV: np.ndarray) -> np.ndarray:
    """Move each energy to the photo-spline side of its edge segment."""
    energies_eV = energies_keV * EV_PER_KEV
    jumps = edge_jumps(elem)
    if not jumps:
        return energies_eV

    thresholds = np.array([j.edge_eV * (1.0 - EDGE_TOLERANCE) for j in jumps])
    # segment k lies above the first k edges
    segment = np.searchsorted(thresholds, energies_eV, side="right")
    floor = np.array([0.0] + [j.above_eV * (1.0 + JUMP_MARGIN) for j in jumps])
    ceiling = np.array([j.below_eV * (1.0 - JUMP_MARGIN) for j in jumps] + [np.inf])

    probe = np.minimum(np.maximum(energies_eV, floor[segment]), ceiling[segment])
    moved = int(np.count_nonzero(probe != energies_eV))
    if moved:
        logger.debug("%s: %d point(s) moved clear of a tabulated edge jump", elem.symbol, moved)
    return probe


def _elam(symbol: str, energies_eV: np.ndarray, kind: str) -> np.ndarray:
    values = xraydb.mu_elam(symbol, energies_eV, kind=kind)
    return np.atleast_1d(np.asarray(values, dtype=np.float64))


def cross_sections(element: str | Element, energies_keV, barns: bool = False) -> CrossSectionResult:
    """Evaluate all cross sections of *element* at an array of energies.

    Parameters
    ----------
    element : str or Element
        Chemical symbol, e.g. ``"Ru"``.
    energies_keV : float or array-like
        Photon energies in **keV**.
    barns : bool
        Return barns/atom instead of cm²/g.

    Returns
    -------
    CrossSectionResult
        With 1-D ``np.ndarray`` fields of the same length as *energies_keV*.

    Raises
    ------
    UnknownElement, MissingData, EnergyOutOfRange
    """
    elem = resolve_element(element)
    energies = check_energies(energies_keV)
    energies_eV = energies * EV_PER_KEV

    photo = _elam(elem.symbol, _photo_probe_eV(elem, energies), "photo")
    coherent = _elam(elem.symbol, energies_eV, "coh")
    incoherent = _elam(elem.symbol, energies_eV, "incoh")
    if barns:
        factor = elem.barns_per_atom_factor
        photo, coherent, incoherent = photo * factor, coherent * factor, incoherent * factor

    return CrossSectionResult(
        photo=photo,
        coherent=coherent,
        incoherent=incoherent,
        total=photo + coherent + incoherent,
    )


def mucal(element: str | Element, energy_keV: float, barns: bool = False) -> CrossSectionResult:
    """Return photo, coherent, incoherent and total cross sections at one energy.

    Parameters
    ----------
    element : str or Element
        Chemical symbol, e.g. ``"Fe"``.
    energy_keV : float
        Photon energy in **keV**.
    barns : bool
        Return barns/atom instead of cm²/g.

    Returns
    -------
    CrossSectionResult
        Scalar fields.
    """
    if np.ndim(energy_keV) != 0:
        raise EnergyOutOfRange("mucal() takes a single energy; use cross_sections() for arrays")
    energy = float(energy_keV)
    if not math.isfinite(energy) or energy <= 0:
        raise EnergyOutOfRange(f"Energy must be a finite value > 0 keV, got {energy_keV}")

    elem = resolve_element(element)
    res = cross_sections(elem, [energy], barns=barns)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "mucal %s @ %.5f keV: segment=%s total=%.6g",
            elem.symbol,
            energy,
            edge_segment(elem, energy) or "below edges",
            res.total[0],
        )
    return CrossSectionResult(
        photo=float(res.photo[0]),
        coherent=float(res.coherent[0]),
        incoherent=float(res.incoherent[0]),
        total=float(res.total[0]),
    )

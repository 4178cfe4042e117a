"""Compound absorbance and absorption-edge steps.

A compound's mass attenuation is the weight-fraction sum of its elements::

    (μ/ρ)_compound(E) = Σ_i  w_i × (μ/ρ)_i,total(E)

and its absorbance for a mass *m* (g) spread uniformly over an area *A*
(cm²) follows Beer–Lambert: ``μx = (μ/ρ) × m / A``.  Everything here is
reported for **unit mass**, so callers scale by the actual sample or
diluent mass.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from mucalc.core.cross_section import check_energies, cross_sections
from mucalc.core.elements import get_element_table, normalize_edge
from mucalc.core.formula import ParsedFormula, parse_formula
from mucalc.errors import InvalidGeometry, InvalidRange

logger = logging.getLogger(__name__)


def as_formula(formula: str | ParsedFormula) -> ParsedFormula:
    if isinstance(formula, ParsedFormula):
        return formula
    return parse_formula(formula)


def _check_area(area_cm2: float) -> float:
    area = float(area_cm2)
    if not math.isfinite(area) or area <= 0:
        raise InvalidGeometry(f"Area must be > 0 cm², got {area_cm2}")
    return area


def mass_attenuation(formula: str | ParsedFormula, energy_keV) -> float | np.ndarray:
    """Return the total mass attenuation coefficient (cm²/g) of a compound.

    A scalar energy gives a ``float``; a sequence gives a 1-D array.
    """
    parsed = as_formula(formula)
    energies = check_energies(energy_keV)
    mu_rho = np.zeros_like(energies)
    for elem, w_i in parsed.mass_fractions:
        mu_rho += w_i * cross_sections(elem, energies).total
    if np.ndim(energy_keV) == 0:
        return float(mu_rho[0])
    return mu_rho


def calc_absorption(formula: str | ParsedFormula, energy_keV, area_cm2: float) -> float | np.ndarray:
    """Absorbance of 1 g of *formula* spread over *area_cm2* at *energy_keV*.

    Parameters
    ----------
    formula : str or ParsedFormula
        Compound formula, e.g. ``"BN"``.
    energy_keV : float or array-like
        Photon energy (keV).
    area_cm2 : float
        Illuminated pellet area (cm²).  Must be > 0.

    Returns
    -------
    float or np.ndarray
        ``(μ/ρ)_compound / area``; multiply by the mass in grams for the
        absorbance of a real pellet.
    """
    area = _check_area(area_cm2)
    return mass_attenuation(formula, energy_keV) / area


def calc_edge_step(
    formula: str | ParsedFormula,
    atom: str,
    edge: str,
    energy_step_keV: float,
    area_cm2: float,
) -> float:
    """Return the absorbance jump of 1 g of *formula* across an edge of *atom*.

    The step is ``A(E0 + δ) − A(E0 − δ)`` with ``E0`` the tabulated *edge*
    energy of *atom* and ``δ`` = *energy_step_keV*, so it is positive when
    absorption rises through the edge.  *atom* need not occur in *formula*;
    for a diluent the value is just the slope of its background.
    """
    step = float(energy_step_keV)
    if not math.isfinite(step) or step <= 0:
        raise InvalidRange(f"Energy step must be > 0 keV, got {energy_step_keV}")
    e0 = get_element_table().edge_energy(atom, normalize_edge(edge))
    below, above = calc_absorption(formula, [e0 - step, e0 + step], area_cm2)
    logger.debug("Edge step of %s at %s %s (%.5f keV): %.6g", formula, atom, edge, e0, above - below)
    return float(above - below)

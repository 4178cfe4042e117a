"""Headless dilution planning: masses and the expected absorption spectrum.

Runs the full calculation behind the dilution form:

1. edge step per gram of sample and of diluent at the chosen edge,
2. sample/diluent masses giving the target edge step (mixture solver),
3. energy axis around the edge,
4. sample, diluent and total absorbance along that axis.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from mucalc.core.compound import as_formula, calc_absorption, calc_edge_step
from mucalc.core.elements import get_edge_energy, has_element_data
from mucalc.core.energy_range import calc_x_range
from mucalc.core.mixture import MixtureSolution, solve_mixture
from mucalc.core.settings import DilutionSettings

logger = logging.getLogger(__name__)

SPECTRUM_COLUMNS = ("energy [keV]", "sample [abs]", "diluent [abs]", "total [abs]")


@dataclass(frozen=True)
class DilutionPlan:
    """Result of :func:`plan_dilution`.

    Attributes
    ----------
    settings : DilutionSettings
        Inputs the plan was computed from.
    mixture : MixtureSolution
        Sample and diluent masses (signed).
    edge_energy_keV : float
        Tabulated edge energy of the absorbing atom.
    energies_keV, sample_abs, diluent_abs, total_abs : np.ndarray
        Spectrum on the generated energy axis.
    warnings : tuple[str, ...]
        Conditions the caller should show the user (unphysical masses).
    """

    settings: DilutionSettings
    mixture: MixtureSolution
    edge_energy_keV: float
    energies_keV: np.ndarray = field(repr=False)
    sample_abs: np.ndarray = field(repr=False)
    diluent_abs: np.ndarray = field(repr=False)
    total_abs: np.ndarray = field(repr=False)
    warnings: tuple[str, ...] = ()

    @property
    def sample_mass(self) -> float:
        return self.mixture.sample_mass

    @property
    def diluent_mass(self) -> float:
        return self.mixture.diluent_mass

    def to_frame(self) -> pd.DataFrame:
        """Return the spectrum as a table with the export column names."""
        return pd.DataFrame(
            {
                SPECTRUM_COLUMNS[0]: self.energies_keV,
                SPECTRUM_COLUMNS[1]: self.sample_abs,
                SPECTRUM_COLUMNS[2]: self.diluent_abs,
                SPECTRUM_COLUMNS[3]: self.total_abs,
            }
        )

    def summary(self) -> dict[str, object]:
        return {
            "atom": self.settings.atom,
            "edge": self.settings.edge,
            "edge_energy_keV": self.edge_energy_keV,
            "sample": self.settings.sample,
            "diluent": self.settings.diluent,
            "sample_mass_g": self.sample_mass,
            "diluent_mass_g": self.diluent_mass,
            "sample_edge_step_per_g": self.mixture.sample_edge_step,
            "diluent_edge_step_per_g": self.mixture.diluent_edge_step,
            "target_edge_step": self.mixture.target_edge_step,
            "points": int(self.energies_keV.size),
            "warnings": list(self.warnings),
        }


def plan_dilution(settings: DilutionSettings | None = None) -> DilutionPlan:
    """Compute sample/diluent masses and the resulting spectrum.

    Raises
    ------
    MucalError
        Any engine error (bad formula, missing data, degenerate mixture, …)
        propagates unchanged.
    """
    cfg = settings or DilutionSettings()
    sample = as_formula(cfg.sample)
    diluent = as_formula(cfg.diluent)
    step_keV = cfg.step_keV

    if not has_element_data(cfg.atom):
        logger.warning("Cross-section data for %s are incomplete", cfg.atom)

    sample_edge = calc_edge_step(sample, cfg.atom, cfg.edge, step_keV, cfg.area)
    diluent_edge = calc_edge_step(diluent, cfg.atom, cfg.edge, step_keV, cfg.area)
    mixture = solve_mixture(sample_edge, diluent_edge, cfg.total_mass, cfg.target_edge_step)

    warnings: list[str] = []
    if mixture.sample_mass < 0:
        warnings.append(
            f"Target edge step {cfg.target_edge_step:g} is unreachable: "
            f"sample mass would be {mixture.sample_mass:.6g} g"
        )
    if mixture.diluent_mass < 0:
        warnings.append(
            f"Target edge step {cfg.target_edge_step:g} needs more than {cfg.total_mass:g} g "
            f"of sample: diluent mass would be {mixture.diluent_mass:.6g} g"
        )
    for msg in warnings:
        logger.warning(msg)

    e0 = get_edge_energy(cfg.atom, cfg.edge)
    lo_eV, hi_eV = cfg.window_eV
    energies = calc_x_range("atom", e0 + lo_eV / 1000.0, e0 + hi_eV / 1000.0, step_keV)

    sample_abs = np.asarray(calc_absorption(sample, energies, cfg.area)) * mixture.sample_mass
    diluent_abs = np.asarray(calc_absorption(diluent, energies, cfg.area)) * mixture.diluent_mass

    logger.info(
        "Dilution plan %s in %s at %s %s: sample=%.6g g diluent=%.6g g (%d points)",
        sample,
        diluent,
        cfg.atom,
        cfg.edge,
        mixture.sample_mass,
        mixture.diluent_mass,
        energies.size,
    )

    return DilutionPlan(
        settings=cfg,
        mixture=mixture,
        edge_energy_keV=e0,
        energies_keV=energies,
        sample_abs=sample_abs,
        diluent_abs=diluent_abs,
        total_abs=sample_abs + diluent_abs,
        warnings=tuple(warnings),
    )

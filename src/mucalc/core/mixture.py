"""Two-component sample/diluent mixture solver.

Solves the exact 2×2 system::

    m_s + m_d           = M
    s × m_s + d × m_d   = Δμ_target

where *s* and *d* are the edge steps per gram of sample and diluent.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from mucalc.errors import DegenerateMixture

logger = logging.getLogger(__name__)

_DEGENERATE_RTOL = 1e-12


@dataclass(frozen=True)
class MixtureSolution:
    """Sample and diluent masses (g) solving the mixture system.

    Masses are signed: a negative value means the target edge step cannot
    be reached with a positive amount of that component.
    """

    sample_mass: float
    diluent_mass: float
    total_mass: float
    target_edge_step: float
    sample_edge_step: float
    diluent_edge_step: float

    @property
    def is_physical(self) -> bool:
        return self.sample_mass >= 0 and self.diluent_mass >= 0

    @property
    def edge_step(self) -> float:
        """Edge step produced by these masses (equals the target)."""
        return self.sample_edge_step * self.sample_mass + self.diluent_edge_step * self.diluent_mass


def solve_mixture(
    sample_edge_step: float,
    diluent_edge_step: float,
    total_mass: float,
    target_edge_step: float,
) -> MixtureSolution:
    """Return the sample/diluent masses giving *target_edge_step* at *total_mass*.

    Parameters
    ----------
    sample_edge_step : float
        Edge step of 1 g of sample (absorbance per gram).
    diluent_edge_step : float
        Edge step of 1 g of diluent.
    total_mass : float
        Combined pellet mass (g).
    target_edge_step : float
        Requested edge step of the pellet.

    Returns
    -------
    MixtureSolution
        Signed masses; they are never clamped.

    Raises
    ------
    DegenerateMixture
        If the two edge steps are equal, so no ratio can reach an
        arbitrary target.
    """
    s = float(sample_edge_step)
    d = float(diluent_edge_step)
    if math.isclose(s, d, rel_tol=_DEGENERATE_RTOL, abs_tol=0.0):
        raise DegenerateMixture(
            f"Sample and diluent have the same edge step ({s:.6g}); "
            "the mixture cannot be solved"
        )

    sample_mass = (target_edge_step - d * total_mass) / (s - d)
    diluent_mass = total_mass - sample_mass
    logger.debug("Mixture solved: sample=%.6g g, diluent=%.6g g", sample_mass, diluent_mass)

    return MixtureSolution(
        sample_mass=sample_mass,
        diluent_mass=diluent_mass,
        total_mass=float(total_mass),
        target_edge_step=float(target_edge_step),
        sample_edge_step=s,
        diluent_edge_step=d,
    )

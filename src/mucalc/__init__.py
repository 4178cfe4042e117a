"""mucalc: X-ray absorption cross sections and XAS sample dilution planning."""

from .core.elements import get_edge_energy, get_element_table, get_z, has_element_data
from .core.formula import ParsedFormula, parse_formula
from .core.cross_section import CrossSectionResult, cross_sections, mucal
from .core.compound import calc_absorption, calc_edge_step
from .core.energy_range import calc_x_range
from .core.mixture import MixtureSolution, solve_mixture
from .core.geometry import area_from_diameter, diameter_from_area
from .core.settings import DilutionSettings, settings_from_mapping
from .core.planner import DilutionPlan, plan_dilution
from .constants import EDGE_LABELS, EDGES, ELEMENT_TO_Z, ELEMENTS, MISSING_DATA_Z
from .errors import (
    DegenerateMixture,
    EnergyOutOfRange,
    InvalidFormula,
    InvalidGeometry,
    InvalidRange,
    MissingData,
    MucalError,
    UnknownEdge,
    UnknownElement,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # element table
    "ELEMENTS",
    "ELEMENT_TO_Z",
    "EDGES",
    "EDGE_LABELS",
    "MISSING_DATA_Z",
    "get_element_table",
    "get_z",
    "get_edge_energy",
    "has_element_data",
    # formulas
    "ParsedFormula",
    "parse_formula",
    # cross sections
    "CrossSectionResult",
    "cross_sections",
    "mucal",
    # compounds
    "calc_absorption",
    "calc_edge_step",
    "calc_x_range",
    # mixture
    "MixtureSolution",
    "solve_mixture",
    # geometry / planning
    "area_from_diameter",
    "diameter_from_area",
    "DilutionSettings",
    "settings_from_mapping",
    "DilutionPlan",
    "plan_dilution",
    # errors
    "MucalError",
    "InvalidFormula",
    "UnknownElement",
    "UnknownEdge",
    "MissingData",
    "EnergyOutOfRange",
    "InvalidRange",
    "InvalidGeometry",
    "DegenerateMixture",
]

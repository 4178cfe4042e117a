from .elements import Element, ElementTable, get_edge_energy, get_element_table, get_z, has_element_data
from .formula import ParsedFormula, parse_formula
from .cross_section import CrossSectionResult, EdgeJump, cross_sections, edge_jumps, edge_segment, mucal
from .compound import calc_absorption, calc_edge_step, mass_attenuation
from .energy_range import calc_x_range
from .mixture import MixtureSolution, solve_mixture
from .geometry import area_from_diameter, diameter_from_area
from .settings import DilutionSettings, settings_from_mapping
from .planner import DilutionPlan, plan_dilution

__all__ = [
	"Element",
	"ElementTable",
	"get_edge_energy",
	"get_element_table",
	"get_z",
	"has_element_data",
	"ParsedFormula",
	"parse_formula",
	"CrossSectionResult",
	"EdgeJump",
	"cross_sections",
	"edge_jumps",
	"edge_segment",
	"mucal",
	"calc_absorption",
	"calc_edge_step",
	"mass_attenuation",
	"calc_x_range",
	"MixtureSolution",
	"solve_mixture",
	"area_from_diameter",
	"diameter_from_area",
	"DilutionSettings",
	"settings_from_mapping",
	"DilutionPlan",
	"plan_dilution",
]

"""Command-line interface for the MUCAL engine.

Sub-commands (JSON on stdout unless noted):

* ``z``          – atomic number of an element
* ``edge``       – absorption-edge energy (keV)
* ``mucal``      – photo / coherent / incoherent / total cross sections
* ``absorption`` – absorbance of 1 g of a compound over an area
* ``edge-step``  – edge step of 1 g of a compound
* ``mixture``    – solve sample/diluent masses from two edge steps
* ``area``       – pellet area from diameter and tilt angle
* ``plan``       – full dilution plan (``--spectrum`` prints the CSV table)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .core.compound import calc_absorption, calc_edge_step
from .core.cross_section import mucal
from .core.elements import get_edge_energy, get_z, has_element_data
from .core.geometry import area_from_diameter
from .core.mixture import solve_mixture
from .core.planner import plan_dilution
from .core.settings import DilutionSettings, settings_from_mapping
from .errors import MucalError


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mucalc", description="X-ray absorption cross sections for XAS sample preparation")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None)
    sub = p.add_subparsers(dest="command", required=True)

    p_z = sub.add_parser("z", help="Atomic number of an element")
    p_z.add_argument("--symbol", required=True)

    p_edge = sub.add_parser("edge", help="Absorption-edge energy (keV)")
    p_edge.add_argument("--atom", required=True)
    p_edge.add_argument("--edge", default="K")

    p_mu = sub.add_parser("mucal", help="Cross sections of one element")
    p_mu.add_argument("--element", required=True)
    p_mu.add_argument("--energy", type=float, required=True, help="Energy in keV")
    p_mu.add_argument("--barns", action="store_true", help="Report barns/atom instead of cm2/g")

    p_abs = sub.add_parser("absorption", help="Absorbance of 1 g of compound")
    p_abs.add_argument("--formula", required=True)
    p_abs.add_argument("--energy", type=float, required=True, help="Energy in keV")
    p_abs.add_argument("--area", type=float, required=True, help="Area in cm2")

    p_step = sub.add_parser("edge-step", help="Edge step of 1 g of compound")
    p_step.add_argument("--formula", required=True)
    p_step.add_argument("--atom", required=True)
    p_step.add_argument("--edge", default="K")
    p_step.add_argument("--step", type=float, default=0.001, help="Energy step in keV")
    p_step.add_argument("--area", type=float, required=True, help="Area in cm2")

    p_mix = sub.add_parser("mixture", help="Solve sample/diluent masses")
    p_mix.add_argument("--sample-step", type=float, required=True)
    p_mix.add_argument("--diluent-step", type=float, required=True)
    p_mix.add_argument("--mass", type=float, required=True, help="Total mass in g")
    p_mix.add_argument("--target", type=float, default=1.0)

    p_area = sub.add_parser("area", help="Pellet area from diameter and angle")
    p_area.add_argument("--diameter", type=float, required=True, help="Diameter in cm")
    p_area.add_argument("--angle", type=float, default=0.0, help="Tilt angle in degrees")

    p_plan = sub.add_parser("plan", help="Dilution plan for sample in diluent")
    p_plan.add_argument("--settings-json", type=Path, default=None, help="JSON file with saved settings")
    p_plan.add_argument("--atom")
    p_plan.add_argument("--sample")
    p_plan.add_argument("--diluent")
    p_plan.add_argument("--edge")
    p_plan.add_argument("--mass", type=float, help="Total mass in g")
    p_plan.add_argument("--area", type=float, help="Area in cm2")
    p_plan.add_argument("--target", type=float, help="Target edge step")
    p_plan.add_argument("--step-ev", type=float, help="Energy step in eV")
    p_plan.add_argument("--window-ev", type=float, nargs=2, metavar=("LO", "HI"))
    p_plan.add_argument("--spectrum", action="store_true", help="Print the spectrum as CSV")

    return p


def _plan_settings(args: argparse.Namespace) -> DilutionSettings:
    base = DilutionSettings()
    if args.settings_json is not None:
        saved = json.loads(args.settings_json.read_text(encoding="utf-8"))
        base = settings_from_mapping(saved, base)
    overrides = {
        "atom": args.atom,
        "sample": args.sample,
        "diluent": args.diluent,
        "edge": args.edge,
        "total_mass": args.mass,
        "area": args.area,
        "target_edge_step": args.target,
        "step_eV": args.step_ev,
        "window_eV": args.window_ev,
    }
    return settings_from_mapping(overrides, base)


def _run(args: argparse.Namespace) -> None:
    if args.command == "z":
        print(get_z(args.symbol))
        return

    if args.command == "edge":
        print(json.dumps({"atom": args.atom, "edge": args.edge.upper(), "energy_keV": get_edge_energy(args.atom, args.edge)}))
        return

    if args.command == "mucal":
        res = mucal(args.element, args.energy, barns=args.barns)
        out = res.as_dict()
        out["units"] = "barns/atom" if args.barns else "cm2/g"
        out["has_data"] = has_element_data(args.element)
        print(json.dumps(out))
        return

    if args.command == "absorption":
        print(calc_absorption(args.formula, args.energy, args.area))
        return

    if args.command == "edge-step":
        print(calc_edge_step(args.formula, args.atom, args.edge, args.step, args.area))
        return

    if args.command == "mixture":
        sol = solve_mixture(args.sample_step, args.diluent_step, args.mass, args.target)
        print(
            json.dumps(
                {
                    "sample_mass_g": sol.sample_mass,
                    "diluent_mass_g": sol.diluent_mass,
                    "is_physical": sol.is_physical,
                }
            )
        )
        return

    if args.command == "area":
        print(area_from_diameter(args.diameter, args.angle))
        return

    if args.command == "plan":
        plan = plan_dilution(_plan_settings(args))
        if args.spectrum:
            sys.stdout.write(plan.to_frame().to_csv(index=False))
        else:
            print(json.dumps(plan.summary(), ensure_ascii=False))
        return


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.log_level:
        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format="%(asctime)s | %(levelname)s | %(message)s",
        )
    try:
        _run(args)
    except MucalError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()

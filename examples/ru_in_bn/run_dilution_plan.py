"""Ru K-edge pellet diluted in boron nitride.

This script walks through the calculation behind a dilution plan:
1) Pellet area from diameter and tilt angle
2) Edge step per gram of sample and diluent at the Ru K edge
3) Sample/diluent masses giving an edge step of 1.0
4) Spectrum of the pellet around the edge, checked against the target
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import numpy as np

REPO_ROOT = Path(__file__).resolve().parents[2]
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from mucalc import DilutionSettings, area_from_diameter, plan_dilution


def main() -> None:
    area = area_from_diameter(1.3, 45.0)
    settings = DilutionSettings(
        atom="Ru",
        sample="Ru",
        diluent="BN",
        total_mass=0.15,
        edge="K",
        area=area,
        window_eV=(-200.0, 1000.0),
        step_eV=1.0,
        target_edge_step=1.0,
    )
    plan = plan_dilution(settings)

    e0 = plan.edge_energy_keV
    energies = plan.energies_keV
    below = float(plan.total_abs[energies < e0 - 0.0005][-1])
    above = float(plan.total_abs[energies > e0 + 0.0005][0])

    summary = plan.summary()
    summary["area_cm2"] = area
    summary["observed_edge_step"] = above - below
    summary["total_abs_range"] = [float(np.min(plan.total_abs)), float(np.max(plan.total_abs))]

    if not 0.99 <= summary["observed_edge_step"] <= 1.01:
        raise RuntimeError(f"Unexpected edge step: {summary['observed_edge_step']}")

    print(json.dumps(summary, indent=2, ensure_ascii=False))
    print(plan.to_frame().iloc[195:206].to_string(index=False))


if __name__ == "__main__":
    main()

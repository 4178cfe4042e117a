"""Input settings for a dilution calculation.

Centralizes the defaults of the dilution form so the CLI, scripts and
stored sessions build identical :class:`DilutionSettings`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

from mucalc.core.elements import normalize_edge


@dataclass(frozen=True)
class DilutionSettings:
    """Inputs of one sample/diluent dilution calculation.

    Parameters
    ----------
    atom : str
        Absorbing element whose edge is measured.
    sample : str
        Sample formula.
    diluent : str
        Diluent formula.
    total_mass : float
        Pellet mass, sample + diluent (g).
    edge : str
        Edge of *atom* (K, L1, L2, L3, M).
    area : float
        Beam-projected pellet area (cm²).
    diameter : float
        Pellet diameter (cm), kept for display alongside *area*.
    angle : float
        Pellet tilt angle to the beam (degrees).
    window_eV : tuple[float, float]
        Spectrum window relative to the edge (eV).
    step_eV : float
        Energy step of the spectrum and half-width of the edge-step
        evaluation (eV).
    target_edge_step : float
        Requested absorbance jump of the pellet.
    """

    atom: str = "Ru"
    sample: str = "Ru"
    diluent: str = "BN"
    total_mass: float = 0.15
    edge: str = "K"
    area: float = 0.938559020685955
    diameter: float = 1.3
    angle: float = 45.0
    window_eV: tuple[float, float] = (-200.0, 1000.0)
    step_eV: float = 1.0
    target_edge_step: float = 1.0

    @property
    def step_keV(self) -> float:
        return self.step_eV / 1000.0


_FLOAT_FIELDS = ("total_mass", "area", "diameter", "angle", "step_eV", "target_edge_step")
_STR_FIELDS = ("atom", "sample", "diluent")


def _as_float(key: str, raw: Any) -> float:
    try:
        val = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Setting {key!r} must be a number, got {raw!r}") from None
    if not math.isfinite(val):
        raise ValueError(f"Setting {key!r} must be finite, got {raw!r}")
    return val


def settings_from_mapping(
    values: Mapping[str, Any],
    base: DilutionSettings | None = None,
) -> DilutionSettings:
    """Build :class:`DilutionSettings` from a plain mapping (e.g. parsed JSON).

    Keys missing from *values* keep the value of *base* (defaults when
    ``None``); keys that are not settings are ignored.  ``x_minmax`` and
    ``x_step`` are accepted as aliases of ``window_eV`` and ``step_eV``,
    ``mass`` and ``targetedgestep`` of ``total_mass`` and ``target_edge_step``.

    Raises:
        ValueError: If a value cannot be coerced.
    """
    aliases = {
        "x_minmax": "window_eV",
        "x_step": "step_eV",
        "mass": "total_mass",
        "targetedgestep": "target_edge_step",
    }
    known = {f.name for f in fields(DilutionSettings)}
    changes: dict[str, Any] = {}
    for raw_key, raw in values.items():
        key = aliases.get(raw_key, raw_key)
        if key not in known or raw is None:
            continue
        if key in _FLOAT_FIELDS:
            changes[key] = _as_float(key, raw)
        elif key in _STR_FIELDS:
            text = str(raw).strip()
            if not text:
                raise ValueError(f"Setting {key!r} must not be empty")
            changes[key] = text
        elif key == "edge":
            changes[key] = normalize_edge(raw)
        elif key == "window_eV":
            try:
                lo, hi = raw
            except (TypeError, ValueError):
                raise ValueError(f"Setting 'window_eV' must be a pair, got {raw!r}") from None
            changes[key] = (_as_float(key, lo), _as_float(key, hi))

    return replace(base or DilutionSettings(), **changes)

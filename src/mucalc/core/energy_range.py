"""Energy axis generation for absorption spectra.

Boundary rule
-------------
``n = floor((end - start) / step + 1e-9)`` and the points are
``start + i * step`` for ``i = 0 .. n``.  When the span is an exact multiple
of the step the last point is snapped onto ``end``; otherwise the sequence
stops short of ``end`` by less than one step.
"""

from __future__ import annotations

import math

import numpy as np

from mucalc.errors import InvalidRange

X_RANGE_MODES = ("atom",)

_DIVISIBILITY_TOL = 1e-9


def calc_x_range(mode: str, start_keV: float, end_keV: float, step_keV: float) -> np.ndarray:
    """Return the ordered energies (keV) from *start_keV* to *end_keV*.

    Args:
        mode: ``"atom"`` – absolute energies; callers anchor the window on an
            edge themselves (``edge + offset``).
        start_keV: First energy.
        end_keV: Last energy (inclusive when reachable in whole steps).
        step_keV: Spacing, > 0.

    Returns:
        A new 1-D float array; calling again with the same inputs gives an
        identical array.

    Raises:
        InvalidRange: Unknown mode, non-finite input, ``step <= 0`` or
            ``end < start``.
    """
    mode_n = str(mode).strip().lower()
    if mode_n not in X_RANGE_MODES:
        raise InvalidRange(f"Unknown energy range mode: {mode!r}")

    start, end, step = float(start_keV), float(end_keV), float(step_keV)
    if not (math.isfinite(start) and math.isfinite(end) and math.isfinite(step)):
        raise InvalidRange("Energy range bounds and step must be finite")
    if step <= 0:
        raise InvalidRange(f"Energy step must be > 0, got {step_keV}")
    if end < start:
        raise InvalidRange(f"End energy {end_keV} is below start energy {start_keV}")

    n = int(math.floor((end - start) / step + _DIVISIBILITY_TOL))
    energies = start + step * np.arange(n + 1, dtype=np.float64)
    if abs(energies[-1] - end) <= _DIVISIBILITY_TOL * step:
        energies[-1] = end
    return energies

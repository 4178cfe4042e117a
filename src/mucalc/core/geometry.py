"""Pellet geometry helpers.

A round pellet of diameter *d* tilted by *angle* to the beam presents the
projected area ``A = π d² / 4 × cos(angle)``.
"""

from __future__ import annotations

import math

from mucalc.errors import InvalidGeometry


def _check_angle(angle_deg: float) -> float:
    angle = float(angle_deg)
    if not math.isfinite(angle) or abs(angle) >= 90.0:
        raise InvalidGeometry(f"Tilt angle must satisfy |angle| < 90°, got {angle_deg}")
    return math.radians(angle)


def area_from_diameter(diameter_cm: float, angle_deg: float = 0.0) -> float:
    """Return the beam-projected area (cm²) of a pellet of *diameter_cm*."""
    d = float(diameter_cm)
    if not math.isfinite(d) or d <= 0:
        raise InvalidGeometry(f"Diameter must be > 0 cm, got {diameter_cm}")
    return d * d * math.pi / 4.0 * math.cos(_check_angle(angle_deg))


def diameter_from_area(area_cm2: float, angle_deg: float = 0.0) -> float:
    """Inverse of :func:`area_from_diameter`."""
    a = float(area_cm2)
    if not math.isfinite(a) or a <= 0:
        raise InvalidGeometry(f"Area must be > 0 cm², got {area_cm2}")
    return math.sqrt(a * 4.0 / math.pi / math.cos(_check_angle(angle_deg)))

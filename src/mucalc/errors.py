"""Exception types raised by the MUCAL engine.

Every error derives from :class:`MucalError`, itself a :class:`ValueError`,
so callers that only guard against ``ValueError`` still catch them.
"""

from __future__ import annotations


class MucalError(ValueError):
    """Base class for all engine errors."""


class InvalidFormula(MucalError):
    """Formula string is empty, malformed, or names an unknown element."""


class UnknownElement(MucalError):
    """Symbol or atomic number is not in the element table."""


class UnknownEdge(MucalError):
    """Edge name is not one of K, L1, L2, L3, M."""


class MissingData(MucalError):
    """Element (or one of its edges) has no usable cross-section data."""


class EnergyOutOfRange(MucalError):
    """Energy is non-positive or outside the tabulated support."""


class InvalidRange(MucalError):
    """Energy range or step cannot produce a sequence."""


class InvalidGeometry(MucalError):
    """Pellet area, diameter or tilt angle is not physical."""


class DegenerateMixture(MucalError):
    """Sample and diluent give the same edge response; the mixture is singular."""

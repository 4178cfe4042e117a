"""Tests for dilution settings and their coercion from mappings."""

import dataclasses

import pytest

from mucalc.core.settings import DilutionSettings, settings_from_mapping
from mucalc.errors import UnknownEdge


def test_defaults():
    cfg = DilutionSettings()
    assert cfg.atom == "Ru"
    assert cfg.sample == "Ru"
    assert cfg.diluent == "BN"
    assert cfg.total_mass == 0.15
    assert cfg.edge == "K"
    assert cfg.window_eV == (-200.0, 1000.0)
    assert cfg.step_keV == pytest.approx(0.001)


def test_settings_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DilutionSettings().atom = "Fe"


def test_from_mapping_with_aliases():
    cfg = settings_from_mapping(
        {
            "atom": "Fe",
            "sample": " Fe2O3 ",
            "diluent": "C6H10O5",
            "mass": "0.1",
            "edge": "k",
            "x_minmax": [-100, 500],
            "x_step": 0.5,
            "targetedgestep": 1.5,
            "plotflag": True,
        }
    )
    assert cfg.atom == "Fe"
    assert cfg.sample == "Fe2O3"
    assert cfg.total_mass == 0.1
    assert cfg.edge == "K"
    assert cfg.window_eV == (-100.0, 500.0)
    assert cfg.step_eV == 0.5
    assert cfg.target_edge_step == 1.5


def test_from_mapping_keeps_base_values():
    base = DilutionSettings(atom="Cu", sample="CuO")
    cfg = settings_from_mapping({"diluent": "SiO2", "area": None}, base)
    assert cfg.atom == "Cu"
    assert cfg.sample == "CuO"
    assert cfg.diluent == "SiO2"
    assert cfg.area == base.area


@pytest.mark.parametrize(
    "values",
    [{"total_mass": "heavy"}, {"area": float("nan")}, {"window_eV": 5}, {"sample": "  "}],
)
def test_from_mapping_invalid_values(values):
    with pytest.raises(ValueError):
        settings_from_mapping(values)


def test_from_mapping_unknown_edge():
    with pytest.raises(UnknownEdge):
        settings_from_mapping({"edge": "Q"})

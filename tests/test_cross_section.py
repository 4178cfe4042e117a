"""Tests for the per-element cross-section engine (xraydb-backed)."""

import numpy as np
import pytest

from mucalc.constants import AVOGADRO_BARN_CM2, ENERGY_MAX_KEV, ENERGY_MIN_KEV
from mucalc.core.cross_section import CrossSectionResult, cross_sections, edge_jumps, edge_segment, mucal
from mucalc.core.elements import get_edge_energy, get_element_table
from mucalc.errors import EnergyOutOfRange, MissingData, UnknownElement


# ---------------------------------------------------------------------------
# mucal
# ---------------------------------------------------------------------------
class TestMucal:
    def test_fe_at_8kev(self):
        """Fe mass attenuation at 8 keV should be roughly 300-400 cm²/g."""
        res = mucal("Fe", 8.0)
        assert isinstance(res, CrossSectionResult)
        assert 200 < res.total < 500

    def test_components_non_negative_and_sum(self):
        res = mucal("Ru", 25.0)
        assert res.photo > 0
        assert res.coherent > 0
        assert res.incoherent > 0
        assert np.isclose(res.total, res.photo + res.coherent + res.incoherent)

    def test_photo_dominates_for_heavy_element(self):
        res = mucal("Pb", 20.0)
        assert res.photo > 10 * (res.coherent + res.incoherent)

    def test_barns_conversion(self):
        cm2g = mucal("Cu", 10.0)
        barns = mucal("Cu", 10.0, barns=True)
        weight = get_element_table().lookup("Cu").atomic_weight
        assert np.isclose(barns.total, cm2g.total * weight / AVOGADRO_BARN_CM2)

    def test_as_dict_keys(self):
        assert set(mucal("O", 10.0).as_dict()) == {"photo", "coherent", "incoherent", "total"}

    def test_deterministic(self):
        assert mucal("Ru", 22.0) == mucal("Ru", 22.0)


# ---------------------------------------------------------------------------
# Edge behaviour
# ---------------------------------------------------------------------------
def _edges_in_range():
    pairs = []
    for elem in get_element_table():
        if not elem.has_data:
            continue
        for name, e0 in elem.edge_sequence:
            if ENERGY_MIN_KEV < e0 * (1 - 1e-6) and e0 * (1 + 1e-6) < ENERGY_MAX_KEV:
                pairs.append((elem.symbol, name))
    return pairs


EDGES_IN_RANGE = _edges_in_range()


class TestEdgeDiscontinuity:
    @pytest.mark.parametrize("symbol,edge", EDGES_IN_RANGE)
    def test_jump_sits_at_tabulated_edge(self, symbol, edge):
        e0 = get_edge_energy(symbol, edge)
        below = mucal(symbol, e0 * (1 - 1e-8)).photo
        on_edge = mucal(symbol, e0).photo
        above = mucal(symbol, e0 * (1 + 1e-8)).photo
        assert below < on_edge
        assert on_edge == pytest.approx(above, rel=1e-6)
        assert edge_segment(symbol, e0) == edge
        assert edge_segment(symbol, e0 * (1 - 1e-8)) != edge

    @pytest.mark.parametrize("symbol,edge", [("Ru", "K"), ("Fe", "K"), ("Pt", "L3"), ("Pt", "L2"), ("Pt", "L1")])
    def test_positive_photo_jump(self, symbol, edge):
        e0 = get_edge_energy(symbol, edge)
        below = mucal(symbol, e0 - 0.001)
        above = mucal(symbol, e0 + 0.001)
        assert above.photo > below.photo

    def test_on_edge_energy_is_post_edge(self):
        e0 = get_edge_energy("Fe", "K")
        on_edge = mucal("Fe", e0).photo
        just_above = mucal("Fe", e0 + 0.001).photo
        just_below = mucal("Fe", e0 - 0.001).photo
        assert on_edge > 5 * just_below
        assert np.isclose(on_edge, just_above, rtol=0.01)

    def test_pre_edge_label_gives_pre_edge_value(self):
        e0 = get_edge_energy("Ru", "K")
        assert edge_segment("Ru", e0 * (1 - 1e-6)) == "L1"
        near = mucal("Ru", e0 * (1 - 1e-6)).photo
        far = mucal("Ru", e0 - 0.01).photo
        assert np.isclose(near, far, rtol=0.01)
        assert near < 0.5 * mucal("Ru", e0).photo

    def test_jumps_match_edges(self):
        fe = get_element_table().lookup("Fe")
        jumps = edge_jumps(fe)
        assert [j.name for j in jumps] == [name for name, _ in fe.edge_sequence]
        k = jumps[-1]
        assert k.name == "K"
        assert k.below_eV <= k.above_eV
        assert np.isclose(k.above_eV, k.edge_eV, rtol=1e-3)

    def test_jumps_rejects_missing_data(self):
        with pytest.raises(MissingData):
            edge_jumps("U")

    def test_continuous_within_segment(self):
        e0 = get_edge_energy("Ru", "K")
        a = mucal("Ru", e0 + 0.5).total
        b = mucal("Ru", e0 + 0.5 + 1e-6).total
        assert np.isclose(a, b, rtol=1e-5)

    def test_segment_state_machine(self):
        ru = get_element_table().lookup("Ru")
        k = ru.edges["K"]
        l3 = ru.edges["L3"]
        assert edge_segment(ru, k + 0.01) == "K"
        assert edge_segment(ru, k) == "K"
        assert edge_segment(ru, k - 0.01) == "L1"
        assert edge_segment("Ru", l3 - 0.001) == "M"
        assert edge_segment("H", 0.001) is None


# ---------------------------------------------------------------------------
# cross_sections (array form)
# ---------------------------------------------------------------------------
class TestCrossSectionsArray:
    def test_matches_scalar(self):
        energies = [8.0, 10.0, 15.0]
        arr = cross_sections("Fe", energies)
        assert arr.total.shape == (3,)
        for e, total in zip(energies, arr.total):
            assert np.isclose(total, mucal("Fe", e).total)

    def test_across_edge(self):
        e0 = get_edge_energy("Ru", "K")
        arr = cross_sections("Ru", np.array([e0 - 0.001, e0, e0 + 0.001]))
        assert arr.photo[1] > arr.photo[0]
        assert np.isclose(arr.photo[1], arr.photo[2], rtol=1e-3)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class TestMucalErrors:
    @pytest.mark.parametrize("energy", [0.0, -1.0, float("nan"), float("inf"), 0.01, 5000.0])
    def test_energy_out_of_range(self, energy):
        with pytest.raises(EnergyOutOfRange):
            mucal("Fe", energy)

    def test_array_energy_rejected_by_scalar_api(self):
        with pytest.raises(EnergyOutOfRange):
            mucal("Fe", [8.0, 9.0])

    def test_missing_data_elements(self):
        for sym in ("Bi", "U", "Es"):
            with pytest.raises(MissingData):
                mucal(sym, 20.0)

    def test_unknown_element(self):
        with pytest.raises(UnknownElement):
            mucal("Xx", 10.0)

"""Tests for the process-wide element table."""

import dataclasses

import pytest
import xraydb

from mucalc.constants import ELEMENTS, EXTRA_ATOMIC_WEIGHTS, MISSING_DATA_Z
from mucalc.core.elements import (
    get_edge_energy,
    get_element_table,
    get_z,
    has_element_data,
    normalize_edge,
)
from mucalc.errors import MissingData, UnknownEdge, UnknownElement


# ---------------------------------------------------------------------------
# get_z
# ---------------------------------------------------------------------------
class TestGetZ:
    def test_known_symbols(self):
        assert get_z("H") == 1
        assert get_z("Ru") == 44
        assert get_z("Lr") == 103

    def test_bijection_onto_1_to_103(self):
        zs = [get_z(sym) for sym in ELEMENTS]
        assert sorted(zs) == list(range(1, 104))
        assert zs == list(range(1, 104))

    def test_unknown_symbol_raises(self):
        with pytest.raises(UnknownElement):
            get_z("Xx")

    def test_symbols_are_case_sensitive(self):
        with pytest.raises(UnknownElement):
            get_z("ru")


# ---------------------------------------------------------------------------
# ElementTable
# ---------------------------------------------------------------------------
class TestElementTable:
    def test_table_is_built_once(self):
        assert get_element_table() is get_element_table()

    def test_size_and_order(self):
        table = get_element_table()
        assert len(table) == 103
        assert [e.z for e in table] == list(range(1, 104))

    def test_lookup_by_z(self):
        table = get_element_table()
        assert table.lookup_z(44).symbol == "Ru"
        with pytest.raises(UnknownElement):
            table.lookup_z(104)

    def test_atomic_weights_positive(self):
        assert all(e.atomic_weight > 0 for e in get_element_table())
        assert get_element_table().lookup("O").atomic_weight == pytest.approx(15.999, rel=1e-4)

    def test_atomic_weights_from_xraydb(self):
        table = get_element_table()
        assert table.lookup("Ru").atomic_weight == pytest.approx(xraydb.atomic_mass("Ru"))
        assert table.lookup("Cf").atomic_weight == pytest.approx(xraydb.atomic_mass("Cf"))
        assert table.lookup("Es").atomic_weight == EXTRA_ATOMIC_WEIGHTS["Es"]

    def test_elements_are_immutable(self):
        ru = get_element_table().lookup("Ru")
        with pytest.raises(dataclasses.FrozenInstanceError):
            ru.z = 1
        with pytest.raises(TypeError):
            ru.edges["K"] = 1.0


# ---------------------------------------------------------------------------
# has_element_data
# ---------------------------------------------------------------------------
class TestHasElementData:
    def test_flagged_elements(self):
        for z in MISSING_DATA_Z:
            assert has_element_data(ELEMENTS[z - 1]) is False

    def test_beyond_tabulated_data(self):
        assert has_element_data("Es") is False
        assert has_element_data("Lr") is False

    def test_complete_elements(self):
        for sym in ("H", "B", "N", "O", "Fe", "Ru", "Pb"):
            assert has_element_data(sym) is True

    def test_unknown_symbol_is_false(self):
        assert has_element_data("Xx") is False


# ---------------------------------------------------------------------------
# Edge energies
# ---------------------------------------------------------------------------
class TestEdgeEnergy:
    def test_ru_k_edge(self):
        assert get_edge_energy("Ru", "K") == pytest.approx(22.117, abs=0.01)

    def test_transition_metal_k_edges(self):
        assert get_edge_energy("Fe", "K") == pytest.approx(7.112, abs=0.01)
        assert get_edge_energy("Cu", "K") == pytest.approx(8.979, abs=0.01)

    def test_edge_ordering(self):
        k, l1, l2, l3, m = (get_edge_energy("Ru", e) for e in ("K", "L1", "L2", "L3", "M"))
        assert k > l1 > l2 > l3 > m > 0

    def test_edge_name_case_insensitive(self):
        assert get_edge_energy("Ru", "l3") == get_edge_energy("Ru", "L3")
        assert normalize_edge(" k ") == "K"

    def test_unknown_edge_raises(self):
        with pytest.raises(UnknownEdge):
            get_edge_energy("Ru", "N7")

    def test_absent_edge_raises_missing_data(self):
        with pytest.raises(MissingData):
            get_edge_energy("H", "L3")

    def test_unknown_element_raises(self):
        with pytest.raises(UnknownElement):
            get_edge_energy("Xx", "K")

"""
Unit tests for the static room layout
"""
import pytest
from dataclasses import FrozenInstanceError

from svpg.config.topology import DEFAULT_ROOM_LAYOUT, Topology, load_topology
from svpg.exceptions import TopologyError


class TestCapacityLookup:

    def test_default_layout_capacities(self, topology):
        assert topology.capacity(1, 1) == 2
        assert topology.capacity(1, 3) == 3
        assert topology.capacity(6, 4) == 3

    def test_rooms_are_one_based(self, topology):
        assert topology.rooms(1) == [1, 2, 3, 4, 5, 6]
        assert topology.rooms(6) == [1, 2, 3, 4]

    def test_beds_cover_capacity(self, topology):
        assert list(topology.beds(2, 3)) == [1, 2, 3]

    def test_total_beds(self, topology):
        assert topology.total_beds() == 5 * 14 + 10

    def test_unknown_floor_fails_fast(self, topology):
        with pytest.raises(TopologyError):
            topology.capacity(7, 1)

    @pytest.mark.parametrize("room", [0, 7])
    def test_room_out_of_range_fails_fast(self, topology, room):
        with pytest.raises(TopologyError):
            topology.capacity(1, room)


class TestImmutability:

    def test_layout_cannot_be_mutated(self, topology):
        with pytest.raises(TypeError):
            topology.layout[1] = (4, 4)

    def test_attributes_are_frozen(self, topology):
        with pytest.raises(FrozenInstanceError):
            topology.layout = {}

    def test_source_mapping_changes_do_not_leak(self):
        source = {1: [2, 3]}
        topology = Topology.from_mapping(source)
        source[1].append(4)
        source[2] = [1]
        assert topology.rooms(1) == [1, 2]
        assert topology.floors() == [1]


class TestLoading:

    def test_default_when_no_override(self):
        assert load_topology("").floors() == sorted(DEFAULT_ROOM_LAYOUT)

    def test_json_override(self):
        topology = load_topology('{"1": [1, 4], "2": [2]}')
        assert topology.floors() == [1, 2]
        assert topology.capacity(1, 2) == 4

    @pytest.mark.parametrize("raw", [
        "not json", "[]", "{}", '{"1": [0]}', '{"0": [2]}',
        '{"1": 3}', '{"x": [2]}', '{"1": ["a"]}',
    ])
    def test_invalid_override_rejected(self, raw):
        with pytest.raises(TopologyError):
            load_topology(raw)

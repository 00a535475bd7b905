"""
Static floor/room/bed layout of the building.

Loaded once at startup and handed to the allocation engine; nothing mutates it
afterwards.
"""
import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple

from svpg.exceptions import TopologyError

# Beds per room, indexed by room position (2 & 3 sharing)
DEFAULT_ROOM_LAYOUT: Dict[int, Tuple[int, ...]] = {
    1: (2, 2, 3, 3, 2, 2),
    2: (2, 2, 3, 3, 2, 2),
    3: (2, 2, 3, 3, 2, 2),
    4: (2, 2, 3, 3, 2, 2),
    5: (2, 2, 3, 3, 2, 2),
    6: (2, 2, 3, 3),
}


@dataclass(frozen=True)
class Topology:
    layout: Mapping[int, Tuple[int, ...]] = field(default_factory=dict)

    def __post_init__(self):
        frozen = {}
        for floor, capacities in dict(self.layout).items():
            try:
                floor = int(floor)
            except (TypeError, ValueError):
                raise TopologyError(f"Invalid floor identifier: {floor!r}") from None
            if floor < 1:
                raise TopologyError(f"Invalid floor identifier: {floor}")
            try:
                capacities = tuple(int(c) for c in capacities)
            except (TypeError, ValueError):
                raise TopologyError(f"Room capacities on floor {floor} must be a list of integers") from None
            if any(c < 1 for c in capacities):
                raise TopologyError(f"Room capacities on floor {floor} must be positive")
            frozen[floor] = capacities
        object.__setattr__(self, "layout", MappingProxyType(frozen))

    @classmethod
    def from_mapping(cls, layout: Mapping) -> "Topology":
        return cls(layout=layout)

    def floors(self) -> List[int]:
        return sorted(self.layout)

    def rooms(self, floor: int) -> List[int]:
        return list(range(1, len(self._floor(floor)) + 1))

    def capacity(self, floor: int, room: int) -> int:
        """Number of beds in the 1-based room position on the given floor"""
        capacities = self._floor(floor)
        if not 1 <= room <= len(capacities):
            raise TopologyError(f"Room {room} does not exist on floor {floor}")
        return capacities[room - 1]

    def beds(self, floor: int, room: int) -> range:
        return range(1, self.capacity(floor, room) + 1)

    def total_beds(self) -> int:
        return sum(sum(capacities) for capacities in self.layout.values())

    def _floor(self, floor: int) -> Sequence[int]:
        try:
            return self.layout[floor]
        except KeyError:
            raise TopologyError(f"Floor {floor} does not exist") from None


def load_topology(raw_layout: str = "") -> Topology:
    """Build the topology from a JSON override, falling back to the default layout"""
    if not raw_layout:
        return Topology.from_mapping(DEFAULT_ROOM_LAYOUT)
    try:
        parsed = json.loads(raw_layout)
    except ValueError as exc:
        raise TopologyError(f"ROOM_LAYOUT is not valid JSON: {exc}") from exc
    if not isinstance(parsed, dict) or not parsed:
        raise TopologyError("ROOM_LAYOUT must be a non-empty object of floor -> capacities")
    return Topology.from_mapping(parsed)

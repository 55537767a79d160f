"""
WireData - Pure Python data model for circuit wires.

A wire joins two named terminal slots. Each endpoint's component records a
TerminalBinding pointing back at the wire and the neighbour on the other end.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Collection, Iterator, Optional

if TYPE_CHECKING:
    from .component import ComponentRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TerminalBinding:
    """What a terminal slot is connected to: the neighbour component and the wire."""

    component_id: str
    wire_id: str


@dataclass
class WireData:
    """
    Pure Python data class representing a wire connection between two component terminals.
    """

    wire_id: str
    start_component_id: str
    start_terminal: str
    end_component_id: str
    end_terminal: str

    current: float = 0.0

    def get_terminals(self) -> list[tuple[str, str]]:
        """
        Get both terminal identifiers for this wire.

        Returns:
            List of two (component_id, terminal_name) tuples.
        """
        return [(self.start_component_id, self.start_terminal), (self.end_component_id, self.end_terminal)]

    def connects_component(self, component_id: str) -> bool:
        """Check if this wire connects to the given component."""
        return self.start_component_id == component_id or self.end_component_id == component_id

    def terminal_for(self, component_id: str) -> Optional[str]:
        """Terminal this wire records on the given component (start endpoint first)."""
        if self.start_component_id == component_id:
            return self.start_terminal
        if self.end_component_id == component_id:
            return self.end_terminal
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.wire_id,
            "start_comp": self.start_component_id,
            "start_term": self.start_terminal,
            "end_comp": self.end_component_id,
            "end_term": self.end_terminal,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        return cls(
            wire_id=data["id"],
            start_component_id=data["start_comp"],
            start_terminal=data["start_term"],
            end_component_id=data["end_comp"],
            end_terminal=data["end_term"],
        )

    def __repr__(self) -> str:
        return (
            f"WireData({self.wire_id}: {self.start_component_id}[{self.start_terminal}] -> "
            f"{self.end_component_id}[{self.end_terminal}])"
        )


class WireRegistry:
    """
    Owns the wires of a circuit and keeps component terminal bindings in sync.

    Binding is last-write-wins: connecting to an occupied slot silently
    replaces the previous binding, leaving the older wire's own endpoint
    record untouched.
    """

    def __init__(self, components: "ComponentRegistry"):
        self._components = components
        self._wires: dict[str, WireData] = {}

    def connect(self, wire_id: str, comp_a: str, terminal_a: str,
                comp_b: str, terminal_b: str) -> WireData:
        """
        Record a wire and bind both endpoint slots to it.

        Reusing an existing wire id disconnects the old wire first.

        Raises:
            ValueError: If either terminal name is not a valid slot.
        """
        wire = WireData(
            wire_id=wire_id,
            start_component_id=comp_a,
            start_terminal=terminal_a,
            end_component_id=comp_b,
            end_terminal=terminal_b,
        )
        self.add(wire)
        return wire

    def add(self, wire: WireData, restored: Collection[str] = ()) -> None:
        """
        Store a wire record and bind its endpoint slots.

        Components named in ``restored`` already carry their own bindings
        and are left untouched.
        """
        from .component import validate_terminal

        validate_terminal(wire.start_terminal)
        validate_terminal(wire.end_terminal)

        if wire.wire_id in self._wires:
            self.disconnect(wire.wire_id)
        self._wires[wire.wire_id] = wire

        ends = (
            (wire.start_component_id, wire.start_terminal, wire.end_component_id),
            (wire.end_component_id, wire.end_terminal, wire.start_component_id),
        )
        for component_id, terminal, neighbour_id in ends:
            if component_id in restored:
                continue
            component = self._components.get(component_id)
            if component is not None:
                component.bind(terminal, TerminalBinding(neighbour_id, wire.wire_id))

    def disconnect(self, wire_id: str) -> bool:
        """
        Remove a wire, clearing endpoint slots that still name it.

        A slot that has since been rebound to a newer wire is left alone.
        """
        wire = self._wires.pop(wire_id, None)
        if wire is None:
            logger.warning("Wire %s not found", wire_id)
            return False

        for component_id, terminal in wire.get_terminals():
            component = self._components.get(component_id)
            if component is None:
                continue
            binding = component.terminals.get(terminal)
            if binding is not None and binding.wire_id == wire_id:
                component.terminals[terminal] = None
        return True

    def get(self, wire_id: str) -> Optional[WireData]:
        return self._wires.get(wire_id)

    def wires_for_component(self, component_id: str) -> list[str]:
        """Ids of all wires with an endpoint on the component."""
        return [w.wire_id for w in self._wires.values() if w.connects_component(component_id)]

    def clear(self) -> None:
        self._wires.clear()

    def ids(self) -> list[str]:
        return list(self._wires)

    def __contains__(self, wire_id: str) -> bool:
        return wire_id in self._wires

    def __iter__(self) -> Iterator[WireData]:
        return iter(list(self._wires.values()))

    def __len__(self) -> int:
        return len(self._wires)

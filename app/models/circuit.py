"""
CircuitModel - Central data store for circuit state.

This module contains no rendering dependencies. It holds the component and
wire registries and converts the circuit to and from its dict form.
"""

from .component import ComponentData, ComponentRegistry
from .wire import WireData, WireRegistry


class CircuitModel:
    """
    Central data store holding all circuit state.

    The wire registry writes terminal bindings into the component registry,
    so both are always created together.
    """

    def __init__(self):
        self.components = ComponentRegistry()
        self.wires = WireRegistry(self.components)

    def clear(self) -> None:
        """Remove all components and wires."""
        self.wires.clear()
        self.components.clear()

    def replace_with(self, other: "CircuitModel") -> None:
        """Take over another model's contents, keeping this object's identity."""
        self.clear()
        for component in other.components:
            self.components.add(component)
        restored = set(self.components.ids())
        for wire in other.wires:
            self.wires.add(wire, restored)

    def to_dict(self) -> dict:
        """Serialize circuit to dictionary."""
        return {
            "components": [c.to_dict() for c in self.components],
            "wires": [w.to_dict() for w in self.wires],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """
        Deserialize circuit from dictionary.

        Components saved with their terminal bindings get exactly those
        bindings back. Older files without them are bound from the wire
        list in file order, so later wires win any slot conflicts.
        """
        model = cls()
        restored = set()
        for comp_data in data.get("components", []):
            model.components.add(ComponentData.from_dict(comp_data))
            if comp_data.get("terminals") is not None:
                restored.add(comp_data["id"])
        for wire_data in data.get("wires", []):
            model.wires.add(WireData.from_dict(wire_data), restored)
        return model

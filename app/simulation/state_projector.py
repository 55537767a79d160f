"""
simulation/state_projector.py

Read-only snapshots of the analyzed circuit for renderers.

Renderers read these snapshots after each analysis pass and never write
back; all mutation goes through the CircuitController.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from models.circuit import CircuitModel
from models.component import to_json_number


@dataclass(frozen=True)
class ComponentState:
    component_id: str
    component_type: str
    current: float
    voltage: float
    powered: bool
    parameters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def is_lit(self) -> bool:
        """Display hint: powered and at or above the lighting threshold, if any."""
        threshold = self.parameters.get("threshold")
        if threshold is None:
            return False
        return self.powered and self.current >= threshold

    def to_dict(self) -> dict:
        return {
            "id": self.component_id,
            "type": self.component_type,
            "current": self.current,
            "voltage": to_json_number(self.voltage),
            "powered": self.powered,
            "parameters": {k: to_json_number(v) for k, v in self.parameters.items()},
        }


@dataclass(frozen=True)
class WireState:
    wire_id: str
    current: float

    def to_dict(self) -> dict:
        return {"id": self.wire_id, "current": self.current}


@dataclass(frozen=True)
class CircuitState:
    """Snapshot of every component and wire after an analysis pass."""

    components: Mapping[str, ComponentState]
    wires: Mapping[str, WireState]

    def component(self, component_id: str) -> ComponentState:
        return self.components[component_id]

    def wire(self, wire_id: str) -> WireState:
        return self.wires[wire_id]

    def powered_components(self) -> list[str]:
        return [cid for cid, state in self.components.items() if state.powered]

    def to_dict(self) -> dict:
        return {
            "components": [state.to_dict() for state in self.components.values()],
            "wires": [state.to_dict() for state in self.wires.values()],
        }


def project_state(model: CircuitModel) -> CircuitState:
    """Copy the model's electrical state into immutable snapshots."""
    components = {
        c.component_id: ComponentState(
            component_id=c.component_id,
            component_type=c.component_type,
            current=c.current,
            voltage=c.voltage,
            powered=c.powered,
            parameters=MappingProxyType(dict(c.parameters)),
        )
        for c in model.components
    }
    wires = {w.wire_id: WireState(wire_id=w.wire_id, current=w.current) for w in model.wires}
    return CircuitState(
        components=MappingProxyType(components),
        wires=MappingProxyType(wires),
    )

"""
ComponentData - Pure Python data model for circuit components.

This module contains no rendering dependencies. Each component owns four
fixed terminal slots (top, bottom, left, right) and the electrical state
written by the analysis pass.

Component types use lowercase names as canonical identifiers:
'resistor', 'battery', 'led', 'diode', 'bulb', 'switch', 'ammeter', 'voltmeter'
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

from .wire import TerminalBinding

logger = logging.getLogger(__name__)

COMPONENT_TYPES = [
    "resistor",
    "battery",
    "led",
    "diode",
    "bulb",
    "switch",
    "ammeter",
    "voltmeter",
]

# Terminal slots in traversal order
TERMINALS = ("top", "bottom", "left", "right")

POSITIVE_TERMINAL = "top"
NEGATIVE_TERMINAL = "bottom"

# Source voltage for newly placed batteries
DEFAULT_BATTERY_VOLTAGE = 9.0


def _resistor_defaults() -> dict:
    return {"resistance": 100.0, "unit": "Ω", "min_current": 0.0}


def _battery_defaults() -> dict:
    return {"unit": "V"}


def _led_defaults() -> dict:
    return {"threshold": 0.02, "unit": "A", "forward_voltage": 2.0}


def _diode_defaults() -> dict:
    # Small forward resistance; reverse direction blocks entirely
    return {"forward_voltage": 0.7, "resistance": 1.0}


def _bulb_defaults() -> dict:
    return {"threshold": 0.05, "unit": "A", "resistance": 10.0}


def _switch_defaults() -> dict:
    return {"closed": True}


def _ammeter_defaults() -> dict:
    return {"resistance": 0.0}


def _voltmeter_defaults() -> dict:
    return {"resistance": math.inf}


# One constructor per component kind, each returning a fresh parameter dict
DEFAULT_PARAMETERS: dict[str, Callable[[], dict]] = {
    "resistor": _resistor_defaults,
    "battery": _battery_defaults,
    "led": _led_defaults,
    "diode": _diode_defaults,
    "bulb": _bulb_defaults,
    "switch": _switch_defaults,
    "ammeter": _ammeter_defaults,
    "voltmeter": _voltmeter_defaults,
}

# Properties the editor exposes per type (switches are toggled instead)
EDITABLE_PROPERTIES = {
    "battery": ("voltage",),
    "resistor": ("resistance",),
    "bulb": ("resistance", "threshold"),
}


def default_parameters(component_type: str) -> dict:
    """Build a fresh default parameter set; unknown types get an empty one."""
    factory = DEFAULT_PARAMETERS.get(component_type)
    if factory is None:
        return {}
    return factory()


def to_json_number(value):
    """Map infinities to "inf"/"-inf" so the value survives strict JSON."""
    if isinstance(value, float) and math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


def from_json_number(value):
    """Inverse of to_json_number."""
    if value == "inf":
        return math.inf
    if value == "-inf":
        return -math.inf
    return value


def validate_terminal(terminal: str) -> None:
    """Raise ValueError if terminal is not one of the four slot names."""
    if terminal not in TERMINALS:
        raise ValueError(f"Unknown terminal '{terminal}'. Valid terminals: {', '.join(TERMINALS)}")


@dataclass
class ComponentData:
    """
    Pure Python data class representing a placed circuit component.

    ``voltage`` doubles as the source voltage for batteries, which is the
    only electrical field that survives an analysis reset.
    """

    component_id: str
    component_type: str
    parameters: dict[str, Any] = field(default_factory=dict)
    terminals: dict[str, Optional[TerminalBinding]] = field(
        default_factory=lambda: {name: None for name in TERMINALS}
    )

    # Electrical state (recomputed by every analysis pass)
    current: float = 0.0
    voltage: float = 0.0
    powered: bool = False

    @classmethod
    def create(cls, component_id: str, component_type: str,
               overrides: Optional[dict] = None) -> "ComponentData":
        """
        Build a component with its type defaults applied.

        Args:
            component_id: Unique identifier.
            component_type: One of COMPONENT_TYPES (unknown types are allowed
                and get no parameters).
            overrides: Optional parameter values replacing the defaults.
                A ``voltage`` key sets the voltage field.

        Returns:
            A new ComponentData with all terminals unbound.
        """
        component = cls(
            component_id=component_id,
            component_type=component_type,
            parameters=default_parameters(component_type),
        )
        if component_type == "battery":
            component.voltage = DEFAULT_BATTERY_VOLTAGE
        for name, value in (overrides or {}).items():
            component.set_parameter(name, value)
        return component

    @property
    def is_battery(self) -> bool:
        return self.component_type == "battery"

    @property
    def is_open_switch(self) -> bool:
        return self.component_type == "switch" and not self.parameters.get("closed", True)

    @property
    def resistance(self) -> float:
        """Configured resistance, 0 when the type has none."""
        return self.parameters.get("resistance", 0.0)

    def get_parameter(self, name: str) -> Any:
        if name == "voltage":
            return self.voltage
        return self.parameters.get(name)

    def set_parameter(self, name: str, value: Any) -> None:
        if name == "voltage":
            self.voltage = value
        else:
            self.parameters[name] = value

    def bind(self, terminal: str, binding: Optional[TerminalBinding]) -> None:
        """Bind a terminal slot, replacing whatever it held before."""
        validate_terminal(terminal)
        self.terminals[terminal] = binding

    def bound_terminals(self) -> Iterator[tuple[str, TerminalBinding]]:
        """Yield (terminal, binding) for bound slots in traversal order."""
        for name in TERMINALS:
            binding = self.terminals.get(name)
            if binding is not None:
                yield name, binding

    def reset_state(self) -> None:
        """Zero the electrical state, keeping a battery's source voltage."""
        self.current = 0.0
        self.powered = False
        if not self.is_battery:
            self.voltage = 0.0

    def to_dict(self) -> dict:
        """Serialize to the circuit file format, terminal bindings included."""
        data = {
            "id": self.component_id,
            "type": self.component_type,
            "parameters": {k: to_json_number(v) for k, v in self.parameters.items()},
            "terminals": {
                name: None if binding is None else {
                    "component": binding.component_id,
                    "wire": binding.wire_id,
                }
                for name, binding in self.terminals.items()
            },
        }
        if self.is_battery:
            data["voltage"] = self.voltage
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Rebuild a component from the file format.

        Files without a ``terminals`` entry leave every slot unbound; the
        caller binds them from the wire list instead.
        """
        overrides = {k: from_json_number(v) for k, v in data.get("parameters", {}).items()}
        if "voltage" in data:
            overrides["voltage"] = data["voltage"]
        component = cls.create(data["id"], data["type"], overrides)
        for name, binding in (data.get("terminals") or {}).items():
            if binding is not None:
                component.bind(name, TerminalBinding(binding["component"], binding["wire"]))
        return component

    def __repr__(self) -> str:
        return f"ComponentData({self.component_id}: {self.component_type})"


class ComponentRegistry:
    """
    Owns the component entities of a circuit, keyed by id.

    Iteration follows registration order, which fixes the order in which
    batteries are analyzed.
    """

    def __init__(self):
        self._components: dict[str, ComponentData] = {}

    def register(self, component_id: str, component_type: str,
                 overrides: Optional[dict] = None) -> ComponentData:
        """Create a component with type defaults and unbound terminals."""
        if component_type not in DEFAULT_PARAMETERS:
            logger.debug("Registering %s with unknown type '%s'", component_id, component_type)
        if component_id in self._components:
            # Re-registering replaces the entity and drops its bindings
            del self._components[component_id]
        component = ComponentData.create(component_id, component_type, overrides)
        self._components[component_id] = component
        logger.debug("Registered %s with values: %s", component_type, component)
        return component

    def add(self, component: ComponentData) -> None:
        self._components[component.component_id] = component

    def unregister(self, component_id: str) -> bool:
        """
        Remove a component unconditionally.

        Wires referencing the component are left in place; the caller is
        responsible for removing them.
        """
        return self._components.pop(component_id, None) is not None

    def get(self, component_id: str) -> Optional[ComponentData]:
        return self._components.get(component_id)

    def get_parameter(self, component_id: str, name: str) -> Any:
        component = self._components.get(component_id)
        if component is None:
            logger.warning("Component %s not found", component_id)
            return None
        return component.get_parameter(name)

    def set_parameter(self, component_id: str, name: str, value: Any) -> bool:
        """Write a parameter; returns False (and logs) if the id is unknown."""
        component = self._components.get(component_id)
        if component is None:
            logger.warning("Component %s not found", component_id)
            return False
        component.set_parameter(name, value)
        return True

    def batteries(self) -> list[ComponentData]:
        return [c for c in self._components.values() if c.is_battery]

    def clear(self) -> None:
        self._components.clear()

    def ids(self) -> list[str]:
        return list(self._components)

    def __contains__(self, component_id: str) -> bool:
        return component_id in self._components

    def __iter__(self) -> Iterator[ComponentData]:
        return iter(list(self._components.values()))

    def __len__(self) -> int:
        return len(self._components)

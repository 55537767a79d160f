"""
Circuit: high-level scripting API for programmatic circuit manipulation.

No rendering dependency. Wraps the model/controller/analysis layers behind
a user-friendly interface with auto-generated ids.
"""

import json
from pathlib import Path
from typing import Optional, Union

from controllers.circuit_controller import CircuitController
from controllers.file_controller import read_circuit
from models.circuit import CircuitModel
from models.component import COMPONENT_TYPES, ComponentData
from simulation.csv_exporter import export_state
from simulation.network_analyzer import AnalysisResult
from simulation.state_projector import CircuitState

# Id prefixes for auto-generated component ids
ID_PREFIXES = {
    "resistor": "R",
    "battery": "B",
    "led": "LED",
    "diode": "D",
    "bulb": "L",
    "switch": "S",
    "ammeter": "A",
    "voltmeter": "V",
}


class Circuit:
    """A scriptable circuit that can be built, analyzed, and saved programmatically.

    Args:
        model: An existing CircuitModel to wrap. If None, creates an empty circuit.
    """

    def __init__(self, model: Optional[CircuitModel] = None):
        self._controller = CircuitController(model)
        self._counters: dict[str, int] = {}
        self._wire_count = 0
        self._controller.analyze_circuit()

    # --- Factory methods ---

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Circuit":
        """Load a circuit from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist.
            json.JSONDecodeError: If the file is not valid JSON.
            ValueError: If the JSON structure is invalid.
        """
        return cls(read_circuit(path))

    # --- Component operations ---

    def add(self, component_type: str, component_id: Optional[str] = None, **params) -> str:
        """Add a component to the circuit.

        Args:
            component_type: One of the supported types (e.g. "resistor",
                "battery"). See ``Circuit.component_types``.
            component_id: Explicit id; generated from the type (R1, B1, ...)
                when omitted.
            **params: Parameter overrides, e.g. ``resistance=220`` or
                ``voltage=6``.

        Returns:
            The component id.

        Raises:
            ValueError: If the component_type is not recognized.
        """
        if component_type not in COMPONENT_TYPES:
            raise ValueError(f"Unknown component type '{component_type}'. Valid types: {', '.join(COMPONENT_TYPES)}")

        if component_id is None:
            component_id = self._next_id(component_type)
        self._controller.register_component(component_id, component_type, params or None)
        return component_id

    def _next_id(self, component_type: str) -> str:
        prefix = ID_PREFIXES[component_type]
        while True:
            count = self._counters.get(prefix, 0) + 1
            self._counters[prefix] = count
            candidate = f"{prefix}{count}"
            if candidate not in self._controller.model.components:
                return candidate

    def remove(self, component_id: str) -> None:
        """Remove a component and its connected wires."""
        self._controller.delete_component(component_id)

    def set_value(self, component_id: str, prop: str, value) -> None:
        """Change a numeric parameter (e.g. ``set_value("R1", "resistance", 220)``)."""
        self._controller.change_component_value(component_id, prop, value)

    def toggle(self, component_id: str) -> None:
        """Open or close a switch."""
        self._controller.toggle_switch(component_id)

    # --- Wire operations ---

    def connect(
        self,
        start_component: str,
        start_terminal: str,
        end_component: str,
        end_terminal: str,
        wire_id: Optional[str] = None,
    ) -> str:
        """Connect two component terminals with a wire.

        Terminals are named "top", "bottom", "left" or "right". A battery's
        positive terminal is "top" and its negative terminal is "bottom".

        Returns:
            The wire id.
        """
        if wire_id is None:
            self._wire_count += 1
            wire_id = f"W{self._wire_count}"
            while wire_id in self._controller.model.wires:
                self._wire_count += 1
                wire_id = f"W{self._wire_count}"
        self._controller.register_wire(wire_id, start_component, start_terminal, end_component, end_terminal)
        return wire_id

    def disconnect(self, wire_id: str) -> None:
        self._controller.unregister_wire(wire_id)

    # --- Analysis ---

    def analyze(self) -> AnalysisResult:
        """Re-run the analysis and return its summary."""
        return self._controller.analyze_circuit()

    def state(self) -> CircuitState:
        """Snapshot of the latest analysis."""
        return self._controller.get_state()

    def current(self, component_id: str) -> float:
        return self.state().component(component_id).current

    def voltage(self, component_id: str) -> float:
        return self.state().component(component_id).voltage

    # --- Persistence ---

    def save(self, path: Union[str, Path]) -> None:
        """Save the circuit to a JSON file."""
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model.to_dict(), f, indent=2)

    def state_to_csv(self, path: Union[str, Path]) -> None:
        """Write the latest analysis to a CSV file."""
        Path(path).write_text(export_state(self.state()), encoding="utf-8")

    # --- Properties ---

    @property
    def components(self) -> dict[str, ComponentData]:
        """All components in the circuit, keyed by ID."""
        return {c.component_id: c for c in self.model.components}

    @property
    def controller(self) -> CircuitController:
        return self._controller

    @property
    def model(self) -> CircuitModel:
        """Direct access to the underlying CircuitModel."""
        return self._controller.model

    @property
    def component_types(self) -> list[str]:
        """List of all supported component types."""
        return list(COMPONENT_TYPES)

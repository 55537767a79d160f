"""
CircuitController - Orchestrates component and wire operations.

This module contains no rendering dependencies. It owns the CircuitModel
and the NetworkAnalyzer, re-analyzes after every mutation, and notifies
views of changes through an observer pattern.
"""

import logging
import math
import re
import threading
from typing import Any, Callable, Optional

from models.circuit import CircuitModel
from models.component import ComponentData
from models.wire import WireData
from simulation.network_analyzer import AnalysisResult, NetworkAnalyzer
from simulation.state_projector import CircuitState, project_state

logger = logging.getLogger(__name__)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_value(value) -> float:
    """
    Parse a user-entered numeric value.

    Leading numeric text is used ("12 ohm" -> 12.0); anything without a
    leading number, NaN and booleans, becomes 0.
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if match is None:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number):
        return 0.0
    return number


class CircuitController:
    """
    Controller for circuit component and wire operations.

    Each instance is an independent simulation context. Mutations and
    analysis passes are serialized behind one re-entrant lock so that a
    mutate-then-reanalyze operation always completes before the next one
    starts.

    Observer events:
        component_registered (ComponentData) - A component was placed
        component_removed (str) - A component was removed (by ID)
        component_value_changed (ComponentData) - A parameter changed
        switch_toggled (ComponentData) - A switch was opened or closed
        wire_registered (WireData) - A wire was connected
        wire_removed (str) - A wire was removed (by ID)
        circuit_cleared (None) - The entire circuit was cleared
        model_loaded (None) - Circuit contents were replaced from a file
        circuit_analyzed (CircuitState) - An analysis pass finished
    """

    def __init__(self, model: Optional[CircuitModel] = None,
                 analyzer: Optional[NetworkAnalyzer] = None):
        self.model = model or CircuitModel()
        self.analyzer = analyzer or NetworkAnalyzer()
        self.last_result: Optional[AnalysisResult] = None
        self._observers: list[Callable[[str, Any], None]] = []
        self._lock = threading.RLock()

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in list(self._observers):
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError, KeyError, ValueError) as e:
                logger.error("Error notifying observer of %s: %s", event, e)

    # --- Analysis ---

    def analyze_circuit(self) -> AnalysisResult:
        """
        Recompute all electrical state from scratch.

        Safe to call repeatedly; without intervening mutations every call
        produces the same state.
        """
        with self._lock:
            logger.debug("Analyzing circuit...")
            result = self.analyzer.analyze(self.model)
            self.last_result = result
            self._notify('circuit_analyzed', project_state(self.model))
            return result

    def get_state(self) -> CircuitState:
        """Snapshot of the current electrical state."""
        with self._lock:
            return project_state(self.model)

    # --- Component operations ---

    def register_component(self, component_id: str, component_type: str,
                           overrides: Optional[dict] = None) -> ComponentData:
        """
        Place a component with its type defaults and unbound terminals.

        Returns:
            The newly created ComponentData.
        """
        with self._lock:
            component = self.model.components.register(component_id, component_type, overrides)
            self._notify('component_registered', component)
            self.analyze_circuit()
            return component

    def unregister_component(self, component_id: str) -> None:
        """
        Remove a component without touching its wires.

        Wires left behind keep pointing at the removed id and are treated as
        dead ends by the analysis. Use delete_component() to cascade.
        """
        with self._lock:
            if not self.model.components.unregister(component_id):
                logger.warning("Component %s not found", component_id)
                return
            self._notify('component_removed', component_id)
            self.analyze_circuit()

    def delete_component(self, component_id: str) -> None:
        """Remove a component together with every wire attached to it."""
        with self._lock:
            if component_id not in self.model.components:
                logger.warning("Component %s not found", component_id)
                return
            for wire_id in self.model.wires.wires_for_component(component_id):
                self.model.wires.disconnect(wire_id)
                self._notify('wire_removed', wire_id)
            self.model.components.unregister(component_id)
            self._notify('component_removed', component_id)
            self.analyze_circuit()

    def change_component_value(self, component_id: str, prop: str, value) -> None:
        """
        Update a component parameter and re-analyze.

        Unknown ids are logged and ignored without re-analysis.
        """
        with self._lock:
            component = self.model.components.get(component_id)
            if component is None:
                logger.warning("Component %s not found", component_id)
                return

            old_value = component.get_parameter(prop)
            new_value = parse_value(value)
            component.set_parameter(prop, new_value)
            logger.info("Changed %s %s: %s -> %s", component.component_type, prop, old_value, new_value)

            self._notify('component_value_changed', component)
            self.analyze_circuit()

    def toggle_switch(self, component_id: str) -> None:
        """Flip a switch between closed and open, then re-analyze."""
        with self._lock:
            component = self.model.components.get(component_id)
            if component is None or component.component_type != "switch":
                logger.warning("No switch with id %s", component_id)
                return

            closed = not component.parameters.get("closed", True)
            component.parameters["closed"] = closed
            logger.info("Switch %s is now %s", component_id, "closed" if closed else "open")

            self._notify('switch_toggled', component)
            self.analyze_circuit()

    # --- Wire operations ---

    def register_wire(self, wire_id: str, comp_a: str, terminal_a: str,
                      comp_b: str, terminal_b: str) -> WireData:
        """
        Connect two terminals, replacing any binding either slot held.

        Raises:
            ValueError: If a terminal name is not top, bottom, left or right.
        """
        with self._lock:
            wire = self.model.wires.connect(wire_id, comp_a, terminal_a, comp_b, terminal_b)
            self._notify('wire_registered', wire)
            self.analyze_circuit()
            return wire

    def unregister_wire(self, wire_id: str) -> None:
        """Remove a wire and re-analyze; unknown ids are ignored."""
        with self._lock:
            if not self.model.wires.disconnect(wire_id):
                return
            self._notify('wire_removed', wire_id)
            self.analyze_circuit()

    # --- Circuit operations ---

    def clear_circuit(self) -> None:
        """Clear the entire circuit."""
        with self._lock:
            self.model.clear()
            self._notify('circuit_cleared', None)
            self.analyze_circuit()

    def load_model(self, model: CircuitModel) -> None:
        """Replace the circuit contents in place and re-analyze."""
        with self._lock:
            self.model.replace_with(model)
            self._notify('model_loaded', None)
            self.analyze_circuit()

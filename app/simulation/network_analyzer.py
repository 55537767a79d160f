"""
NetworkAnalyzer - Series-loop evaluation of battery circuits.

Every pass starts from scratch: reset all electrical state, then for each
battery enumerate the paths from its positive (top) to its negative
(bottom) terminal and treat each eligible path as an independent series
loop. Paths sharing a component overwrite each other's results; the path
evaluated last wins. There is no current division between parallel
branches.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from models.circuit import CircuitModel
from models.component import NEGATIVE_TERMINAL, POSITIVE_TERMINAL, ComponentData

from .path_finder import PathHop, find_circuit_paths

logger = logging.getLogger(__name__)

FORWARD_TERMINALS = ("left", "top")

BLOCKED_OPEN_SWITCH = "open switch"
BLOCKED_REVERSE_DIODE = "reverse-biased diode"


@dataclass(frozen=True)
class AnalysisSettings:
    """Fixed model constants used when summing path resistance."""

    led_resistance: float = 50.0
    ammeter_resistance: float = 0.01
    voltmeter_resistance: float = 1_000_000.0
    resistance_floor: float = 0.1


@dataclass
class AnalysisResult:
    """Summary of one analysis pass."""

    batteries: list[str] = field(default_factory=list)
    paths_found: int = 0
    conducting_paths: int = 0
    blocked_paths: list[tuple[str, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when at least one path carried current."""
        return self.conducting_paths > 0


class NetworkAnalyzer:
    """
    Assigns current, voltage and powered state to every component and wire.

    Args:
        settings: Resistance constants; defaults to AnalysisSettings().
    """

    def __init__(self, settings: Optional[AnalysisSettings] = None):
        self.settings = settings or AnalysisSettings()

    def analyze(self, model: CircuitModel) -> AnalysisResult:
        """Run a full pass over the model, writing results into it."""
        result = AnalysisResult()
        self.reset(model)

        batteries = model.components.batteries()
        if not batteries:
            logger.debug("No batteries found in circuit")
            return result

        for battery in batteries:
            result.batteries.append(battery.component_id)
            self._analyze_battery(model, battery, result)

        return result

    @staticmethod
    def reset(model: CircuitModel) -> None:
        for component in model.components:
            component.reset_state()
        for wire in model.wires:
            wire.current = 0.0

    def _analyze_battery(self, model: CircuitModel, battery: ComponentData,
                         result: AnalysisResult) -> None:
        logger.debug("Analyzing circuit for battery %s, voltage: %sV",
                     battery.component_id, battery.voltage)

        paths = find_circuit_paths(
            model.components,
            battery.component_id,
            POSITIVE_TERMINAL,
            battery.component_id,
            NEGATIVE_TERMINAL,
        )
        result.paths_found += len(paths)
        if not paths:
            logger.debug("No complete circuit found for %s", battery.component_id)
            return

        for index, path in enumerate(paths, start=1):
            logger.debug("Path %d: %s", index, [hop.component_id for hop in path])

            reason = self.blocking_reason(model, path)
            if reason is not None:
                logger.debug("Path %d has %s - no current", index, reason)
                result.blocked_paths.append((battery.component_id, reason))
                continue

            total = self.path_resistance(model, path)
            current = battery.voltage / total
            logger.debug("Total resistance: %sΩ, Current: %.3fA", total, current)

            self._apply(model, path, current)
            result.conducting_paths += 1

    def blocking_reason(self, model: CircuitModel, path: list[PathHop]) -> Optional[str]:
        """Return why a path cannot conduct, or None if it is eligible."""
        for hop in path:
            component = model.components.get(hop.component_id)
            if component is None:
                continue
            if component.is_open_switch:
                return BLOCKED_OPEN_SWITCH
            if component.component_type == "diode" and not self.is_forward_biased(model, hop):
                return BLOCKED_REVERSE_DIODE
        return None

    @staticmethod
    def is_forward_biased(model: CircuitModel, hop: PathHop) -> bool:
        """
        A diode conducts when the wire feeding it lands on its left or top
        terminal. A feeding wire that no longer exists never conducts.
        """
        wire = model.wires.get(hop.wire_id)
        if wire is None:
            return False
        return wire.terminal_for(hop.component_id) in FORWARD_TERMINALS

    def component_resistance(self, component: ComponentData) -> float:
        """Resistance a component adds to a path it conducts on."""
        kind = component.component_type
        if kind in ("resistor", "bulb", "diode"):
            return component.resistance
        if kind == "led":
            return self.settings.led_resistance
        if kind == "ammeter":
            return self.settings.ammeter_resistance
        if kind == "voltmeter":
            return self.settings.voltmeter_resistance
        return 0.0

    def path_resistance(self, model: CircuitModel, path: list[PathHop]) -> float:
        """Series resistance of an eligible path, floored to avoid division by zero."""
        total = 0.0
        for hop in path:
            component = model.components.get(hop.component_id)
            if component is not None:
                total += self.component_resistance(component)
        return max(total, self.settings.resistance_floor)

    def component_voltage(self, component: ComponentData, current: float) -> float:
        kind = component.component_type
        if kind in ("resistor", "bulb"):
            return current * component.resistance
        if kind == "led":
            return component.parameters.get("forward_voltage", 0.0)
        if kind == "ammeter":
            return current * self.settings.ammeter_resistance
        if kind == "voltmeter":
            return current * self.settings.voltmeter_resistance
        return component.voltage

    def _apply(self, model: CircuitModel, path: list[PathHop], current: float) -> None:
        for hop in path:
            wire = model.wires.get(hop.wire_id)
            if wire is not None:
                wire.current = current

            component = model.components.get(hop.component_id)
            if component is None:
                continue
            component.current = current
            component.powered = True
            component.voltage = self.component_voltage(component, current)

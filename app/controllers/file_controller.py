"""
FileController - Handles circuit file I/O.

Circuits are stored as JSON descriptions of components and wires. The
analysis state is never stored; it is recomputed after loading.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from models.circuit import CircuitModel
from models.component import TERMINALS

logger = logging.getLogger(__name__)


def _validate_terminals(comp: dict) -> None:
    terminals = comp.get("terminals")
    if terminals is None:
        return
    if not isinstance(terminals, dict):
        raise ValueError(f"Component '{comp['id']}' has invalid terminals.")
    for name, binding in terminals.items():
        if name not in TERMINALS:
            raise ValueError(f"Component '{comp['id']}' has invalid terminal '{name}'.")
        if binding is None:
            continue
        if not isinstance(binding, dict) or "component" not in binding or "wire" not in binding:
            raise ValueError(f"Component '{comp['id']}' terminal '{name}' has an invalid binding.")


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    comp_ids = set()
    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        if comp["id"] in comp_ids:
            raise ValueError(f"Duplicate component id '{comp['id']}'.")
        params = comp.get("parameters", {})
        if not isinstance(params, dict):
            raise ValueError(f"Component '{comp['id']}' has invalid parameters.")
        if "voltage" in comp and not isinstance(comp["voltage"], (int, float)):
            raise ValueError(f"Component '{comp['id']}' voltage must be numeric.")
        _validate_terminals(comp)
        comp_ids.add(comp["id"])

    wire_ids = set()
    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        for key in ("id", "start_comp", "end_comp", "start_term", "end_term"):
            if key not in wire:
                raise ValueError(f"Wire #{i + 1} is missing required field '{key}'.")
        if wire["id"] in wire_ids:
            raise ValueError(f"Duplicate wire id '{wire['id']}'.")
        for end in ("start", "end"):
            if wire[f"{end}_comp"] not in comp_ids:
                # Left behind by unregistering a component; a dead end when analyzed
                logger.warning("Wire %s references unknown component '%s'", wire["id"], wire[end + "_comp"])
            if wire[f"{end}_term"] not in TERMINALS:
                raise ValueError(f"Wire #{i + 1} has invalid terminal '{wire[end + '_term']}'.")
        wire_ids.add(wire["id"])


def read_circuit(filepath) -> CircuitModel:
    """
    Read and validate a circuit file.

    Raises:
        json.JSONDecodeError: If file is not valid JSON.
        ValueError: If file structure is invalid.
        OSError: If the file cannot be read.
    """
    with open(Path(filepath), "r", encoding="utf-8") as f:
        data = json.load(f)
    validate_circuit_data(data)
    return CircuitModel.from_dict(data)


class FileController:
    """
    Manages circuit file I/O.

    Tracks the current file path for quick-save and pushes loaded circuits
    through the CircuitController so observers see a fresh analysis.
    """

    def __init__(self, circuit_ctrl):
        self.circuit_ctrl = circuit_ctrl
        self.current_file: Optional[Path] = None

    @property
    def model(self) -> CircuitModel:
        return self.circuit_ctrl.model

    def new_circuit(self) -> None:
        """Clear the circuit and reset file state."""
        self.circuit_ctrl.clear_circuit()
        self.current_file = None

    def save_circuit(self, filepath) -> None:
        """
        Save circuit to JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        data = self.model.to_dict()
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        self.current_file = filepath
        logger.info("Saved circuit to %s", filepath)

    def load_circuit(self, filepath) -> None:
        """
        Load circuit from JSON file.

        Updates the current model in place (preserving the reference so
        views stay connected) and re-analyzes.
        """
        filepath = Path(filepath)
        new_model = read_circuit(filepath)
        self.circuit_ctrl.load_model(new_model)
        self.current_file = filepath
        logger.info("Loaded circuit from %s", filepath)

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

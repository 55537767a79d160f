"""
Shared test fixtures for the circuit builder test suite.

All fixtures build pure-Python model objects (no renderer dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, simulation, controllers)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from controllers.circuit_controller import CircuitController
from models.circuit import CircuitModel


def make_model(components, wires):
    """
    Helper to build a CircuitModel with minimal boilerplate.

    Args:
        components: list of (id, type) or (id, type, overrides) tuples
        wires: list of (wire_id, comp_a, term_a, comp_b, term_b) tuples
    """
    model = CircuitModel()
    for entry in components:
        component_id, component_type = entry[0], entry[1]
        overrides = entry[2] if len(entry) > 2 else None
        model.components.register(component_id, component_type, overrides)
    for wire in wires:
        model.wires.connect(*wire)
    return model


@pytest.fixture
def controller():
    return CircuitController()


@pytest.fixture
def events():
    """Fixture that returns a list and a callback that appends events to it."""
    recorded = []

    def callback(event, data):
        recorded.append((event, data))

    return recorded, callback


@pytest.fixture
def series_resistor_model():
    """
    B1(+) -- R1 -- B1(-)

    9V battery in a closed loop with a single 100 ohm resistor.
    """
    return make_model(
        [("B1", "battery"), ("R1", "resistor")],
        [
            ("W1", "B1", "top", "R1", "left"),
            ("W2", "R1", "right", "B1", "bottom"),
        ],
    )


@pytest.fixture
def switched_model():
    """
    B1(+) -- S1 -- R1 -- B1(-)
    """
    return make_model(
        [("B1", "battery"), ("S1", "switch"), ("R1", "resistor")],
        [
            ("W1", "B1", "top", "S1", "left"),
            ("W2", "S1", "right", "R1", "left"),
            ("W3", "R1", "right", "B1", "bottom"),
        ],
    )


@pytest.fixture
def branching_model():
    """
    B1(+) -- A1 --+-- R1 (100) -- B1(-)
                  |
                  +-- R2 (50) --- B1(left)

    A1 is an ammeter shared by both loops; R1 and R2 each sit on one loop.
    """
    return make_model(
        [
            ("B1", "battery"),
            ("A1", "ammeter"),
            ("R1", "resistor", {"resistance": 100}),
            ("R2", "resistor", {"resistance": 50}),
        ],
        [
            ("W1", "B1", "top", "A1", "left"),
            ("W2", "A1", "right", "R1", "left"),
            ("W3", "R1", "right", "B1", "bottom"),
            ("W4", "A1", "bottom", "R2", "left"),
            ("W5", "R2", "right", "B1", "left"),
        ],
    )

"""
Pure Python data models for the circuit builder.

This package contains rendering-free data classes that represent circuit
elements. All models use only Python standard library types.
"""

from .circuit import CircuitModel
from .component import (
    COMPONENT_TYPES,
    DEFAULT_PARAMETERS,
    EDITABLE_PROPERTIES,
    TERMINALS,
    ComponentData,
    ComponentRegistry,
)
from .wire import TerminalBinding, WireData, WireRegistry

__all__ = [
    "CircuitModel",
    "ComponentData",
    "ComponentRegistry",
    "COMPONENT_TYPES",
    "DEFAULT_PARAMETERS",
    "EDITABLE_PROPERTIES",
    "TERMINALS",
    "TerminalBinding",
    "WireData",
    "WireRegistry",
]

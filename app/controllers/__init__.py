"""
Controllers for the circuit builder.

This package contains rendering-free controller classes that orchestrate
operations between models and views using an observer pattern.
"""

from .circuit_controller import CircuitController, parse_value
from .file_controller import FileController, read_circuit, validate_circuit_data

__all__ = [
    "CircuitController",
    "FileController",
    "parse_value",
    "read_circuit",
    "validate_circuit_data",
]

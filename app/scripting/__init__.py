"""
Circuit Builder Scripting API: programmatic circuit creation and analysis.

Usage::

    from scripting import Circuit

    circuit = Circuit()
    circuit.add("battery", "B1", voltage=9)
    circuit.add("resistor", "R1", resistance=100)
    circuit.connect("B1", "top", "R1", "left")
    circuit.connect("R1", "right", "B1", "bottom")

    print(circuit.current("R1"))   # 0.09

    circuit.save("my_circuit.json")
"""

from scripting.circuit import Circuit

__all__ = ["Circuit"]

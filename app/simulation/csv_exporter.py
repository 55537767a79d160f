"""
simulation/csv_exporter.py

Export analysis results to CSV format.
No rendering dependencies; choosing a file is the caller's responsibility.
"""

import csv
import io
from datetime import datetime


def export_state(state, circuit_name=""):
    """
    Export a projected circuit state to CSV string.

    Args:
        state: CircuitState from project_state()
        circuit_name: optional circuit filename

    Returns:
        str: CSV content
    """
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow(["# Analysis Type", "Series Loop"])
    writer.writerow(["# Date", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    if circuit_name:
        writer.writerow(["# Circuit", circuit_name])
    writer.writerow([])

    writer.writerow(["Component", "Type", "Current (A)", "Voltage (V)", "Powered"])
    for component_id, comp in sorted(state.components.items()):
        writer.writerow([component_id, comp.component_type, comp.current, comp.voltage, comp.powered])

    writer.writerow([])
    writer.writerow(["Wire", "Current (A)"])
    for wire_id, wire in sorted(state.wires.items()):
        writer.writerow([wire_id, wire.current])

    return output.getvalue()

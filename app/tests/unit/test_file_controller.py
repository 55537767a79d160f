"""Tests for circuit file validation and FileController I/O."""

import json
import math

import pytest
from controllers.circuit_controller import CircuitController
from controllers.file_controller import FileController, read_circuit, validate_circuit_data


def valid_data():
    return {
        "components": [
            {"id": "B1", "type": "battery", "parameters": {"unit": "V"}, "voltage": 6},
            {"id": "R1", "type": "resistor", "parameters": {"resistance": 60}},
        ],
        "wires": [
            {"id": "W1", "start_comp": "B1", "start_term": "top", "end_comp": "R1", "end_term": "left"},
            {"id": "W2", "start_comp": "R1", "start_term": "right", "end_comp": "B1", "end_term": "bottom"},
        ],
    }


class TestValidateCircuitData:
    def test_valid(self):
        validate_circuit_data(valid_data())  # Should not raise

    def test_not_a_dict(self):
        with pytest.raises(ValueError, match="valid circuit object"):
            validate_circuit_data([])

    def test_missing_components(self):
        with pytest.raises(ValueError, match="components"):
            validate_circuit_data({"wires": []})

    def test_component_missing_type(self):
        data = valid_data()
        del data["components"][1]["type"]
        with pytest.raises(ValueError, match="Component #2 is missing required field 'type'"):
            validate_circuit_data(data)

    def test_duplicate_component(self):
        data = valid_data()
        data["components"].append({"id": "R1", "type": "resistor"})
        with pytest.raises(ValueError, match="Duplicate component id 'R1'"):
            validate_circuit_data(data)

    def test_non_numeric_voltage(self):
        data = valid_data()
        data["components"][0]["voltage"] = "nine"
        with pytest.raises(ValueError, match="voltage must be numeric"):
            validate_circuit_data(data)

    def test_wire_unknown_component_is_accepted(self, caplog):
        data = valid_data()
        data["wires"][0]["end_comp"] = "R9"
        validate_circuit_data(data)  # Should not raise
        assert "unknown component 'R9'" in caplog.text

    def test_bad_terminal_binding(self):
        data = valid_data()
        data["components"][1]["terminals"] = {"left": {"wire": "W1"}}
        with pytest.raises(ValueError, match="invalid binding"):
            validate_circuit_data(data)

    def test_bad_terminal_name_in_bindings(self):
        data = valid_data()
        data["components"][1]["terminals"] = {"north": None}
        with pytest.raises(ValueError, match="invalid terminal 'north'"):
            validate_circuit_data(data)

    def test_wire_bad_terminal(self):
        data = valid_data()
        data["wires"][1]["start_term"] = 0
        with pytest.raises(ValueError, match="invalid terminal"):
            validate_circuit_data(data)

    def test_duplicate_wire(self):
        data = valid_data()
        data["wires"][1]["id"] = "W1"
        with pytest.raises(ValueError, match="Duplicate wire id"):
            validate_circuit_data(data)


class TestReadCircuit:
    def test_reads_model(self, tmp_path):
        path = tmp_path / "loop.json"
        path.write_text(json.dumps(valid_data()))
        model = read_circuit(path)
        assert model.components.get("B1").voltage == 6
        assert model.components.get("R1").terminals["left"].wire_id == "W1"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            read_circuit(path)


class TestFileController:
    def test_load_replaces_model_in_place(self, tmp_path, events):
        path = tmp_path / "loop.json"
        path.write_text(json.dumps(valid_data()))
        controller = CircuitController()
        original_model = controller.model
        controller.register_component("X1", "resistor")
        recorded, callback = events
        controller.add_observer(callback)

        files = FileController(controller)
        files.load_circuit(path)

        assert controller.model is original_model
        assert "X1" not in controller.model.components
        assert ("model_loaded", None) in recorded
        assert controller.get_state().component("R1").current == pytest.approx(0.1)
        assert files.current_file == path

    def test_save_then_load(self, tmp_path):
        controller = CircuitController()
        controller.register_component("B1", "battery", {"voltage": 3})
        controller.register_component("S1", "switch", {"closed": False})
        controller.register_wire("W1", "B1", "top", "S1", "left")
        files = FileController(controller)
        path = tmp_path / "saved.json"
        files.save_circuit(path)
        assert files.has_file()

        other = CircuitController()
        FileController(other).load_circuit(path)
        assert other.model.to_dict() == controller.model.to_dict()

    def test_new_circuit(self, tmp_path):
        controller = CircuitController()
        controller.register_component("R1", "resistor")
        files = FileController(controller)
        files.save_circuit(tmp_path / "c.json")
        files.new_circuit()
        assert len(controller.model.components) == 0
        assert not files.has_file()


class TestRoundTrip:
    def save_and_reload(self, controller, path):
        FileController(controller).save_circuit(path)
        other = CircuitController()
        FileController(other).load_circuit(path)
        return other

    def test_wires_to_unregistered_component_survive(self, tmp_path):
        controller = CircuitController()
        controller.register_component("B1", "battery")
        controller.register_component("R1", "resistor")
        controller.register_wire("W1", "B1", "top", "R1", "left")
        controller.register_wire("W2", "R1", "right", "B1", "bottom")
        controller.unregister_component("R1")

        other = self.save_and_reload(controller, tmp_path / "dangling.json")
        assert other.model.wires.ids() == ["W1", "W2"]
        assert "R1" not in other.model.components
        assert other.get_state().component("B1").current == 0.0

    def test_bindings_restored_exactly(self, tmp_path):
        controller = CircuitController()
        controller.register_component("B1", "battery")
        controller.register_wire("W1", "B1", "top", "R1", "left")
        controller.register_wire("W2", "R1", "right", "B1", "bottom")
        # Registered after its wires, so its own slots stay unbound
        controller.register_component("R1", "resistor")
        before = controller.get_state().to_dict()
        assert controller.get_state().component("R1").current == 0.0

        other = self.save_and_reload(controller, tmp_path / "late.json")
        assert other.get_state().to_dict() == before

    def test_reregistered_component_stays_unbound(self, tmp_path):
        controller = CircuitController()
        controller.register_component("B1", "battery")
        controller.register_component("R1", "resistor")
        controller.register_wire("W1", "B1", "top", "R1", "left")
        controller.register_wire("W2", "R1", "right", "B1", "bottom")
        controller.register_component("R1", "resistor", {"resistance": 50})
        before = controller.get_state().to_dict()

        other = self.save_and_reload(controller, tmp_path / "replaced.json")
        assert other.get_state().to_dict() == before

    def test_file_is_strict_json(self, tmp_path):
        controller = CircuitController()
        controller.register_component("V1", "voltmeter")
        path = tmp_path / "meter.json"
        FileController(controller).save_circuit(path)

        def reject(token):
            raise ValueError(token)

        data = json.loads(path.read_text(encoding="utf-8"), parse_constant=reject)
        assert data["components"][0]["parameters"]["resistance"] == "inf"
        other = self.save_and_reload(controller, tmp_path / "meter2.json")
        assert math.isinf(other.model.components.get("V1").resistance)

"""Tests for the command-line interface (app/cli.py)."""

import json
from unittest.mock import patch

import pytest
from cli import (
    REPL_BANNER,
    build_parser,
    build_repl_namespace,
    cmd_repl,
    load_circuit,
    main,
    try_load_circuit,
)
from scripting.circuit import Circuit


@pytest.fixture
def series_loop(tmp_path):
    """Create a valid battery + resistor circuit file."""
    circuit = {
        "components": [
            {"id": "B1", "type": "battery", "voltage": 9},
            {"id": "R1", "type": "resistor", "parameters": {"resistance": 100}},
        ],
        "wires": [
            {"id": "W1", "start_comp": "B1", "start_term": "top", "end_comp": "R1", "end_term": "left"},
            {"id": "W2", "start_comp": "R1", "start_term": "right", "end_comp": "B1", "end_term": "bottom"},
        ],
    }
    filepath = tmp_path / "series_loop.json"
    filepath.write_text(json.dumps(circuit))
    return str(filepath)


@pytest.fixture
def no_battery(tmp_path):
    circuit = {"components": [{"id": "R1", "type": "resistor"}], "wires": []}
    filepath = tmp_path / "no_battery.json"
    filepath.write_text(json.dumps(circuit))
    return str(filepath)


@pytest.fixture
def invalid_circuit(tmp_path):
    filepath = tmp_path / "invalid.json"
    filepath.write_text(json.dumps({"components": [{"id": "R1"}], "wires": []}))
    return str(filepath)


class TestLoadCircuit:
    def test_load_valid(self, series_loop):
        model = load_circuit(series_loop)
        assert len(model.components) == 2
        assert len(model.wires) == 2

    def test_load_missing_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            load_circuit(str(tmp_path / "nope.json"))
        assert exc_info.value.code == 1

    def test_try_load_reports_errors(self, invalid_circuit):
        model, error = try_load_circuit(invalid_circuit)
        assert model is None
        assert "missing required field 'type'" in error

    def test_try_load_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{")
        model, error = try_load_circuit(str(path))
        assert model is None
        assert "invalid JSON" in error


class TestAnalyze:
    def test_json_output(self, series_loop, capsys):
        assert main(["analyze", series_loop]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["batteries"] == ["B1"]
        assert output["conducting_paths"] == 1
        r1 = next(c for c in output["state"]["components"] if c["id"] == "R1")
        assert r1["current"] == pytest.approx(0.09)
        assert r1["powered"] is True

    def test_csv_to_file(self, series_loop, tmp_path):
        out = tmp_path / "results.csv"
        assert main(["analyze", series_loop, "--format", "csv", "--output", str(out)]) == 0
        text = out.read_text()
        assert "# Circuit,series_loop" in text
        assert "R1,resistor" in text

    def test_invalid_file_exits(self, invalid_circuit):
        with pytest.raises(SystemExit) as exc_info:
            main(["analyze", invalid_circuit])
        assert exc_info.value.code == 1


class TestValidate:
    def test_valid(self, series_loop, capsys):
        assert main(["validate", series_loop]) == 0
        assert "Circuit is valid" in capsys.readouterr().out

    def test_warns_without_battery(self, no_battery, capsys):
        assert main(["validate", no_battery]) == 0
        assert "no battery" in capsys.readouterr().out

    def test_invalid(self, invalid_circuit, capsys):
        assert main(["validate", invalid_circuit]) == 1
        assert "Circuit has errors" in capsys.readouterr().err


class TestExport:
    def test_normalizes(self, series_loop, capsys):
        assert main(["export", series_loop]) == 0
        data = json.loads(capsys.readouterr().out)
        r1 = next(c for c in data["components"] if c["id"] == "R1")
        # Defaults not present in the file are filled in
        assert r1["parameters"]["unit"] == "Ω"
        assert data["wires"][0]["id"] == "W1"


class TestRepl:
    def test_namespace(self):
        namespace = build_repl_namespace()
        assert namespace["Circuit"] is Circuit
        assert "battery" in namespace["COMPONENT_TYPES"]

    def test_namespace_preloads_circuit(self, series_loop):
        namespace = build_repl_namespace(series_loop)
        assert namespace["circuit"].current("R1") == pytest.approx(0.09)

    def test_falls_back_to_code_interact(self):
        args = build_parser().parse_args(["repl"])
        with patch.dict("sys.modules", {"IPython": None}), patch("code.interact") as interact:
            assert cmd_repl(args) == 0
        interact.assert_called_once()
        assert interact.call_args.kwargs["banner"] == REPL_BANNER


class TestParser:
    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_verbose_flag(self):
        args = build_parser().parse_args(["-v", "validate", "x.json"])
        assert args.verbose is True

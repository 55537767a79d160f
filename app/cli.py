"""
Command-line interface for the circuit builder.

Analyze, validate, and normalize circuit files without a renderer.

Usage::

    python -m cli analyze circuit.json
    python -m cli analyze circuit.json --format csv --output results.csv
    python -m cli validate circuit.json
    python -m cli export circuit.json --output normalized.json
    python -m cli repl
    python -m cli repl --load circuit.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.circuit_controller import CircuitController
from controllers.file_controller import read_circuit
from models.circuit import CircuitModel
from simulation.csv_exporter import export_state


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    path = Path(filepath)
    if not path.exists():
        return None, f"file not found: {filepath}"

    try:
        return read_circuit(path), ""
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"
    except ValueError as e:
        return None, f"invalid circuit file: {e}"
    except OSError as e:
        return None, f"cannot read {filepath}: {e}"


def load_circuit(filepath: str) -> CircuitModel:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def cmd_analyze(args: argparse.Namespace) -> int:
    """Analyze a circuit and output component and wire state."""
    controller = CircuitController(load_circuit(args.circuit))
    result = controller.analyze_circuit()
    state = controller.get_state()

    if args.format == "csv":
        output_text = export_state(state, Path(args.circuit).stem)
    else:
        output = {
            "batteries": result.batteries,
            "paths_found": result.paths_found,
            "conducting_paths": result.conducting_paths,
            "state": state.to_dict(),
        }
        output_text = json.dumps(output, indent=2)

    if args.output:
        Path(args.output).write_text(output_text, encoding="utf-8")
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output_text)

    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a circuit file without analyzing it."""
    model, error = try_load_circuit(args.circuit)
    if model is None:
        print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
        print(f"  - {error}", file=sys.stderr)
        return 1

    print(f"Circuit is valid: {args.circuit}")
    if not model.components.batteries():
        print("  Warning: circuit has no battery")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Write the circuit back out as normalized JSON."""
    model = load_circuit(args.circuit)
    output_text = json.dumps(model.to_dict(), indent=2)
    if args.output:
        Path(args.output).write_text(output_text, encoding="utf-8")
        print(f"JSON written to {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


REPL_BANNER = """\
Circuit Builder Interactive REPL
================================

Available objects:
  Circuit          - create and manipulate circuits
  COMPONENT_TYPES  - list of all supported component types

Quick start:
  c = Circuit()
  c.add("battery", "B1", voltage=9)
  c.add("resistor", "R1", resistance=100)
  c.connect("B1", "top", "R1", "left")
  c.connect("R1", "right", "B1", "bottom")
  print(c.state().to_dict())
"""


def build_repl_namespace(load_path: str | None = None) -> dict:
    """Build the namespace dict for the interactive REPL.

    Args:
        load_path: Optional path to a circuit JSON file to pre-load.
    """
    from models.component import COMPONENT_TYPES
    from scripting.circuit import Circuit

    namespace = {
        "Circuit": Circuit,
        "COMPONENT_TYPES": COMPONENT_TYPES,
    }

    if load_path:
        model, error = try_load_circuit(load_path)
        if model is None:
            print(f"Warning: could not load {load_path}: {error}", file=sys.stderr)
        else:
            namespace["circuit"] = Circuit(model)
            print(f"Loaded circuit from {load_path} as 'circuit'", file=sys.stderr)

    return namespace


def cmd_repl(args: argparse.Namespace) -> int:
    """Launch an interactive Python REPL with the scripting API."""
    namespace = build_repl_namespace(getattr(args, "load", None))

    try:
        from IPython import start_ipython

        start_ipython(argv=[], user_ns=namespace, display_banner=False)
        return 0
    except ImportError:
        pass

    import code

    code.interact(banner=REPL_BANNER, local=namespace)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="circuit-builder-cli",
        description="Circuit builder: analyze, validate, and export circuits from the command line.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log analysis details to stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # analyze
    an_parser = subparsers.add_parser("analyze", help="Analyze a circuit and output its state")
    an_parser.add_argument("circuit", help="Path to circuit JSON file")
    an_parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format (default: json)")
    an_parser.add_argument("--output", "-o", help="Write results to file instead of stdout")

    # validate
    val_parser = subparsers.add_parser("validate", help="Check a circuit file for errors")
    val_parser.add_argument("circuit", help="Path to circuit JSON file")

    # export
    exp_parser = subparsers.add_parser("export", help="Write the circuit as normalized JSON")
    exp_parser.add_argument("circuit", help="Path to circuit JSON file")
    exp_parser.add_argument("--output", "-o", help="Write output to file instead of stdout")

    # repl
    repl_parser = subparsers.add_parser("repl", help="Launch interactive Python REPL with scripting API")
    repl_parser.add_argument("--load", help="Pre-load a circuit JSON file as 'circuit' variable")

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    handlers = {
        "analyze": cmd_analyze,
        "validate": cmd_validate,
        "export": cmd_export,
        "repl": cmd_repl,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())

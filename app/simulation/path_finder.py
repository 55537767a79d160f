"""
simulation/path_finder.py

Depth-first enumeration of simple paths between two component terminals.

Nodes are components and edges are the wires bound to their terminal slots.
Two pruning rules keep the search finite:

* a component already on the current path is never entered again;
* from a component, terminals leading straight back to the component we
  just came from are skipped. The comparison is by component identity, so
  parallel wires between the same pair are not told apart.

When the component we came from is the end anchor itself (a part wired
straight across the source), only the terminal we entered through is
skipped, so that the remaining terminal can close the loop.
"""

import logging
from typing import NamedTuple

from models.component import ComponentRegistry

logger = logging.getLogger(__name__)


class PathHop(NamedTuple):
    """One step of a path: the component reached and the wire used to reach it."""

    component_id: str
    wire_id: str


def find_circuit_paths(
    components: ComponentRegistry,
    start_id: str,
    start_terminal: str,
    end_id: str,
    end_terminal: str,
) -> list[list[PathHop]]:
    """
    Enumerate every simple path from a start terminal to an end component.

    Args:
        components: Registry holding the terminal bindings.
        start_id: Component the search leaves from.
        start_terminal: Terminal slot on the start component to follow.
        end_id: Component that completes a path when reached.
        end_terminal: Nominal terminal on the end component. Reaching the
            end component through any terminal completes the path.

    Returns:
        Paths in depth-first order. Each path lists the hops from the first
        intermediate component through to the end component, inclusive.
        Missing components and unbound terminals are dead ends.
    """
    paths: list[list[PathHop]] = []
    _search(components, start_id, start_terminal, end_id, frozenset(), [], paths)
    logger.debug(
        "Found %d path(s) from %s[%s] to %s[%s]",
        len(paths), start_id, start_terminal, end_id, end_terminal,
    )
    return paths


def _search(
    components: ComponentRegistry,
    from_id: str,
    terminal: str,
    end_id: str,
    visited: frozenset,
    path: list[PathHop],
    paths: list[list[PathHop]],
) -> None:
    component = components.get(from_id)
    if component is None:
        return

    binding = component.terminals.get(terminal)
    if binding is None:
        return

    next_id = binding.component_id
    if next_id in visited:
        return

    new_path = path + [PathHop(next_id, binding.wire_id)]
    if next_id == end_id:
        paths.append(new_path)
        return

    next_component = components.get(next_id)
    if next_component is None:
        # Dangling reference left behind by a removed component
        return

    new_visited = visited | {next_id}
    for next_terminal, next_binding in next_component.bound_terminals():
        if next_binding.component_id == from_id:
            if from_id != end_id or next_binding.wire_id == binding.wire_id:
                continue
        _search(components, next_id, next_terminal, end_id, new_visited, new_path, paths)

"""Graph algorithms for layercheck."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Set


class _TarjanState:
    """Mutable state container for Tarjan's SCC algorithm."""

    def __init__(self) -> None:
        self.index = 0
        self.indices: dict[str, int] = {}
        self.low_link: dict[str, int] = {}
        self.on_stack: set[str] = set()
        self.stack: list[str] = []
        self.sccs: list[list[str]] = []


def _visit(node: str, state: _TarjanState) -> None:
    state.indices[node] = state.index
    state.low_link[node] = state.index
    state.index += 1
    state.stack.append(node)
    state.on_stack.add(node)


def _extract_scc(state: _TarjanState, root: str) -> list[str]:
    """Extract a strongly connected component from the stack."""
    scc: list[str] = []
    while state.stack:
        w = state.stack.pop()
        state.on_stack.remove(w)
        scc.append(w)
        if w == root:
            break
    if root not in scc:
        msg = (
            f"Tarjan algorithm invariant violated: root node {root!r} "
            "not found in stack during SCC extraction."
        )
        raise RuntimeError(msg)
    return scc


def _neighbors(graph: Mapping[str, Set[str]], node: str) -> Iterator[str]:
    return iter(sorted(graph.get(node, ())))


def _strongconnect(
    root: str, graph: Mapping[str, Set[str]], state: _TarjanState
) -> None:
    """Process a DFS tree rooted at ``root`` without recursion.

    Each work frame holds a node and the iterator over its remaining
    neighbors, so the Python call stack stays flat on deep graphs.
    """
    _visit(root, state)
    work: list[tuple[str, Iterator[str]]] = [(root, _neighbors(graph, root))]

    while work:
        node, neighbors = work[-1]
        descended = False
        for neighbor in neighbors:
            if neighbor not in state.indices:
                _visit(neighbor, state)
                work.append((neighbor, _neighbors(graph, neighbor)))
                descended = True
                break
            if neighbor in state.on_stack:
                state.low_link[node] = min(
                    state.low_link[node], state.indices[neighbor]
                )
        if descended:
            continue

        work.pop()
        if work:
            parent = work[-1][0]
            state.low_link[parent] = min(state.low_link[parent], state.low_link[node])

        if state.low_link[node] == state.indices[node]:
            state.sccs.append(_extract_scc(state, node))


def find_strongly_connected(graph: Mapping[str, Set[str]]) -> list[list[str]]:
    """Return every strongly connected component, singletons included.

    Nodes that only appear as edge targets are treated as sinks.
    """
    state = _TarjanState()

    for node in sorted(graph):
        if node not in state.indices:
            _strongconnect(node, graph, state)

    return state.sccs


def shortest_cycle(
    start: str, component: Set[str], graph: Mapping[str, Set[str]]
) -> list[str]:
    """Return the shortest closed path from ``start`` back to itself.

    Breadth-first over sorted neighbors inside ``component``. Every
    consecutive pair in the result, and the pair ``(result[-1], start)``,
    is an edge of ``graph``.

    Raises:
        ValueError: If no path inside the component returns to ``start``.
    """
    if start in graph.get(start, ()):
        return [start]

    parents: dict[str, str | None] = {start: None}
    queue: deque[str] = deque([start])
    while queue:
        node = queue.popleft()
        for neighbor in sorted(graph.get(node, ())):
            if neighbor not in component:
                continue
            if neighbor == start:
                path = [node]
                parent = parents[node]
                while parent is not None:
                    path.append(parent)
                    parent = parents[parent]
                path.reverse()
                return path
            if neighbor not in parents:
                parents[neighbor] = node
                queue.append(neighbor)

    msg = f"No cycle through {start!r} inside the given component"
    raise ValueError(msg)


def canonical_cycle(component: Set[str], graph: Mapping[str, Set[str]]) -> list[str]:
    """Order a cyclic component starting from its smallest identifier.

    When the shortest cycle through ``min(component)`` visits every member,
    that cycle is the order (``A -> B -> C -> A`` gives ``[A, B, C]``).
    Otherwise the component is not a single loop and its members are
    returned sorted.
    """
    path = shortest_cycle(min(component), component, graph)
    if len(path) == len(component):
        return path
    return sorted(component)


def find_cycles(graph: Mapping[str, Set[str]]) -> list[list[str]]:
    """Find cycles in a directed graph using Tarjan's algorithm.

    Args:
        graph: Mapping of node to the set of nodes it depends on

    Returns:
        One canonical node sequence per component of two or more nodes and
        per self-loop, sorted by sequence.
    """
    cycles: list[list[str]] = []
    for scc in find_strongly_connected(graph):
        node = scc[0]
        if len(scc) > 1 or node in graph.get(node, ()):
            cycles.append(canonical_cycle(set(scc), graph))
    cycles.sort()
    return cycles


__all__ = [
    "canonical_cycle",
    "find_cycles",
    "find_strongly_connected",
    "shortest_cycle",
]

"""
Graph preprocessing utilities.

This module provides the graph steps the layered layout is assembled from:
- Connected/orphan partitioning
- Cycle detection and removal
- Layer assignment
- Crossing minimization and counting

Graphs are given as a node count ``n`` plus ``(source, target)`` index
pairs. Pairs referencing indices outside ``[0, n)`` are ignored.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterable, Optional, Sequence

Pair = tuple[int, int]


def _adjacency(n: int, edges: Iterable[Pair]) -> list[list[int]]:
    adj: list[list[int]] = [[] for _ in range(n)]
    for src, tgt in edges:
        if 0 <= src < n and 0 <= tgt < n:
            adj[src].append(tgt)
    return adj


# =============================================================================
# Partitioning
# =============================================================================


def partition_connected(
    node_ids: Sequence[str], edges: Iterable[Any]
) -> tuple[list[str], list[str]]:
    """
    Split node ids into those touched by an edge and the rest.

    Args:
        node_ids: Node ids in output order
        edges: Objects with ``source_id`` and ``target_id``

    Returns:
        (connected, orphaned), each in ``node_ids`` order

    Example:
        >>> from orgchart_layout.types import GraphEdge
        >>> partition_connected(["1", "2", "3"], [GraphEdge("e", "1", "2")])
        (['1', '2'], ['3'])
    """
    touched: set[str] = set()
    for edge in edges:
        touched.add(edge.source_id)
        touched.add(edge.target_id)

    connected = [i for i in node_ids if i in touched]
    orphaned = [i for i in node_ids if i not in touched]
    return connected, orphaned


# =============================================================================
# Cycle Detection and Removal
# =============================================================================


def detect_cycle(n: int, edges: Sequence[Pair]) -> Optional[list[int]]:
    """
    Detect if a directed graph contains a cycle.

    Uses an iterative DFS. Returns the first cycle found (first node
    repeated at the end), or None if the graph is acyclic.

    Example:
        >>> detect_cycle(3, [(0, 1), (1, 2), (2, 0)])
        [0, 1, 2, 0]
    """
    adj = _adjacency(n, edges)
    # DFS states: 0=unvisited, 1=on path, 2=done
    state = [0] * n

    for start in range(n):
        if state[start]:
            continue
        state[start] = 1
        path = [start]
        stack = [(start, iter(adj[start]))]

        while stack:
            node, neighbors = stack[-1]
            for neighbor in neighbors:
                if state[neighbor] == 1:
                    return path[path.index(neighbor) :] + [neighbor]
                if state[neighbor] == 0:
                    state[neighbor] = 1
                    path.append(neighbor)
                    stack.append((neighbor, iter(adj[neighbor])))
                    break
            else:
                stack.pop()
                path.pop()
                state[node] = 2

    return None


def has_cycle(n: int, edges: Sequence[Pair]) -> bool:
    """Check if a directed graph contains any cycle."""
    return detect_cycle(n, edges) is not None


def remove_cycles(n: int, edges: Sequence[Pair]) -> tuple[list[Pair], set[int]]:
    """
    Reverse DFS back edges so the graph becomes acyclic.

    Self-loops cannot be fixed by reversal and should be filtered out first.

    Returns:
        Tuple of (new_edges, reversed_indices) where reversed_indices are the
        positions in ``edges`` that were flipped.

    Example:
        >>> new_edges, flipped = remove_cycles(2, [(0, 1), (1, 0)])
        >>> new_edges, flipped
        ([(0, 1), (0, 1)], {1})
    """
    adj: list[list[tuple[int, int]]] = [[] for _ in range(n)]
    for idx, (src, tgt) in enumerate(edges):
        if 0 <= src < n and 0 <= tgt < n:
            adj[src].append((tgt, idx))

    state = [0] * n
    reversed_indices: set[int] = set()

    for start in range(n):
        if state[start]:
            continue
        state[start] = 1
        stack = [(start, iter(adj[start]))]

        while stack:
            node, neighbors = stack[-1]
            for neighbor, idx in neighbors:
                if state[neighbor] == 1:
                    reversed_indices.add(idx)
                elif state[neighbor] == 0:
                    state[neighbor] = 1
                    stack.append((neighbor, iter(adj[neighbor])))
                    break
            else:
                stack.pop()
                state[node] = 2

    new_edges = [
        (tgt, src) if i in reversed_indices else (src, tgt) for i, (src, tgt) in enumerate(edges)
    ]
    return new_edges, reversed_indices


# =============================================================================
# Layer Assignment
# =============================================================================


def assign_layers_longest_path(n: int, edges: Sequence[Pair]) -> list[list[int]]:
    """
    Assign nodes to layers by longest path from the sources.

    Every edge points from a lower to a higher layer, and each node sits one
    layer below its deepest predecessor. Expects a DAG; nodes left on a cycle
    are put in layer 0.

    Returns:
        List of layers, each a list of node indices in ascending order.
        Layer 0 holds the sources.

    Example:
        >>> assign_layers_longest_path(4, [(0, 1), (0, 2), (1, 3), (2, 3)])
        [[0], [1, 2], [3]]
    """
    if n == 0:
        return []

    adj = _adjacency(n, edges)
    in_degree = [0] * n
    for targets in adj:
        for tgt in targets:
            in_degree[tgt] += 1

    layer = [0] * n
    queue: deque[int] = deque(i for i in range(n) if in_degree[i] == 0)

    # Kahn's order: a node is final once all its predecessors are
    while queue:
        node = queue.popleft()
        for child in adj[node]:
            layer[child] = max(layer[child], layer[node] + 1)
            in_degree[child] -= 1
            if in_degree[child] == 0:
                queue.append(child)

    layers: list[list[int]] = [[] for _ in range(max(layer) + 1)]
    for i in range(n):
        layers[layer[i]].append(i)
    return layers


# =============================================================================
# Crossing Minimization
# =============================================================================


def minimize_crossings_barycenter(
    layers: list[list[int]],
    edges: Sequence[Pair],
    iterations: int = 24,
) -> list[list[int]]:
    """
    Reorder layers to reduce edge crossings with the barycenter heuristic.

    Alternates downward sweeps (order by mean position of predecessors) and
    upward sweeps (mean position of successors). Sorting is stable, so ties
    keep their previous order and the result is deterministic.

    Args:
        layers: Layers from assign_layers_longest_path()
        edges: Directed index pairs
        iterations: Number of sweeps

    Returns:
        New list of reordered layers
    """
    result = [list(layer) for layer in layers]
    if len(result) < 2:
        return result

    members = {node for layer in result for node in layer}
    outgoing: dict[int, list[int]] = {node: [] for node in members}
    incoming: dict[int, list[int]] = {node: [] for node in members}
    for src, tgt in edges:
        if src in members and tgt in members:
            outgoing[src].append(tgt)
            incoming[tgt].append(src)

    position: dict[int, int] = {}
    for layer in result:
        for pos, node in enumerate(layer):
            position[node] = pos

    def order_layer(layer_idx: int, adj: dict[int, list[int]]) -> None:
        barycenters: list[tuple[float, int]] = []
        for node in result[layer_idx]:
            neighbors = adj[node]
            if neighbors:
                value = sum(position[nb] for nb in neighbors) / len(neighbors)
            else:
                value = float(position[node])
            barycenters.append((value, node))

        barycenters.sort(key=lambda item: item[0])
        result[layer_idx] = [node for _, node in barycenters]
        for pos, (_, node) in enumerate(barycenters):
            position[node] = pos

    for i in range(max(1, int(iterations))):
        if i % 2 == 0:
            for layer_idx in range(1, len(result)):
                order_layer(layer_idx, incoming)
        else:
            for layer_idx in range(len(result) - 2, -1, -1):
                order_layer(layer_idx, outgoing)

    return result


def count_crossings(layers: list[list[int]], edges: Sequence[Pair]) -> int:
    """
    Count edge crossings between layers of a layered drawing.

    Two edges between the same pair of layers cross when their endpoint
    orders disagree.
    """
    node_layer: dict[int, int] = {}
    node_pos: dict[int, int] = {}
    for layer_idx, layer in enumerate(layers):
        for pos, node in enumerate(layer):
            node_layer[node] = layer_idx
            node_pos[node] = pos

    layer_edges: dict[tuple[int, int], list[tuple[int, int]]] = {}
    for src, tgt in edges:
        if src not in node_layer or tgt not in node_layer:
            continue
        l1, l2 = node_layer[src], node_layer[tgt]
        if l1 > l2:
            l1, l2 = l2, l1
            src, tgt = tgt, src
        layer_edges.setdefault((l1, l2), []).append((node_pos[src], node_pos[tgt]))

    total = 0
    for pairs in layer_edges.values():
        for i, (s1, t1) in enumerate(pairs):
            for s2, t2 in pairs[i + 1 :]:
                if (s1 < s2 and t1 > t2) or (s1 > s2 and t1 < t2):
                    total += 1
    return total


__all__ = [
    "partition_connected",
    "detect_cycle",
    "has_cycle",
    "remove_cycles",
    "assign_layers_longest_path",
    "minimize_crossings_barycenter",
    "count_crossings",
]

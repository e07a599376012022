"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Array-scan Dijkstra over the symmetric (undirected) view of the graph.

Records a Step at:
  1. Initialise distances
  2. Each selection of the closest unvisited vertex  →  "select"
  3. Marking that vertex visited                     →  "visited"
  4. Each successful relaxation of a neighbour       →  "update"
  5. Loop finished (or no finite vertex left)        →  "complete"

Selection is a linear scan in ascending vertex order with a strict `<`,
so ties go to the lowest index.  No heap: the visualizer shows the scan.

Correctness note: Dijkstra requires non-negative weights.
Negative weights are a caller contract violation and are not checked.
"""

import logging
from typing import Dict, List, Optional, Tuple

from graph import Graph
from algorithms.step import INF, ShortestPathStep, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source):",                # 0
    "    dist ← [∞] * V;  dist[source] ← 0",       # 1
    "    visited ← [false] * V",                   # 2
    "    repeat V times:",                         # 3
    "        u ← unvisited vertex with min dist",  # 4
    "        if dist[u] = ∞: break",               # 5
    "        visited[u] ← true",                   # 6
    "        for (v, w) in adj(u), not visited:",  # 7
    "            if dist[u] + w < dist[v]:",       # 8
    "                dist[v] ← dist[u] + w",       # 9
    "                prev[v] ← u",                 # 10
    "    return dist, prev",                       # 11
]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, source: int) -> Trace:
    n = graph.vertex_count
    adj = graph.adjacency(symmetric=True)

    distances: List[float]          = [INF] * n
    visited:   List[bool]           = [False] * n
    previous:  List[Optional[int]]  = [None] * n
    distances[source] = 0

    tb = TraceBuilder("dijkstra", ShortestPathStep)

    def record(description: str, line: int, **extra) -> None:
        tb.add(
            description,
            pseudocode_line=line,
            distances=distances,
            visited=visited,
            previous=previous,
            shortest_paths=shortest_paths(distances, previous),
            **extra,
        )

    record(f"Initialize: Set distance to source ({source}) as 0, all others as ∞", 1)

    for _ in range(n):
        min_distance = INF
        min_vertex   = -1
        for v in range(n):
            if not visited[v] and distances[v] < min_distance:
                min_distance = distances[v]
                min_vertex   = v

        if min_vertex == -1:
            break

        record(
            f"Select vertex {min_vertex} with minimum distance {distances[min_vertex]}",
            4,
            selected_vertex=min_vertex,
        )

        visited[min_vertex] = True
        record(f"Mark vertex {min_vertex} as visited", 6, current_vertex=min_vertex)

        for edge in adj[min_vertex]:
            nbr = edge.target
            if visited[nbr]:
                continue
            new_distance = distances[min_vertex] + edge.weight
            if new_distance < distances[nbr]:
                distances[nbr] = new_distance
                previous[nbr]  = min_vertex
                record(
                    f"Update distance to vertex {nbr}: {new_distance} (via vertex {min_vertex})",
                    9,
                    current_vertex=min_vertex,
                    current_edge=edge,
                )

    record("Dijkstra's algorithm complete! All shortest paths found.", 11)

    trace = tb.build()
    logger.debug("dijkstra from %d: %d steps", source, len(trace))
    return trace


# ---------------------------------------------------------------------------
def shortest_paths(
    distances: List[float],
    previous: List[Optional[int]],
) -> Dict[int, Tuple[int, ...]]:
    """Path from the source to every reached vertex, walking `previous`."""
    paths: Dict[int, Tuple[int, ...]] = {}
    for v, d in enumerate(distances):
        if d == INF:
            continue
        path, cur = [], v
        while cur is not None:
            path.append(cur)
            cur = previous[cur]
        path.reverse()
        paths[v] = tuple(path)
    return paths

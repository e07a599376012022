"""
prim.py — Prim's Minimum Spanning Tree
=======================================
Grows a single tree from a start vertex, always taking the cheapest edge
that crosses the cut between the tree and the rest (the "frontier").

Records a Step for:
  1. The start vertex
  2. The cheapest frontier edge chosen
  3. Adding its far vertex to the tree
  4. Completion with the total weight

The frontier is rebuilt from scratch every round: visited vertices in
ascending order, each vertex's incident edges in stored order, then a
stable sort by weight.  Ties therefore go to the edge discovered first.
An empty frontier before V-1 edges means the graph is disconnected; the
trace then covers only the start vertex's component.
"""

import logging
from typing import List

from graph import Edge, Graph
from algorithms.step import MstStep, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Prim(graph, start):",                     # 0
    "    visited ← {start}",                       # 1
    "    while |mst| < V-1:",                      # 2
    "        frontier ← edges leaving visited",    # 3
    "        if frontier empty: break",            # 4
    "        (u, v, w) ← min(frontier)",           # 5
    "        visited.add(v)",                      # 6
    "        mst.add((u, v, w))",                  # 7
    "    return mst",                              # 8
]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def prim(graph: Graph, start: int = 0) -> Trace:
    n   = graph.vertex_count
    adj = graph.adjacency(symmetric=True)

    visited:   List[bool] = [False] * n
    mst_edges: List[Edge] = []
    total_weight = 0
    visited[start] = True

    def frontier() -> List[Edge]:
        available = [
            edge
            for v in range(n) if visited[v]
            for edge in adj[v] if not visited[edge.target]
        ]
        return sorted(available, key=lambda e: e.weight)

    tb = TraceBuilder("prim", MstStep)

    def record(description: str, line: int, **extra) -> None:
        tb.add(
            description,
            pseudocode_line=line,
            visited=visited,
            mst_edges=mst_edges,
            total_weight=total_weight,
            **extra,
        )

    record(f"Start with vertex {start}", 1, current_vertex=start, frontier=frontier())

    while len(mst_edges) < n - 1:
        available = frontier()
        if not available:
            break

        min_edge = available[0]
        record(
            f"Find minimum weight edge: ({min_edge.source}, {min_edge.target}) "
            f"with weight {min_edge.weight}",
            5,
            min_edge=min_edge,
            current_edge=min_edge,
            frontier=available,
        )

        visited[min_edge.target] = True
        mst_edges.append(min_edge)
        total_weight += min_edge.weight
        record(
            f"Add vertex {min_edge.target} to MST. "
            f"Edge ({min_edge.source}, {min_edge.target}) added.",
            7,
            current_vertex=min_edge.target,
            current_edge=min_edge,
            frontier=frontier(),
        )

    record(f"Minimum Spanning Tree complete! Total weight: {total_weight}", 8)

    trace = tb.build()
    logger.debug("prim from %d: weight %d, %d steps", start, total_weight, len(trace))
    return trace

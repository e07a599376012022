"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The single-source shortest-path algorithm that handles NEGATIVE edge
weights and reports negative cycles instead of looping forever.

Structure:
  • Up to V-1 passes relaxing every edge, in input-list order.
  • A pass with no relaxation ends the passes early.
  • One more "detector" pass: any edge that still relaxes proves a
    negative cycle reachable from the source.

Records a Step for:
  1. Initialisation
  2. Start of each pass
  3. Each successful relaxation (failed ones are not shown)
  4. Early termination
  5. Start of the detector pass
  6. Negative cycle found  OR  no negative cycle

Edges are taken as directed, exactly as listed.
"""

import logging
from typing import List, Optional

from graph import Graph
from algorithms.step import INF, ShortestPathStep, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, source):",             # 0
    "    dist ← [∞] * V;  dist[source] ← 0",       # 1
    "    for i in 1 … V-1:",                       # 2
    "        for each edge (u, v, w):",            # 3
    "            if dist[u] + w < dist[v]:",       # 4
    "                dist[v] ← dist[u] + w",       # 5
    "                prev[v] ← u",                 # 6
    "        if nothing relaxed: break",           # 7
    "    for each edge (u, v, w):",                # 8
    "        if dist[u] + w < dist[v]:",           # 9
    "            return NEGATIVE CYCLE",           # 10
    "    return dist, prev",                       # 11
]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def bellman_ford(graph: Graph, source: int) -> Trace:
    n     = graph.vertex_count
    edges = list(graph.edges)

    distances: List[float]         = [INF] * n
    previous:  List[Optional[int]] = [None] * n
    distances[source] = 0
    relaxation_count = 0
    iteration        = 0

    tb = TraceBuilder("bellman_ford", ShortestPathStep)

    def record(description: str, line: int, **extra) -> None:
        tb.add(
            description,
            pseudocode_line=line,
            distances=distances,
            previous=previous,
            relaxation_count=relaxation_count,
            iteration=iteration,
            **extra,
        )

    record(f"Initialize: Set distance to source ({source}) as 0, all others as ∞", 1)

    # ==============================================================
    # MAIN PASSES
    # ==============================================================
    for iteration in range(1, n):
        relaxed = False
        record(f"Iteration {iteration}: Relax all edges", 2)

        for edge in edges:
            u, v = edge.source, edge.target
            if distances[u] != INF and distances[u] + edge.weight < distances[v]:
                distances[v] = distances[u] + edge.weight
                previous[v]  = u
                relaxed = True
                relaxation_count += 1
                record(
                    f"Relax edge ({u}, {v}): Update distance to {v} = {distances[v]}",
                    5,
                    current_edge=edge,
                    current_vertex=u,
                )

        if not relaxed:
            record(f"No edges relaxed in iteration {iteration}. Algorithm can terminate early.", 7)
            break

    # ==============================================================
    # NEGATIVE-CYCLE DETECTOR
    # ==============================================================
    record("Check for negative cycles by attempting one more relaxation", 8)

    for edge in edges:
        u, v = edge.source, edge.target
        if distances[u] != INF and distances[u] + edge.weight < distances[v]:
            record(
                f"Negative cycle detected! Edge ({u}, {v}) can still be relaxed.",
                10,
                current_edge=edge,
                current_vertex=u,
                has_negative_cycle=True,
            )
            logger.debug("bellman_ford from %d: negative cycle via %s", source, edge.id)
            return tb.build()

    record("No negative cycle found. All shortest paths are correct!", 11)

    trace = tb.build()
    logger.debug("bellman_ford from %d: %d steps", source, len(trace))
    return trace


# ---------------------------------------------------------------------------
def has_negative_cycle(trace: Trace) -> bool:
    """The flag lives on the final step."""
    last = trace.last
    return bool(last is not None and last.has_negative_cycle)

"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The signature "matrix algorithm".  Every step carries the full V×V
distance matrix and next-hop matrix so the UI can render the live grid.

Structure:
  for k in vertices:          ← "intermediate" vertex
      for i in vertices:
          for j in vertices, j ≠ i:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]
                  next[i][j] = next[i][k]

Records a Step for:
  1. Initialisation (edge list → matrix), k = -1
  2. Start of each k-round
  3. Each (i, j) update that actually changes the matrix
  4. Completion, k = V

"Infinity" is a finite sentinel (config.FLOYD_WARSHALL_INF) so that it can
take part in the additions above; cells at or above it render as ∞.
Edges are directed; negative weights are allowed, negative cycles are not
detected.
"""

import logging
from typing import List, Optional

import config
from graph import Graph
from algorithms.step import ShortestPathStep, Trace, TraceBuilder


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph):",                   # 0
    "    dist ← edge weights, 0 on diagonal, ∞",   # 1
    "    next[u][v] ← v for each edge (u, v)",     # 2
    "    for k in 0 … V-1:",                       # 3
    "        for i in 0 … V-1:",                   # 4
    "            for j in 0 … V-1, j ≠ i:",        # 5
    "                if dist[i][k]+dist[k][j]",    # 6
    "                      < dist[i][j]:",         # 7
    "                    dist[i][j] = …",          # 8
    "                    next[i][j] = next[i][k]", # 9
    "    return dist, next",                       # 10
]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def floyd_warshall(graph: Graph, inf: int = config.FLOYD_WARSHALL_INF) -> Trace:
    n = graph.vertex_count

    dist: List[List[int]]           = [[inf] * n for _ in range(n)]
    nxt:  List[List[Optional[int]]] = [[None] * n for _ in range(n)]

    for i in range(n):
        dist[i][i] = 0

    for edge in graph.edges:
        dist[edge.source][edge.target] = edge.weight
        nxt[edge.source][edge.target]  = edge.target

    tb = TraceBuilder("floyd_warshall", ShortestPathStep)

    def record(description: str, line: int, k: int, **extra) -> None:
        tb.add(description, pseudocode_line=line, matrix=dist, next_hop=nxt, k=k, **extra)

    record("Initialize: Set distances from edges, diagonal to 0, others to ∞", 1, k=-1)

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in range(n):
        record(f"Iteration k={k}: Using vertex {k} as intermediate vertex", 3, k=k)

        for i in range(n):
            for j in range(n):
                if i == j:
                    continue
                via = dist[i][k] + dist[k][j]
                if via < dist[i][j]:
                    old = dist[i][j]
                    dist[i][j] = via
                    nxt[i][j]  = nxt[i][k]
                    shown = "∞" if old >= inf else old
                    record(
                        f"Update path from {i} to {j} via {k}: {shown} → {via}",
                        8,
                        k=k,
                        i=i,
                        j=j,
                        improvement=True,
                    )

    record("Floyd-Warshall complete! All-pairs shortest paths found.", 10, k=n)

    trace = tb.build()
    logger.debug("floyd_warshall on %d vertices: %d steps", n, len(trace))
    return trace


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def reconstruct_path(next_hop, i: int, j: int) -> List[int]:
    """Vertices on the shortest i → j path, or [] when j is unreachable."""
    if i == j:
        return [i]
    if next_hop[i][j] is None:
        return []
    path = [i]
    cur = i
    safety = len(next_hop) + 1   # prevent infinite loop on a negative cycle
    while cur != j and safety > 0:
        cur = next_hop[cur][j]
        if cur is None:
            return []
        path.append(cur)
        safety -= 1
    return path if cur == j else []


def distance_row(trace: Trace, source: int, inf: int = config.FLOYD_WARSHALL_INF) -> List[float]:
    """Final distances from `source`, with sentinel cells turned back into math.inf."""
    last = trace.last
    if last is None:
        return []
    return [float("inf") if d >= inf else d for d in last.matrix[source]]

"""
kruskal.py — Kruskal's Minimum Spanning Tree
=============================================
Greedy over edges: take the cheapest edge that joins two different
components, tracked with a union-find forest.

Records a Step for:
  1. The sorted edge list
  2. Examining each edge
  3. Accepting it (components merged)  OR  rejecting it (would close a cycle)
  4. Completion with the total weight

The sort is stable, so equal weights keep their input-list order.  A
disconnected graph yields a spanning forest: the loop ends when V-1 edges
are accepted or the edges run out.
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
    "def Kruskal(graph):",                         # 0
    "    sort edges by weight",                    # 1
    "    make_set(v) for v in V",                  # 2
    "    for (u, v, w) in sorted edges:",          # 3
    "        if find(u) ≠ find(v):",               # 4
    "            union(u, v)",                     # 5
    "            mst.add((u, v, w))",              # 6
    "        else: reject (cycle)",                # 7
    "        if |mst| = V-1: break",               # 8
    "    return mst",                              # 9
]


# ---------------------------------------------------------------------------
# Union-find
# ---------------------------------------------------------------------------
class UnionFind:
    """Disjoint-set forest with path compression and union by rank."""

    def __init__(self, size: int):
        self.parent: List[int] = list(range(size))
        self.rank:   List[int] = [0] * size

    def find(self, i: int) -> int:
        if self.parent[i] != i:
            self.parent[i] = self.find(self.parent[i])
        return self.parent[i]

    def union(self, x: int, y: int) -> bool:
        """Merge the sets of x and y.  Returns False if already joined."""
        xroot = self.find(x)
        yroot = self.find(y)
        if xroot == yroot:
            return False
        if self.rank[xroot] < self.rank[yroot]:
            self.parent[xroot] = yroot
        elif self.rank[xroot] > self.rank[yroot]:
            self.parent[yroot] = xroot
        else:
            self.parent[yroot] = xroot
            self.rank[xroot] += 1
        return True


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def kruskal(graph: Graph) -> Trace:
    n            = graph.vertex_count
    sorted_edges = sorted(graph.edges, key=lambda e: e.weight)
    forest       = UnionFind(n)
    mst_edges: List[Edge] = []
    total_weight = 0

    tb = TraceBuilder("kruskal", MstStep)

    def record(description: str, line: int, **extra) -> None:
        tb.add(
            description,
            pseudocode_line=line,
            sorted_edges=sorted_edges,
            mst_edges=mst_edges,
            parent=forest.parent,
            total_weight=total_weight,
            **extra,
        )

    record("Initialize: Sort all edges by weight in ascending order", 1)

    for edge in sorted_edges:
        u, v = edge.source, edge.target
        # find() compresses paths, so roots are taken before the snapshot
        root_u, root_v = forest.find(u), forest.find(v)
        record(
            f"Examining edge ({u}, {v}) with weight {edge.weight}",
            4,
            current_edge=edge,
        )

        if root_u != root_v:
            forest.union(root_u, root_v)
            mst_edges.append(edge)
            total_weight += edge.weight
            record(
                f"Edge ({u}, {v}) added to MST. No cycle formed.",
                6,
                current_edge=edge,
                is_valid_edge=True,
            )
        else:
            record(
                f"Edge ({u}, {v}) rejected. Would create a cycle.",
                7,
                current_edge=edge,
            )

        if len(mst_edges) == n - 1:
            break

    record(f"Minimum Spanning Tree complete! Total weight: {total_weight}", 9)

    trace = tb.build()
    logger.debug("kruskal on %d vertices: weight %d, %d steps", n, total_weight, len(trace))
    return trace

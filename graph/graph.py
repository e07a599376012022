"""
graph.py — Graph Container, Parsers & Generator
================================================
The input record every graph engine consumes.

Responsibilities:
  1. Hold a vertex count and an ordered edge list      (immutable)
  2. Adjacency views                                   (symmetric / directed)
  3. Validation for the input layer                    (validate)
  4. Import from text edge list / adjacency matrix     (text → graph)
  5. Serialisation round-trip                          (to_dict / from_dict)
  6. Seeded random generation                          (tests, demos)

Design decisions:
  - Vertices are the integers 0 … vertex_count-1; there is no Node object.
  - `edges` is a tuple.  Engines read it in input order (Bellman-Ford relaxes
    "in list order", Kruskal's stable sort keeps list order on ties) so the
    order is part of the input, and nobody may reorder it in place.
  - The adjacency view is derived on demand and never cached on the object:
    engines take the graph by value and build their own view.
"""

import random
import re
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from graph.edge import Edge


# "0 1 4", "0-1:4", "0 -> 1 (4)", "0 → 1, -2", "0 1"
_EDGE_LINE = re.compile(
    r"^(\d+)\s*(?:->|→|-|\s)\s*(\d+)"
    r"(?:\s*[:,(]?\s*(-?\d+)\s*\)?)?$"
)


class GraphError(ValueError):
    """Raised by the input layer when a graph description is unusable."""


class Graph:
    """
    Attributes:
        vertex_count : Number of vertices (>= 1).
        edges        : Tuple of Edge in input order.
        directed     : Graph-level flag; engines pick their own view regardless.
    """

    __slots__ = ("vertex_count", "edges", "directed")

    def __init__(
        self,
        vertex_count: int,
        edges: Iterable[Edge] = (),
        directed: bool = False,
    ):
        self.vertex_count: int              = vertex_count
        self.edges:        Tuple[Edge, ...] = tuple(edges)
        self.directed:     bool             = directed

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def adjacency(self, symmetric: Optional[bool] = None) -> List[List[Edge]]:
        """
        `adj[v]` lists the edges leaving v, each oriented so `edge.source == v`.

        In the symmetric view every input edge appears twice: as given under
        its source and reversed under its target, in input-list order.
        """
        if symmetric is None:
            symmetric = not self.directed
        adj: List[List[Edge]] = [[] for _ in range(self.vertex_count)]
        for edge in self.edges:
            adj[edge.source].append(edge)
            if symmetric:
                adj[edge.target].append(edge.reversed())
        return adj

    # ==================================================================
    # VALIDATION (input layer)
    # ==================================================================
    def validate(self) -> "Graph":
        """Raise GraphError if the graph breaks a model invariant; return self."""
        if not isinstance(self.vertex_count, int) or self.vertex_count < 1:
            raise GraphError(f"vertex_count must be a positive integer, got {self.vertex_count!r}")
        seen: Set[Tuple[int, int]] = set()
        for edge in self.edges:
            for end in (edge.source, edge.target):
                if not isinstance(end, int) or not 0 <= end < self.vertex_count:
                    raise GraphError(f"{edge!r}: endpoint {end!r} outside [0, {self.vertex_count})")
            if not isinstance(edge.weight, int) or isinstance(edge.weight, bool):
                raise GraphError(f"{edge!r}: weight must be an integer")
            key = (edge.source, edge.target)
            if key in seen:
                raise GraphError(f"duplicate edge {edge.source}-{edge.target}")
            seen.add(key)
        return self

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "vertex_count": self.vertex_count,
            "directed":     self.directed,
            "edges":        [[e.source, e.target, e.weight] for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        """
        Accepts edges either as [source, target, weight] triples or as
        {"source", "target", "weight"} dicts.
        """
        if "vertex_count" not in data:
            raise GraphError("missing 'vertex_count'")
        edges = []
        for raw in data.get("edges", []):
            if isinstance(raw, dict) and "source" in raw and "target" in raw:
                edges.append(Edge.from_dict(raw))
            elif isinstance(raw, (list, tuple)) and len(raw) in (2, 3):
                edges.append(Edge(*raw))
            else:
                raise GraphError(f"cannot read edge {raw!r}")
        return cls(data["vertex_count"], edges, directed=data.get("directed", False))

    # ---------- Import from Edge List (text) ----------
    @classmethod
    def from_edge_list(cls, text: str, vertex_count: Optional[int] = None, directed: bool = False) -> "Graph":
        """
        Parse one edge per line.

        Supported formats:
            0 1 4          → edge 0–1 weight 4
            0-1:4          → same
            0 -> 1 (4)     → same, arrow syntax
            0 1            → weight 1

        Blank lines and lines starting with '#' are ignored.  When
        vertex_count is omitted it is one more than the largest endpoint.
        """
        edges: List[Edge] = []
        for lineno, line in enumerate(text.strip().splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            match = _EDGE_LINE.match(line)
            if match is None:
                raise GraphError(f"line {lineno}: expected 'source target [weight]', got {line!r}")
            src, tgt, weight = match.groups()
            edges.append(Edge(int(src), int(tgt), int(weight) if weight is not None else 1))

        if vertex_count is None:
            vertex_count = 1 + max((max(e.source, e.target) for e in edges), default=0)
        return cls(vertex_count, edges, directed=directed)

    # ---------- Import from Adjacency Matrix (text) ----------
    @classmethod
    def from_adjacency_matrix(cls, text: str, directed: bool = False) -> "Graph":
        """
        Parse a whitespace / comma-separated adjacency matrix.

        Example:
            0 4 0 0
            4 0 8 0
            0 8 0 7
            0 0 7 0

        0 / inf / - = no edge.  Any other value = weight.  For an undirected
        graph only the upper triangle is read.
        """
        rows_raw = [r.strip() for r in text.strip().splitlines() if r.strip()]
        matrix: List[List[Optional[int]]] = []
        for row in rows_raw:
            values: List[Optional[int]] = []
            for token in row.replace(",", " ").split():
                if token.lower() in ("inf", "∞", "-"):
                    values.append(None)
                    continue
                try:
                    values.append(int(token))
                except ValueError:
                    raise GraphError(f"bad matrix entry {token!r}") from None
            matrix.append(values)

        n = len(matrix)
        if any(len(row) != n for row in matrix):
            raise GraphError("adjacency matrix must be square")

        edges = []
        for i in range(n):
            for j in range(n) if directed else range(i + 1, n):
                val = matrix[i][j]
                if i == j or val is None or val == 0:
                    continue
                edges.append(Edge(i, j, val))
        return cls(n, edges, directed=directed)

    # ==================================================================
    # GENERATOR
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        vertex_count: int = 8,
        edge_probability: float = 0.3,
        directed: bool = False,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
        connected: bool = True,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph.
        Each possible edge is included with probability `edge_probability`.
        With `connected`, a random spanning path backbone is added so every
        vertex is reachable (in the symmetric view).
        """
        rng = random.Random(seed)
        edges: List[Edge] = []
        taken: Set[Tuple[int, int]] = set()

        def add(a: int, b: int) -> None:
            key = (a, b) if directed else (min(a, b), max(a, b))
            if key in taken:
                return
            taken.add(key)
            edges.append(Edge(a, b, rng.randint(*weight_range)))

        for i in range(vertex_count):
            for j in range(vertex_count) if directed else range(i + 1, vertex_count):
                if i != j and rng.random() < edge_probability:
                    add(i, j)

        if connected:
            order = list(range(vertex_count))
            rng.shuffle(order)
            for k in range(1, len(order)):
                add(order[k - 1], order[k])

        return cls(vertex_count, edges, directed=directed)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def edge_count(self) -> int:
        return len(self.edges)

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges)

    def vertices(self) -> Sequence[int]:
        return range(self.vertex_count)

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, V={self.vertex_count}, E={len(self.edges)})"

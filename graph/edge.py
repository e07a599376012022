"""
edge.py — Weighted Edge
=======================
Connects two vertices by integer index and carries an integer weight.

Design decisions:
  - `source` and `target` are vertex indices, NOT vertex objects.
    This keeps edges serialisable and avoids circular references.
  - Edges are frozen.  Steps hold references to the very same Edge
    objects the engine works with, so an Edge must never change after
    it has been recorded.
  - Identity is the ordered pair (source, target); the weight is payload.
    The input layer rejects parallel edges, engines never check.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : Index of the tail vertex.
        target : Index of the head vertex.
        weight : Integer cost.  May be negative for Bellman-Ford / Floyd-Warshall.
    """

    source: int
    target: int
    weight: int = field(default=1, compare=False)

    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"

    def reversed(self) -> "Edge":
        """The same edge seen from the other endpoint."""
        return Edge(self.target, self.source, self.weight)

    def other_end(self, vertex: int) -> int:
        """Given one endpoint, return the other."""
        return self.target if vertex == self.source else self.source

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"source": self.source, "target": self.target, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=data.get("weight", 1),
        )

    def __repr__(self) -> str:
        return f"Edge({self.source} → {self.target}, w={self.weight})"

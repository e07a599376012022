"""
step.py — Algorithm Step Snapshots & Traces
============================================
Every engine turns its input into a Trace: the complete, ordered tuple of
Steps describing its run.  A Step is a frozen-in-time picture of everything
a renderer needs to draw one frame:

    • A plain-English description of *why* this step happened
    • Which line of pseudocode is executing right now
    • The algorithm state at that instant (distances, MST edges,
      window position, Huffman forest, …)

Design decisions:
  - Steps are frozen dataclasses.  Every sequence field is a tuple and
    every mapping field a read-only proxy, copied at the moment the step is
    recorded (copy-on-step), so a step is an independent snapshot, never a
    live view into the engine's arrays.  Mapping fields stay out of the
    hash, so every step is hashable.
  - One Step subclass per algorithm family.  Fields a given engine does
    not use keep their defaults.
  - Engines never hand out a half-built trace: TraceBuilder collects the
    steps and only `build()` produces the Trace, after the run finished.
"""

import math
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Type

from graph import Edge


INF = math.inf


def _empty_mapping() -> Mapping:
    return MappingProxyType({})


# ---------------------------------------------------------------------------
# Base step
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        index           : 1-based position of this step in its trace.
        description     : Human-readable "what changed and why" text.
        pseudocode_line : 0-based index into the engine's PSEUDOCODE list.
        is_final        : True on the very last step of the trace.
    """

    index:           int
    description:     str
    pseudocode_line: int  = 0
    is_final:        bool = False


# ---------------------------------------------------------------------------
# Shortest paths — Dijkstra, Bellman-Ford, Floyd-Warshall
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ShortestPathStep(Step):
    """
    Attributes:
        distances          : Best-known distance per vertex (math.inf = unreached).
        previous           : Predecessor per vertex on the best-known path.
        current_vertex     : Vertex being processed.
        current_edge       : Edge just relaxed / checked.
        visited            : Dijkstra's finalised set, per vertex.
        selected_vertex    : Dijkstra: vertex picked by the minimum scan.
        shortest_paths     : Dijkstra: {vertex: path from the source}.
        iteration          : Bellman-Ford pass number (0 = before the first).
        relaxation_count   : Bellman-Ford: successful relaxations so far.
        has_negative_cycle : Bellman-Ford: set on the detection step.
        matrix             : Floyd-Warshall distance matrix.
        next_hop           : Floyd-Warshall next-hop matrix.
        k, i, j            : Floyd-Warshall loop indices (k = -1 before, V after).
        improvement        : Floyd-Warshall: this step updated a cell.
    """

    distances:          Tuple[float, ...]                     = ()
    previous:           Tuple[Optional[int], ...]             = ()
    current_vertex:     Optional[int]                         = None
    current_edge:       Optional[Edge]                        = None
    visited:            Tuple[bool, ...]                      = ()
    selected_vertex:    Optional[int]                         = None
    shortest_paths:     Mapping[int, Tuple[int, ...]]         = field(default_factory=_empty_mapping, hash=False)
    iteration:          int                                   = 0
    relaxation_count:   int                                   = 0
    has_negative_cycle: bool                                  = False
    matrix:             Tuple[Tuple[int, ...], ...]           = ()
    next_hop:           Tuple[Tuple[Optional[int], ...], ...] = ()
    k:                  Optional[int]                         = None
    i:                  Optional[int]                         = None
    j:                  Optional[int]                         = None
    improvement:        bool                                  = False


# ---------------------------------------------------------------------------
# Minimum spanning trees — Kruskal, Prim
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MstStep(Step):
    """
    Attributes:
        mst_edges      : Edges accepted so far, in acceptance order.
        total_weight   : Sum of accepted weights.
        current_edge   : Edge under examination.
        sorted_edges   : Kruskal: all edges, ascending by weight.
        parent         : Kruskal: union-find parent array.
        is_valid_edge  : Kruskal: current edge was accepted.
        visited        : Prim: vertices in the tree.
        frontier       : Prim: candidate edges, ascending by weight.
        current_vertex : Prim: vertex just added (or the start vertex).
        min_edge       : Prim: cheapest frontier edge chosen.
    """

    mst_edges:      Tuple[Edge, ...] = ()
    total_weight:   int              = 0
    current_edge:   Optional[Edge]   = None
    sorted_edges:   Tuple[Edge, ...] = ()
    parent:         Tuple[int, ...]  = ()
    is_valid_edge:  bool             = False
    visited:        Tuple[bool, ...] = ()
    frontier:       Tuple[Edge, ...] = ()
    current_vertex: Optional[int]    = None
    min_edge:       Optional[Edge]   = None


# ---------------------------------------------------------------------------
# String matching — Naive, KMP, Rabin-Karp
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MatchStep(Step):
    """
    Attributes:
        text_index        : Text position being compared.
        pattern_index     : Pattern position being compared.
        window_start      : Offset of the current alignment.
        is_match          : The compared characters are equal.
        is_complete_match : A full occurrence ends at this step.
        matches           : Start offsets found so far.
        comparisons       : Naive: character comparisons so far.
        lps               : KMP failure function.
        current_window    : Rabin-Karp: text of the current window.
        window_hash       : Rabin-Karp: hash of the current window.
        pattern_hash      : Rabin-Karp: hash of the pattern.
        is_hash_match     : Rabin-Karp: window hash equals pattern hash.
        is_exact_match    : Rabin-Karp: verified character-by-character.
    """

    text_index:        int              = 0
    pattern_index:     int              = 0
    window_start:      int              = 0
    is_match:          bool             = False
    is_complete_match: bool             = False
    matches:           Tuple[int, ...]  = ()
    comparisons:       int              = 0
    lps:               Tuple[int, ...]  = ()
    current_window:    str              = ""
    window_hash:       Optional[int]    = None
    pattern_hash:      Optional[int]    = None
    is_hash_match:     bool             = False
    is_exact_match:    bool             = False


# ---------------------------------------------------------------------------
# Compression — Huffman
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class HuffmanNode:
    """
    One node of the Huffman arena.  Children are arena indices, so a node
    never references another node object and steps can share the arena.
    """

    char:  Optional[str]
    freq:  int
    left:  Optional[int] = None
    right: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


@dataclass(frozen=True)
class HuffmanStep(Step):
    """
    Attributes:
        forest : Arena indices of the current roots, in queue order.
        nodes  : The arena as of this step (only grows, so older steps
                 share a prefix of it).
        merged : Index of the node created by this merge step.
        codes  : {char: bitstring} — final step only.
    """

    forest: Tuple[int, ...]         = ()
    nodes:  Tuple[HuffmanNode, ...] = ()
    merged: Optional[int]           = None
    codes:  Mapping[str, str]       = field(default_factory=_empty_mapping, hash=False)

    def roots(self) -> List[HuffmanNode]:
        return [self.nodes[i] for i in self.forest]


# ---------------------------------------------------------------------------
# Traces
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Trace:
    """The full ordered, immutable sequence of Steps for one run."""

    algorithm: str
    steps:     Tuple[Step, ...] = ()

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, idx: int) -> Step:
        return self.steps[idx]

    @property
    def last(self) -> Optional[Step]:
        return self.steps[-1] if self.steps else None


def find_matches(trace: Trace) -> Tuple[int, ...]:
    """Match offsets reported by a string-matching trace (empty trace → ())."""
    last = trace.last
    return last.matches if isinstance(last, MatchStep) else ()


@dataclass(frozen=True)
class RabinKarpTrace(Trace):
    """Adds the window → hash table the hash panel shows."""

    pattern_hash: Optional[int]  = None
    hash_table:   Mapping[str, int] = field(default_factory=_empty_mapping, hash=False)


@dataclass(frozen=True)
class HuffmanTrace(Trace):
    """Adds the compression results next to the steps."""

    frequencies: Mapping[str, int]       = field(default_factory=_empty_mapping, hash=False)
    codes:       Mapping[str, str]       = field(default_factory=_empty_mapping, hash=False)
    encoded:     str                     = ""
    nodes:       Tuple[HuffmanNode, ...] = ()
    root:        Optional[int]           = None


# ---------------------------------------------------------------------------
# Builder — engines record steps here, then freeze once at the end
# ---------------------------------------------------------------------------
def freeze(value: Any) -> Any:
    """Deep-copy lists into tuples and dicts into read-only mapping proxies."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    return value


class TraceBuilder:
    """
    Mutable scratch-pad that engines use to record their trace.

    Usage inside an engine:
        tb = TraceBuilder("dijkstra", ShortestPathStep)
        tb.add("Select vertex 2", pseudocode_line=5, distances=dist, ...)
        return tb.build()

    `add` snapshots every field it is given, so engines can keep mutating
    their own lists after recording a step.
    """

    def __init__(self, algorithm: str, step_type: Type[Step]):
        self.algorithm = algorithm
        self.step_type = step_type
        self._steps: List[Step] = []

    def add(self, description: str, pseudocode_line: int = 0, **fields: Any) -> Step:
        step = self.step_type(
            index=len(self._steps) + 1,
            description=description,
            pseudocode_line=pseudocode_line,
            **{name: freeze(value) for name, value in fields.items()},
        )
        self._steps.append(step)
        return step

    def __len__(self) -> int:
        return len(self._steps)

    def build(self, trace_type: Type[Trace] = Trace, **extra: Any) -> Trace:
        steps = list(self._steps)
        if steps:
            steps[-1] = replace(steps[-1], is_final=True)
        return trace_type(
            algorithm=self.algorithm,
            steps=tuple(steps),
            **{name: freeze(value) for name, value in extra.items()},
        )

"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, fn, pseudocode, family, params, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The recorder, the API and the tests
all consume it, so adding a new algorithm is: write the engine, add one
entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from algorithms.step import Trace

# ---------------------------------------------------------------------------
# Import all engine modules
# ---------------------------------------------------------------------------
from algorithms.dijkstra       import dijkstra          as _dijkstra,   PSEUDOCODE as _dij_pc
from algorithms.bellman_ford   import bellman_ford      as _bf,         PSEUDOCODE as _bf_pc
from algorithms.floyd_warshall import floyd_warshall    as _fw,         PSEUDOCODE as _fw_pc
from algorithms.kruskal        import kruskal           as _kruskal,    PSEUDOCODE as _kru_pc
from algorithms.prim           import prim              as _prim,       PSEUDOCODE as _prim_pc
from algorithms.naive          import naive_search      as _naive,      PSEUDOCODE as _naive_pc
from algorithms.kmp            import kmp_search        as _kmp,        PSEUDOCODE as _kmp_pc
from algorithms.rabin_karp     import rabin_karp_search as _rk,         PSEUDOCODE as _rk_pc
from algorithms.huffman        import huffman           as _huffman,    PSEUDOCODE as _huf_pc


class UnknownAlgorithmError(KeyError):
    """No registry entry for the requested key."""


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "dijkstra"
    label:             str                    # human label, e.g. "Dijkstra's Algorithm"
    fn:                Callable[..., Trace]   # the engine
    pseudocode:        List[str]              # lines for the side-panel
    family:            str                    # "shortest-path", "mst", "string-matching", "compression"
    params:            List[str] = field(default_factory=list)   # keyword parameters fn accepts
    tags:              List[str] = field(default_factory=list)
    supports_negative: bool     = False       # can handle negative edges?
    is_all_pairs:      bool     = False       # Floyd-Warshall style?
    complexity_time:   str      = ""          # e.g. "O(V²)"
    complexity_space:  str      = ""          # e.g. "O(V)"
    description:       str      = ""          # one-liner for the UI card


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "huffman": AlgoInfo(
        key="huffman", label="Huffman Coding", fn=_huffman, pseudocode=_huf_pc,
        family="compression", params=["text"],
        tags=["greedy", "compression"],
        complexity_time="O(k² log k)", complexity_space="O(k)",
        description="Lossless data compression algorithm using variable-length codes",
    ),

    "kmp": AlgoInfo(
        key="kmp", label="KMP Pattern Matching", fn=_kmp, pseudocode=_kmp_pc,
        family="string-matching", params=["text", "pattern"],
        tags=["string", "failure-function"],
        complexity_time="O(n + m)", complexity_space="O(m)",
        description="Efficient string matching using failure function",
    ),

    "rabin_karp": AlgoInfo(
        key="rabin_karp", label="Rabin-Karp Algorithm", fn=_rk, pseudocode=_rk_pc,
        family="string-matching", params=["text", "pattern", "base", "prime"],
        tags=["string", "hashing"],
        complexity_time="O(n + m) expected, O(n·m) worst", complexity_space="O(1)",
        description="String matching using rolling hash technique",
    ),

    "naive": AlgoInfo(
        key="naive", label="Naive String Matching", fn=_naive, pseudocode=_naive_pc,
        family="string-matching", params=["text", "pattern"],
        tags=["string", "brute-force"],
        complexity_time="O(n·m)", complexity_space="O(1)",
        description="Brute force pattern matching approach",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's Algorithm", fn=_kruskal, pseudocode=_kru_pc,
        family="mst", params=["graph"],
        tags=["weighted", "undirected", "union-find"],
        complexity_time="O(E log E)", complexity_space="O(V)",
        description="Minimum spanning tree using union-find",
    ),

    "prim": AlgoInfo(
        key="prim", label="Prim's Algorithm", fn=_prim, pseudocode=_prim_pc,
        family="mst", params=["graph", "start"],
        tags=["weighted", "undirected", "greedy"],
        complexity_time="O(V · E log E)", complexity_space="O(V + E)",
        description="Minimum spanning tree using greedy approach",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        family="shortest-path", params=["graph", "source"],
        tags=["weighted", "undirected", "single-source"],
        complexity_time="O(V² + E)", complexity_space="O(V)",
        description="Shortest path from single source",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman-Ford Algorithm", fn=_bf, pseudocode=_bf_pc,
        family="shortest-path", params=["graph", "source"],
        tags=["weighted", "directed", "single-source", "negative-edges"],
        supports_negative=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Shortest path with negative weights",
    ),

    "floyd_warshall": AlgoInfo(
        key="floyd_warshall", label="Floyd-Warshall Algorithm", fn=_fw, pseudocode=_fw_pc,
        family="shortest-path", params=["graph"],
        tags=["weighted", "directed", "all-pairs", "negative-edges"],
        supports_negative=True, is_all_pairs=True,
        complexity_time="O(V³)", complexity_space="O(V²)",
        description="All-pairs shortest path algorithm",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


def run_algorithm(key: str, params: Mapping[str, Any]) -> Trace:
    """
    Run the engine registered under `key` with the subset of `params` it
    accepts.  Inputs are expected to be validated already.
    """
    info = get_algorithm(key)
    if info is None:
        raise UnknownAlgorithmError(key)
    kwargs = {name: params[name] for name in info.params if name in params}
    return info.fn(**kwargs)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "UnknownAlgorithmError",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "run_algorithm",
]

"""
recorder.py — Run Recorder & Analytics
========================================
Runs a registered algorithm to completion, keeps its Trace, and computes
the summary the Analytics panel shows.

Usage:
    rec = Recorder()
    rec.start("dijkstra", {"graph": g, "source": 0})
    rec.run_to_completion()          # computes the trace eagerly
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # JSON-safe snapshot for the API

`step_to_dict` is the single place where Steps are turned into plain
JSON values: infinities become "∞", Edges become dicts, Huffman nodes
become dicts.
"""

import dataclasses
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from graph import Edge, Graph
from algorithms import AlgoInfo, UnknownAlgorithmError, get_algorithm
from algorithms.step import HuffmanNode, HuffmanTrace, RabinKarpTrace, Step, Trace


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:          str   = ""
    algo_label:        str   = ""
    family:            str   = ""
    total_steps:       int   = 0          # number of Steps recorded
    wall_time_ms:      float = 0.0        # wall-clock time to compute the trace
    # family-specific outcome, taken from the final step
    total_weight:      Optional[int]   = None   # MST
    edges_in_tree:     Optional[int]   = None   # MST
    negative_cycle:    bool            = False  # Bellman-Ford
    relaxations:       Optional[int]   = None   # Bellman-Ford
    reached_vertices:  Optional[int]   = None   # Dijkstra / Bellman-Ford
    match_count:       Optional[int]   = None   # string matching
    comparisons:       Optional[int]   = None   # Naive
    encoded_bits:      Optional[int]   = None   # Huffman
    raw_bits:          Optional[int]   = None   # Huffman (8 bits per char)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : The Trace from the run (available after run_to_completion).
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.trace:   Optional[Trace]      = None
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo]   = None
        self._params:    Dict[str, Any]       = {}

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, algo_key: str, params: Mapping[str, Any]) -> None:
        """Select the engine and copy its inputs for this run."""
        info = get_algorithm(algo_key)
        if info is None:
            raise UnknownAlgorithmError(algo_key)

        self._algo_info = info
        self._params    = {name: params[name] for name in info.params if name in params}
        self.trace      = None
        self.metrics    = None

    def run_to_completion(self) -> RunMetrics:
        """Compute the whole trace, then the metrics."""
        if self._algo_info is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.trace = self._algo_info.fn(**self._params)
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "%s: %d steps in %.2f ms",
            self._algo_info.key, self.metrics.total_steps, self.metrics.wall_time_ms,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "params":   to_json(self._params),
            "metrics":  dataclasses.asdict(self.metrics) if self.metrics else {},
            "result":   trace_result(self.trace) if self.trace is not None else {},
            "steps":    [step_to_dict(s) for s in self.trace] if self.trace is not None else [],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info  = self._algo_info
        trace = self.trace
        last  = trace.last if trace is not None else None

        metrics = RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            family=info.family if info else "",
            total_steps=len(trace) if trace is not None else 0,
            wall_time_ms=round(wall_ms, 2),
        )
        if last is None:
            return metrics

        if info.family == "mst":
            metrics.total_weight  = last.total_weight
            metrics.edges_in_tree = len(last.mst_edges)
        elif info.family == "shortest-path" and not info.is_all_pairs:
            metrics.reached_vertices = sum(1 for d in last.distances if d != math.inf)
            metrics.relaxations      = last.relaxation_count if info.key == "bellman_ford" else None
            metrics.negative_cycle   = last.has_negative_cycle
        elif info.family == "string-matching":
            metrics.match_count = len(last.matches)
            if info.key == "naive":
                metrics.comparisons = last.comparisons
        elif isinstance(trace, HuffmanTrace):
            metrics.encoded_bits = len(trace.encoded)
            metrics.raw_bits     = 8 * sum(trace.frequencies.values())
        return metrics


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------
def to_json(value: Any) -> Any:
    """Recursively turn engine values into JSON-safe ones."""
    if isinstance(value, float) and math.isinf(value):
        return "∞" if value > 0 else "-∞"
    if isinstance(value, Edge):
        return value.to_dict()
    if isinstance(value, Graph):
        return value.to_dict()
    if isinstance(value, HuffmanNode):
        return {"char": value.char, "freq": value.freq, "left": value.left, "right": value.right}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, Mapping):
        return {str(k): to_json(v) for k, v in value.items()}
    return value


def step_to_dict(step: Step) -> Dict[str, Any]:
    """Flat dict of every field of a step (JSON-safe)."""
    return {f.name: to_json(getattr(step, f.name)) for f in dataclasses.fields(step)}


def trace_result(trace: Trace) -> Dict[str, Any]:
    """The extra, non-step fields some traces carry."""
    result: Dict[str, Any] = {"algorithm": trace.algorithm, "total_steps": len(trace)}
    if isinstance(trace, HuffmanTrace):
        result.update(
            frequencies=dict(trace.frequencies),
            codes=dict(trace.codes),
            encoded=trace.encoded,
            root=trace.root,
        )
    elif isinstance(trace, RabinKarpTrace):
        result.update(pattern_hash=trace.pattern_hash, hash_table=dict(trace.hash_table))
    return result

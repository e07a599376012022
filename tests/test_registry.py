import dataclasses
import json
import math

import pytest

import config
from graph import Graph
from algorithms import (
    REGISTRY,
    UnknownAlgorithmError,
    algorithms_by_tag,
    get_algorithm,
    list_algorithms,
    run_algorithm,
)
from algorithms.step import Trace
from engine import Recorder, step_to_dict


def _sample_params(key: str):
    params = dict(config.SAMPLE_PARAMS[key])
    if "graph" in params:
        params["graph"] = Graph.from_dict(params["graph"])
    return params


def test_registry_keys_in_menu_order() -> None:
    assert list(REGISTRY) == [
        "huffman", "kmp", "rabin_karp", "naive",
        "kruskal", "prim", "dijkstra", "bellman_ford", "floyd_warshall",
    ]
    assert [a.key for a in list_algorithms()] == list(REGISTRY)
    assert get_algorithm("nope") is None


def test_tags_and_flags() -> None:
    assert {a.key for a in algorithms_by_tag("negative-edges")} == {"bellman_ford", "floyd_warshall"}
    assert get_algorithm("floyd_warshall").is_all_pairs
    assert all(a.pseudocode for a in list_algorithms())


def test_unknown_key_raises_key_error() -> None:
    with pytest.raises(UnknownAlgorithmError):
        run_algorithm("quicksort", {})
    with pytest.raises(KeyError):
        Recorder().start("quicksort", {})


@pytest.mark.parametrize("key", list(REGISTRY))
def test_every_engine_runs_its_sample(key: str) -> None:
    trace = run_algorithm(key, _sample_params(key))
    assert isinstance(trace, Trace)
    assert trace.algorithm == key
    assert len(trace) > 0

    # 1-based, strictly increasing, only the last step is final
    assert [s.index for s in trace] == list(range(1, len(trace) + 1))
    assert [s.is_final for s in trace] == [False] * (len(trace) - 1) + [True]

    info = get_algorithm(key)
    assert all(0 <= s.pseudocode_line < len(info.pseudocode) for s in trace)


@pytest.mark.parametrize("key", list(REGISTRY))
def test_steps_are_immutable(key: str) -> None:
    step = run_algorithm(key, _sample_params(key))[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        step.description = "changed"


@pytest.mark.parametrize("key", list(REGISTRY))
def test_steps_are_hashable(key: str) -> None:
    trace = run_algorithm(key, _sample_params(key))
    assert all(isinstance(hash(s), int) for s in trace)


def test_mapping_fields_are_read_only() -> None:
    final = run_algorithm("dijkstra", _sample_params("dijkstra")).last
    with pytest.raises(TypeError):
        final.shortest_paths[0] = (9,)

    trace = run_algorithm("huffman", _sample_params("huffman"))
    with pytest.raises(TypeError):
        trace.codes["A"] = "1"
    with pytest.raises(TypeError):
        trace.last.codes["A"] = "1"
    assert trace.codes["A"] == "0"


def test_run_algorithm_drops_params_the_engine_does_not_take() -> None:
    params = _sample_params("kruskal")
    params["source"] = 3
    assert run_algorithm("kruskal", params).last.total_weight == 13


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
def test_recorder_metrics_for_shortest_path() -> None:
    rec = Recorder()
    rec.start("dijkstra", _sample_params("dijkstra"))
    metrics = rec.run_to_completion()
    assert metrics.algo_label == "Dijkstra's Algorithm"
    assert metrics.total_steps == len(rec.trace)
    assert metrics.reached_vertices == 6
    assert metrics.wall_time_ms >= 0
    assert rec.get_metrics() is metrics


@pytest.mark.parametrize(
    "key, field, value",
    [
        ("kruskal", "total_weight", 13),
        ("prim", "edges_in_tree", 5),
        ("kmp", "match_count", 1),
        ("huffman", "encoded_bits", 23),
        ("huffman", "raw_bits", 88),
        ("bellman_ford", "negative_cycle", False),
    ],
)
def test_recorder_family_metrics(key: str, field: str, value) -> None:
    rec = Recorder()
    rec.start(key, _sample_params(key))
    assert getattr(rec.run_to_completion(), field) == value


def test_recorder_requires_start() -> None:
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


@pytest.mark.parametrize("key", list(REGISTRY))
def test_export_is_json_safe(key: str) -> None:
    rec = Recorder()
    rec.start(key, _sample_params(key))
    rec.run_to_completion()
    exported = rec.export()
    json.dumps(exported, allow_nan=False)
    assert len(exported["steps"]) == exported["metrics"]["total_steps"]


def test_step_to_dict_spells_infinity() -> None:
    trace = run_algorithm("dijkstra", _sample_params("dijkstra"))
    first = step_to_dict(trace[0])
    assert first["distances"] == [0, "∞", "∞", "∞", "∞", "∞"]
    assert first["previous"] == [None] * 6
    assert first["current_edge"] is None
    assert math.isinf(trace[0].distances[1])


def test_step_to_dict_flattens_edges_and_nodes() -> None:
    prim_step = run_algorithm("prim", _sample_params("prim"))[1]
    assert step_to_dict(prim_step)["min_edge"] == {"source": 0, "target": 2, "weight": 2}

    huffman_step = run_algorithm("huffman", _sample_params("huffman"))[0]
    assert step_to_dict(huffman_step)["nodes"][0] == {"char": "A", "freq": 5, "left": None, "right": None}

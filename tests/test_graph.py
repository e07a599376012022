import pytest

from graph import Edge, Graph, GraphError


def test_edge_identity_ignores_weight() -> None:
    assert Edge(0, 1, 4) == Edge(0, 1, 9)
    assert Edge(0, 1, 4) != Edge(1, 0, 4)
    assert Edge(2, 5, 3).id == "2-5"


def test_edge_reversed_keeps_weight() -> None:
    rev = Edge(2, 5, 3).reversed()
    assert (rev.source, rev.target, rev.weight) == (5, 2, 3)
    assert Edge(2, 5).other_end(5) == 2


def test_symmetric_adjacency_follows_input_order(sample_graph: Graph) -> None:
    adj = sample_graph.adjacency(symmetric=True)
    assert [e.target for e in adj[1]] == [0, 2, 3]
    assert [e.target for e in adj[3]] == [1, 2, 4, 5]
    assert all(e.source == v for v, edges in enumerate(adj) for e in edges)
    # the input tuple is untouched
    assert sample_graph.edges[0] == Edge(0, 1, 4)


def test_directed_adjacency_only_lists_outgoing(signed_graph: Graph) -> None:
    adj = signed_graph.adjacency()
    assert [e.target for e in adj[2]] == [1, 3]
    assert adj[4] == []


@pytest.mark.parametrize(
    "line, expected",
    [
        ("0 1 4", (0, 1, 4)),
        ("0-1:4", (0, 1, 4)),
        ("0 -> 1 (4)", (0, 1, 4)),
        ("0 → 1, -2", (0, 1, -2)),
        ("3 7", (3, 7, 1)),
    ],
)
def test_edge_list_line_formats(line: str, expected) -> None:
    g = Graph.from_edge_list(line)
    edge = g.edges[0]
    assert (edge.source, edge.target, edge.weight) == expected


def test_edge_list_infers_vertex_count_and_skips_comments() -> None:
    g = Graph.from_edge_list("# sample\n0 1 4\n\n1 2 3\n")
    assert g.vertex_count == 3
    assert g.edge_count() == 2


def test_edge_list_rejects_garbage() -> None:
    with pytest.raises(GraphError):
        Graph.from_edge_list("0 1 4\nnot an edge")


def test_adjacency_matrix_reads_upper_triangle_when_undirected() -> None:
    g = Graph.from_adjacency_matrix("0 4 0\n4 0 8\n0 8 0")
    assert [(e.source, e.target, e.weight) for e in g.edges] == [(0, 1, 4), (1, 2, 8)]


def test_adjacency_matrix_directed_and_infinity_tokens() -> None:
    g = Graph.from_adjacency_matrix("0, 3, inf\n∞, 0, -1\n2, -, 0", directed=True)
    assert [(e.source, e.target, e.weight) for e in g.edges] == [(0, 1, 3), (1, 2, -1), (2, 0, 2)]


def test_adjacency_matrix_must_be_square() -> None:
    with pytest.raises(GraphError):
        Graph.from_adjacency_matrix("0 1\n1 0 2")


@pytest.mark.parametrize(
    "graph",
    [
        Graph(0, []),
        Graph(3, [Edge(0, 3, 1)]),
        Graph(3, [Edge(-1, 2, 1)]),
        Graph(3, [Edge(0, 1, 2.5)]),
        Graph(3, [Edge(0, 1, 1), Edge(0, 1, 5)]),
    ],
)
def test_validate_rejects_broken_graphs(graph: Graph) -> None:
    with pytest.raises(GraphError):
        graph.validate()


def test_dict_round_trip(signed_graph: Graph) -> None:
    again = Graph.from_dict(signed_graph.to_dict())
    assert again.vertex_count == signed_graph.vertex_count
    assert again.directed is True
    assert [(e.source, e.target, e.weight) for e in again.edges] == \
        [(e.source, e.target, e.weight) for e in signed_graph.edges]


def test_from_dict_accepts_edge_objects_and_requires_vertex_count() -> None:
    g = Graph.from_dict({"vertex_count": 2, "edges": [{"source": 0, "target": 1, "weight": 7}]})
    assert g.edges[0].weight == 7
    with pytest.raises(GraphError):
        Graph.from_dict({"edges": []})
    with pytest.raises(GraphError):
        Graph.from_dict({"vertex_count": 2, "edges": [{"to": 1}]})


def test_generate_random_is_seeded_and_connected() -> None:
    a = Graph.generate_random(vertex_count=9, edge_probability=0.2, seed=7)
    b = Graph.generate_random(vertex_count=9, edge_probability=0.2, seed=7)
    assert [(e.source, e.target, e.weight) for e in a.edges] == \
        [(e.source, e.target, e.weight) for e in b.edges]
    a.validate()

    # every vertex reachable from 0 in the symmetric view
    adj = a.adjacency(symmetric=True)
    seen, stack = {0}, [0]
    while stack:
        for e in adj[stack.pop()]:
            if e.target not in seen:
                seen.add(e.target)
                stack.append(e.target)
    assert seen == set(range(9))


def test_has_negative_edges(sample_graph: Graph, signed_graph: Graph) -> None:
    assert signed_graph.has_negative_edges()
    assert not sample_graph.has_negative_edges()

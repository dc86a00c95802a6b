import pytest
from pydantic import ValidationError

from digraph import Digraph, FrozenDigraph, reachable


def build(vertex_count, edges):
    graph = Digraph(vertex_count=vertex_count)
    for v, w in edges:
        graph.add_edge(v, w)
    return graph


def test_new_graph_has_empty_adjacency():
    graph = Digraph(vertex_count=3)
    assert list(graph.vertices()) == [0, 1, 2]
    assert graph.adj == [[], [], []]
    assert graph.edge_count() == 0


def test_negative_vertex_count_rejected():
    with pytest.raises(ValueError):
        Digraph(vertex_count=-1)


def test_adjacency_length_must_match_vertex_count():
    with pytest.raises(ValueError):
        Digraph(vertex_count=2, adj=[[1]])


def test_adjacency_targets_must_be_vertices():
    with pytest.raises(ValueError):
        Digraph(vertex_count=1, adj=[[3]])
    with pytest.raises(ValueError):
        FrozenDigraph(vertex_count=2, adj=((1,), (-1,)))


def test_supplied_adjacency_is_kept():
    graph = Digraph(vertex_count=2, adj=[[1], [0]])
    assert reachable(graph, [0]) == {0, 1}


def test_freeze_copies_edges():
    graph = build(3, [(0, 1), (1, 2)])
    frozen = graph.freeze()
    graph.add_edge(2, 0)
    assert frozen.adj == ((1,), (2,), ())
    assert frozen.edge_count() == 2
    assert reachable(frozen, [1]) == {1, 2}


def test_frozen_graph_is_read_only():
    frozen = build(2, [(0, 1)]).freeze()
    assert frozen.adjacent(0) == (1,)
    assert not hasattr(frozen, "add_edge")
    with pytest.raises(ValidationError):
        frozen.vertex_count = 5


def test_add_edge_out_of_range():
    graph = Digraph(vertex_count=2)
    with pytest.raises(ValueError):
        graph.add_edge(0, 2)
    with pytest.raises(ValueError):
        graph.add_edge(-1, 0)


def test_add_edge_and_adjacent():
    graph = build(3, [(0, 1), (0, 2), (2, 0)])
    assert graph.adjacent(0) == (1, 2)
    assert graph.adjacent(1) == ()
    assert graph.edge_count() == 3


def test_reachable_includes_sources():
    graph = build(4, [(0, 1), (1, 2)])
    assert reachable(graph, [0]) == {0, 1, 2}
    assert reachable(graph, [3]) == {3}


def test_reachable_from_several_sources():
    graph = build(6, [(0, 1), (3, 4), (4, 3)])
    assert reachable(graph, [0, 3]) == {0, 1, 3, 4}


def test_reachable_handles_cycles():
    graph = build(3, [(0, 1), (1, 2), (2, 0)])
    assert reachable(graph, {1}) == {0, 1, 2}


def test_reachable_with_no_sources_is_empty():
    graph = build(2, [(0, 1)])
    assert reachable(graph, []) == set()


def test_reachable_rejects_bad_source():
    graph = Digraph(vertex_count=2)
    with pytest.raises(ValueError):
        reachable(graph, [5])


def test_reachable_does_not_mutate_graph():
    graph = build(3, [(0, 1), (1, 2)])
    first = reachable(graph, [0])
    first.add(99)
    assert reachable(graph, [0]) == {0, 1, 2}
    assert graph.adj == [[1], [2], []]


def test_print_graph(capsys):
    graph = build(3, [(0, 1), (2, 0)])
    graph.print_graph()
    assert capsys.readouterr().out == "0,1\n2,0\n"

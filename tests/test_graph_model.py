"""Tests for the arena-backed citation graph."""

import networkx as nx
import numpy as np
import pytest

from pagerank.errors import TopologyError
from pagerank.graph_model import CitationGraph


class TestCitationGraph:
    def test_add_edge_creates_both_endpoints(self) -> None:
        graph = CitationGraph()
        graph.add_edge(7, 3)

        assert 7 in graph and 3 in graph
        assert len(graph) == 2
        assert graph.successors(7) == [3]
        assert graph.predecessors(3) == [7]

    def test_duplicate_edges_are_counted_once(self) -> None:
        graph = CitationGraph()
        graph.add_edge(1, 2)
        graph.add_edge(1, 2)
        graph.add_edge(1, 2)

        assert graph.number_of_edges() == 1
        assert graph.node(2).incoming == {graph.index_of(1)}

    def test_node_appears_once_regardless_of_role(self) -> None:
        graph = CitationGraph()
        graph.add_edge(1, 2)
        graph.add_edge(2, 1)
        graph.add_node(1)

        assert list(graph) == [1, 2]

    def test_self_loop_is_preserved(self) -> None:
        graph = CitationGraph()
        graph.add_edge(4, 4)
        graph.finalize()

        assert graph.successors(4) == [4]
        assert graph.predecessors(4) == [4]
        assert not graph.is_sink(4)

    def test_is_sink(self) -> None:
        graph = CitationGraph()
        graph.add_edge(1, 2)

        assert graph.is_sink(2)
        assert not graph.is_sink(1)

    def test_finalize_computes_out_degree_inverse_and_sinks(self) -> None:
        graph = CitationGraph()
        graph.add_edge(0, 1)
        graph.add_edge(0, 2)
        graph.add_edge(0, 3)
        graph.add_edge(1, 2)
        graph.add_node(9)
        graph.finalize()

        assert graph.node(0).out_degree_inverse == pytest.approx(1 / 3)
        assert graph.node(1).out_degree_inverse == 1.0
        assert graph.sinks == [2, 3, 9]
        assert sorted(graph.pids[graph.sink_indices].tolist()) == [2, 3, 9]
        assert graph.out_degree_inverse[graph.index_of(2)] == 0.0

    def test_inbound_edge_arrays_match_edges(self) -> None:
        graph = CitationGraph()
        graph.add_edge(5, 6)
        graph.add_edge(7, 6)
        graph.add_edge(6, 5)
        graph.finalize()

        edges = {
            (int(graph.pids[s]), int(graph.pids[t]))
            for s, t in zip(graph.edge_sources, graph.edge_targets)
        }
        assert edges == {(5, 6), (7, 6), (6, 5)}
        assert graph.edge_sources.dtype == np.int64

    def test_mutation_after_finalize_fails_fast(self) -> None:
        graph = CitationGraph()
        graph.add_edge(1, 2)
        graph.finalize()

        with pytest.raises(TopologyError):
            graph.add_edge(2, 1)
        with pytest.raises(TopologyError):
            graph.add_node(3)

    def test_finalize_twice_is_noop(self) -> None:
        graph = CitationGraph()
        graph.add_edge(1, 2)
        first = graph.finalize().pids
        assert graph.finalize().pids is first

    @pytest.mark.parametrize("bad", [-1, 1.5, "3", True, None])
    def test_rejects_invalid_page_ids(self, bad) -> None:
        graph = CitationGraph()
        with pytest.raises(ValueError):
            graph.add_node(bad)

    def test_unknown_page_lookup(self) -> None:
        graph = CitationGraph()
        with pytest.raises(KeyError, match="page 3"):
            graph.node(3)

    def test_networkx_round_trip(self) -> None:
        G = nx.DiGraph([(0, 1), (1, 2), (2, 0), (2, 2)])
        G.add_node(10)

        graph = CitationGraph.from_networkx(G)

        assert graph.finalized
        assert graph.sinks == [10]
        back = graph.to_networkx()
        assert set(back.nodes) == set(G.nodes)
        assert set(back.edges) == set(G.edges)

    def test_from_networkx_rejects_undirected(self) -> None:
        with pytest.raises(ValueError, match="directed"):
            CitationGraph.from_networkx(nx.Graph([(0, 1)]))

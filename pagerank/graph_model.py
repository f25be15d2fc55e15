"""
graph_model.py

Arena-backed directed graph for PageRank.

Nodes live in a list and are addressed by a dense integer index assigned in
first-seen order. Edge sets store indices, never node objects, so the model
has no reference cycles. Once ``finalize()`` runs the topology is frozen and
the numpy views used by the iteration engine are built.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Set

import networkx as nx
import numpy as np

from pagerank.errors import TopologyError


@dataclass
class Node:
    """One page. ``incoming`` / ``outgoing`` hold arena indices."""

    pid: int
    incoming: Set[int] = field(default_factory=set)
    outgoing: Set[int] = field(default_factory=set)
    out_degree_inverse: float = 0.0

    def is_sink(self) -> bool:
        return not self.outgoing


def _check_pid(pid) -> int:
    # bool is an int subclass but never a page id
    if isinstance(pid, bool) or not isinstance(pid, (int, np.integer)):
        raise ValueError(f"page id must be an integer, got {pid!r}")
    if pid < 0:
        raise ValueError(f"page id must be non-negative, got {pid}")
    return int(pid)


class CitationGraph:
    """Directed link graph. An edge ``source -> target`` passes score from source to target."""

    def __init__(self):
        self.nodes: List[Node] = []
        self._index: Dict[int, int] = {}
        self._finalized = False
        self._num_edges = 0

        # populated by finalize()
        self.pids = np.empty(0, dtype=np.int64)
        self.out_degree_inverse = np.empty(0, dtype=np.float64)
        self.sink_indices = np.empty(0, dtype=np.int64)
        self.edge_sources = np.empty(0, dtype=np.int64)
        self.edge_targets = np.empty(0, dtype=np.int64)

    # ------------------------------------------------------------------ #
    # construction                                                       #
    # ------------------------------------------------------------------ #
    def _ensure_mutable(self):
        if self._finalized:
            raise TopologyError("graph topology is finalized; no more nodes or edges")

    def _node_index(self, pid: int) -> int:
        idx = self._index.get(pid)
        if idx is None:
            idx = len(self.nodes)
            self._index[pid] = idx
            self.nodes.append(Node(pid))
        return idx

    def add_node(self, pid: int) -> None:
        self._ensure_mutable()
        self._node_index(_check_pid(pid))

    def add_edge(self, source: int, target: int) -> None:
        """Register ``source -> target``. Duplicate calls are no-ops."""
        self._ensure_mutable()
        s = self._node_index(_check_pid(source))
        t = self._node_index(_check_pid(target))
        out = self.nodes[s].outgoing
        if t not in out:
            out.add(t)
            self.nodes[t].incoming.add(s)
            self._num_edges += 1

    def finalize(self) -> "CitationGraph":
        """
        Freeze the topology and derive per-node constants.

        Computes 1/|out| for every non-sink node, caches the sink list and
        flattens the inbound edges into two parallel index arrays.
        """
        if self._finalized:
            return self
        n = len(self.nodes)
        self.pids = np.fromiter((node.pid for node in self.nodes), dtype=np.int64, count=n)

        inv = np.zeros(n, dtype=np.float64)
        sinks = []
        for i, node in enumerate(self.nodes):
            if node.is_sink():
                sinks.append(i)
            else:
                node.out_degree_inverse = 1.0 / len(node.outgoing)
                inv[i] = node.out_degree_inverse
        self.out_degree_inverse = inv
        self.sink_indices = np.asarray(sinks, dtype=np.int64)

        sources = np.empty(self._num_edges, dtype=np.int64)
        targets = np.empty(self._num_edges, dtype=np.int64)
        k = 0
        for t, node in enumerate(self.nodes):
            # sorted so the summation order does not depend on set iteration
            for s in sorted(node.incoming):
                sources[k] = s
                targets[k] = t
                k += 1
        self.edge_sources = sources
        self.edge_targets = targets

        self._finalized = True
        return self

    @property
    def finalized(self) -> bool:
        return self._finalized

    # ------------------------------------------------------------------ #
    # queries                                                            #
    # ------------------------------------------------------------------ #
    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, pid) -> bool:
        return pid in self._index

    def __iter__(self) -> Iterator[int]:
        return (node.pid for node in self.nodes)

    def number_of_nodes(self) -> int:
        return len(self.nodes)

    def number_of_edges(self) -> int:
        return self._num_edges

    def index_of(self, pid: int) -> int:
        try:
            return self._index[pid]
        except KeyError:
            raise KeyError(f"page {pid} is not in the graph") from None

    def node(self, pid: int) -> Node:
        return self.nodes[self.index_of(pid)]

    def is_sink(self, pid: int) -> bool:
        return self.node(pid).is_sink()

    def successors(self, pid: int) -> List[int]:
        return sorted(self.nodes[i].pid for i in self.node(pid).outgoing)

    def predecessors(self, pid: int) -> List[int]:
        return sorted(self.nodes[i].pid for i in self.node(pid).incoming)

    @property
    def sinks(self) -> List[int]:
        if self._finalized:
            return sorted(int(self.pids[i]) for i in self.sink_indices)
        return sorted(node.pid for node in self.nodes if node.is_sink())

    # ------------------------------------------------------------------ #
    # networkx interop                                                   #
    # ------------------------------------------------------------------ #
    def to_networkx(self) -> nx.DiGraph:
        G = nx.DiGraph()
        G.add_nodes_from(node.pid for node in self.nodes)
        for node in self.nodes:
            for t in node.outgoing:
                G.add_edge(node.pid, self.nodes[t].pid)
        return G

    @classmethod
    def from_networkx(cls, G: nx.DiGraph) -> "CitationGraph":
        """Build a finalized graph from a networkx digraph with integer nodes."""
        if not G.is_directed():
            raise ValueError("PageRank needs a directed graph")
        graph = cls()
        for pid in sorted(G.nodes):
            graph.add_node(pid)
        for u, v in sorted(G.edges()):
            graph.add_edge(u, v)
        return graph.finalize()

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "building"
        return f"<CitationGraph nodes={len(self)} edges={self._num_edges} {state}>"

import random
from pathlib import Path
from typing import List, Optional, Union

import networkx as nx

__all__ = ["generate_graph", "graph_to_records", "write_edge_list"]

# ------------------------------------------------------------------ #
# 1.  Graph generator                                                 #
# ------------------------------------------------------------------ #
def generate_graph(
    num_nodes: int = 100,
    edge_density: float = 0.05,
    self_loops: bool = False,
    seed: Optional[int] = None,
) -> nx.DiGraph:
    """
    Erdős–Rényi G(n, p) citation graph on pages 0 .. num_nodes-1.

    * The (u→v) and (v→u) trials are independent, so pages may cite each
      other, one way or not at all.
    * With a fixed ``seed`` the same graph comes back every time.
    """
    rng = random.Random(seed)

    G = nx.DiGraph()
    G.add_nodes_from(range(num_nodes))
    for u in range(num_nodes):
        for v in range(num_nodes):
            if u == v and not self_loops:
                continue
            if rng.random() < edge_density:
                G.add_edge(u, v)
    return G


# ------------------------------------------------------------------ #
# 2.  Edge-list serialization                                         #
# ------------------------------------------------------------------ #
def graph_to_records(G: nx.DiGraph) -> List[List[int]]:
    """
    One ``[target, source_1, ..., source_n]`` record per node, ascending.

    Every node gets a record, so sinks and isolated pages survive the round trip.
    """
    return [[v, *sorted(G.predecessors(v))] for v in sorted(G.nodes)]


def write_edge_list(G: nx.DiGraph, path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for record in graph_to_records(G):
            f.write(" ".join(str(pid) for pid in record) + "\n")

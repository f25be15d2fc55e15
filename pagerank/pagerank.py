"""
pagerank.py

Implements PageRank based page ranking on citation graphs.
"""
from typing import List, Tuple

from pagerank.graph_model import CitationGraph
from pagerank.iteration import DAMPING, MAX_ITERATIONS, PageRankEngine, PageRankResult
from pagerank.ranker import get_top_k_nodes_from_scores


def compute_pagerank(
    graph: CitationGraph,
    damping: float = DAMPING,
    max_iterations: int = MAX_ITERATIONS,
    stable_rounds: int = 4,
    verbose: bool = False,
) -> PageRankResult:
    engine = PageRankEngine(
        graph,
        damping=damping,
        max_iterations=max_iterations,
        stable_rounds=stable_rounds,
    )
    return engine.run(verbose=verbose)


def select_top_pages_by_pagerank(
    graph: CitationGraph, k: int, **kwargs
) -> Tuple[List[int], PageRankResult]:
    """
    PageRankアルゴリズムを実行し、上位k個のページと計算結果を返す
    """
    print("Calculating PageRank scores...")
    result = compute_pagerank(graph, **kwargs)
    top_pages = get_top_k_nodes_from_scores(result.score_map(), k)
    print(f"Top {k} pages selected by PageRank after {result.iterations} iterations.")
    return top_pages, result

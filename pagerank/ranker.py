"""
ranker.py

Top-k selection by descending score. Equal scores are ordered by ascending
page id so the ranking is reproducible.
"""
from typing import Dict, List

import numpy as np


def _check_k(k: int):
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")


def get_top_k_nodes_from_scores(scores: Dict[int, float], k: int) -> List[int]:
    """
    スコアに基づいて上位k個のノードを返す (同点はページIDの昇順)
    """
    _check_k(k)
    sorted_nodes = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    return [node_id for node_id, score in sorted_nodes[:k]]


def rank_pages(pids: np.ndarray, scores: np.ndarray, k: int) -> List[int]:
    """Array form of get_top_k_nodes_from_scores; the inputs are not modified."""
    _check_k(k)
    # lexsort sorts by the last key first
    order = np.lexsort((pids, -scores))
    return [int(pid) for pid in pids[order[:k]]]

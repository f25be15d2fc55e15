"""
iteration.py

Power iteration with uniform redistribution of sink mass.

Scores live in two float64 buffers indexed by arena index. A round reads
only ``score`` and writes only ``next_score``; the buffers are swapped once
the round is complete, so no read ever sees a half-updated distribution.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from pagerank.convergence import ConvergenceMonitor, perplexity
from pagerank.errors import EmptyGraphError, TopologyError
from pagerank.graph_model import CitationGraph
from pagerank.ranker import rank_pages

DAMPING = 0.85
MAX_ITERATIONS = 1000


@dataclass
class PageRankResult:
    """Final scores of a run plus its per-round perplexity trace."""

    pids: np.ndarray
    scores: np.ndarray
    perplexities: List[float] = field(default_factory=list)
    iterations: int = 0
    converged: bool = False

    def score_map(self) -> Dict[int, float]:
        """pid -> score, in ascending pid order."""
        order = np.argsort(self.pids, kind="stable")
        return {int(self.pids[i]): float(self.scores[i]) for i in order}

    def top_k(self, k: int) -> List[int]:
        return rank_pages(self.pids, self.scores, k)

    def to_frame(self, k: Optional[int] = None) -> pd.DataFrame:
        ranked = self.top_k(len(self.pids) if k is None else k)
        scores = self.score_map()
        return pd.DataFrame(
            {
                "rank": range(1, len(ranked) + 1),
                "pid": ranked,
                "score": [scores[pid] for pid in ranked],
            }
        )


class PageRankEngine:
    """Runs PageRank on a finalized CitationGraph."""

    def __init__(
        self,
        graph: CitationGraph,
        damping: float = DAMPING,
        max_iterations: int = MAX_ITERATIONS,
        stable_rounds: int = 4,
    ):
        if not graph.finalized:
            raise TopologyError("call finalize() on the graph before running PageRank")
        if len(graph) == 0:
            raise EmptyGraphError()
        if not 0.0 <= damping <= 1.0:
            raise ValueError(f"damping must be in [0, 1], got {damping}")
        if max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")

        self.graph = graph
        self.damping = damping
        self.max_iterations = max_iterations
        self.stable_rounds = stable_rounds
        self.n = len(graph)

        # contribution weight of each inbound edge, fixed for the whole run
        self._edge_weight = graph.out_degree_inverse[graph.edge_sources]

        self.score: Optional[np.ndarray] = None
        self.next_score: Optional[np.ndarray] = None
        self.iterations = 0

    def initialize(self) -> None:
        self.score = np.full(self.n, 1.0 / self.n, dtype=np.float64)
        self.next_score = np.empty(self.n, dtype=np.float64)
        self.iterations = 0

    def step(self) -> float:
        """Run one round and return the perplexity of the new distribution."""
        if self.score is None:
            self.initialize()
        g = self.graph
        d = self.damping
        n = self.n

        sink_mass = float(self.score[g.sink_indices].sum())
        base = (1.0 - d) / n + d * sink_mass / n

        inbound = np.bincount(
            g.edge_targets,
            weights=self.score[g.edge_sources] * self._edge_weight,
            minlength=n,
        )
        np.multiply(inbound, d, out=self.next_score)
        self.next_score += base

        self.score, self.next_score = self.next_score, self.score
        self.iterations += 1
        return perplexity(self.score)

    def score_map(self) -> Dict[int, float]:
        if self.score is None:
            raise RuntimeError("PageRank has not been initialized")
        return {int(pid): float(s) for pid, s in sorted(zip(self.graph.pids, self.score))}

    def run(self, verbose: bool = False, report_every: int = 10) -> PageRankResult:
        """Iterate from a uniform start until the monitor reports convergence."""
        self.initialize()
        monitor = ConvergenceMonitor(self.stable_rounds)
        while self.iterations < self.max_iterations:
            value = self.step()
            if verbose and self.iterations % report_every == 0:
                print(f"Iteration {self.iterations}  perplexity={value:.4f}")
            if monitor.observe(value):
                break
        if not monitor.converged:
            print(
                f"[WARN] PageRank stopped after {self.iterations} iterations "
                "without a stable perplexity."
            )
        elif verbose:
            print(f"Converged after {self.iterations} iterations.")

        return PageRankResult(
            pids=self.graph.pids.copy(),
            scores=self.score.copy(),
            perplexities=list(monitor.trace),
            iterations=self.iterations,
            converged=monitor.converged,
        )

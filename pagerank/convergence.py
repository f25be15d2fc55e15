"""
convergence.py

Perplexity of a score distribution and the stability rule that ends the
power iteration.
"""
import math
from enum import Enum
from typing import List

import numpy as np


def entropy(scores: np.ndarray) -> float:
    """Shannon entropy in bits. Zero scores contribute nothing."""
    p = np.asarray(scores, dtype=np.float64)
    p = p[p > 0.0]
    return float(-np.sum(p * np.log2(p)))


def perplexity(scores: np.ndarray) -> float:
    return 2.0 ** entropy(scores)


class MonitorState(Enum):
    RUNNING = "running"
    CONVERGED = "converged"


class ConvergenceMonitor:
    """
    Declares convergence once floor(perplexity) has held for ``stable_rounds``
    consecutive rounds, counting the round where it first matched.

    Only the integer part is compared, so a perplexity that keeps drifting
    inside one unit still counts as stable.
    """

    def __init__(self, stable_rounds: int = 4):
        if stable_rounds < 1:
            raise ValueError("stable_rounds must be >= 1")
        self.stable_rounds = stable_rounds
        self.prev_unit = -1
        self.stable_count = 0
        self.state = MonitorState.RUNNING
        self.trace: List[float] = []

    @property
    def converged(self) -> bool:
        return self.state is MonitorState.CONVERGED

    def observe(self, value: float) -> bool:
        """Record one round's perplexity; return True once converged."""
        if self.converged:
            return True
        self.trace.append(value)
        unit = math.floor(value)
        if unit == self.prev_unit:
            self.stable_count += 1
            if self.stable_count >= self.stable_rounds:
                self.state = MonitorState.CONVERGED
                return True
        else:
            self.stable_count = 1
            self.prev_unit = unit
            # a one-round streak is already enough
            if self.stable_rounds == 1:
                self.state = MonitorState.CONVERGED
                return True
        return False

"""
errors.py

Exceptions raised while loading a citation graph and running PageRank on it.
"""


class PageRankError(Exception):
    """Base class for every failure of the PageRank pipeline."""


class IngestionFormatError(PageRankError, ValueError):
    """An edge-list line holds a token that is not a non-negative integer."""

    def __init__(self, lineno: int, token: str, line: str = ""):
        self.lineno = lineno
        self.token = token
        self.line = line
        super().__init__(f"line {lineno}: malformed page id {token!r}")


class EmptyGraphError(PageRankError, ValueError):
    """The graph has no nodes, so 1/N is undefined."""

    def __init__(self, message: str = "graph has no nodes"):
        super().__init__(message)


class TopologyError(PageRankError, RuntimeError):
    """The graph was mutated after finalize(), or iterated before it."""

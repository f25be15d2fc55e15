"""
ingestion.py

Reads the edge-list format into a CitationGraph.

Each line is ``<target> <source_1> ... <source_n>``: the first page is cited
by every page that follows it on the line, i.e. each ``source_i`` gets an
out-edge to ``target``. A line holding only ``target`` registers an isolated
page. Blank lines are skipped.
"""
import re
from pathlib import Path
from typing import Iterable, Union

from pagerank.errors import IngestionFormatError
from pagerank.graph_model import CitationGraph

_PID_RE = re.compile(r"[0-9]+")


def parse_pid(token: str, lineno: int = 0, line: str = "") -> int:
    # str.isdigit() would also accept things like "²"
    if not _PID_RE.fullmatch(token):
        raise IngestionFormatError(lineno, token, line)
    return int(token)


def parse_edge_list(lines: Iterable[str]) -> CitationGraph:
    """Parse edge-list records and return a finalized graph."""
    graph = CitationGraph()
    for lineno, raw in enumerate(lines, start=1):
        tokens = raw.split()
        if not tokens:
            continue
        target = parse_pid(tokens[0], lineno, raw)
        graph.add_node(target)
        for token in tokens[1:]:
            graph.add_edge(parse_pid(token, lineno, raw), target)
    return graph.finalize()


def load_edge_list(path: Union[str, Path]) -> CitationGraph:
    with open(path, "r", encoding="utf-8") as f:
        return parse_edge_list(f)

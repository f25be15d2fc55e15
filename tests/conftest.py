"""Shared test fixtures."""

from pathlib import Path

import pytest

from pagerank.ingestion import parse_edge_list


@pytest.fixture
def write_edge_file(tmp_path: Path):
    """Write edge-list text to a temporary file and return its path."""

    def _write(text: str, name: str = "graph.dat") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def two_cycle():
    # 1 -> 2 and 2 -> 1
    return parse_edge_list(["1 2", "2 1"])


@pytest.fixture
def edgeless_graph():
    return parse_edge_list(["0", "1", "2", "3", "4"])


@pytest.fixture
def small_web():
    """Six pages with a sink (5), a dangling chain and a duplicate link."""
    return parse_edge_list(
        [
            "1 0 2 3",
            "2 0 1",
            "3 4 4",
            "4 1",
            "5 1 2 3 4",
            "0",
        ]
    )

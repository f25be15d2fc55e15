"""
output.py

Reads and writes the two run artifacts:

* perplexity trace: one float per line, in round order
* scores: ``<pid> <score>`` per line, ascending pid

Floats are written with repr() so reading a file back gives the exact values.
OSError from the filesystem is left to the caller.
"""
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Union

from pagerank.ingestion import parse_pid

PathLike = Union[str, Path]


def format_perplexity_trace(values: Iterable[float]) -> str:
    return "".join(f"{float(v)!r}\n" for v in values)


def format_scores(scores: Mapping[int, float]) -> str:
    return "".join(f"{pid} {float(scores[pid])!r}\n" for pid in sorted(scores))


def write_perplexity_trace(path: PathLike, values: Iterable[float]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_perplexity_trace(values))


def write_scores(path: PathLike, scores: Mapping[int, float]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_scores(scores))


def read_perplexity_trace(path: PathLike) -> List[float]:
    with open(path, "r", encoding="utf-8") as f:
        return [float(line) for line in f if line.strip()]


def read_scores(path: PathLike) -> Dict[int, float]:
    scores = {}
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            fields = line.split()
            if not fields:
                continue
            if len(fields) != 2:
                raise ValueError(f"line {lineno}: expected '<pid> <score>', got {line!r}")
            scores[parse_pid(fields[0], lineno, line)] = float(fields[1])
    return scores

"""Walk a pip ``requirements.txt`` and yield its declared packages."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from ..models import PIP, DependencyRecord
from .classifier import classify_requirement
from .lines import MANIFEST_ENCODING, iter_lines


def iter_dependencies(text: str) -> Iterator[DependencyRecord]:
    """Yield one record per requirement line, in file order.

    Comment-only and blank lines produce nothing but still advance the line
    counter.
    """
    for line_number, raw in iter_lines(text):
        name = classify_requirement(raw)
        if name:
            yield DependencyRecord(name=name, ecosystem=PIP, line_number=line_number)


def parse(path: Path) -> list[DependencyRecord]:
    """Return all records from a requirements file."""
    return list(iter_dependencies(path.read_text(encoding=MANIFEST_ENCODING)))

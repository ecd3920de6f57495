"""Walk a conda ``environment.yml`` and yield its declared packages.

The walker never parses the document as YAML: it needs the physical line of
every dependency, and it has to keep going over files a YAML loader would
reject. Each line goes through ``classify`` together with the current
``ParserState``; records are yielded as soon as their line is seen.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from ..models import DependencyRecord
from .classifier import LineKind, classify
from .lines import MANIFEST_ENCODING, iter_lines
from .state import ParserState

logger = logging.getLogger(__name__)


def iter_dependencies(text: str) -> Iterator[DependencyRecord]:
    """Yield conda and pip records in line order."""
    state = ParserState()

    for line_number, raw in iter_lines(text):
        result = classify(raw, state)

        if result.kind is LineKind.MALFORMED:
            logger.debug("line %d: skipping malformed entry %r", line_number, raw.strip())
        elif result.kind is LineKind.PIP_OPTION:
            logger.debug("line %d: skipping pip option %r", line_number, raw.strip())
        elif result.state.section is not state.section:
            logger.debug(
                "line %d: %s -> %s",
                line_number,
                state.section.value,
                result.state.section.value,
            )
        state = result.state

        for entry in result.entries:
            yield DependencyRecord(
                name=entry.name,
                ecosystem=entry.ecosystem,
                line_number=line_number,
                channel=entry.channel,
            )


def parse(path: Path) -> list[DependencyRecord]:
    """Return all records from an environment file."""
    return list(iter_dependencies(path.read_text(encoding=MANIFEST_ENCODING)))

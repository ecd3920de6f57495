"""Line splitting shared by the manifest walkers."""

from __future__ import annotations

from collections.abc import Iterator

BOM = "\ufeff"

# Manifests written by Windows editors often start with a byte-order mark.
MANIFEST_ENCODING = "utf-8-sig"


def iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, line)`` pairs, numbered from 1.

    Lines are split on ``\\n`` only so numbering agrees with ``git diff``; a
    trailing ``\\r`` is dropped, as is a leading UTF-8 byte-order mark.
    """
    if text.startswith(BOM):
        text = text[len(BOM) :]
    for index, line in enumerate(text.split("\n"), start=1):
        yield index, line.rstrip("\r")

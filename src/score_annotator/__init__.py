"""score-annotator core package.

This package provides reusable manifest parsing and scoring logic that is
callable from both the GitHub Action step and a local CLI.
"""

__all__ = [
    "core",
    "parsers",
]

#!/usr/bin/env python3
"""Local CLI entrypoint to run the annotator outside of GitHub Actions.

Usage:
  python scripts/scan.py --ecosystem pip [--manifest path] [--modified-only --base-ref main] [--json]

This calls the same entrypoint used by the Action step.
"""

from __future__ import annotations

from score_annotator.cli import main


if __name__ == "__main__":
    raise SystemExit(main())

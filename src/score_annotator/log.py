"""Logging setup shared by the CLI entrypoints."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

PACKAGE_LOGGER = "score_annotator"


def _log_level(env: Mapping[str, str]) -> int:
    """Translate LOG_LEVEL (or RUNNER_DEBUG=1) to a logging level, INFO fallback."""
    if env.get("RUNNER_DEBUG") == "1":
        return logging.DEBUG
    level = env.get("LOG_LEVEL", "INFO").upper()
    value = getattr(logging, level, logging.INFO)
    return value if isinstance(value, int) else logging.INFO


def get_logger(name: str | None = None, env: Mapping[str, str] | None = None) -> logging.Logger:
    """Return the package logger, attaching a stderr handler on first use.

    Workflow commands are written to stdout, so log records go to stderr to keep
    the two apart.
    """
    env = os.environ if env is None else env
    logger = logging.getLogger(name or PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(_log_level(env))
    return logger

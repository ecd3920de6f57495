from __future__ import annotations

import logging

import pytest

from score_annotator.log import PACKAGE_LOGGER
from score_annotator.models import Assessment
from score_annotator.scoring import ScoreLookupError


class FakeScoreClient:
    """In-memory stand-in for ScoreClient.

    ``scores`` maps package name to an Assessment, None (not found) or an
    exception instance to raise.
    """

    def __init__(self, scores=None):
        self.scores = scores or {}
        self.calls = []

    def lookup(self, name, ecosystem, channel=None):
        self.calls.append((name, ecosystem, channel))
        result = self.scores.get(name, Assessment("Mature", "Healthy"))
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_client():
    def _make(scores=None):
        return FakeScoreClient(scores)

    return _make


@pytest.fixture
def lookup_error():
    return ScoreLookupError


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

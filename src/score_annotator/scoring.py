"""Client for the package score API."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests
from jsonschema import Draft202012Validator
from packaging.utils import canonicalize_name
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from .models import CONDA, DEFAULT_CHANNEL, PIP, Assessment

DEFAULT_API_URL = "https://openteams-score.vercel.app/api"
DEFAULT_TIMEOUT = 10.0

USER_AGENT = "score-annotator (+https://github.com/features/actions)"

_LABEL_SCHEMA = {
    "type": ["object", "null"],
    "properties": {"value": {"type": ["string", "null"]}},
}

SCORE_RESPONSE_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "properties": {
        "source": {
            "type": ["object", "null"],
            "properties": {
                "maturity": _LABEL_SCHEMA,
                "health_risk": _LABEL_SCHEMA,
            },
        },
    },
}

_VALIDATOR = Draft202012Validator(SCORE_RESPONSE_SCHEMA)

logger = logging.getLogger(__name__)


class ScoreLookupError(RuntimeError):
    """Raised when a package score cannot be fetched or understood."""


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_get(url: str, timeout: float) -> Response:
    return requests.get(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
        timeout=timeout,
    )


def package_url(base_url: str, name: str, ecosystem: str, channel: str | None = None) -> str:
    """Return the score API URL for a package."""
    base = base_url.rstrip("/")
    if ecosystem == PIP:
        return f"{base}/package/pypi/{canonicalize_name(name)}"
    if ecosystem == CONDA:
        return f"{base}/package/conda/{channel or DEFAULT_CHANNEL}/{name}"
    raise ValueError(f"Unsupported package ecosystem: {ecosystem}")


def parse_score_payload(payload: Any) -> Assessment | None:
    """Turn a decoded API response into an Assessment.

    A payload without a ``source`` object means the API has no score for the
    package; None is returned in that case.
    """
    errors = sorted(_VALIDATOR.iter_errors(payload), key=lambda e: list(e.path))
    if errors:
        pointer = "/".join(str(p) for p in errors[0].path) or "<root>"
        raise ScoreLookupError(f"Unexpected response shape at {pointer}: {errors[0].message}")

    source = payload.get("source")
    if not source:
        return None
    return Assessment.from_source(source)


class ScoreClient:
    """Look up maturity and health-risk labels for packages."""

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url
        self.timeout = timeout

    def lookup(self, name: str, ecosystem: str, channel: str | None = None) -> Assessment | None:
        """Return the package's Assessment, or None when the API does not know it."""
        url = package_url(self.base_url, name, ecosystem, channel)
        logger.debug("GET %s", url)

        try:
            response = _http_get(url, self.timeout)
        except requests.RequestException as exc:
            raise ScoreLookupError(f"Error fetching package {name}: {exc}") from exc

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise ScoreLookupError(
                f"Error fetching package {name}: Request failed with status code "
                f"{response.status_code}"
            )

        try:
            payload = json.loads(response.text)
        except json.JSONDecodeError as exc:
            raise ScoreLookupError(f"Invalid JSON for package {name}: {exc.msg}") from exc

        return parse_score_payload(payload)

"""Single-shot JSON GET used by the upstream clients."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)
DEFAULT_TIMEOUT_SECONDS = 12
DEFAULT_USER_AGENT = "scoreboard-sync/1.0 (+https://example.local)"
MAX_ERROR_SNIPPET = 300


class FetchError(RuntimeError):
    pass


def get_json(url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS, *, label: str | None = None) -> Any:
    """GET *url* and decode the JSON body.

    *label* replaces the URL in errors and logs when the URL carries a secret.

    Raises FetchError on network errors, non-2xx responses and non-JSON bodies.
    """

    target = label or url
    headers = {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept": "application/json",
    }
    try:
        response = requests.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        detail = type(exc).__name__ if label else exc
        raise FetchError(f"Request to {target} failed: {detail}") from exc

    if not 200 <= response.status_code < 300:
        body_snippet = (response.text or "")[:MAX_ERROR_SNIPPET]
        logger.error(
            "Upstream non-2xx status=%s url=%s body=%s",
            response.status_code,
            target,
            body_snippet,
        )
        raise FetchError(f"Upstream returned HTTP {response.status_code} for {target}")

    try:
        return response.json()
    except ValueError as exc:
        raise FetchError(f"Upstream returned a non-JSON body for {target}") from exc

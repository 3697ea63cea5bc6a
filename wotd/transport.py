"""Shared HTTP helper for word and dictionary sources."""

from __future__ import annotations

import logging
from time import sleep
from typing import Any

import requests

from .config import cfg_get
from .models import SourceUnavailable


LOGGER = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "word-of-the-day/0.1",
    "Accept": "application/json",
}


def request_with_retry(
    session: requests.Session,
    method: str,
    url: str,
    cfg: dict[str, Any],
    no_retry_status: tuple[int, ...] = (),
    **kwargs: Any,
) -> requests.Response:
    """Send a request, retrying transport errors and error statuses.

    Responses whose status is in `no_retry_status` are returned as-is so the
    caller can interpret them (e.g. 404 from a dictionary).
    """

    retry_count = max(1, int(cfg_get(cfg, "http.retry_count", 3)))
    retry_delay = float(cfg_get(cfg, "http.retry_delay", 1.5))
    timeout = float(cfg_get(cfg, "http.timeout_sec", 20))

    headers = dict(DEFAULT_HEADERS)
    headers.update(kwargs.pop("headers", {}) or {})
    kwargs["headers"] = headers
    kwargs["timeout"] = kwargs.get("timeout", timeout)

    last_exc: Exception | None = None
    for attempt in range(1, retry_count + 1):
        try:
            resp = session.request(method=method, url=url, **kwargs)
            if resp.status_code in no_retry_status:
                return resp
            resp.raise_for_status()
            return resp
        except requests.RequestException as exc:
            last_exc = exc
            LOGGER.warning("Request failed (%s/%s): %s", attempt, retry_count, url)
            if attempt < retry_count:
                sleep(retry_delay)
    raise SourceUnavailable(f"Request failed after retries: {url}") from last_exc


def decode_json(resp: requests.Response, what: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise SourceUnavailable(f"Malformed JSON from {what}") from exc


def send_request(
    session: requests.Session | None,
    method: str,
    url: str,
    cfg: dict[str, Any],
    **kwargs: Any,
) -> requests.Response:
    """Use the caller's session, or a session scoped to this one request."""
    if session is not None:
        return request_with_retry(session, method, url, cfg, **kwargs)
    with requests.Session() as scoped:
        return request_with_retry(scoped, method, url, cfg, **kwargs)

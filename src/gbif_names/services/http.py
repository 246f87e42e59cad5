"""
Shared HTTP session for talking to GBIF.

Provides a ``requests.Session`` with a default timeout and an identifying
User-Agent. Requests are sent once: transient failures surface to the
caller instead of being retried here.

Usage::

    from gbif_names.services.http import create_session

    s = create_session(timeout=10)
    resp = s.get("https://api.gbif.org/v1/species/search", params=[("q", "Puma")])
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from gbif_names.config import DEFAULT_USER_AGENT

#: Single attempt, no read retries. Same as requests' own default adapter.
NO_RETRY = Retry(total=0, read=False)

DEFAULT_TIMEOUT = 30  # seconds


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with the adapter mounted.

    Args:
        retry: Retry strategy for the adapter (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
        user_agent: Value for the ``User-Agent`` header.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = user_agent

    # Wrap send to inject a default timeout so callers don't need to
    # remember to pass ``timeout=`` every time.
    _original_send = s.send

    def _send_with_timeout(
        prepared: requests.PreparedRequest, **kwargs: object
    ) -> requests.Response:
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = timeout
        return _original_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = _send_with_timeout  # type: ignore[method-assign]
    return s

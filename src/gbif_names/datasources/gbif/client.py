"""GBIF API client: endpoint URLs, argument compaction, and the GET helper.

API docs: https://www.gbif.org/developer/species#searching
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import requests

from gbif_names.config import Settings, get_settings
from gbif_names.errors import TransportError
from gbif_names.services.http import create_session

logger = logging.getLogger(__name__)

SPECIES_SEARCH_PATH = "species/search"
MAX_PAGES = 50  # safety cap for paginate=True

# Query parameters as an ordered sequence of (name, value) pairs, so one name
# can repeat.
Params = list[tuple[str, Any]]


def species_search_url(base_url: str | None = None) -> str:
    """Build the species search URL from a base URL (defaults to settings)."""
    base = base_url or get_settings().gbif_base_url
    return f"{base.rstrip('/')}/{SPECIES_SEARCH_PATH}"


def is_empty(value: Any) -> bool:
    """True for ``None`` and for empty strings, lists, tuples and dicts."""
    if value is None:
        return True
    if isinstance(value, str | list | tuple | dict):
        return len(value) == 0
    return False


def compact(args: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Params:
    """
    Drop absent entries from a set of query arguments.

    GBIF treats "parameter absent" differently from "parameter present and
    empty", so ``None`` and empty values are removed rather than sent.

    Accepts a mapping or a sequence of pairs; returns a list of pairs in the
    original order.
    """
    pairs = args.items() if isinstance(args, Mapping) else args
    return [(name, value) for name, value in pairs if not is_empty(value)]


def session_from_settings(settings: Settings | None = None) -> requests.Session:
    """Build a session with the timeout and User-Agent from ``settings``."""
    settings = settings or get_settings()
    return create_session(timeout=settings.timeout, user_agent=settings.user_agent)


def _get_once(
    session: requests.Session,
    url: str,
    params: Params,
    transport_options: Mapping[str, Any],
) -> dict[str, Any]:
    logger.debug("GET %s params=%s", url, params)
    try:
        resp = session.get(url, params=params, **transport_options)
        resp.raise_for_status()
        data: dict[str, Any] = resp.json()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        logger.warning("GBIF request failed with HTTP %s: %s", status, url)
        raise TransportError(f"HTTP {status} from {url}", url=url, status_code=status) from exc
    except requests.RequestException as exc:
        # Also covers JSON decoding errors (requests.JSONDecodeError)
        logger.warning("GBIF request failed: %s (%s)", url, exc)
        raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc
    return data


def _fetch(
    session: requests.Session,
    url: str,
    query: Params,
    paginate: bool,
    options: Mapping[str, Any],
    max_pages: int,
) -> dict[str, Any]:
    data = _get_once(session, url, query, options)
    if not paginate:
        return data

    results: list[dict[str, Any]] = list(data.get("results") or [])
    pages = 1
    while not data.get("endOfRecords", True) and pages < max_pages:
        limit = data.get("limit") or len(data.get("results") or [])
        if not limit:
            break
        offset = (data.get("offset") or 0) + limit
        page_query = [(k, v) for k, v in query if k != "offset"] + [("offset", offset)]
        data = _get_once(session, url, page_query, options)
        results.extend(data.get("results") or [])
        pages += 1

    logger.debug("Fetched %d page(s), %d results from %s", pages, len(results), url)
    return {**data, "offset": _query_offset(query), "results": results}


def gbif_get(
    url: str,
    params: Params | Mapping[str, Any],
    paginate: bool = False,
    transport_options: Mapping[str, Any] | None = None,
    *,
    session: requests.Session | None = None,
    settings: Settings | None = None,
    max_pages: int = MAX_PAGES,
) -> dict[str, Any]:
    """
    GET a GBIF endpoint and return the parsed JSON body.

    Args:
        url: Full endpoint URL (see ``species_search_url``).
        params: Query parameters. Pairs are sent in order, so repeated names
            survive. Absent values are dropped first.
        paginate: Follow ``offset``/``limit`` until ``endOfRecords``,
            concatenating ``results`` into a single payload.
        transport_options: Extra keyword arguments for ``Session.get``
            (``timeout``, ``headers``, ``proxies``, ``verify``...).
        session: Session to use; left open. Without one, a session is built
            from ``settings`` and closed before returning.
        settings: Timeout and User-Agent for the session built here
            (defaults to ``get_settings()``).
        max_pages: Upper bound on pages fetched when ``paginate`` is set.

    Raises:
        TransportError: on network failure, non-2xx status, or a body that
            is not JSON. Nothing is retried.
    """
    options = dict(transport_options or {})
    query = compact(params)

    if session is not None:
        return _fetch(session, url, query, paginate, options, max_pages)
    owned = session_from_settings(settings)
    try:
        return _fetch(owned, url, query, paginate, options, max_pages)
    finally:
        owned.close()


def _query_offset(params: Params) -> int:
    """Offset the first page was requested at (0 when not given)."""
    for name, value in params:
        if name == "offset":
            return int(value)
    return 0

"""Species name lookup across all GBIF checklists.

Example::

    from gbif_names import name_lookup

    name_lookup("mammalia", limit=20)
    name_lookup("Cnaemidophorus", rank="genus", output="hierarchy")
    name_lookup(facet=["status", "higherTaxonKey"], limit=0, facet_mincount="700000")
    name_lookup(rank=["family", "genus"])  # OR'ed by GBIF
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pandas as pd
import requests

from gbif_names.config import Settings, get_settings
from gbif_names.datasources.gbif import client, normalize
from gbif_names.datasources.gbif.params import build_params, validate_request
from gbif_names.errors import InvalidArgumentError
from gbif_names.schemas import Output

# =============================================================================
# Data Models
# =============================================================================


@dataclass
class NameLookupResult:
    """Every view of one species search response."""

    meta: pd.DataFrame
    data: pd.DataFrame | list[dict[str, Any]]
    facets: dict[str, pd.DataFrame] = field(default_factory=dict)
    hierarchies: dict[Any, pd.DataFrame] = field(default_factory=dict)
    names: dict[Any, pd.DataFrame] = field(default_factory=dict)

    @classmethod
    def from_response(
        cls, payload: Mapping[str, Any], *, verbose: bool = False, limit: int = 0
    ) -> NameLookupResult:
        """Normalize a raw ``/species/search`` payload."""
        results: list[dict[str, Any]] = list(payload.get("results") or [])
        return cls(
            meta=normalize.extract_meta(payload),
            data=normalize.flatten_records(results, verbose=verbose, limit=limit),
            facets=normalize.extract_facets(payload),
            hierarchies=normalize.extract_hierarchies(results),
            names=normalize.extract_vernacular_names(results),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "meta": self.meta,
            "data": self.data,
            "facets": self.facets,
            "hierarchies": self.hierarchies,
            "names": self.names,
        }


# =============================================================================
# View selection
# =============================================================================


def parse_output(output: str | Output) -> Output:
    """Validate an output selector."""
    try:
        return Output(output)
    except ValueError:
        choices = ", ".join(o.value for o in Output)
        raise InvalidArgumentError(f"output must be one of {choices}, got {output!r}") from None


def select_view(result: NameLookupResult, output: str | Output = Output.ALL) -> Any:
    """Return the view named by ``output``, or the whole result for ``all``."""
    views = {
        Output.META: result.meta,
        Output.DATA: result.data,
        Output.FACETS: result.facets,
        Output.HIERARCHY: result.hierarchies,
        Output.NAMES: result.names,
        Output.ALL: result,
    }
    return views[parse_output(output)]


# =============================================================================
# API
# =============================================================================


def name_lookup(
    query: str | None = None,
    *,
    rank: str | list[str] | None = None,
    higher_taxon_key: int | str | list[int | str] | None = None,
    status: str | list[str] | None = None,
    is_extinct: bool | str | None = None,
    habitat: str | list[str] | None = None,
    name_type: str | list[str] | None = None,
    dataset_key: str | list[str] | None = None,
    nomenclatural_status: str | list[str] | None = None,
    limit: int = 100,
    start: int | None = None,
    facet: str | list[str] | None = None,
    facet_mincount: str | None = None,
    facet_multiselect: bool | str | None = None,
    search_type: str | None = None,
    hl: bool | str | None = None,
    verbose: bool = False,
    output: str | Output = Output.ALL,
    paginate: bool = False,
    transport_options: Mapping[str, Any] | None = None,
    session: requests.Session | None = None,
    settings: Settings | None = None,
) -> Any:
    """
    Look up names in all taxonomies in GBIF.

    Args:
        query: Full text query, e.g. ``"mammalia"``.
        rank, higher_taxon_key, status, habitat, name_type, dataset_key,
        nomenclatural_status: Filters. Each takes one value or a list;
            several values are OR'ed by GBIF.
        is_extinct: Only extinct (or extant) taxa.
        limit: Page size. ``0`` is handy with ``facet`` to get counts only.
        start: Record offset, for paging through large result sets.
        facet: Field(s) to facet on, e.g. ``"status"``.
        facet_mincount: Minimum facet count, as a string (``"70000"``).
        facet_multiselect: Also count facet values excluded by the filters.
        search_type: GBIF ``type`` parameter.
        hl: Highlight query matches in the returned text fields.
        verbose: Return raw result dicts for ``data`` instead of a table.
        output: One of ``meta``, ``data``, ``facets``, ``hierarchy``,
            ``names`` or ``all``.
        paginate: Fetch every page up to ``endOfRecords`` in one go.
        transport_options: Extra keyword arguments for ``requests``.
        session: ``requests.Session`` to use.
        settings: Settings providing the GBIF base URL (defaults to env).

    Returns:
        The selected view; a ``NameLookupResult`` for ``output="all"``.

    Raises:
        InvalidArgumentError: before any request, for bad criteria.
        TransportError: when the request fails.
    """
    selected = parse_output(output)
    request = validate_request(
        query=query,
        rank=rank,
        higher_taxon_key=higher_taxon_key,
        status=status,
        is_extinct=is_extinct,
        habitat=habitat,
        name_type=name_type,
        dataset_key=dataset_key,
        nomenclatural_status=nomenclatural_status,
        limit=limit,
        start=start,
        facet=facet,
        facet_mincount=facet_mincount,
        facet_multiselect=facet_multiselect,
        search_type=search_type,
        hl=hl,
    )
    params = build_params(request)

    settings = settings or get_settings()
    url = client.species_search_url(settings.gbif_base_url)
    payload = client.gbif_get(
        url, params, paginate, transport_options, session=session, settings=settings
    )

    result = NameLookupResult.from_response(payload, verbose=verbose, limit=request.limit)
    return select_view(result, selected)

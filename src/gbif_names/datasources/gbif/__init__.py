"""GBIF species search data source.

Public API:
  - client: endpoint URLs, ``compact``, ``gbif_get`` (single GET, optional paging)
  - params: search criteria -> query parameters
  - normalize: response -> meta/data/facets/hierarchies/names views
  - lookup: ``name_lookup``, ``NameLookupResult``, ``select_view``
"""

from gbif_names.datasources.gbif.client import compact, gbif_get, species_search_url
from gbif_names.datasources.gbif.lookup import NameLookupResult, name_lookup, select_view
from gbif_names.datasources.gbif.params import as_bool_token, build_params, validate_request

__all__ = [
    "NameLookupResult",
    "as_bool_token",
    "build_params",
    "compact",
    "gbif_get",
    "name_lookup",
    "select_view",
    "species_search_url",
    "validate_request",
]

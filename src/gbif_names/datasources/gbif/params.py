"""Turn search criteria into GBIF query parameters."""

from __future__ import annotations

from numbers import Number
from typing import Any

from pydantic import ValidationError

from gbif_names.datasources.gbif.client import Params, compact
from gbif_names.errors import InvalidArgumentError
from gbif_names.schemas import SearchRequest

# SearchRequest field -> GBIF parameter, for filters that may repeat.
MULTI_VALUED = {
    "rank": "rank",
    "higher_taxon_key": "higherTaxonKey",
    "status": "status",
    "habitat": "habitat",
    "name_type": "nameType",
    "dataset_key": "datasetKey",
    "nomenclatural_status": "nomenclaturalStatus",
}

_BOOL_TOKENS = {True: "true", False: "false"}


def as_bool_token(value: bool | str | None, name: str = "value") -> str | None:
    """
    Map a boolean-like option to GBIF's ``"true"``/``"false"`` token.

    ``None`` stays ``None`` (the parameter is then dropped). Strings are only
    accepted when they already spell a token.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return _BOOL_TOKENS[value]
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower()
    raise InvalidArgumentError(f"{name} must be a boolean or 'true'/'false', got {value!r}")


def as_many_args(name: str, value: Any) -> Params:
    """Expand one or many values into repeated ``(name, value)`` pairs."""
    if value is None:
        return []
    values = value if isinstance(value, list | tuple) else [value]
    return compact((name, v) for v in values)


def validate_request(**criteria: Any) -> SearchRequest:
    """
    Build a ``SearchRequest``, reporting problems as ``InvalidArgumentError``.

    ``facet_mincount`` gets its own check: GBIF wants it as text and fails on
    a number, so ``facet_mincount=70000`` is rejected here while
    ``facet_mincount="70000"`` passes.
    """
    mincount = criteria.get("facet_mincount")
    if isinstance(mincount, Number):
        raise InvalidArgumentError(
            f"facet_mincount must be a string (e.g. '{mincount}'), got {type(mincount).__name__}"
        )
    try:
        return SearchRequest(**criteria)
    except ValidationError as exc:
        raise InvalidArgumentError(str(exc)) from exc


def build_params(request: SearchRequest) -> Params:
    """
    Flatten a ``SearchRequest`` into the pairs sent to ``/species/search``.

    Scalars come first, then one ``facet`` pair per facet field, then the
    multi-valued filters. Absent values are left out entirely.
    """
    scalars = compact(
        {
            "q": request.query,
            "isExtinct": as_bool_token(request.is_extinct, "is_extinct"),
            "limit": request.limit,
            "offset": request.start,
            "facetMincount": request.facet_mincount,
            "facetMultiselect": as_bool_token(request.facet_multiselect, "facet_multiselect"),
            "hl": as_bool_token(request.hl, "hl"),
            "type": request.search_type,
        }
    )
    params: Params = [*scalars, *as_many_args("facet", request.facet)]
    for field, gbif_name in MULTI_VALUED.items():
        params.extend(as_many_args(gbif_name, getattr(request, field)))
    return params

"""
Reshape a ``/species/search`` response into tables.

Every function here is pure: the JSON payload is read, never modified, so
normalizing the same response twice gives identical views.

Views:
  - meta: one-row table of ``offset``, ``limit``, ``endOfRecords``, ``count``
  - data: one row per result; columns are the union of fields across results
  - facets: ``{field: (name, count) table}``
  - hierarchies: ``{record key: (rankkey, name) table}``
  - names: ``{record key: vernacular names table}``
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

import pandas as pd

from gbif_names.datasources.gbif.client import is_empty

logger = logging.getLogger(__name__)

META_FIELDS = ("offset", "limit", "endOfRecords", "count")

# Nested fields with their own views (or too long for a table cell).
NESTED_FIELDS = frozenset({"descriptions", "vernacularNames", "higherClassificationMap"})

LEAD_COLUMNS = ("key", "scientificName")


# =============================================================================
# Helpers
# =============================================================================


def _cell_text(value: Any) -> str:
    if isinstance(value, dict | list):
        return json.dumps(value, sort_keys=True)
    return str(value)


def _flatten_value(value: Any) -> Any:
    """Collapse one JSON value into a table cell."""
    if is_empty(value):
        return pd.NA
    if isinstance(value, dict):
        return ", ".join(_cell_text(v) for v in value.values())
    if isinstance(value, list):
        if len(value) == 1 and not isinstance(value[0], dict | list):
            return value[0]
        return ", ".join(_cell_text(v) for v in value)
    return value


def _frame(rows: list[Mapping[str, Any]], columns: list[str] | None = None) -> pd.DataFrame:
    """Row-merge dicts into a frame; fields missing from a row become NA."""
    if not rows:
        return pd.DataFrame(columns=columns or [])
    return pd.DataFrame.from_records(rows, columns=columns).convert_dtypes()


def move_columns(df: pd.DataFrame, lead: tuple[str, ...] = LEAD_COLUMNS) -> pd.DataFrame:
    """Reorder so the ``lead`` columns that exist come first."""
    first = [c for c in lead if c in df.columns]
    rest = [c for c in df.columns if c not in first]
    return df[first + rest]


def _keyed(results: list[dict[str, Any]], view: str) -> list[tuple[Any, dict[str, Any]]]:
    """Pair each result with its key, skipping results that have none."""
    keyed = []
    for record in results:
        key = record.get("key")
        if key is None:
            logger.debug("Skipping result without a key in %s view", view)
            continue
        keyed.append((key, record))
    return keyed


# =============================================================================
# Views
# =============================================================================


def extract_meta(payload: Mapping[str, Any]) -> pd.DataFrame:
    """Project the paging scalars into a one-row table."""
    return pd.DataFrame([{name: payload.get(name) for name in META_FIELDS}], columns=list(META_FIELDS))


def flatten_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """
    Flatten one result into a single row.

    The nested fields in ``NESTED_FIELDS`` are dropped. Empty values become
    NA, single-element lists are unwrapped, and longer lists (or maps) are
    joined with ``", "``.
    """
    return {
        name: _flatten_value(value) for name, value in record.items() if name not in NESTED_FIELDS
    }


def flatten_records(
    results: list[dict[str, Any]],
    verbose: bool = False,
    limit: int = 0,
) -> pd.DataFrame | list[dict[str, Any]]:
    """
    Build the data view.

    With ``verbose`` the results come back as-is. Otherwise each record is
    flattened and the rows merged; when ``limit`` is non-zero, ``key`` and
    ``scientificName`` are moved to the front.
    """
    if verbose:
        return results
    df = _frame([flatten_record(r) for r in results])
    if limit > 0:
        df = move_columns(df)
    return df


def extract_facets(payload: Mapping[str, Any]) -> dict[str, pd.DataFrame]:
    """Build ``{field: counts}`` tables; ``{}`` when the response has no facets."""
    facets = payload.get("facets") or []
    tables: dict[str, pd.DataFrame] = {}
    for facet in facets:
        field = str(facet.get("field", "")).lower()
        tables[field] = _frame(list(facet.get("counts") or []), columns=["name", "count"])
    return tables


def extract_hierarchies(results: list[dict[str, Any]]) -> dict[Any, pd.DataFrame]:
    """
    Build ``{key: (rankkey, name)}`` tables from each classification map.

    Ranks with no name are dropped; records left with nothing (or whose map
    is not a mapping) are omitted.
    """
    hierarchies: dict[Any, pd.DataFrame] = {}
    for key, record in _keyed(results, "hierarchy"):
        classification = record.get("higherClassificationMap")
        if not isinstance(classification, Mapping):
            continue
        rows = [
            {"rankkey": rank, "name": name}
            for rank, name in classification.items()
            if not is_empty(name)
        ]
        if rows:
            hierarchies[key] = _frame(rows, columns=["rankkey", "name"])
    return hierarchies


def extract_vernacular_names(results: list[dict[str, Any]]) -> dict[Any, pd.DataFrame]:
    """Build ``{key: vernacular names}`` tables, omitting records without any."""
    names: dict[Any, pd.DataFrame] = {}
    for key, record in _keyed(results, "names"):
        entries = record.get("vernacularNames")
        if not isinstance(entries, list):
            continue
        rows = [row for row in entries if isinstance(row, Mapping) and row]
        if rows:
            names[key] = _frame(rows)
    return names

"""
Request models for the GBIF species search.

Pydantic models validate what the caller passes in before anything is sent
to GBIF. Responses stay as plain JSON dicts and are reshaped by
``datasources.gbif.normalize``.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr

# A filter can be absent, a single value, or several values (OR'ed by GBIF).
FilterValue = StrictStr | StrictInt | list[StrictStr | StrictInt] | None

# Boolean-like options: a real bool or the textual tokens "true"/"false".
BoolLike = StrictBool | StrictStr | None


class Output(StrEnum):
    """Which view of a species search to return."""

    META = "meta"
    DATA = "data"
    FACETS = "facets"
    HIERARCHY = "hierarchy"
    NAMES = "names"
    ALL = "all"

    @classmethod
    def _missing_(cls, value: object) -> Output | None:
        if isinstance(value, str) and value.lower() == "metadata":
            return cls.META
        return None


class TaxonomicStatus(StrEnum):
    """Values GBIF accepts for the ``status`` filter."""

    ACCEPTED = "accepted"
    DOUBTFUL = "doubtful"
    SYNONYM = "synonym"
    HETEROTYPIC_SYNONYM = "heterotypic_synonym"
    HOMOTYPIC_SYNONYM = "homotypic_synonym"
    PROPARTE_SYNONYM = "proparte_synonym"
    MISAPPLIED = "misapplied"


class Habitat(StrEnum):
    """Values GBIF accepts for the ``habitat`` filter."""

    MARINE = "marine"
    FRESHWATER = "freshwater"
    TERRESTRIAL = "terrestrial"


class SearchRequest(BaseModel):
    """Criteria for one ``/species/search`` call."""

    model_config = {"extra": "forbid", "str_strip_whitespace": True}

    query: StrictStr | None = Field(default=None, description="Full text query (q)")
    rank: FilterValue = None
    higher_taxon_key: FilterValue = None
    status: FilterValue = None
    is_extinct: BoolLike = None
    habitat: FilterValue = None
    name_type: FilterValue = None
    dataset_key: FilterValue = None
    nomenclatural_status: FilterValue = None
    limit: StrictInt = Field(default=100, ge=0)
    start: StrictInt | None = Field(default=None, ge=0, description="Record offset")
    facet: StrictStr | list[StrictStr] | None = None
    # GBIF rejects a numeric facetMincount, it has to arrive as text.
    facet_mincount: StrictStr | None = None
    facet_multiselect: BoolLike = None
    search_type: StrictStr | None = Field(default=None, description="GBIF 'type' parameter")
    hl: BoolLike = None

"""Tests for turning search criteria into GBIF query parameters."""

from __future__ import annotations

import pytest

from gbif_names.datasources.gbif.params import (
    as_bool_token,
    as_many_args,
    build_params,
    validate_request,
)
from gbif_names.errors import InvalidArgumentError
from gbif_names.schemas import SearchRequest


class TestAsBoolToken:
    """Test the boolean -> token mapping."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, "true"), (False, "false"), ("TRUE", "true"), (" false ", "false"), (None, None)],
    )
    def test_mapping(self, value: bool | str | None, expected: str | None) -> None:
        assert as_bool_token(value) == expected

    @pytest.mark.parametrize("value", ["yes", "1", ""])
    def test_rejects_other_strings(self, value: str) -> None:
        with pytest.raises(InvalidArgumentError):
            as_bool_token(value, "hl")


class TestAsManyArgs:
    """Test expansion of multi-valued filters."""

    def test_single_value(self) -> None:
        assert as_many_args("rank", "genus") == [("rank", "genus")]

    def test_many_values_repeat_name(self) -> None:
        assert as_many_args("rank", ["family", "genus"]) == [("rank", "family"), ("rank", "genus")]

    def test_none(self) -> None:
        assert as_many_args("rank", None) == []


class TestValidateRequest:
    """Test request validation."""

    @pytest.mark.parametrize("mincount", [70000, 70000.0, True])
    def test_numeric_facet_mincount_rejected(self, mincount: object) -> None:
        with pytest.raises(InvalidArgumentError, match="facet_mincount"):
            validate_request(facet="status", limit=0, facet_mincount=mincount)

    def test_text_facet_mincount_accepted(self) -> None:
        request = validate_request(facet="status", limit=0, facet_mincount="70000")
        assert request.facet_mincount == "70000"

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            validate_request(limit=-1)

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            validate_request(start=-5)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError):
            validate_request(kingdom="Animalia")


class TestBuildParams:
    """Test build_params."""

    def test_defaults_only_send_limit(self) -> None:
        assert build_params(SearchRequest()) == [("limit", 100)]

    def test_query_and_offset(self) -> None:
        params = build_params(SearchRequest(query="mammalia", limit=1, start=2))
        assert params == [("q", "mammalia"), ("limit", 1), ("offset", 2)]

    def test_zero_limit_is_sent(self) -> None:
        assert ("limit", 0) in build_params(SearchRequest(limit=0))

    def test_multi_valued_filters_repeat(self) -> None:
        params = build_params(
            SearchRequest(
                rank=["family", "genus"],
                higher_taxon_key=["119", 120],
                status=["misapplied", "synonym"],
                habitat=["marine", "terrestrial"],
                name_type=["cultivar", "doubtful"],
                dataset_key="d7c60346-44b6-400d-ba27-8d3fbeffc8a5",
            )
        )
        assert [v for k, v in params if k == "rank"] == ["family", "genus"]
        assert [v for k, v in params if k == "higherTaxonKey"] == ["119", 120]
        assert [v for k, v in params if k == "status"] == ["misapplied", "synonym"]
        assert [v for k, v in params if k == "habitat"] == ["marine", "terrestrial"]
        assert [v for k, v in params if k == "nameType"] == ["cultivar", "doubtful"]
        assert [v for k, v in params if k == "datasetKey"] == [
            "d7c60346-44b6-400d-ba27-8d3fbeffc8a5"
        ]

    def test_facets_repeat_facet_name(self) -> None:
        params = build_params(
            SearchRequest(facet=["status", "higherTaxonKey"], limit=0, facet_mincount="700000")
        )
        assert [v for k, v in params if k == "facet"] == ["status", "higherTaxonKey"]
        assert ("facetMincount", "700000") in params

    def test_boolean_options_become_tokens(self) -> None:
        params = build_params(SearchRequest(is_extinct=True, facet_multiselect=False, hl="TRUE"))
        assert ("isExtinct", "true") in params
        assert ("facetMultiselect", "false") in params
        assert ("hl", "true") in params

    def test_bad_boolean_token(self) -> None:
        with pytest.raises(InvalidArgumentError, match="hl"):
            build_params(SearchRequest(hl="yes"))

    def test_absent_values_dropped(self) -> None:
        params = build_params(SearchRequest(query=None, rank=None, is_extinct=None, hl=None))
        names = {k for k, _ in params}
        assert names == {"limit"}

    def test_search_type_and_nomenclatural_status(self) -> None:
        params = build_params(
            SearchRequest(search_type="checklist", nomenclatural_status=["nudum", "illegitimate"])
        )
        assert ("type", "checklist") in params
        assert [v for k, v in params if k == "nomenclaturalStatus"] == ["nudum", "illegitimate"]

    def test_scalars_before_filters(self) -> None:
        params = build_params(SearchRequest(query="Puma", rank="genus", facet="status"))
        names = [k for k, _ in params]
        assert names.index("q") < names.index("facet") < names.index("rank")

"""Tests for the typed request models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from herosearch.models.requests import (
    MAX_RESULT_WINDOW,
    BoolClause,
    DeleteRequest,
    IndexRequest,
    MatchClause,
    MultiMatchClause,
    SearchRequest,
    SortClause,
)


class TestIndexAndDeleteRequests:
    def test_index_params(self) -> None:
        request = IndexRequest(index="widgets", id="7", body={"name": "x"})
        assert request.to_params() == {"index": "widgets", "id": "7", "document": {"name": "x"}}

    def test_delete_params_have_no_body(self) -> None:
        assert DeleteRequest(index="widgets", id="7").to_params() == {"index": "widgets", "id": "7"}


class TestClauses:
    def test_multi_match(self) -> None:
        clause = MultiMatchClause(query="e-ma", fields=["title"])
        assert clause.to_dsl() == {"multi_match": {"query": "e-ma", "fields": ["title"], "type": "phrase_prefix"}}

    def test_match(self) -> None:
        assert MatchClause(field="status", value="active").to_dsl() == {"match": {"status": "active"}}

    def test_empty_bool(self) -> None:
        assert BoolClause().to_dsl() == {"bool": {"must": []}}

    def test_nested_bool(self) -> None:
        inner = BoolClause(must=[MatchClause(field="a", value=1)])
        outer = BoolClause(must=[inner, MatchClause(field="b", value=2)])
        assert outer.to_dsl() == {
            "bool": {"must": [{"bool": {"must": [{"match": {"a": 1}}]}}, {"match": {"b": 2}}]}
        }

    def test_bool_accepts_plain_dicts(self) -> None:
        clause = BoolClause.model_validate({"must": [{"kind": "match", "field": "a", "value": 1}]})
        assert isinstance(clause.must[0], MatchClause)

    def test_sort(self) -> None:
        assert SortClause(field="price", direction="desc").to_dsl() == {"price": {"order": "desc"}}

    def test_sort_direction_is_checked(self) -> None:
        with pytest.raises(ValidationError):
            SortClause(field="price", direction="sideways")


class TestSearchRequest:
    def test_defaults(self) -> None:
        request = SearchRequest(index="widgets")
        assert request.to_body() == {"from": 0, "size": 5000, "query": {"bool": {"must": []}}, "sort": []}

    def test_from_alias(self) -> None:
        assert SearchRequest(index="w", **{"from": 40}).from_ == 40
        assert SearchRequest(index="w", from_=40).from_ == 40

    @pytest.mark.parametrize("params", [{"from": -1}, {"size": 0}, {"size": MAX_RESULT_WINDOW + 1}])
    def test_bounds(self, params: dict) -> None:
        with pytest.raises(ValidationError):
            SearchRequest(index="w", **params)

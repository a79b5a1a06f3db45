"""Tests for the default index analysis settings."""

from __future__ import annotations

from herosearch.engines.elasticsearch.analysis import DEFAULT_INDEX_BODY, build_index_body, deep_merge


class TestDeepMerge:
    def test_nested_keys_are_merged(self) -> None:
        merged = deep_merge({"a": {"b": 1, "c": 2}}, {"a": {"c": 3, "d": 4}})
        assert merged == {"a": {"b": 1, "c": 3, "d": 4}}

    def test_override_replaces_non_mapping(self) -> None:
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}
        assert deep_merge({"a": {"b": 1}}, {"a": "flat"}) == {"a": "flat"}

    def test_inputs_are_not_modified(self) -> None:
        base = {"a": {"b": 1}}
        overrides = {"a": {"c": 2}}
        deep_merge(base, overrides)
        assert base == {"a": {"b": 1}}
        assert overrides == {"a": {"c": 2}}


class TestBuildIndexBody:
    def test_without_options_is_default(self) -> None:
        assert build_index_body() == DEFAULT_INDEX_BODY

    def test_result_does_not_alias_defaults(self) -> None:
        body = build_index_body()
        body["settings"]["analysis"]["analyzer"]["default"]["tokenizer"] = "whitespace"
        assert DEFAULT_INDEX_BODY["settings"]["analysis"]["analyzer"]["default"]["tokenizer"] == "standard"

    def test_caller_can_replace_analyzer_filters(self) -> None:
        body = build_index_body({"settings": {"analysis": {"analyzer": {"default": {"filter": ["lowercase"]}}}}})
        analyzer = body["settings"]["analysis"]["analyzer"]["default"]
        assert analyzer["filter"] == ["lowercase"]
        assert analyzer["tokenizer"] == "standard"


class TestDefaultAnalyzer:
    def test_standard_tokenizer_then_word_delimiter(self) -> None:
        analysis = DEFAULT_INDEX_BODY["settings"]["analysis"]
        analyzer = analysis["analyzer"]["default"]

        assert analyzer["tokenizer"] == "standard"
        assert analyzer["filter"][-1] == "word_delimiter_preserve"
        assert analysis["filter"]["word_delimiter_preserve"]["preserve_original"] is True

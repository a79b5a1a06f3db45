"""Tests for the Searchable base class defaults."""

from __future__ import annotations

import pytest

from herosearch.models.searchable import Searchable
from tests.fakes import Gadget, Widget


class TestSearchableDefaults:
    def test_default_index_name(self) -> None:
        assert Widget.searchable_as() == "widgets"

    def test_optional_capabilities_default_to_none(self) -> None:
        assert Widget.es_index_name() is None
        assert Gadget.searchable_fields() is None

    def test_default_index_options(self) -> None:
        assert Widget.index_options() == {}

    def test_key(self) -> None:
        assert Widget(5, "w").get_scout_key() == 5
        assert Gadget("sku-1", "g").get_scout_key() == "sku-1"

    def test_searchable_array_skips_private_attributes(self) -> None:
        widget = Widget(1, "w")
        widget._cache = object()
        assert widget.to_searchable_array() == {"id": 1, "name": "w", "colour": "blue"}

    def test_lookup_is_required(self) -> None:
        class Incomplete(Searchable):
            pass

        with pytest.raises(TypeError):
            Incomplete()

"""Default index settings — Analyzer used by every index the engine creates.

The ``default`` analyzer strips HTML, splits text with the standard
tokenizer, lowercases, and runs a word-delimiter filter over each token. The
filter keeps the original token, splits it on letter/digit boundaries and
intra-word delimiters the tokenizer left in place, and also emits the
concatenation of the parts. ``"sprocket2000"`` is indexed as
``sprocket2000``, ``sprocket`` and ``2000``. Hyphenated words such as
``"e-mail"`` are already split by the standard tokenizer, so they are indexed
as ``e`` and ``mail`` only.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

WORD_DELIMITER_FILTER = "word_delimiter_preserve"

DEFAULT_INDEX_BODY: dict[str, Any] = {
    "settings": {
        "analysis": {
            "analyzer": {
                "default": {
                    "type": "custom",
                    "tokenizer": "standard",
                    "char_filter": ["html_strip"],
                    "filter": ["lowercase", WORD_DELIMITER_FILTER],
                },
            },
            "filter": {
                WORD_DELIMITER_FILTER: {
                    "type": "word_delimiter",
                    "preserve_original": True,
                    "catenate_all": True,
                },
            },
        },
    },
}


def deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *base* with *overrides* merged in.

    Nested mappings are merged key by key; any other value in *overrides*
    replaces the one in *base*. Neither argument is modified.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def build_index_body(options: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Create-index body: the default analysis settings with *options* on top."""
    return deep_merge(DEFAULT_INDEX_BODY, options or {})

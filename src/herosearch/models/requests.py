"""Request models — Typed Elasticsearch request bodies built by the engine.

Every request the engine sends is first assembled as one of these models and
then rendered to the plain mapping the client expects. Keeping the structure
typed makes the query-assembly steps testable without a client.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Elasticsearch's default ``index.max_result_window``
MAX_RESULT_WINDOW = 10_000

DEFAULT_FROM = 0
DEFAULT_SIZE = 5_000


class IndexRequest(BaseModel):
    """Upsert of a single document."""

    index: str = Field(description="Resolved index name")
    id: str = Field(description="Document identifier")
    body: dict[str, Any] = Field(default_factory=dict, description="Searchable field map")

    def to_params(self) -> dict[str, Any]:
        return {"index": self.index, "id": self.id, "document": self.body}


class DeleteRequest(BaseModel):
    """Removal of a single document."""

    index: str = Field(description="Resolved index name")
    id: str = Field(description="Document identifier")

    def to_params(self) -> dict[str, Any]:
        return {"index": self.index, "id": self.id}


# ── Query clauses ────────────────────────────────────────────────────────────


class MultiMatchClause(BaseModel):
    """Full-text match of one query string across several fields."""

    kind: Literal["multi_match"] = "multi_match"
    query: str
    fields: list[str] = Field(default_factory=list, description="Empty means the index default fields")
    type: str = Field(default="phrase_prefix", description="Elasticsearch multi_match type")

    def to_dsl(self) -> dict[str, Any]:
        return {"multi_match": {"query": self.query, "fields": list(self.fields), "type": self.type}}


class MatchClause(BaseModel):
    """Equality-style match on a single field."""

    kind: Literal["match"] = "match"
    field: str
    value: Any

    def to_dsl(self) -> dict[str, Any]:
        return {"match": {self.field: self.value}}


class BoolClause(BaseModel):
    """AND of zero or more clauses. An empty ``must`` matches every document."""

    kind: Literal["bool"] = "bool"
    must: list[QueryClause] = Field(default_factory=list)

    def to_dsl(self) -> dict[str, Any]:
        return {"bool": {"must": [clause.to_dsl() for clause in self.must]}}


QueryClause = Annotated[
    MultiMatchClause | MatchClause | BoolClause,
    Field(discriminator="kind"),
]

BoolClause.model_rebuild()


class SortClause(BaseModel):
    """One sort key. Earlier clauses take precedence."""

    field: str
    direction: Literal["asc", "desc"] = "asc"

    def to_dsl(self) -> dict[str, Any]:
        return {self.field: {"order": self.direction}}


# ── Search ───────────────────────────────────────────────────────────────────


class SearchRequest(BaseModel):
    """A complete search call: target index plus request body."""

    model_config = ConfigDict(populate_by_name=True)

    index: str = Field(description="Resolved index name")
    from_: int = Field(default=DEFAULT_FROM, ge=0, alias="from", description="Offset of the first hit")
    size: int = Field(default=DEFAULT_SIZE, gt=0, le=MAX_RESULT_WINDOW, description="Maximum hits returned")
    query: QueryClause = Field(default_factory=BoolClause)
    sort: list[SortClause] = Field(default_factory=list)

    def to_body(self) -> dict[str, Any]:
        """Render the request body in Elasticsearch's query DSL."""
        return {
            "from": self.from_,
            "size": self.size,
            "query": self.query.to_dsl(),
            "sort": [clause.to_dsl() for clause in self.sort],
        }

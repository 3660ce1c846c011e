"""
Wikidata Query Service – Pydantic models for painting results.

Used for validation, JSON parsing, and a single source of truth
for the SPARQL bindings returned by WDQS and the slim artwork records
written to data.json.
"""

from pydantic import BaseModel, ConfigDict


class SparqlValue(BaseModel):
    """One RDF term in a binding (uri or literal)."""

    model_config = ConfigDict(extra="ignore")

    type: str | None = None
    value: str


class PaintingBinding(BaseModel):
    """
    One result row of the painting query.

    item and image are always selected; labels are optional.
    sitelinks is only used for server-side ordering.
    """

    model_config = ConfigDict(extra="ignore")

    item: SparqlValue
    itemLabel: SparqlValue | None = None
    creatorLabel: SparqlValue | None = None
    image: SparqlValue
    sitelinks: SparqlValue | None = None


class SparqlResults(BaseModel):
    bindings: list[PaintingBinding]


class SparqlResponse(BaseModel):
    """Top-level application/sparql-results+json body."""

    model_config = ConfigDict(extra="ignore")

    results: SparqlResults


class Artwork(BaseModel):
    """Output record: one painting in data.json."""

    id: str
    title: str
    artist: str
    image: str

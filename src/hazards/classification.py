"""GHS hazard statement extraction from PubChem classification responses.

A classification response looks like:

    {"Hierarchies": {"Hierarchy": [
        {"SourceName": "GHS Classification (UNECE)",
         "Node": [{"Information": {"Name": "H300: Fatal if swallowed"}}, ...]},
        ...
    ]}}

Every field is optional in the models below. Anything missing or malformed
degrades to None (the absent marker) instead of raising. A malformed entry
only blanks itself: its siblings still validate.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

GHS_SOURCE_NAME = os.getenv("GHS_SOURCE_NAME", "GHS Classification (UNECE)")

# Unanchored on purpose: "Health category" also matches.
HAZARD_MARKER = "H"


class _Record(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


def _each_or_placeholder(value: Any, handler: ValidatorFunctionWrapHandler, placeholder: type[_Record]) -> list:
    """Validate list items one by one; an invalid item becomes an empty placeholder.

    Placeholders keep positions stable, so hierarchy indexes still follow
    response order.
    """
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        try:
            items.extend(handler([item]))
        except ValidationError:
            items.append(placeholder())
    return items


class NodeInformation(_Record):
    name: str | None = Field(default=None, alias="Name")

    @field_validator("name", mode="before")
    @classmethod
    def _text_only(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


class Node(_Record):
    information: NodeInformation | None = Field(default=None, alias="Information")


class Hierarchy(_Record):
    source_name: str | None = Field(default=None, alias="SourceName")
    nodes: list[Node] = Field(default_factory=list, alias="Node")

    @field_validator("source_name", mode="before")
    @classmethod
    def _text_only(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("nodes", mode="wrap")
    @classmethod
    def _lenient_nodes(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> list[Node]:
        return _each_or_placeholder(value, handler, Node)


class HierarchyList(_Record):
    hierarchy: list[Hierarchy] = Field(default_factory=list, alias="Hierarchy")

    @field_validator("hierarchy", mode="wrap")
    @classmethod
    def _lenient_hierarchies(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> list[Hierarchy]:
        return _each_or_placeholder(value, handler, Hierarchy)


class ClassificationResponse(_Record):
    hierarchies: HierarchyList | None = Field(default=None, alias="Hierarchies")


def parse_classification(raw: Any) -> ClassificationResponse | None:
    """Validate a decoded JSON payload. Returns None if it cannot be read."""
    if isinstance(raw, ClassificationResponse):
        return raw
    if not isinstance(raw, dict):
        return None
    try:
        return ClassificationResponse.model_validate(raw)
    except ValidationError:
        return None


def locate_scheme(response: Any, source_name: str = GHS_SOURCE_NAME) -> int | None:
    """Return the index of the first hierarchy named ``source_name``.

    Matching is exact and case-sensitive. Returns None when the response has
    no ``Hierarchies`` field or no hierarchy matches.
    """
    parsed = parse_classification(response)
    if parsed is None or parsed.hierarchies is None:
        return None
    for i, hierarchy in enumerate(parsed.hierarchies.hierarchy):
        if hierarchy.source_name == source_name:
            return i
    return None


def extract_hazard_statements(position: int | None, response: Any) -> list[str] | None:
    """Collect node names containing "H" from the hierarchy at ``position``.

    Returns None if ``position`` is None (scheme not found). A matched
    hierarchy with no qualifying nodes gives an empty list.
    """
    if position is None:
        return None
    parsed = parse_classification(response)
    if parsed is None or parsed.hierarchies is None:
        return None
    hierarchies = parsed.hierarchies.hierarchy
    if not 0 <= position < len(hierarchies):
        return None

    statements = []
    for node in hierarchies[position].nodes:
        name = node.information.name if node.information else None
        if name is not None and HAZARD_MARKER in name:
            statements.append(name)
    return statements


def hazards_from_response(response: Any, source_name: str = GHS_SOURCE_NAME) -> list[str] | None:
    """Locate the scheme, then extract its hazard statements."""
    parsed = parse_classification(response)
    return extract_hazard_statements(locate_scheme(parsed, source_name), parsed)

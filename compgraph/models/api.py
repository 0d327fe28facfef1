"""Remote API payload shapes.

Responses are decoded explicitly into optional-field dataclasses so the
resolvers never walk raw JSON. Absent or null collections decode to empty
tuples; anything structurally wrong raises ResponseFormatError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from compgraph.errors import ResponseFormatError
from compgraph.models.graph import ResourceId, ResourceMetadata


def _expect_mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ResponseFormatError(f"{where}: expected an object, got {type(value).__name__}")
    return value


def _parse_version(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    message = f"ComponentMetadata.version is not an integer: {value!r}"
    # The API has been observed returning numeric strings here.
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as exc:
            raise ResponseFormatError(message) from exc
    raise ResponseFormatError(message)


def _optional_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ResponseFormatError(f"{where}: expected an array, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class ComponentMetadataPayload:
    """Body of ``GET /ComponentMetadata/{id}``."""

    name: str
    type: str
    version: int | None = None

    @classmethod
    def from_json(cls, data: Any) -> ComponentMetadataPayload:
        body = _expect_mapping(data, "ComponentMetadata")
        return cls(
            name=str(body.get("name", "")),
            type=str(body.get("type", "")),
            version=_parse_version(body.get("version")),
        )

    def to_metadata(self, component_id: ResourceId) -> ResourceMetadata:
        return ResourceMetadata(
            id=component_id,
            display_name=self.name,
            category=self.type,
            version=self.version,
        )


@dataclass(frozen=True)
class ComponentReference:
    """One entry of a reference group."""

    component_id: ResourceId

    @classmethod
    def from_json(cls, data: Any) -> ComponentReference:
        body = _expect_mapping(data, "ComponentReference")
        component_id = body.get("componentId")
        if not isinstance(component_id, str) or not component_id:
            raise ResponseFormatError(f"ComponentReference.componentId missing or invalid: {component_id!r}")
        return cls(component_id=component_id)


@dataclass(frozen=True)
class ReferenceGroup:
    """A single ``result`` entry; groups references by parent."""

    references: tuple[ComponentReference, ...] = ()

    @classmethod
    def from_json(cls, data: Any) -> ReferenceGroup:
        body = _expect_mapping(data, "ReferenceGroup")
        refs = _optional_list(body.get("references"), "ReferenceGroup.references")
        return cls(references=tuple(ComponentReference.from_json(ref) for ref in refs))


@dataclass(frozen=True)
class ReferenceQueryResponse:
    """Body of ``POST /ComponentReference/query``."""

    result: tuple[ReferenceGroup, ...] = field(default_factory=tuple)

    @classmethod
    def from_json(cls, data: Any) -> ReferenceQueryResponse:
        body = _expect_mapping(data, "ComponentReferenceQueryResponse")
        groups = _optional_list(body.get("result"), "ComponentReferenceQueryResponse.result")
        return cls(result=tuple(ReferenceGroup.from_json(group) for group in groups))

    def referenced_ids(self) -> list[ResourceId]:
        """Flatten every group into one ordered list of component ids."""
        return [ref.component_id for group in self.result for ref in group.references]


def build_reference_query(parent_id: ResourceId, parent_version: int) -> dict[str, Any]:
    """Build the QueryFilter body selecting references of one component version."""
    return {
        "QueryFilter": {
            "expression": {
                "operator": "and",
                "nestedExpression": [
                    {"operator": "EQUALS", "property": "parentComponentId", "argument": [parent_id]},
                    {"operator": "EQUALS", "property": "parentVersion", "argument": [parent_version]},
                ],
            },
        },
    }

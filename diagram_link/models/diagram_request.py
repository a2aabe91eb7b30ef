"""Request model for diagram generation (framework-agnostic)."""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class ClassProperty(BaseModel):
    name: str
    type: Optional[str] = None
    visibility: Optional[str] = None


class ClassMethod(BaseModel):
    name: str
    params: Optional[str] = None
    return_: Optional[str] = Field(default=None, alias="return")
    visibility: Optional[str] = None

    model_config = {
        "populate_by_name": True,
    }


class Component(BaseModel):
    """A diagram node.

    Callers may send a bare label instead of a record; `DiagramRequest`
    turns those into `Component(name=label)` so nothing
    downstream has to care which shape arrived.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = "service"
    properties: List[ClassProperty] = []
    methods: List[ClassMethod] = []

    @field_validator("id", "name", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def label(self) -> str:
        """Display text; falls back to the explicit id when no name is given."""
        return self.name or self.id or ""

    @property
    def key(self) -> Optional[str]:
        """Text other parts of the request use to refer to this component.

        An empty name is still a key; None means the component has no name.
        """
        return self.name


class Relationship(BaseModel):
    from_: str = Field(..., alias="from")
    to: str
    label: Optional[str] = None
    type: Optional[str] = None
    action: Optional[str] = None
    response: Optional[str] = None
    async_: bool = Field(default=False, alias="async")

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("from_", "to", "label", "type", "action", "response", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("async_", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)


class DiagramRequest(BaseModel):
    diagram_type: Optional[str] = None
    title: Optional[str] = None
    components: List[Component] = []
    relationships: List[Relationship] = []
    notes: Optional[str] = None

    @field_validator("components", mode="before")
    @classmethod
    def _normalize_components(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            return value
        normalized = []
        for item in value:
            if isinstance(item, (dict, Component)):
                normalized.append(item)
            else:
                normalized.append({"name": str(item)})
        return normalized

    @field_validator("relationships", mode="before")
    @classmethod
    def _default_relationships(cls, value: Any) -> Any:
        return [] if value is None else value

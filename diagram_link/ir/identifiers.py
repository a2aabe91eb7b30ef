"""Mermaid-safe identifiers for diagram components."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable

from diagram_link.models.diagram_request import Component


_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9]")
_LEADING_DIGIT_RE = re.compile(r"^(\d)")


def sanitize_label(text: str) -> str:
    """Replace every non-alphanumeric character with `_` and keep the token
    from starting with a digit. Empty input stays empty."""
    token = _UNSAFE_CHARS_RE.sub("_", text or "")
    return _LEADING_DIGIT_RE.sub(r"n\1", token)


def safe_id(component: Component, index: int) -> str:
    """Identifier for the component at `index` in the request.

    An explicit `id` is trusted as-is.
    """
    if component.id:
        return component.id
    return sanitize_label(component.label) or f"node{index}"


@dataclass
class IdentifierMap:
    """Lookup from the labels and ids a request uses to sanitized identifiers."""

    entries: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def build(cls, components: Iterable[Component]) -> "IdentifierMap":
        id_map = cls()
        for index, component in enumerate(components):
            token = safe_id(component, index)
            # Later components win when labels collide.
            if component.key is not None:
                id_map.entries[component.key] = token
            if component.id:
                id_map.entries[component.id] = token
        return id_map

    def resolve(self, reference: str) -> str:
        """Token for a relationship endpoint; unknown references are sanitized inline."""
        if reference in self.entries:
            return self.entries[reference]
        return sanitize_label(reference) or "node"

    def for_component(self, component: Component, index: int) -> str:
        if component.key is not None and component.key in self.entries:
            return self.entries[component.key]
        if component.id and component.id in self.entries:
            return self.entries[component.id]
        return safe_id(component, index)

    def __contains__(self, reference: object) -> bool:
        return reference in self.entries

    def __len__(self) -> int:
        return len(self.entries)

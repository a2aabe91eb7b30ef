"""Generate Mermaid markup from a DiagramRequest.

Labels are placed inside the shape delimiters verbatim. Embedded double
quotes are not escaped, so a label containing `"` yields markup Mermaid
may refuse to parse.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from diagram_link.ir.identifiers import IdentifierMap
from diagram_link.models.diagram_request import Component, DiagramRequest, Relationship


class DiagramKind(str, Enum):
    ARCHITECTURE = "architecture"
    SYSTEM = "system"
    SEQUENCE = "sequence"
    CLASS = "class"
    DEPLOYMENT = "deployment"
    DATAFLOW = "dataflow"
    DATA_FLOW = "data_flow"
    FLOWCHART = "flowchart"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DiagramKind":
        """Unrecognised or missing kinds render as a plain flowchart."""
        try:
            return cls(value)
        except ValueError:
            return cls.FLOWCHART


class ComponentType(str, Enum):
    SERVICE = "service"
    DATABASE = "database"
    QUEUE = "queue"
    USER = "user"
    API = "api"
    CONTAINER = "container"
    CLOUD = "cloud"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ComponentType"]:
        try:
            return cls(value or cls.SERVICE.value)
        except ValueError:
            return None


class RelationKind(str, Enum):
    INHERITS = "inherits"
    IMPLEMENTS = "implements"
    AGGREGATION = "aggregation"
    COMPOSITION = "composition"
    ASSOCIATION = "association"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["RelationKind"]:
        try:
            return cls(value)
        except ValueError:
            return None


def _rect(node_id: str, label: str) -> str:
    return f'{node_id}["{label}"]'


def architecture_shape(node_id: str, label: str, component_type: Optional[ComponentType]) -> str:
    if component_type is ComponentType.DATABASE:
        return f'{node_id}[("{label}")]'
    if component_type is ComponentType.QUEUE:
        return f'{node_id}{{{{"{label}"}}}}'
    if component_type is ComponentType.USER:
        return f'{node_id}((("{label}")))'
    if component_type is ComponentType.API:
        return f'{node_id}[/"{label}"\\]'
    return _rect(node_id, label)


def deployment_shape(node_id: str, label: str, component_type: Optional[ComponentType]) -> str:
    if component_type is ComponentType.CONTAINER:
        return f'{node_id}[["{label}"]]'
    if component_type is ComponentType.CLOUD:
        return f'{node_id}((("{label}")))'
    return _rect(node_id, label)


def class_arrow(kind: Optional[RelationKind]) -> str:
    if kind is RelationKind.INHERITS:
        return "--|>"
    if kind is RelationKind.IMPLEMENTS:
        return "..|>"
    if kind is RelationKind.AGGREGATION:
        return "--o"
    if kind is RelationKind.COMPOSITION:
        return "--*"
    # association and anything unrecognised
    return "--"


def _flow_edge(id_map: IdentifierMap, rel: Relationship, arrow: str = "-->") -> str:
    from_id = id_map.resolve(rel.from_)
    to_id = id_map.resolve(rel.to)
    if rel.label:
        return f'    {from_id} {arrow}|"{rel.label}"| {to_id}'
    return f"    {from_id} {arrow} {to_id}"


def _render_architecture(request: DiagramRequest, id_map: IdentifierMap) -> List[str]:
    lines = ["graph TB"]
    if request.title:
        lines.append(f'    subgraph "{request.title}"')
    for index, component in enumerate(request.components):
        node_id = id_map.for_component(component, index)
        shape = architecture_shape(node_id, component.label, ComponentType.parse(component.type))
        lines.append(f"        {shape}")
    if request.title:
        lines.append("    end")
    for rel in request.relationships:
        arrow = "-.->" if rel.type == "async" else "-->"
        lines.append(_flow_edge(id_map, rel, arrow))
    return lines


def _render_sequence(request: DiagramRequest, id_map: IdentifierMap) -> List[str]:
    lines = ["sequenceDiagram", "    autonumber"]
    for index, component in enumerate(request.components):
        node_id = id_map.for_component(component, index)
        lines.append(f"    participant {node_id} as {component.label}")
    for rel in request.relationships:
        from_id = id_map.resolve(rel.from_)
        to_id = id_map.resolve(rel.to)
        arrow = "->>" if rel.async_ else "->"
        message = rel.label or rel.action or ""
        lines.append(f"    {from_id}{arrow}{to_id}: {message}")
        if rel.response:
            lines.append(f"    {to_id}-->>-{from_id}: {rel.response}")
    return lines


def _class_name(component: Component, node_id: str) -> str:
    return component.name or component.id or node_id


def _render_class(request: DiagramRequest, id_map: IdentifierMap) -> List[str]:
    lines = ["classDiagram"]
    for index, component in enumerate(request.components):
        node_id = id_map.for_component(component, index)
        lines.append(f"    class {node_id} {{")
        lines.append(f"        <<{_class_name(component, node_id)}>>")
        for prop in component.properties:
            visibility = prop.visibility or "+"
            if prop.type:
                lines.append(f"        {visibility}{prop.name}: {prop.type}")
            else:
                lines.append(f"        {visibility}{prop.name}")
        for method in component.methods:
            visibility = method.visibility or "+"
            params = method.params or ""
            return_type = method.return_ or "void"
            lines.append(f"        {visibility}{method.name}({params}) {return_type}")
        lines.append("    }")
    for rel in request.relationships:
        from_id = id_map.resolve(rel.from_)
        to_id = id_map.resolve(rel.to)
        arrow = class_arrow(RelationKind.parse(rel.type))
        if rel.label:
            lines.append(f"    {from_id} {arrow} {to_id} : {rel.label}")
        else:
            lines.append(f"    {from_id} {arrow} {to_id}")
    return lines


def _render_deployment(request: DiagramRequest, id_map: IdentifierMap) -> List[str]:
    lines = ["graph LR", '    subgraph Production["Production Environment"]']
    for index, component in enumerate(request.components):
        node_id = id_map.for_component(component, index)
        shape = deployment_shape(node_id, component.label, ComponentType.parse(component.type))
        lines.append(f"        {shape}")
    lines.append("    end")
    lines.extend(_flow_edge(id_map, rel) for rel in request.relationships)
    return lines


def _render_dataflow(request: DiagramRequest, id_map: IdentifierMap) -> List[str]:
    lines = ["flowchart LR"]
    for index, component in enumerate(request.components):
        node_id = id_map.for_component(component, index)
        lines.append(f"    {_rect(node_id, component.label)}")
    lines.extend(_flow_edge(id_map, rel) for rel in request.relationships)
    return lines


def _render_flowchart(request: DiagramRequest, id_map: IdentifierMap) -> List[str]:
    lines = ["graph TD"]
    if not request.components:
        lines.extend(["    Start[Start]", "    End[End]", "    Start --> End"])
        return lines
    prev_id: Optional[str] = None
    for index, component in enumerate(request.components):
        node_id = id_map.for_component(component, index)
        lines.append(f"    {_rect(node_id, component.label)}")
        if prev_id is not None:
            lines.append(f"    {prev_id} --> {node_id}")
        prev_id = node_id
    return lines


def generate_mermaid(request: DiagramRequest, id_map: Optional[IdentifierMap] = None) -> str:
    """Render `request` as Mermaid text; every line ends with a newline."""
    if id_map is None:
        id_map = IdentifierMap.build(request.components)

    kind = DiagramKind.parse(request.diagram_type)
    if kind in (DiagramKind.ARCHITECTURE, DiagramKind.SYSTEM):
        lines = _render_architecture(request, id_map)
    elif kind is DiagramKind.SEQUENCE:
        lines = _render_sequence(request, id_map)
    elif kind is DiagramKind.CLASS:
        lines = _render_class(request, id_map)
    elif kind is DiagramKind.DEPLOYMENT:
        lines = _render_deployment(request, id_map)
    elif kind in (DiagramKind.DATAFLOW, DiagramKind.DATA_FLOW):
        lines = _render_dataflow(request, id_map)
    else:
        lines = _render_flowchart(request, id_map)

    if request.notes:
        note_lines = [note for note in request.notes.splitlines() if note.strip()] or [request.notes.strip()]
        lines.extend(f"    %% {note}".rstrip() for note in note_lines)

    return "".join(f"{line}\n" for line in lines)

"""Map regex component trees onto railroad-diagrams expressions."""
from __future__ import annotations

import io
from typing import Callable, Dict, List, Sequence

import railroad

from .components import Component, NodeKind

DiagramItem = railroad.DiagramItem


def _empty() -> DiagramItem:
    return railroad.Terminal("")


def _children_to_railroad(component: Component) -> List[DiagramItem]:
    return [component_to_railroad(child) for child in component.children]


def _single_or_sequence(items: List[DiagramItem]) -> DiagramItem:
    if len(items) == 1:
        return items[0]
    return railroad.Sequence(*items)


def _map_text(component: Component) -> DiagramItem:
    return railroad.Terminal(component.text)


def _map_character_class(component: Component) -> DiagramItem:
    if component.negative:
        # raw text is "[^...]"; keep only the members
        return railroad.Terminal(f"[^{component.text[2:-1]}]")
    return railroad.Terminal(component.text)


def _map_start(component: Component) -> DiagramItem:
    return railroad.Terminal("^")


def _map_end(component: Component) -> DiagramItem:
    return railroad.Terminal("$")


def _map_capturing_group(component: Component) -> DiagramItem:
    items = _children_to_railroad(component)
    inner = _single_or_sequence(items) if items else _empty()
    return railroad.Group(inner, component.group_label)


def _map_container(component: Component) -> DiagramItem:
    items = _children_to_railroad(component)
    if not items:
        return _empty()
    return _single_or_sequence(items)


def _map_alternation(component: Component) -> DiagramItem:
    items = _children_to_railroad(component)
    if not items:
        return _empty()
    return railroad.Choice(0, *items)


def lookaround_prefix(direction: str, negative: bool) -> str:
    if direction == "behind":
        return "?<!" if negative else "?<="
    return "?!" if negative else "?="


def _map_lookaround(component: Component) -> DiagramItem:
    prefix = lookaround_prefix(component.direction, component.negative)
    items = _children_to_railroad(component)
    if not items:
        return railroad.Terminal(f"({prefix})")
    return railroad.Group(_single_or_sequence(items), prefix)


def _map_unknown(component: Component) -> DiagramItem:
    return railroad.Terminal(component.text or component.type)


_MAPPERS: Dict[NodeKind, Callable[[Component], DiagramItem]] = {
    NodeKind.PATTERN_CHARACTER: _map_text,
    NodeKind.CHARACTER_CLASS: _map_character_class,
    NodeKind.START_ASSERTION: _map_start,
    NodeKind.END_ASSERTION: _map_end,
    NodeKind.BOUNDARY_ASSERTION: _map_text,
    NodeKind.IDENTITY_ESCAPE: _map_text,
    NodeKind.CHARACTER_CLASS_ESCAPE: _map_text,
    NodeKind.CONTROL_ESCAPE: _map_text,
    NodeKind.DECIMAL_ESCAPE: _map_text,
    NodeKind.ANONYMOUS_CAPTURING_GROUP: _map_capturing_group,
    NodeKind.NAMED_CAPTURING_GROUP: _map_capturing_group,
    NodeKind.NON_CAPTURING_GROUP: _map_container,
    NodeKind.ALTERNATION: _map_alternation,
    NodeKind.LOOKAROUND_ASSERTION: _map_lookaround,
    NodeKind.PATTERN: _map_container,
    NodeKind.TERM: _map_container,
    NodeKind.ROOT: _map_container,
}


def _apply_quantifier(component: Component, element: DiagramItem) -> DiagramItem:
    # First set flag wins; the parser is expected to set at most one.
    if component.zero_or_more:
        return railroad.ZeroOrMore(element)
    if component.one_or_more:
        return railroad.OneOrMore(element)
    if component.optional:
        return railroad.Optional(element)
    if component.quantifier:
        return railroad.Group(element, component.quantifier)
    return element


def component_to_railroad(component: Component) -> DiagramItem:
    """Convert one component node to a railroad expression.

    Every node yields an expression; kinds outside :class:`NodeKind` render as a
    terminal showing their text (or their type name when the text is empty).
    """
    kind = component.kind
    mapper = _MAPPERS.get(kind, _map_unknown)
    element = mapper(component)
    if element is None:
        element = _empty()
    return _apply_quantifier(component, element)


def components_to_diagram(components: Sequence[Component]) -> railroad.Diagram:
    if not components:
        return railroad.Diagram(_empty())
    elements = [component_to_railroad(component) for component in components]
    if len(elements) == 1:
        return railroad.Diagram(elements[0])
    return railroad.Diagram(railroad.Sequence(*elements))


def diagram_to_svg(diagram: railroad.Diagram) -> str:
    buffer = io.StringIO()
    diagram.writeStandalone(buffer.write)
    return buffer.getvalue()


__all__ = [
    "component_to_railroad",
    "components_to_diagram",
    "diagram_to_svg",
    "lookaround_prefix",
]

"""Public API for regexrail."""
from .components import Component, ComponentError, NodeKind, parse_components
from .diagram import component_to_railroad, components_to_diagram
from .render import RenderOptions, RenderResult, render_components, trim_image
from .theme import apply_theme

__all__ = [
    "Component",
    "ComponentError",
    "NodeKind",
    "RenderOptions",
    "RenderResult",
    "apply_theme",
    "component_to_railroad",
    "components_to_diagram",
    "parse_components",
    "render_components",
    "trim_image",
]

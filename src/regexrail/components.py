"""Component tree model for parsed regular expressions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class NodeKind(str, Enum):
    PATTERN_CHARACTER = "pattern_character"
    CHARACTER_CLASS = "character_class"
    START_ASSERTION = "start_assertion"
    END_ASSERTION = "end_assertion"
    BOUNDARY_ASSERTION = "boundary_assertion"
    IDENTITY_ESCAPE = "identity_escape"
    CHARACTER_CLASS_ESCAPE = "character_class_escape"
    CONTROL_ESCAPE = "control_escape"
    DECIMAL_ESCAPE = "decimal_escape"
    ANONYMOUS_CAPTURING_GROUP = "anonymous_capturing_group"
    NAMED_CAPTURING_GROUP = "named_capturing_group"
    NON_CAPTURING_GROUP = "non_capturing_group"
    ALTERNATION = "alternation"
    LOOKAROUND_ASSERTION = "lookaround_assertion"
    PATTERN = "pattern"
    TERM = "term"
    ROOT = "root"


class ComponentError(ValueError):
    """Raised when a component payload does not have the expected shape."""


@dataclass
class Component:
    type: str = ""
    text: str = ""
    children: List["Component"] = field(default_factory=list)
    optional: bool = False
    zero_or_more: bool = False
    one_or_more: bool = False
    quantifier: Optional[str] = None
    capture_group: Optional[Any] = None
    group_name: Optional[str] = None
    direction: str = "ahead"
    negative: bool = False

    @property
    def kind(self) -> Optional[NodeKind]:
        try:
            return NodeKind(self.type)
        except ValueError:
            return None

    @property
    def group_label(self) -> str:
        if self.group_name:
            return self.group_name
        ordinal = "" if self.capture_group is None else self.capture_group
        return f"group {ordinal}"

    @classmethod
    def from_dict(cls, data: Any, *, path: str = "$") -> "Component":
        if not isinstance(data, dict):
            raise ComponentError(f"{path}: expected an object, got {type(data).__name__}")
        raw_children = data.get("children") or []
        if not isinstance(raw_children, list):
            raise ComponentError(f"{path}.children: expected an array")
        children = [
            cls.from_dict(child, path=f"{path}.children[{idx}]")
            for idx, child in enumerate(raw_children)
        ]
        quantifier = data.get("quantifier")
        return cls(
            type=str(data.get("type") or ""),
            text=_as_text(data.get("text")),
            children=children,
            optional=bool(data.get("optional", False)),
            zero_or_more=bool(data.get("zero_or_more", False)),
            one_or_more=bool(data.get("one_or_more", False)),
            quantifier=str(quantifier) if quantifier else None,
            capture_group=data.get("capture_group"),
            group_name=_as_text(data.get("group_name")) or None,
            direction=str(data.get("direction") or "ahead"),
            negative=bool(data.get("negative", False)),
        )


def parse_components(payload: Any) -> List[Component]:
    """Build the component list from a decoded JSON array."""
    if not isinstance(payload, list):
        raise ComponentError(f"expected a JSON array of components, got {type(payload).__name__}")
    return [Component.from_dict(item, path=f"$[{idx}]") for idx, item in enumerate(payload)]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


__all__ = ["Component", "ComponentError", "NodeKind", "parse_components"]

from __future__ import annotations

import sys
import unittest
from pathlib import Path

import railroad

TESTS_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = TESTS_DIR.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from regexrail.components import Component, ComponentError, NodeKind, parse_components
from regexrail.diagram import (
    component_to_railroad,
    components_to_diagram,
    diagram_to_svg,
    lookaround_prefix,
)


def char(text: str, **flags) -> Component:
    return Component(type="pattern_character", text=text, **flags)


class ComponentParsingTests(unittest.TestCase):
    def test_defaults_for_missing_keys(self) -> None:
        (node,) = parse_components([{"type": "pattern_character"}])
        self.assertEqual(node.text, "")
        self.assertEqual(node.children, [])
        self.assertFalse(node.optional)
        self.assertIsNone(node.quantifier)
        self.assertEqual(node.direction, "ahead")
        self.assertIs(node.kind, NodeKind.PATTERN_CHARACTER)

    def test_nested_children(self) -> None:
        (node,) = parse_components(
            [{"type": "alternation", "children": [{"type": "pattern_character", "text": "x"}]}]
        )
        self.assertEqual(node.children[0].text, "x")

    def test_unknown_type_is_kept(self) -> None:
        (node,) = parse_components([{"type": "unicode_property_escape", "text": r"\p{L}"}])
        self.assertIsNone(node.kind)
        self.assertEqual(node.type, "unicode_property_escape")

    def test_rejects_non_array_and_non_object(self) -> None:
        with self.assertRaises(ComponentError):
            parse_components({"type": "pattern_character"})
        with self.assertRaises(ComponentError) as ctx:
            parse_components([{"type": "term", "children": [1]}])
        self.assertIn("$[0].children[0]", str(ctx.exception))
        with self.assertRaises(ComponentError):
            parse_components([{"type": "term", "children": "a"}])


class NodeMapperTests(unittest.TestCase):
    def test_literal_kinds_map_to_terminal_text(self) -> None:
        for kind in (
            "pattern_character",
            "boundary_assertion",
            "identity_escape",
            "character_class_escape",
            "control_escape",
            "decimal_escape",
        ):
            with self.subTest(kind=kind):
                element = component_to_railroad(Component(type=kind, text=r"\x"))
                self.assertIsInstance(element, railroad.Terminal)
                self.assertEqual(element.text, r"\x")

    def test_anchors(self) -> None:
        self.assertEqual(component_to_railroad(Component(type="start_assertion", text="^")).text, "^")
        self.assertEqual(component_to_railroad(Component(type="end_assertion")).text, "$")

    def test_character_class(self) -> None:
        plain = component_to_railroad(Component(type="character_class", text="[abc]"))
        self.assertEqual(plain.text, "[abc]")
        negated = component_to_railroad(Component(type="character_class", text="[^abc]", negative=True))
        self.assertIsInstance(negated, railroad.Terminal)
        self.assertEqual(negated.text, "[^abc]")
        digits = component_to_railroad(Component(type="character_class", text="[^0-9]", negative=True))
        self.assertEqual(digits.text, "[^0-9]")

    def test_anonymous_group_label(self) -> None:
        group = component_to_railroad(
            Component(type="anonymous_capturing_group", capture_group=1, children=[char("a")])
        )
        self.assertIsInstance(group, railroad.Group)
        self.assertEqual(group.label.text, "group 1")
        self.assertIsInstance(group.item, railroad.Terminal)

    def test_named_group_label_and_sequence(self) -> None:
        group = component_to_railroad(
            Component(
                type="named_capturing_group",
                capture_group=2,
                group_name="year",
                children=[char("1"), char("9")],
            )
        )
        self.assertEqual(group.label.text, "year")
        self.assertIsInstance(group.item, railroad.Sequence)
        self.assertEqual(len(group.item.items), 2)

    def test_empty_group_wraps_empty_terminal(self) -> None:
        group = component_to_railroad(Component(type="anonymous_capturing_group", capture_group=3))
        self.assertIsInstance(group, railroad.Group)
        self.assertEqual(group.item.text, "")

    def test_containers_flatten_single_child(self) -> None:
        for kind in ("non_capturing_group", "pattern", "term", "root"):
            with self.subTest(kind=kind):
                single = component_to_railroad(Component(type=kind, children=[char("a")]))
                self.assertIsInstance(single, railroad.Terminal)
                self.assertEqual(single.text, "a")
                many = component_to_railroad(Component(type=kind, children=[char("a"), char("b")]))
                self.assertIsInstance(many, railroad.Sequence)
                empty = component_to_railroad(Component(type=kind))
                self.assertEqual(empty.text, "")

    def test_alternation_defaults_to_first_branch(self) -> None:
        choice = component_to_railroad(
            Component(type="alternation", children=[char("cat"), char("dog"), char("cow")])
        )
        self.assertIsInstance(choice, railroad.Choice)
        self.assertEqual(choice.default, 0)
        self.assertEqual([item.text for item in choice.items], ["cat", "dog", "cow"])
        self.assertEqual(component_to_railroad(Component(type="alternation")).text, "")

    def test_lookaround_prefixes(self) -> None:
        self.assertEqual(lookaround_prefix("behind", True), "?<!")
        self.assertEqual(lookaround_prefix("behind", False), "?<=")
        self.assertEqual(lookaround_prefix("ahead", True), "?!")
        self.assertEqual(lookaround_prefix("ahead", False), "?=")

    def test_lookaround_group_and_empty(self) -> None:
        group = component_to_railroad(
            Component(type="lookaround_assertion", direction="behind", negative=True, children=[char("a")])
        )
        self.assertIsInstance(group, railroad.Group)
        self.assertEqual(group.label.text, "?<!")
        empty = component_to_railroad(Component(type="lookaround_assertion", negative=True))
        self.assertEqual(empty.text, "(?!)")

    def test_unknown_kind_falls_back_to_terminal(self) -> None:
        self.assertEqual(component_to_railroad(Component(type="mystery", text="%")).text, "%")
        self.assertEqual(component_to_railroad(Component(type="mystery")).text, "mystery")
        self.assertEqual(component_to_railroad(Component()).text, "")


class QuantifierTests(unittest.TestCase):
    def test_zero_or_more_beats_optional(self) -> None:
        element = component_to_railroad(char("a", zero_or_more=True, optional=True))
        # ZeroOrMore is an optional OneOrMore
        self.assertIsInstance(element, railroad.Choice)
        self.assertIsInstance(element.items[1], railroad.OneOrMore)

    def test_one_or_more_beats_optional(self) -> None:
        element = component_to_railroad(char("a", one_or_more=True, optional=True, quantifier="{2}"))
        self.assertIsInstance(element, railroad.OneOrMore)
        self.assertEqual(element.item.text, "a")

    def test_optional(self) -> None:
        element = component_to_railroad(char("u", optional=True))
        self.assertIsInstance(element, railroad.Choice)
        self.assertIsInstance(element.items[0], railroad.Skip)
        self.assertIsInstance(element.items[1], railroad.Terminal)

    def test_explicit_quantifier_uses_group_label(self) -> None:
        element = component_to_railroad(char("d", quantifier="{2,5}"))
        self.assertIsInstance(element, railroad.Group)
        self.assertEqual(element.label.text, "{2,5}")
        self.assertEqual(element.item.text, "d")

    def test_quantifier_wraps_group(self) -> None:
        element = component_to_railroad(
            Component(type="anonymous_capturing_group", capture_group=1, children=[char("a")], one_or_more=True)
        )
        self.assertIsInstance(element, railroad.OneOrMore)
        self.assertIsInstance(element.item, railroad.Group)


class TreeAssemblerTests(unittest.TestCase):
    def test_empty_input(self) -> None:
        diagram = components_to_diagram([])
        self.assertIsInstance(diagram, railroad.Diagram)
        terminals = [item for item in diagram.items if isinstance(item, railroad.Terminal)]
        self.assertEqual([t.text for t in terminals], [""])

    def test_single_element_is_not_wrapped(self) -> None:
        diagram = components_to_diagram([char("a")])
        self.assertIsInstance(diagram.items[1], railroad.Terminal)

    def test_multiple_elements_become_sequence(self) -> None:
        diagram = components_to_diagram([char("a"), char("b"), char("c")])
        sequence = diagram.items[1]
        self.assertIsInstance(sequence, railroad.Sequence)
        self.assertEqual([item.text for item in sequence.items], ["a", "b", "c"])

    def test_diagram_to_svg(self) -> None:
        svg = diagram_to_svg(components_to_diagram([char("hello")]))
        self.assertIn("<svg", svg)
        self.assertIn("hello", svg)


if __name__ == "__main__":
    unittest.main()

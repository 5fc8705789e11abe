"""Renderer tests: style inheritance, gradients and message structure."""

from __future__ import annotations

from miniformat import parse
from miniformat.ast import Node
from miniformat.formats import to_plain
from miniformat.message import MaybeBool, Message
from miniformat.render import render
from tests.conftest import leaf_colors, leaves


class TestFastPath:
    def test_plain_text_is_single_raw_unit(self):
        msg = parse("hello world")
        assert msg.text == "hello world"
        assert msg.children == []
        assert msg.color_hex is None
        assert msg.is_bold is None

    def test_full_pipeline_matches_fast_path_content(self, tree):
        msg = render(tree("hello world"))
        assert to_plain(msg) == "hello world"
        assert [leaf.text for leaf in leaves(msg)] == ["hello world"]
        assert leaves(msg)[0].color_hex is None

    def test_lone_bracket_goes_through_pipeline(self):
        assert to_plain(parse("a < b")) == "a < b"


class TestStyles:
    def test_named_color(self):
        (leaf,) = leaves(parse("<red>hi</red>"))
        assert leaf.color_hex == "#FF5555"

    def test_hex_color(self):
        (leaf,) = leaves(parse("<#112233>hi</#112233>"))
        assert leaf.color_hex == "#112233"

    def test_flags(self):
        (leaf,) = leaves(parse("<b><i><u><tt>x</tt></u></i></b>"))
        assert leaf.is_bold is True
        assert leaf.is_italic is True
        assert leaf.underlined is MaybeBool.TRUE
        assert leaf.is_monospace is True

    def test_unset_flags_stay_unset(self):
        (leaf,) = leaves(parse("<red>x</red>"))
        assert leaf.is_bold is None
        assert leaf.underlined is MaybeBool.NULL

    def test_flags_inherited_through_unknown_tags(self):
        (leaf,) = leaves(parse("<bold><foo><red>x</red></foo></bold>"))
        assert leaf.is_bold is True
        assert leaf.color_hex == "#FF5555"

    def test_close_is_positional(self):
        x, y = leaves(parse("<bold>x</italic>y"))
        assert x.is_bold is True
        assert y.is_bold is None

    def test_siblings_isolated(self):
        a, b = leaves(parse("<red>a</red><bold>b</bold>"))
        assert a.is_bold is None
        assert b.color_hex is None

    def test_unclosed_tag_still_renders(self):
        (leaf,) = leaves(parse("<bold>x"))
        assert leaf.is_bold is True

    def test_custom_palette(self):
        (leaf,) = leaves(parse("<brand>x</brand>", {"brand": "#123456"}))
        assert leaf.color_hex == "#123456"


class TestUnknownTags:
    def test_unknown_tag_is_inert(self):
        msg = parse("<foo>text</foo>")
        (leaf,) = leaves(msg)
        assert leaf.text == "text"
        assert leaf.color_hex is None
        assert leaf.is_bold is None

    def test_unknown_tag_wraps_its_own_unit(self):
        msg = parse("<foo>text</foo>")
        (wrapper,) = msg.children
        assert wrapper.text == ""
        assert [child.text for child in wrapper.children] == ["text"]

    def test_plain_text_round_trip(self):
        assert to_plain(parse("<foo>a</foo> b <bar>c")) == "a b c"


class TestGradients:
    def test_one_unit_per_character(self):
        msg = parse("<gradient:red:blue>abc</gradient>")
        assert [leaf.text for leaf in leaves(msg)] == ["a", "b", "c"]

    def test_first_character_gets_first_stop(self):
        colors = leaf_colors(parse("<gradient:black:white>abcd</gradient>"))
        assert colors[0] == "#000000"

    def test_gradient_masks_inherited_color(self):
        colors = leaf_colors(parse("<red><gradient:black:white>ab</gradient></red>"))
        assert colors == ["#000000", "#7f7f7f"]

    def test_nested_color_is_masked(self):
        colors = leaf_colors(parse("<gradient:black:white><red>ab</red></gradient>"))
        assert colors == ["#000000", "#7f7f7f"]

    def test_flags_applied_per_character(self):
        for leaf in leaves(parse("<bold><gradient:red:blue>ab</gradient></bold>")):
            assert leaf.is_bold is True

    def test_nested_scope_restarts(self):
        msg = parse("<gradient:red:blue>AB<bold>CD</bold>EF</gradient>")
        runs = [(leaf.text, leaf.color_hex) for leaf in leaves(msg)]
        assert runs == [
            ("A", "#ff5555"),
            ("B", "#e25571"),
            # nested node: its own length (2) and its own position from 0
            ("C", "#ff5555"),
            ("D", "#aa55aa"),
            # outer run continues past the nested node, over the subtree length 6
            ("E", "#c6558d"),
            ("F", "#aa55aa"),
        ]

    def test_solid_color_after_gradient_scope(self):
        msg = parse("<gradient:red:blue>ab</gradient><blue>c</blue>")
        assert leaves(msg)[-1].color_hex == "#5555FF"

    def test_single_character_uses_first_stop(self):
        (leaf,) = leaves(parse("<gradient:gold:aqua>x</gradient>"))
        assert leaf.color_hex == "#FFAA00"


class TestStructure:
    def test_empty_node_renders_empty_unit(self):
        msg = render(Node("root"))
        assert msg.text == ""
        assert msg.children == []

    def test_empty_tag_renders_empty_child(self):
        msg = parse("<bold></bold>")
        (child,) = msg.children
        assert child.text == ""
        assert child.children == []

    def test_join_preserves_order(self):
        msg = parse("a<b>b</b>c")
        assert [leaf.text for leaf in leaves(msg)] == ["a", "b", "c"]

    def test_result_is_message(self):
        assert isinstance(parse("<b>x</b>"), Message)


class TestDeepNesting:
    DEPTH = 2000

    def test_deep_bold(self):
        msg = parse("<b>" * self.DEPTH + "x")
        assert to_plain(msg) == "x"
        (leaf,) = leaves(msg)
        assert leaf.is_bold is True

    def test_deep_gradient_scope(self):
        msg = parse("<gradient:red:blue>" + "<b>" * self.DEPTH + "xy")
        assert to_plain(msg) == "xy"
        assert leaf_colors(msg) == ["#ff5555", "#aa55aa"]

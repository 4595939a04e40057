from __future__ import annotations

"""
Unit tests for the Scene Line Classifier.

Verifies:
1. Recognition of every directive shape.
2. Attribute extraction independent of attribute order.
3. Quoted values containing spaces or 'key=' text, and format-2 bare ids.
4. Malformed and unrelated lines being ignored.
"""

import pytest

from scenetree.core.parsing.classifier import (
    DirectiveKind,
    classify_line,
    find_attribute,
    parse_attributes,
    reference_id,
)


def test_classify_ext_resource_format3():
    """Verify a format-3 external resource with uid and string id."""
    d = classify_line('[ext_resource type="Script" uid="uid://b7pl" path="res://player.gd" id="1_pl"]\n')

    assert d is not None
    assert d.kind is DirectiveKind.EXT_RESOURCE
    assert d.fields == {
        "id": "1_pl",
        "path": "res://player.gd",
        "type": "Script",
        "uid": "uid://b7pl",
    }


def test_classify_ext_resource_keeps_spaces_inside_path():
    """A quoted path with spaces must not be split into several fields."""
    d = classify_line('[ext_resource path="res://my assets/big tree.png" type="Texture" id=3]')

    assert d.get("path") == "res://my assets/big tree.png"
    assert d.get("type") == "Texture"
    assert d.get("id") == "3"


def test_classify_ext_resource_ignores_attribute_text_inside_quoted_path():
    """'id=' text embedded in a quoted path must not shadow the real id."""
    d = classify_line('[ext_resource type="Texture2D" path="res://art/old id=7 copy.png" id="1_a"]')

    assert d.get("id") == "1_a"
    assert d.get("path") == "res://art/old id=7 copy.png"
    assert d.get("type") == "Texture2D"


def test_classify_node_ignores_attribute_text_inside_quoted_values():
    d = classify_line(
        '[node name="Label" type="Label" parent="Panel name=Other" '
        'instance_placeholder="res://x instance=ExtResource(9).tscn"]'
    )

    assert d.get("name") == "Label"
    assert d.get("parent") == "Panel name=Other"
    assert d.get("instance") == ""


def test_classify_ext_resource_without_id_is_ignored():
    assert classify_line('[ext_resource path="res://a.gd" type="Script"]') is None


def test_classify_sub_resource_both_generations():
    d3 = classify_line('[sub_resource type="CircleShape2D" id="CircleShape2D_ab1"]')
    d2 = classify_line('[sub_resource type="CircleShape2D" id=4]')

    assert d3.kind is DirectiveKind.SUB_RESOURCE
    assert d3.fields == {"id": "CircleShape2D_ab1", "type": "CircleShape2D"}
    assert d2.fields == {"id": "4", "type": "CircleShape2D"}


def test_classify_sub_resource_requires_type():
    assert classify_line('[sub_resource id="x"]') is None


@pytest.mark.parametrize("line", [
    '[node name="Shape" type="CollisionShape2D" parent="Player" index="2"]',
    '[node name="Shape" parent="Player" index="2" type="CollisionShape2D"]',
    '[node parent="Player" type="CollisionShape2D" name="Shape" index="2"]',
])
def test_classify_node_attribute_order_is_irrelevant(line):
    """Each node attribute is scanned independently of its position."""
    d = classify_line(line)

    assert d.kind is DirectiveKind.NODE
    assert d.get("name") == "Shape"
    assert d.get("type") == "CollisionShape2D"
    assert d.get("parent") == "Player"
    assert d.get("index") == "2"
    assert d.get("instance") == ""


def test_classify_node_instance_both_generations():
    d3 = classify_line('[node name="HUD" parent="." instance=ExtResource("2_hud")]')
    d2 = classify_line('[node name="HUD" parent="." instance=ExtResource( 7 )]')

    assert d3.get("instance") == "2_hud"
    assert d2.get("instance") == "7"
    assert d3.get("type") == ""


def test_classify_node_without_name_is_ignored():
    assert classify_line('[node type="Node2D"]') is None


def test_classify_connection_with_flags():
    d = classify_line(
        '[connection signal="timeout" from="Timer" to="." method="_on_timeout" flags=3]'
    )

    assert d.kind is DirectiveKind.CONNECTION
    assert d.fields == {
        "signal": "timeout",
        "from": "Timer",
        "to": ".",
        "method": "_on_timeout",
        "flags": "3",
    }


def test_classify_connection_missing_method_is_ignored():
    assert classify_line('[connection signal="timeout" from="Timer" to="."]') is None


def test_classify_scene_header():
    d = classify_line('[gd_scene load_steps=4 format=3 uid="uid://c1k2"]')

    assert d.kind is DirectiveKind.SCENE_HEADER
    assert d.fields == {"format": "3", "load_steps": "4", "uid": "uid://c1k2"}


def test_classify_assignment():
    d = classify_line("theme_override_colors/font_color = Color(1, 0, 0, 1)\n")

    assert d.kind is DirectiveKind.ASSIGNMENT
    assert d.get("key") == "theme_override_colors/font_color"
    assert d.get("value") == "Color(1, 0, 0, 1)"


@pytest.mark.parametrize("line", [
    "",
    "\n",
    "; a comment",
    "[resource]",
    '"points": PackedVector2Array(0, 0, 1, 1)',
    "0/0 = 0",
    "Key = value",
    "key=value",
])
def test_classify_unrecognized_lines(line):
    assert classify_line(line) is None


def test_find_attribute_does_not_match_suffixes():
    """'type=' must not be found inside another attribute such as 'node_type='."""
    assert find_attribute(' node_type="A" name="x"', "type") is None
    assert find_attribute(' node_type="A" type="B"', "type") == "B"


def test_parse_attributes_tokenizes_once_and_keeps_first_occurrence():
    attrs = parse_attributes(' path="a b=c" id=2 instance=ExtResource( 4 ) id="dup"')

    assert attrs == {"path": "a b=c", "id": "2", "instance": "ExtResource( 4 )"}


def test_reference_id_extraction():
    assert reference_id('ExtResource("1_pl")', "ExtResource") == "1_pl"
    assert reference_id("ExtResource( 12 )", "ExtResource") == "12"
    assert reference_id("SubResource(\"Shape_a\")", "SubResource") == "Shape_a"
    assert reference_id("ExtResource()", "ExtResource") is None

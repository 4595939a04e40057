from __future__ import annotations

"""
Unit tests for the Scene Parser.

Verifies:
1. The explicit SUB_RESOURCES -> NODES mode switch.
2. Routing of assignment lines to sub-resources or nodes.
3. Instance binding and header parsing.
4. Both format generations.
"""

from scenetree.core.parsing.parser import ParseMode, SceneParser, parse_scene
from scenetree.domain.scene_models import Parameter


def test_parser_starts_in_sub_resource_mode():
    parser = SceneParser()
    assert parser.mode is ParseMode.SUB_RESOURCES

    parser.feed('[sub_resource type="CircleShape2D" id="c"]\n')
    parser.feed("radius = 3.0\n")
    assert parser.mode is ParseMode.SUB_RESOURCES

    parser.feed('[node name="Root" type="Node"]\n')
    assert parser.mode is ParseMode.NODES


def test_mode_switch_is_permanent():
    """A sub-resource declared after the first node no longer captures assignments."""
    parser = SceneParser()
    parser.feed('[node name="Root" type="Node"]\n')
    parser.feed('[sub_resource type="CircleShape2D" id="late"]\n')
    parser.feed("radius = 3.0\n")

    assert parser.mode is ParseMode.NODES
    assert parser.tables.get_sub("late").parameters == []
    assert [p.key for p in parser.current_node.parameters] == ["radius"]


def test_assignments_route_to_most_recent_node(scene_lines, sample_scene_text):
    scene = parse_scene(scene_lines(sample_scene_text))

    by_name = {n.name: n for n in scene.nodes}
    assert [p.key for p in by_name["Main"].parameters] == ["script"]
    assert [p.key for p in by_name["Player"].parameters] == ["position"]
    assert [p.key for p in by_name["Shape"].parameters] == ["shape"]
    assert by_name["HUD"].parameters == []


def test_sub_resource_bodies_captured(scene_lines, sample_scene_text):
    scene = parse_scene(scene_lines(sample_scene_text))

    assert scene.sub_resources["CircleShape2D_c2"].parameters == [
        Parameter("radius", "8.0"),
        Parameter("custom_solver_bias", "0.5"),
    ]


def test_node_fields_and_instance(scene_lines, sample_scene_text):
    scene = parse_scene(scene_lines(sample_scene_text))

    assert [n.name for n in scene.nodes] == ["Main", "Player", "Shape", "HUD"]
    main, player, shape, hud = scene.nodes
    assert (main.type, main.parent) == ("Node2D", "")
    assert (player.type, player.parent) == ("CharacterBody2D", ".")
    assert shape.parent == "Player"
    assert hud.type == ""
    assert hud.instance.path == "res://ui/hud scene.tscn"
    assert hud.instance.type == "PackedScene"


def test_header_and_connections(scene_lines, sample_scene_text):
    scene = parse_scene(scene_lines(sample_scene_text))

    assert scene.header.format == "3"
    assert scene.header.load_steps == 5
    assert scene.header.uid == "uid://c1k2main"

    assert len(scene.connections) == 1
    conn = scene.connections[0]
    assert (conn.signal, conn.source, conn.target, conn.method) == (
        "body_entered", "Player", ".", "_on_player_body_entered"
    )


def test_legacy_format_resolution(scene_lines, legacy_scene_text):
    scene = parse_scene(scene_lines(legacy_scene_text))
    enemy, body, sprite = scene.nodes

    assert enemy.parameters[0].value == "(Script) res://enemy.gd"
    assert body.parameters[0].value == "(CircleShape2D)"
    assert body.parameters[0].sub_params == [Parameter("radius", "12.0")]
    assert sprite.instance.path == "res://sprite.tscn"


def test_reference_resolves_when_path_contains_attribute_text():
    scene = parse_scene([
        '[ext_resource type="Texture2D" path="res://art/old id=7 copy.png" id="1_a"]\n',
        '[node name="Root" type="Sprite2D"]\n',
        'texture = ExtResource("1_a")\n',
    ])

    assert list(scene.ext_resources) == ["1_a"]
    assert scene.nodes[0].parameters[0].value == "(Texture2D) res://art/old id=7 copy.png"


def test_unknown_instance_is_left_unbound():
    scene = parse_scene([
        '[node name="Root" type="Node"]\n',
        '[node name="Ghost" parent="." instance=ExtResource("9_x")]\n',
    ])

    assert scene.nodes[1].instance is None


def test_index_parsing():
    scene = parse_scene([
        '[node name="Root" type="Node"]\n',
        '[node name="A" parent="." index="3"]\n',
        '[node name="B" parent="." index="x"]\n',
    ])

    assert [n.index for n in scene.nodes] == [-1, 3, -1]


def test_assignment_before_any_declaration_is_dropped():
    scene = parse_scene(["orphan = 1\n", '[node name="Root" type="Node"]\n'])

    assert scene.nodes[0].parameters == []
    assert scene.sub_resources == {}

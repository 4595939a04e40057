from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared scene sources and a helper to write them to disk.
3. Logging teardown so handlers never leak between tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from scenetree.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Scene Sources
# -----------------------------------------------------------------------------
SAMPLE_SCENE = """\
[gd_scene load_steps=5 format=3 uid="uid://c1k2main"]

[ext_resource type="Script" uid="uid://b7pl" path="res://scripts/player.gd" id="1_pl"]
[ext_resource type="PackedScene" path="res://ui/hud scene.tscn" id="2_hud"]

[sub_resource type="RectangleShape2D" id="RectangleShape2D_x1"]
size = Vector2(32, 48)

[sub_resource type="CircleShape2D" id="CircleShape2D_c2"]
radius = 8.0
custom_solver_bias = 0.5

[node name="Main" type="Node2D"]
script = ExtResource("1_pl")

[node name="Player" type="CharacterBody2D" parent="."]
position = Vector2(10, 20)

[node name="Shape" type="CollisionShape2D" parent="Player"]
shape = SubResource("RectangleShape2D_x1")

[node name="HUD" parent="." instance=ExtResource("2_hud")]

[connection signal="body_entered" from="Player" to="." method="_on_player_body_entered"]
"""

LEGACY_SCENE = """\
[gd_scene load_steps=3 format=2]

[ext_resource path="res://enemy.gd" type="Script" id=1]
[ext_resource path="res://sprite.tscn" type="PackedScene" id=2]

[sub_resource type="CircleShape2D" id=1]
radius = 12.0

[node name="Enemy" type="KinematicBody2D"]
script = ExtResource( 1 )

[node name="Body" type="CollisionShape2D" parent="."]
shape = SubResource( 1 )

[node name="Sprite" parent="." instance=ExtResource( 2 )]
"""


@pytest.fixture
def sample_scene_text() -> str:
    return SAMPLE_SCENE


@pytest.fixture
def legacy_scene_text() -> str:
    return LEGACY_SCENE


@pytest.fixture
def scene_lines() -> Callable[[str], List[str]]:
    """Return a helper splitting scene text the way the file reader does."""
    def _split(text: str) -> List[str]:
        return text.splitlines(keepends=True)
    return _split


@pytest.fixture
def write_scene(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing scene text to a temporary .tscn file."""
    def _write(text: str, name: str = "scene.tscn") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """Return a valid, complete configuration dictionary."""
    return {
        "input_path": "/tmp/scene.tscn",
        "output_format": "text",
        "show_parameters": True,
        "show_sub_params": True,
        "show_connections": True,
        "show_instances": True,
        "max_depth": 0,
    }


# -----------------------------------------------------------------------------
# Logging Isolation
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_logging():
    yield
    shutdown_logging()

from __future__ import annotations

"""
Scene Tree Renderer.

Converts an assembled scene tree into visual ASCII lines. Every node
lists its instanced scene, its parameters (with nested sub-resource
fields) and its connections before recursing into its children. A JSON
view of the same tree is provided for tooling.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from scenetree.domain.constants import (
    BRANCH_LAST,
    BRANCH_MID,
    CONTENT_BULLET,
    GUIDE_BLANK,
    GUIDE_THROUGH,
)
from scenetree.domain.scene_models import Node, NodeParameter, SceneHeader, SceneTree

# -----------------------------------------------------------------------------
# RENDER OPTIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderOptions:
    """
    Toggles for the content emitted under each node.

    Attributes:
        show_parameters: Emit 'key: value' parameter lines.
        show_sub_params: Nest inlined sub-resource fields under parameters.
        show_connections: Emit connection lines.
        show_instances: Emit the instanced scene of each node.
        max_depth: Deepest child level to descend into, 0 for unlimited.
    """
    show_parameters: bool = True
    show_sub_params: bool = True
    show_connections: bool = True
    show_instances: bool = True
    max_depth: int = 0

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "RenderOptions":
        return cls(
            show_parameters=bool(cfg.get("show_parameters", True)),
            show_sub_params=bool(cfg.get("show_sub_params", True)),
            show_connections=bool(cfg.get("show_connections", True)),
            show_instances=bool(cfg.get("show_instances", True)),
            max_depth=int(cfg.get("max_depth", 0)),
        )

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_scene_tree(root: Node, options: Optional[RenderOptions] = None) -> List[str]:
    """
    Render a scene tree, starting with the root's own line.

    The root line is the bare root name, followed inline by the instanced
    scene when there is one. All other nodes use their display name and
    list their instance as the first content line.

    Args:
        root: Root node of an assembled tree.
        options: Content toggles. Defaults to everything shown.

    Returns:
        List[str]: Visual lines of the tree.
    """
    opts = options or RenderOptions()

    header = root.name
    if root.instance is not None and opts.show_instances:
        header += f" ({root.instance.type}) {root.instance.path}"

    lines = [header]
    render_tree_structure(root, lines, prefix="", options=opts)
    return lines


def render_tree_structure(
        node: Node,
        lines: List[str],
        prefix: str = "",
        options: Optional[RenderOptions] = None,
        depth: int = 0,
) -> None:
    """
    Recursively append the content and children of a node to 'lines'.

    Content lines extend the vertical guide when children follow them.
    Among children, the last one gets the terminal connector and stops
    the guide for its own subtree.

    Args:
        node: Node whose body is rendered (its own name line is not).
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        options: Content toggles.
        depth: Level of 'node' below the root.
    """
    opts = options or RenderOptions()

    children = list(node.children.values())
    if opts.max_depth and depth >= opts.max_depth:
        children = []

    content_prefix = prefix + (GUIDE_THROUGH if children else GUIDE_BLANK)

    if node.instance is not None and not node.is_root and opts.show_instances:
        lines.append(f"{content_prefix}{CONTENT_BULLET}({node.instance.type}) {node.instance.path}")

    if opts.show_parameters:
        for param in node.parameters:
            lines.append(f"{content_prefix}{CONTENT_BULLET}{param.key}: {param.value}")
            if opts.show_sub_params:
                _render_sub_params(param, content_prefix, lines)

    if opts.show_connections:
        for conn in node.connections:
            lines.append(f"{content_prefix}{CONTENT_BULLET}connection: {conn.describe()}")

    total = len(children)
    for i, child in enumerate(children):
        is_last = (i == total - 1)
        connector = BRANCH_LAST if is_last else BRANCH_MID
        lines.append(f"{prefix}{connector}{child.display_name}")
        render_tree_structure(
            child,
            lines,
            prefix=prefix + (GUIDE_BLANK if is_last else GUIDE_THROUGH),
            options=opts,
            depth=depth + 1,
        )


def render_json(tree: SceneTree, header: Optional[SceneHeader] = None) -> str:
    """Render the assembled scene as a JSON document."""
    output: Dict[str, Any] = {
        "header": _header_to_dict(header),
        "placeholder_count": tree.placeholder_count,
        "unbound_connections": [_connection_to_dict(c) for c in tree.unbound_connections],
        "tree": _node_to_dict(tree.root),
    }
    return json.dumps(output, ensure_ascii=False, indent=2)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _render_sub_params(param: NodeParameter, content_prefix: str, lines: List[str]) -> None:
    """Emit sub-parameters under the parent's guide, kept so the vertical `│` stays unbroken."""
    # Aligns the connectors under the first character of the value
    padding = " " * (len(CONTENT_BULLET) + len(param.key) + 2)
    total = len(param.sub_params)
    for i, sub in enumerate(param.sub_params):
        connector = BRANCH_LAST if i == total - 1 else BRANCH_MID
        lines.append(f"{content_prefix}{padding}{connector}{sub.key}: {sub.value}")


def _header_to_dict(header: Optional[SceneHeader]) -> Optional[Dict[str, Any]]:
    if header is None:
        return None
    return {"format": header.format, "load_steps": header.load_steps, "uid": header.uid}


def _connection_to_dict(conn) -> Dict[str, str]:
    return {
        "signal": conn.signal,
        "from": conn.source,
        "to": conn.target,
        "method": conn.method,
        "flags": conn.flags,
    }


def _node_to_dict(node: Node) -> Dict[str, Any]:
    """Convert a Node to a JSON-serializable dictionary."""
    instance = None
    if node.instance is not None:
        instance = {"id": node.instance.id, "type": node.instance.type, "path": node.instance.path}
    return {
        "name": node.name,
        "type": node.type,
        "parent": node.parent,
        "index": node.index,
        "placeholder": node.placeholder,
        "instance": instance,
        "parameters": [
            {
                "key": p.key,
                "value": p.value,
                "sub_params": [{"key": s.key, "value": s.value} for s in p.sub_params],
            }
            for p in node.parameters
        ],
        "connections": [_connection_to_dict(c) for c in node.connections],
        "children": [_node_to_dict(child) for child in node.children.values()],
    }

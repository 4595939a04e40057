from __future__ import annotations

"""
Scene Tree Assembler.

Rebuilds the node hierarchy from the flat, file-ordered node list. Each
node names its ancestors through a slash-delimited parent path, so the
assembler walks down from the root, synthesising placeholder nodes for
ancestors that were never declared on their own (typically sub-nodes of
an instanced scene). Connections are bound to the node that emits them.
"""

import logging
from dataclasses import replace
from enum import Enum
from typing import AbstractSet, List, Optional

from scenetree.domain.constants import PATH_SEPARATOR, ROOT_PATH
from scenetree.domain.scene_models import Connection, Node, ParsedScene, SceneTree

logger = logging.getLogger(__name__)


class BindingPolicy(Enum):
    """
    How connections are attached to nodes.

    BIND_ONCE: a connection goes to the first matching node in file order
               and leaves the pending pool.
    BIND_ALL: every matching node receives the connection.
    """
    BIND_ONCE = "bind_once"
    BIND_ALL = "bind_all"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def assemble_tree(
        parsed: ParsedScene,
        *,
        policy: BindingPolicy = BindingPolicy.BIND_ONCE,
) -> SceneTree:
    """
    Assemble a rooted tree from the output of a parsing pass.

    The node with an empty parent path becomes the root. Every other node
    is inserted under the node its parent path denotes. When two declared
    nodes share a name under the same parent, the first one is kept.
    A connection source naming a declared node path binds to that node
    only; otherwise it may match any node by bare name.

    Args:
        parsed: Flat nodes and pending connections from the parser.
        policy: Connection binding policy.

    Returns:
        SceneTree: The root node plus connections no node claimed.
    """
    root_name = next((n.name for n in parsed.nodes if n.is_root), "")
    pending = [_resolve_root_target(c, root_name) for c in parsed.connections]
    # Exact paths win: a bare name only binds when no node is declared at that path
    declared_paths = frozenset(n.scene_path for n in parsed.nodes)
    bound_ids = set()

    root = Node(name="", placeholder=True)
    root_declared = False

    for node in parsed.nodes:
        # 1. Placement
        if node.is_root:
            if root_declared:
                logger.warning(f"Ignoring second root node '{node.name}'; keeping '{root.name}'.")
                continue
            for name, child in root.children.items():
                node.children.setdefault(name, child)
            root = node
            root_declared = True
            placed: Optional[Node] = node
        else:
            placed = _insert_node(root, node, split_parent_path(node.parent))

        if placed is None:
            continue

        # 2. Connection binding
        if policy is BindingPolicy.BIND_ONCE:
            placed.connections.extend(_pop_matching(pending, placed, declared_paths))
        else:
            for conn in pending:
                if _matches(conn, placed, declared_paths):
                    placed.connections.append(conn)
                    bound_ids.add(id(conn))

    if not root_declared:
        logger.warning("Scene declares no root node.")

    if policy is BindingPolicy.BIND_ONCE:
        unbound = pending
    else:
        unbound = [c for c in pending if id(c) not in bound_ids]

    for conn in unbound:
        logger.info(f"Connection not bound to any declared node: {conn.describe()}")

    return SceneTree(
        root=root,
        unbound_connections=unbound,
        placeholder_count=count_placeholders(root),
    )


def split_parent_path(parent: str) -> List[str]:
    """
    Split a raw parent path into ancestor names below the root.

    '.' denotes the root itself. Empty and '.' segments are skipped.
    """
    if parent == ROOT_PATH:
        return []
    return [s for s in parent.split(PATH_SEPARATOR) if s and s != ROOT_PATH]


def count_placeholders(root: Node) -> int:
    total = 0
    stack = [root]
    while stack:
        node = stack.pop()
        if node.placeholder:
            total += 1
        stack.extend(node.children.values())
    return total

# -----------------------------------------------------------------------------
# PLACEMENT HELPERS
# -----------------------------------------------------------------------------

def _insert_node(root: Node, node: Node, ancestors: List[str]) -> Optional[Node]:
    """
    Walk down the ancestor chain and insert the node at its end.

    Returns:
        Optional[Node]: The node now holding the declaration (the node itself
                        or a placeholder it filled), None for an ignored duplicate.
    """
    cursor = root
    for depth, segment in enumerate(ancestors):
        child = cursor.children.get(segment)
        if child is None:
            parent_path = PATH_SEPARATOR.join(ancestors[:depth]) or ROOT_PATH
            child = Node(name=segment, parent=parent_path, placeholder=True)
            cursor.children[segment] = child
            logger.debug(f"Synthesised placeholder node '{child.scene_path}'.")
        cursor = child

    existing = cursor.children.get(node.name)
    if existing is None:
        cursor.children[node.name] = node
        return node

    if existing.placeholder:
        _fill_placeholder(existing, node)
        return existing

    logger.debug(f"Duplicate node '{node.scene_path}' ignored; first declaration kept.")
    return None


def _fill_placeholder(placeholder: Node, node: Node) -> None:
    placeholder.type = node.type
    placeholder.parent = node.parent
    placeholder.index = node.index
    placeholder.instance = node.instance
    placeholder.parameters = node.parameters
    placeholder.placeholder = False

# -----------------------------------------------------------------------------
# CONNECTION HELPERS
# -----------------------------------------------------------------------------

def _resolve_root_target(conn: Connection, root_name: str) -> Connection:
    if conn.target == ROOT_PATH and root_name:
        return replace(conn, target=root_name)
    return conn


def _matches(conn: Connection, node: Node, declared_paths: AbstractSet[str]) -> bool:
    if conn.source == ROOT_PATH:
        return node.is_root
    if conn.source == node.scene_path:
        return True
    return conn.source == node.name and conn.source not in declared_paths


def _pop_matching(
        pending: List[Connection],
        node: Node,
        declared_paths: AbstractSet[str],
) -> List[Connection]:
    """Remove and return every pending connection emitted by the node."""
    taken = [c for c in pending if _matches(c, node, declared_paths)]
    if taken:
        pending[:] = [c for c in pending if not _matches(c, node, declared_paths)]
    return taken

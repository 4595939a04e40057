from __future__ import annotations

"""
Scene Structure Data Models.

Provides the resource records, the recursive node type and the hand-off
structures exchanged between the parsing, assembly and rendering stages.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# -----------------------------------------------------------------------------
# RESOURCE RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ExternalResource:
    """
    Reference to content stored outside the scene file.

    Attributes:
        id: Declaration key (format-2 integers are stored as strings).
        path: Resource path, usually 'res://...'.
        type: Resource type tag (Script, PackedScene, Texture2D...).
        uid: Stable identifier, only present in format-3 files.
    """
    id: str
    path: str
    type: str
    uid: str = ""


@dataclass(frozen=True)
class Parameter:
    """Flat key/value pair attached to a sub-resource."""
    key: str
    value: str


@dataclass
class SubResource:
    """
    Inline typed resource block with its own parameter list.

    Attributes:
        id: Declaration key.
        type: Resource type tag.
        parameters: Assignments consumed while this block was current.
    """
    id: str
    type: str
    parameters: List[Parameter] = field(default_factory=list)


@dataclass
class NodeParameter:
    """
    Resolved key/value pair attached to a node.

    Attributes:
        key: Property name.
        value: Display value, already dereferenced through the resource tables.
        sub_params: Inlined parameters of a referenced sub-resource.
        raw_value: Value text exactly as found in the file.
    """
    key: str
    value: str
    sub_params: List[Parameter] = field(default_factory=list)
    raw_value: str = ""


@dataclass(frozen=True)
class Connection:
    """
    Signal-to-method wiring between two nodes.

    Attributes:
        signal: Emitted signal name.
        source: Emitting node path ('from' in the file, '.' for the root).
        target: Receiving node path ('to' in the file).
        method: Receiving method name.
        flags: Optional connection flags.
    """
    signal: str
    source: str
    target: str
    method: str
    flags: str = ""

    def describe(self) -> str:
        return f"{self.source}:{self.signal}() => {self.target}:{self.method}()"

# -----------------------------------------------------------------------------
# TREE STRUCTURE
# -----------------------------------------------------------------------------

@dataclass
class Node:
    """
    Entry of the scene tree.

    Nodes own their children exclusively. The only link back towards the
    root is the raw 'parent' path kept from the declaration line.

    Attributes:
        name: Node name, unique among its siblings.
        type: Type tag. Empty when the node instances another scene.
        parent: Raw parent path ('' for the root, '.' for root children).
        index: Declared sibling order, -1 when absent.
        instance: External scene instanced by this node.
        parameters: Resolved property assignments in file order.
        children: Child nodes keyed by name, in insertion order.
        connections: Connections emitted by this node.
        placeholder: True for structural nodes synthesised during assembly.
    """
    name: str
    type: str = ""
    parent: str = ""
    index: int = -1
    instance: Optional[ExternalResource] = None
    parameters: List[NodeParameter] = field(default_factory=list)
    children: Dict[str, "Node"] = field(default_factory=dict)
    connections: List[Connection] = field(default_factory=list)
    placeholder: bool = False

    @property
    def is_root(self) -> bool:
        return self.parent == ""

    @property
    def scene_path(self) -> str:
        """Path relative to the root, as used by connection endpoints."""
        if self.is_root:
            return "."
        if self.parent == ".":
            return self.name
        return f"{self.parent}/{self.name}"

    @property
    def display_name(self) -> str:
        """Name with a ' (type)' suffix unless the type is empty or redundant."""
        if not self.type or self.type == self.name:
            return self.name
        return f"{self.name} ({self.type})"

# -----------------------------------------------------------------------------
# STAGE HAND-OFF RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SceneHeader:
    """Metadata from the leading '[gd_scene ...]' line."""
    format: str = ""
    load_steps: int = 0
    uid: str = ""


@dataclass
class ParsedScene:
    """
    Output of a parsing pass, consumed by the tree assembler.

    Attributes:
        ext_resources: External resources keyed by id.
        sub_resources: Sub-resources keyed by id.
        nodes: Declared nodes in file order.
        connections: Pending connections in file order.
        header: Scene header, when the file carries one.
    """
    ext_resources: Dict[str, ExternalResource] = field(default_factory=dict)
    sub_resources: Dict[str, SubResource] = field(default_factory=dict)
    nodes: List[Node] = field(default_factory=list)
    connections: List[Connection] = field(default_factory=list)
    header: Optional[SceneHeader] = None


@dataclass
class SceneTree:
    """
    Assembled scene, ready for rendering.

    Attributes:
        root: Root node of the hierarchy.
        unbound_connections: Connections no declared node claimed.
        placeholder_count: Number of synthesised structural nodes.
    """
    root: Node
    unbound_connections: List[Connection] = field(default_factory=list)
    placeholder_count: int = 0

from __future__ import annotations

"""
Scene Parser.

Drives the line classifier over a stream of lines and routes every
directive to its destination: resource tables, the flat node list or the
pending connection pool. Bare assignment lines have no explicit owner in
the format, so the parser keeps an explicit mode deciding where they go.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from scenetree.core.parsing.classifier import Directive, DirectiveKind, classify_line
from scenetree.core.parsing.resolver import resolve_parameter
from scenetree.core.parsing.resources import ResourceTables
from scenetree.domain.scene_models import (
    Connection,
    ExternalResource,
    Node,
    Parameter,
    ParsedScene,
    SceneHeader,
    SubResource,
)

logger = logging.getLogger(__name__)


class ParseMode(Enum):
    """Destination of bare 'key = value' lines."""
    SUB_RESOURCES = "sub_resources"
    NODES = "nodes"


class SceneParser:
    """
    Single-pass, stateful scene parser.

    Starts in SUB_RESOURCES mode, where assignments extend the most recent
    sub-resource. The first node declaration switches to NODES mode for the
    rest of the input; from then on assignments belong to the most recently
    declared node and are resolved against the resource tables immediately.
    """

    def __init__(self) -> None:
        self.mode = ParseMode.SUB_RESOURCES
        self.tables = ResourceTables()
        self.scene = ParsedScene(
            ext_resources=self.tables.external,
            sub_resources=self.tables.sub,
        )
        self._line_no = 0

    @property
    def current_node(self) -> Optional[Node]:
        return self.scene.nodes[-1] if self.scene.nodes else None

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def feed(self, line: str) -> None:
        """Consume one line of input."""
        self._line_no += 1
        directive = classify_line(line)
        if directive is None:
            return

        handler = {
            DirectiveKind.SCENE_HEADER: self._on_header,
            DirectiveKind.EXT_RESOURCE: self._on_ext_resource,
            DirectiveKind.SUB_RESOURCE: self._on_sub_resource,
            DirectiveKind.NODE: self._on_node,
            DirectiveKind.CONNECTION: self._on_connection,
            DirectiveKind.ASSIGNMENT: self._on_assignment,
        }[directive.kind]
        handler(directive)

    def parse(self, lines: Iterable[str]) -> ParsedScene:
        """
        Consume a whole line stream.

        Args:
            lines: Lines of a scene file, in order.

        Returns:
            ParsedScene: Resource tables, flat nodes and pending connections.
        """
        for line in lines:
            self.feed(line)

        logger.debug(
            f"Parsed {self._line_no} lines: {len(self.scene.ext_resources)} external, "
            f"{len(self.scene.sub_resources)} sub-resources, {len(self.scene.nodes)} nodes, "
            f"{len(self.scene.connections)} connections."
        )
        return self.scene

    # -------------------------------------------------------------------------
    # DIRECTIVE HANDLERS
    # -------------------------------------------------------------------------

    def _on_header(self, d: Directive) -> None:
        steps = d.get("load_steps")
        self.scene.header = SceneHeader(
            format=d.get("format"),
            load_steps=int(steps) if steps.isdigit() else 0,
            uid=d.get("uid"),
        )

    def _on_ext_resource(self, d: Directive) -> None:
        self.tables.add_external(ExternalResource(
            id=d.get("id"),
            path=d.get("path"),
            type=d.get("type"),
            uid=d.get("uid"),
        ))

    def _on_sub_resource(self, d: Directive) -> None:
        if self.mode is ParseMode.NODES:
            logger.debug(f"Line {self._line_no}: sub-resource '{d.get('id')}' declared after nodes.")
        self.tables.add_sub(SubResource(id=d.get("id"), type=d.get("type")))

    def _on_node(self, d: Directive) -> None:
        self.mode = ParseMode.NODES
        self.tables.close_current_sub()

        node = Node(
            name=d.get("name"),
            type=d.get("type"),
            parent=d.get("parent"),
            index=_parse_index(d.get("index")),
        )

        instance_id = d.get("instance")
        if instance_id:
            node.instance = self.tables.get_external(instance_id)
            if node.instance is None:
                logger.warning(
                    f"Line {self._line_no}: node '{node.name}' instances unknown "
                    f"external resource '{instance_id}'."
                )

        self.scene.nodes.append(node)

    def _on_connection(self, d: Directive) -> None:
        self.tables.close_current_sub()
        self.scene.connections.append(Connection(
            signal=d.get("signal"),
            source=d.get("from"),
            target=d.get("to"),
            method=d.get("method"),
            flags=d.get("flags"),
        ))

    def _on_assignment(self, d: Directive) -> None:
        key, value = d.get("key"), d.get("value")

        if self.mode is ParseMode.SUB_RESOURCES:
            self.tables.append_to_current_sub(Parameter(key=key, value=value))
            return

        node = self.current_node
        if node is not None:
            node.parameters.append(resolve_parameter(key, value, self.tables))


def _parse_index(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        return -1


def parse_scene(lines: Iterable[str]) -> ParsedScene:
    """Parse a line stream with a fresh parser."""
    return SceneParser().parse(lines)

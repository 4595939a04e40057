from __future__ import annotations

"""
Scene Line Classifier.

Identifies which directive a single line of a scene file declares and
extracts its raw fields. The attribute list of a bracketed directive is
tokenized once, so attribute order on the line is irrelevant and quoted
values are never searched for other attributes.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from scenetree.domain.constants import EXT_RESOURCE_PREFIX

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# DIRECTIVE MODEL
# -----------------------------------------------------------------------------

class DirectiveKind(Enum):
    SCENE_HEADER = "gd_scene"
    EXT_RESOURCE = "ext_resource"
    SUB_RESOURCE = "sub_resource"
    NODE = "node"
    CONNECTION = "connection"
    ASSIGNMENT = "assignment"


@dataclass(frozen=True)
class Directive:
    """
    A classified line.

    Attributes:
        kind: Shape matched by the line.
        fields: Raw field values extracted from the line.
    """
    kind: DirectiveKind
    fields: Dict[str, str] = field(default_factory=dict)

    def get(self, name: str, default: str = "") -> str:
        return self.fields.get(name, default)

# -----------------------------------------------------------------------------
# LINE SHAPES
# -----------------------------------------------------------------------------

_HEADER_RE = re.compile(r'^\[gd_scene(?P<attrs>(?:\s.*)?)\]\s*$')
_EXT_RESOURCE_RE = re.compile(r'^\[ext_resource(?P<attrs>(?:\s.*)?)\]\s*$')
_SUB_RESOURCE_RE = re.compile(r'^\[sub_resource(?P<attrs>(?:\s.*)?)\]\s*$')
_NODE_RE = re.compile(r'^\[node(?P<attrs>(?:\s.*)?)\]\s*$')
_CONNECTION_RE = re.compile(r'^\[connection(?P<attrs>(?:\s.*)?)\]\s*$')
_ASSIGNMENT_RE = re.compile(r'^(?P<key>[a-z][a-z0-9_/]*) = (?P<value>.*)$')

# Format 2 writes 'ExtResource( 1 )', format 3 writes 'ExtResource("1_abc")'
_REFERENCE_TEMPLATE = r'{prefix}\(\s*"?(?P<id>[0-9A-Za-z_]+)"?\s*\)'
_INSTANCE_RE = re.compile(_REFERENCE_TEMPLATE.format(prefix=EXT_RESOURCE_PREFIX))

# One 'key=value' token; a quoted value is consumed whole, so 'x=' text
# inside it is never read as an attribute of its own
_ATTRIBUTE_TOKEN_RE = re.compile(
    r'(?P<key>\w+)='
    r'(?:"(?P<quoted>[^"]*)"|(?P<call>\w+\([^)]*\))|(?P<bare>[^\s"\]]+))'
)


def parse_attributes(attrs: str) -> Dict[str, str]:
    """
    Tokenize a directive's attribute list into a name to value mapping.

    The list is scanned left to right once. Quoted values run up to the
    closing quote, so embedded spaces and 'key=' text never split them.
    Reference calls ('ExtResource( 1 )') are kept whole, and bare values
    (format-2 integer ids) end at whitespace. When an attribute repeats,
    the first occurrence wins.

    Args:
        attrs: Text between the directive tag and the closing bracket.

    Returns:
        Dict[str, str]: Unquoted attribute values keyed by name.
    """
    out: Dict[str, str] = {}
    for m in _ATTRIBUTE_TOKEN_RE.finditer(attrs):
        value = m.group("quoted")
        if value is None:
            value = m.group("call") if m.group("call") is not None else m.group("bare")
        out.setdefault(m.group("key"), value)
    return out


def find_attribute(attrs: str, name: str) -> Optional[str]:
    """Look up a single named attribute, or None if absent."""
    return parse_attributes(attrs).get(name)


def reference_id(value: str, prefix: str) -> Optional[str]:
    """Extract the id from an 'ExtResource(...)' or 'SubResource(...)' value."""
    m = re.search(_REFERENCE_TEMPLATE.format(prefix=re.escape(prefix)), value)
    return m.group("id") if m else None

# -----------------------------------------------------------------------------
# FIELD EXTRACTORS
# -----------------------------------------------------------------------------

def _extract_header(attrs: Dict[str, str]) -> Optional[Dict[str, str]]:
    return {
        "format": attrs.get("format", ""),
        "load_steps": attrs.get("load_steps", ""),
        "uid": attrs.get("uid", ""),
    }


def _extract_ext_resource(attrs: Dict[str, str]) -> Optional[Dict[str, str]]:
    if "id" not in attrs:
        return None
    return {
        "id": attrs["id"],
        "path": attrs.get("path", ""),
        "type": attrs.get("type", ""),
        "uid": attrs.get("uid", ""),
    }


def _extract_sub_resource(attrs: Dict[str, str]) -> Optional[Dict[str, str]]:
    if "type" not in attrs or "id" not in attrs:
        return None
    return {"id": attrs["id"], "type": attrs["type"]}


def _extract_node(attrs: Dict[str, str]) -> Optional[Dict[str, str]]:
    name = attrs.get("name")
    if not name:
        return None
    instance = _INSTANCE_RE.fullmatch(attrs.get("instance", ""))
    return {
        "name": name,
        "type": attrs.get("type", ""),
        "parent": attrs.get("parent", ""),
        "index": attrs.get("index", ""),
        "instance": instance.group("id") if instance else "",
    }


def _extract_connection(attrs: Dict[str, str]) -> Optional[Dict[str, str]]:
    out: Dict[str, str] = {}
    for key in ("signal", "from", "to", "method"):
        value = attrs.get(key)
        if not value:
            return None
        out[key] = value
    out["flags"] = attrs.get("flags", "")
    return out


_Extractor = Callable[[Dict[str, str]], Optional[Dict[str, str]]]

# Ordered: the first shape whose pattern matches decides the line
_SHAPES: List[Tuple[DirectiveKind, Pattern[str], _Extractor]] = [
    (DirectiveKind.SCENE_HEADER, _HEADER_RE, _extract_header),
    (DirectiveKind.EXT_RESOURCE, _EXT_RESOURCE_RE, _extract_ext_resource),
    (DirectiveKind.SUB_RESOURCE, _SUB_RESOURCE_RE, _extract_sub_resource),
    (DirectiveKind.NODE, _NODE_RE, _extract_node),
    (DirectiveKind.CONNECTION, _CONNECTION_RE, _extract_connection),
]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def classify_line(line: str) -> Optional[Directive]:
    """
    Classify one line of a scene file.

    Bracketed directives are tried in a fixed order, then the bare
    'key = value' assignment. A directive missing a required attribute
    fails its shape and the line is treated as unrecognized.

    Args:
        line: Raw line, with or without its trailing newline.

    Returns:
        Optional[Directive]: The classified directive, or None when the line
                             is blank, a comment, opaque payload or malformed.
    """
    text = line.rstrip("\r\n")

    for kind, pattern, extractor in _SHAPES:
        m = pattern.match(text)
        if not m:
            continue
        fields = extractor(parse_attributes(m.group("attrs")))
        if fields is None:
            logger.debug(f"Ignoring malformed {kind.value} directive: {text!r}")
            return None
        return Directive(kind, fields)

    m = _ASSIGNMENT_RE.match(text)
    if m:
        return Directive(
            DirectiveKind.ASSIGNMENT,
            {"key": m.group("key"), "value": m.group("value")},
        )

    return None

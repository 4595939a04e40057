from __future__ import annotations

"""
Parameter Resolver.

Rewrites node property values that reference declared resources into
display strings. Sub-resource references also carry the referenced
block's own parameters so the renderer can nest them.
"""

import logging

from scenetree.core.parsing.classifier import reference_id
from scenetree.core.parsing.resources import ResourceTables
from scenetree.domain.constants import EXT_RESOURCE_PREFIX, SUB_RESOURCE_PREFIX
from scenetree.domain.scene_models import NodeParameter

logger = logging.getLogger(__name__)


def resolve_parameter(key: str, raw_value: str, tables: ResourceTables) -> NodeParameter:
    """
    Build a node parameter, dereferencing resource references eagerly.

    Unresolvable references degrade to an empty value instead of aborting,
    since scenes saved mid-edit often point at ids that no longer exist.

    Args:
        key: Property name.
        raw_value: Value text as found in the file.
        tables: Resource tables populated so far.

    Returns:
        NodeParameter: The resolved parameter.
    """
    if raw_value.startswith(EXT_RESOURCE_PREFIX):
        res_id = reference_id(raw_value, EXT_RESOURCE_PREFIX)
        resource = tables.get_external(res_id) if res_id is not None else None
        if resource is None:
            logger.warning(f"Unresolved external resource in '{key} = {raw_value}'")
            return NodeParameter(key=key, value="", raw_value=raw_value)
        return NodeParameter(
            key=key,
            value=f"({resource.type}) {resource.path}",
            raw_value=raw_value,
        )

    if raw_value.startswith(SUB_RESOURCE_PREFIX):
        res_id = reference_id(raw_value, SUB_RESOURCE_PREFIX)
        sub = tables.get_sub(res_id) if res_id is not None else None
        if sub is None:
            logger.warning(f"Unresolved sub-resource in '{key} = {raw_value}'")
            return NodeParameter(key=key, value="", raw_value=raw_value)
        return NodeParameter(
            key=key,
            value=f"({sub.type})",
            sub_params=list(sub.parameters),
            raw_value=raw_value,
        )

    return NodeParameter(key=key, value=raw_value, raw_value=raw_value)

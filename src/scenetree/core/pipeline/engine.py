from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates a complete scene rendering run:
1. Validates configuration and the input path.
2. Streams and parses the scene file.
3. Assembles the node hierarchy and binds connections.
4. Renders the tree as text or JSON.
"""

import logging
import os
from typing import Any, Dict, Optional

from scenetree.core.analysis.tree_assembler import BindingPolicy, assemble_tree
from scenetree.core.analysis.tree_renderer import RenderOptions, render_json, render_scene_tree
from scenetree.core.parsing.parser import SceneParser
from scenetree.core.pipeline.components.reader import stream_file_content
from scenetree.core.pipeline.validator import validate_config
from scenetree.domain.pipeline_models import (
    SceneResult,
    create_error_result,
    create_success_result,
)

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        policy: BindingPolicy = BindingPolicy.BIND_ONCE,
) -> SceneResult:
    """
    Execute the full parse, assemble and render pipeline for one file.

    A missing input file yields a failed result. Errors raised while
    reading an existing file are not recovered and propagate as OSError.

    Args:
        config: The configuration dictionary (raw or partial).
        policy: Connection binding policy for the assembler.

    Returns:
        SceneResult: Object containing status, rendered lines, and summary.

    Raises:
        OSError: If the scene file cannot be read.
    """
    # -------------------------------------------------------------------------
    # 1) Config & Path Validation
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    input_path = cfg["input_path"]
    if not input_path or not os.path.isfile(input_path):
        msg = f"Invalid input file: {input_path}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    logger.info(f"Rendering scene: {input_path}")

    # -------------------------------------------------------------------------
    # 2) Parsing
    # -------------------------------------------------------------------------
    parser = SceneParser()
    parsed = parser.parse(stream_file_content(input_path))

    if parsed.header is not None:
        logger.debug(
            f"Scene header: format={parsed.header.format or '?'} "
            f"load_steps={parsed.header.load_steps} uid={parsed.header.uid or '-'}"
        )

    # -------------------------------------------------------------------------
    # 3) Assembly
    # -------------------------------------------------------------------------
    tree = assemble_tree(parsed, policy=policy)

    # -------------------------------------------------------------------------
    # 4) Rendering
    # -------------------------------------------------------------------------
    if cfg["output_format"] == "json":
        lines = render_json(tree, parsed.header).splitlines()
    else:
        lines = render_scene_tree(tree.root, RenderOptions.from_config(cfg))

    summary = {
        "nodes": len(parsed.nodes),
        "placeholders": tree.placeholder_count,
        "ext_resources": len(parsed.ext_resources),
        "sub_resources": len(parsed.sub_resources),
        "connections": len(parsed.connections),
        "unbound_connections": len(tree.unbound_connections),
    }
    logger.info(
        f"Scene assembled: {summary['nodes']} nodes, {summary['placeholders']} placeholders, "
        f"{summary['connections']} connections ({summary['unbound_connections']} unbound)."
    )

    return create_success_result(cfg, lines, tree, parsed.header, summary_extra=summary)

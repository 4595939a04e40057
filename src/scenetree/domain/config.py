from __future__ import annotations

"""
Configuration Domain Management.

Defines the runtime configuration dictionary that drives a scene
rendering run, and its default values.
"""

from typing import Any, Dict, List

OUTPUT_FORMATS: List[str] = ["text", "json"]
DEFAULT_OUTPUT_FORMAT = "text"

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # IO
        "input_path": "",
        "output_format": DEFAULT_OUTPUT_FORMAT,

        # Rendered content
        "show_parameters": True,
        "show_sub_params": True,
        "show_connections": True,
        "show_instances": True,
        "max_depth": 0,
    }

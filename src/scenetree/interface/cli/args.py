from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from scenetree.domain.constants import APP_NAME, APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the scenetree CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Print the node tree of a Godot scene (.tscn) file.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    p.add_argument(
        "file",
        help="Scene file to render.",
    )

    # --- Rendered Content ---
    p.add_argument(
        "--no-params",
        action="store_true",
        help="Hide node parameters.",
    )
    p.add_argument(
        "--no-sub-params",
        action="store_true",
        help="Hide the inlined fields of referenced sub-resources.",
    )
    p.add_argument(
        "--no-connections",
        action="store_true",
        help="Hide signal connections.",
    )
    p.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Only descend N levels below the root (0 = unlimited).",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Emit the assembled tree as JSON.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {"input_path": args.file}

    if args.no_params:
        overrides["show_parameters"] = False
    if args.no_sub_params:
        overrides["show_sub_params"] = False
    if args.no_connections:
        overrides["show_connections"] = False
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.json_output:
        overrides["output_format"] = "json"

    return overrides

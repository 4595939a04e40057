from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration
resolution, pipeline execution and printing of the rendered tree.
"""

import os
import sys
from typing import List, Optional

from scenetree.core.pipeline.engine import run_pipeline
from scenetree.core.pipeline.validator import validate_config
from scenetree.domain.config import get_default_config
from scenetree.infra.logging import LoggingConfig, configure_logging, get_logger
from scenetree.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 read failure, 2 missing input).
    """
    if sys.platform == "win32" and hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (stderr, stdout is reserved for the tree)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration merge and validation
    raw_conf = get_default_config()
    raw_conf.update(cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 4. Pre-flight input verification
    input_path = clean_conf["input_path"]
    if not os.path.isfile(input_path):
        msg = f"Scene file does not exist: {input_path}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    # 5. Pipeline execution phase
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130
    except OSError as e:
        msg = f"Cannot read scene file '{input_path}': {e}"
        logger.critical(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    # 6. Output rendering phase
    print(result.output)
    return 0

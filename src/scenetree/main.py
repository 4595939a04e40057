from __future__ import annotations

"""
Main Entry Point.

Delegates to the CLI controller and turns its return value into the
process exit code.
"""

import os
import sys

# Allow running this file directly from a source checkout
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
SRC_DIR = os.path.dirname(BASE_DIR)
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)


def main() -> int:
    from scenetree.interface.cli.app import main as cli_main
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

"""
Domain Constants.

Centralizes the application version, the directive vocabulary of the
scene format and the glyphs used by the ASCII renderer.
"""

APP_NAME = "scenetree"
APP_VERSION = "0.3.0"

# -----------------------------------------------------------------------------
# SCENE FORMAT VOCABULARY
# -----------------------------------------------------------------------------

EXT_RESOURCE_PREFIX = "ExtResource"
SUB_RESOURCE_PREFIX = "SubResource"

# Sentinel path naming the root node in parent and connection attributes
ROOT_PATH = "."
PATH_SEPARATOR = "/"

# -----------------------------------------------------------------------------
# RENDERING GLYPHS
# -----------------------------------------------------------------------------

BRANCH_MID = "├── "
BRANCH_LAST = "└── "
GUIDE_THROUGH = "│   "
GUIDE_BLANK = "    "
CONTENT_BULLET = "* "

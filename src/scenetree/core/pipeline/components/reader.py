from __future__ import annotations

"""
Scene File Reading Component.

Streams scene files line by line. Undecodable byte sequences are
replaced so a stray binary blob never aborts a run, while genuine I/O
failures (missing file, permissions) propagate to the caller.
"""

from typing import Iterator

# -----------------------------------------------------------------------------
# STREAM READING OPERATIONS
# -----------------------------------------------------------------------------

def stream_file_content(file_path: str) -> Iterator[str]:
    """
    Generate a line-by-line stream of file content.

    Args:
        file_path: Path to the scene file.

    Yields:
        str: Lines from the file, newline included.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            yield line

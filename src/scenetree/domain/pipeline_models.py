from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structure and factory functions used to communicate
run results between the pipeline engine and the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from scenetree.domain.scene_models import SceneHeader, SceneTree

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SceneResult:
    """
    Unified result object of a complete scene rendering run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        input_path: Scene file processed.
        output_format: Format of 'output' ('text' or 'json').
        lines: Rendered output lines.
        tree: Assembled scene, None on failure.
        header: Scene header, when the file carries one.
        summary: Counts of parsed and assembled entities.
    """
    ok: bool
    error: str
    input_path: str
    output_format: str = "text"
    lines: List[str] = field(default_factory=list)
    tree: Optional[SceneTree] = None
    header: Optional[SceneHeader] = None
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def output(self) -> str:
        return "\n".join(self.lines)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(error: str, cfg: Dict[str, Any]) -> SceneResult:
    """
    Create a failed result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.

    Returns:
        SceneResult: An immutable error result object.
    """
    return SceneResult(
        ok=False,
        error=error,
        input_path=cfg.get("input_path", ""),
        output_format=cfg.get("output_format", "text"),
    )


def create_success_result(
        cfg: Dict[str, Any],
        lines: List[str],
        tree: SceneTree,
        header: Optional[SceneHeader] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> SceneResult:
    """
    Create a successful result instance.

    Args:
        cfg: Final configuration used during execution.
        lines: Rendered output lines.
        tree: Assembled scene.
        header: Scene header, if any.
        summary_extra: Execution metrics.

    Returns:
        SceneResult: An immutable success result object.
    """
    return SceneResult(
        ok=True,
        error="",
        input_path=cfg.get("input_path", ""),
        output_format=cfg.get("output_format", "text"),
        lines=lines,
        tree=tree,
        header=header,
        summary=summary_extra or {},
    )

from __future__ import annotations

"""
Resource Tables.

Accumulates external and sub-resource declarations keyed by id. The
scene format has no block terminator, so the table also tracks which
sub-resource is currently receiving assignment lines.
"""

import logging
from typing import Dict, Optional

from scenetree.domain.scene_models import ExternalResource, Parameter, SubResource

logger = logging.getLogger(__name__)


class ResourceTables:
    """
    Id-keyed registries for external resources and sub-resources.

    Both tables are plain insertion-ordered dicts keyed by the id string
    found on the declaration line.
    """

    def __init__(self) -> None:
        self.external: Dict[str, ExternalResource] = {}
        self.sub: Dict[str, SubResource] = {}
        self._current_sub_id: Optional[str] = None

    # -------------------------------------------------------------------------
    # DECLARATIONS
    # -------------------------------------------------------------------------

    def add_external(self, resource: ExternalResource) -> None:
        if resource.id in self.external:
            logger.debug(f"External resource '{resource.id}' redeclared; keeping the latest.")
        self.external[resource.id] = resource
        self._current_sub_id = None

    def add_sub(self, resource: SubResource) -> None:
        """Register a sub-resource and make it the target of following assignments."""
        if resource.id in self.sub:
            logger.debug(f"Sub-resource '{resource.id}' redeclared; keeping the latest.")
        self.sub[resource.id] = resource
        self._current_sub_id = resource.id

    def close_current_sub(self) -> None:
        self._current_sub_id = None

    @property
    def current_sub(self) -> Optional[SubResource]:
        if self._current_sub_id is None:
            return None
        return self.sub.get(self._current_sub_id)

    def append_to_current_sub(self, param: Parameter) -> bool:
        """
        Append an assignment to the sub-resource currently being declared.

        Args:
            param: Parameter parsed from a bare assignment line.

        Returns:
            bool: False when no sub-resource block is open.
        """
        current = self.current_sub
        if current is None:
            logger.debug(f"Dropping assignment '{param.key}' outside of any resource block.")
            return False
        current.parameters.append(param)
        return True

    # -------------------------------------------------------------------------
    # LOOKUPS
    # -------------------------------------------------------------------------

    def get_external(self, res_id: str) -> Optional[ExternalResource]:
        return self.external.get(res_id)

    def get_sub(self, res_id: str) -> Optional[SubResource]:
        return self.sub.get(res_id)

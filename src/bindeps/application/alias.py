from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil

from bindeps.adapters.errors import AliasPublishError
from bindeps.ports.symlink_capability import SymlinkCapabilityPort

logger = logging.getLogger(__name__)


class AliasPublisher:
    """Points a version-agnostic alias at a final artifact.

    The alias is a symlink where the platform allows one, otherwise a copy
    of the artifact refreshed on every publish.
    """

    def __init__(self, capability: SymlinkCapabilityPort) -> None:
        self.capability = capability

    def _remove_existing(self, alias: Path) -> None:
        if alias.is_symlink() or alias.is_file():
            alias.unlink()
        elif alias.is_dir():
            shutil.rmtree(alias)

    def publish(self, target: Path, alias: Path) -> None:
        try:
            self._remove_existing(alias)
            if self.capability.can_symlink():
                logger.debug("symlinking %s -> %s", alias, target)
                os.symlink(target, alias)
            else:
                logger.debug("copying %s to %s", target, alias)
                shutil.copy2(target, alias)
        except OSError as e:
            raise AliasPublishError(
                f"Failed to publish {alias.name}",
                details={"target": str(target), "alias": str(alias)},
                cause=e,
            )

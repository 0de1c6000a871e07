from typing import Protocol


class SymlinkCapabilityPort(Protocol):
    def can_symlink(self) -> bool: ...

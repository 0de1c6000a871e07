from __future__ import annotations

import sys

from bindeps.domain.binary import Binary

WINDOWS_EXECUTABLE_SUFFIX = ".exe"


def _with_suffix(name: str, platform: str) -> str:
    if platform.startswith("win"):
        return name + WINDOWS_EXECUTABLE_SUFFIX
    return name


def artifact_name(binary: Binary, platform: str = sys.platform) -> str:
    """Version-pinned file name: ``<name>-<version>[-<toolchain>]``."""
    parts = [binary.name, binary.version]
    if binary.toolchain:
        parts.append(binary.toolchain)
    return _with_suffix("-".join(parts), platform)


def alias_name(binary: Binary, platform: str = sys.platform) -> str:
    return _with_suffix(binary.name, platform)

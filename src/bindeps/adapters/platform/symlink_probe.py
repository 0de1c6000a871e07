from __future__ import annotations

import functools
import logging
import sys

logger = logging.getLogger(__name__)

DEV_MODE_KEY = r"SOFTWARE\Microsoft\Windows\CurrentVersion\AppModelUnlock"
DEV_MODE_VALUE = "AllowDevelopmentWithoutDevLicense"


@functools.cache
def windows_developer_mode_enabled() -> bool:
    """Unprivileged symlinks on Windows need Developer Mode."""
    try:
        import winreg
    except ImportError:
        return False
    try:
        with winreg.OpenKey(
            winreg.HKEY_LOCAL_MACHINE, DEV_MODE_KEY, 0, winreg.KEY_QUERY_VALUE
        ) as key:
            value, _ = winreg.QueryValueEx(key, DEV_MODE_VALUE)
    except OSError:
        return False
    return value == 1


class PlatformSymlinkProbe:
    def __init__(self, platform: str = sys.platform) -> None:
        self.platform = platform

    @functools.cached_property
    def _can_symlink(self) -> bool:
        if not self.platform.startswith("win"):
            return True
        enabled = windows_developer_mode_enabled()
        logger.debug("windows developer mode enabled: %s", enabled)
        return enabled

    def can_symlink(self) -> bool:
        return self._can_symlink

"""Platform-Abstraktion für whisper-paste.

Dieses Modul stellt plattformunabhängige Interfaces bereit und
lädt automatisch die richtige Implementierung für das aktuelle OS.
Der Session-Controller verzweigt selbst nie nach Plattform.

Usage:
    from whisper_platform import get_paster, get_hotkey_monitor

    paster = get_paster()
    paster.paste("Hello World")

    monitor = get_hotkey_monitor("ctrl+shift+r", on_toggle)
    monitor.run()
"""

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .hotkey import HotkeyCallback, HotkeyMonitor
    from .paste import ClipboardPaster


def get_platform() -> str:
    """Ermittelt die aktuelle Plattform.

    Returns:
        'macos', 'windows' oder 'linux'

    Raises:
        RuntimeError: Bei nicht unterstützter Plattform
    """
    if sys.platform == "darwin":
        return "macos"
    elif sys.platform == "win32":
        return "windows"
    elif sys.platform.startswith("linux"):
        return "linux"
    raise RuntimeError(f"Nicht unterstützte Plattform: {sys.platform}")


def get_paster() -> "ClipboardPaster":
    """Factory für plattformspezifisches Auto-Paste.

    Returns:
        Paster-Implementierung für die aktuelle Plattform
    """
    platform = get_platform()
    if platform == "macos":
        from .paste import MacOSPaster

        return MacOSPaster()
    elif platform == "windows":
        from .paste import WindowsPaster

        return WindowsPaster()
    from .paste import LinuxPaster

    return LinuxPaster()


def get_hotkey_monitor(hotkey: str, callback: "HotkeyCallback") -> "HotkeyMonitor":
    """Factory für den Polling-Hotkey-Monitor (pynput auf allen Plattformen).

    Args:
        hotkey: Hotkey-String (z.B. "ctrl+shift+r")
        callback: Wird bei jeder Toggle-Flanke aufgerufen

    Raises:
        ValueError: Bei ungültigem Hotkey
    """
    from .hotkey import HotkeyMonitor

    return HotkeyMonitor(hotkey, callback)


__all__ = [
    "get_platform",
    "get_paster",
    "get_hotkey_monitor",
]

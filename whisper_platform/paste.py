"""Auto-Paste Implementierungen.

Text in die Zwischenablage kopieren und danach den Einfüge-Shortcut
der Plattform senden.
macOS: pbcopy + osascript (Cmd+V)
Linux: pyperclip + xdotool (X11) bzw. ydotool (Wayland)
Windows: pyperclip + pynput (Ctrl+V)
"""

import logging
import os
import subprocess
import time

from config import PASTE_DELAY

logger = logging.getLogger("whisper_paste.platform.paste")


class PasteError(RuntimeError):
    """Clipboard oder Tastendruck-Simulation fehlgeschlagen."""


def _get_utf8_env() -> dict:
    """Erstellt Environment mit UTF-8 Locale für pbcopy.

    Ohne dies werden Umlaute in Bundles ohne Shell-Locale falsch kodiert.
    """
    env = os.environ.copy()
    env["LANG"] = "en_US.UTF-8"
    env["LC_ALL"] = "en_US.UTF-8"
    return env


def _copy_via_pyperclip(text: str) -> None:
    import pyperclip

    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise PasteError(f"clipboard error: {e}") from e
    logger.debug(f"pyperclip: {len(text)} Zeichen kopiert")


class ClipboardPaster:
    """Gemeinsamer Ablauf: kopieren, kurz warten, Shortcut senden."""

    def __init__(self, delay: float = PASTE_DELAY) -> None:
        self.delay = delay

    def copy(self, text: str) -> None:
        raise NotImplementedError

    def send_paste_keystroke(self) -> None:
        raise NotImplementedError

    def paste(self, text: str) -> None:
        """Kopiert Text und fügt ihn in die aktive App ein.

        Raises:
            PasteError: Wenn Kopieren oder Einfügen fehlschlägt
        """
        self.copy(text)
        # Kurze Pause für Clipboard-Sync
        time.sleep(self.delay)
        self.send_paste_keystroke()


class MacOSPaster(ClipboardPaster):
    """macOS via pbcopy und osascript (braucht Accessibility)."""

    def copy(self, text: str) -> None:
        try:
            process = subprocess.run(
                ["pbcopy"],
                input=text.encode("utf-8"),
                capture_output=True,
                timeout=2,
                env=_get_utf8_env(),
            )
        except subprocess.TimeoutExpired as e:
            raise PasteError("pbcopy Timeout") from e
        except OSError as e:
            raise PasteError(f"pbcopy fehlgeschlagen: {e}") from e
        if process.returncode != 0:
            raise PasteError(f"pbcopy fehlgeschlagen: {process.stderr.decode()}")
        logger.debug(f"pbcopy: {len(text)} Zeichen kopiert")

    def send_paste_keystroke(self) -> None:
        try:
            result = subprocess.run(
                [
                    "osascript",
                    "-e",
                    'tell application "System Events" to keystroke "v" using command down',
                ],
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise PasteError(f"osascript failed: {e}") from e
        if result.returncode != 0:
            raise PasteError(f"osascript failed: {result.stderr.strip()}")
        logger.info("Auto-Paste: Cmd+V gesendet via osascript")


class LinuxPaster(ClipboardPaster):
    """Linux via pyperclip, Tastendruck via xdotool oder ydotool."""

    # ydotool nutzt Linux-Keycodes: 29 = Left Ctrl, 47 = V
    KEYSTROKE_COMMANDS = (
        ["xdotool", "key", "ctrl+v"],
        ["ydotool", "key", "29:1", "47:1", "47:0", "29:0"],
    )

    def copy(self, text: str) -> None:
        _copy_via_pyperclip(text)

    def send_paste_keystroke(self) -> None:
        for command in self.KEYSTROKE_COMMANDS:
            try:
                result = subprocess.run(command, capture_output=True, timeout=2)
            except (OSError, subprocess.TimeoutExpired) as e:
                logger.debug(f"{command[0]} nicht verfügbar: {e}")
                continue
            if result.returncode == 0:
                logger.info(f"Auto-Paste: Ctrl+V gesendet via {command[0]}")
                return
            logger.debug(f"{command[0]} fehlgeschlagen (exit {result.returncode})")

        raise PasteError("install xdotool (X11) or ydotool (Wayland) to auto-paste")


class WindowsPaster(ClipboardPaster):
    """Windows via pyperclip und pynput."""

    def copy(self, text: str) -> None:
        _copy_via_pyperclip(text)

    def send_paste_keystroke(self) -> None:
        try:
            from pynput.keyboard import Controller, Key

            keyboard = Controller()
            with keyboard.pressed(Key.ctrl):
                keyboard.press("v")
                keyboard.release("v")
        except ImportError as e:
            raise PasteError(f"pynput nicht verfügbar: {e}") from e
        except Exception as e:
            raise PasteError(f"key error: {e}") from e
        logger.info("Auto-Paste: Ctrl+V gesendet via pynput")


__all__ = [
    "PasteError",
    "ClipboardPaster",
    "MacOSPaster",
    "LinuxPaster",
    "WindowsPaster",
]

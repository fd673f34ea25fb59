"""Globaler Hotkey per Polling.

Ein pynput-Listener führt den Tastatur-Status (welche Tasten gerade
gedrückt sind), der HotkeyMonitor fragt ihn im festen Intervall ab
und meldet entprellte Toggle-Flanken.
"""

import logging
import threading
import time
from typing import Callable

from config import DEBOUNCE_INTERVAL, HOTKEY_POLL_INTERVAL
from utils.hotkey import ToggleDebouncer, parse_hotkey_combo

logger = logging.getLogger("whisper_paste.platform.hotkey")

# Hotkey-Callback Typ
HotkeyCallback = Callable[[], None]

_MODIFIER_BASES = {"ctrl", "shift", "alt", "cmd"}


def key_name(key) -> str | None:
    """Kanonischer Name einer pynput-Taste (passend zu utils.hotkey).

    Key.ctrl_l / Key.ctrl_r → "ctrl", KeyCode('R') → "r".
    """
    name = getattr(key, "name", None)
    if name:
        if name == "alt_gr":
            return "alt"
        base, _, side = name.rpartition("_")
        if base in _MODIFIER_BASES and side in ("l", "r"):
            return base
        return name

    char = getattr(key, "char", None)
    if not char:
        return None
    # Mit gedrückter Ctrl liefern X11/Windows Steuerzeichen ('\x12' statt 'r')
    if len(char) == 1 and ord(char) < 32:
        char = chr(ord(char) + 96)
    return char.lower()


class KeyboardState:
    """Menge der aktuell gedrückten Tasten, gepflegt von pynput."""

    def __init__(self) -> None:
        self._pressed: set[str] = set()
        self._lock = threading.Lock()
        self._listener = None

    def _on_press(self, key) -> None:
        name = key_name(key)
        if name:
            with self._lock:
                self._pressed.add(name)

    def _on_release(self, key) -> None:
        name = key_name(key)
        if name:
            with self._lock:
                self._pressed.discard(name)

    def start(self) -> None:
        if self._listener is not None:
            return
        from pynput import keyboard  # type: ignore[import-not-found]

        listener = keyboard.Listener(on_press=self._on_press, on_release=self._on_release)
        listener.daemon = True
        listener.start()
        self._listener = listener
        logger.debug("Tastatur-Listener gestartet")

    def stop(self) -> None:
        listener = self._listener
        self._listener = None
        if listener is not None:
            listener.stop()
        with self._lock:
            self._pressed.clear()

    def is_pressed(self, names) -> bool:
        """True wenn alle Tasten in names gleichzeitig gedrückt sind."""
        with self._lock:
            return self._pressed.issuperset(names)


class HotkeyMonitor:
    """Pollt die Tastenkombination und ruft on_toggle bei jeder Toggle-Flanke.

    on_toggle läuft im Polling-Thread und darf nicht blockieren.
    """

    def __init__(
        self,
        hotkey: str,
        on_toggle: HotkeyCallback,
        key_state: KeyboardState | None = None,
        poll_interval: float = HOTKEY_POLL_INTERVAL,
        debounce_interval: float = DEBOUNCE_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.combo = parse_hotkey_combo(hotkey)
        self.on_toggle = on_toggle
        self.poll_interval = poll_interval
        self._key_state = key_state or KeyboardState()
        self._clock = clock
        # Kein Toggle in den ersten debounce_interval nach dem Start
        self._debouncer = ToggleDebouncer(debounce_interval, started_at=clock())
        self._stop_event = threading.Event()

    def poll_once(self) -> bool:
        """Ein Poll-Zyklus. True wenn ein Toggle ausgelöst wurde."""
        pressed = self._key_state.is_pressed(self.combo.key_names)
        if not self._debouncer.update(pressed, self._clock()):
            return False

        logger.debug(f"Hotkey {self.combo}: Toggle")
        try:
            self.on_toggle()
        except Exception as e:
            # Der Polling-Loop muss weiterlaufen
            logger.exception(f"Toggle-Handler Fehler: {e}")
        return True

    def run(self) -> None:
        """Startet Listener und Polling-Loop (blockiert bis stop())."""
        self._key_state.start()
        logger.info(f"Hotkey-Monitor gestartet: {self.combo}")
        try:
            while not self._stop_event.is_set():
                self.poll_once()
                self._stop_event.wait(self.poll_interval)
        finally:
            self._key_state.stop()
            logger.info("Hotkey-Monitor beendet")

    def stop(self) -> None:
        self._stop_event.set()


__all__ = ["HotkeyCallback", "HotkeyMonitor", "KeyboardState", "key_name"]

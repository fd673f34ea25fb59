"""
Hotkey-Parsing und Debounce-Logik.

Plattformunabhängig (kein pynput-Import), damit Parsing und
Toggle-Erkennung ohne Display testbar bleiben. Die Tastatur-Abfrage
selbst liegt in whisper_platform.hotkey.
"""

from dataclasses import dataclass

# =============================================================================
# Hotkey-Parsing
# =============================================================================

# Modifier-Aliase → kanonischer Name (wie pynput Key.<name> ohne _l/_r)
MODIFIER_MAP = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "shift": "shift",
    "alt": "alt",
    "option": "alt",
    "cmd": "cmd",
    "command": "cmd",
    "super": "cmd",
    "win": "cmd",
}

# Sondertasten → kanonischer Name
SPECIAL_KEY_MAP = {
    "space": "space",
    "return": "enter",
    "enter": "enter",
    "tab": "tab",
    "escape": "esc",
    "esc": "esc",
    "delete": "delete",
    "backspace": "backspace",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "home": "home",
    "end": "end",
    "pageup": "page_up",
    "pagedown": "page_down",
    "capslock": "caps_lock",
    "caps_lock": "caps_lock",
    **{f"f{i}": f"f{i}" for i in range(1, 21)},
}


@dataclass(frozen=True)
class HotkeyCombo:
    """Geparster Hotkey, z.B. ctrl+shift+r."""

    modifiers: frozenset[str]
    key: str

    @property
    def key_names(self) -> frozenset[str]:
        """Alle Tasten, die gleichzeitig gedrückt sein müssen."""
        return self.modifiers | {self.key}

    def __str__(self) -> str:
        order = ["ctrl", "alt", "shift", "cmd"]
        mods = [m for m in order if m in self.modifiers]
        return "+".join([*mods, self.key])


def parse_hotkey_combo(hotkey_str: str) -> HotkeyCombo:
    """
    Parst Hotkey-String in eine HotkeyCombo.

    Args:
        hotkey_str: Hotkey als String (z.B. "ctrl+shift+r", "f19")

    Returns:
        HotkeyCombo mit kanonischen Tastennamen

    Raises:
        ValueError: Bei ungültigem Hotkey
    """
    hotkey_str = hotkey_str.strip().lower()
    if not hotkey_str:
        raise ValueError("Leerer Hotkey")

    # "+" als eigene Taste, z.B. "ctrl++"
    if hotkey_str.endswith("++"):
        parts = [p.strip() for p in hotkey_str[:-2].split("+")] + ["+"]
    else:
        parts = [p.strip() for p in hotkey_str.split("+")]

    *modifiers, key = parts

    if key in SPECIAL_KEY_MAP:
        key = SPECIAL_KEY_MAP[key]
    elif len(key) != 1:
        raise ValueError(f"Unbekannte Taste: {key}")

    modifier_names = set()
    for mod in modifiers:
        if mod not in MODIFIER_MAP:
            raise ValueError(f"Unbekannter Modifier: {mod}")
        modifier_names.add(MODIFIER_MAP[mod])

    return HotkeyCombo(modifiers=frozenset(modifier_names), key=key)


# =============================================================================
# Debounce
# =============================================================================


class ToggleDebouncer:
    """Macht aus dem Tasten-Level einzelne Toggle-Events.

    Ein Event nur bei neuer Flanke (nicht gehalten → gehalten) und wenn
    seit dem letzten akzeptierten Toggle mindestens min_interval vergangen ist.
    Eine Flanke innerhalb des Intervalls ist verbraucht: sie löst auch später
    nicht aus, solange die Taste gehalten bleibt.

    Mit started_at zählt der Start wie ein Toggle: die erste Flanke
    wird frühestens min_interval danach akzeptiert.
    """

    def __init__(self, min_interval: float, started_at: float | None = None):
        self.min_interval = min_interval
        self._held = False
        self._last_toggle = started_at

    def update(self, pressed: bool, now: float) -> bool:
        """Verarbeitet einen Poll-Zyklus. True = Toggle auslösen."""
        if not pressed:
            self._held = False
            return False

        if self._held:
            return False

        self._held = True
        if self._last_toggle is not None and now - self._last_toggle < self.min_interval:
            return False

        self._last_toggle = now
        return True


__all__ = [
    "MODIFIER_MAP",
    "SPECIAL_KEY_MAP",
    "HotkeyCombo",
    "parse_hotkey_combo",
    "ToggleDebouncer",
]

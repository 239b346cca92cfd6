"""
Editor keybindings.

Provides EditorAction type, DEFAULT_EDITOR_KEYBINDINGS, and
EditorKeybindingsManager class.
"""
from __future__ import annotations

from typing import Literal

from .keys import KeyId, key_id_to_code

# ─────────────────────────────────────────────────────────────────────────────
# EditorAction type
# ─────────────────────────────────────────────────────────────────────────────

EditorAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorWordLeft",
    "cursorWordRight",
    "cursorLineStart",
    "cursorLineEnd",
    # Deletion
    "deleteCharBackward",
    # History
    "historyPrevious",
    "historyNext",
    # Submission
    "submit",
    "endOfInput",
    "interrupt",
]

# ─────────────────────────────────────────────────────────────────────────────
# Default keybindings
# ─────────────────────────────────────────────────────────────────────────────

EditorKeybindingsConfig = dict[str, "KeyId | list[KeyId] | None"]

DEFAULT_EDITOR_KEYBINDINGS: dict[str, list[KeyId]] = {
    # Cursor movement
    "cursorLeft":      ["left"],
    "cursorRight":     ["right"],
    "cursorWordLeft":  ["alt+left"],
    "cursorWordRight": ["alt+right"],
    "cursorLineStart": ["ctrl+a"],
    "cursorLineEnd":   ["ctrl+e"],
    # Deletion
    "deleteCharBackward": ["backspace"],
    # History
    "historyPrevious": ["up"],
    "historyNext":     ["down"],
    # Submission
    "submit":     ["enter"],
    "endOfInput": ["ctrl+d"],
    "interrupt":  ["ctrl+c"],
}


# ─────────────────────────────────────────────────────────────────────────────
# EditorKeybindingsManager
# ─────────────────────────────────────────────────────────────────────────────

class EditorKeybindingsManager:
    """
    Maps decoded key codes to editor actions.

    Configuration replaces the default key list of each action it names.
    When one key is bound to several actions, the first action in
    DEFAULT_EDITOR_KEYBINDINGS order wins.
    """

    def __init__(self, config: EditorKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[str, list[KeyId]] = {}
        self._key_to_action: dict[int, str] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: EditorKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_action.clear()
        # Start with defaults
        for action, keys in DEFAULT_EDITOR_KEYBINDINGS.items():
            self._action_to_keys[action] = list(keys)
        # Override with user config
        for action, keys in config.items():
            if action not in DEFAULT_EDITOR_KEYBINDINGS:
                raise ValueError(f"Unknown editor action: {action!r}")
            if keys is None:
                continue
            self._action_to_keys[action] = keys if isinstance(keys, list) else [keys]

        for action, keys in self._action_to_keys.items():
            for key_id in keys:
                self._key_to_action.setdefault(key_id_to_code(key_id), action)

    def action_for(self, key: int) -> str | None:
        """Return the action bound to *key*, or None if it is unbound."""
        return self._key_to_action.get(key)

    def matches(self, key: int, action: str) -> bool:
        """Check if a decoded key triggers a specific action."""
        return self._key_to_action.get(key) == action

    def get_keys(self, action: str) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: EditorKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


# ─────────────────────────────────────────────────────────────────────────────
# Global instance
# ─────────────────────────────────────────────────────────────────────────────

_global_editor_keybindings: EditorKeybindingsManager | None = None


def get_editor_keybindings() -> EditorKeybindingsManager:
    global _global_editor_keybindings
    if _global_editor_keybindings is None:
        _global_editor_keybindings = EditorKeybindingsManager()
    return _global_editor_keybindings


def set_editor_keybindings(manager: EditorKeybindingsManager) -> None:
    global _global_editor_keybindings
    _global_editor_keybindings = manager

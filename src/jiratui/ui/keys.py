"""Translation of Textual key presses into actor input, plus per-mode help."""

from __future__ import annotations

from jiratui.core.events import Key, KeyInput
from jiratui.core.models import InputMode

DEBUG_LOG_KEY = "f12"

HELP_TEXT: dict[InputMode, str] = {
    InputMode.ISSUES_LIST: (
        "↑/↓ move  ←/→ switch list  enter select  b boards  s status  o open  "
        "r refresh  i in-progress  m mine  c project  q quit"
    ),
    InputMode.BOARDS_LIST: "↑/↓ move  o open board  esc back",
    InputMode.UPDATE_ISSUE_STATUS: "↑/↓ move  enter apply transition  esc back",
    InputMode.EDITING: "type the branch name  enter create & switch  esc cancel",
    InputMode.EDITING_DEFAULT_PROJECT: "type a project key (empty = all)  enter save  esc cancel",
}


def translate_key(key: str, character: str | None) -> KeyInput | None:
    """Map a Textual key event to ``KeyInput``; None for keys the actor ignores."""
    if key in Key.NAMED:
        return KeyInput(key)
    if character is not None and len(character) == 1 and character.isprintable():
        return KeyInput(character)
    return None

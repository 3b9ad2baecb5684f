"""Copy text to the system clipboard."""

from __future__ import annotations

from collections.abc import Callable

import pyperclip

ClipboardWriter = Callable[[str], None]


class ClipboardError(Exception):
    """Raised when the clipboard is unavailable or the copy fails."""


def copy_to_clipboard(text: str, *, write: ClipboardWriter | None = None) -> None:
    """Copy ``text`` to the clipboard.

    Raises:
      ClipboardError: If no clipboard mechanism is available on this system.
    """
    writer = write or pyperclip.copy
    try:
        writer(text)
    except pyperclip.PyperclipException as exc:
        raise ClipboardError(f"Clipboard copy failed: {exc}") from exc

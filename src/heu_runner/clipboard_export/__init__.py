"""Clipboard export domain exports."""

from .clipboard_copy import ClipboardError, copy_to_clipboard

__all__ = ["ClipboardError", "copy_to_clipboard"]

"""Custom widgets for the GH Review UI."""

from .diff_viewer import DiffViewer, style_for_row


__all__ = ["DiffViewer", "style_for_row"]

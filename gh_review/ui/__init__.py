"""Textual user interface for GH Review."""

from .diff_app import DiffApp


__all__ = ["DiffApp"]

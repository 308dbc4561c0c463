"""Filesystem access for the command-line driver."""

from .storage import TextStore, render_report

__all__ = ["TextStore", "render_report"]

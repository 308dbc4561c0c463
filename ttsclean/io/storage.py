"""Text and report storage for the command-line driver.

Responsibilities:
- Read raw input text and write cleaned output as UTF-8.
- Render the plain-text run report.
"""

from __future__ import annotations

from pathlib import Path

from ..models.datatypes import CleanReport


class TextStore:
    """Filesystem-backed text access rooted at an optional base directory."""

    def __init__(self, root: Path | None = None) -> None:
        """Initialize the store; relative paths resolve against `root` when given."""

        self.root = root

    def resolve(self, path: Path) -> Path:
        """Return the effective path for a possibly relative input."""

        if self.root is None or path.is_absolute():
            return path
        return self.root / path

    def load_text(self, path: Path) -> str:
        """Load UTF-8 text content."""

        return self.resolve(path).read_text(encoding="utf-8")

    def save_text(self, path: Path, content: str) -> Path:
        """Save UTF-8 text content and return the final path."""

        target = self.resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target


def render_report(
    *, input_path: Path, output_path: Path, profile: str, report: CleanReport
) -> str:
    """Render the deterministic plain-text run report."""

    lines = [
        "Clean report",
        "============",
        f"Input: {input_path}",
        f"Output: {output_path}",
        f"Paragraphs: {report.stats.paragraph_count}",
        f"Profile: {profile}",
        f"Input bytes: {report.stats.input_length}",
        f"Output bytes: {report.stats.output_length}",
        f"Warnings: {len(report.warnings)}",
    ]
    lines.extend(f"- {warning.message}" for warning in report.warnings)
    return "\n".join(lines) + "\n"

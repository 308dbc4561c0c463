"""Structural normalization and reflow rules.

Responsibilities:
- Make line and paragraph structure predictable before lexical rewriting.
- Fold Unicode variants, smart quotes, dashes, and ellipses to speakable ASCII.
- Unwrap hard-wrapped paragraphs and flatten list bullets into prose.
"""

from __future__ import annotations

from collections.abc import Sequence
import unicodedata


_SMART_QUOTES = (
    ("’", "'"),
    ("‘", "'"),
    ("“", '"'),
    ("”", '"'),
)
_DASHES = ("—", "–")


def split_lines(text: str) -> list[str]:
    """Split on `\\n` only, dropping the empty tail produced by a final newline."""

    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class NormalizeLineEndings:
    """Fold `\\r\\n` and lone `\\r` line endings to `\\n`."""

    def apply(self, text: str) -> str:
        return text.replace("\r\n", "\n").replace("\r", "\n")


class TrimTrailingWhitespace:
    """Strip trailing whitespace from every line."""

    def apply(self, text: str) -> str:
        return "\n".join(line.rstrip() for line in split_lines(text))


class NormalizeUnicode:
    """Apply NFKC, NFC, or no Unicode normalization."""

    def __init__(self, mode: str) -> None:
        self.mode = mode

    def apply(self, text: str) -> str:
        """Normalize text with the configured form; `none` passes through."""

        if self.mode == "nfkc":
            return unicodedata.normalize("NFKC", text)
        if self.mode == "nfc":
            return unicodedata.normalize("NFC", text)
        return text


class FoldSmartQuotes:
    """Convert curly single/double quotes to ASCII equivalents."""

    def apply(self, text: str) -> str:
        for glyph, ascii_quote in _SMART_QUOTES:
            text = text.replace(glyph, ascii_quote)
        return text


class FoldDashes:
    """Fold em-dash and en-dash to a comma pause or a spaced hyphen."""

    _SUBSTITUTES = {"comma": ", ", "hyphen": " - "}

    def __init__(self, mode: str) -> None:
        self.mode = mode

    def apply(self, text: str) -> str:
        substitute = self._SUBSTITUTES.get(self.mode)
        if substitute is None:
            return text
        for dash in _DASHES:
            text = text.replace(dash, substitute)
        return text


class FoldEllipses:
    """Fold the ellipsis glyph and literal `...` runs.

    `period` folds both to a single period, `triple` expands the glyph to
    `...`, and `keep` leaves the text untouched.
    """

    def __init__(self, mode: str) -> None:
        self.mode = mode

    def apply(self, text: str) -> str:
        if self.mode == "period":
            return text.replace("…", ".").replace("...", ".")
        if self.mode == "triple":
            return text.replace("…", "...")
        return text


class UnwrapParagraphs:
    """Join hard-wrapped lines into one logical line per paragraph.

    With the `blank-lines` boundary every blank source line closes the open
    paragraph and is kept as an empty output line. With `never` blank lines
    are dropped and never close a paragraph.
    """

    def __init__(self, joiner: str = " ", boundary: str = "blank-lines") -> None:
        self.joiner = joiner
        self.boundary = boundary

    def apply(self, text: str) -> str:
        paragraphs: list[str] = []
        buffer: list[str] = []

        for line in split_lines(text):
            if line.strip():
                buffer.append(line.strip())
                continue
            if self.boundary == "never":
                continue
            if buffer:
                paragraphs.append(self.joiner.join(buffer))
                buffer = []
            paragraphs.append("")

        if buffer:
            paragraphs.append(self.joiner.join(buffer))
        return "\n".join(paragraphs)


class FlattenBullets:
    """Replace a leading bullet marker on each line with a spoken pause."""

    def __init__(self, markers: Sequence[str], replacement: str = ", ") -> None:
        self.markers = tuple(markers)
        self.replacement = replacement

    def apply(self, text: str) -> str:
        return "\n".join(self._flatten_line(line) for line in split_lines(text))

    def _flatten_line(self, line: str) -> str:
        """Return the line with its first matching marker replaced, if any."""

        trimmed = line.lstrip()
        for marker in self.markers:
            if trimmed.startswith(marker):
                remainder = trimmed[len(marker):].lstrip()
                return f"{self.replacement}{remainder}"
        return line

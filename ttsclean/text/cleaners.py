"""Markup stripping and whitespace cleanup rules.

Responsibilities:
- Remove machine-oriented markdown and citation markers with no speakable content.
- Collapse horizontal whitespace and excess blank lines.
- Keep every rule total over arbitrary text.
"""

from __future__ import annotations

import re
from typing import Protocol

from .patterns import PATTERNS, PatternRegistry
from .structure import split_lines


class CleanerRule(Protocol):
    """Protocol for text cleaning rules."""

    def apply(self, text: str) -> str:
        """Apply a single cleaning transformation."""


class PatternRemoval:
    """Replace every match of one compiled pattern with a fixed template."""

    def __init__(self, pattern: re.Pattern[str], replacement: str = "") -> None:
        self.pattern = pattern
        self.replacement = replacement

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


class DropCodeFences:
    """Replace fenced code blocks with a placeholder (possibly empty)."""

    def __init__(self, replacement: str = "", patterns: PatternRegistry = PATTERNS) -> None:
        self.replacement = replacement
        self._pattern = patterns.code_fence

    def apply(self, text: str) -> str:
        """Replace fence pairs; text without a complete pair is returned unchanged."""

        if self._pattern.search(text) is None:
            return text
        # A callable keeps backslashes in the placeholder literal.
        return self._pattern.sub(lambda _match: self.replacement, text)


class StripInlineCode(PatternRemoval):
    """Unwrap single-backtick code spans to their inner text."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.inline_code, r"\1")


class StripMarkdownLinks(PatternRemoval):
    """Unwrap `[label](target)` to the label; targets are discarded."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.markdown_link, r"\1")


class RemoveStackedCitations(PatternRemoval):
    """Remove runs of two or more adjacent bracketed integers like `[1][2]`.

    Must run before `RemoveNumericCitations`, which only sees one bracket at a time.
    """

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.stacked_numeric_citation)


class RemoveNumericCitations(PatternRemoval):
    """Remove single bracketed integers like `[12]`."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.numeric_citation)


class RemoveParentheticalCitations(PatternRemoval):
    """Remove parenthesized integer lists like `(3, 4)`."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.parenthetical_citation)


class RemoveGenericBracketCitations(PatternRemoval):
    """Remove any bracketed content containing at least one digit."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.generic_brackets)


class RemoveGenericParentheticalCitations(PatternRemoval):
    """Remove any parenthesized content containing at least one digit."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.generic_parentheses)


class CollapseWhitespace:
    """Collapse runs of spaces, tabs, and non-breaking spaces to one space."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        self._pattern = patterns.horizontal_space

    def apply(self, text: str) -> str:
        return self._pattern.sub(" ", text)


class RemoveSpaceBeforePunctuation(PatternRemoval):
    """Remove whitespace, newlines included, directly before `, . ; : ! ?`.

    A flattened bullet's leading comma is folded into the preceding prose.
    """

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        super().__init__(patterns.space_before_punctuation, r"\1")


class CollapseBlankLines:
    """Keep at most `max_blank` consecutive blank lines; zero keeps them all."""

    def __init__(self, max_blank: int) -> None:
        self.max_blank = max_blank

    def apply(self, text: str) -> str:
        if self.max_blank == 0:
            return text

        kept: list[str] = []
        blank_run = 0
        for line in split_lines(text):
            if line.strip():
                blank_run = 0
                kept.append(line)
                continue
            blank_run += 1
            if blank_run <= self.max_blank:
                kept.append("")
        return "\n".join(kept)

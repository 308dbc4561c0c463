"""Precompiled pattern registry shared by pipeline rules.

Responsibilities:
- Compile every fixed regular expression exactly once per process.
- Hand rules an immutable registry instead of module-level mutable state.

Key types:
- `PatternRegistry`: frozen bundle of compiled patterns.
- `PATTERNS`: process-wide default registry.
"""

from __future__ import annotations

from dataclasses import dataclass
import re


@dataclass(frozen=True, slots=True)
class PatternRegistry:
    """Compiled patterns used by the fixed-shape pipeline rules."""

    code_fence: re.Pattern[str]
    inline_code: re.Pattern[str]
    markdown_link: re.Pattern[str]
    stacked_numeric_citation: re.Pattern[str]
    numeric_citation: re.Pattern[str]
    parenthetical_citation: re.Pattern[str]
    generic_brackets: re.Pattern[str]
    generic_parentheses: re.Pattern[str]
    horizontal_space: re.Pattern[str]
    space_before_punctuation: re.Pattern[str]
    year: re.Pattern[str]
    version: re.Pattern[str]
    html_open_tag: re.Pattern[str]
    html_close_tag: re.Pattern[str]
    selector: re.Pattern[str]
    acronym_sequence: re.Pattern[str]
    comma_before_period: re.Pattern[str]

    @classmethod
    def build(cls) -> PatternRegistry:
        """Compile all fixed patterns."""

        return cls(
            code_fence=re.compile(r"```.*?```", re.DOTALL),
            inline_code=re.compile(r"`([^`]+)`"),
            markdown_link=re.compile(r"\[([^\]]+)\]\([^)]*\)"),
            stacked_numeric_citation=re.compile(r"(?:\[\s*\d+\s*\]){2,}"),
            numeric_citation=re.compile(r"\[\s*\d+\s*\]"),
            parenthetical_citation=re.compile(r"\(\s*\d+(?:,\s*\d+)*\s*\)"),
            generic_brackets=re.compile(r"\[[^\]\d]*\d[^\]]*\]"),
            generic_parentheses=re.compile(r"\([^)\d]*\d[^)]*\)"),
            horizontal_space=re.compile(r"[ \t\u00a0]+"),
            space_before_punctuation=re.compile(r"\s+([,.;:!?])"),
            year=re.compile(r"\b(1\d{3}|20\d{2})\b"),
            version=re.compile(r"\b\d+(?:\.\d+)+\b"),
            html_open_tag=re.compile(r"<\s*([a-zA-Z][a-zA-Z0-9]*)[^>]*>"),
            html_close_tag=re.compile(r"</\s*[a-zA-Z][a-zA-Z0-9]*\s*>"),
            selector=re.compile(r"\.(?P<name>[a-zA-Z0-9_-]+)"),
            acronym_sequence=re.compile(r"\b[A-Z0-9](?:(?:\.\s*|\s+)[A-Z0-9]\b)+\.?"),
            comma_before_period=re.compile(r",\s*\."),
        )


PATTERNS = PatternRegistry.build()

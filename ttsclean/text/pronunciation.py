"""Pronunciation substitution rules.

Responsibilities:
- Rewrite symbols, brand names, years, acronyms, and version numbers into
  forms a speech engine reads naturally.
- Turn HTML-like tags and selector-like tokens into spoken words.

Literal tables are applied longest-key-first so a shorter key never shadows a
longer overlapping one.
"""

from __future__ import annotations

from collections.abc import Mapping
import re

from .numbers import number_to_words, year_to_words
from .patterns import PATTERNS, PatternRegistry


def longest_first(table: Mapping[str, str]) -> list[tuple[str, str]]:
    """Return table entries ordered by descending key length, then key."""

    return sorted(table.items(), key=lambda item: (-len(item[0]), item[0]))


class ReplaceSymbols:
    """Replace literal substrings globally from a replacement table."""

    def __init__(self, replacements: Mapping[str, str]) -> None:
        self.entries = longest_first(replacements)

    def apply(self, text: str) -> str:
        for source, target in self.entries:
            text = text.replace(source, target)
        return text


class PronounceBrands:
    """Replace whole-word, case-sensitive brand names with spoken forms."""

    def __init__(self, brands: Mapping[str, str]) -> None:
        self.entries = [
            (re.compile(rf"\b{re.escape(source)}\b"), target)
            for source, target in longest_first(brands)
        ]

    def apply(self, text: str) -> str:
        for pattern, target in self.entries:
            text = pattern.sub(lambda _match, spoken=target: spoken, text)
        return text


class PronounceYears:
    """Spell four-digit years in 1000-2099 as American English words."""

    def __init__(
        self,
        separator: str = " ",
        insert_and: bool = True,
        patterns: PatternRegistry = PATTERNS,
    ) -> None:
        self.separator = separator
        self.insert_and = insert_and
        self._pattern = patterns.year

    def apply(self, text: str) -> str:
        return self._pattern.sub(self._spell, text)

    def _spell(self, match: re.Match[str]) -> str:
        return year_to_words(int(match.group(1)), self.separator, self.insert_and)


class ExpandAcronyms:
    """Expand mapped acronyms to spelled-out letters.

    A numeric suffix glued to the token (`HTTP2`, `CSS3.1`) is kept and
    appended after a space, its dot-separated segments joined by the digit
    separator. The spelled form's letters are re-joined with the letter
    separator; an empty separator concatenates them.
    """

    def __init__(
        self,
        acronyms: Mapping[str, str],
        *,
        case_policy: str = "upper",
        style: str = "spaced",
        letter_separator: str = " ",
        digit_separator: str = " dot ",
        patterns: PatternRegistry = PATTERNS,
    ) -> None:
        self.digit_separator = digit_separator
        self.letter_separator = letter_separator
        self.style = style
        self._sequence = patterns.acronym_sequence
        self.entries: list[tuple[re.Pattern[str], str]] = []
        for token, spelled in longest_first(acronyms):
            matched_token = token.upper() if case_policy == "upper" else token
            pattern = re.compile(
                rf"\b{re.escape(matched_token)}(?P<digits>\d+(?:\.\d+)*)?\b"
            )
            self.entries.append((pattern, self._format_spelling(spelled)))

    def apply(self, text: str) -> str:
        for pattern, spelled in self.entries:
            text = pattern.sub(lambda match, letters=spelled: self._expand(match, letters), text)
        return text

    def _expand(self, match: re.Match[str], spelled: str) -> str:
        digits = match.group("digits")
        if not digits:
            return spelled
        return f"{spelled} {self.digit_separator.join(digits.split('.'))}"

    def _format_spelling(self, spelled: str) -> str:
        """Re-join single-letter runs with the letter separator, then apply the style."""

        formatted = self._sequence.sub(
            lambda match: self.letter_separator.join(
                character for character in match.group(0) if character.isalnum()
            ),
            spelled,
        )
        if self.style == "dotted":
            return formatted.replace(" ", ". ")
        return formatted


def _segment_words(segment: str) -> str:
    """Spell one version segment; segments over four digits stay as digits."""

    if len(segment) > 4:
        return segment
    return number_to_words(int(segment))


class PronounceVersions:
    """Read dotted version numbers as `<number> point <number>`."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        self._pattern = patterns.version

    def apply(self, text: str) -> str:
        return self._pattern.sub(self._spell, text)

    @staticmethod
    def _spell(match: re.Match[str]) -> str:
        segments = match.group(0).split(".")
        return " point ".join(_segment_words(segment) for segment in segments)


class PronounceHtmlTags:
    """Read opening tags as their name and drop closing tags."""

    def __init__(self, separator: str = " ", patterns: PatternRegistry = PATTERNS) -> None:
        self.separator = separator
        self._open = patterns.html_open_tag
        self._close = patterns.html_close_tag

    def apply(self, text: str) -> str:
        text = self._open.sub(lambda match: f"{match.group(1)}{self.separator}", text)
        return self._close.sub("", text)


class PronounceSelectors:
    """Read `.name` tokens as `<prefix>name`, dropping the period.

    A space is inserted when the period was glued to a preceding letter or
    digit so that `index.html` reads as `index dot html`.
    """

    def __init__(self, prefix: str = "dot ", patterns: PatternRegistry = PATTERNS) -> None:
        self.prefix = prefix
        self._pattern = patterns.selector

    def apply(self, text: str) -> str:
        if not self.prefix:
            return text
        return self._pattern.sub(lambda match: self._spell(match, text), text)

    def _spell(self, match: re.Match[str], text: str) -> str:
        start = match.start()
        glued = start > 0 and text[start - 1].isalnum() and not self.prefix[0].isspace()
        lead = " " if glued else ""
        return f"{lead}{self.prefix}{match.group('name')}"

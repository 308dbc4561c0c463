"""Punctuation discipline rules.

Responsibilities:
- Limit comma runs, rewrite slashes, and collapse stop-character sequences.
- Fold artifacts left behind by earlier substitution stages.
- Optionally collapse decorative separator runs.
"""

from __future__ import annotations

import re

from .patterns import PATTERNS, PatternRegistry


class CollapseCommaRuns:
    """Keep at most `max_consecutive` commas per run of commas and whitespace.

    Whitespace inside a run is preserved verbatim; any other character ends
    the run.
    """

    def __init__(self, max_consecutive: int = 1) -> None:
        self.max_consecutive = max_consecutive

    def apply(self, text: str) -> str:
        if self.max_consecutive == 0:
            return text

        result: list[str] = []
        pending_space: list[str] = []
        comma_run = 0
        for character in text:
            if character == ",":
                if comma_run < self.max_consecutive:
                    result.extend(pending_space)
                    pending_space.clear()
                    result.append(character)
                comma_run += 1
            elif character.isspace():
                pending_space.append(character)
            else:
                result.extend(pending_space)
                pending_space.clear()
                comma_run = 0
                result.append(character)
        result.extend(pending_space)
        return "".join(result)


class ReplaceSlashes:
    """Replace every `/` with a spoken alternative, or delete it when empty."""

    def __init__(self, replacement: str = " or ") -> None:
        self.replacement = replacement

    def apply(self, text: str) -> str:
        return text.replace("/", self.replacement)


class CollapseStopSequences:
    """Collapse runs of stop characters to the single highest-precedence one.

    Precedence is the left-to-right order of `precedence`; when no character
    of a run appears there, the run's first character survives.
    """

    def __init__(self, stop_chars: str = ".:;,?", precedence: str = ".:;,?") -> None:
        self.stop_chars = frozenset(stop_chars)
        self.precedence = precedence

    def apply(self, text: str) -> str:
        result: list[str] = []
        run: list[str] = []
        for character in text:
            if character in self.stop_chars:
                run.append(character)
                continue
            if run:
                result.append(self._choose(run))
                run = []
            result.append(character)
        if run:
            result.append(self._choose(run))
        return "".join(result)

    def _choose(self, run: list[str]) -> str:
        for preferred in self.precedence:
            if preferred in run:
                return preferred
        return run[0]


class FoldCommaBeforePeriod:
    """Fold `,` plus optional whitespace plus `.` into a bare period."""

    def __init__(self, patterns: PatternRegistry = PATTERNS) -> None:
        self._pattern = patterns.comma_before_period

    def apply(self, text: str) -> str:
        return self._pattern.sub(".", text)


class CollapsePunctuationRuns:
    """Collapse runs of `=`, `\\`, or `~` of at least `min_length` to their first character."""

    def __init__(self, min_length: int = 5) -> None:
        self.min_length = min_length
        self._pattern = re.compile(rf"[=\\~]{{{max(min_length, 1)},}}")

    def apply(self, text: str) -> str:
        return self._pattern.sub(lambda match: match.group(0)[0], text)

"""Text normalization rules used by the pipeline stage table.

Each rule exposes `apply(text) -> str` and can be run in isolation.
"""

from .cleaners import CleanerRule, CollapseBlankLines, CollapseWhitespace, DropCodeFences
from .numbers import number_to_words, year_to_words
from .patterns import PATTERNS, PatternRegistry
from .pronunciation import ExpandAcronyms, PronounceYears, ReplaceSymbols
from .punctuation import CollapseCommaRuns, CollapseStopSequences
from .structure import FlattenBullets, UnwrapParagraphs

__all__ = [
    "PATTERNS",
    "CleanerRule",
    "CollapseBlankLines",
    "CollapseCommaRuns",
    "CollapseStopSequences",
    "CollapseWhitespace",
    "DropCodeFences",
    "ExpandAcronyms",
    "FlattenBullets",
    "PatternRegistry",
    "PronounceYears",
    "ReplaceSymbols",
    "UnwrapParagraphs",
    "number_to_words",
    "year_to_words",
]

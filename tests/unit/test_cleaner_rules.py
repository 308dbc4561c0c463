"""Unit tests for markdown, citation, and whitespace cleanup rules."""

from __future__ import annotations

import time

from ttsclean.text.cleaners import (
    CollapseBlankLines,
    CollapseWhitespace,
    DropCodeFences,
    RemoveGenericBracketCitations,
    RemoveGenericParentheticalCitations,
    RemoveNumericCitations,
    RemoveParentheticalCitations,
    RemoveSpaceBeforePunctuation,
    RemoveStackedCitations,
    StripInlineCode,
    StripMarkdownLinks,
)


def test_code_fences_are_replaced_across_lines() -> None:
    """Fenced blocks should be removed non-greedily, one pair at a time."""

    text = "Before\n```python\nprint(1)\n```\nMiddle\n```\nx\n```\nAfter"

    assert DropCodeFences().apply(text) == "Before\n\nMiddle\n\nAfter"
    assert DropCodeFences("[code]").apply(text) == "Before\n[code]\nMiddle\n[code]\nAfter"


def test_code_fence_placeholder_is_literal_and_unpaired_fence_is_kept() -> None:
    """Backslashes in the placeholder are literal and a lone fence is left alone."""

    assert DropCodeFences(r"\1").apply("a ```x``` b") == r"a \1 b"
    assert DropCodeFences().apply("a ``` b") == "a ``` b"


def test_inline_code_and_links_unwrap_to_inner_text() -> None:
    """Inline code keeps its content and links keep only their label."""

    assert StripInlineCode().apply("Run `pip install` now") == "Run pip install now"
    link = "See [the docs](https://example.com) now"
    assert StripMarkdownLinks().apply(link) == "See the docs now"


def test_stacked_citations_are_removed_as_a_unit() -> None:
    """Adjacent bracketed integers should disappear together."""

    assert RemoveStackedCitations().apply("See [1][ 2 ][3] prior work.") == "See  prior work."
    assert RemoveStackedCitations().apply("Only [4] here.") == "Only [4] here."


def test_single_numeric_citations_are_removed() -> None:
    """Single bracketed integers should be removed even when stacked."""

    rule = RemoveNumericCitations()

    assert rule.apply("Only [4] here.") == "Only  here."
    assert rule.apply("See [1][2].") == "See ."


def test_parenthetical_numeric_lists_are_removed() -> None:
    """Integer lists in parentheses should be removed; other parentheses stay."""

    rule = RemoveParentheticalCitations()

    assert rule.apply("shown (3, 4) and (12)") == "shown  and "
    assert rule.apply("shown (page 3)") == "shown (page 3)"


def test_generic_citations_require_a_digit() -> None:
    """Generic bracket and parenthesis rules only remove content with a digit."""

    assert RemoveGenericBracketCitations().apply("as [Smith 2020] said [sic]") == "as  said [sic]"
    assert (
        RemoveGenericParentheticalCitations().apply("as (Smith, 2020) said (aside)")
        == "as  said (aside)"
    )


def test_horizontal_whitespace_collapses_including_nbsp() -> None:
    """Spaces, tabs, and non-breaking spaces collapse; newlines survive."""

    assert CollapseWhitespace().apply("a \t  b\n  c") == "a b\n c"


def test_space_before_punctuation_is_removed() -> None:
    """Whitespace immediately before standalone punctuation should go."""

    assert RemoveSpaceBeforePunctuation().apply("Hi , there ! Ok ?") == "Hi, there! Ok?"


def test_blank_line_runs_are_capped() -> None:
    """Runs of blank lines are capped independently; zero disables the rule."""

    text = "a\n\n\n\nb\n\n\nc"

    assert CollapseBlankLines(1).apply(text) == "a\n\nb\n\nc"
    assert CollapseBlankLines(2).apply(text) == "a\n\n\nb\n\n\nc"
    assert CollapseBlankLines(0).apply(text) == text


def test_space_before_punctuation_folds_across_line_breaks() -> None:
    """A comma starting a new line joins the text before it."""

    assert RemoveSpaceBeforePunctuation().apply("Items\n\n, one") == "Items, one"


def test_generic_citations_scan_unclosed_brackets_in_linear_time() -> None:
    """An unclosed bracket followed by many digits is left alone quickly."""

    digits = "1" * 200_000
    started = time.perf_counter()

    assert RemoveGenericBracketCitations().apply("[" + digits) == "[" + digits
    assert RemoveGenericParentheticalCitations().apply("(" + digits) == "(" + digits
    assert time.perf_counter() - started < 2.0

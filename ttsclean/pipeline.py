"""Normalization pipeline for speech-ready text.

Responsibilities:
- Define the fixed stage order and gate each stage on its configuration flag.
- Run stages strictly in sequence over one text buffer.
- Finalize the buffer, compute statistics, and evaluate guardrails.

Key types:
- `Stage`: one named, toggleable rule in the stage table.
- `TextPipeline`: orchestration facade for one configuration.
- `clean`: functional entry point returning text and statistics.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from .config import CleanConfig
from .models.datatypes import CleanReport, CleanStats, GuardrailWarning
from .telemetry.logger import RunLogger
from .text.cleaners import (
    CleanerRule,
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
from .text.patterns import PATTERNS, PatternRegistry
from .text.pronunciation import (
    ExpandAcronyms,
    PronounceBrands,
    PronounceHtmlTags,
    PronounceSelectors,
    PronounceVersions,
    PronounceYears,
    ReplaceSymbols,
)
from .text.punctuation import (
    CollapseCommaRuns,
    CollapsePunctuationRuns,
    CollapseStopSequences,
    FoldCommaBeforePeriod,
    ReplaceSlashes,
)
from .text.structure import (
    FlattenBullets,
    FoldDashes,
    FoldEllipses,
    FoldSmartQuotes,
    NormalizeLineEndings,
    NormalizeUnicode,
    TrimTrailingWhitespace,
    UnwrapParagraphs,
    split_lines,
)


@dataclass(frozen=True, slots=True)
class Stage:
    """One entry of the stage table.

    Attributes:
        name: Stable kebab-case stage identifier used in logs.
        enabled: Whether configuration turns the stage on.
        rule: Rule object whose `apply` rewrites the whole buffer.
    """

    name: str
    enabled: bool
    rule: CleanerRule


def build_stages(config: CleanConfig, patterns: PatternRegistry = PATTERNS) -> tuple[Stage, ...]:
    """Return the ordered stage table for a configuration.

    Stacked citations run before single numeric citations, and paragraph
    unwrapping runs before bullet flattening; both orders are load-bearing.
    """

    io_config = config.io
    unicode_config = config.unicode
    markdown = config.markdown
    citations = config.citations
    whitespace = config.whitespace
    pronunciation = config.pronunciation
    abbreviations = config.abbreviations
    punctuation = config.punctuation

    return (
        Stage("line-endings", io_config.normalize_line_endings, NormalizeLineEndings()),
        Stage("trailing-whitespace", io_config.trim_trailing_whitespace, TrimTrailingWhitespace()),
        Stage(
            "unicode-normalization",
            unicode_config.normalization != "none",
            NormalizeUnicode(unicode_config.normalization),
        ),
        Stage("ascii-quotes", unicode_config.ascii_quotes, FoldSmartQuotes()),
        Stage("dashes", unicode_config.dash_mode != "keep", FoldDashes(unicode_config.dash_mode)),
        Stage(
            "ellipses",
            unicode_config.ellipsis_mode != "keep",
            FoldEllipses(unicode_config.ellipsis_mode),
        ),
        Stage(
            "code-fences",
            markdown.drop_code_fences,
            DropCodeFences(markdown.code_fence_replacement, patterns),
        ),
        Stage("inline-code", markdown.strip_inline_code, StripInlineCode(patterns)),
        Stage("markdown-links", markdown.strip_markdown_links, StripMarkdownLinks(patterns)),
        Stage(
            "stacked-citations",
            citations.drop_stacked_numeric_brackets,
            RemoveStackedCitations(patterns),
        ),
        Stage(
            "numeric-citations",
            citations.drop_numeric_brackets,
            RemoveNumericCitations(patterns),
        ),
        Stage(
            "parenthetical-citations",
            citations.drop_parenthetical_numeric,
            RemoveParentheticalCitations(patterns),
        ),
        Stage(
            "generic-bracket-citations",
            citations.drop_generic_brackets,
            RemoveGenericBracketCitations(patterns),
        ),
        Stage(
            "generic-parenthetical-citations",
            citations.drop_generic_parentheses,
            RemoveGenericParentheticalCitations(patterns),
        ),
        Stage(
            "unwrap-paragraphs",
            config.structure.unwrap_hard_wrapped_lines,
            UnwrapParagraphs(config.structure.join_lines_with, config.structure.paragraph_boundary),
        ),
        Stage(
            "flatten-bullets",
            config.lists.flatten_bullets and bool(config.lists.bullet_markers),
            FlattenBullets(config.lists.bullet_markers, config.lists.bullet_replacement),
        ),
        Stage("collapse-horizontal", whitespace.collapse_horizontal, CollapseWhitespace(patterns)),
        Stage(
            "space-before-punctuation",
            whitespace.remove_space_before_punct,
            RemoveSpaceBeforePunctuation(patterns),
        ),
        Stage(
            "collapse-blank-lines",
            whitespace.max_consecutive_blank_lines > 0,
            CollapseBlankLines(whitespace.max_consecutive_blank_lines),
        ),
        Stage(
            "symbol-replacements",
            pronunciation.enable_replacements and bool(pronunciation.replacements),
            ReplaceSymbols(pronunciation.replacements),
        ),
        Stage(
            "brand-pronunciation",
            bool(pronunciation.brand_map),
            PronounceBrands(pronunciation.brand_map),
        ),
        Stage(
            "year-pronunciation",
            pronunciation.year_mode == "american",
            PronounceYears(
                pronunciation.number_config.separator,
                pronunciation.number_config.insert_and,
                patterns,
            ),
        ),
        Stage(
            "acronym-expansion",
            abbreviations.expand_acronyms and bool(abbreviations.map),
            ExpandAcronyms(
                abbreviations.map,
                case_policy=abbreviations.case_policy,
                style=abbreviations.acronym_style,
                letter_separator=abbreviations.letter_separator,
                digit_separator=abbreviations.digit_separator,
                patterns=patterns,
            ),
        ),
        Stage(
            "version-pronunciation",
            pronunciation.version_mode != "none",
            PronounceVersions(patterns),
        ),
        Stage(
            "html-tags",
            pronunciation.html_tag_pronunciation,
            PronounceHtmlTags(pronunciation.html_tag_separator, patterns),
        ),
        Stage(
            "selectors",
            bool(config.selector.prefix),
            PronounceSelectors(config.selector.prefix, patterns),
        ),
        Stage(
            "comma-runs",
            punctuation.collapse_commas and punctuation.max_consecutive_commas > 0,
            CollapseCommaRuns(punctuation.max_consecutive_commas),
        ),
        Stage(
            "slashes",
            punctuation.replace_slashes,
            ReplaceSlashes(punctuation.slash_replacement),
        ),
        Stage(
            "stop-sequences",
            bool(punctuation.stop_chars),
            CollapseStopSequences(punctuation.stop_chars, punctuation.stop_precedence),
        ),
        Stage("comma-before-period", True, FoldCommaBeforePeriod(patterns)),
        Stage("collapse-horizontal-final", True, CollapseWhitespace(patterns)),
        Stage(
            "punctuation-runs",
            config.experimental.strip_punct_runs and config.experimental.punct_run_min_len > 0,
            CollapsePunctuationRuns(config.experimental.punct_run_min_len),
        ),
    )


class TextPipeline:
    """Run the stage table for one configuration and report statistics."""

    def __init__(
        self,
        config: CleanConfig | None = None,
        patterns: PatternRegistry = PATTERNS,
        run_logger: RunLogger | None = None,
    ) -> None:
        """Initialize with a resolved configuration; defaults when omitted."""

        self.config = config if config is not None else CleanConfig.default()
        self.stages = build_stages(self.config, patterns)
        self._run_logger = run_logger

    def clean_with_report(self, text: str) -> CleanReport:
        """Run all enabled stages, finalize, and return text with diagnostics."""

        current = text
        for stage in self.stages:
            if not stage.enabled:
                if self._run_logger is not None:
                    self._run_logger.log_stage_skipped(stage.name)
                continue
            current = self._run_stage(stage, current)

        cleaned = self._finalize(current)
        stats = CleanStats(
            input_length=len(text.encode("utf-8")),
            output_length=len(cleaned.encode("utf-8")),
            paragraph_count=sum(1 for line in split_lines(cleaned) if line.strip()),
        )
        warnings = self._check_guardrails(cleaned)
        for warning in warnings:
            self._emit_warning(warning)
        return CleanReport(cleaned_text=cleaned, stats=stats, warnings=warnings)

    def clean(self, text: str) -> str:
        """Run all enabled stages in order and return the cleaned text."""

        return self.clean_with_report(text).cleaned_text

    def _run_stage(self, stage: Stage, text: str) -> str:
        """Apply one stage and emit start/complete telemetry."""

        if self._run_logger is not None:
            self._run_logger.log_stage_start(stage.name)
        result = stage.rule.apply(text)
        if self._run_logger is not None:
            self._run_logger.log_stage_complete(stage.name, changed=result != text)
        return result

    def _finalize(self, text: str) -> str:
        """Trim line tails again, trim the buffer, and end with one newline."""

        if self.config.io.trim_trailing_whitespace:
            text = TrimTrailingWhitespace().apply(text)
        return text.strip() + "\n"

    def _check_guardrails(self, cleaned: str) -> tuple[GuardrailWarning, ...]:
        """Evaluate output-length and paragraph-length guardrails."""

        guardrails = self.config.guardrails
        warnings: list[GuardrailWarning] = []

        min_chars = guardrails.min_output_chars_warn
        if min_chars > 0 and len(cleaned) < min_chars:
            warnings.append(
                GuardrailWarning(
                    kind="min-output-length",
                    message=(
                        f"output is shorter than {min_chars} chars ({len(cleaned)}), "
                        "double-check that cleaning did not drop the whole document"
                    ),
                    limit=min_chars,
                    actual=len(cleaned),
                )
            )

        max_chars = guardrails.max_paragraph_chars
        if max_chars > 0:
            for line in split_lines(cleaned):
                if line.strip() and len(line) > max_chars:
                    warnings.append(
                        GuardrailWarning(
                            kind="max-paragraph-length",
                            message=(
                                f"paragraph exceeds guardrail of {max_chars} chars "
                                f"({len(line)} chars)"
                            ),
                            limit=max_chars,
                            actual=len(line),
                        )
                    )
        return tuple(warnings)

    def _emit_warning(self, warning: GuardrailWarning) -> None:
        """Send a guardrail warning to the logging side channel."""

        if self._run_logger is not None:
            self._run_logger.log_warning(
                "guardrails", warning.kind, limit=warning.limit, actual=warning.actual
            )
            return
        logger.warning(warning.message)


def clean(text: str, config: CleanConfig | None = None) -> tuple[str, CleanStats]:
    """Normalize `text` for speech synthesis and return it with statistics."""

    report = TextPipeline(config).clean_with_report(text)
    return report.cleaned_text, report.stats

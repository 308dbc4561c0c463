"""Unit tests for stage ordering, end-to-end cleaning, and guardrails."""

from __future__ import annotations

from io import StringIO

from ttsclean.config import CleanConfig, ConfigLoader
from ttsclean.pipeline import TextPipeline, build_stages, clean
from ttsclean.telemetry.logger import RunLogger


def _quiet_config(**groups: dict[str, object]) -> CleanConfig:
    """Build a config with the output-length guardrail disabled."""

    payload: dict[str, object] = {"guardrails": {"min_output_chars_warn": 0}}
    payload.update(groups)
    return ConfigLoader.from_mapping(payload)


def test_stage_table_has_fixed_order() -> None:
    """The stage table order is stable and independent of configuration."""

    names = [stage.name for stage in build_stages(CleanConfig.default())]

    assert names == [
        "line-endings",
        "trailing-whitespace",
        "unicode-normalization",
        "ascii-quotes",
        "dashes",
        "ellipses",
        "code-fences",
        "inline-code",
        "markdown-links",
        "stacked-citations",
        "numeric-citations",
        "parenthetical-citations",
        "generic-bracket-citations",
        "generic-parenthetical-citations",
        "unwrap-paragraphs",
        "flatten-bullets",
        "collapse-horizontal",
        "space-before-punctuation",
        "collapse-blank-lines",
        "symbol-replacements",
        "brand-pronunciation",
        "year-pronunciation",
        "acronym-expansion",
        "version-pronunciation",
        "html-tags",
        "selectors",
        "comma-runs",
        "slashes",
        "stop-sequences",
        "comma-before-period",
        "collapse-horizontal-final",
        "punctuation-runs",
    ]


def test_stage_toggles_follow_configuration() -> None:
    """Disabled options switch their stage off; fixed cleanups stay on."""

    config = _quiet_config(
        citations={"drop_parenthetical_numeric": True, "drop_generic_brackets": False},
        experimental={"strip_punct_runs": True},
        selector={"prefix": ""},
    )
    enabled = {stage.name: stage.enabled for stage in build_stages(config)}

    assert enabled["parenthetical-citations"] is True
    assert enabled["generic-bracket-citations"] is False
    assert enabled["punctuation-runs"] is True
    assert enabled["selectors"] is False
    assert enabled["comma-before-period"] is True
    assert enabled["collapse-horizontal-final"] is True


def test_default_pipeline_examples() -> None:
    """Representative inputs produce the documented speech-ready text."""

    pipeline = TextPipeline(_quiet_config())

    assert pipeline.clean("See [1][2][3] prior work.") == "See prior work.\n"
    assert (
        pipeline.clean("Published in 1994 and 2003.")
        == "Published in nineteen hundred and ninety four and two thousand and three.\n"
    )
    assert pipeline.clean("The API uses HTTP2 calls.") == "The A P I uses H T T P 2 calls.\n"
    assert pipeline.clean("wait,,, then go") == "wait, then go\n"
    assert pipeline.clean("- first item") == ", first item\n"


def test_code_fences_are_dropped_and_paragraphs_kept() -> None:
    """Fenced code disappears while the surrounding paragraphs stay separate."""

    text = "Before\n```python\nprint(1)\n```\nAfter"

    cleaned, stats = clean(text, _quiet_config())

    assert cleaned == "Before\n\nAfter\n"
    assert stats.paragraph_count == 2


def test_citations_survive_when_every_citation_rule_is_off() -> None:
    """Bracketed numbers are only removed by the citation stages."""

    config = _quiet_config(
        citations={
            "drop_stacked_numeric_brackets": False,
            "drop_numeric_brackets": False,
            "drop_generic_brackets": False,
        }
    )

    assert TextPipeline(config).clean("See [1][2][3] prior work.") == "See [1][2][3] prior work.\n"


def test_hard_wrapped_paragraphs_are_unwrapped() -> None:
    """Wrapped lines are joined and blank-line runs are capped."""

    text = "First line\ncontinues here.\n\n\n\nSecond paragraph."

    cleaned = TextPipeline(_quiet_config()).clean(text)

    assert cleaned == "First line continues here.\n\nSecond paragraph.\n"


def test_output_is_trimmed_and_ends_with_single_newline() -> None:
    """Leading and trailing blank space is removed from the whole buffer."""

    assert TextPipeline(_quiet_config()).clean("\n\n   Hello there.   \n\n\n") == "Hello there.\n"


def test_stats_measure_utf8_bytes() -> None:
    """Input and output lengths are byte counts, not character counts."""

    text = "Café — ok."

    cleaned, stats = clean(text, _quiet_config())

    assert cleaned == "Café, ok.\n"
    assert stats.input_length == len(text.encode("utf-8"))
    assert stats.output_length == len(cleaned.encode("utf-8"))
    assert stats.output_length == len(cleaned) + 1
    assert stats.paragraph_count == 1


def test_cleaning_is_idempotent_on_cleaned_output() -> None:
    """A second pass over cleaned text changes nothing."""

    pipeline = TextPipeline(_quiet_config())
    text = "See [1][2] the API docs.\nWrapped line here.\n\n- item one"

    once = pipeline.clean(text)

    assert once == "See the A P I docs. Wrapped line here. item one\n"
    assert pipeline.clean(once) == once


def test_short_output_triggers_min_length_warning() -> None:
    """Output below the configured character minimum produces one warning."""

    report = TextPipeline(CleanConfig.default()).clean_with_report("Short text.")

    assert report.cleaned_text == "Short text.\n"
    assert len(report.warnings) == 1
    warning = report.warnings[0]
    assert warning.kind == "min-output-length"
    assert warning.limit == 200
    assert warning.actual == 12
    assert "shorter than 200 chars" in warning.message


def test_long_paragraph_triggers_max_length_warning() -> None:
    """Every non-blank output line above the limit is reported."""

    config = ConfigLoader.from_mapping(
        {"guardrails": {"min_output_chars_warn": 0, "max_paragraph_chars": 10}}
    )

    report = TextPipeline(config).clean_with_report("short\n\nthis line is long enough")

    assert [warning.kind for warning in report.warnings] == ["max-paragraph-length"]
    assert report.warnings[0].actual == len("this line is long enough")
    assert "exceeds guardrail of 10 chars" in report.warnings[0].message


def test_run_logger_records_stage_events_and_guardrails() -> None:
    """Stage start/complete/skip and guardrail events reach the log sink."""

    sink = StringIO()
    run_logger = RunLogger(sink=sink, level="DEBUG")

    TextPipeline(CleanConfig.default(), run_logger=run_logger).clean("Short text.")

    output = sink.getvalue()
    assert "[phase] level=DEBUG stage=line-endings event=start" in output
    assert "[phase] level=DEBUG stage=line-endings event=complete changed=False" in output
    assert "[phase] level=DEBUG stage=parenthetical-citations event=skipped" in output
    assert (
        "[phase] level=WARNING stage=guardrails event=min-output-length actual=12 limit=200"
        in output
    )


def test_run_logger_level_filters_debug_events() -> None:
    """At info level only driver events and warnings are written."""

    sink = StringIO()
    run_logger = RunLogger(sink=sink, level="info")

    TextPipeline(CleanConfig.default(), run_logger=run_logger).clean("Short text.")

    output = sink.getvalue()
    assert "event=start" not in output
    assert "stage=guardrails event=min-output-length" in output


def test_single_citation_removed_with_stacked_rule_disabled() -> None:
    """The single-bracket rule works on its own when stacked removal is off."""

    config = _quiet_config(
        citations={"drop_stacked_numeric_brackets": False, "drop_generic_brackets": False}
    )

    assert TextPipeline(config).clean("Shown in [4] above.") == "Shown in above.\n"


def test_bullets_after_blank_line_fold_into_preceding_prose() -> None:
    """A flattened bullet's comma pause joins the paragraph before it."""

    pipeline = TextPipeline(_quiet_config())

    assert pipeline.clean("Items\n\n- one") == "Items, one\n"
    assert pipeline.clean("Items\n\n- one\n- two") == "Items, one - two\n"


def test_pipeline_accepts_very_long_version_segments() -> None:
    """Digit runs beyond integer-conversion limits pass through unchanged."""

    huge = "9" * 5000

    cleaned, _ = clean(f"version 1.{huge} done", _quiet_config())

    assert cleaned == f"version one point {huge} done\n"

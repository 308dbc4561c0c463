"""Unit tests for configuration defaults and YAML loader behavior."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest

from ttsclean.config import CleanConfig, ConfigLoader


def test_default_config_matches_documented_defaults() -> None:
    """Defaults should resolve every option group without a config file."""

    config = CleanConfig.default()

    assert config.meta.profile == "clean-narration-slightly-expressive"
    assert config.unicode.normalization == "nfkc"
    assert config.unicode.dash_mode == "comma"
    assert config.unicode.ellipsis_mode == "period"
    assert config.whitespace.max_consecutive_blank_lines == 1
    assert config.structure.paragraph_boundary == "blank-lines"
    assert config.citations.drop_parenthetical_numeric is False
    assert config.lists.bullet_markers == ("- ", "* ", "• ", "– ", "— ")
    assert config.abbreviations.map["HTTPS"] == "H T T P S"
    assert config.abbreviations.digit_separator == " dot "
    assert config.pronunciation.replacements["×"] == " by "
    assert config.pronunciation.brand_map["W3C"] == "Double U Three C"
    assert config.pronunciation.number_config.insert_and is True
    assert config.guardrails.min_output_chars_warn == 200
    assert config.punctuation.stop_precedence == ".:;,?"
    assert config.selector.prefix == "dot "
    assert config.experimental.strip_punct_runs is False


def test_from_mapping_overlays_partial_groups_on_defaults() -> None:
    """Missing fields should keep defaults while provided ones override."""

    config = ConfigLoader.from_mapping(
        {
            "unicode": {"dash_mode": "Hyphen"},
            "punctuation": {"max_consecutive_commas": "2"},
            "pronunciation": {"number_config": {"insert_and": "no"}},
            "structure": {"paragraph_boundary": "never"},
        }
    )

    assert config.unicode.dash_mode == "hyphen"
    assert config.unicode.normalization == "nfkc"
    assert config.punctuation.max_consecutive_commas == 2
    assert config.punctuation.slash_replacement == " or "
    assert config.pronunciation.number_config.insert_and is False
    assert config.pronunciation.number_config.separator == " "
    assert config.structure.paragraph_boundary == "never"


def test_from_mapping_ignores_unknown_groups_and_fields(log_sink: StringIO) -> None:
    """Unknown keys should be logged and ignored rather than failing the run."""

    config = ConfigLoader.from_mapping({"bogus": 1, "io": {"output_format": "x"}})

    assert config == CleanConfig.default()
    assert "unknown key `bogus`" in log_sink.getvalue()
    assert "unknown key `io.output_format`" in log_sink.getvalue()


def test_map_fields_replace_default_tables() -> None:
    """A provided replacement table should replace, not merge with, the default."""

    config = ConfigLoader.from_mapping({"pronunciation": {"replacements": {"&": " and "}}})

    assert config.pronunciation.replacements == {"&": " and "}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"unicode": {"dash_mode": "wavy"}}, r"unicode\.dash_mode"),
        ({"whitespace": {"max_consecutive_blank_lines": -1}}, r"non-negative integer"),
        ({"whitespace": {"max_consecutive_blank_lines": True}}, r"non-negative integer"),
        ({"io": {"normalize_line_endings": "maybe"}}, r"must be a boolean value"),
        ({"lists": {"bullet_markers": "- "}}, r"must be a list of strings"),
        ({"lists": {"bullet_markers": ["- ", ""]}}, r"non-empty strings"),
        ({"markdown": {"code_fence_replacement": 5}}, r"must be a string"),
        ({"citations": "all"}, r"must be a mapping/object"),
        ({"abbreviations": {"map": {"API": 3}}}, r"must map `API` to a string"),
        ({"logging": {"level": "loud"}}, r"logging\.level"),
    ],
)
def test_from_mapping_rejects_invalid_values(payload: dict[str, object], message: str) -> None:
    """Invalid values should fail with a message naming the offending field."""

    with pytest.raises(ValueError, match=message):
        ConfigLoader.from_mapping(payload)


def test_config_loader_from_yaml_keeps_significant_whitespace(tmp_path: Path) -> None:
    """String values such as joiners and markers must keep their spaces."""

    config_path = tmp_path / "tts-clean.yaml"
    config_path.write_text(
        """
meta:
  profile: audiobook
structure:
  join_lines_with: " "
lists:
  bullet_replacement: "; "
  bullet_markers:
    - "+ "
    - "- "
abbreviations:
  letter_separator: ""
  map:
    NASA: N A S A
guardrails:
  max_paragraph_chars: 400
""".strip(),
        encoding="utf-8",
    )

    config = ConfigLoader.from_yaml(config_path)

    assert config.meta.profile == "audiobook"
    assert config.structure.join_lines_with == " "
    assert config.lists.bullet_replacement == "; "
    assert config.lists.bullet_markers == ("+ ", "- ")
    assert config.abbreviations.letter_separator == ""
    assert config.abbreviations.map == {"NASA": "N A S A"}
    assert config.guardrails.max_paragraph_chars == 400


def test_config_loader_from_yaml_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    """An empty YAML document should resolve to the default configuration."""

    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")

    assert ConfigLoader.from_yaml(config_path) == CleanConfig.default()


def test_config_loader_from_yaml_rejects_non_mapping_root(tmp_path: Path) -> None:
    """A YAML list at the top level is not a valid configuration."""

    config_path = tmp_path / "list.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError, match="top-level mapping"):
        ConfigLoader.from_yaml(config_path)


def test_config_loader_load_falls_back_to_defaults_for_missing_file(
    tmp_path: Path, log_sink: StringIO
) -> None:
    """A missing config file is not fatal but is reported."""

    config = ConfigLoader.load(tmp_path / "missing.yaml")

    assert config == CleanConfig.default()
    assert "falling back to defaults" in log_sink.getvalue()


def test_with_logging_applies_driver_overrides() -> None:
    """CLI overrides should produce a new validated config and leave the original intact."""

    base = CleanConfig.default()
    config = base.with_logging(level="DEBUG", write_report=True, report_path="out/report.txt")

    assert config.logging.level == "debug"
    assert config.logging.write_report is True
    assert config.logging.report_path == "out/report.txt"
    assert base.logging.level == "info"
    assert base.logging.write_report is False


def test_config_tables_and_lists_are_read_only(tmp_path: Path) -> None:
    """Default and loaded configurations reject in-place mutation."""

    config_path = tmp_path / "tts-clean.yaml"
    config_path.write_text(
        "abbreviations:\n  map:\n    NASA: N A S A\nlists:\n  bullet_markers: ['+ ']\n",
        encoding="utf-8",
    )

    for config in (CleanConfig.default(), ConfigLoader.from_yaml(config_path)):
        assert isinstance(config.lists.bullet_markers, tuple)
        with pytest.raises(TypeError):
            config.abbreviations.map["XYZ"] = "X Y Z"  # type: ignore[index]
        with pytest.raises(TypeError):
            config.pronunciation.replacements["&"] = " and "  # type: ignore[index]
        with pytest.raises(TypeError):
            config.pronunciation.brand_map["Foo"] = "Foo"  # type: ignore[index]


def test_to_mapping_returns_plain_containers() -> None:
    """The serializable view uses plain dicts and lists only."""

    payload = CleanConfig.default().to_mapping()

    assert payload["lists"]["bullet_markers"] == ["- ", "* ", "• ", "– ", "— "]
    assert type(payload["abbreviations"]["map"]) is dict
    assert payload["pronunciation"]["number_config"] == {"separator": " ", "insert_and": True}

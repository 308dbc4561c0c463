"""Configuration model and loaders for ttsclean.

Responsibilities:
- Define every pipeline option group as a frozen dataclass with documented defaults.
- Validate mode tokens and numeric limits before the first stage runs.
- Provide loader entry points for YAML files and already-parsed mappings.

Key types:
- `CleanConfig`: fully resolved, immutable configuration tree for one run.
- `ConfigLoader`: static construction helpers for `CleanConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from loguru import logger
import yaml

from .parsing import normalize_optional_string, parse_mode_token, parse_permissive_boolean


DEFAULT_CONFIG_PATH = Path("tts-clean.yaml")

_NORMALIZATION_MODES = frozenset({"nfkc", "nfc", "none"})
_DASH_MODES = frozenset({"comma", "hyphen", "keep"})
_ELLIPSIS_MODES = frozenset({"period", "triple", "keep"})
_PARAGRAPH_BOUNDARIES = frozenset({"blank-lines", "never"})
_ACRONYM_STYLES = frozenset({"spaced", "dotted"})
_CASE_POLICIES = frozenset({"exact", "upper"})
_YEAR_MODES = frozenset({"none", "american"})
_VERSION_MODES = frozenset({"none", "say-decimal"})
_LOG_LEVELS = frozenset(
    {"trace", "debug", "info", "success", "warning", "error", "critical"}
)


_DEFAULT_BULLET_MARKERS = ("- ", "* ", "• ", "– ", "— ")


def _default_acronyms() -> Mapping[str, str]:
    return MappingProxyType(
        {
            "CSS": "C S S",
            "HTML": "H T M L",
            "HTTP": "H T T P",
            "HTTPS": "H T T P S",
            "URL": "U R L",
            "API": "A P I",
            "CPU": "C P U",
            "GPU": "G P U",
            "JSON": "J S O N",
            "SQL": "S Q L",
            "XML": "X M L",
            "TTS": "T T S",
            "XTTS": "X T T S",
            "LLM": "L L M",
        }
    )


def _default_replacements() -> Mapping[str, str]:
    return MappingProxyType(
        {
            "×": " by ",
            "::": " colon colon ",
            ";": ",",
            "{": " brace ",
            "}": " brace ",
            "(": ", ",
            ")": ", ",
        }
    )


def _default_brand_map() -> Mapping[str, str]:
    return MappingProxyType(
        {
            "MySQL": "My S. Q. L.",
            "Mysql": "My S. Q. L.",
            "SQLITE": "S. Q. Lite",
            "SQLite": "S. Q. Lite",
            "PostCSS": "Post C. S. S.",
            "W3C": "Double U Three C",
            "JSSS": "J. S. S. S.",
            "IE4": "I. E. Four",
        }
    )


@dataclass(frozen=True, slots=True)
class MetaConfig:
    """Descriptive profile metadata, reported but never used by stages."""

    version: int = 1
    profile: str = "clean-narration-slightly-expressive"
    notes: str = "Targeted for XTTS / Daisy Studio / ebook2audiobook pipelines."


@dataclass(frozen=True, slots=True)
class IoConfig:
    """Line-ending and trailing-whitespace handling.

    Attributes:
        normalize_line_endings: Fold `\\r\\n` and lone `\\r` to `\\n`.
        trim_trailing_whitespace: Strip horizontal whitespace at line ends,
            both before the first lexical stage and during finalization.
    """

    normalize_line_endings: bool = True
    trim_trailing_whitespace: bool = True


@dataclass(frozen=True, slots=True)
class UnicodeConfig:
    """Unicode normalization and glyph folding options."""

    normalization: str = "nfkc"
    ascii_quotes: bool = True
    dash_mode: str = "comma"
    ellipsis_mode: str = "period"


@dataclass(frozen=True, slots=True)
class WhitespaceConfig:
    """Whitespace collapse options; `max_consecutive_blank_lines=0` keeps all blanks."""

    collapse_horizontal: bool = True
    remove_space_before_punct: bool = True
    max_consecutive_blank_lines: int = 1


@dataclass(frozen=True, slots=True)
class StructureConfig:
    """Paragraph unwrapping options."""

    unwrap_hard_wrapped_lines: bool = True
    paragraph_boundary: str = "blank-lines"
    join_lines_with: str = " "


@dataclass(frozen=True, slots=True)
class MarkdownConfig:
    """Markdown stripping options."""

    drop_code_fences: bool = True
    code_fence_replacement: str = ""
    strip_inline_code: bool = True
    strip_markdown_links: bool = True


@dataclass(frozen=True, slots=True)
class CitationConfig:
    """Per-rule toggles for bibliographic citation removal."""

    drop_stacked_numeric_brackets: bool = True
    drop_numeric_brackets: bool = True
    drop_parenthetical_numeric: bool = False
    drop_generic_brackets: bool = True
    drop_generic_parentheses: bool = True


@dataclass(frozen=True, slots=True)
class ListConfig:
    """Bullet flattening options; markers are tested in order, first match wins."""

    flatten_bullets: bool = True
    bullet_replacement: str = ", "
    bullet_markers: tuple[str, ...] = _DEFAULT_BULLET_MARKERS


@dataclass(frozen=True, slots=True)
class AbbreviationConfig:
    """Acronym expansion options.

    Attributes:
        expand_acronyms: Enable the acronym stage.
        acronym_style: `spaced` keeps the spelled form, `dotted` writes `A. P. I`.
        case_policy: `upper` matches the uppercased token, `exact` the key as written.
        map: Token to spelled-out form.
        letter_separator: Separator between spelled letters; empty concatenates them.
        digit_separator: Joiner for dot-separated segments of a glued numeric suffix.
    """

    expand_acronyms: bool = True
    acronym_style: str = "spaced"
    case_policy: str = "upper"
    map: Mapping[str, str] = field(default_factory=_default_acronyms)
    letter_separator: str = " "
    digit_separator: str = " dot "


@dataclass(frozen=True, slots=True)
class NumberConfig:
    """Spoken number assembly options."""

    separator: str = " "
    insert_and: bool = True


@dataclass(frozen=True, slots=True)
class PronunciationConfig:
    """Symbol, brand, year, version, and HTML tag pronunciation options."""

    enable_replacements: bool = True
    replacements: Mapping[str, str] = field(default_factory=_default_replacements)
    brand_map: Mapping[str, str] = field(default_factory=_default_brand_map)
    year_mode: str = "american"
    html_tag_pronunciation: bool = True
    html_tag_separator: str = " "
    version_mode: str = "say-decimal"
    number_config: NumberConfig = field(default_factory=NumberConfig)


@dataclass(frozen=True, slots=True)
class GuardrailConfig:
    """Post-hoc output checks; a zero limit disables the check."""

    min_output_chars_warn: int = 200
    max_paragraph_chars: int = 0


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Driver logging and reporting options."""

    level: str = "info"
    print_summary: bool = True
    write_report: bool = False
    report_path: str = "tts-clean.report.txt"


@dataclass(frozen=True, slots=True)
class PunctuationConfig:
    """Comma, slash, and stop-sequence discipline options."""

    collapse_commas: bool = True
    max_consecutive_commas: int = 1
    replace_slashes: bool = True
    slash_replacement: str = " or "
    stop_chars: str = ".:;,?"
    stop_precedence: str = ".:;,?"


@dataclass(frozen=True, slots=True)
class SelectorConfig:
    """Selector-like token pronunciation; an empty prefix disables the stage."""

    prefix: str = "dot "


@dataclass(frozen=True, slots=True)
class ExperimentalConfig:
    """Aggressive cleanup rules that are off by default."""

    strip_punct_runs: bool = False
    punct_run_min_len: int = 5


@dataclass(frozen=True, slots=True)
class CleanConfig:
    """Fully resolved configuration for one pipeline run.

    Lists are stored as tuples and tables as read-only mappings, so no stage
    or caller can change the configuration after it is built.
    """

    meta: MetaConfig = field(default_factory=MetaConfig)
    io: IoConfig = field(default_factory=IoConfig)
    unicode: UnicodeConfig = field(default_factory=UnicodeConfig)
    whitespace: WhitespaceConfig = field(default_factory=WhitespaceConfig)
    structure: StructureConfig = field(default_factory=StructureConfig)
    markdown: MarkdownConfig = field(default_factory=MarkdownConfig)
    citations: CitationConfig = field(default_factory=CitationConfig)
    lists: ListConfig = field(default_factory=ListConfig)
    abbreviations: AbbreviationConfig = field(default_factory=AbbreviationConfig)
    pronunciation: PronunciationConfig = field(default_factory=PronunciationConfig)
    guardrails: GuardrailConfig = field(default_factory=GuardrailConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    punctuation: PunctuationConfig = field(default_factory=PunctuationConfig)
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    experimental: ExperimentalConfig = field(default_factory=ExperimentalConfig)

    @classmethod
    def default(cls) -> CleanConfig:
        """Return a validated configuration built purely from defaults."""

        config = cls()
        config.validate()
        return config

    def to_mapping(self) -> dict[str, Any]:
        """Return the configuration as plain dicts and lists, ready for `yaml.safe_dump`."""

        return _plain_data(self)

    def with_logging(
        self,
        *,
        level: str | None = None,
        write_report: bool | None = None,
        report_path: str | None = None,
    ) -> CleanConfig:
        """Return a copy with driver logging overrides applied."""

        logging_config = self.logging
        if level is not None:
            logging_config = replace(logging_config, level=level.lower())
        if write_report is not None:
            logging_config = replace(logging_config, write_report=write_report)
        if report_path is not None:
            logging_config = replace(logging_config, report_path=report_path)
        config = replace(self, logging=logging_config)
        config.validate()
        return config

    def validate(self) -> None:
        """Validate mode tokens and marker lists before pipeline execution."""

        self._require_choice(
            self.unicode.normalization, _NORMALIZATION_MODES, "unicode.normalization"
        )
        self._require_choice(self.unicode.dash_mode, _DASH_MODES, "unicode.dash_mode")
        self._require_choice(self.unicode.ellipsis_mode, _ELLIPSIS_MODES, "unicode.ellipsis_mode")
        self._require_choice(
            self.structure.paragraph_boundary,
            _PARAGRAPH_BOUNDARIES,
            "structure.paragraph_boundary",
        )
        self._require_choice(
            self.abbreviations.acronym_style, _ACRONYM_STYLES, "abbreviations.acronym_style"
        )
        self._require_choice(
            self.abbreviations.case_policy, _CASE_POLICIES, "abbreviations.case_policy"
        )
        self._require_choice(self.pronunciation.year_mode, _YEAR_MODES, "pronunciation.year_mode")
        self._require_choice(
            self.pronunciation.version_mode, _VERSION_MODES, "pronunciation.version_mode"
        )
        self._require_choice(self.logging.level, _LOG_LEVELS, "logging.level")
        if any(not marker for marker in self.lists.bullet_markers):
            raise ValueError("`lists.bullet_markers` must not contain empty markers.")
        if any(not key for key in self.abbreviations.map):
            raise ValueError("`abbreviations.map` must not contain empty tokens.")
        if any(not key for key in self.pronunciation.replacements):
            raise ValueError("`pronunciation.replacements` must not contain empty keys.")
        if any(not key for key in self.pronunciation.brand_map):
            raise ValueError("`pronunciation.brand_map` must not contain empty keys.")

    @staticmethod
    def _require_choice(value: str, supported: frozenset[str], field_name: str) -> None:
        """Validate that a mode token is one of the supported values."""

        if value not in supported:
            choices = ", ".join(sorted(supported))
            raise ValueError(f"Unsupported `{field_name}` value `{value}`; supported: {choices}.")


def _plain_data(value: Any) -> Any:
    """Convert dataclasses, read-only maps, and tuples into plain containers."""

    if is_dataclass(value):
        return {item.name: _plain_data(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, Mapping):
        return {key: _plain_data(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_plain_data(item) for item in value]
    return value


_MODE_FIELDS = frozenset(
    {
        ("unicode", "normalization"),
        ("unicode", "dash_mode"),
        ("unicode", "ellipsis_mode"),
        ("structure", "paragraph_boundary"),
        ("abbreviations", "acronym_style"),
        ("abbreviations", "case_policy"),
        ("pronunciation", "year_mode"),
        ("pronunciation", "version_mode"),
        ("logging", "level"),
    }
)


class ConfigLoader:
    """Factory methods for creating `CleanConfig` from external sources."""

    @staticmethod
    def load(path: Path | None = None) -> CleanConfig:
        """Load a YAML config, falling back to defaults when the file is missing."""

        resolved = path if path is not None else DEFAULT_CONFIG_PATH
        if not resolved.exists():
            logger.warning("config {} not found, falling back to defaults", resolved)
            return CleanConfig.default()
        return ConfigLoader.from_yaml(resolved)

    @staticmethod
    def from_yaml(path: Path) -> CleanConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = yaml.safe_load(path_text)
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader.from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_mapping(
        payload: Mapping[str, Any], source_label: str = "config"
    ) -> CleanConfig:
        """Build a validated config from a mapping of option groups.

        Missing groups and fields take their defaults; unknown ones are logged
        and ignored.
        """

        config = ConfigLoader._build_group(CleanConfig(), payload, source_label, path=())
        config.validate()
        return config

    @staticmethod
    def _build_group(
        defaults: Any, payload: Mapping[str, Any], source_label: str, path: tuple[str, ...]
    ) -> Any:
        """Overlay one mapping onto a default dataclass instance."""

        known = {item.name for item in fields(defaults)}
        for key in sorted(str(name) for name in payload):
            if key not in known:
                dotted = ".".join((*path, key))
                logger.warning("{} includes unknown key `{}`; ignoring it", source_label, dotted)

        overrides: dict[str, Any] = {}
        for item in fields(defaults):
            if item.name not in payload:
                continue
            current = getattr(defaults, item.name)
            raw_value = payload[item.name]
            field_path = (*path, item.name)
            if is_dataclass(current):
                if raw_value is None:
                    continue
                if not isinstance(raw_value, Mapping):
                    raise ValueError(
                        f"{source_label} group `{'.'.join(field_path)}` must be a mapping/object."
                    )
                overrides[item.name] = ConfigLoader._build_group(
                    current, raw_value, source_label, field_path
                )
            else:
                overrides[item.name] = ConfigLoader._parse_value(
                    current, raw_value, source_label, field_path
                )
        return replace(defaults, **overrides)

    @staticmethod
    def _parse_value(
        current: Any, raw_value: Any, source_label: str, path: tuple[str, ...]
    ) -> Any:
        """Parse one scalar, list, or mapping field according to its default's type."""

        dotted = ".".join(path)
        if isinstance(current, bool):
            parsed = parse_permissive_boolean(raw_value)
            if parsed is None:
                raise ValueError(
                    f"{source_label} field `{dotted}` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            return parsed
        if isinstance(current, int):
            return ConfigLoader._non_negative_int(raw_value, source_label, dotted)
        if isinstance(current, str):
            if path in _MODE_FIELDS:
                token = parse_mode_token(raw_value)
                if token is None:
                    raise ValueError(f"{source_label} field `{dotted}` must not be blank.")
                return token
            if raw_value is None:
                return ""
            if not isinstance(raw_value, str):
                raise ValueError(f"{source_label} field `{dotted}` must be a string.")
            return raw_value
        if isinstance(current, tuple):
            return ConfigLoader._string_list(raw_value, source_label, dotted)
        if isinstance(current, Mapping):
            return ConfigLoader._string_map(raw_value, source_label, dotted)
        raise ValueError(f"{source_label} field `{dotted}` has an unsupported type.")

    @staticmethod
    def _non_negative_int(raw_value: Any, source_label: str, dotted: str) -> int:
        """Read and validate a non-negative integer payload field."""

        if isinstance(raw_value, bool):
            raise ValueError(f"{source_label} field `{dotted}` must be a non-negative integer.")
        if isinstance(raw_value, int):
            parsed = raw_value
        else:
            normalized = normalize_optional_string(raw_value)
            if normalized is None:
                raise ValueError(
                    f"{source_label} field `{dotted}` must be a non-negative integer."
                )
            try:
                parsed = int(normalized)
            except ValueError as exc:
                raise ValueError(
                    f"{source_label} field `{dotted}` must be a non-negative integer."
                ) from exc

        if parsed < 0:
            raise ValueError(f"{source_label} field `{dotted}` must be a non-negative integer.")
        return parsed

    @staticmethod
    def _string_list(raw_value: Any, source_label: str, dotted: str) -> tuple[str, ...]:
        """Read a list of strings, keeping surrounding whitespace intact."""

        if raw_value is None:
            return ()
        if isinstance(raw_value, str) or not isinstance(raw_value, (list, tuple)):
            raise ValueError(f"{source_label} field `{dotted}` must be a list of strings.")
        items: list[str] = []
        for item in raw_value:
            if not isinstance(item, str) or not item:
                raise ValueError(
                    f"{source_label} field `{dotted}` must contain only non-empty strings."
                )
            items.append(item)
        return tuple(items)

    @staticmethod
    def _string_map(raw_value: Any, source_label: str, dotted: str) -> Mapping[str, str]:
        """Read a mapping with non-empty string keys and string values."""

        if raw_value is None:
            return MappingProxyType({})
        if not isinstance(raw_value, Mapping):
            raise ValueError(f"{source_label} field `{dotted}` must be a mapping/object.")

        normalized: dict[str, str] = {}
        for raw_key, raw_item in raw_value.items():
            key = str(raw_key)
            if not key:
                raise ValueError(f"{source_label} field `{dotted}` contains a blank key.")
            if raw_item is None:
                raw_item = ""
            if not isinstance(raw_item, str):
                raise ValueError(
                    f"{source_label} field `{dotted}` must map `{key}` to a string."
                )
            normalized[key] = raw_item
        return MappingProxyType(normalized)

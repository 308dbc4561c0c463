"""Core datatypes produced by the normalization pipeline.

Responsibilities:
- Represent immutable records handed from the pipeline to the driver.
- Keep statistics derived and read-only after a run completes.

Key types:
- `CleanStats`, `GuardrailWarning`, and `CleanReport`.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CleanStats:
    """Summary statistics for one pipeline run.

    Attributes:
        input_length: UTF-8 byte length of the raw input buffer.
        output_length: UTF-8 byte length of the cleaned output buffer.
        paragraph_count: Number of non-blank lines in the cleaned output.
    """

    input_length: int
    output_length: int
    paragraph_count: int


@dataclass(frozen=True, slots=True)
class GuardrailWarning:
    """A non-fatal post-hoc observation about the cleaned output.

    Attributes:
        kind: `min-output-length` or `max-paragraph-length`.
        message: Human-readable warning text.
        limit: Configured threshold that was violated.
        actual: Observed character count.
    """

    kind: str
    message: str
    limit: int
    actual: int


@dataclass(frozen=True, slots=True)
class CleanReport:
    """Structured output of one pipeline run."""

    cleaned_text: str
    stats: CleanStats
    warnings: tuple[GuardrailWarning, ...] = field(default_factory=tuple)

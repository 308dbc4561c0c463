"""Phase logging for pipeline stages and driver steps.

Every line has the shape `[phase] level=<L> stage=<name> event=<event>`
followed by sorted `key=value` pairs, so runs can be grepped and diffed.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger

_SAFE_PUNCTUATION = frozenset("-_.:/")


def _log_token(value: object) -> str:
    """Render a context value as one whitespace-free token (`none` when blank)."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in _SAFE_PUNCTUATION else "_"
        for character in raw
    )


def _context_suffix(context: dict[str, object]) -> str:
    """Return ` k=v k=v` for the context in key order, or an empty string."""

    return "".join(f" {key}={_log_token(context[key])}" for key in sorted(context))


class RunLogger:
    """Write phase lines for one run through a single loguru sink.

    Stage start, complete, and skip events are DEBUG; driver milestones are
    INFO; guardrail violations are WARNING.
    """

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Replace loguru's handlers with one plain sink at `level` (stderr by default)."""

        self._sink = sink or sys.stderr
        _loguru_logger.remove()
        _loguru_logger.add(self._sink, format="{message}", level=level.upper(), colorize=False)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        line = f"[phase] level={level} stage={stage} event={event}{_context_suffix(context)}"
        _loguru_logger.log(level, line)

    def log_stage_start(self, stage: str) -> None:
        self._emit("DEBUG", "start", stage)

    def log_stage_complete(self, stage: str, **context: object) -> None:
        """Record a finished stage; `changed=` tells whether it rewrote the buffer."""

        self._emit("DEBUG", "complete", stage, **context)

    def log_stage_skipped(self, stage: str) -> None:
        """Record a stage switched off by configuration."""

        self._emit("DEBUG", "skipped", stage)

    def log_info(self, stage: str, event: str, **context: object) -> None:
        """Record a driver milestone such as config loaded or output written."""

        self._emit("INFO", event, stage, **context)

    def log_warning(self, stage: str, event: str, **context: object) -> None:
        """Record a non-fatal problem; the run continues."""

        self._emit("WARNING", event, stage, **context)

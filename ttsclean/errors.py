"""Exceptions raised by the command-line driver around the pipeline."""

from __future__ import annotations


class PipelineStageError(RuntimeError):
    """A fatal driver failure tied to one step of a run.

    The pipeline itself never raises on text; this error covers the steps
    around it: loading `config`, reading input (`read`), and writing the
    cleaned text (`write`) or the run report (`report`).

    Attributes:
        stage: Driver step that failed.
        detail: User-facing description of the failure.
        hint: Optional suggestion printed under the detail.
    """

    def __init__(self, *, stage: str, detail: str, hint: str | None = None) -> None:
        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint

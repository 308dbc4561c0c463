"""Datatypes shared across ttsclean modules."""

from .datatypes import CleanReport, CleanStats, GuardrailWarning

__all__ = ["CleanReport", "CleanStats", "GuardrailWarning"]

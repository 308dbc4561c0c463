"""Top-level package for ttsclean.

This package converts markdown and prose into plain text that a speech
synthesis engine can read aloud. The main entry points are `clean` and
`TextPipeline`.
"""

from .config import CleanConfig, ConfigLoader
from .models.datatypes import CleanReport, CleanStats, GuardrailWarning
from .pipeline import TextPipeline, clean

__all__ = [
    "CleanConfig",
    "CleanReport",
    "CleanStats",
    "ConfigLoader",
    "GuardrailWarning",
    "TextPipeline",
    "clean",
    "__version__",
]

__version__ = "0.1.0"

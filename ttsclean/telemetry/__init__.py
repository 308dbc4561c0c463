"""Run logging for pipeline and driver events."""

from .logger import RunLogger

__all__ = ["RunLogger"]

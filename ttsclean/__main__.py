"""Module entrypoint for running ttsclean as ``python -m ttsclean``."""

from __future__ import annotations

from ttsclean.cli import main


if __name__ == "__main__":
    main()

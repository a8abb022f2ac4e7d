"""Exception types shared by the engine and the CLI."""

from __future__ import annotations


class FuiFramesError(Exception):
    pass


class ConfigurationError(FuiFramesError, ValueError):
    """Malformed tables, unknown names, bad parameter bags.

    Raised as soon as the bad input is seen; the engine never substitutes a
    plausible-looking value for a broken configuration.
    """


class ExternalToolFailure(FuiFramesError, RuntimeError):
    """Missing input files or a failing ffmpeg process (CLI layer only)."""

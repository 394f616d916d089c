"""Runtime configuration normalization helpers.

These helpers keep CLI flag interpretation deterministic across entrypoints.
"""

from __future__ import annotations

RENDER_MODES = ("ascii", "svg")
DEFAULT_RENDER_MODE = "ascii"

# Console grid used by the ASCII renderer.
DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 20

# Canvas used for vector export.
DEFAULT_CANVAS_WIDTH = 300.0
DEFAULT_CANVAS_HEIGHT = 100.0
DEFAULT_LINE_WIDTH = 1.0


def resolve_log_level(*, verbose: bool, quiet: bool) -> str:
    """Resolve effective log level from CLI flags.

    Precedence is deterministic: --quiet overrides --verbose.
    """
    if quiet:
        return "WARNING"
    if verbose:
        return "DEBUG"
    return "INFO"


def normalize_render_mode(value: str | None) -> str:
    """Normalize a CLI render mode to a supported mode name."""
    if value is None:
        return DEFAULT_RENDER_MODE
    normalized = value.strip().lower()
    if normalized in RENDER_MODES:
        return normalized
    return DEFAULT_RENDER_MODE

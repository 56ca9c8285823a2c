"""Output rendering for human, quiet and JSON modes."""

from .renderers import (
    HumanRenderer,
    JsonRenderer,
    OutputMode,
    QuietRenderer,
    Renderer,
    get_renderer,
    truncate,
)

__all__ = [
    "HumanRenderer",
    "JsonRenderer",
    "OutputMode",
    "QuietRenderer",
    "Renderer",
    "get_renderer",
    "truncate",
]

"""High-level API for plant mesh generation."""

from .generate import generate, generate_with_report, grow, is_debug_mode, DEBUG_ENV_VAR

__all__ = [
    "generate",
    "generate_with_report",
    "grow",
    "is_debug_mode",
    "DEBUG_ENV_VAR",
]

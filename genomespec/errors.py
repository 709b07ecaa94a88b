"""
Exceptions raised while loading or validating a genome.
"""

from typing import List, Optional


class GenomeError(Exception):
    """Base exception for genome errors."""
    pass


class ConfigurationError(GenomeError, ValueError):
    """
    Raised when a genome is out of range or contradictory.

    Carries every violated rule in ``errors`` so callers can report all
    of them at once instead of fixing one field per run.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = list(errors) if errors else [message]

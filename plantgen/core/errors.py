"""
Exceptions raised by the generator itself.

Genome problems are reported with ``genomespec.ConfigurationError``
before generation starts; the errors here signal bugs in the generation
logic and abort the single call that hit them.
"""


class PlantGenerationError(Exception):
    """Base exception for generation failures."""
    pass


class InvariantViolation(PlantGenerationError):
    """
    Raised when generated topology or buffers break an internal invariant.

    Examples: two rings reaching the bridge step with an unsupported
    length ratio, or per-vertex buffers of different lengths at
    finalization. Not recoverable by retrying; the same genome fails the
    same way.
    """
    pass

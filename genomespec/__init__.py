"""
Genome specification: the declarative description of one plant.

Usage:
    from genomespec import Genome, get_preset

    genome = Genome.from_json("plants/birch.json")
    genome = get_preset("shrub", seed=42)
"""

from .errors import GenomeError, ConfigurationError
from .genome import Genome, collect_genome_errors, MAX_SEED
from .presets import get_preset, list_presets, PRESETS

__all__ = [
    "GenomeError",
    "ConfigurationError",
    "Genome",
    "collect_genome_errors",
    "MAX_SEED",
    "get_preset",
    "list_presets",
    "PRESETS",
]

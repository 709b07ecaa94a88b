"""
Named genome presets.

Each preset is a plain genome dictionary, loaded through
``Genome.from_dict`` so presets go through the same validation as
user-supplied genomes.
"""

from typing import Dict, Any, List
import copy

from .genome import Genome
from .errors import ConfigurationError


# Young tree: few splits, sparse leaves near the tips
sapling_config: Dict[str, Any] = {
    "max_splits": 3,
    "branches_per_split": [2, 3],
    "starting_radius": 0.06,
    "radial_segments": 8,
    "branch_length": 0.8,
    "segments_per_branch": 4,
    "radius_sustain": 0.65,
    "leaf_start": 2,
    "leaf_density": 6.0,
    "leaf_size": 0.08,
    "leaf_offset": 0.5,
    "branch_decay": 0,
    "branch_bend": 0.5,
    "branch_sway": 0.5,
    "branch_twist": 0.1,
}


# Low bushy plant: wide first split, dense foliage from depth 1
shrub_config: Dict[str, Any] = {
    "max_splits": 4,
    "branches_per_split": [3, 4],
    "starting_radius": 0.04,
    "radial_segments": 6,
    "branch_length": 0.35,
    "segments_per_branch": 3,
    "radius_sustain": 0.7,
    "leaf_start": 1,
    "leaf_density": 12.0,
    "leaf_size": 0.05,
    "leaf_length": 0.07,
    "leaf_offset": 0.8,
    "branch_decay": 1,
    "branch_bend": 0.9,
    "branch_sway": 0.8,
    "branch_twist": 0.3,
}


# Tall trunk with long drooping branches
willow_config: Dict[str, Any] = {
    "max_splits": 5,
    "branches_per_split": [2, 3],
    "starting_radius": 0.15,
    "radial_segments": 12,
    "branch_length": 1.4,
    "segments_per_branch": 6,
    "radius_sustain": 0.75,
    "leaf_start": 3,
    "leaf_density": 10.0,
    "leaf_size": 0.04,
    "leaf_length": 0.16,
    "leaf_offset": 0.3,
    "branch_decay": 0,
    "branch_bend": 1.2,
    "branch_sway": 0.4,
    "branch_twist": 0.0,
}


PRESETS: Dict[str, Dict[str, Any]] = {
    "sapling": sapling_config,
    "shrub": shrub_config,
    "willow": willow_config,
}


def list_presets() -> List[str]:
    return sorted(PRESETS)


def get_preset(name: str, **overrides: Any) -> Genome:
    """
    Build a Genome from a named preset.

    Parameters
    ----------
    name : str
        Preset name (see ``list_presets()``)
    **overrides
        Genome fields replacing the preset's values, e.g. ``seed=7``

    Raises
    ------
    ConfigurationError
        If the preset does not exist or the overrides make it invalid
    """
    if name not in PRESETS:
        raise ConfigurationError(
            f"Unknown genome preset '{name}'. Available: {', '.join(list_presets())}"
        )
    d = copy.deepcopy(PRESETS[name])
    d.update(overrides)
    return Genome.from_dict(d)

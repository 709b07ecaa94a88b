"""
Genome loader, validator, and normalizer.

This module provides the Genome dataclass that:
- Holds every numeric/randomized knob of one plant's procedural structure
- Validates ranges up front, so generation never starts on a bad genome
- Loads from dict or JSON file, applying legacy aliases
- Computes stable content hashes for reproducibility

A Genome is immutable. One value may be shared by any number of
concurrent generation calls.
"""

from dataclasses import dataclass, asdict, fields, replace
from typing import Dict, Any, List, Optional, Tuple, Union
from pathlib import Path
import hashlib
import json
import logging
import math

from .compat import GENOME_ALIASES, apply_aliases, normalize_range
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


MAX_SEED = 2 ** 64

_INT_FIELDS = (
    "max_splits",
    "radial_segments",
    "segments_per_branch",
    "leaf_start",
    "branch_decay",
)

_FLOAT_FIELDS = (
    "starting_radius",
    "branch_length",
    "radius_sustain",
    "leaf_density",
    "leaf_size",
    "leaf_offset",
    "branch_bend",
    "branch_sway",
    "branch_twist",
)


@dataclass(frozen=True)
class Genome:
    """
    Immutable parameter set describing one plant.

    Attributes
    ----------
    seed : int, optional
        Unsigned 64-bit seed. Set => reproducible output, None => fresh
        entropy for every call.
    max_splits : int
        Number of branching generations.
    branches_per_split : tuple of int
        Inclusive ``(min, max)`` count of children sampled per split.
    starting_radius : float
        Trunk base radius.
    radial_segments : int
        Vertices per ring (>= 3).
    branch_length : float
        Length of one branch before it splits.
    segments_per_branch : int
        Rings emitted per branch.
    radius_sustain : float
        Radius multiplier applied at each split, in (0, 1].
    leaf_start : int
        Split depth at and beyond which leaves are eligible.
    leaf_density : float
        Leaf budget per branch; see LeafPolicy for the spawn law.
    leaf_size : float
        Leaf width scale.
    leaf_length : float, optional
        Leaf length scale; defaults to ``leaf_size``.
    leaf_offset : float
        Orientation jitter, as a fraction of the ring radius.
    branch_decay : int
        Reduction of sampled split counts, accumulated with depth.
    branch_bend : float
        Upper bound (radians) of the random forward bend per split.
    branch_sway : float
        Half-angle (radians) of the yaw cone children spread into.
    branch_twist : float
        Bound (radians) of the random roll per split.
    """
    seed: Optional[int] = None
    max_splits: int = 4
    branches_per_split: Tuple[int, int] = (2, 3)
    starting_radius: float = 0.1
    radial_segments: int = 8
    branch_length: float = 1.0
    segments_per_branch: int = 4
    radius_sustain: float = 0.7
    leaf_start: int = 2
    leaf_density: float = 8.0
    leaf_size: float = 0.1
    leaf_length: Optional[float] = None
    leaf_offset: float = 0.5
    branch_decay: int = 0
    branch_bend: float = 0.4
    branch_sway: float = 0.6
    branch_twist: float = 0.0

    def __post_init__(self):
        if isinstance(self.branches_per_split, list):
            object.__setattr__(self, "branches_per_split", tuple(self.branches_per_split))

        errors = self.validate()
        if errors:
            raise ConfigurationError(
                "Invalid genome: " + "; ".join(errors),
                errors=errors,
            )

    def validate(self) -> List[str]:
        """
        Check every field range.

        Returns
        -------
        List[str]
            Validation error messages (empty if valid)
        """
        errors = []

        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")

        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"{name} must be a number, got {value!r}")
            elif not math.isfinite(value):
                errors.append(f"{name} must be finite, got {value!r}")

        if self.leaf_length is not None:
            if isinstance(self.leaf_length, bool) or not isinstance(self.leaf_length, (int, float)):
                errors.append(f"leaf_length must be a number, got {self.leaf_length!r}")
            elif not math.isfinite(self.leaf_length) or self.leaf_length < 0:
                errors.append(f"leaf_length must be >= 0, got {self.leaf_length!r}")

        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, int):
                errors.append(f"seed must be an integer or None, got {self.seed!r}")
            elif not 0 <= self.seed < MAX_SEED:
                errors.append(f"seed must fit in an unsigned 64-bit integer, got {self.seed}")

        bps = self.branches_per_split
        if not isinstance(bps, tuple) or len(bps) != 2 or not all(
            isinstance(v, int) and not isinstance(v, bool) for v in bps
        ):
            errors.append(f"branches_per_split must be an integer (min, max) pair, got {bps!r}")
        else:
            if bps[0] < 0:
                errors.append(f"branches_per_split minimum must be >= 0, got {bps[0]}")
            if bps[0] > bps[1]:
                errors.append(f"branches_per_split range is inverted: {bps[0]} > {bps[1]}")

        # Range checks only make sense once the types are right.
        if errors:
            return errors

        if self.max_splits < 0:
            errors.append(f"max_splits must be >= 0, got {self.max_splits}")
        if self.starting_radius <= 0:
            errors.append(f"starting_radius must be > 0, got {self.starting_radius}")
        if self.radial_segments < 3:
            errors.append(f"radial_segments must be >= 3, got {self.radial_segments}")
        if self.branch_length <= 0:
            errors.append(f"branch_length must be > 0, got {self.branch_length}")
        if self.segments_per_branch < 1:
            errors.append(f"segments_per_branch must be >= 1, got {self.segments_per_branch}")
        if not 0 < self.radius_sustain <= 1:
            errors.append(f"radius_sustain must be in (0, 1], got {self.radius_sustain}")
        if self.leaf_start < 0:
            errors.append(f"leaf_start must be >= 0, got {self.leaf_start}")
        if self.leaf_density < 0:
            errors.append(f"leaf_density must be >= 0, got {self.leaf_density}")
        if self.leaf_size < 0:
            errors.append(f"leaf_size must be >= 0, got {self.leaf_size}")
        if self.leaf_offset < 0:
            errors.append(f"leaf_offset must be >= 0, got {self.leaf_offset}")
        if self.branch_decay < 0:
            errors.append(f"branch_decay must be >= 0, got {self.branch_decay}")
        for name in ("branch_bend", "branch_sway", "branch_twist"):
            if getattr(self, name) < 0:
                errors.append(f"{name} must be >= 0, got {getattr(self, name)}")

        return errors

    @property
    def effective_leaf_length(self) -> float:
        if self.leaf_length is None:
            return float(self.leaf_size)
        return float(self.leaf_length)

    def with_seed(self, seed: Optional[int]) -> "Genome":
        """Return a copy with a different seed; validation runs again."""
        return replace(self, seed=seed)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["branches_per_split"] = list(self.branches_per_split)
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def content_hash(self) -> str:
        """
        Compute a stable hash of the genome.

        Uses canonical JSON serialization (sorted keys), so equal genomes
        always hash equal. The seed is part of the hash.

        Returns
        -------
        str
            First 16 hex characters of the sha256 digest
        """
        canonical_json = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(canonical_json.encode()).hexdigest()[:16]

    @classmethod
    def from_dict(cls, genome_dict: Dict[str, Any]) -> "Genome":
        """
        Load and validate a genome from a dictionary.

        Legacy aliases are applied first, then ``branches_per_split`` is
        normalized to an inclusive pair. Unknown keys are logged and
        dropped.

        Parameters
        ----------
        genome_dict : dict
            The genome dictionary to load

        Returns
        -------
        Genome
            Validated genome

        Raises
        ------
        ConfigurationError
            If the dictionary is malformed or any field is out of range
        """
        if not isinstance(genome_dict, dict):
            raise ConfigurationError(
                f"Genome must be a mapping, got {type(genome_dict).__name__}"
            )

        normalized, alias_warnings = apply_aliases(genome_dict, GENOME_ALIASES)
        for warning in alias_warnings:
            logger.warning(warning)

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(normalized) - known)
        if unknown:
            logger.warning(f"Ignoring unknown genome fields: {unknown}")

        kwargs = {k: v for k, v in normalized.items() if k in known}

        if "branches_per_split" in kwargs:
            try:
                kwargs["branches_per_split"] = normalize_range(kwargs["branches_per_split"])
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Invalid genome: branches_per_split: {e}") from e

        return cls(**kwargs)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "Genome":
        """
        Load and validate a genome from a JSON file.

        Raises
        ------
        ConfigurationError
            If the file is not valid JSON or the genome is invalid
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"'{path}': {e}") from e

        logger.info(f"Loaded genome from {path}")
        return cls.from_dict(data)


def collect_genome_errors(genome_dict: Dict[str, Any]) -> List[str]:
    """
    Return every configuration error of a genome dictionary.

    Unlike ``Genome.from_dict`` this never raises; an empty list means
    the dictionary loads cleanly.
    """
    try:
        Genome.from_dict(genome_dict)
    except ConfigurationError as e:
        return list(e.errors)
    return []

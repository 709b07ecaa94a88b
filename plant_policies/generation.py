"""
Generation-related policies for plant mesh synthesis.

These policies hold the tunable knobs that are not part of a plant's
genome: how leaves are drawn and spawned, and how vertex colors and
texture coordinates are assigned.
"""

from dataclasses import dataclass, field, asdict
from typing import Dict, Any, Tuple

from .base import alias_fields, coerce_color, coerce_float


BARK_COLOR: Tuple[float, float, float, float] = (0.36, 0.25, 0.16, 1.0)
LEAF_COLOR: Tuple[float, float, float, float] = (0.27, 0.55, 0.18, 1.0)

# Legacy leaf policy field names
LEAF_POLICY_ALIASES = {
    "double_sided_leaves": "double_sided",
    "leaf_thickness": "thickness",
    "density": "density_scale",
}


@dataclass
class LeafPolicy:
    """
    Policy for leaf spawning and leaf geometry.

    JSON Schema:
    {
        "double_sided": bool,
        "thickness": float,
        "density_scale": float,
        "min_jitter_radius": float
    }

    A leaf is spawned on a ring vertex with probability
    ``min(1, leaf_density * density_scale / (segments_per_branch * radial_segments))``.
    ``min_jitter_radius`` keeps the orientation jitter alive on rings that
    have tapered to (nearly) zero radius.
    """
    double_sided: bool = True
    thickness: float = 0.001
    density_scale: float = 1.0
    min_jitter_radius: float = 0.01

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "LeafPolicy":
        d = alias_fields(d, LEAF_POLICY_ALIASES)
        return LeafPolicy(**{k: v for k, v in d.items() if k in LeafPolicy.__dataclass_fields__})


@dataclass
class ShadingPolicy:
    """
    Policy for per-vertex color and texture coordinates.

    JSON Schema:
    {
        "bark_color": [r, g, b, a],
        "leaf_color": [r, g, b, a],
        "uv_length_scale": float
    }

    Bark ``v`` coordinates are the path-length sway value times
    ``uv_length_scale``.
    """
    bark_color: Tuple[float, float, float, float] = BARK_COLOR
    leaf_color: Tuple[float, float, float, float] = LEAF_COLOR
    uv_length_scale: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bark_color": list(self.bark_color),
            "leaf_color": list(self.leaf_color),
            "uv_length_scale": self.uv_length_scale,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "ShadingPolicy":
        return ShadingPolicy(
            bark_color=coerce_color(d.get("bark_color"), BARK_COLOR),
            leaf_color=coerce_color(d.get("leaf_color"), LEAF_COLOR),
            uv_length_scale=coerce_float(d.get("uv_length_scale"), 1.0),
        )


@dataclass
class GenerationPolicy:
    """
    Top-level policy for a generation call.

    JSON Schema:
    {
        "leaf": LeafPolicy,
        "shading": ShadingPolicy,
        "validate_output": bool
    }
    """
    leaf: LeafPolicy = field(default_factory=LeafPolicy)
    shading: ShadingPolicy = field(default_factory=ShadingPolicy)
    validate_output: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "leaf": self.leaf.to_dict(),
            "shading": self.shading.to_dict(),
            "validate_output": self.validate_output,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "GenerationPolicy":
        return GenerationPolicy(
            leaf=LeafPolicy.from_dict(d.get("leaf", {})),
            shading=ShadingPolicy.from_dict(d.get("shading", {})),
            validate_output=bool(d.get("validate_output", True)),
        )

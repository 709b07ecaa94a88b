"""
Plant Policies - Centralized policy definitions for plant mesh generation.

All policies are JSON-serializable dataclasses. They carry the tunable
knobs that sit beside a genome (leaf drawing, shading) and the
OperationReport returned by generation calls.

Usage:
    from plant_policies import GenerationPolicy, LeafPolicy, OperationReport
"""

from .base import (
    OperationReport,
    coerce_float,
    coerce_color,
    alias_fields,
)

from .generation import (
    LeafPolicy,
    ShadingPolicy,
    GenerationPolicy,
    BARK_COLOR,
    LEAF_COLOR,
)

__all__ = [
    # Base
    "OperationReport",
    "coerce_float",
    "coerce_color",
    "alias_fields",
    # Generation
    "LeafPolicy",
    "ShadingPolicy",
    "GenerationPolicy",
    "BARK_COLOR",
    "LEAF_COLOR",
]

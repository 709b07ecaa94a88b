"""
Base utilities for plant generation policies.

This module provides the field coercion helpers used by policy
``from_dict`` loaders and the OperationReport dataclass returned
alongside every generated mesh.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List, Tuple
import json
import logging
import math

logger = logging.getLogger(__name__)


def coerce_float(value: Any, default: float = 0.0) -> float:
    """
    Read a numeric policy field.

    Missing, non-numeric and non-finite values (and bools, which are not
    meant as numbers in a policy file) fall back to ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def coerce_color(
    value: Any,
    default: Tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0),
) -> Tuple[float, float, float, float]:
    """
    Coerce a value to an RGBA color tuple.

    Accepts an RGB or RGBA sequence of floats in [0, 1], or a dict with
    r, g, b (and optionally a) keys. Missing alpha defaults to 1.0.
    """
    if value is None:
        return default

    if isinstance(value, dict) and all(k in value for k in ("r", "g", "b")):
        value = (value["r"], value["g"], value["b"], value.get("a", 1.0))

    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        try:
            rgba = [float(c) for c in value]
        except (TypeError, ValueError):
            return default
        if len(rgba) == 3:
            rgba.append(1.0)
        return (rgba[0], rgba[1], rgba[2], rgba[3])

    return default


def alias_fields(d: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    """
    Rename legacy policy fields to their current names.

    Each rename is logged. When a policy dict sets both names, the
    legacy entry is dropped and the current one kept.
    """
    result = dict(d)
    for legacy_name in [k for k in result if k in aliases]:
        canonical_name = aliases[legacy_name]
        value = result.pop(legacy_name)
        if canonical_name in result:
            logger.warning(f"Policy field '{legacy_name}' ignored; '{canonical_name}' is set")
            continue
        logger.warning(f"Policy field '{legacy_name}' renamed to '{canonical_name}'")
        result[canonical_name] = value
    return result


@dataclass
class OperationReport:
    """
    Standard report structure for generation operations.

    Carries the requested vs effective policy, warnings, and
    operation-specific metrics (vertex counts, branch counts per depth...).
    Failed generations raise instead of returning a report, so a report
    always describes a successful run.
    """
    operation: str = "unknown"
    success: bool = True
    requested_policy: Dict[str, Any] = field(default_factory=dict)
    effective_policy: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

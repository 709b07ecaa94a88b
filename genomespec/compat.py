"""
Alias mappings and range normalization for genome dictionaries.

Genome files written for older tooling use a few legacy field names and
express ``branches_per_split`` as a half-open ``{"start", "end"}`` range.
Both are mapped to the canonical form here, and a warning is recorded
for each transformation.
"""

from typing import Dict, Any, List, Tuple
import logging

logger = logging.getLogger(__name__)


GENOME_ALIASES: Dict[str, str] = {
    "splits": "max_splits",
    "branches": "branches_per_split",
    "radius": "starting_radius",
    "rings_per_branch": "segments_per_branch",
    "taper": "radius_sustain",
}


def apply_aliases(
    d: Dict[str, Any],
    aliases: Dict[str, str],
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Apply alias mappings to a dictionary.

    Parameters
    ----------
    d : dict
        Input dictionary to transform
    aliases : dict
        Mapping of legacy_name -> canonical_name

    Returns
    -------
    result : dict
        Dictionary with aliases applied
    warnings : list of str
        List of warning messages for applied aliases
    """
    result = dict(d)
    warnings = []

    for legacy_name, canonical_name in aliases.items():
        if legacy_name not in result:
            continue
        if canonical_name in result:
            result.pop(legacy_name)
            warnings.append(
                f"Ignored legacy field '{legacy_name}': '{canonical_name}' is also set"
            )
        else:
            result[canonical_name] = result.pop(legacy_name)
            warnings.append(f"Alias applied: '{legacy_name}' -> '{canonical_name}'")

    return result, warnings


def normalize_range(value: Any) -> Tuple[int, int]:
    """
    Normalize a split-count range to an inclusive ``(min, max)`` tuple.

    Accepted forms:
    - int ``n``: exactly n
    - ``[min, max]`` / ``(min, max)``: inclusive
    - ``{"min": a, "max": b}``: inclusive
    - ``{"start": a, "end": b}``: half-open, as written by RON range
      serialization, so the inclusive maximum is ``end - 1``

    Raises
    ------
    TypeError, ValueError
        If the value has none of the accepted shapes.
    """
    if isinstance(value, bool):
        raise TypeError(f"expected a range, got {value!r}")

    if isinstance(value, int):
        return (value, value)

    if isinstance(value, (list, tuple)):
        if len(value) != 2:
            raise ValueError(f"range must have exactly two entries, got {len(value)}")
        return (_as_int(value[0]), _as_int(value[1]))

    if isinstance(value, dict):
        if "min" in value and "max" in value:
            return (_as_int(value["min"]), _as_int(value["max"]))
        if "start" in value and "end" in value:
            return (_as_int(value["start"]), _as_int(value["end"]) - 1)
        raise ValueError(
            f"range dict needs 'min'/'max' or 'start'/'end' keys, got {sorted(value)}"
        )

    raise TypeError(f"expected a range, got {type(value).__name__}")


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    if isinstance(value, int):
        return value
    raise TypeError(f"expected an integer, got {type(value).__name__}")

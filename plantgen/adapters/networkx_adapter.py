"""
Adapter from the branch skeleton to a NetworkX graph.

Each expanded branch becomes a node; edges run parent -> child. The graph
is what downstream tooling uses to inspect plant structure without
walking mesh buffers.
"""

from typing import Any, Dict, List, TYPE_CHECKING
import logging

if TYPE_CHECKING:
    import networkx as nx
    from ..core.accumulator import BranchRecord

logger = logging.getLogger(__name__)


def skeleton_to_networkx(records: List["BranchRecord"]) -> "nx.DiGraph":
    """
    Convert branch records to a directed graph.

    Parameters
    ----------
    records : list of BranchRecord
        Skeleton collected by the accumulator

    Returns
    -------
    nx.DiGraph
        Node per branch id with attributes ``split``, ``start_radius``,
        ``end_radius``, ``radial_segments``, ``first_bridge``,
        ``leaf_count``, ``ring_radii``, ``start_loop`` and ``end_loop``
    """
    import networkx as nx

    G = nx.DiGraph()
    for record in records:
        G.add_node(
            record.branch_id,
            split=record.split,
            start_radius=record.start_radius,
            end_radius=record.end_radius,
            radial_segments=record.radial_segments,
            first_bridge=record.first_bridge,
            leaf_count=record.leaf_count,
            ring_radii=list(record.ring_radii),
            start_loop=list(record.start_loop),
            end_loop=list(record.end_loop),
        )

    for record in records:
        if record.parent_id is None:
            continue
        if record.parent_id not in G:
            logger.warning(
                f"Branch {record.branch_id} references unknown parent {record.parent_id}"
            )
            continue
        G.add_edge(record.parent_id, record.branch_id)

    return G


def skeleton_depth_summary(G: "nx.DiGraph") -> Dict[str, Dict[str, Any]]:
    """
    Summarize the skeleton per split depth.

    Returns
    -------
    dict
        ``{depth: {"branches", "radial_segments", "max_start_radius",
        "max_end_radius", "leaves"}}`` with depths as strings so the
        summary is JSON-ready
    """
    summary: Dict[str, Dict[str, Any]] = {}
    for _, data in sorted(G.nodes(data=True), key=lambda item: item[1]["split"]):
        key = str(data["split"])
        entry = summary.setdefault(key, {
            "branches": 0,
            "radial_segments": [],
            "max_start_radius": 0.0,
            "max_end_radius": 0.0,
            "leaves": 0,
        })
        entry["branches"] += 1
        if data["radial_segments"] not in entry["radial_segments"]:
            entry["radial_segments"].append(data["radial_segments"])
        entry["max_start_radius"] = max(entry["max_start_radius"], data["start_radius"])
        entry["max_end_radius"] = max(entry["max_end_radius"], data["end_radius"])
        entry["leaves"] += data["leaf_count"]
    return summary

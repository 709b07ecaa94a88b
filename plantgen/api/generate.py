"""
Genome -> mesh entry point.

``generate`` is the single pure function of the generator: it takes a
genome and returns a finalized mesh, or raises. It never returns a
partially built mesh.

Growth is breadth-first and depth-synchronized: every branch at depth d
emits its geometry before any branch at depth d + 1 starts. An explicit
work list replaces call-stack recursion, so depth order stays
deterministic and the recursion limit never matters.
"""

from collections import Counter
from typing import Any, Dict, Optional, Tuple, Union
import logging
import os
import time

from genomespec import Genome, ConfigurationError
from plant_policies import GenerationPolicy, OperationReport
from ..core.accumulator import MeshAccumulator
from ..core.errors import InvariantViolation
from ..core.mesh import GeneratedMesh
from ..core.ring import Ring
from ..core.rng import PlantRng
from ..ops.branch import Branch, expansion_levels

logger = logging.getLogger(__name__)


DEBUG_ENV_VAR = "PLANTGEN_DEBUG"


def is_debug_mode() -> bool:
    """Check if debug mode is enabled via environment variable."""
    return os.environ.get(DEBUG_ENV_VAR, "").lower() in ("1", "true", "yes")


GenomeLike = Union[Genome, Dict[str, Any]]


def _coerce_genome(genome: GenomeLike) -> Genome:
    if isinstance(genome, Genome):
        return genome
    if isinstance(genome, dict):
        return Genome.from_dict(genome)
    raise ConfigurationError(
        f"Expected a Genome or a genome dict, got {type(genome).__name__}"
    )


def grow(
    genome: Genome,
    policy: Optional[GenerationPolicy] = None,
) -> MeshAccumulator:
    """
    Run every growth level and return the filled accumulator.

    Parameters
    ----------
    genome : Genome
        Validated genome
    policy : GenerationPolicy, optional
        Leaf and shading settings

    Returns
    -------
    MeshAccumulator
        Accumulator holding raw buffers and the branch skeleton
    """
    if policy is None:
        policy = GenerationPolicy()

    rng = PlantRng(genome.seed)
    acc = MeshAccumulator(rng, shading=policy.shading)

    ring = Ring.generate(genome.starting_radius, genome.radial_segments, 0.0)
    start_loop = acc.add_ring(ring)

    branches = [Branch.root(genome, start_loop)]

    for level in range(expansion_levels(genome)):
        current, branches = branches, []
        for branch in current:
            branches.extend(branch.expand(acc, genome, policy.leaf))
        logger.debug(
            f"Level {level}: expanded {len(current)} branches, "
            f"{acc.vertex_count} vertices so far"
        )

    return acc


def _run(
    genome: GenomeLike,
    policy: Optional[GenerationPolicy],
) -> Tuple[Genome, GeneratedMesh, MeshAccumulator]:
    genome = _coerce_genome(genome)
    if policy is None:
        policy = GenerationPolicy()

    validate = policy.validate_output or is_debug_mode()

    logger.info(
        f"Generating plant {genome.content_hash()} "
        f"(seed={genome.seed}, max_splits={genome.max_splits})"
    )

    try:
        acc = grow(genome, policy)
        mesh = acc.finalize(validate=validate)
    except InvariantViolation:
        logger.error(f"Generation aborted for genome {genome.content_hash()}")
        raise

    logger.info(
        f"Generated {mesh.vertex_count} vertices, {mesh.triangle_count} triangles, "
        f"{acc.leaf_count} leaves, {len(acc.skeleton)} branches"
    )
    return genome, mesh, acc


def generate(
    genome: GenomeLike,
    policy: Optional[GenerationPolicy] = None,
) -> GeneratedMesh:
    """
    Generate a plant mesh from a genome.

    Parameters
    ----------
    genome : Genome or dict
        Plant description. Dicts are loaded via ``Genome.from_dict``.
    policy : GenerationPolicy, optional
        Leaf and shading settings

    Returns
    -------
    GeneratedMesh
        Finalized mesh

    Raises
    ------
    ConfigurationError
        If the genome is invalid; raised before any buffer is touched
    InvariantViolation
        If generation hits an internal inconsistency
    """
    _, mesh, _ = _run(genome, policy)
    return mesh


def generate_with_report(
    genome: GenomeLike,
    policy: Optional[GenerationPolicy] = None,
) -> Tuple[GeneratedMesh, OperationReport]:
    """
    Generate a plant mesh and a report describing the run.

    The report's metrics include mesh statistics, branch and leaf counts
    per depth, radial segments per depth, the genome hash and timing.

    Returns
    -------
    mesh : GeneratedMesh
        Finalized mesh
    report : OperationReport
        Run report
    """
    from ..adapters.networkx_adapter import skeleton_to_networkx, skeleton_depth_summary

    if policy is None:
        policy = GenerationPolicy()

    t0 = time.perf_counter()
    genome, mesh, acc = _run(genome, policy)
    elapsed = time.perf_counter() - t0

    graph = skeleton_to_networkx(acc.skeleton)
    leaves_by_depth = Counter()
    for record in acc.skeleton:
        leaves_by_depth[record.split] += record.leaf_count

    report = OperationReport(
        operation="generate_plant",
        success=True,
        requested_policy=policy.to_dict(),
        effective_policy={
            **policy.to_dict(),
            "validate_output": policy.validate_output or is_debug_mode(),
        },
        metrics={
            "genome_hash": genome.content_hash(),
            "seed": genome.seed,
            "mesh": mesh.to_dict(),
            "leaf_count": acc.leaf_count,
            "branch_count": len(acc.skeleton),
            "depths": skeleton_depth_summary(graph),
            "leaves_by_depth": {str(k): v for k, v in sorted(leaves_by_depth.items())},
            "elapsed_s": elapsed,
        },
    )

    if genome.seed is None:
        report.add_warning("No seed set; output is not reproducible")
    if genome.leaf_density > 0 and acc.leaf_count == 0 and genome.leaf_start < expansion_levels(genome):
        report.add_warning("Leaves were eligible but none spawned")

    return mesh, report

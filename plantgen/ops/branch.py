"""
Branch expansion: the recursive unit of plant growth.

A branch emits ``segments`` rings along its length, bridging each ring to
the previous one, optionally sprouts leaves on ring vertices, and finally
returns the child branches of its split. Expansion is driven level by
level from ``plantgen.api.generate``; branches never call each other.
"""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING
import numpy as np
import logging

from ..core.accumulator import BranchRecord
from ..core.ring import Ring
from ..utils.geometry import (
    TAU,
    UP,
    lerp,
    ring_alignment_offset,
    roll_indices,
    rotate,
)
from .bridge import bridge_loops
from .leaf import leaf_spawn_probability, spawn_leaf
from plant_policies import LeafPolicy

if TYPE_CHECKING:
    from ..core.accumulator import MeshAccumulator
    from genomespec import Genome

logger = logging.getLogger(__name__)


# Children created at this depth get half the radial segments of their parent.
HALVING_DEPTH = 2


def expansion_levels(genome: "Genome") -> int:
    """
    Number of level expansions a genome runs.

    The trunk is always grown, so ``max_splits = 0`` still yields one
    unsplit branch.
    """
    return max(1, genome.max_splits)


def tip_depth(genome: "Genome") -> int:
    """
    Deepest split depth that emits geometry.

    Branches at this depth taper to a point, except the trunk of an
    unsplit (``max_splits = 0``) genome, which keeps its sustained radius.
    """
    return expansion_levels(genome) - 1


@dataclass
class Branch:
    """
    Work item for one branch.

    Attributes
    ----------
    split : int
        Split depth (0 for the trunk)
    branch_decay : int
        Accumulated reduction applied to this branch's split count
    start_radius, end_radius : float
        Radius at the base and at the tip
    length : float
        Branch length
    start : np.ndarray
        Base position
    direction : np.ndarray
        Accumulated Euler orientation at the base
    bend : np.ndarray
        Euler rotation integrated over the branch length
    segments : int
        Rings to emit
    radial_segments : int
        Vertices per ring
    start_loop : list of int
        Vertex indices of the ring this branch grows from. Shared with
        sibling branches and only ever read.
    sway : float
        Accumulated path length at the base
    parent_id : int, optional
        Skeleton id of the parent branch
    """
    split: int
    branch_decay: int
    start_radius: float
    end_radius: float
    length: float
    start: np.ndarray
    direction: np.ndarray
    bend: np.ndarray
    segments: int
    radial_segments: int
    start_loop: List[int] = field(default_factory=list)
    sway: float = 0.0
    parent_id: Optional[int] = None

    @classmethod
    def root(cls, genome: "Genome", start_loop: List[int]) -> "Branch":
        """Trunk branch derived from the genome defaults."""
        # A single split level makes the trunk the deepest branch.
        if genome.max_splits == 1:
            end_radius = 0.0
        else:
            end_radius = genome.starting_radius * genome.radius_sustain
        return cls(
            split=0,
            branch_decay=0,
            start_radius=float(genome.starting_radius),
            end_radius=float(end_radius),
            length=float(genome.branch_length),
            start=np.zeros(3),
            direction=np.zeros(3),
            bend=np.zeros(3),
            segments=genome.segments_per_branch,
            radial_segments=genome.radial_segments,
            start_loop=list(start_loop),
            sway=0.0,
        )

    def expand(
        self,
        acc: "MeshAccumulator",
        genome: "Genome",
        leaf_policy: Optional[LeafPolicy] = None,
    ) -> List["Branch"]:
        """
        Emit this branch's rings (and leaves) and compute its children.

        Parameters
        ----------
        acc : MeshAccumulator
            Buffers and random source of the current run
        genome : Genome
            Plant parameters
        leaf_policy : LeafPolicy, optional
            Leaf spawn and geometry settings

        Returns
        -------
        List[Branch]
            Child branches, all starting from this branch's last ring
        """
        if leaf_policy is None:
            leaf_policy = LeafPolicy()

        record = acc.record_branch(BranchRecord(
            branch_id=acc.next_branch_id(),
            parent_id=self.parent_id,
            split=self.split,
            start_radius=self.start_radius,
            end_radius=self.end_radius,
            radial_segments=self.radial_segments,
            start_loop=list(self.start_loop),
        ))

        segment_length = self.length / self.segments
        pos = np.array(self.start, dtype=float)
        bend = np.array(self.direction, dtype=float)
        prev_loop = list(self.start_loop)

        leafy = self.split >= genome.leaf_start
        p_leaf = 0.0
        if leafy:
            p_leaf = leaf_spawn_probability(
                genome.leaf_density,
                genome.segments_per_branch,
                genome.radial_segments,
                leaf_policy,
            )

        for segment in range(1, self.segments + 1):
            t = segment / self.segments

            bend = bend + self.bend / self.segments
            axis = rotate(UP, bend)
            pos = pos + axis * segment_length

            radius = lerp(self.start_radius, self.end_radius, t)
            sway = self.sway + self.length * t

            ring = Ring.generate(radius, self.radial_segments, sway)
            ring.rotate(bend)
            ring.translate(pos)

            if leafy:
                for vert in ring.verts:
                    if acc.rng.random() >= p_leaf:
                        continue
                    leaf = spawn_leaf(
                        acc,
                        vertex=vert,
                        center=pos,
                        radius=radius,
                        sway=sway,
                        axis=axis,
                        leaf_size=genome.leaf_size,
                        leaf_length=genome.effective_leaf_length,
                        leaf_offset=genome.leaf_offset,
                        policy=leaf_policy,
                    )
                    leaf.emit(acc, leaf_policy)
                    record.leaf_count += 1
                    acc.leaf_count += 1

            indices = acc.add_ring(ring)
            indices = roll_indices(indices, ring_alignment_offset(bend[1], len(indices)))

            if segment == 1 and len(prev_loop) != len(indices):
                record.first_bridge = "doubled"
            acc.add_triangles(bridge_loops(prev_loop, indices))

            record.ring_radii.append(float(radius))
            prev_loop = indices

        record.end_loop = prev_loop

        children = self._split(acc, genome, pos, bend, prev_loop, record.branch_id)
        record.child_count = len(children)

        logger.debug(
            f"Branch {record.branch_id} (depth {self.split}): "
            f"{self.segments} rings x {self.radial_segments}, "
            f"{record.leaf_count} leaves, {len(children)} children"
        )
        return children

    def _split(
        self,
        acc: "MeshAccumulator",
        genome: "Genome",
        end_pos: np.ndarray,
        end_bend: np.ndarray,
        end_loop: List[int],
        branch_id: int,
    ) -> List["Branch"]:
        rng = acc.rng
        lo, hi = genome.branches_per_split
        count = max(rng.integers_inclusive(lo, hi) - self.branch_decay, 1)

        child_split = self.split + 1
        if child_split == tip_depth(genome):
            end_radius = 0.0
        else:
            end_radius = self.end_radius * genome.radius_sustain

        radial_segments = self.radial_segments
        if (
            child_split == HALVING_DEPTH
            and radial_segments % 2 == 0
            and radial_segments // 2 >= 3
        ):
            radial_segments //= 2

        children = []
        for k in range(count):
            new_bend = np.array(self.bend, dtype=float)
            new_direction = np.array(end_bend, dtype=float)

            if self.split == 0:
                slot = TAU / count
                new_direction[1] += slot * k + rng.symmetric(0.5) * slot
            else:
                new_direction[1] += rng.symmetric(genome.branch_sway)

            if genome.branch_twist != 0.0:
                new_bend[2] += rng.symmetric(genome.branch_twist)

            new_bend[0] += rng.uniform(0.0, genome.branch_bend)

            children.append(Branch(
                split=child_split,
                branch_decay=self.branch_decay + genome.branch_decay,
                start_radius=self.end_radius,
                end_radius=end_radius,
                length=float(genome.branch_length),
                start=np.array(end_pos, dtype=float),
                direction=new_direction,
                bend=new_bend,
                segments=genome.segments_per_branch,
                radial_segments=radial_segments,
                start_loop=end_loop,
                sway=self.sway + self.length,
                parent_id=branch_id,
            ))

        return children

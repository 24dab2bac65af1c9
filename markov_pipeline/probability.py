"""
Convert accumulated bigram counts into cumulative-probability buckets.

Each source node becomes a ``ResolvedNode`` whose buckets partition ``[0, 1)``
in neighbour insertion order. Bucket bounds are computed from a running
integer sum divided by the node total, so a consistent node always ends at
exactly 1.0. The clamp of the last upper bound to 1.0 only takes effect for a
node whose total disagrees with the sum of its counts; it keeps every draw in
``[0, 1)`` inside some bucket.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .errors import InvariantViolation
from .graph import AccumulatingNode, RawGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bucket:
    lower: float
    upper: float
    neighbour: str

    @property
    def width(self) -> float:
        return self.upper - self.lower


@dataclass(frozen=True)
class ResolvedNode:
    """Frozen transition table for one source token."""

    buckets: Tuple[Bucket, ...]
    uppers: Tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "uppers", tuple(bucket.upper for bucket in self.buckets))

    def __len__(self) -> int:
        return len(self.buckets)

    def select(self, value: float) -> str:
        """
        Return the neighbour whose bucket contains ``value``.

        Bounds are matched inclusively on the upper side, so a value equal to
        a bucket's upper bound resolves to that bucket rather than the next.
        """

        if not self.buckets:
            raise InvariantViolation("Cannot sample a node with no outgoing edges.")
        index = bisect_left(self.uppers, value)
        if index >= len(self.buckets) or value < self.buckets[index].lower:
            raise InvariantViolation(f"Sample {value!r} matched no transition bucket.")
        return self.buckets[index].neighbour


def resolve_node(node: AccumulatingNode) -> ResolvedNode:
    """Build the bucket array for ``node`` from its neighbour counts."""

    if node.total <= 0:
        raise InvariantViolation("Cannot convert a node that recorded no edges.")

    total = node.total
    running = 0
    buckets = []
    for neighbour, frequency in node.counts.items():
        lower = running / total
        running += frequency
        buckets.append(Bucket(lower, running / total, neighbour))

    if len(buckets) != node.unique:
        raise InvariantViolation(
            f"Node lists {node.unique} distinct neighbours but has {len(buckets)} counts."
        )
    last = buckets[-1]
    if last.upper < 1.0:
        buckets[-1] = Bucket(last.lower, 1.0, last.neighbour)
    return ResolvedNode(tuple(buckets))


def freeze(graph: RawGraph) -> Dict[str, ResolvedNode]:
    """
    Convert every accumulating node of ``graph`` in one pass.

    The graph's frequency maps are discarded and the graph is marked frozen;
    calling ``freeze`` a second time raises ``InvariantViolation``.
    """

    if graph.frozen:
        raise InvariantViolation("Graph has already been converted to probabilities.")

    resolved: Dict[str, ResolvedNode] = {}
    for source, node in graph.nodes.items():
        resolved[source] = resolve_node(node)
        node.counts.clear()

    graph.nodes.clear()
    graph.frozen = True
    logger.debug("Froze %d source nodes into bucket arrays", len(resolved))
    return resolved


__all__ = ["Bucket", "ResolvedNode", "freeze", "resolve_node"]

"""Accumulate weighted bigram edges between interned tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, Sequence, Tuple, Union

from tqdm import tqdm

from .errors import InvariantViolation
from .interner import Interner
from .tokenizer import Token, token_to_string

logger = logging.getLogger(__name__)

StreamItem = Union[Token, str]


class EdgeDirection(Enum):
    """Which token of an adjacent pair becomes the edge source."""

    FORWARD = "forward"  # earlier -> later
    REVERSE = "reverse"  # later -> earlier

    @classmethod
    def parse(cls, value: Union[str, "EdgeDirection"]) -> "EdgeDirection":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Edge direction must be one of: {choices} (got {value!r})") from None


@dataclass
class AccumulatingNode:
    """Build-phase node: running neighbour counts for one source token."""

    counts: Dict[str, int] = field(default_factory=dict)
    total: int = 0
    unique: int = 0

    def add(self, neighbour: str) -> None:
        if neighbour not in self.counts:
            self.counts[neighbour] = 0
            self.unique += 1
        self.counts[neighbour] += 1
        self.total += 1


class RawGraph:
    """
    Mutable weighted graph populated by ``record_edge``.

    Every endpoint is interned, so ``node_count`` counts distinct token texts.
    Only edge sources receive an ``AccumulatingNode``. Once ``freeze`` has run
    (see ``markov_pipeline.probability``) the graph rejects further edges.
    """

    def __init__(self, interner: Interner | None = None) -> None:
        self.interner = interner if interner is not None else Interner()
        self.nodes: Dict[str, AccumulatingNode] = {}
        self.frozen = False

    @property
    def node_count(self) -> int:
        return len(self.interner)

    @property
    def edge_count(self) -> int:
        return sum(node.total for node in self.nodes.values())

    def record_edge(self, source: str, target: str) -> None:
        """Add one observation of the bigram ``source -> target``."""

        if self.frozen:
            raise InvariantViolation(
                f"Cannot record edge {source!r} -> {target!r}: graph is already frozen."
            )
        source_ref = self.interner.intern(source)
        target_ref = self.interner.intern(target)
        node = self.nodes.get(source_ref)
        if node is None:
            node = AccumulatingNode()
            self.nodes[source_ref] = node
        node.add(target_ref)

    def neighbours(self, source: str) -> Dict[str, int]:
        """Return a copy of the neighbour counts recorded under ``source``."""

        if self.frozen:
            raise InvariantViolation("Frequency counts are discarded once the graph is frozen.")
        node = self.nodes.get(source)
        return dict(node.counts) if node is not None else {}


def _as_text(item: StreamItem) -> str:
    if isinstance(item, Token):
        return token_to_string(item)
    return item


def iter_bigrams(
    tokens: Iterable[StreamItem],
    direction: EdgeDirection = EdgeDirection.FORWARD,
) -> Iterator[Tuple[str, str]]:
    """Yield ``(source, target)`` for every adjacent pair in ``tokens``."""

    iterator = iter(tokens)
    try:
        previous = _as_text(next(iterator))
    except StopIteration:
        return
    for item in iterator:
        current = _as_text(item)
        if direction is EdgeDirection.FORWARD:
            yield previous, current
        else:
            yield current, previous
        previous = current


def build_from_stream(
    tokens: Sequence[StreamItem],
    *,
    direction: Union[str, EdgeDirection] = EdgeDirection.FORWARD,
    graph: RawGraph | None = None,
    progress: bool = False,
) -> RawGraph:
    """
    Record one edge per adjacent pair of ``tokens`` and return the raw graph.

    A stream with fewer than two tokens produces an empty graph.
    """

    direction = EdgeDirection.parse(direction)
    if graph is None:
        graph = RawGraph()

    pairs = iter_bigrams(tokens, direction)
    if progress:
        pairs = tqdm(pairs, total=max(0, len(tokens) - 1), desc="Recording bigrams")
    for source, target in pairs:
        graph.record_edge(source, target)

    logger.debug(
        "Recorded %d %s edges across %d nodes (%d sources)",
        graph.edge_count,
        direction.value,
        graph.node_count,
        len(graph.nodes),
    )
    return graph


__all__ = [
    "AccumulatingNode",
    "EdgeDirection",
    "RawGraph",
    "build_from_stream",
    "iter_bigrams",
]

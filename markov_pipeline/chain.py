"""The frozen Markov chain and the index of transitionable keys."""

from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import InvariantViolation
from .graph import EdgeDirection, StreamItem, build_from_stream
from .interner import Interner
from .probability import Bucket, ResolvedNode, freeze
from .walk import RandomSource, generate_walk

logger = logging.getLogger(__name__)


class KeyIndex:
    """Tokens with at least one outgoing edge, in a fixed order for indexed picks."""

    def __init__(self, keys: Sequence[str]) -> None:
        self._keys: Tuple[str, ...] = tuple(keys)
        self._members: FrozenSet[str] = frozenset(self._keys)

    @classmethod
    def from_resolved(cls, resolved: Mapping[str, ResolvedNode]) -> "KeyIndex":
        return cls([token for token, node in resolved.items() if len(node) > 0])

    def __len__(self) -> int:
        return len(self._keys)

    def __getitem__(self, index: int) -> str:
        return self._keys[index]

    def __contains__(self, token: object) -> bool:
        return token in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def choice(self, rng: RandomSource) -> str:
        """Return a uniformly random key drawn with ``rng``."""

        if not self._keys:
            raise InvariantViolation("Cannot pick a fallback token: the chain has no edges.")
        return self._keys[rng.randrange(len(self._keys))]


class MarkovChain:
    """
    Read-only transition tables produced by ``build_markov_chain``.

    The chain keeps the interner that owns every token text; ``release`` drops
    all of it at once, after which the chain can no longer generate.
    """

    def __init__(
        self,
        interner: Interner,
        resolved: Dict[str, ResolvedNode],
        keys: KeyIndex,
        *,
        direction: EdgeDirection = EdgeDirection.FORWARD,
        edge_count: int = 0,
    ) -> None:
        self.interner = interner
        self.resolved = resolved
        self.keys = keys
        self.direction = direction
        self.edge_count = edge_count
        self.released = False

    @property
    def node_count(self) -> int:
        return len(self.interner)

    def canonical(self, text: str) -> str:
        """Return the interned reference for ``text``, or ``text`` itself if unseen."""

        found = self.interner.lookup(text)
        return found if found is not None else text

    def node(self, token: str) -> Optional[ResolvedNode]:
        return self.resolved.get(token)

    def transitions(self, token: str) -> Tuple[Bucket, ...]:
        """Return the bucket array for ``token`` (empty for dead ends)."""

        node = self.resolved.get(token)
        return node.buckets if node is not None else ()

    def generate(self, start: str, length: int, rng: RandomSource) -> List[str]:
        return generate_walk(self, start, length, rng)

    def ensure_live(self) -> None:
        if self.released:
            raise InvariantViolation("Markov chain has been released.")

    def summary(self) -> Dict[str, Any]:
        """Return JSON-serialisable counts describing the chain."""

        return {
            "direction": self.direction.value,
            "nodes": self.node_count,
            "sources": len(self.resolved),
            "transitionable": len(self.keys),
            "edges": self.edge_count,
            "distinct_edges": sum(len(node) for node in self.resolved.values()),
        }

    def release(self) -> None:
        """Drop every transition table and interned token."""

        self.resolved.clear()
        self.keys = KeyIndex(())
        self.interner.clear()
        self.released = True


def build_markov_chain(
    tokens: Sequence[StreamItem],
    *,
    direction: Union[str, EdgeDirection] = EdgeDirection.FORWARD,
    progress: bool = False,
) -> MarkovChain:
    """Record, freeze and index ``tokens`` into a ``MarkovChain``."""

    direction = EdgeDirection.parse(direction)
    graph = build_from_stream(tokens, direction=direction, progress=progress)
    edge_count = graph.edge_count
    resolved = freeze(graph)
    keys = KeyIndex.from_resolved(resolved)
    chain = MarkovChain(graph.interner, resolved, keys, direction=direction, edge_count=edge_count)
    logger.info(
        "Built Markov chain: %d nodes, %d transitionable, %d edges",
        chain.node_count,
        len(keys),
        edge_count,
    )
    return chain


__all__ = ["KeyIndex", "MarkovChain", "build_markov_chain"]

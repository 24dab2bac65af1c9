"""Random walks over a frozen ``MarkovChain``."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Protocol, Sequence

if TYPE_CHECKING:
    from .chain import MarkovChain

logger = logging.getLogger(__name__)

DEFAULT_WALK_LENGTH = 50


class RandomSource(Protocol):
    """The subset of ``random.Random`` a walk needs."""

    def random(self) -> float: ...

    def randrange(self, stop: int) -> int: ...


def next_token(chain: "MarkovChain", current: str, rng: RandomSource) -> str:
    """
    Return the successor of ``current``.

    Nodes with outgoing edges sample their bucket array with one draw from
    ``rng.random()``. Dead ends jump to a uniformly chosen transitionable key.
    """

    node = chain.node(current)
    if node is not None and len(node) > 0:
        return node.select(rng.random())
    logger.debug("Dead end at %r; teleporting to a random key", current)
    return chain.keys.choice(rng)


def generate_walk(
    chain: "MarkovChain",
    start: str,
    length: int,
    rng: RandomSource,
) -> List[str]:
    """
    Return ``length`` tokens starting with ``start``.

    The walk never stops early: dead ends (including an unknown ``start``)
    fall back to a random transitionable key, which requires the chain to
    have at least one edge.
    """

    chain.ensure_live()
    if length < 0:
        raise ValueError(f"Walk length must be non-negative (got {length})")
    if length == 0:
        return []

    current = chain.canonical(start)
    walk = [current]
    for _ in range(length - 1):
        current = next_token(chain, current, rng)
        walk.append(current)
    return walk


def render_walk(walk: Sequence[str]) -> str:
    """Join ``walk`` with single spaces and end with a newline."""

    return " ".join(walk) + "\n"


__all__ = [
    "DEFAULT_WALK_LENGTH",
    "RandomSource",
    "generate_walk",
    "next_token",
    "render_walk",
]

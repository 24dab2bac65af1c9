"""
First-order Markov chain text generation.

The public surface covers building a chain from text or tokens and walking
it; lower-level pieces live in the submodules.
"""

from .chain import KeyIndex, MarkovChain, build_markov_chain  # noqa: F401
from .graph import EdgeDirection  # noqa: F401
from .tokenizer import tokenize  # noqa: F401
from .walk import generate_walk, render_walk  # noqa: F401

__all__ = [
    "EdgeDirection",
    "KeyIndex",
    "MarkovChain",
    "build_markov_chain",
    "generate_walk",
    "render_walk",
    "tokenize",
]

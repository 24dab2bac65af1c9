"""Exception types raised by the Markov chain pipeline."""

from __future__ import annotations


class MarkovChainError(RuntimeError):
    """Base class for failures raised while building or walking a chain."""


class InvariantViolation(MarkovChainError):
    """Raised when a graph or chain is used in the wrong lifecycle state."""


class EmptyInputError(MarkovChainError):
    """Raised when no source text is available to tokenize."""


class UnrecognizedTokenType(MarkovChainError):
    """Raised when a token kind has no text representation."""


__all__ = [
    "EmptyInputError",
    "InvariantViolation",
    "MarkovChainError",
    "UnrecognizedTokenType",
]

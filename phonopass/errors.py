#!/usr/bin/env python3
"""
Errors
======
Exceptions raised by model building, sampling and pattern parsing.

All of them are ``ValueError`` subclasses, so callers that only care about
"bad input" can keep catching ``ValueError``.
"""


class PhonopassError(ValueError):
    """Base class for phonopass errors."""


class InvalidDepth(PhonopassError):
    """Markov chain depth is not a positive integer."""

    def __init__(self, depth):
        self.depth = depth
        super().__init__(f"Markov chain depth must be >= 1, got {depth!r}")


class EmptyCorpus(PhonopassError):
    """Training corpus has no usable words."""

    def __init__(self):
        super().__init__("Training corpus is empty")


class UnterminatedEscape(PhonopassError):
    """Pattern ends with a bare escape character."""

    def __init__(self, pattern: str):
        self.pattern = pattern
        super().__init__(f"Pattern ends with an unterminated escape: {pattern!r}")


class EmptyDistribution(PhonopassError):
    """Sampler was handed a distribution with no outcomes.

    The model guarantees a non-empty distribution for every context, so this
    means the model itself is broken.
    """

    def __init__(self, context: str = None):
        self.context = context
        msg = "Cannot sample from an empty distribution"
        if context is not None:
            msg += f" (context {context!r})"
        super().__init__(msg)


__all__ = [
    "PhonopassError",
    "InvalidDepth",
    "EmptyCorpus",
    "UnterminatedEscape",
    "EmptyDistribution",
]

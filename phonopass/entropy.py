#!/usr/bin/env python3
"""
Randomness and Entropy Bookkeeping
==================================
Everything that touches the random source lives here.

- RandomSource: minimal capability interface (``next_uniform``/``randbelow``)
- SecureRandom: OS CSPRNG via ``secrets.SystemRandom`` (production default)
- SeededRandom: ``random.Random`` with a fixed seed (tests, reproducible runs)
- Distribution: immutable weighted set with integer counts
- Sampler: one draw per sample, returns the outcome and its probability
- EntropyAccumulator: running ``-log2(p)`` total for one generation call

Entropy is counted per random choice as ``-log2(p)`` of the outcome that was
actually picked, so the reported figure is the log2 of the number of guesses
an attacker who knows the model and the pattern needs on average.
"""

import math
import random
import secrets
from abc import ABC, abstractmethod
from bisect import bisect_right
from dataclasses import dataclass
from itertools import accumulate
from typing import Any, Dict, Iterator, Sequence, Tuple

from .errors import EmptyDistribution


# =============================================================================
# Random Sources
# =============================================================================

class RandomSource(ABC):
    """Source of uniformly distributed randomness."""

    @abstractmethod
    def next_uniform(self) -> float:
        """Return a float in [0.0, 1.0)."""

    @abstractmethod
    def randbelow(self, n: int) -> int:
        """Return an integer in [0, n), without modulo bias."""


class SecureRandom(RandomSource):
    """Cryptographically secure source backed by the OS entropy pool."""

    def __init__(self):
        self._rng = secrets.SystemRandom()

    def next_uniform(self) -> float:
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randbelow() needs a positive bound, got {n}")
        return self._rng.randrange(n)


class SeededRandom(RandomSource):
    """
    Deterministic source for tests and reproducible output.

    NOT suitable for real secrets: anyone who knows the seed knows the
    passwords.
    """

    def __init__(self, seed: Any = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_uniform(self) -> float:
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randbelow() needs a positive bound, got {n}")
        return self._rng.randrange(n)

    def getstate(self):
        return self._rng.getstate()

    def setstate(self, state) -> None:
        self._rng.setstate(state)


def default_rng() -> RandomSource:
    """Return a fresh secure random source."""
    return SecureRandom()


# =============================================================================
# Weighted Sets
# =============================================================================

@dataclass(frozen=True)
class Distribution:
    """
    Immutable weighted set of tokens.

    Tokens are kept in sorted order, which fixes the enumeration order used
    by the sampler (equal-probability tokens are ordered lexicographically).
    ``cumulative[i]`` is the sum of ``counts[:i + 1]``.
    """
    tokens: Tuple[Any, ...]
    counts: Tuple[int, ...]
    cumulative: Tuple[int, ...]

    @classmethod
    def from_counts(cls, counts: Dict[Any, int]) -> 'Distribution':
        """Build from a ``{token: count}`` mapping; zero counts are dropped."""
        items = sorted((tok, c) for tok, c in counts.items() if c > 0)
        tokens = tuple(tok for tok, _ in items)
        weights = tuple(c for _, c in items)
        return cls(tokens=tokens, counts=weights,
                   cumulative=tuple(accumulate(weights)))

    @classmethod
    def uniform(cls, tokens: Sequence[Any]) -> 'Distribution':
        """Every token with weight 1 (duplicates collapse)."""
        return cls.from_counts({tok: 1 for tok in tokens})

    @property
    def total(self) -> int:
        return self.cumulative[-1] if self.cumulative else 0

    def __len__(self) -> int:
        return len(self.tokens)

    def __contains__(self, token) -> bool:
        return token in self.tokens

    def probability(self, token) -> float:
        """Probability of ``token`` (0.0 when absent)."""
        try:
            i = self.tokens.index(token)
        except ValueError:
            return 0.0
        return self.counts[i] / self.total

    def items(self) -> Iterator[Tuple[Any, float]]:
        """Yield ``(token, probability)`` in enumeration order."""
        total = self.total
        for tok, c in zip(self.tokens, self.counts):
            yield tok, c / total

    def as_counts(self) -> Dict[Any, int]:
        return dict(zip(self.tokens, self.counts))

    def without(self, token) -> 'Distribution':
        """Same distribution with ``token`` removed (renormalized implicitly)."""
        if token not in self.tokens:
            return self
        counts = self.as_counts()
        del counts[token]
        return Distribution.from_counts(counts)


# =============================================================================
# Sampling
# =============================================================================

class Sampler:
    """Draws from distributions using a RandomSource."""

    def __init__(self, rng: RandomSource):
        self.rng = rng

    def sample(self, dist: Distribution) -> Tuple[Any, float]:
        """
        Draw one token.

        A single ``randbelow(total)`` call is resolved against the cumulative
        counts by bisection, so integer weights are sampled exactly.

        Returns:
            (token, probability of that token)
        """
        if not dist:
            raise EmptyDistribution()
        total = dist.total
        n = self.rng.randbelow(total)
        i = bisect_right(dist.cumulative, n)
        return dist.tokens[i], dist.counts[i] / total

    def choice(self, alphabet: Sequence[Any]) -> Tuple[Any, int]:
        """
        Pick uniformly from ``alphabet``.

        Returns:
            (item, number of alternatives)
        """
        if not alphabet:
            raise EmptyDistribution()
        return alphabet[self.rng.randbelow(len(alphabet))], len(alphabet)


# =============================================================================
# Entropy Accounting
# =============================================================================

class EntropyAccumulator:
    """Bits of entropy consumed during one generation call."""

    def __init__(self):
        self._bits = 0.0

    def record(self, probability: float) -> float:
        """Add ``-log2(probability)`` bits; returns the bits added."""
        if not 0.0 < probability <= 1.0:
            raise ValueError(f"probability must be in (0, 1], got {probability}")
        bits = -math.log2(probability)
        # -log2(1.0) is -0.0
        bits = bits if bits > 0.0 else 0.0
        self._bits += bits
        return bits

    def record_uniform(self, n_alternatives: int) -> float:
        """Add ``log2(n_alternatives)`` bits for a uniform choice."""
        if n_alternatives < 1:
            raise ValueError(f"need at least one alternative, got {n_alternatives}")
        bits = math.log2(n_alternatives)
        self._bits += bits
        return bits

    def total(self) -> float:
        return self._bits

    def __repr__(self) -> str:
        return f"EntropyAccumulator(bits={self._bits:.3f})"


__all__ = [
    "RandomSource",
    "SecureRandom",
    "SeededRandom",
    "default_rng",
    "Distribution",
    "Sampler",
    "EntropyAccumulator",
]

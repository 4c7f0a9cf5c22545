#!/usr/bin/env python3
"""
Character-level Markov Model
============================
Learns P(next_char | previous_n_chars) from a word corpus, plus the
distribution of word lengths.

Every word is padded as ``START + word + END`` and each transition is
recorded under all context lengths from 0 up to ``depth``. Generation looks
up the longest available suffix of the current context and drops the oldest
characters until it finds one (left-truncation backoff). The zero-length
context is the global unigram table, so a non-empty corpus can always make
progress.

Theory:
-------
- Depth 1: letters only follow the previous letter, chaotic output
- Depth 2: learns common syllables, high entropy per character
- Depth 3: closer to the training words, more pronounceable
"""

import json
import logging
from collections import Counter, defaultdict
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from .entropy import Distribution
from .errors import EmptyCorpus, EmptyDistribution, InvalidDepth

logger = logging.getLogger(__name__)


# =============================================================================
# MARKOV CHAIN MODEL
# =============================================================================

class MarkovModel:
    """Read-only transition table plus learned word-length distribution."""

    # Special tokens (control characters, never part of a real word)
    START = '\x02'
    END = '\x03'

    def __init__(self,
                 depth: int,
                 transitions: Mapping[str, Distribution],
                 lengths: Distribution):
        self._depth = depth
        self._transitions = MappingProxyType(dict(transitions))
        self._lengths = lengths

    @property
    def depth(self) -> int:
        return self._depth

    def contexts(self) -> List[str]:
        """All contexts present in the table, sorted."""
        return sorted(self._transitions)

    def __contains__(self, context: str) -> bool:
        return context in self._transitions

    def __len__(self) -> int:
        return len(self._transitions)

    def distribution(self, context: str) -> Distribution:
        """Exact lookup, no backoff. Raises KeyError for unseen contexts."""
        return self._transitions[context]

    def next_distribution(self, context: str, allow_end: bool = True) -> Distribution:
        """
        Candidate next tokens for ``context``.

        Args:
            context: Preceding tokens, oldest first. Only the last ``depth``
                     are used.
            allow_end: If False, the END marker is removed from the result and
                       contexts that can only end the word are backed off.

        Returns:
            Non-empty Distribution of the longest matching context suffix.
        """
        for k in range(min(len(context), self._depth), -1, -1):
            dist = self._transitions.get(context[len(context) - k:])
            if dist is None:
                continue
            if not allow_end:
                dist = dist.without(self.END)
            if dist:
                return dist
        raise EmptyDistribution(context)

    def word_length_distribution(self) -> Distribution:
        return self._lengths

    def to_dict(self) -> dict:
        """Serialize model to dictionary"""
        return {
            'depth': self._depth,
            'transitions': {
                ctx: dist.as_counts() for ctx, dist in self._transitions.items()
            },
            # JSON object keys must be strings
            'lengths': {str(n): c for n, c in self._lengths.as_counts().items()},
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MarkovModel':
        """Deserialize model from dictionary"""
        depth = data['depth']
        if not isinstance(depth, int) or depth < 1:
            raise InvalidDepth(depth)
        transitions = {
            ctx: Distribution.from_counts(counts)
            for ctx, counts in data['transitions'].items()
        }
        lengths = Distribution.from_counts(
            {int(n): c for n, c in data['lengths'].items()}
        )
        if not lengths or '' not in transitions:
            raise EmptyCorpus()
        return cls(depth, transitions, lengths)

    def __repr__(self) -> str:
        return f"MarkovModel(depth={self._depth}, contexts={len(self._transitions)})"


# =============================================================================
# TRAINING
# =============================================================================

def _check_depth(depth) -> int:
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
        raise InvalidDepth(depth)
    return depth


class MarkovTrainer:
    """Trains Markov models on word corpora"""

    def __init__(self, depth: int = 3):
        self.depth = _check_depth(depth)

    def train(self, words: Iterable[str]) -> MarkovModel:
        """Train a Markov model on a list of words"""
        depth = self.depth
        transitions: Dict[str, Counter] = defaultdict(Counter)
        lengths: Counter = Counter()
        n_words = 0

        for word in words:
            # Normalize: lowercase, strip whitespace and marker characters
            word = word.lower().strip()
            word = word.replace(MarkovModel.START, '').replace(MarkovModel.END, '')
            if not word:
                continue
            n_words += 1
            lengths[len(word)] += 1

            padded = MarkovModel.START + word + MarkovModel.END
            for i in range(1, len(padded)):
                next_char = padded[i]
                for k in range(min(i, depth) + 1):
                    transitions[padded[i - k:i]][next_char] += 1

        if n_words == 0:
            raise EmptyCorpus()

        model = MarkovModel(
            depth,
            {ctx: Distribution.from_counts(c) for ctx, c in transitions.items()},
            Distribution.from_counts(lengths),
        )
        logger.debug("Trained %r on %d words", model, n_words)
        return model


def build_model(corpus: Iterable[str], depth: int) -> MarkovModel:
    """Build a model from ``corpus`` with the given chain depth."""
    return MarkovTrainer(depth).train(corpus)


# =============================================================================
# PERSISTENCE
# =============================================================================

def save_model(model: MarkovModel, filepath) -> None:
    """Save a trained model to a JSON file"""
    Path(filepath).write_text(json.dumps(model.to_dict(), indent=2), encoding='utf-8')


def load_model(filepath) -> MarkovModel:
    """Load a trained model from a JSON file"""
    data = json.loads(Path(filepath).read_text(encoding='utf-8'))
    return MarkovModel.from_dict(data)


__all__ = [
    "MarkovModel",
    "MarkovTrainer",
    "build_model",
    "save_model",
    "load_model",
]

#!/usr/bin/env python3
"""
Password Generator
==================
Owns a Markov model and a random source and exposes the public generation
operations. Every ``gen_*`` method returns ``(secret, entropy_bits)``.

Usage:
    from phonopass import Generator

    gen = Generator.new()
    secret, bits = gen.gen_from_pattern("Ww-sd")
    phrase, bits = gen.gen_passphrase(4)

A Generator is not thread-safe; give each thread its own instance. The
model is read-only and can be shared: ``Generator(gen.model)``.
"""

from typing import Iterable, Sequence, Tuple

from .entropy import EntropyAccumulator, RandomSource, Sampler, default_rng
from .markov import MarkovModel, build_model
from .pattern import Alphabets, Directive, DirectiveKind, PatternInterpreter
from .settings import get_setting
from .wordlists import load_wordlist


DEFAULT_DEPTH = 3
HIGH_ENTROPY_DEPTH = 2


def _default_corpus() -> Sequence[str]:
    return load_wordlist(get_setting("generator.default_wordlist", "english"))


class Generator:
    """
    Pronounceable password generator with entropy reporting.

    Construction variants:
        Generator.new()                  default wordlist, depth 3
        Generator.new_he()               default wordlist, depth 2 (more
                                         entropy per character, less
                                         pronounceable)
        Generator.new_custom(words, d)   your own corpus and depth
        Generator(model)                 reuse an already built model
    """

    def __init__(self,
                 model: MarkovModel,
                 rng: RandomSource = None,
                 alphabets: Alphabets = None,
                 word_separator: str = None):
        self.model = model
        self.rng = rng or default_rng()
        self.alphabets = alphabets or Alphabets.from_settings()
        self._interpreter = PatternInterpreter(
            model, Sampler(self.rng), self.alphabets, word_separator
        )

    @classmethod
    def new(cls, corpus: Iterable[str] = None, rng: RandomSource = None) -> 'Generator':
        depth = get_setting("generator.default_depth", DEFAULT_DEPTH)
        return cls.new_custom(corpus if corpus is not None else _default_corpus(), depth, rng)

    @classmethod
    def new_he(cls, corpus: Iterable[str] = None, rng: RandomSource = None) -> 'Generator':
        depth = get_setting("generator.high_entropy_depth", HIGH_ENTROPY_DEPTH)
        return cls.new_custom(corpus if corpus is not None else _default_corpus(), depth, rng)

    @classmethod
    def new_custom(cls, tokens: Iterable[str], depth: int, rng: RandomSource = None) -> 'Generator':
        """
        Build a generator from a custom corpus.

        Raises:
            InvalidDepth: depth < 1
            EmptyCorpus: no usable words in ``tokens``
        """
        return cls(build_model(tokens, depth), rng)

    @property
    def depth(self) -> int:
        return self.model.depth

    @property
    def word_separator(self) -> str:
        return self._interpreter.word_separator

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def gen_from_pattern(self, pattern: str) -> Tuple[str, float]:
        """
        Generate a password from a pattern such as ``"Ww-sd"``.

        Raises:
            UnterminatedEscape: pattern ends with a bare backslash (raised
                                before any randomness is consumed)
        """
        directives = self._interpreter.parse(pattern)
        return self._interpreter.run(directives)

    def gen_passphrase(self, words: int) -> Tuple[str, float]:
        """``words`` pseudo-words joined by the word separator."""
        if words < 0:
            raise ValueError(f"word count must be >= 0, got {words}")
        directives = []
        for i in range(words):
            if i and self.word_separator:
                directives.append(Directive.literal(self.word_separator))
            directives.append(Directive(DirectiveKind.LOWER_WORD))
        return self._interpreter.run(directives)

    def gen_next_token(self, seed: str) -> Tuple[str, float]:
        """
        One step of the Markov walk.

        ``seed`` is taken as the start of a word; the returned character is a
        likely continuation, together with its entropy.
        """
        acc = EntropyAccumulator()
        token = self._interpreter.next_char(seed, acc)
        return token, acc.total()

    def gen_word_length(self) -> Tuple[int, float]:
        acc = EntropyAccumulator()
        length = self._interpreter.word_length(acc)
        return length, acc.total()

    def gen_cv_word(self, n: int, random_start: bool = False) -> Tuple[str, float]:
        """
        Alternate consonants and vowels, independent of the trained model.

        Starts with a consonant. With ``random_start`` a coin flip (1 bit)
        decides whether a consonant or a vowel comes first.
        """
        if n < 0:
            raise ValueError(f"length must be >= 0, got {n}")
        acc = EntropyAccumulator()
        first, second = self.alphabets.consonants, self.alphabets.vowels
        if random_start and n > 0:
            if self.rng.randbelow(2):
                first, second = second, first
            acc.record_uniform(2)

        letters = []
        for i in range(n):
            letters.append(self._interpreter.uniform(first if i % 2 == 0 else second, acc))
        return ''.join(letters), acc.total()

    def __repr__(self) -> str:
        return f"Generator(model={self.model!r}, rng={type(self.rng).__name__})"


__all__ = ["Generator", "DEFAULT_DEPTH", "HIGH_ENTROPY_DEPTH"]

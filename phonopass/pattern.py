#!/usr/bin/env python3
"""
Pattern Interpreter
===================
Turns a pattern string into a password.

Pattern characters:
    w   pseudo-word from the Markov model (lowercase)
    W   pseudo-word, capitalized
    c   random lowercase letter
    C   random uppercase letter
    s   random symbol
    d   random digit
    \\x  literal ``x`` (escape)

Anything else is copied literally, so ``w.w.w`` or ``w-c-s-d`` need no
escaping. Two word directives next to each other get the word separator
between them; otherwise ``ww`` could produce one long word whose split point
is ambiguous and the entropy estimate would be too high.

Parsing is a separate step that runs before any randomness is drawn, so a
malformed pattern fails without touching the random source.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from .entropy import EntropyAccumulator, Sampler
from .errors import UnterminatedEscape
from .markov import MarkovModel
from .settings import get_setting

ESCAPE = '\\'
DEFAULT_SEPARATOR = '.'


# =============================================================================
# Directives
# =============================================================================

class DirectiveKind(Enum):
    LOWER_WORD = 'w'
    UPPER_WORD = 'W'
    LOWER_CHAR = 'c'
    UPPER_CHAR = 'C'
    SYMBOL = 's'
    DIGIT = 'd'
    LITERAL = 'literal'


PATTERN_CHARS: Dict[str, DirectiveKind] = {
    kind.value: kind for kind in DirectiveKind if kind is not DirectiveKind.LITERAL
}

WORD_KINDS = (DirectiveKind.LOWER_WORD, DirectiveKind.UPPER_WORD)


@dataclass(frozen=True)
class Directive:
    """One parsed unit of a pattern."""
    kind: DirectiveKind
    text: Optional[str] = None  # only set for literals

    @classmethod
    def literal(cls, text: str) -> 'Directive':
        return cls(DirectiveKind.LITERAL, text)

    @property
    def is_word(self) -> bool:
        return self.kind in WORD_KINDS

    def __str__(self) -> str:
        if self.kind is DirectiveKind.LITERAL:
            if self.text in PATTERN_CHARS or self.text == ESCAPE:
                return ESCAPE + self.text
            return self.text
        return self.kind.value


def parse_pattern(pattern: str, word_separator: str = DEFAULT_SEPARATOR) -> List[Directive]:
    """
    Parse a pattern string into directives, left to right.

    Args:
        pattern: Pattern string (see module docstring)
        word_separator: Literal inserted between adjacent word directives;
                        empty string disables it

    Raises:
        UnterminatedEscape: pattern ends with a bare backslash
    """
    directives: List[Directive] = []
    chars = iter(pattern)

    for ch in chars:
        if ch == ESCAPE:
            escaped = next(chars, None)
            if escaped is None:
                raise UnterminatedEscape(pattern)
            directive = Directive.literal(escaped)
        elif ch in PATTERN_CHARS:
            directive = Directive(PATTERN_CHARS[ch])
        else:
            directive = Directive.literal(ch)

        if word_separator and directive.is_word and directives and directives[-1].is_word:
            directives.append(Directive.literal(word_separator))
        directives.append(directive)

    return directives


# =============================================================================
# Alphabets
# =============================================================================

@dataclass(frozen=True)
class Alphabets:
    """Fixed character sets for the uniform directives."""
    lowercase: str = 'abcdefghijklmnopqrstuvwxyz'
    symbols: str = '@#!$%&=?^+-*"'
    digits: str = '0123456789'
    consonants: str = 'qwrtpsdfgjklzxcvbnm'
    vowels: str = 'aeiou'

    def __post_init__(self):
        for name in ('lowercase', 'symbols', 'digits', 'consonants', 'vowels'):
            value = getattr(self, name)
            if not value:
                raise ValueError(f"alphabet '{name}' must not be empty")
            if len(set(value)) != len(value):
                # duplicates would skew the uniform draw away from log2(len)
                raise ValueError(f"alphabet '{name}' contains duplicate characters")

    @classmethod
    def from_settings(cls) -> 'Alphabets':
        cfg = get_setting("alphabets", {}) or {}
        defaults = cls()
        return cls(
            lowercase=cfg.get("lowercase", defaults.lowercase),
            symbols=cfg.get("symbols", defaults.symbols),
            digits=str(cfg.get("digits", defaults.digits)),
            consonants=cfg.get("consonants", defaults.consonants),
            vowels=cfg.get("vowels", defaults.vowels),
        )


# =============================================================================
# Interpreter
# =============================================================================

class PatternInterpreter:
    """Drives token generation for parsed patterns."""

    def __init__(self,
                 model: MarkovModel,
                 sampler: Sampler,
                 alphabets: Alphabets = None,
                 word_separator: str = None):
        self.model = model
        self.sampler = sampler
        self.alphabets = alphabets or Alphabets.from_settings()
        if word_separator is None:
            word_separator = get_setting("generator.word_separator", DEFAULT_SEPARATOR)
        self.word_separator = word_separator

        self._handlers: Dict[DirectiveKind, Callable[[Directive, EntropyAccumulator], str]] = {
            DirectiveKind.LOWER_WORD: lambda d, acc: self.pseudo_word(acc),
            DirectiveKind.UPPER_WORD: lambda d, acc: self.pseudo_word(acc, capitalize=True),
            DirectiveKind.LOWER_CHAR: lambda d, acc: self.uniform(self.alphabets.lowercase, acc),
            DirectiveKind.UPPER_CHAR: lambda d, acc: self.uniform(self.alphabets.lowercase, acc).upper(),
            DirectiveKind.SYMBOL: lambda d, acc: self.uniform(self.alphabets.symbols, acc),
            DirectiveKind.DIGIT: lambda d, acc: self.uniform(self.alphabets.digits, acc),
            DirectiveKind.LITERAL: lambda d, acc: d.text,
        }

    def parse(self, pattern: str) -> List[Directive]:
        return parse_pattern(pattern, self.word_separator)

    def run(self, directives: List[Directive]) -> Tuple[str, float]:
        """Generate one secret; returns (secret, entropy in bits)."""
        acc = EntropyAccumulator()
        parts = [self.emit(d, acc) for d in directives]
        return ''.join(parts), acc.total()

    def emit(self, directive: Directive, acc: EntropyAccumulator) -> str:
        return self._handlers[directive.kind](directive, acc)

    # -------------------------------------------------------------------------
    # Token classes
    # -------------------------------------------------------------------------

    def next_char(self, seed: str, acc: EntropyAccumulator) -> str:
        """One Markov step: the character following ``seed`` within a word."""
        context = MarkovModel.START + seed.lower()
        dist = self.model.next_distribution(context, allow_end=False)
        token, p = self.sampler.sample(dist)
        acc.record(p)
        return token

    def word_length(self, acc: EntropyAccumulator) -> int:
        length, p = self.sampler.sample(self.model.word_length_distribution())
        acc.record(p)
        return length

    def pseudo_word(self, acc: EntropyAccumulator, capitalize: bool = False) -> str:
        """Walk the chain for a sampled number of characters."""
        length = self.word_length(acc)
        word = ''
        while len(word) < length:
            word += self.next_char(word, acc)
        if capitalize:
            word = word[:1].upper() + word[1:]
        return word

    def uniform(self, alphabet: str, acc: EntropyAccumulator) -> str:
        ch, n = self.sampler.choice(alphabet)
        acc.record_uniform(n)
        return ch


__all__ = [
    "ESCAPE",
    "DirectiveKind",
    "Directive",
    "PATTERN_CHARS",
    "parse_pattern",
    "Alphabets",
    "PatternInterpreter",
]

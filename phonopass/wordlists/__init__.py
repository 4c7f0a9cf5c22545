#!/usr/bin/env python3
"""
Training Wordlists
==================
Loads the corpora shipped with phonopass.

Usage:
    from phonopass.wordlists import load_wordlist

    words = load_wordlist("english")
    gen = Generator.new_custom(words, 3)

Available lists:
    english   common English nouns
    italian   common Italian nouns
    cv        every consonant-vowel and vowel-consonant pair
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Tuple

from phonopass.settings import get_setting

logger = logging.getLogger(__name__)

WORDLISTS_DIR = Path(__file__).parent
FILE_WORDLISTS = ('english', 'italian')
GENERATED_WORDLISTS = ('cv',)


def available_wordlists() -> Tuple[str, ...]:
    return FILE_WORDLISTS + GENERATED_WORDLISTS


def filter_wordlist(lines: Iterable[str]) -> Tuple[str, ...]:
    """Strip lines, drop blanks and ``#`` comments."""
    words = (line.strip() for line in lines)
    return tuple(w for w in words if w and not w.startswith('#'))


def cv_syllables(consonants: str = None, vowels: str = None) -> Tuple[str, ...]:
    """All two-letter consonant-vowel and vowel-consonant pairs."""
    consonants = consonants or get_setting("alphabets.consonants", "qwrtpsdfgjklzxcvbnm")
    vowels = vowels or get_setting("alphabets.vowels", "aeiou")
    pairs = []
    for c in consonants:
        for v in vowels:
            pairs.append(c + v)
            pairs.append(v + c)
    return tuple(pairs)


def _load_file(name: str) -> Tuple[str, ...]:
    filepath = WORDLISTS_DIR / f"{name}.txt"
    if not filepath.exists():
        raise FileNotFoundError(f"Wordlist not found: {filepath}")
    with open(filepath, 'r', encoding='utf-8') as f:
        return filter_wordlist(f)


@lru_cache(maxsize=None)
def load_wordlist(name: str = 'english') -> Tuple[str, ...]:
    """
    Load a wordlist by name.

    Raises:
        ValueError: unknown list name
    """
    if name in FILE_WORDLISTS:
        words = _load_file(name)
    elif name == 'cv':
        words = cv_syllables()
    else:
        available = ', '.join(available_wordlists())
        raise ValueError(f"Unknown wordlist '{name}'. Available wordlists: {available}")

    logger.debug("Loaded wordlist %s (%d words)", name, len(words))
    return words


__all__ = [
    "available_wordlists",
    "filter_wordlist",
    "cv_syllables",
    "load_wordlist",
    "WORDLISTS_DIR",
]

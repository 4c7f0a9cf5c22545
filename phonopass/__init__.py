#!/usr/bin/env python3
"""
phonopass - Pronounceable Password Generator
=============================================

Generates pronounceable passwords and passphrases from a character-level
Markov model and reports the entropy (in bits) of every generated secret.

Quick Start
-----------
    from phonopass import Generator

    gen = Generator.new()

    # Passphrase of four pseudo-words
    phrase, bits = gen.gen_passphrase(4)

    # Custom pattern: capitalized word, word, dash, symbol, digit
    secret, bits = gen.gen_from_pattern("Ww-sd")

    # Reproducible output for tests
    from phonopass import SeededRandom
    gen = Generator.new_custom(["rust", "cargo", "ownership"], 2, rng=SeededRandom(1))

Modules
-------
    phonopass.generator - Generator (public generation operations)
    phonopass.markov    - Markov model training, lookup and persistence
    phonopass.pattern   - Pattern parsing and interpretation
    phonopass.entropy   - Random sources, sampling, entropy accounting
    phonopass.wordlists - Bundled training corpora
    phonopass.settings  - YAML configuration

CLI Usage
---------
    phonopass -p w.w.w.w-20dd -n 10
    python -m phonopass -p Ww-sd -d 2 -s italian
"""

__version__ = "0.4.0"

from .errors import (
    PhonopassError,
    InvalidDepth,
    EmptyCorpus,
    UnterminatedEscape,
    EmptyDistribution,
)
from .entropy import (
    RandomSource,
    SecureRandom,
    SeededRandom,
    Distribution,
    Sampler,
    EntropyAccumulator,
)
from .markov import (
    MarkovModel,
    MarkovTrainer,
    build_model,
    save_model,
    load_model,
)
from .pattern import (
    Directive,
    DirectiveKind,
    Alphabets,
    PatternInterpreter,
    parse_pattern,
)
from .generator import Generator
from .wordlists import load_wordlist

__all__ = [
    '__version__',
    # Errors
    'PhonopassError',
    'InvalidDepth',
    'EmptyCorpus',
    'UnterminatedEscape',
    'EmptyDistribution',
    # Randomness
    'RandomSource',
    'SecureRandom',
    'SeededRandom',
    'Distribution',
    'Sampler',
    'EntropyAccumulator',
    # Model
    'MarkovModel',
    'MarkovTrainer',
    'build_model',
    'save_model',
    'load_model',
    # Patterns
    'Directive',
    'DirectiveKind',
    'Alphabets',
    'PatternInterpreter',
    'parse_pattern',
    # Generator
    'Generator',
    'load_wordlist',
]

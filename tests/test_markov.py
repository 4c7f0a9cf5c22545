"""
Tests for Markov Model
======================
Tests for training, backoff lookup and persistence in phonopass/markov.py.
"""

import itertools

import pytest

from phonopass.errors import EmptyCorpus, InvalidDepth
from phonopass.markov import (
    MarkovModel,
    MarkovTrainer,
    build_model,
    load_model,
    save_model,
)

START = MarkovModel.START
END = MarkovModel.END

CORPUS = ['banana', 'bandana', 'cabana', 'anagram', 'grammar']


class TestTraining:
    """Tests for MarkovTrainer / build_model."""

    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_probabilities_sum_to_one(self, depth):
        model = build_model(CORPUS, depth)
        for ctx in model.contexts():
            dist = model.distribution(ctx)
            assert dist.total > 0
            assert sum(p for _, p in dist.items()) == pytest.approx(1.0, abs=1e-9)

    def test_real_corpus_probabilities_sum_to_one(self, english):
        model = build_model(english, 3)
        for ctx in model.contexts():
            total = sum(p for _, p in model.distribution(ctx).items())
            assert abs(total - 1.0) < 1e-9

    @pytest.mark.parametrize("depth", [0, -1, True, 2.5, None])
    def test_invalid_depth(self, depth):
        with pytest.raises(InvalidDepth):
            build_model(CORPUS, depth)

    @pytest.mark.parametrize("depth", [1, 2, 3, 7])
    def test_empty_corpus(self, depth):
        with pytest.raises(EmptyCorpus):
            build_model([], depth)

    def test_blank_words_only(self):
        with pytest.raises(EmptyCorpus):
            build_model(['', '   ', '\n'], 2)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            build_model([], 2)

    def test_trainer_rejects_depth_up_front(self):
        with pytest.raises(InvalidDepth):
            MarkovTrainer(depth=0)

    def test_word_lengths(self):
        model = build_model(['ab', 'abc', 'xyz'], 2)
        lengths = model.word_length_distribution()
        assert lengths.as_counts() == {2: 1, 3: 2}

    def test_lowercases_input(self):
        upper = build_model(['Apple', ' PEAR '], 2)
        lower = build_model(['apple', 'pear'], 2)
        assert upper.to_dict() == lower.to_dict()

    def test_transitions_include_start_and_end(self):
        model = build_model(['apple'], 2)
        assert model.distribution(START).as_counts() == {'a': 1}
        assert model.distribution(START + 'a').as_counts() == {'p': 1}
        assert model.distribution('le').as_counts() == {END: 1}

    def test_context_never_longer_than_depth(self):
        model = build_model(CORPUS, 2)
        assert max(len(ctx) for ctx in model.contexts()) == 2

    def test_global_unigram_context(self):
        model = build_model(['ab', 'b'], 1)
        # every emitted token: a, b, END, b, END
        assert model.distribution('').as_counts() == {'a': 1, 'b': 2, END: 2}

    def test_corpus_not_retained(self):
        model = build_model(CORPUS, 2)
        assert not hasattr(model, 'corpus')
        assert 'banana' not in model.to_dict()['transitions']


class TestBackoff:
    """Tests for MarkovModel.next_distribution."""

    @pytest.fixture
    def model(self):
        return build_model(CORPUS, 3)

    def test_exact_context(self, model):
        assert model.next_distribution('nan') == model.distribution('nan')

    def test_uses_last_depth_tokens(self, model):
        assert model.next_distribution('xxxxnan') == model.distribution('nan')

    def test_drops_oldest_first(self, model):
        # 'zan' was never seen, 'an' was
        assert 'zan' not in model
        assert model.next_distribution('zan') == model.distribution('an')

    def test_falls_back_to_unigram(self, model):
        assert model.next_distribution('qqq') == model.distribution('')

    def test_disallow_end_skips_end_only_contexts(self):
        model = build_model(['apple'], 2)
        dist = model.next_distribution('le', allow_end=False)
        # 'le' and 'e' only ever end the word; back off to the unigram table
        assert dist.as_counts() == {'a': 1, 'p': 2, 'l': 1, 'e': 1}

    def test_disallow_end_removes_marker(self, model):
        dist = model.next_distribution('ana', allow_end=False)
        assert END not in dist
        assert sum(p for _, p in dist.items()) == pytest.approx(1.0)

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_any_lowercase_context_makes_progress(self, depth):
        """Seen or unseen, every context up to depth yields a next character."""
        model = build_model(CORPUS, depth)
        letters = 'abgmnqxz'
        for size in range(depth + 1):
            for combo in itertools.product(letters, repeat=size):
                ctx = ''.join(combo)
                for context in (ctx, START + ctx):
                    dist = model.next_distribution(context, allow_end=False)
                    assert len(dist) > 0
                    assert END not in dist


class TestPersistence:
    """Tests for JSON save/load."""

    def test_save_and_load(self, tmp_path):
        model = build_model(CORPUS, 2)
        path = tmp_path / 'model.json'
        save_model(model, path)
        loaded = load_model(path)
        assert loaded.depth == 2
        assert loaded.contexts() == model.contexts()
        for ctx in model.contexts():
            assert loaded.distribution(ctx) == model.distribution(ctx)
        assert loaded.word_length_distribution() == model.word_length_distribution()

    def test_from_dict_rejects_bad_depth(self):
        data = build_model(CORPUS, 2).to_dict()
        data['depth'] = 0
        with pytest.raises(InvalidDepth):
            MarkovModel.from_dict(data)

    def test_from_dict_rejects_empty_model(self):
        with pytest.raises(EmptyCorpus):
            MarkovModel.from_dict({'depth': 2, 'transitions': {}, 'lengths': {}})

"""
Tests for Settings
==================
Tests for YAML configuration loading in phonopass/settings.py.
"""

import pytest

from phonopass import settings
from phonopass.settings import get_setting, load_app_config, require_setting


class TestSettings:
    """Tests for the bundled app.yaml."""

    def test_generator_defaults(self):
        assert get_setting('generator.default_depth') == 3
        assert get_setting('generator.high_entropy_depth') == 2
        assert get_setting('generator.word_separator') == '.'

    def test_alphabets(self):
        assert get_setting('alphabets.symbols') == '@#!$%&=?^+-*"'
        assert get_setting('alphabets.digits') == '0123456789'

    def test_missing_returns_default(self):
        assert get_setting('generator.nope', 42) == 42
        assert get_setting('generator.default_depth.deeper', 'x') == 'x'

    def test_require_setting(self):
        assert require_setting('cli.pattern') == 'w-c-s-d'
        with pytest.raises(ValueError, match="must be set in app.yaml"):
            require_setting('cli.missing')

    def test_cached(self):
        assert load_app_config() is load_app_config()


class TestConfigOverride:
    """Tests for $PHONOPASS_CONFIG."""

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / 'custom.yaml'
        path.write_text("generator:\n  default_depth: 4\n  word_separator: '_'\n")
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(path))
        load_app_config.cache_clear()
        assert get_setting('generator.default_depth') == 4
        assert get_setting('alphabets.digits', 'fallback') == 'fallback'

    def test_override_changes_generator(self, tmp_path, monkeypatch):
        from phonopass import Generator
        path = tmp_path / 'custom.yaml'
        path.write_text("generator:\n  word_separator: '_'\n")
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(path))
        load_app_config.cache_clear()
        gen = Generator.new_custom(['apple'], 3)
        assert gen.gen_passphrase(2) == ('apple_apple', 0.0)

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(tmp_path / 'absent.yaml'))
        load_app_config.cache_clear()
        with pytest.raises(FileNotFoundError):
            load_app_config()

    def test_empty_file(self, tmp_path, monkeypatch):
        path = tmp_path / 'empty.yaml'
        path.write_text('')
        monkeypatch.setenv(settings.CONFIG_ENV_VAR, str(path))
        load_app_config.cache_clear()
        assert load_app_config() == {}

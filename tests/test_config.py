"""Tests for config.py — env loading and typed env parsing."""

import pytest

from ttrss_client import config

_KNOWN_ENV_KEYS = [
    "TTRSS_URL",
    "TTRSS_USER",
    "TTRSS_PASSWORD",
    "TTRSS_HTTP_TIMEOUT_SECONDS",
    "TTRSS_HTTP_MAX_RESPONSE_BYTES",
    "TTRSS_HTTP_LOG",
    "TTRSS_HTTP_LOG_SAMPLE_RATE",
]


class TestLoadEnv:
    @pytest.fixture(autouse=True)
    def _clean_environ(self, monkeypatch):
        """Remove known keys from os.environ so file-parsing tests are isolated."""
        for key in _KNOWN_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

    def test_basic_key_value(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("FOO=bar\nBAZ=qux\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"FOO": "bar", "BAZ": "qux"}

    def test_strips_whitespace(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("  KEY  =  value  \n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"KEY": "value"}

    def test_skips_comments_and_blank_lines(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\n\nKEY=val\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"KEY": "val"}

    def test_value_may_contain_equals(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("TTRSS_PASSWORD=a=b\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        assert config.load_env() == {"TTRSS_PASSWORD": "a=b"}

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "nope.env"))
        assert config.load_env() == {}

    def test_environ_overrides_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("TTRSS_URL=http://file\n")
        monkeypatch.setattr(config, "ENV_PATH", str(env_file))
        monkeypatch.setenv("TTRSS_URL", "http://environ")
        assert config.load_env()["TTRSS_URL"] == "http://environ"

    def test_unknown_environ_keys_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config, "ENV_PATH", str(tmp_path / "nope.env"))
        monkeypatch.setenv("UNRELATED_KEY", "x")
        assert "UNRELATED_KEY" not in config.load_env()


class TestEnvParsing:
    def test_bool(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"A": "yes", "B": "off"})
        assert config._env_bool("A") is True
        assert config._env_bool("B") is False
        assert config._env_bool("C", default=True) is True

    def test_int_fallback(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"A": "12", "B": "x", "C": ""})
        assert config._env_int("A", 1) == 12
        assert config._env_int("B", 1) == 1
        assert config._env_int("C", 1) == 1

    def test_float_fallback(self, monkeypatch):
        monkeypatch.setattr(config, "env", {"A": "0.25", "B": "nan?"})
        assert config._env_float("A", 1.0) == 0.25
        assert config._env_float("B", 1.0) == 1.0


class TestConstants:
    def test_predefined_ids(self):
        assert config.CATEGORY_UNCATEGORIZED == 0
        assert config.CATEGORY_FEEDS_ALL == -4
        assert config.FEED_STARRED_ARTICLES == -1
        assert config.FEED_RECENTLY_READ == -6

    def test_sample_rate_clamped(self):
        assert 0.0 <= config.HTTP_LOG_SAMPLE_RATE <= 1.0

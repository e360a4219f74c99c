# ==============================================
# Tests for Configuration
# ==============================================

import pytest

from taggable.config import DEFAULT_DATE_FORMAT, TaggableConfig, get_config, get_strings


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("TAGGABLE_BLACKLIST", "TAGGABLE_DATE_FORMAT", "TAGGABLE_STOPWORD_LANGUAGES",
                 "MONGO_HOST", "MONGO_PORT", "MONGO_USER", "MONGO_PASSWORD", "MONGO_DATABASE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestGetStrings:
    def test_splits_on_commas(self, clean_env):
        clean_env.setenv("TAGGABLE_BLACKLIST", "js, nodejs ,,express")
        assert get_strings("TAGGABLE_BLACKLIST") == ("js", "nodejs", "express")

    def test_default_when_unset(self, clean_env):
        assert get_strings("TAGGABLE_BLACKLIST", ("js",)) == ("js",)

    def test_default_when_blank(self, clean_env):
        clean_env.setenv("TAGGABLE_BLACKLIST", "  ")
        assert get_strings("TAGGABLE_BLACKLIST") == ()


class TestGetConfig:
    def test_defaults(self, clean_env):
        config = get_config()
        assert config.blacklist == ()
        assert config.date_format == DEFAULT_DATE_FORMAT
        assert config.stopword_languages == ()
        assert config.mongo.port == 27017

    def test_reads_environment(self, clean_env):
        clean_env.setenv("TAGGABLE_BLACKLIST", "js")
        clean_env.setenv("TAGGABLE_DATE_FORMAT", "%Y")
        clean_env.setenv("TAGGABLE_STOPWORD_LANGUAGES", "en,sw")
        clean_env.setenv("MONGO_PORT", "27018")
        config = get_config()
        assert config.blacklist == ("js",)
        assert config.date_format == "%Y"
        assert config.stopword_languages == ("en", "sw")
        assert config.mongo.port == 27018

    def test_singleton_until_reload(self, clean_env):
        first = get_config()
        clean_env.setenv("TAGGABLE_BLACKLIST", "js")
        assert get_config() is first
        assert get_config(reload=True).blacklist == ("js",)

    def test_config_is_read_only(self):
        with pytest.raises(AttributeError):
            TaggableConfig().blacklist = ("js",)

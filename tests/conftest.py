# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - config            → TaggableConfig with no environment blacklist
# - normalizer        → TagNormalizer over every stopword language
# - build_model       → Build a taggable model from field declarations
# - reset_config      → (autouse) drop the cached get_config() singleton
#
# ==============================================

import pytest

import taggable.config
from taggable import Schema, TaggableConfig, TagNormalizer, model, taggable as taggable_plugin


@pytest.fixture(autouse=True)
def reset_config():
    """Never leak a cached get_config() between tests."""
    taggable.config._config_instance = None
    yield
    taggable.config._config_instance = None


@pytest.fixture
def config():
    return TaggableConfig()


@pytest.fixture
def normalizer():
    return TagNormalizer()


@pytest.fixture
def build_model(config):
    """Build a model with the taggable plugin applied."""
    def build(fields=None, name="User", **options):
        schema = Schema(fields or {"name": str})
        taggable_plugin(schema, config=config, **options)
        return model(name, schema)
    return build

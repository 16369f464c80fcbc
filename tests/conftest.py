"""
Shared test configuration for quiethn.
"""

import pytest
from quiethn.config import Config, HNConfig

from tests.helpers import HN_BASE_URL, ScriptedItemSource, make_item


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


@pytest.fixture
def hn_config() -> HNConfig:
    return HNConfig(base_url=HN_BASE_URL, timeout=5.0)


@pytest.fixture
def config(hn_config) -> Config:
    cfg = Config()
    cfg.hn = hn_config
    cfg.fetcher.num_stories = 5
    cfg.fetcher.deadline_seconds = 5.0
    return cfg


@pytest.fixture
def five_stories() -> ScriptedItemSource:
    """Ranks 0-4 are all linked stories, fetched with jittered delays."""
    return ScriptedItemSource([make_item(i) for i in range(1, 6)], max_delay=0.02, seed=7)

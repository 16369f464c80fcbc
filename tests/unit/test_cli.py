"""
Tests for the command-line interface.
"""

import json
import logging

import pytest
import structlog
from click.testing import CliRunner
from quiethn import cli as cli_module
from quiethn.cli import cli
from quiethn.errors import HNClientError

from tests.helpers import ScriptedItemSource, make_item


class FakeClient:
    """Stands in for HNClient and hands out a scripted source."""

    source: ScriptedItemSource

    def __init__(self, config):
        self.config = config

    async def __aenter__(self):
        return self.source

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the global logging setup the CLI performs."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def fake_client(monkeypatch):
    FakeClient.source = ScriptedItemSource(
        [make_item(1, url="https://www.example.com/a"), make_item(2, type="job"), make_item(3)]
    )
    monkeypatch.setattr(cli_module, "HNClient", FakeClient)
    return FakeClient


@pytest.fixture
def runner(tmp_path, monkeypatch):
    # Keep a developer's config.yaml out of the way
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.mark.unit
class TestTopCommand:
    def test_prints_ranked_stories(self, runner, fake_client):
        result = runner.invoke(cli, ["--log-level", "WARNING", "top", "--num-stories", "3"])

        assert result.exit_code == 0, result.output
        assert "1. Story 1 (example.com)" in result.output
        assert "2. Story 3 (example.com)" in result.output
        assert "Story 2" not in result.output

    def test_json_output(self, runner, fake_client):
        result = runner.invoke(cli, ["--log-level", "WARNING", "top", "--num-stories", "3", "--json"])

        assert result.exit_code == 0, result.output
        stories = json.loads(result.output)
        assert [story["id"] for story in stories] == [1, 3]
        assert stories[0]["host"] == "example.com"
        assert stories[0]["comments_url"] == "https://news.ycombinator.com/item?id=1"

    def test_source_failure_exits_non_zero(self, runner, fake_client):
        fake_client.source.ranking_error = HNClientError("down", url="topstories.json", status=500)

        result = runner.invoke(cli, ["--log-level", "ERROR", "top"])

        assert result.exit_code == 1
        assert "Failed to load top stories" in result.output

    def test_negative_story_count_is_rejected(self, runner, fake_client):
        result = runner.invoke(cli, ["top", "--num-stories", "-1"])

        assert result.exit_code == 2


@pytest.mark.unit
class TestServeCommand:
    def test_options_override_config(self, runner, monkeypatch):
        served = []
        monkeypatch.setattr(cli_module, "run_web_server", served.append)

        result = runner.invoke(
            cli,
            ["--log-level", "WARNING", "serve", "--port", "8123", "--num-stories", "10", "--host", "0.0.0.0"],
        )

        assert result.exit_code == 0, result.output
        (config,) = served
        assert config.web.port == 8123
        assert config.web.host == "0.0.0.0"
        assert config.fetcher.num_stories == 10

    def test_config_file_is_used(self, runner, monkeypatch, tmp_path):
        served = []
        monkeypatch.setattr(cli_module, "run_web_server", served.append)
        config_path = tmp_path / "quiethn.yaml"
        config_path.write_text("web:\n  port: 9999\nfetcher:\n  num_stories: 4\n")

        result = runner.invoke(cli, ["--config", str(config_path), "--log-level", "WARNING", "serve"])

        assert result.exit_code == 0, result.output
        assert served[0].web.port == 9999
        assert served[0].fetcher.num_stories == 4

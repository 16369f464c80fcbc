"""Command-line interface for quiethn."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import click
import structlog

from quiethn import __version__
from quiethn.config import Config, load_config
from quiethn.errors import StoryFetchError
from quiethn.hn import HNClient
from quiethn.observability import configure_logging
from quiethn.protocols import EnrichedItem
from quiethn.stories import fetch_top_stories
from quiethn.web import run_web_server

logger = structlog.get_logger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "-c", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level (overrides the configuration file)",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[str], log_level: Optional[str]) -> None:
    """quiethn - a quiet Hacker News front page."""
    ctx.ensure_object(dict)
    settings = load_config(Path(config) if config else None)
    if log_level:
        settings.monitoring.log_level = log_level
    configure_logging(settings.monitoring)
    ctx.obj["config"] = settings


@cli.command()
@click.option("--host", default=None, help="Interface to bind the web server to")
@click.option("--port", default=None, type=int, help="The port to start the web server on")
@click.option("--num-stories", default=None, type=click.IntRange(min=0), help="The number of top stories to display")
@click.pass_context
def serve(ctx: click.Context, host: Optional[str], port: Optional[int], num_stories: Optional[int]) -> None:
    """Serve the top stories as a web page."""
    settings: Config = ctx.obj["config"]
    if host is not None:
        settings.web.host = host
    if port is not None:
        settings.web.port = port
    if num_stories is not None:
        settings.fetcher.num_stories = num_stories

    logger.info("Starting web server", host=settings.web.host, port=settings.web.port)
    run_web_server(settings)


@cli.command()
@click.option("--num-stories", default=None, type=click.IntRange(min=0), help="The number of top stories to fetch")
@click.option("--json", "as_json", is_flag=True, help="Print stories as JSON")
@click.pass_context
def top(ctx: click.Context, num_stories: Optional[int], as_json: bool) -> None:
    """Fetch the top stories once and print them."""
    settings: Config = ctx.obj["config"]
    if num_stories is not None:
        settings.fetcher.num_stories = num_stories

    try:
        stories = asyncio.run(_fetch_once(settings))
    except StoryFetchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([story.to_dict() for story in stories], indent=2))
        return

    for rank, story in enumerate(stories, start=1):
        host = f" ({story.host})" if story.host else ""
        click.echo(f"{rank:>3}. {story.title}{host}")


async def _fetch_once(settings: Config) -> List[EnrichedItem]:
    async with HNClient(settings.hn) as client:
        return await fetch_top_stories(
            client,
            settings.fetcher.num_stories,
            deadline=settings.fetcher.deadline_seconds,
        )


def main() -> None:
    """Entry point for the ``quiethn`` console script."""
    cli(obj={})


if __name__ == "__main__":
    main()

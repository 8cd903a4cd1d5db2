"""
Command line entry point: build the site, curate articles, inspect state.
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from briefing.cache import TranslationCache
from briefing.errors import PersistenceError
from briefing.pipeline import BriefingPipeline
from briefing.settings import load_settings
from briefing.snapshot import set_curated
from briefing.status import build_status

logger = logging.getLogger("briefing")


@click.group()
@click.option("--env-file", default=".env", show_default=True, help="dotenv file loaded before settings.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, env_file: str, verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    load_dotenv(env_file)
    ctx.obj = load_settings()


@cli.command()
@click.option("--days", type=click.IntRange(min=1), default=None, help="Trailing window in days.")
@click.option("--top", "top_n", type=click.IntRange(min=1), default=None, help="Number of headlines.")
@click.option("--output", "output_dir", type=click.Path(file_okay=False, path_type=Path), default=None)
@click.option("--no-render", is_flag=True, help="Update data files only.")
@click.option("--report", is_flag=True, help="Print a JSON build report.")
@click.pass_obj
def build(settings, days: Optional[int], top_n: Optional[int], output_dir: Optional[Path], no_render: bool, report: bool):
    """Fetch feeds, translate, and write the static site."""
    settings = settings.with_overrides(days_to_keep=days, top_n=top_n, output_dir=output_dir)
    pipeline = BriefingPipeline(settings)
    try:
        result = pipeline.run(render=not no_render)
    except PersistenceError as exc:
        logger.error("Build failed: %s", exc)
        sys.exit(1)

    failed = [status.name for status in result.feeds if not status.healthy]
    if failed:
        logger.warning("Feeds without data this run: %s", ", ".join(failed))
    if report:
        cache = TranslationCache.load(settings.cache_path)
        click.echo(json.dumps(build_status(settings, cache, result), ensure_ascii=False, indent=2))


@cli.command()
@click.argument("link")
@click.option("--unset", is_flag=True, help="Remove the curated flag instead.")
@click.pass_obj
def curate(settings, link: str, unset: bool):
    """Mark a stored article as curated so it survives every rebuild."""
    try:
        article = set_curated(settings.snapshot_path, link, curated=not unset)
    except KeyError:
        raise click.ClickException(f"No stored article with link {link}")
    except PersistenceError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    state = "no longer curated" if unset else "curated"
    click.echo(f"{article.title} is {state}.")


@cli.command()
@click.pass_obj
def status(settings):
    """Print cache and configuration status as JSON."""
    cache = TranslationCache.load(settings.cache_path)
    click.echo(json.dumps(build_status(settings, cache), ensure_ascii=False, indent=2))


if __name__ == "__main__":  # pragma: no cover
    cli()

"""CLI entry point for reviewbot.

Commands:
  review   — post an AI review comment on a pull request
  init     — write .reviewbot.yml and a GitHub Actions workflow
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from reviewbot_cli.commands.init import init_cmd
from reviewbot_cli.commands.review import review_cmd

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
    )
    # PyGithub and urllib3 are chatty at DEBUG; keep them at WARNING.
    for noisy in ("github", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("reviewbot"),
    prog_name="reviewbot",
)
@click.option(
    "--config",
    "config_path",
    default=".reviewbot.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="REVIEWBOT_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-powered GitHub PR reviewer backed by Gemini."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(review_cmd)
main.add_command(init_cmd)

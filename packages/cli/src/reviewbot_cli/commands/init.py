"""init command — write .reviewbot.yml and a GitHub Actions workflow."""

from __future__ import annotations

import importlib.metadata
from pathlib import Path

import click
import yaml
from rich.console import Console

from reviewbot_core.config import DEFAULT_CONFIG

console = Console()

WORKFLOW_PATH = Path(".github/workflows/reviewbot.yml")

_WORKFLOW_TEMPLATE = """\
name: AI Code Review

on:
  pull_request:
    types: [opened, synchronize, reopened]

jobs:
  review:
    runs-on: ubuntu-latest
    permissions:
      contents: read
      pull-requests: write

    steps:
      - uses: actions/checkout@v4

      - name: Set up Python
        uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - name: Install reviewbot
        run: pip install "reviewbot=={version}"

      - name: Run AI review
        env:
          GITHUB_TOKEN: ${{{{ secrets.GITHUB_TOKEN }}}}
          GEMINI_API_KEY: ${{{{ secrets.GEMINI_API_KEY }}}}
        run: reviewbot review
"""


@click.command("init")
@click.option("--model", default=None, help="Gemini model name to write into .reviewbot.yml.")
@click.option("--yes", "-y", is_flag=True, help="Also write the workflow without asking.")
@click.pass_context
def init_cmd(ctx, model: str | None, yes: bool):
    """Set up reviewbot for a repository.

    Creates .reviewbot.yml and, optionally, a GitHub Actions workflow that
    reviews every pull request.
    """
    config_path = Path((ctx.obj or {}).get("config_path", ".reviewbot.yml"))

    if model is None:
        model = click.prompt("Gemini model", default=DEFAULT_CONFIG["model"])

    _write_config(config_path, {"model": model})
    console.print(f"[green]Created {config_path}[/green]")

    if yes or click.confirm(f"\nGenerate {WORKFLOW_PATH} for GitHub Actions?", default=True):
        _write_workflow()
        console.print(f"[green]Created {WORKFLOW_PATH}[/green]")
        console.print(
            "\n[yellow]Remember to add [bold]GEMINI_API_KEY[/bold] to your "
            "GitHub repository secrets (Settings → Secrets → Actions).[/yellow]"
        )

    console.print("\n[bold green]Setup complete![/bold green]")


def _write_config(path: Path, config: dict) -> None:
    """Write or update the config file, preserving any existing keys."""
    existing: dict = {}
    if path.exists():
        existing = yaml.safe_load(path.read_text()) or {}
    existing.update(config)
    existing.setdefault("exclude", [])
    path.write_text(yaml.dump(existing, default_flow_style=False, sort_keys=False))


def _get_version() -> str:
    try:
        return importlib.metadata.version("reviewbot")
    except importlib.metadata.PackageNotFoundError:
        return "0.1.0"


def _write_workflow() -> None:
    WORKFLOW_PATH.parent.mkdir(parents=True, exist_ok=True)
    WORKFLOW_PATH.write_text(_WORKFLOW_TEMPLATE.format(version=_get_version()))

"""review command — post an AI review comment on a pull request."""

from __future__ import annotations

import logging
import os

import click
from github import GithubException
from rich.console import Console

from reviewbot_core.config import load_config, resolve_credentials
from reviewbot_core.errors import ReviewBotError
from reviewbot_core.gh.event import load_pull_request_event
from reviewbot_core.gh.pull_request import get_pull_requests, get_repo
from reviewbot_core.reviewer import run_review

console = Console()
logger = logging.getLogger(__name__)


def _escape_annotation(message: str) -> str:
    # Workflow commands are line-based; % CR and LF must be percent-encoded.
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def report_failure(message: str, exc_info: bool = False) -> None:
    """Log a fatal error and, inside GitHub Actions, raise a workflow annotation."""
    logger.error("❌ Error: %s", message, exc_info=exc_info)
    if os.environ.get("GITHUB_ACTIONS") == "true":
        click.echo(f"::error::{_escape_annotation(message)}")


def _prompt_for_pr(this_repo) -> int | None:
    prs = list(get_pull_requests(this_repo))
    if not prs:
        console.print("[yellow]No open pull requests found.[/yellow]")
        return None
    console.print("\nOpen pull requests:")
    for pr in prs:
        console.print(f"  [bold]#{pr.number}[/bold]  {pr.title}")
    return click.prompt("\nEnter the pull request number", type=int)


def _review(
    config_path: str,
    repo: str | None,
    pr_number: int | None,
    gemini_api_key: str | None,
    model: str | None,
    shadow: bool,
) -> None:
    config = load_config(config_path, cli_overrides={"gemini_api_key": gemini_api_key, "model": model})

    _, github_token = resolve_credentials(config)

    this_repo = None
    if repo is None:
        event = load_pull_request_event()
        repo = event.repo
        if pr_number is None:
            pr_number = event.number
    elif pr_number is None:
        this_repo = get_repo(repo, token=github_token)
        pr_number = _prompt_for_pr(this_repo)
        if pr_number is None:
            return

    logger.info("Starting AI Code Review Bot...")
    summary = run_review(repo=repo, pr_number=pr_number, config=config, shadow=shadow, repo_obj=this_repo)
    if summary is not None:
        logger.info(
            "Reviewed %d/%d file(s), %d excluded.",
            len(summary.reviewed_files),
            summary.total_files,
            len(summary.excluded_files),
        )


@click.command("review")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to the Actions event.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Omit with --repo to pick from open PRs interactively.",
)
@click.option(
    "--gemini-api-key",
    "gemini_api_key",
    default=None,
    help="Gemini API key. Overrides INPUT_GEMINI_API_KEY and GEMINI_API_KEY.",
)
@click.option("--model", default=None, help="Gemini model name. Overrides config file.")
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the review comment without posting to GitHub.",
)
@click.pass_context
def review_cmd(
    ctx,
    repo: str | None,
    pr_number: int | None,
    gemini_api_key: str | None,
    model: str | None,
    shadow: bool,
):
    """Review a pull request with Gemini and post the result as a comment.

    Inside GitHub Actions the repository and PR number are read from the
    triggering pull_request event.

    \b
    Environment variables:
      GITHUB_TOKEN         GitHub token (or use gh CLI)
      GEMINI_API_KEY       Gemini API key (or pass --gemini-api-key)
    """
    config_path = (ctx.obj or {}).get("config_path", ".reviewbot.yml")
    try:
        _review(config_path, repo, pr_number, gemini_api_key, model, shadow)
    except (ReviewBotError, GithubException) as e:
        report_failure(str(e))
        ctx.exit(1)
    except (click.ClickException, click.Abort):
        raise
    except Exception as e:
        report_failure(str(e) or "Unknown error occurred", exc_info=True)
        ctx.exit(1)

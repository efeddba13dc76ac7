"""Core PR review orchestration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from rich.console import Console
from rich.markdown import Markdown

from reviewbot_core.config import validate_credentials
from reviewbot_core.gh.pull_request import get_diff, get_pull, get_repo, post_comment
from reviewbot_core.models import FileChange
from reviewbot_core.prompt import build_review_prompt, total_changes
from reviewbot_core.providers.gemini import GeminiReviewer
from reviewbot_core.utils.code import MAX_PATCH_CHARS, should_exclude_file

console = Console()
logger = logging.getLogger(__name__)

COMMENT_HEADER = "🤖 **AI Code Review**"


@dataclass
class ReviewSummary:
    """Result returned by run_review — what was reviewed and what was posted."""

    repo: str
    pr_number: int
    total_files: int
    reviewed_files: list[str] = field(default_factory=list)
    excluded_files: list[str] = field(default_factory=list)
    total_changes: int = 0
    body: str = ""
    posted: bool = False
    reviewed_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


def _get_reviewer(config: dict) -> GeminiReviewer:
    return GeminiReviewer(api_key=config["gemini_api_key"], model=config.get("model"))


def filter_files(files: list[FileChange], config: dict) -> tuple[list[FileChange], list[FileChange]]:
    """Split ``files`` into (to_review, excluded), preserving order."""
    extra_patterns = config.get("exclude") or []
    max_chars = config.get("max_patch_chars", MAX_PATCH_CHARS)

    to_review: list[FileChange] = []
    excluded: list[FileChange] = []
    for file in files:
        if should_exclude_file(file.filename, file.patch, extra_patterns, max_chars):
            excluded.append(file)
        else:
            to_review.append(file)
    return to_review, excluded


def build_comment_body(reviewed: list[FileChange], total_files: int, review_text: str) -> str:
    """Prefix the model's review with the fixed summary block."""
    summary = (
        "**📊 Review Summary:**\n"
        f"- Files reviewed: {len(reviewed)}/{total_files}\n"
        f"- Total changes: {total_changes(reviewed)} lines\n"
        f"- Files excluded: {total_files - len(reviewed)} (large files, lock files, etc.)\n"
        "\n"
    )
    return f"{COMMENT_HEADER}\n\n{summary}{review_text}"


def print_shadow_comment(body: str) -> None:
    """Print the comment to the terminal without posting to GitHub."""
    console.print("\n[bold]Shadow review — comment not posted[/bold]\n")
    console.print(Markdown(body))


def run_review(
    repo: str,
    pr_number: int,
    config: dict,
    shadow: bool = False,
    repo_obj=None,
) -> ReviewSummary | None:
    """Run the full PR review pipeline and return a ReviewSummary.

    Returns None when every changed file was filtered out; nothing is sent to
    the model and nothing is posted in that case. Any failure propagates and
    no comment is posted.
    """
    _, github_token = validate_credentials(config)
    logger.info("Input validation passed")

    this_repo = repo_obj if repo_obj is not None else get_repo(repo, token=github_token)
    this_pr = get_pull(this_repo, pr_number)
    logger.info('Reviewing PR #%d: "%s"', pr_number, this_pr.title)

    console.print("Fetching changed files...")
    files = get_diff(this_pr)

    to_review, excluded = filter_files(files, config)
    for file in excluded:
        console.print(f"  Skipping: {file.filename}")

    logger.info("Found %d changed files, reviewing %d files", len(files), len(to_review))

    if not to_review:
        logger.info("No files to review (all files were filtered out)")
        return None

    prompt = build_review_prompt(to_review, this_pr.title, this_pr.body)

    reviewer = _get_reviewer(config)
    console.print(f"Getting AI review from {reviewer.PROVIDER_NAME} ({reviewer.model})...")
    review_text = reviewer.review(prompt)

    body = build_comment_body(to_review, len(files), review_text)
    summary = ReviewSummary(
        repo=repo,
        pr_number=pr_number,
        total_files=len(files),
        reviewed_files=[f.filename for f in to_review],
        excluded_files=[f.filename for f in excluded],
        total_changes=total_changes(to_review),
        body=body,
    )

    if shadow:
        print_shadow_comment(body)
        return summary

    console.print("Posting review comment...")
    post_comment(this_pr, body)
    summary.posted = True
    console.print("[green]Review posted successfully![/green]")
    return summary

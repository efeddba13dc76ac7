from __future__ import annotations

from github import Github, GithubException

from reviewbot_core.errors import UpstreamAPIError
from reviewbot_core.models import FileChange


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    try:
        return repo.get_pull(pr_number)
    except GithubException as e:
        raise UpstreamAPIError(
            f"PR #{pr_number} not found in {repo.full_name}.", status=e.status, body=str(e.data)
        ) from e


def get_pull_requests(repo, state: str = "open"):
    return repo.get_pulls(state=state)


def get_diff(pr) -> list[FileChange]:
    """Return the PR's changed files in the order GitHub lists them."""
    return [FileChange.from_github(f) for f in pr.get_files()]


def post_comment(pr, body: str) -> None:
    """Post ``body`` as a conversation comment (not an inline review) on the PR."""
    pr.create_issue_comment(body)

"""Pull request context from a GitHub Actions run.

Actions writes the triggering webhook payload to the file named by
GITHUB_EVENT_PATH and the "owner/name" slug to GITHUB_REPOSITORY.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from reviewbot_core.errors import ConfigurationError


@dataclass
class PullRequestEvent:
    repo: str
    number: int
    title: str | None = None
    body: str | None = None


def load_pull_request_event(event_path: str | None = None, repository: str | None = None) -> PullRequestEvent:
    event_path = event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        raise ConfigurationError(
            "GITHUB_EVENT_PATH is not set. Pass --repo and --pr when running outside GitHub Actions."
        )

    payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    pull_request = payload.get("pull_request")
    if not pull_request:
        raise ConfigurationError("This action only runs on pull_request events.")

    repo = repository or os.environ.get("GITHUB_REPOSITORY") or payload.get("repository", {}).get("full_name")
    if not repo:
        raise ConfigurationError("Could not determine the repository. Set GITHUB_REPOSITORY or pass --repo.")

    return PullRequestEvent(
        repo=repo,
        number=int(pull_request["number"]),
        title=pull_request.get("title"),
        body=pull_request.get("body"),
    )

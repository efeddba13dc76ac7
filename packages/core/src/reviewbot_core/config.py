import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

import yaml

from reviewbot_core.errors import ConfigurationError
from reviewbot_core.utils.code import MAX_PATCH_CHARS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict = {
    "model": "gemini-1.5-flash",
    "max_patch_chars": MAX_PATCH_CHARS,
    "exclude": [],  # extra fnmatch patterns or directory names, on top of the built-in list
}


def load_config(config_path: str = ".reviewbot.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .reviewbot.yml in the current directory
      3. Credentials from the environment
      4. CLI argument overrides (None values are ignored)
    """
    config = {**DEFAULT_CONFIG, "exclude": list(DEFAULT_CONFIG["exclude"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    # Resolve credentials from environment variables. INPUT_GEMINI_API_KEY is
    # how GitHub Actions exposes the `gemini_api_key` action input.
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["gemini_api_key"] = os.environ.get("INPUT_GEMINI_API_KEY") or os.environ.get("GEMINI_API_KEY")

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def validate_credentials(config: dict) -> tuple[str, str]:
    """Return ``(gemini_api_key, github_token)`` or raise ConfigurationError."""
    gemini_key = config.get("gemini_api_key")
    github_token = config.get("github_token")

    if not gemini_key:
        raise ConfigurationError(
            "Gemini API key is missing. Please provide it via 'gemini_api_key' input "
            "or 'GEMINI_API_KEY' environment variable."
        )
    if not github_token:
        raise ConfigurationError(
            "GitHub token is missing. This should be automatically provided by GitHub Actions."
        )

    return gemini_key, github_token


def gh_cli_token() -> Optional[str]:
    """Return the token of the local `gh auth login` session, or None."""
    try:
        result = subprocess.run(["gh", "auth", "token"], capture_output=True, text=True, timeout=5)
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("gh CLI unavailable; no fallback GitHub token.")
        return None

    token = result.stdout.strip() if result.returncode == 0 else ""
    return token or None


def resolve_credentials(config: dict) -> tuple[str, str]:
    """Fill a missing GitHub token from the gh CLI, then validate both credentials.

    Inside GitHub Actions the token must come from the workflow, so the gh
    fallback is only tried on a developer machine.
    """
    if not config.get("github_token") and os.environ.get("GITHUB_ACTIONS") != "true":
        config["github_token"] = gh_cli_token()
    return validate_credentials(config)

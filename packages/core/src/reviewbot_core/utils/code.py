from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

# Matched anywhere in the path: lock files, bundled/minified assets, vendored
# dependencies, VCS metadata, OS artifacts and temp/log files.
EXCLUDED_FILE_PATTERNS = [
    re.compile(r"\.lock$"),
    re.compile(r"package-lock\.json$"),
    re.compile(r"yarn\.lock$"),
    re.compile(r"pnpm-lock\.yaml$"),
    re.compile(r"\.min\.(js|css)$"),
    re.compile(r"\.bundle\.(js|css)$"),
    re.compile(r"node_modules"),
    re.compile(r"\.git"),
    re.compile(r"\.DS_Store$"),
    re.compile(r"\.log$"),
    re.compile(r"\.tmp$"),
    re.compile(r"\.temp$"),
]

# Patches longer than this many characters are left out of the prompt.
MAX_PATCH_CHARS = 50_000


def matches_exclude_pattern(filename: str, patterns: Iterable[str]) -> bool:
    """Return True if filename matches any user-configured exclude pattern.

    Supports:
    - fnmatch globs on the full path: "src/generated/*.py"
    - fnmatch globs on the basename: "*.snap", "*.pb.go"
    - Directory names/prefixes: "migrations/", "vendor" (matches any file within that tree)
    """
    for pattern in patterns:
        if fnmatch.fnmatch(filename, pattern):
            return True
        if fnmatch.fnmatch(filename.rsplit("/", 1)[-1], pattern):
            return True
        prefix = pattern.rstrip("/") + "/"
        if filename.startswith(prefix) or ("/" + prefix) in filename:
            return True
    return False


def should_exclude_file(
    filename: str,
    patch: str | None = None,
    extra_patterns: Iterable[str] = (),
    max_chars: int = MAX_PATCH_CHARS,
) -> bool:
    if any(pattern.search(filename) for pattern in EXCLUDED_FILE_PATTERNS):
        return True
    if matches_exclude_pattern(filename, extra_patterns):
        return True

    if patch and len(patch) > max_chars:
        logger.info("Skipping large file: %s (%d characters)", filename, len(patch))
        return True

    return False

"""Prompt assembly for a whole-PR review.

The prompt is a pure function of its inputs: the same files, title and
description always produce byte-identical text.
"""

from __future__ import annotations

from collections.abc import Sequence

from reviewbot_core.models import FileChange

_CLOSING_INSTRUCTIONS = """Please provide a comprehensive review covering:
- Overall assessment of the changes
- Specific issues or concerns
- Suggestions for improvement
- Security considerations (if any)
- Performance implications (if any)

Format your response in a clear, structured way that will be helpful for the developer."""


def total_changes(files: Sequence[FileChange]) -> int:
    return sum(f.changes for f in files)


def _build_header(files: Sequence[FileChange], pr_title: str | None, pr_body: str | None) -> str:
    return f"""You are an expert code reviewer with extensive experience in software development. Please review the following pull request changes and provide constructive, actionable feedback.

**Pull Request Context:**
- Title: {pr_title or 'No title provided'}
- Description: {pr_body or 'No description provided'}
- Files changed: {len(files)}
- Total changes: {total_changes(files)} lines

**Review Guidelines:**
1. Focus on code quality, security, performance, and maintainability
2. Identify potential bugs, edge cases, and improvements
3. Check for proper error handling and validation
4. Ensure code follows best practices and conventions
5. Suggest specific improvements with clear explanations
6. Be constructive and professional in your feedback

**Code Changes to Review:**

"""  # noqa: E501


def _build_file_section(index: int, file: FileChange) -> str:
    status = getattr(file.status, "value", file.status)
    return f"""**File {index}: {file.filename}** ({status}, +{file.additions}/-{file.deletions})
```diff
{file.patch}
```

"""


def build_review_prompt(
    files: Sequence[FileChange],
    pr_title: str | None = None,
    pr_body: str | None = None,
) -> str:
    """Build the single prompt sent to the model for the filtered file list.

    Files without a patch (binary files, diffs GitHub declined to render) are
    counted in the header but get no diff section. Numbering follows the
    position in ``files`` so gaps show where such files were.
    """
    parts = [_build_header(files, pr_title, pr_body)]
    for index, file in enumerate(files, 1):
        if file.patch:
            parts.append(_build_file_section(index, file))
    parts.append(_CLOSING_INSTRUCTIONS)
    return "".join(parts)

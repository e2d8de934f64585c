"""Whitespace check: git's own diff --check over the staged changes."""

from __future__ import annotations

from .constants import STAGE_WHITESPACE
from .errors import CheckFailed
from .git import Git
from .ui import Reporter


def check_whitespace(git: Git, against: str, reporter: Reporter) -> None:
    """Raise CheckFailed if git diff-index --check reports problems in the index."""
    r = git.run(["diff-index", "--check", "--cached", against, "--"], check=False)
    if r.returncode == 0:
        return
    reporter.forward(r.stdout)
    reporter.forward(r.stderr)
    reporter.error("Error: whitespace errors found in the staged changes.")
    raise CheckFailed(STAGE_WHITESPACE)

"""Lint check: flake8 over staged Python files."""

from __future__ import annotations

import logging
import subprocess
from typing import Iterable, List

from .config import HookConfig
from .constants import EXIT_LINT_FAILED, PYTHON_EXTENSION, STAGE_LINT
from .errors import LintFailed, ToolUnavailableError
from .formatting import resolve_tool
from .git import Git, decode_path
from .ui import Reporter

logger = logging.getLogger(__name__)


def python_files(paths: Iterable[str]) -> List[str]:
    return [p for p in paths if p.endswith(PYTHON_EXTENSION)]


def check_lint(git: Git, against: str, config: HookConfig, reporter: Reporter) -> None:
    """Run the linter on added/copied/modified .py files; raise LintFailed on a non-zero exit."""
    files = python_files(decode_path(p) for p in git.staged_paths(against, "ACM"))
    if not files:
        logger.debug("no staged Python files, linter not run")
        return
    exe = resolve_tool(config.linter)
    if not exe:
        raise ToolUnavailableError(
            f"{config.linter} not found; install it or set hooks.flake8.path", EXIT_LINT_FAILED
        )
    r = subprocess.run([exe, "--", *files], cwd=git.cwd, capture_output=True)
    if r.returncode == 0:
        return
    reporter.forward(r.stdout)
    reporter.forward(r.stderr)
    reporter.error("Error: flake8 reported problems in the staged Python files.")
    raise LintFailed(STAGE_LINT)

"""Hook runner: preconditions, then every stage inside the stash guard."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import HookConfig, load_hook_config
from .constants import EXIT_CHECK_FAILED, EXIT_OK, STAGE_FILENAMES, STAGE_FORMAT, STAGE_LINT, STAGE_WHITESPACE
from .errors import CheckFailed, GateError, StashRestoreError
from .filenames import check_filenames
from .formatting import check_formatter, verify_format
from .git import Git
from .lint import check_lint
from .stash import StashGuard
from .ui import Reporter
from .whitespace import check_whitespace

logger = logging.getLogger(__name__)


def run_stages(
    git: Git,
    against: str,
    config: HookConfig,
    reporter: Reporter,
    formatter: Optional[str] = None,
    tmpdir: Optional[str] = None,
) -> None:
    """Run the enabled stages in order; the first failure raises."""
    if config.stage_enabled(STAGE_FILENAMES):
        check_filenames(git, against, config, reporter)
    if config.stage_enabled(STAGE_WHITESPACE):
        check_whitespace(git, against, reporter)
    if config.stage_enabled(STAGE_FORMAT):
        verify_format(git, against, config, reporter, exe=formatter, tmpdir=tmpdir)
    if config.stage_enabled(STAGE_LINT):
        check_lint(git, against, config, reporter)


def run_hook(
    path: str | Path = ".",
    config: Optional[HookConfig] = None,
    reporter: Optional[Reporter] = None,
    tmpdir: Optional[str] = None,
) -> int:
    """Run the pre-commit checks for the repository containing path. Return the exit code."""
    reporter = reporter or Reporter()
    code = EXIT_OK
    try:
        git = Git(Git(path).toplevel())
        config = config or load_hook_config(git)
        formatter = check_formatter(config) if config.stage_enabled(STAGE_FORMAT) else None
        against = git.against()
        logger.debug("comparing index against %s", against)
        with StashGuard(git, reporter):
            try:
                run_stages(git, against, config, reporter, formatter=formatter, tmpdir=tmpdir)
            except GateError as e:
                if not isinstance(e, CheckFailed):
                    reporter.error(f"Error: {e}")
                code = e.exit_code
    except StashRestoreError as e:
        reporter.error(f"Error: {e}")
        if code == EXIT_OK:
            code = EXIT_CHECK_FAILED
    except GateError as e:
        reporter.error(f"Error: {e}")
        code = e.exit_code
    return code

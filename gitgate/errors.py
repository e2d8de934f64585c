"""Custom exceptions for gitgate."""

from __future__ import annotations

from typing import Sequence

from .constants import EXIT_CHECK_FAILED, EXIT_LINT_FAILED


class GateError(Exception):
    """Base exception for gitgate. exit_code is what the hook exits with."""

    exit_code = EXIT_CHECK_FAILED


class NotARepositoryError(GateError):
    """Raised when not inside a git work tree."""

    pass


class GitCommandError(GateError):
    """Raised when a git command that must succeed exits non-zero."""

    def __init__(self, args: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command = list(args)
        self.returncode = returncode
        self.stderr = stderr.strip()
        msg = f"git {' '.join(self.command)} failed with exit code {returncode}"
        if self.stderr:
            msg += f": {self.stderr}"
        super().__init__(msg)


class InvalidConfigKeyError(GateError):
    """Raised when a config key is invalid (e.g. not section.option)."""

    pass


class ConfigError(GateError):
    """Raised when a config value cannot be interpreted."""

    pass


class ToolUnavailableError(GateError):
    """Raised when an external tool is missing or not executable."""

    def __init__(self, message: str, exit_code: int = EXIT_CHECK_FAILED) -> None:
        super().__init__(message)
        self.exit_code = exit_code


class ToolVersionError(GateError):
    """Raised when the formatter reports a version other than the required one."""

    pass


class CheckFailed(GateError):
    """Raised when a stage rejects the commit. The message has already been reported."""

    def __init__(self, stage: str, exit_code: int = EXIT_CHECK_FAILED) -> None:
        super().__init__(f"{stage} check failed")
        self.stage = stage
        self.exit_code = exit_code


class LintFailed(CheckFailed):
    """Raised when the linter rejects staged Python files."""

    def __init__(self, stage: str) -> None:
        super().__init__(stage, EXIT_LINT_FAILED)


class StashRestoreError(GateError):
    """Raised when stashed unstaged changes could not be popped back."""

    pass


class UnstashableChangesError(GateError):
    """Raised when unstaged changes exist but cannot be stashed (no commit yet)."""

    pass

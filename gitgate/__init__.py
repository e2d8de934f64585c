"""gitgate: a git pre-commit hook (ASCII file names, whitespace, clang-format, flake8)."""

from .errors import GateError, NotARepositoryError
from .hook import run_hook

__all__ = ["run_hook", "GateError", "NotARepositoryError"]

"""Filename check: reject added paths outside printable ASCII."""

from __future__ import annotations

from typing import Iterable, List

from .config import HookConfig
from .constants import ASCII_MAX, ASCII_MIN, STAGE_FILENAMES
from .errors import CheckFailed
from .git import Git, decode_path
from .ui import Reporter

NON_ASCII_MESSAGE = """\
Error: Attempt to add a non-ASCII file name.

This can cause problems if you want to work with people on other platforms.

To be portable it is advisable to rename the file.

If you know what you are doing you can disable this check using:

  git config hooks.allownonascii true
"""


def is_printable_ascii(raw: bytes) -> bool:
    """True if every byte is between space and tilde."""
    return all(ASCII_MIN <= b <= ASCII_MAX for b in raw)


def non_ascii_paths(paths: Iterable[bytes]) -> List[bytes]:
    return [p for p in paths if not is_printable_ascii(p)]


def check_filenames(git: Git, against: str, config: HookConfig, reporter: Reporter) -> None:
    """Raise CheckFailed if a staged addition has a non-ASCII name and hooks.allownonascii is off."""
    if config.allow_non_ascii:
        return
    bad = non_ascii_paths(git.staged_paths(against, "A"))
    if not bad:
        return
    reporter.error(NON_ASCII_MESSAGE)
    for raw in bad:
        reporter.info(f"  {decode_path(raw)!r}")
    raise CheckFailed(STAGE_FILENAMES)

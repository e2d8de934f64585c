"""StashGuard: set unstaged changes aside while the checks run, restore them afterwards."""

from __future__ import annotations

import logging
from typing import List, Optional

from .constants import STASH_MESSAGE
from .errors import StashRestoreError, UnstashableChangesError
from .git import Git
from .ui import Reporter

logger = logging.getLogger(__name__)


class StashGuard:
    """
    Context manager around `git stash --keep-index`.

    On entry, unstaged modifications to tracked files are stashed so the checks
    see exactly the staged index. On exit, whatever the outcome, the tree is
    hard-reset and the stash is popped back with its index; files marked
    skip-worktree keep the mark. A failed pop raises StashRestoreError and
    leaves the entry in `git stash list`.
    """

    def __init__(self, git: Git, reporter: Optional[Reporter] = None, message: str = STASH_MESSAGE) -> None:
        self.git = git
        self.reporter = reporter or Reporter()
        self.message = message
        self.stashed = False

    def acquire(self) -> bool:
        """
        Stash unstaged changes if there are any. Return True if a stash was created.

        Raises UnstashableChangesError when the tree is dirty before the first commit,
        since the checks would otherwise read unstaged content.
        """
        if not self.git.is_dirty():
            return False
        if not self.git.has_head():
            raise UnstashableChangesError(
                "unstaged changes cannot be set aside before the first commit; "
                "stage or discard them (git add / git checkout -- <file>) and commit again"
            )
        logger.debug("stashing unstaged changes")
        self.git.run(["stash", "push", "-q", "--keep-index", "-m", self.message])
        self.stashed = True
        return True

    def release(self) -> None:
        """Restore the stash created by acquire(). Does nothing the second time."""
        if not self.stashed:
            return
        self.stashed = False
        logger.debug("restoring stashed changes")
        self.git.run(["reset", "-q", "--hard"])
        skipped = self.git.skip_worktree_files()
        r = self.git.run(["stash", "pop", "-q", "--index"], check=False)
        if r.returncode != 0:
            self.reporter.forward(r.stderr)
            raise StashRestoreError(
                "could not restore unstaged changes; they are still saved in "
                "`git stash list` (apply them with `git stash pop --index`)"
            )
        self._mark_skip_worktree(skipped)

    def _mark_skip_worktree(self, paths: List[bytes]) -> None:
        if not paths:
            return
        self.git.run(["update-index", "-q", "--skip-worktree", "-z", "--stdin"], input=b"\0".join(paths) + b"\0")

    def __enter__(self) -> "StashGuard":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

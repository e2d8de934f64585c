"""Git: run the system git in a work tree and parse the plumbing output the checks need."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from .constants import EMPTY_TREE, HEAD
from .errors import GitCommandError, NotARepositoryError, ToolUnavailableError

logger = logging.getLogger(__name__)


def split_z(data: bytes) -> List[bytes]:
    """Split NUL-terminated -z output into raw paths (drops the trailing empty field)."""
    return [p for p in data.split(b"\0") if p]


def decode_path(raw: bytes) -> str:
    """Decode a raw path the way Python decodes file names (undecodable bytes survive)."""
    return os.fsdecode(raw)


class Git:
    """System git bound to one work tree."""

    def __init__(self, cwd: str | Path = ".", git_exe: Optional[str] = None) -> None:
        self.cwd = Path(cwd).resolve()
        self._git = git_exe or shutil.which("git")
        if not self._git:
            raise ToolUnavailableError("git not found")

    def run(
        self,
        args: Sequence[str],
        check: bool = True,
        input: Optional[bytes] = None,
    ) -> subprocess.CompletedProcess:
        """Run git with args. Output is captured as bytes. Raises GitCommandError if check and non-zero."""
        full = [self._git] + list(args)
        logger.debug("run: %s (cwd=%s)", " ".join(full), self.cwd)
        r = subprocess.run(full, cwd=self.cwd, capture_output=True, input=input)
        logger.debug("exit %d", r.returncode)
        if check and r.returncode != 0:
            raise GitCommandError(args, r.returncode, r.stderr.decode("utf-8", errors="replace"))
        return r

    def output(self, args: Sequence[str]) -> str:
        """Run git and return stdout as text with the trailing newline stripped."""
        return self.run(args).stdout.decode("utf-8", errors="replace").rstrip("\n")

    def succeeds(self, args: Sequence[str]) -> bool:
        """Run git and return True if it exits 0."""
        return self.run(args, check=False).returncode == 0

    # --- repository -------------------------------------------------------

    def toplevel(self) -> Path:
        """Return the root of the work tree. Raises NotARepositoryError outside one."""
        r = self.run(["rev-parse", "--show-toplevel"], check=False)
        if r.returncode != 0:
            raise NotARepositoryError("not a git repository")
        return Path(r.stdout.decode("utf-8", errors="replace").strip())

    def git_path(self, name: str) -> Path:
        """Resolve a path inside the git dir (honours worktrees and core.hooksPath)."""
        p = Path(self.output(["rev-parse", "--git-path", name]))
        return p if p.is_absolute() else self.cwd / p

    def has_head(self) -> bool:
        return self.succeeds(["rev-parse", "--verify", "-q", HEAD])

    def against(self) -> str:
        """Comparison target for staged changes: HEAD, or the empty tree before the first commit."""
        return HEAD if self.has_head() else EMPTY_TREE

    def short_head(self) -> Optional[str]:
        if not self.has_head():
            return None
        return self.output(["rev-parse", "--short", HEAD])

    # --- staged changes ----------------------------------------------------

    def staged_paths(self, against: str, diff_filter: str) -> List[bytes]:
        """Raw paths of staged changes vs against, restricted by --diff-filter letters."""
        r = self.run(
            ["diff-index", "--cached", "--name-only", "-z", f"--diff-filter={diff_filter}", against, "--"]
        )
        return split_z(r.stdout)

    def is_dirty(self) -> bool:
        """True if the work tree has unstaged modifications to tracked files."""
        return not self.succeeds(["diff", "--quiet"])

    def skip_worktree_files(self) -> List[bytes]:
        """Raw paths currently marked skip-worktree (tag 'S' in ls-files -v)."""
        r = self.run(["ls-files", "-v", "-z"])
        return [entry[2:] for entry in split_z(r.stdout) if entry[:2] == b"S "]

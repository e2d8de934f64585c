"""Tests for StashGuard: unstaged changes set aside during the checks and restored afterwards."""

import subprocess
import unittest

from gitfixtures import GitRepoTestCase

from gitgate.errors import StashRestoreError, UnstashableChangesError
from gitgate.stash import StashGuard


class TestStashGuard(GitRepoTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.stage("a.txt", "one\n")
        self.stage("b.txt", "bee\n")
        self.commit("first")

    def test_clean_tree_creates_no_stash(self) -> None:
        guard = StashGuard(self.repo, self.reporter)
        with guard:
            self.assertFalse(guard.stashed)
            self.assertEqual(self.stash_count(), 0)
        self.assertEqual(self.stash_count(), 0)

    def test_staged_only_changes_are_not_stashed(self) -> None:
        self.stage("a.txt", "two\n")
        with StashGuard(self.repo, self.reporter) as guard:
            self.assertFalse(guard.stashed)
        self.assertEqual(self.git_out("diff", "--cached", "--name-only").split(), ["a.txt"])

    def test_unstaged_changes_hidden_then_restored(self) -> None:
        self.stage("a.txt", "staged\n")
        self.write("a.txt", "staged\nunstaged\n")
        diff_before = self.git_out("diff")
        cached_before = self.git_out("diff", "--cached")
        with StashGuard(self.repo, self.reporter) as guard:
            self.assertTrue(guard.stashed)
            self.assertEqual((self.tmp / "a.txt").read_text(), "staged\n")
            self.assertEqual(self.stash_count(), 1)
        self.assertEqual((self.tmp / "a.txt").read_text(), "staged\nunstaged\n")
        self.assertEqual(self.git_out("diff"), diff_before)
        self.assertEqual(self.git_out("diff", "--cached"), cached_before)
        self.assertEqual(self.stash_count(), 0)

    def test_restored_when_body_raises(self) -> None:
        self.write("b.txt", "changed\n")
        with self.assertRaises(RuntimeError):
            with StashGuard(self.repo, self.reporter):
                self.assertEqual((self.tmp / "b.txt").read_text(), "bee\n")
                raise RuntimeError("stage blew up")
        self.assertEqual((self.tmp / "b.txt").read_text(), "changed\n")
        self.assertEqual(self.stash_count(), 0)

    def test_release_runs_once(self) -> None:
        self.write("b.txt", "changed\n")
        guard = StashGuard(self.repo, self.reporter)
        self.assertTrue(guard.acquire())
        guard.release()
        guard.release()
        self.assertEqual((self.tmp / "b.txt").read_text(), "changed\n")

    def test_skip_worktree_marker_preserved(self) -> None:
        self.git("update-index", "--skip-worktree", "a.txt")
        self.write("b.txt", "changed\n")
        with StashGuard(self.repo, self.reporter) as guard:
            self.assertTrue(guard.stashed)
        self.assertTrue(self.git_out("ls-files", "-v", "a.txt").startswith("S "))
        self.assertEqual((self.tmp / "b.txt").read_text(), "changed\n")

    def test_failed_pop_keeps_stash_and_raises(self) -> None:
        self.write("b.txt", "changed\n")
        guard = StashGuard(self.repo, self.reporter)
        guard.acquire()
        real_run = self.repo.run

        def run(args, check=True, input=None):
            if list(args[:2]) == ["stash", "pop"]:
                return subprocess.CompletedProcess(args, 1, b"", b"CONFLICT (content)\n")
            return real_run(args, check=check, input=input)

        self.repo.run = run
        with self.assertRaises(StashRestoreError):
            guard.release()
        self.assertEqual(self.stash_count(), 1)
        self.assertIn("CONFLICT", self.out.getvalue())
        self.repo.run = real_run
        self.git("stash", "pop", "--index")
        self.assertEqual((self.tmp / "b.txt").read_text(), "changed\n")

    def test_no_head_with_unstaged_changes_refuses(self) -> None:
        self.git("update-ref", "-d", "HEAD")
        self.write("a.txt", "changed\n")
        guard = StashGuard(self.repo, self.reporter)
        with self.assertRaises(UnstashableChangesError):
            guard.acquire()
        self.assertFalse(guard.stashed)
        self.assertEqual((self.tmp / "a.txt").read_text(), "changed\n")

    def test_no_head_clean_tree_is_fine(self) -> None:
        self.git("update-ref", "-d", "HEAD")
        with StashGuard(self.repo, self.reporter) as guard:
            self.assertFalse(guard.stashed)


if __name__ == "__main__":
    unittest.main()

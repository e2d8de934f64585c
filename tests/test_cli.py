"""Tests for the CLI: install / uninstall of the pre-commit hook."""

import io
import os
import sys
import unittest
from contextlib import redirect_stderr

from gitfixtures import GitRepoTestCase

from gitgate.cli import hook_script, main
from gitgate.constants import HOOK_MARKER


class TestHookScript(unittest.TestCase):
    def test_script_execs_interpreter(self) -> None:
        text = hook_script("/opt/py 3/bin/python")
        self.assertTrue(text.startswith("#!/bin/sh\n"))
        self.assertIn(HOOK_MARKER, text)
        self.assertIn("exec '/opt/py 3/bin/python' -m gitgate run", text)


class TestInstall(GitRepoTestCase):
    def setUp(self) -> None:
        super().setUp()
        old = os.getcwd()
        os.chdir(self.tmp)
        self.addCleanup(os.chdir, old)
        self.hook = self.tmp / ".git" / "hooks" / "pre-commit"

    def cli(self, *argv: str) -> int:
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["--no-color", *argv])
        self.stderr = err.getvalue()
        return code

    def test_install_writes_executable_hook(self) -> None:
        self.assertEqual(self.cli("install"), 0)
        self.assertTrue(self.hook.exists())
        self.assertTrue(os.access(self.hook, os.X_OK))
        self.assertIn(sys.executable, self.hook.read_text())
        self.assertIn("Installed pre-commit hook", self.stderr)

    def test_install_twice_is_fine(self) -> None:
        self.assertEqual(self.cli("install"), 0)
        self.assertEqual(self.cli("install", "--python", "/usr/bin/python3"), 0)
        self.assertIn("/usr/bin/python3", self.hook.read_text())

    def test_foreign_hook_needs_force(self) -> None:
        self.hook.parent.mkdir(parents=True, exist_ok=True)
        self.hook.write_text("#!/bin/sh\nexit 0\n")
        self.assertEqual(self.cli("install"), 1)
        self.assertIn("--force", self.stderr)
        self.assertEqual(self.hook.read_text(), "#!/bin/sh\nexit 0\n")
        self.assertEqual(self.cli("install", "--force"), 0)
        self.assertIn(HOOK_MARKER, self.hook.read_text())

    def test_uninstall(self) -> None:
        self.assertEqual(self.cli("uninstall"), 0)
        self.assertIn("No pre-commit hook installed", self.stderr)
        self.cli("install")
        self.assertEqual(self.cli("uninstall"), 0)
        self.assertFalse(self.hook.exists())

    def test_uninstall_leaves_foreign_hook(self) -> None:
        self.hook.parent.mkdir(parents=True, exist_ok=True)
        self.hook.write_text("#!/bin/sh\nexit 0\n")
        self.assertEqual(self.cli("uninstall"), 1)
        self.assertTrue(self.hook.exists())

    def test_outside_repository(self) -> None:
        os.chdir(self.patch_dir)
        self.assertEqual(self.cli("install"), 1)
        self.assertIn("not a git repository", self.stderr)


if __name__ == "__main__":
    unittest.main()

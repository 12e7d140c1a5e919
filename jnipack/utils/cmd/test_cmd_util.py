#!/usr/bin/env python3
"""
Tests for command execution.

Run with: python3 -m pytest jnipack/utils/cmd/test_cmd_util.py
"""

import os
import tempfile
import unittest

from jnipack.utils.cmd.cmd_util import exec_command


class TestExecCommand(unittest.TestCase):
    """Test exec_command."""

    def test_missing_executable_returns_error_code(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = os.path.join(temp_dir, "no-such-llvm-strip")

            err_code, output = exec_command([missing, "--version"])

        self.assertEqual(err_code, 127)
        self.assertIn("no-such-llvm-strip", output)


if __name__ == "__main__":
    unittest.main()

#!/usr/bin/env python3
"""
Tests for archive writing helpers.

Run with: python3 -m pytest jnipack/build_scripts/test_build_utils.py
"""

import os
import tempfile
import unittest
import zipfile
from unittest.mock import patch

from jnipack.build_scripts.build_utils import (
    ARCHIVE_FIXED_DATE_TIME,
    PackagingError,
    build_jar_manifest,
    collect_files,
    empty_jar_bytes,
    expand_env,
    get_ndk_host_tag,
    to_arc_path,
    write_archive,
)


def _write(path, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


class TestCollectFiles(unittest.TestCase):
    """Test directory walking."""

    def test_sorted_relative_paths(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            _write(os.path.join(temp_dir, "x86_64", "libb.so"), b"b")
            _write(os.path.join(temp_dir, "arm64-v8a", "liba.so"), b"a")
            _write(os.path.join(temp_dir, "arm64-v8a", "sub", "libc.so"), b"c")

            files = collect_files(temp_dir)

            self.assertEqual(
                [rel for rel, _ in files],
                ["arm64-v8a/liba.so", "arm64-v8a/sub/libc.so", "x86_64/libb.so"],
            )
            self.assertTrue(all(os.path.isabs(path) for _, path in files))

    def test_empty_directory(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            self.assertEqual(collect_files(temp_dir), [])

    def test_symlinked_directory_is_followed(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            _write(os.path.join(temp_dir, "out", "arm64", "libx.so"), b"x")
            root = os.path.join(temp_dir, "native")
            os.makedirs(root)
            os.symlink(os.path.join(temp_dir, "out", "arm64"), os.path.join(root, "arm64-v8a"))

            files = collect_files(root)

            self.assertEqual([rel for rel, _ in files], ["arm64-v8a/libx.so"])

    def test_symlink_loop_is_walked_once(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            _write(os.path.join(temp_dir, "arm64-v8a", "libx.so"), b"x")
            os.symlink(temp_dir, os.path.join(temp_dir, "arm64-v8a", "loop"))

            files = collect_files(temp_dir)

            self.assertEqual([rel for rel, _ in files], ["arm64-v8a/libx.so"])


class TestWriteArchive(unittest.TestCase):
    """Test deterministic archive writing."""

    def test_entries_and_content(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            src = os.path.join(temp_dir, "libfoo.so")
            _write(src, b"\x7fELF payload")
            archive = os.path.join(temp_dir, "out", "test.zip")

            written = write_archive(archive, [("a/b.txt", b"hello"), ("lib/libfoo.so", src)])

            self.assertEqual(written, ["a/b.txt", "lib/libfoo.so"])
            with zipfile.ZipFile(archive) as zf:
                self.assertEqual(zf.namelist(), ["a/b.txt", "lib/libfoo.so"])
                self.assertEqual(zf.read("lib/libfoo.so"), b"\x7fELF payload")
                self.assertEqual(zf.getinfo("a/b.txt").date_time, ARCHIVE_FIXED_DATE_TIME)
            self.assertFalse(os.path.exists(archive + ".tmp"))

    def test_same_inputs_give_identical_bytes(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            src = os.path.join(temp_dir, "libfoo.so")
            _write(src, os.urandom(4096))
            first = os.path.join(temp_dir, "first.zip")
            second = os.path.join(temp_dir, "second.zip")
            entries = [("x.txt", b"x"), ("libfoo.so", src)]

            write_archive(first, entries)
            os.utime(src, (1, 1))
            write_archive(second, entries)

            with open(first, "rb") as f1, open(second, "rb") as f2:
                self.assertEqual(f1.read(), f2.read())

    def test_duplicate_entry_keeps_first(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            archive = os.path.join(temp_dir, "dup.zip")

            written = write_archive(archive, [("a.txt", b"first"), ("a.txt", b"second")])

            self.assertEqual(written, ["a.txt"])
            with zipfile.ZipFile(archive) as zf:
                self.assertEqual(zf.read("a.txt"), b"first")

    def test_missing_source_raises_and_leaves_nothing(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            archive = os.path.join(temp_dir, "broken.zip")
            missing = os.path.join(temp_dir, "missing.so")

            with self.assertRaises(PackagingError) as ctx:
                write_archive(archive, [("ok.txt", b"ok"), ("missing.so", missing)])

            self.assertEqual(ctx.exception.path, missing)
            self.assertIn(missing, str(ctx.exception))
            self.assertFalse(os.path.exists(archive))
            self.assertFalse(os.path.exists(archive + ".tmp"))

    def test_unwritable_output_raises(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            blocker = os.path.join(temp_dir, "blocker")
            _write(blocker, b"not a directory")
            archive = os.path.join(blocker, "sub", "out.zip")

            with self.assertRaises(PackagingError) as ctx:
                write_archive(archive, [("a.txt", b"a")])

            self.assertIn(blocker, str(ctx.exception))


class TestHelpers(unittest.TestCase):
    """Test small helpers."""

    def test_to_arc_path(self):
        self.assertEqual(to_arc_path("jniLibs", "arm64-v8a/libfoo.so"), "jniLibs/arm64-v8a/libfoo.so")
        self.assertEqual(to_arc_path(None, "a.txt"), "a.txt")

    def test_jar_manifest(self):
        manifest = build_jar_manifest({"Implementation-Title": "foo", "Skipped": ""})

        self.assertEqual(manifest, b"Manifest-Version: 1.0\r\nImplementation-Title: foo\r\n\r\n")

    def test_empty_jar_is_stable(self):
        data = empty_jar_bytes()

        self.assertEqual(data, empty_jar_bytes())
        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, "classes.jar")
            _write(path, data)
            with zipfile.ZipFile(path) as zf:
                self.assertEqual(zf.namelist(), ["META-INF/MANIFEST.MF"])

    def test_expand_env(self):
        with patch.dict(os.environ, {"JNIPACK_TEST_DIR": "/x"}):
            self.assertEqual(expand_env("${JNIPACK_TEST_DIR}/a"), "/x/a")
            self.assertEqual(expand_env("$JNIPACK_TEST_DIR/b"), "/x/b")
        self.assertEqual(expand_env("$JNIPACK_UNSET_VAR_123"), "$JNIPACK_UNSET_VAR_123")
        self.assertEqual(expand_env(21), 21)

    def test_ndk_host_tag(self):
        with patch("platform.system", return_value="Linux"), patch(
            "platform.machine", return_value="x86_64"
        ):
            self.assertEqual(get_ndk_host_tag(), "linux-x86_64")
        with patch("platform.system", return_value="Darwin"), patch(
            "platform.machine", return_value="arm64"
        ):
            self.assertEqual(get_ndk_host_tag(), "darwin-x86_64")


if __name__ == "__main__":
    unittest.main()

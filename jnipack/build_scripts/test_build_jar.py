#!/usr/bin/env python3
"""
Tests for JAR packaging.

Run with: python3 -m pytest jnipack/build_scripts/test_build_jar.py
"""

import io
import os
import tempfile
import unittest
import zipfile
from contextlib import redirect_stdout

from jnipack.build_scripts.build_config import JarConfig
from jnipack.build_scripts.build_jar import JAR_NATIVE_EMBED_PATH, get_jar_path, package_jar
from jnipack.build_scripts.native_config import NativeDirRef


def _write(path, data):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)


def _native_entries(jar_path):
    with zipfile.ZipFile(jar_path) as zf:
        return [name for name in zf.namelist() if name.startswith(JAR_NATIVE_EMBED_PATH + "/")]


class TestPackageJar(unittest.TestCase):
    """Test the JAR pipeline."""

    def setUp(self):
        self.temp = tempfile.TemporaryDirectory()
        self.project_dir = self.temp.name
        self.config = JarConfig({}, self.project_dir)

    def tearDown(self):
        self.temp.cleanup()

    def test_default_artifact_name(self):
        self.assertEqual(
            get_jar_path(self.config),
            os.path.join(self.project_dir, "target", "java", "dianyaapi-jni-0.2.1.jar"),
        )

    def test_absent_property_gives_api_only_jar(self):
        result = package_jar(self.config, NativeDirRef.absent("jarNativeDir"))

        self.assertTrue(os.path.isfile(result.artifact_path))
        self.assertFalse(result.has_native_content())
        self.assertEqual(result.diagnostics, [])
        self.assertEqual(_native_entries(result.artifact_path), [])
        with zipfile.ZipFile(result.artifact_path) as zf:
            self.assertEqual(zf.namelist()[0], "META-INF/MANIFEST.MF")
            manifest = zf.read("META-INF/MANIFEST.MF").decode("utf-8")
        self.assertIn("Implementation-Title: dianyaapi-jni", manifest)
        self.assertIn("Implementation-Version: 0.2.1", manifest)

    def test_missing_directory_warns_once(self):
        ref = NativeDirRef.present("jarNativeDir", "build/native")
        expected = os.path.abspath(os.path.join(self.project_dir, "build", "native"))

        result = package_jar(self.config, ref)

        self.assertTrue(os.path.isfile(result.artifact_path))
        self.assertFalse(result.has_native_content())
        self.assertEqual(len(result.diagnostics), 1)
        self.assertIn(expected, result.diagnostics[0])
        self.assertEqual(_native_entries(result.artifact_path), [])

    def test_path_to_a_file_is_treated_as_missing(self):
        path = os.path.join(self.project_dir, "native.so")
        _write(path, b"not a directory")

        result = package_jar(self.config, NativeDirRef.present("jarNativeDir", path))

        self.assertEqual(len(result.diagnostics), 1)
        self.assertFalse(result.has_native_content())

    def test_existing_directory_is_embedded_verbatim(self):
        native_dir = os.path.join(self.project_dir, "native")
        files = {
            "linux-x86_64/libdianyaapi_jni.so": os.urandom(2048),
            "darwin-aarch64/libdianyaapi_jni.dylib": os.urandom(1024),
            "windows-x86_64/dianyaapi_jni.dll": b"MZ",
            "VERSION": b"0.2.1\n",
        }
        for rel_path, data in files.items():
            _write(os.path.join(native_dir, *rel_path.split("/")), data)

        result = package_jar(self.config, NativeDirRef.present("jarNativeDir", "native"))

        self.assertEqual(result.diagnostics, [])
        self.assertEqual(
            sorted(result.native_entries),
            sorted(f"META-INF/lib/{rel_path}" for rel_path in files),
        )
        with zipfile.ZipFile(result.artifact_path) as zf:
            for rel_path, data in files.items():
                self.assertEqual(zf.read(f"META-INF/lib/{rel_path}"), data)

    def test_symlinked_abi_directory_is_embedded(self):
        _write(os.path.join(self.project_dir, "out", "arm64", "libx.so"), b"arm64")
        native_dir = os.path.join(self.project_dir, "native")
        os.makedirs(native_dir)
        os.symlink(os.path.join(self.project_dir, "out", "arm64"), os.path.join(native_dir, "arm64-v8a"))

        result = package_jar(self.config, NativeDirRef.present("jarNativeDir", "native"))

        self.assertEqual(result.native_entries, ["META-INF/lib/arm64-v8a/libx.so"])
        with zipfile.ZipFile(result.artifact_path) as zf:
            self.assertEqual(zf.read("META-INF/lib/arm64-v8a/libx.so"), b"arm64")

    def test_missing_classes_directory_keeps_a_single_warning(self):
        config = JarConfig({"jar": {"classes_dir": "no-classes"}}, self.project_dir)
        stdout = io.StringIO()

        with redirect_stdout(stdout):
            result = package_jar(config, NativeDirRef.present("jarNativeDir", "build/native"))

        self.assertEqual(len(result.diagnostics), 1)
        warnings = [line for line in stdout.getvalue().splitlines() if "Warning" in line]
        self.assertEqual(len(warnings), 1)
        self.assertIn(os.path.join(self.project_dir, "build", "native"), warnings[0])

    def test_repeated_runs_are_identical(self):
        native_dir = os.path.join(self.project_dir, "native")
        _write(os.path.join(native_dir, "linux-x86_64", "libx.so"), os.urandom(512))
        ref = NativeDirRef.present("jarNativeDir", native_dir)

        first = package_jar(self.config, ref, output_dir=os.path.join(self.project_dir, "a"))
        second = package_jar(self.config, ref, output_dir=os.path.join(self.project_dir, "b"))

        with open(first.artifact_path, "rb") as f1, open(second.artifact_path, "rb") as f2:
            self.assertEqual(f1.read(), f2.read())

    def test_classes_and_sources(self):
        _write(os.path.join(self.project_dir, "classes", "com", "dianya", "api", "Utils.class"), b"\xca\xfe")
        _write(os.path.join(self.project_dir, "src", "com", "dianya", "api", "Utils.java"), b"class Utils {}")
        config = JarConfig(
            {
                "jar": {
                    "classes_dir": "classes",
                    "sources_dir": "src",
                    "with_sources": True,
                    "version": "1.0.0",
                }
            },
            self.project_dir,
        )

        result = package_jar(config, NativeDirRef.absent("jarNativeDir"))

        with zipfile.ZipFile(result.artifact_path) as zf:
            self.assertEqual(zf.read("com/dianya/api/Utils.class"), b"\xca\xfe")
        self.assertEqual(len(result.extra_artifacts), 1)
        self.assertTrue(result.extra_artifacts[0].endswith("dianyaapi-jni-1.0.0-sources.jar"))
        with zipfile.ZipFile(result.extra_artifacts[0]) as zf:
            self.assertIn("com/dianya/api/Utils.java", zf.namelist())


if __name__ == "__main__":
    unittest.main()

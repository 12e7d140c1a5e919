#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_jar.py
# jnipack
#
# Copyright 2024 jnipack Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""
JAR packaging for plain JVM consumers.

The native library directory is embedded verbatim under META-INF/lib/ so a
runtime loader can find and extract it:

    dianyaapi-jni-<version>.jar
    ├── META-INF/MANIFEST.MF
    ├── META-INF/lib/<relative path from the native directory>
    └── com/...        (compiled classes, if jar.classes_dir is set)

Unlike the Android pipeline, the native directory is checked for existence:
a configured path that is not a directory (e.g. the native build has not run
yet) produces one warning and an API-only JAR.
"""

import os

from jnipack.build_scripts.build_utils import (
    JAR_MANIFEST_PATH,
    build_jar_manifest,
    collect_files,
    to_arc_path,
    write_archive,
)
from jnipack.utils.context.result import PackagingResult

JAR_NATIVE_EMBED_PATH = "META-INF/lib"


def get_jar_path(config, output_dir=None, classifier=None):
    suffix = f"-{classifier}" if classifier else ""
    file_name = f"{config.archive_base_name}-{config.version}{suffix}.jar"
    return os.path.join(output_dir or config.output_dir, file_name)


def _manifest_entry(config):
    return (
        JAR_MANIFEST_PATH,
        build_jar_manifest(
            {
                "Implementation-Title": config.archive_base_name,
                "Implementation-Version": config.version,
                "Implementation-Vendor-Id": config.group,
            }
        ),
    )


def _tree_entries(src_dir, prefix=None):
    return [(to_arc_path(prefix, rel_path), path) for rel_path, path in collect_files(src_dir)]


def package_jar(config, native_ref, output_dir=None):
    """
    Build the JAR artifact.

    Args:
        config: JarConfig
        native_ref: NativeDirRef for the jarNativeDir property (may be absent)
        output_dir: Override of config.output_dir

    Returns:
        PackagingResult: artifact path, embedded native entries and any
                         diagnostics

    Raises:
        PackagingError: On I/O failure while reading inputs or writing the JAR
    """
    print("==================Package JAR========================")
    result = PackagingResult()
    entries = [_manifest_entry(config)]

    if config.classes_dir:
        if os.path.isdir(config.classes_dir):
            entries.extend(_tree_entries(config.classes_dir))
        else:
            print(f"Classes directory not found, packaging without classes: {config.classes_dir}")

    native_entries = []
    if native_ref.is_present():
        native_dir = native_ref.resolve(config.project_dir)
        if os.path.isdir(native_dir):
            print(f"Embedding native libraries from: {native_dir}")
            native_entries = _tree_entries(native_dir, JAR_NATIVE_EMBED_PATH)
        else:
            message = f"native library directory does not exist: {native_dir}"
            print(f"   ⚠️  Warning: {message}")
            result.diagnostics.append(message)
    else:
        print(f"Property '{native_ref.name}' not set, packaging Java API only")
    entries.extend(native_entries)

    jar_path = get_jar_path(config, output_dir)
    written = write_archive(jar_path, entries)
    result.artifact_path = jar_path
    result.native_entries = [name for name, _ in native_entries if name in written]
    for name in result.native_entries:
        print(f"  + {name}")
    print(f"Created JAR: {jar_path}")

    if config.with_sources:
        sources_path = _package_sources_jar(config, output_dir)
        if sources_path:
            result.extra_artifacts.append(sources_path)

    return result


def _package_sources_jar(config, output_dir=None):
    if not config.sources_dir or not os.path.isdir(config.sources_dir):
        print(f"Sources directory not found, skipping sources JAR: {config.sources_dir}")
        return None
    sources_path = get_jar_path(config, output_dir, classifier="sources")
    entries = [_manifest_entry(config)] + _tree_entries(config.sources_dir)
    write_archive(sources_path, entries)
    print(f"Created sources JAR: {sources_path}")
    return sources_path

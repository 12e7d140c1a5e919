#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_android.py
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
Android library (AAR) packaging.

The native library directory is expected to hold one subdirectory per ABI
(armeabi-v7a, arm64-v8a, x86, x86_64). It becomes the native-library section
of the AAR:

    <artifact>-<version>.aar
    ├── AndroidManifest.xml
    ├── R.txt
    ├── classes.jar
    └── jniLibs/<abi>/lib*.so

Shared objects are stripped with llvm-strip unless a keep_debug_symbols
pattern matches them. A missing native directory is not reported: the AAR is
simply produced with the Java API only.
"""

import os
import tempfile

from jnipack.build_scripts.build_utils import (
    collect_files,
    empty_jar_bytes,
    get_ndk_host_tag,
    system_is_windows,
    to_arc_path,
    write_archive,
    PackagingError,
)
from jnipack.build_scripts.symbol_retention import SymbolRetentionRule
from jnipack.utils.cmd.cmd_util import exec_command
from jnipack.utils.context.result import PackagingResult

ANDROID_JNI_LIBS_PATH = "jniLibs"
ANDROID_SYMBOLS_OBJ_PATH = "obj"

NDK_ENV_NAMES = ["ANDROID_NDK_HOME", "ANDROID_NDK_ROOT", "NDK_ROOT"]

ANDROID_MANIFEST_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<manifest xmlns:android="http://schemas.android.com/apk/res/android"
    package="{namespace}" >

    <uses-sdk android:minSdkVersion="{min_sdk}" />

</manifest>
"""


def get_ndk_strip_path():
    """
    Locate llvm-strip inside the Android NDK.

    Returns:
        str: Path to llvm-strip, or None when no NDK is configured
    """
    for env_name in NDK_ENV_NAMES:
        ndk_root = os.environ.get(env_name)
        if not ndk_root:
            continue
        exe = "llvm-strip.exe" if system_is_windows() else "llvm-strip"
        strip_path = os.path.join(
            ndk_root, "toolchains", "llvm", "prebuilt", get_ndk_host_tag(), "bin", exe
        )
        if os.path.isfile(strip_path):
            return strip_path
    return None


def strip_library(strip_path, src, dst):
    """
    Write a copy of ``src`` without debug symbols to ``dst``.

    Returns:
        bool: True if llvm-strip succeeded
    """
    strip_cmd = [strip_path, "--strip-unneeded", "-o", dst, src]
    print(f"strip cmd: [{' '.join(strip_cmd)}]")
    err_code, output = exec_command(strip_cmd)
    if err_code != 0:
        print(f"   ⚠️  Warning: strip failed for {src} ({err_code}): {output.strip()}")
        return False
    return True


def render_android_manifest(config):
    if config.manifest:
        try:
            with open(config.manifest, "rb") as f:
                return f.read()
        except OSError as e:
            raise PackagingError(
                f"Failed to read manifest {config.manifest}: {e.strerror}", config.manifest
            ) from e
    return ANDROID_MANIFEST_TEMPLATE.format(
        namespace=config.namespace, min_sdk=config.min_sdk
    ).encode("utf-8")


def get_aar_path(config, output_dir=None):
    file_name = f"{config.artifact_name}-{config.version}.aar"
    return os.path.join(output_dir or config.output_dir, file_name)


def get_symbols_zip_path(config, output_dir=None):
    file_name = f"{config.artifact_name}-{config.version}-SYMBOLS.zip"
    return os.path.join(output_dir or config.output_dir, file_name)


def package_android(
    config,
    native_ref,
    output_dir=None,
    strip=True,
    strip_path=None,
    symbols_archive=False,
):
    """
    Build the AAR artifact.

    Args:
        config: AndroidConfig
        native_ref: NativeDirRef for the androidNativeDir property (may be absent)
        output_dir: Override of config.output_dir
        strip: If False, every library is packaged with its symbols
        strip_path: llvm-strip to use (default: config.strip_tool, then the NDK)
        symbols_archive: Also write <artifact>-<version>-SYMBOLS.zip with the
                         unstripped copies of the libraries that were stripped

    Returns:
        PackagingResult: artifact path, jniLibs entries, and which libraries
                         were stripped or left unstripped

    Raises:
        PackagingError: On I/O failure while reading inputs or writing the AAR
    """
    print("==================Package Android AAR========================")
    result = PackagingResult()
    classes_jar = config.classes_jar if config.classes_jar else empty_jar_bytes()
    entries = [
        ("AndroidManifest.xml", render_android_manifest(config)),
        ("R.txt", b""),
        ("classes.jar", classes_jar),
    ]

    native_files = []
    if native_ref.is_present():
        native_dir = native_ref.resolve(config.project_dir)
        # a configured but missing directory is treated as empty
        if os.path.isdir(native_dir):
            print(f"jniLibs source: {native_dir}")
            native_files = collect_files(native_dir)
    result.abis = list_abis(native_files)

    rule = SymbolRetentionRule(config.keep_debug_symbols)
    if strip and strip_path is None:
        strip_path = config.strip_tool or get_ndk_strip_path()

    aar_path = get_aar_path(config, output_dir)
    with tempfile.TemporaryDirectory(prefix="jnipack-strip-") as staging_dir:
        symbol_entries = []
        for rel_path, src in native_files:
            packaged = src
            if strip and rule.is_strip_candidate(rel_path):
                stripped = _strip_to_staging(strip_path, staging_dir, rel_path, src)
                if stripped:
                    packaged = stripped
                    result.stripped.append(rel_path)
                    symbol_entries.append(
                        (to_arc_path(ANDROID_SYMBOLS_OBJ_PATH, rel_path), src)
                    )
                else:
                    result.unstripped.append(rel_path)
            entries.append((to_arc_path(ANDROID_JNI_LIBS_PATH, rel_path), packaged))
            result.native_entries.append(to_arc_path(ANDROID_JNI_LIBS_PATH, rel_path))

        if result.unstripped and not strip_path:
            print("Unable to strip the following libraries (no llvm-strip found), packaging them as they are:")
            for rel_path in result.unstripped:
                print(f"  - {rel_path}")

        write_archive(aar_path, entries)

        if symbols_archive and symbol_entries:
            symbols_path = get_symbols_zip_path(config, output_dir)
            write_archive(symbols_path, symbol_entries)
            result.extra_artifacts.append(symbols_path)
            print(f"Created symbols package: {symbols_path}")

    result.artifact_path = aar_path
    for name in result.native_entries:
        print(f"  + {name}")
    if not native_files:
        print("No native libraries packaged, AAR contains the Java API only")
    print(f"Created AAR: {aar_path}")
    return result


def _strip_to_staging(strip_path, staging_dir, rel_path, src):
    if not strip_path:
        return None
    dst = os.path.join(staging_dir, *rel_path.split("/"))
    os.makedirs(os.path.dirname(dst), exist_ok=True)
    if strip_library(strip_path, src, dst) and os.path.isfile(dst):
        return dst
    if os.path.exists(dst):
        os.remove(dst)
    return None


def list_abis(native_files):
    """Get the sorted ABI directory names present in a collected native tree."""
    abis = set()
    for rel_path, _ in native_files:
        if "/" in rel_path:
            abis.add(rel_path.split("/", 1)[0])
    return sorted(abis)

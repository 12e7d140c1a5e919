#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_utils.py
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
Shared utilities for the Android and JAR packaging pipelines.

This module provides:
- Directory walking with stable, archive-friendly relative paths
- Deterministic ZIP/JAR/AAR writing (fixed order, timestamps and permissions)
- Archive tree printing for build summaries
- Host detection for NDK toolchain paths
- Environment variable expansion for configuration values
"""

import io
import os
import platform
import re
import shutil
import zipfile

# Fixed entry timestamp: the same inputs always give byte-identical archives
ARCHIVE_FIXED_DATE_TIME = (1980, 2, 1, 0, 0, 0)
ARCHIVE_FILE_MODE = 0o644

JAR_MANIFEST_PATH = "META-INF/MANIFEST.MF"


class PackagingError(RuntimeError):
    """Unrecoverable I/O failure while assembling an artifact."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


def to_arc_path(*parts):
    """
    Join path fragments into a ZIP entry name.

    ZIP entries always use forward slashes, whatever the host separator is.

    Example:
        to_arc_path("jniLibs", "arm64-v8a", "libfoo.so")  # 'jniLibs/arm64-v8a/libfoo.so'
    """
    return "/".join(p.replace(os.sep, "/").strip("/") for p in parts if p)


def collect_files(root_dir):
    """
    Walk a directory tree and list every regular file in a stable order.

    Args:
        root_dir: Directory to walk

    Returns:
        list: (relative_path, absolute_path) tuples sorted by relative path,
              where relative_path uses '/' separators

    Note:
        Directory listing order is filesystem dependent, so both directories
        and files are sorted while walking. Symlinked directories are
        followed, each real directory is walked at most once.
    """
    collected = []
    visited = set()

    def on_error(err):
        raise PackagingError(
            f"Failed to read directory {err.filename}: {err.strerror}", err.filename
        )

    for root, dirs, files in os.walk(root_dir, onerror=on_error, followlinks=True):
        visited.add(os.path.realpath(root))
        dirs[:] = [
            d for d in sorted(dirs)
            if os.path.realpath(os.path.join(root, d)) not in visited
        ]
        for name in sorted(files):
            file_path = os.path.join(root, name)
            rel_path = os.path.relpath(file_path, root_dir)
            collected.append((to_arc_path(rel_path), file_path))
    collected.sort(key=lambda item: item[0])
    return collected


def _new_zip_info(arcname):
    info = zipfile.ZipInfo(arcname, date_time=ARCHIVE_FIXED_DATE_TIME)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = (ARCHIVE_FILE_MODE & 0xFFFF) << 16
    # unix
    info.create_system = 3
    return info


def write_archive(archive_path, entries):
    """
    Write a deterministic ZIP archive (also used for .jar and .aar files).

    Args:
        archive_path: Destination file path
        entries: Iterable of (arcname, source) pairs, written in the given
                 order. ``source`` is either ``bytes`` or a file path.

    Returns:
        list: The entry names actually written

    Raises:
        PackagingError: If a source file cannot be read or the archive cannot
                        be written. No partial archive is left behind.

    Note:
        The archive is assembled in ``<archive_path>.tmp`` and renamed into
        place once complete.
    """
    out_dir = os.path.dirname(os.path.abspath(archive_path))
    try:
        os.makedirs(out_dir, exist_ok=True)
    except OSError as e:
        raise PackagingError(
            f"Failed to create output directory {out_dir}: {e.strerror}", out_dir
        ) from e

    tmp_path = archive_path + ".tmp"
    written = []
    seen = set()
    try:
        with zipfile.ZipFile(tmp_path, "w", zipfile.ZIP_DEFLATED) as zf:
            for arcname, source in entries:
                if arcname in seen:
                    print(f"   ⚠️  Warning: duplicate entry skipped: {arcname}")
                    continue
                seen.add(arcname)
                info = _new_zip_info(arcname)
                if isinstance(source, (bytes, bytearray)):
                    zf.writestr(info, bytes(source))
                else:
                    try:
                        src = open(source, "rb")
                    except OSError as e:
                        raise PackagingError(
                            f"Failed to read {source}: {e.strerror}", source
                        ) from e
                    with src, zf.open(info, "w") as dst:
                        shutil.copyfileobj(src, dst, 1024 * 1024)
                written.append(arcname)
        os.replace(tmp_path, archive_path)
    except PackagingError:
        _remove_quietly(tmp_path)
        raise
    except OSError as e:
        _remove_quietly(tmp_path)
        raise PackagingError(
            f"Failed to write archive {archive_path}: {e.strerror or e}", archive_path
        ) from e
    return written


def _remove_quietly(path):
    if os.path.exists(path):
        try:
            os.remove(path)
        except OSError as e:
            print(f"   ⚠️  Warning: failed to remove {path}: {e}")


def build_jar_manifest(attributes=None):
    """
    Render a JAR manifest (META-INF/MANIFEST.MF).

    Args:
        attributes: Optional ordered dict of main attributes to add after
                    ``Manifest-Version``

    Returns:
        bytes: Manifest content with CRLF line endings
    """
    lines = ["Manifest-Version: 1.0"]
    for key, value in (attributes or {}).items():
        if value is None or value == "":
            continue
        lines.append(f"{key}: {value}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")


def empty_jar_bytes():
    """Return the bytes of a JAR holding only a default manifest."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(_new_zip_info(JAR_MANIFEST_PATH), build_jar_manifest())
    return buffer.getvalue()


def print_zip_tree(zip_path, indent="    "):
    """
    Print the tree structure of a ZIP file (AAR and JAR files are ZIPs too).

    Example output:
        ZIP contents:
        ├── AndroidManifest.xml (0.2 KB)
        ├── classes.jar (0.2 KB)
        └── jniLibs/
            └── arm64-v8a/
                └── libfoo.so (0.89 MB)
    """
    if not os.path.exists(zip_path):
        print(f"{indent}[ZIP file not found]")
        return

    try:
        with zipfile.ZipFile(zip_path, "r") as zf:
            tree = {}
            for info in zf.infolist():
                parts = info.filename.split("/")
                current = tree
                for i, part in enumerate(parts):
                    if not part:
                        continue
                    if part not in current:
                        is_file = (i == len(parts) - 1) and not info.filename.endswith("/")
                        current[part] = {"__size__": info.file_size} if is_file else {}
                    current = current[part]

            print(f"{indent}ZIP contents:")
            _print_tree_level(tree, indent, "")
    except zipfile.BadZipFile:
        print(f"{indent}[Invalid ZIP file]")


def _print_tree_level(tree, base_indent, prefix):
    items = sorted(tree.items())
    for i, (name, subtree) in enumerate(items):
        is_last = i == len(items) - 1
        connector = "└── " if is_last else "├── "

        if "__size__" in subtree:
            size_mb = subtree["__size__"] / (1024 * 1024)
            if size_mb >= 0.01:
                size_str = f"({size_mb:.2f} MB)"
            else:
                size_str = f"({subtree['__size__'] / 1024:.1f} KB)"
            print(f"{base_indent}{prefix}{connector}{name} {size_str}")
        else:
            print(f"{base_indent}{prefix}{connector}{name}/")
            new_prefix = prefix + ("    " if is_last else "│   ")
            _print_tree_level(subtree, base_indent, new_prefix)


def format_size(path):
    size_mb = os.path.getsize(path) / (1024 * 1024)
    return f"{size_mb:.2f} MB"


def system_is_windows():
    """Check if current platform is Windows."""
    return platform.system().lower() == "windows"


def system_architecture_is64():
    """Check if current system architecture is 64-bit."""
    return platform.machine().endswith("64")


def get_ndk_host_tag():
    """
    Get the NDK host platform tag for toolchain paths.

    Returns:
        str: Platform tag (e.g., "darwin-x86_64", "linux-x86_64", "windows-x86_64")

    Note:
        The NDK only ships x86_64 host tools, Apple Silicon hosts use the
        darwin-x86_64 prebuilts through Rosetta.
    """
    system_str = platform.system().lower()
    if system_architecture_is64() or system_str == "darwin":
        system_str = system_str + "-x86_64"
    return system_str


def expand_env(value):
    """
    Expand environment variables in configuration values.

    Supports ${VAR_NAME} and $VAR_NAME syntax; unknown variables are left as-is.
    """
    if not isinstance(value, str):
        return value

    pattern1 = re.compile(r"\$\{([^}]+)\}")
    value = pattern1.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

    pattern2 = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)")
    value = pattern2.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

    return value

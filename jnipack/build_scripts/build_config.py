#!/usr/bin/env python3
# -- coding: utf-8 --
#
# build_config.py
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
Project configuration loaded from JNIPACK.toml.

Example:
    [project]
    name = "dianyaapi"
    group = "com.dianya"

    [properties]
    androidNativeDir = "../build/jniLibs"

    [android]
    version = "0.1.0"
    namespace = "com.dianya.api"
    min_sdk = 21
    keep_debug_symbols = ["**/libdianyaapi_jni.so"]

    [jar]
    version = "0.2.1"
    archive_base_name = "dianyaapi-jni"
"""

import os
import sys
from typing import Any, Dict, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from jnipack.build_scripts.build_utils import expand_env
from jnipack.build_scripts.native_config import (
    ANDROID_NATIVE_DIR_PROPERTY,
    JAR_NATIVE_DIR_PROPERTY,
)

CONFIG_FILE_NAME = "JNIPACK.toml"

DEFAULT_PROJECT_NAME = "dianyaapi"
DEFAULT_GROUP = "com.dianya"
DEFAULT_ANDROID_NAMESPACE = "com.dianya.api"
DEFAULT_ANDROID_MIN_SDK = 21
DEFAULT_ANDROID_VERSION = "0.1.0"
DEFAULT_JAR_VERSION = "0.2.1"
DEFAULT_JAR_BASE_NAME = "dianyaapi-jni"

DEFAULT_ANDROID_OUTPUT = "target/android"
DEFAULT_JAR_OUTPUT = "target/java"


def find_config_file(project_dir: str) -> Optional[str]:
    """Find JNIPACK.toml in the project directory or its immediate subdirectories."""
    candidate = os.path.join(project_dir, CONFIG_FILE_NAME)
    if os.path.isfile(candidate):
        return candidate

    try:
        for subdir in sorted(os.listdir(project_dir)):
            potential_config = os.path.join(project_dir, subdir, CONFIG_FILE_NAME)
            if os.path.isfile(potential_config):
                return potential_config
    except OSError:
        pass

    return None


def load_jnipack_config(config_file: Optional[str]) -> Dict[str, Any]:
    """
    Load JNIPACK.toml into a dict.

    A missing file yields an empty config. A file that cannot be read or
    parsed is reported and defaults are used instead.
    """
    if not config_file:
        return {}
    try:
        with open(config_file, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"   ⚠️  Warning: Error reading {config_file}: {e}")
        print("   ⚠️  Using default configuration instead")
        return {}


def _resolve_path(project_dir, value):
    if not value:
        return None
    value = os.path.expanduser(expand_env(str(value)))
    if not os.path.isabs(value):
        value = os.path.join(project_dir, value)
    return os.path.abspath(value)


class _SectionConfig:
    section = ""

    def __init__(self, config: Dict[str, Any], project_dir: str):
        self.project_dir = os.path.abspath(project_dir)
        self.raw_config = config
        project = config.get("project", {})
        self.options = config.get(self.section, {})

        self.project_name = expand_env(project.get("name", DEFAULT_PROJECT_NAME))
        self.group = expand_env(project.get("group", DEFAULT_GROUP))
        self.project_version = project.get("version")

    def get(self, key, default=None):
        return expand_env(self.options.get(key, default))

    def path(self, key, default=None):
        return _resolve_path(self.project_dir, self.options.get(key, default))


class AndroidConfig(_SectionConfig):
    """Settings of the Android AAR pipeline ([android] table)."""

    section = "android"

    def __init__(self, config: Dict[str, Any], project_dir: str):
        super().__init__(config, project_dir)
        self.artifact_name = self.get("artifact_name", self.project_name)
        self.version = str(
            self.get("version", self.project_version or DEFAULT_ANDROID_VERSION)
        )
        self.namespace = self.get("namespace", DEFAULT_ANDROID_NAMESPACE)
        self.min_sdk = int(self.get("min_sdk", DEFAULT_ANDROID_MIN_SDK))
        self.native_dir_property = self.get(
            "native_dir_property", ANDROID_NATIVE_DIR_PROPERTY
        )
        self.keep_debug_symbols: List[str] = list(
            self.options.get(
                "keep_debug_symbols", [f"**/lib{self.project_name}_jni.so"]
            )
        )
        self.manifest = self.path("manifest")
        self.classes_jar = self.path("classes_jar")
        self.strip_tool = self.path("strip_tool")
        self.output_dir = self.path("output", DEFAULT_ANDROID_OUTPUT)


class JarConfig(_SectionConfig):
    """Settings of the JAR pipeline ([jar] table)."""

    section = "jar"

    def __init__(self, config: Dict[str, Any], project_dir: str):
        super().__init__(config, project_dir)
        self.archive_base_name = self.get("archive_base_name", DEFAULT_JAR_BASE_NAME)
        self.version = str(
            self.get("version", self.project_version or DEFAULT_JAR_VERSION)
        )
        self.native_dir_property = self.get(
            "native_dir_property", JAR_NATIVE_DIR_PROPERTY
        )
        self.classes_dir = self.path("classes_dir")
        self.sources_dir = self.path("sources_dir")
        self.with_sources = bool(self.options.get("with_sources", False))
        self.output_dir = self.path("output", DEFAULT_JAR_OUTPUT)

#!/usr/bin/env python3
# -- coding: utf-8 --
#
# native_config.py
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
Resolution of the optional native library directory.

Build properties come from the ``[properties]`` table of JNIPACK.toml and
from ``-P key=value`` command line items (which win). Each pipeline looks up
its own property name once per run:

    androidNativeDir  ->  Android AAR pipeline
    jarNativeDir      ->  JAR pipeline

An unset property is a normal result, not an error. Whether the path exists
on disk is left to the pipeline that consumes it.
"""

import os

from jnipack.build_scripts.build_utils import expand_env

ANDROID_NATIVE_DIR_PROPERTY = "androidNativeDir"
JAR_NATIVE_DIR_PROPERTY = "jarNativeDir"


class NativeDirRef:
    """Optional reference to a native library directory, as configured."""

    def __init__(self, name, path=None):
        self.name = name
        self.path = path

    @classmethod
    def present(cls, name, path):
        return cls(name, path)

    @classmethod
    def absent(cls, name):
        return cls(name, None)

    def is_present(self):
        return self.path is not None

    def resolve(self, base_dir):
        """
        Get the absolute directory path, relative values being taken from
        ``base_dir`` (the project directory).

        Raises:
            ValueError: If the reference is absent
        """
        if not self.is_present():
            raise ValueError(f"property '{self.name}' is not set")
        path = os.path.expanduser(self.path)
        if not os.path.isabs(path):
            path = os.path.join(base_dir, path)
        return os.path.abspath(path)

    def __eq__(self, other):
        if not isinstance(other, NativeDirRef):
            return NotImplemented
        return (self.name, self.path) == (other.name, other.path)

    def __repr__(self):
        if self.is_present():
            return f"NativeDirRef.present({self.name!r}, {self.path!r})"
        return f"NativeDirRef.absent({self.name!r})"


def parse_property_args(items):
    """
    Parse ``-P`` command line items into a property dict.

    Args:
        items: List like ["androidNativeDir=/out/jniLibs", "verbose"], or None

    Returns:
        dict: Property name to string value. An item without '=' sets the
              empty string, as Gradle does for ``-Pname``.
    """
    properties = {}
    for item in items or []:
        if "=" in item:
            key, value = item.split("=", 1)
        else:
            key, value = item, ""
        key = key.strip()
        if key:
            properties[key] = value
    return properties


def collect_properties(config, overrides=None):
    """
    Merge the ``[properties]`` table of the project config with overrides.

    Values from the config file get environment variables expanded, command
    line values are taken literally.
    """
    properties = {}
    for key, value in (config or {}).get("properties", {}).items():
        properties[str(key)] = expand_env(str(value))
    properties.update(overrides or {})
    return properties


def resolve_native_dir(properties, name):
    """
    Look up one native directory property.

    Args:
        properties: Build properties (see collect_properties)
        name: Property name, e.g. "androidNativeDir"

    Returns:
        NativeDirRef: present with the raw value, or absent when the property
                      is unset or blank
    """
    value = (properties or {}).get(name)
    if value is None or not str(value).strip():
        return NativeDirRef.absent(name)
    return NativeDirRef.present(name, str(value).strip())

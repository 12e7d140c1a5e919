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

"""Packaging scripts for the Android AAR and the JAR."""

__all__ = [
    "build_android",
    "build_config",
    "build_jar",
    "build_utils",
    "native_config",
    "symbol_retention",
]

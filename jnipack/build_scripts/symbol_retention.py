#!/usr/bin/env python3
# -- coding: utf-8 --
#
# symbol_retention.py
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
Debug symbol retention rules for packaged native libraries.

Shared objects in the Android native section are stripped by default. A rule
set of Ant-style glob patterns selects the libraries that must keep their
debug symbols, e.g. ``**/libdianyaapi_jni.so``. Patterns are matched against
the path relative to the native section (``arm64-v8a/libdianyaapi_jni.so``).
"""

import re

KEEP_DEBUG_SYMBOLS = "keep"
STRIP = "strip"

STRIPPABLE_SUFFIX = ".so"


def glob_to_regex(pattern):
    """
    Translate an Ant-style glob into a compiled regular expression.

    - ``**/`` matches zero or more directories
    - ``**`` matches anything, including '/'
    - ``*`` matches anything but '/'
    - ``?`` matches one character but '/'
    """
    pattern = pattern.replace("\\", "/").lstrip("/")
    if pattern.endswith("/"):
        pattern += "**"
    out = []
    i = 0
    n = len(pattern)
    while i < n:
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return re.compile("^" + "".join(out) + "$")


class SymbolRetentionRule:
    """Ordered (pattern -> effect) rules; the first matching rule wins."""

    def __init__(self, keep_patterns=None, rules=None):
        self.rules = []
        for pattern in keep_patterns or []:
            self.add(pattern, KEEP_DEBUG_SYMBOLS)
        for pattern, effect in rules or []:
            self.add(pattern, effect)

    def add(self, pattern, effect):
        if effect not in (KEEP_DEBUG_SYMBOLS, STRIP):
            raise ValueError(f"unknown symbol retention effect: {effect}")
        self.rules.append((pattern, effect, glob_to_regex(pattern)))

    @property
    def patterns(self):
        return [pattern for pattern, _, _ in self.rules]

    def effect_for(self, rel_path):
        rel_path = rel_path.replace("\\", "/").lstrip("/")
        for _, effect, regex in self.rules:
            if regex.match(rel_path):
                return effect
        return STRIP

    def keeps_debug_symbols(self, rel_path):
        return self.effect_for(rel_path) == KEEP_DEBUG_SYMBOLS

    def is_strip_candidate(self, rel_path):
        """Only shared objects are ever stripped."""
        if not rel_path.endswith(STRIPPABLE_SUFFIX):
            return False
        return self.effect_for(rel_path) == STRIP

    def partition(self, rel_paths):
        """Split paths into (strip_candidates, packaged_as_is)."""
        to_strip = []
        as_is = []
        for rel_path in rel_paths:
            if self.is_strip_candidate(rel_path):
                to_strip.append(rel_path)
            else:
                as_is.append(rel_path)
        return to_strip, as_is

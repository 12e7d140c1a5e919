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


class PackagingResult:
    """Outcome of one packaging pipeline run.

    A run that could not embed native content because the directory was
    missing still produces the artifact API-only, with the reason kept in
    ``diagnostics``. Unrecoverable failures are raised as PackagingError
    and never produce a result.
    """

    def __init__(
        self,
        artifact_path=None,
        native_entries=None,
        diagnostics=None,
    ):
        self.artifact_path = artifact_path
        self.native_entries = native_entries or []
        self.diagnostics = diagnostics or []
        # sources jar, symbols archive
        self.extra_artifacts = []
        # android only
        self.stripped = []
        self.unstripped = []
        self.abis = []

    def has_native_content(self):
        return len(self.native_entries) > 0

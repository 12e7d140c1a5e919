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

"""Subcommands of the jnipack command line.

Each module ``<name>.py`` exposes a class named ``<Name>`` derived from
``CliCommand``; the root ``Cli`` dispatches to it by name.
"""

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

"""Argument handling and pipeline runners shared by the packaging commands."""

import os
import sys

from jnipack.build_scripts.build_android import package_android
from jnipack.build_scripts.build_config import (
    AndroidConfig,
    JarConfig,
    find_config_file,
    load_jnipack_config,
)
from jnipack.build_scripts.build_jar import package_jar
from jnipack.build_scripts.build_utils import format_size, print_zip_tree
from jnipack.build_scripts.native_config import (
    collect_properties,
    parse_property_args,
    resolve_native_dir,
)


def add_property_arguments(parser):
    parser.add_argument(
        "-P",
        "--property",
        dest="properties",
        action="append",
        metavar="KEY=VALUE",
        help="Build property, e.g. -PandroidNativeDir=build/jniLibs (repeatable)",
    )
    parser.add_argument(
        "--version",
        type=str,
        help="Artifact version (default: from JNIPACK.toml)",
    )


def add_strip_arguments(parser):
    parser.add_argument(
        "--strip-tool",
        type=str,
        help="llvm-strip to use (default: android.strip_tool, then $ANDROID_NDK_HOME/$NDK_ROOT)",
    )
    parser.add_argument(
        "--no-strip",
        action="store_true",
        help="Package every native library with its debug symbols",
    )
    parser.add_argument(
        "--symbols",
        action="store_true",
        help="Also write <artifact>-<version>-SYMBOLS.zip with the unstripped libraries",
    )


def parse_command_args(parser, module_file):
    module_name = os.path.splitext(os.path.basename(module_file))[0]
    input_argv = sys.argv[1:]
    if input_argv and input_argv[0] == module_name:
        input_argv = input_argv[1:]
    args, unknown = parser.parse_known_args(input_argv)
    if unknown:
        print(f"   ⚠️  Warning: ignoring unknown arguments: {' '.join(unknown)}")
    return args


def load_project(context, args):
    """Read JNIPACK.toml and the build properties for this invocation."""
    config_file = find_config_file(context.project_dir)
    if config_file:
        print(f"Config: {config_file}")
        project_dir = os.path.dirname(config_file)
    else:
        print(f"Config: none found in {context.project_dir}, using defaults")
        project_dir = context.project_dir
    config = load_jnipack_config(config_file)
    properties = collect_properties(
        config, parse_property_args(getattr(args, "properties", None))
    )
    return config, project_dir, properties


def resolve_output(context, output):
    if not output:
        return None
    if os.path.isabs(output):
        return output
    return os.path.join(context.project_dir, output)


def run_android(context, args, config, project_dir, properties, output_dir=None):
    android_config = AndroidConfig(config, project_dir)
    if getattr(args, "version", None):
        android_config.version = args.version
    native_ref = resolve_native_dir(properties, android_config.native_dir_property)
    print(f"\nProject: {android_config.artifact_name}")
    print(f"Version: {android_config.version}")
    print(f"Native dir ({native_ref.name}): {native_ref.path or 'not set'}")
    print(f"Keep debug symbols: {android_config.keep_debug_symbols}")
    return package_android(
        android_config,
        native_ref,
        output_dir=output_dir,
        strip=not args.no_strip,
        strip_path=getattr(args, "strip_tool", None),
        symbols_archive=args.symbols,
    )


def run_jar(context, args, config, project_dir, properties, output_dir=None):
    jar_config = JarConfig(config, project_dir)
    if getattr(args, "version", None):
        jar_config.version = args.version
    native_ref = resolve_native_dir(properties, jar_config.native_dir_property)
    print(f"\nProject: {jar_config.archive_base_name}")
    print(f"Version: {jar_config.version}")
    print(f"Native dir ({native_ref.name}): {native_ref.path or 'not set'}")
    return package_jar(jar_config, native_ref, output_dir=output_dir)


def print_result(title, result):
    print(f"\n{'='*80}")
    print(f"{title}")
    print(f"{'='*80}\n")
    artifacts = [result.artifact_path] + result.extra_artifacts
    for path in artifacts:
        print(f"   📦 {os.path.basename(path)} ({format_size(path)})")
        print_zip_tree(path, indent="      ")
    if result.abis:
        print(f"\nABIs: {', '.join(result.abis)}")
    if result.stripped:
        print(f"Stripped: {len(result.stripped)} shared object(s)")
    if not result.has_native_content():
        print("Native content: none (API only)")
    for message in result.diagnostics:
        print(f"   ⚠️  {message}")

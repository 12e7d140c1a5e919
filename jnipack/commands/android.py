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

import argparse
import sys

from jnipack.build_scripts.build_utils import PackagingError
from jnipack.commands._common import (
    add_property_arguments,
    add_strip_arguments,
    load_project,
    parse_command_args,
    print_result,
    resolve_output,
    run_android,
)
from jnipack.utils.context.namespace import CliNameSpace
from jnipack.utils.context.context import CliContext
from jnipack.utils.context.command import CliCommand


class Android(CliCommand):
    def description(self) -> str:
        return """Package the Android library (AAR).

The directory named by the androidNativeDir property becomes the AAR's
native-library section. It should contain one subdirectory per ABI:

    <androidNativeDir>/arm64-v8a/libfoo.so  ->  jniLibs/arm64-v8a/libfoo.so

When the property is not set (or the directory does not exist) the AAR is
produced with the Java API only. Shared objects are stripped with llvm-strip
except those matching android.keep_debug_symbols in JNIPACK.toml.

EXAMPLES:
    jnipack android -PandroidNativeDir=build/jniLibs
    jnipack android -PandroidNativeDir=build/jniLibs --symbols
    jnipack android --no-strip --output dist
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="jnipack android",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_property_arguments(parser)
        add_strip_arguments(parser)
        parser.add_argument(
            "--output",
            type=str,
            help="Output directory (default: android.output or ./target/android)",
        )
        return parse_command_args(parser, __file__)

    def exec(self, context: CliContext, args: CliNameSpace):
        print("=" * 80)
        print("JNIPACK Android - Package AAR")
        print("=" * 80)

        config, project_dir, properties = load_project(context, args)
        try:
            result = run_android(
                context,
                args,
                config,
                project_dir,
                properties,
                output_dir=resolve_output(context, args.output),
            )
        except PackagingError as e:
            print(f"\n❌ ERROR: {e}")
            sys.exit(1)

        print_result("Android Package Summary", result)
        print("\n✅ Android package complete!")
        return result

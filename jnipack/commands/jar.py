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
    load_project,
    parse_command_args,
    print_result,
    resolve_output,
    run_jar,
)
from jnipack.utils.context.namespace import CliNameSpace
from jnipack.utils.context.context import CliContext
from jnipack.utils.context.command import CliCommand


class Jar(CliCommand):
    def description(self) -> str:
        return """Package the JAR for plain JVM consumers.

The whole directory named by the jarNativeDir property is embedded under
META-INF/lib/, keeping its relative structure:

    <jarNativeDir>/linux-x86_64/libfoo.so  ->  META-INF/lib/linux-x86_64/libfoo.so

If the property is set but the directory does not exist, a warning is
printed and the JAR is produced without native libraries.

EXAMPLES:
    jnipack jar -PjarNativeDir=build/native
    jnipack jar --version 0.3.0 --output dist
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="jnipack jar",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_property_arguments(parser)
        parser.add_argument(
            "--output",
            type=str,
            help="Output directory (default: jar.output or ./target/java)",
        )
        return parse_command_args(parser, __file__)

    def exec(self, context: CliContext, args: CliNameSpace):
        print("=" * 80)
        print("JNIPACK Jar - Package JAR")
        print("=" * 80)

        config, project_dir, properties = load_project(context, args)
        try:
            result = run_jar(
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

        print_result("Jar Package Summary", result)
        print("\n✅ Jar package complete!")
        return result

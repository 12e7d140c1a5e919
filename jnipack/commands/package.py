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
    run_jar,
)
from jnipack.utils.context.namespace import CliNameSpace
from jnipack.utils.context.context import CliContext
from jnipack.utils.context.command import CliCommand

ALL_PLATFORMS = ["android", "jar"]


class Package(CliCommand):
    def description(self) -> str:
        return """Package both SDK artifacts: the Android AAR and the JAR.

Each pipeline resolves its own property (androidNativeDir, jarNativeDir);
either may be unset, in which case that artifact contains the Java API only.

EXAMPLES:
    # Package both artifacts from the same native build output
    jnipack package -PandroidNativeDir=build/jniLibs -PjarNativeDir=build/jniLibs

    # Package the JAR only
    jnipack package --platforms jar

OUTPUT STRUCTURE (default):
    target/
    ├── android/<artifact>-<version>.aar
    ├── android/<artifact>-<version>-SYMBOLS.zip    (with --symbols)
    └── java/<archive_base_name>-<version>.jar
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="jnipack package",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_property_arguments(parser)
        add_strip_arguments(parser)
        parser.add_argument(
            "--platforms",
            type=str,
            help="Comma-separated artifacts to package: android,jar (default: all)",
        )
        parser.add_argument(
            "--output",
            type=str,
            help="Put every artifact in this directory instead of the per-artifact defaults",
        )
        return parse_command_args(parser, __file__)

    def exec(self, context: CliContext, args: CliNameSpace):
        print("=" * 80)
        print("JNIPACK Package - Android AAR and JAR")
        print("=" * 80)

        platforms = ALL_PLATFORMS
        if args.platforms:
            platforms = [p.strip() for p in args.platforms.split(",") if p.strip()]
        unknown = [p for p in platforms if p not in ALL_PLATFORMS]
        if unknown:
            print(f"\n❌ ERROR: unknown platform(s): {', '.join(unknown)}")
            print(f"   Supported: {', '.join(ALL_PLATFORMS)}")
            sys.exit(1)

        config, project_dir, properties = load_project(context, args)
        output_dir = resolve_output(context, args.output)
        runners = {"android": run_android, "jar": run_jar}

        results = {}
        for platform in platforms:
            try:
                results[platform] = runners[platform](
                    context, args, config, project_dir, properties, output_dir=output_dir
                )
            except PackagingError as e:
                print(f"\n❌ ERROR: {platform} packaging failed: {e}")
                sys.exit(1)

        for platform, result in results.items():
            print_result(f"{platform.upper()} Package Summary", result)

        print(f"\n{'='*80}")
        print("Platform Status")
        print(f"{'='*80}\n")
        for platform, result in results.items():
            native = "native" if result.has_native_content() else "API only"
            print(f"  ✅ {platform.upper()} ({native})")

        print("\n✅ Package complete!")
        return results

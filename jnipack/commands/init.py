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

import os
import sys
import argparse
from copier import run_copy

from jnipack.build_scripts.build_config import CONFIG_FILE_NAME
from jnipack.commands._common import parse_command_args
from jnipack.utils.context.namespace import CliNameSpace
from jnipack.utils.context.context import CliContext
from jnipack.utils.context.command import CliCommand

TEMPLATE_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.realpath(__file__))), "template"
)


class Init(CliCommand):
    def description(self) -> str:
        return """
        Create a JNIPACK.toml in the current directory.

        By default, the command runs in non-interactive mode using default values.
        Use --interact to enable interactive mode with prompts.

        Examples:
            jnipack init
            jnipack init --interact
            jnipack init --data project_name=mylib --data native_dir=build/jniLibs
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="jnipack init",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "--data",
            action="append",
            help="Template data in KEY=VALUE format (can be used multiple times)",
        )
        parser.add_argument(
            "--interact",
            action="store_true",
            help="Enable interactive mode with prompts (default is non-interactive)",
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Overwrite an existing JNIPACK.toml",
        )
        return parse_command_args(parser, __file__)

    def exec(self, context: CliContext, args: CliNameSpace):
        current_dir = context.project_dir
        print(f"Initializing jnipack configuration in: '{current_dir}'")

        if os.path.exists(os.path.join(current_dir, CONFIG_FILE_NAME)) and not args.force:
            print(f"\n⚠️  WARNING: {CONFIG_FILE_NAME} already exists, use --force to overwrite it.")
            sys.exit(1)

        data = {}
        for item in args.data or []:
            if "=" in item:
                key, value = item.split("=", 1)
                data[key.strip()] = value

        run_copy(
            TEMPLATE_PATH,
            current_dir,
            data=data,
            unsafe=True,
            defaults=not args.interact,
            overwrite=True,
        )

        print(f"\n✅ Created {os.path.join(current_dir, CONFIG_FILE_NAME)}")
        print("\nNext steps:")
        print("  jnipack package -PandroidNativeDir=<dir> -PjarNativeDir=<dir>")

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
import importlib
import argparse

from jnipack.utils.context.namespace import CliNameSpace
from jnipack.utils.context.context import CliContext
from jnipack.utils.context.command import CliCommand

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """JNIPACK - JNI SDK Packaging Tool

Packages a directory of prebuilt JNI libraries (<abi>/lib*.so) into:
an Android library (AAR) and a plain JVM library (JAR)

USAGE:
    jnipack <command> [options]

COMMANDS:
    android     Package the Android AAR (jniLibs/<abi>/...)
    jar         Package the JAR (META-INF/lib/...)
    package     Package both artifacts
    init        Create a JNIPACK.toml in the current directory

EXAMPLES:
    jnipack android -PandroidNativeDir=build/jniLibs
    jnipack jar -PjarNativeDir=build/jniLibs
    jnipack package -PandroidNativeDir=out -PjarNativeDir=out --symbols
    jnipack init

For more information on a specific command:
    jnipack <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in sorted(os.listdir(os.path.join(SCRIPT_PATH, "commands"))):
            if command.startswith("_") or command.startswith("test_"):
                continue
            if command.endswith(".py"):
                arr.append(os.path.splitext(os.path.basename(command))[0])
        return arr

    def _parser(self, add_help=True, optional=False) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="jnipack",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=add_help,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs="?" if optional else None,
            choices=self.get_command_list(),
        )
        return parser

    def cli(self) -> CliNameSpace:
        # help for the root command only, "jnipack jar --help" goes to the subcommand
        if len(sys.argv) == 2 and sys.argv[1] in ["--help", "-h"]:
            self._parser().print_help()
            sys.exit(0)

        parser = self._parser(add_help=False, optional=True)
        args, unknown = parser.parse_known_args(sys.argv[1:2], namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self._parser().print_help()
            sys.exit(1)

        module = importlib.import_module(f"jnipack.commands.{args.subcommand}")
        klass = getattr(module, args.subcommand.capitalize())
        sub_cmd = klass()
        sub_cmd.exec(context, sub_cmd.cli())


def main():
    cmd = Cli()
    cmd.exec(CliContext(), cmd.cli())


if __name__ == "__main__":
    main()

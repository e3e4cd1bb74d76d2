#
# Copyright 2024 skillzpost Project Authors. All rights reserved.
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

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)

from skillzpost.utils.context.namespace import CliNameSpace
from skillzpost.utils.context.context import CliContext
from skillzpost.utils.context.command import CliCommand


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """skillzpost - Skillz post-processing for Unity iOS exports

Patches the Xcode project Unity exports so that it builds with the Skillz SDK:
the Podfile, the project build settings and frameworks, and generated sources.

USAGE:
    skillzpost <command> [options]

COMMANDS:
    podfile      Add the Skillz script phase and post_install block to the Podfile
    xcode        Set up the Xcode project (bitcode, frameworks, timestamp)
    postprocess  Run podfile and xcode in Unity's callback order
    sdk          Copy Skillz.framework into the export
    config       Show and validate SKILLZ.toml

EXAMPLES:
    skillzpost postprocess build/iOS                         # After BuildPlayer
    skillzpost xcode build/iOS --unity-version 2021.3.5f1    # Project only
    skillzpost sdk build/iOS --unity-project ~/MyGame        # Copy the framework
    skillzpost config                                        # Check SKILLZ.toml

For more information on a specific command:
    skillzpost <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if not command.startswith("_") and command.endswith(".py"):
                arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def _help_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="skillzpost",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            choices=self.get_command_list(),
        )
        return parser

    def cli(self) -> CliNameSpace:
        # Help for the main command only, not for 'skillzpost xcode --help'
        if len(sys.argv) == 2 and sys.argv[1] in ['--help', '-h']:
            self._help_parser().print_help()
            sys.exit(0)

        parser = argparse.ArgumentParser(
            prog="skillzpost",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=False,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs='?',
            choices=self.get_command_list(),
        )
        # parse only known args - this will NOT consume --help if present
        args, unknown = parser.parse_known_args(namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        if not args.subcommand:
            print("ERROR: No command specified\n")
            self._help_parser().print_help()
            sys.exit(1)

        # get module name
        module_name = f"{PACKAGE_NAME}.commands.{args.subcommand}"
        # get class name
        class_name = args.subcommand.capitalize()
        # import module
        module = importlib.import_module(module_name)
        # get class of module
        klass = getattr(module, class_name)
        # instance class
        sub_cmd = klass()
        # now execute the subcommand
        sub_cmd.exec(context, sub_cmd.cli())


def main():
    cmd = Cli()
    cmd.exec(CliContext(), cmd.cli())


if __name__ == "__main__":
    main()

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
import argparse

from skillzpost.utils.context.namespace import CliNameSpace
from skillzpost.utils.context.context import CliContext
from skillzpost.utils.context.command import CliCommand
from skillzpost.build_scripts.postprocess_ios import post_process_podfile
from skillzpost.commands._options import add_build_target_argument, add_export_path_argument


class Podfile(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to patch the Podfile of a Unity iOS export.

        Adds the Skillz postprocess script phase to the 'Unity-iPhone' target
        and a post_install block that builds the pods arm64-only with bitcode
        disabled. Run it before 'pod install'.

        Examples:
            skillzpost podfile build/iOS
            skillzpost podfile build/iOS --build-target iPhone
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="skillzpost podfile",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_export_path_argument(parser)
        add_build_target_argument(parser)
        module_name = os.path.splitext(os.path.basename(__file__))[0]
        input_argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(input_argv)
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        result = post_process_podfile(args.build_target, args.export_path)
        if result.is_failure():
            sys.exit(1)

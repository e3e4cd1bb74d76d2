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
from skillzpost.utils.xcode.sdk_files import SdkFileInstaller
from skillzpost.commands import _options


class Sdk(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to copy Skillz.framework into a Unity iOS export.

        The framework is taken from, in order:
        - [auto_build].sdk_path in SKILLZ.toml, when [auto_build].enabled is true
        - Assets/Plugins/iOS/Skillz.framework in the Unity project
        - a path you are prompted for

        Examples:
            skillzpost sdk build/iOS
            skillzpost sdk build/iOS --unity-project ~/MyGame
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="skillzpost sdk",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        _options.add_export_path_argument(parser)
        _options.add_unity_project_arguments(parser)
        module_name = os.path.splitext(os.path.basename(__file__))[0]
        input_argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(input_argv)
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        installer = SdkFileInstaller(
            args.export_path,
            assets_path=_options.assets_path(args),
            config=_options.load_config(args),
        )
        if not installer.install():
            sys.exit(1)

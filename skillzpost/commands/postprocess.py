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
from skillzpost.utils.log.log_util import log_error
from skillzpost.build_scripts.postprocess_ios import run_all
from skillzpost.commands import _options


class Postprocess(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to run every post-process step on a Unity iOS export,
        in the order Unity would: the Podfile first, then the Xcode project.

        Call it from your build script right after BuildPipeline.BuildPlayer.

        Examples:
            skillzpost postprocess build/iOS
            skillzpost postprocess build/iOS --unity-project ~/MyGame --config ci/SKILLZ.toml
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="skillzpost postprocess",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        _options.add_export_path_argument(parser)
        _options.add_build_target_argument(parser)
        _options.add_unity_project_arguments(parser)
        _options.add_unity_version_argument(parser)
        module_name = os.path.splitext(os.path.basename(__file__))[0]
        input_argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(input_argv)
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        try:
            version = _options.unity_version(args)
        except ValueError as e:
            log_error(str(e))
            sys.exit(1)

        result = run_all(
            args.build_target,
            args.export_path,
            assets_path=_options.assets_path(args),
            unity_version=version,
            config=_options.load_config(args),
        )
        if result.is_failure():
            sys.exit(1)

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
from skillzpost.utils.log.log_util import log_error, log_info
from skillzpost.commands import _options


class Config(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to show and validate the SKILLZ.toml in effect.

        Examples:
            skillzpost config
            skillzpost config --unity-project ~/MyGame
        """

    def cli(self) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="skillzpost config",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        _options.add_unity_project_arguments(parser)
        module_name = os.path.splitext(os.path.basename(__file__))[0]
        input_argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(input_argv)
        return args

    def exec(self, context: CliContext, args: CliNameSpace):
        config = _options.load_config(args)
        log_info("Skillz post-process configuration:\n")
        log_info(config.get_config_summary())

        is_valid, errors = config.validate()
        if not is_valid:
            log_info("")
            for error in errors:
                log_error(error)
            sys.exit(1)

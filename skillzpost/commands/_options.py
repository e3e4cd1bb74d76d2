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

"""Arguments shared by the subcommands."""

import os
from typing import Optional

from skillzpost.utils.log.log_util import log_warning
from skillzpost.utils.unity.build_target import UnityVersion, read_project_unity_version
from skillzpost.utils.unity.config import SkillzConfig


def add_export_path_argument(parser):
    parser.add_argument(
        "export_path",
        type=str,
        help="Directory Unity exported the Xcode project to",
    )


def add_build_target_argument(parser):
    parser.add_argument(
        "--build-target",
        type=str,
        default="iOS",
        help="Unity build target name (default: iOS)",
    )


def add_unity_project_arguments(parser):
    parser.add_argument(
        "--unity-project",
        type=str,
        default=None,
        help="Unity project root (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to SKILLZ.toml (default: <unity-project>/SKILLZ.toml)",
    )


def add_unity_version_argument(parser):
    parser.add_argument(
        "--unity-version",
        type=str,
        default=None,
        help="Unity editor version, e.g. 2019.4.1f1 (default: read from ProjectSettings/ProjectVersion.txt)",
    )


def unity_project_dir(args) -> str:
    return os.path.abspath(args.unity_project or os.getcwd())


def assets_path(args) -> str:
    return os.path.join(unity_project_dir(args), "Assets")


def load_config(args) -> SkillzConfig:
    return SkillzConfig.load(args.config, unity_project_dir(args))


def unity_version(args) -> Optional[UnityVersion]:
    if args.unity_version:
        return UnityVersion.parse(args.unity_version)
    version = read_project_unity_version(unity_project_dir(args))
    if version is None:
        log_warning("Unity version unknown, assuming Unity 2019.3 or newer")
    return version

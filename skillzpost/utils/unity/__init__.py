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

"""Unity editor environment helpers for skillzpost."""

from .build_target import (
    UnityVersion,
    is_ios_build_target,
    read_project_unity_version,
    system_is_macos,
)
from .config import SkillzConfig

__all__ = [
    'SkillzConfig',
    'UnityVersion',
    'is_ios_build_target',
    'read_project_unity_version',
    'system_is_macos',
]

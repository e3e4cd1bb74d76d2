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

"""Xcode export patching utilities for skillzpost."""

from .podfile import PodfilePatcher
from .project_settings import XcodeProjectSettings
from .sdk_files import SdkFileInstaller

__all__ = ['PodfilePatcher', 'XcodeProjectSettings', 'SdkFileInstaller']

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

"""
Build target and editor version checks.

Unity 4 names the iOS build target 'iPhone'; Unity 5 and later name it 'iOS'.
Editor versions look like '2019.3.0f1', '5.6.7f1' or '4.7.2f1'.
"""

import os
import platform
import re
from typing import Optional

IOS_BUILD_TARGETS = ("iPhone", "iOS")

PROJECT_VERSION_FILE = os.path.join("ProjectSettings", "ProjectVersion.txt")

_VERSION_PATTERN = re.compile(r"^\s*(\d+)\.(\d+)(?:\.(\d+))?")


def is_ios_build_target(build_target) -> bool:
    """Check whether a Unity build target name denotes iOS."""
    return str(build_target) in IOS_BUILD_TARGETS


def system_is_macos():
    """Check if current platform is macOS/Darwin."""
    return platform.system().lower() == "darwin"


class UnityVersion:
    """Major/minor part of a Unity editor version."""

    def __init__(self, major: int, minor: int = 0, raw: str = ""):
        self.major = major
        self.minor = minor
        self.raw = raw or f"{major}.{minor}"

    @classmethod
    def parse(cls, text: str) -> "UnityVersion":
        match = _VERSION_PATTERN.match(text or "")
        if not match:
            raise ValueError(f"Invalid Unity version: '{text}'")
        return cls(int(match.group(1)), int(match.group(2)), text.strip())

    def is_at_least(self, major: int, minor: int = 0) -> bool:
        return (self.major, self.minor) >= (major, minor)

    def __eq__(self, other):
        if not isinstance(other, UnityVersion):
            return NotImplemented
        return (self.major, self.minor) == (other.major, other.minor)

    def __repr__(self):
        return f"UnityVersion('{self.raw}')"


def has_unity_framework(version: Optional[UnityVersion]) -> bool:
    """
    Whether the export splits the player into UnityFramework.framework.

    Unity 2019.3 introduced the split. An unknown version is treated as current.
    """
    if version is None:
        return True
    return version.is_at_least(2019, 3)


def needs_legacy_source_patch(version: Optional[UnityVersion]) -> bool:
    """
    Whether Skillz+Unity.mm must be added to the Xcode project by hand.

    Only Unity 4 and older; later editors copy plugin sources themselves.
    """
    if version is None:
        return False
    return version.major < 5


def read_project_unity_version(unity_project_dir) -> Optional[UnityVersion]:
    """
    Read the editor version from ProjectSettings/ProjectVersion.txt.

    Returns:
        The parsed version, or None if the file is missing or has no version line
    """
    if not unity_project_dir:
        return None
    version_file = os.path.join(unity_project_dir, PROJECT_VERSION_FILE)
    if not os.path.isfile(version_file):
        return None
    with open(version_file, "r", encoding="utf-8") as f:
        for line in f:
            key, _, value = line.partition(":")
            if key.strip() == "m_EditorVersion" and value.strip():
                try:
                    return UnityVersion.parse(value.strip())
                except ValueError:
                    return None
    return None

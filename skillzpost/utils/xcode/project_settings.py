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
Xcode project editing for Unity iOS exports.

All parsing and writing of project.pbxproj is done by the pbxproj package
(mod-pbxproj); this module only decides what to change.
"""

import os
from typing import List, Optional

from pbxproj import XcodeProject
from pbxproj.pbxextensions.ProjectFiles import FileOptions, TreeType

from ..log.log_util import log_info
from ..unity.config import SkillzConfig

XCODE_PROJECT_RELATIVE_PATH = os.path.join("Unity-iPhone.xcodeproj", "project.pbxproj")

SYSTEM_FRAMEWORKS_DIR = "System/Library/Frameworks"
SYSTEM_LIBRARIES_DIR = "usr/lib"
FRAMEWORKS_GROUP = "Frameworks"
UNITY_FRAMEWORK = "UnityFramework.framework"


class XcodeProjectSettings:
    """
    Apply the Skillz build settings to an exported Xcode project.

    Use as a context manager; the project is saved when the block completes
    without raising:

        with XcodeProjectSettings.load(path, config) as settings:
            settings.disable_bitcode()
    """

    def __init__(self, project: XcodeProject, config: Optional[SkillzConfig] = None, path: Optional[str] = None):
        self.project = project
        self.config = config or SkillzConfig()
        self.path = path

    @classmethod
    def load(cls, pbxproj_path: str, config: Optional[SkillzConfig] = None) -> "XcodeProjectSettings":
        log_info(f"[Xcode] Loading the XCode project at '{pbxproj_path}'")
        return cls(XcodeProject.load(pbxproj_path), config, pbxproj_path)

    @property
    def main_target(self) -> str:
        return self.config.xcode.main_target

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.save()
        return False

    def save(self):
        self.project.save()
        log_info(f"[Xcode] Saved '{self.path or 'project.pbxproj'}'")

    def disable_bitcode(self):
        """Set ENABLE_BITCODE = NO for every target and configuration."""
        self.project.set_flags('ENABLE_BITCODE', 'NO')

    def modify_miscellaneous(self):
        """Apply the configured build settings and linker flags."""
        for key, value in self.config.xcode.build_settings.items():
            self.project.set_flags(key, value)

        if self.config.xcode.other_ldflags:
            self.project.add_other_ldflags(self.config.xcode.other_ldflags)

        # Skillz.framework is dynamic and is copied next to the project
        self.project.add_flags('LD_RUNPATH_SEARCH_PATHS', '@executable_path/Frameworks')
        self.project.add_flags('FRAMEWORK_SEARCH_PATHS', '$(PROJECT_DIR)')

    def add_frameworks(self) -> List[str]:
        """
        Link the system frameworks and libraries Skillz needs into the main target.

        Returns:
            Names of the references that were newly added
        """
        parent = self.project.get_or_create_group(FRAMEWORKS_GROUP)
        added = []

        for name in self.config.xcode.frameworks:
            if self._add_sdk_file(f"{SYSTEM_FRAMEWORKS_DIR}/{name}.framework", parent, weak=False):
                added.append(f"{name}.framework")

        for name in self.config.xcode.weak_frameworks:
            if self._add_sdk_file(f"{SYSTEM_FRAMEWORKS_DIR}/{name}.framework", parent, weak=True):
                added.append(f"{name}.framework")

        for name in self.config.xcode.libraries:
            if self._add_sdk_file(f"{SYSTEM_LIBRARIES_DIR}/{name}", parent, weak=False):
                added.append(name)

        if added:
            log_info(f"[Xcode] Added to '{self.main_target}': {', '.join(added)}")
        return added

    def add_unity_framework(self) -> bool:
        """
        Link UnityFramework.framework into the main target.

        Without it Skillz cannot find the game's app delegate (Unity 2019.3+).
        """
        options = FileOptions(weak=False, embed_framework=False)
        result = self.project.add_file(
            UNITY_FRAMEWORK,
            parent=self.project.get_or_create_group(FRAMEWORKS_GROUP),
            tree=TreeType.BUILT_PRODUCTS_DIR,
            target_name=self.main_target,
            force=False,
            file_options=options,
        )
        return bool(result)

    def add_source_file(self, source_path: str) -> bool:
        """Add a source file, by absolute path, to the main target."""
        log_info(f"[Xcode] Adding '{source_path}' to '{self.main_target}'")
        result = self.project.add_file(
            os.path.abspath(source_path),
            tree=TreeType.ABSOLUTE,
            target_name=self.main_target,
            force=False,
        )
        return bool(result)

    def _add_sdk_file(self, path: str, parent, weak: bool) -> bool:
        options = FileOptions(weak=weak, embed_framework=False)
        result = self.project.add_file(
            path,
            parent=parent,
            tree=TreeType.SDKROOT,
            target_name=self.main_target,
            force=False,
            file_options=options,
        )
        return bool(result)

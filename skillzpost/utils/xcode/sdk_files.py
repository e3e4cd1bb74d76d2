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
Copy Skillz.framework into an exported Xcode project.

Not part of the automatic post-process: run it by hand (skillzpost sdk) when
the framework is not delivered through CocoaPods.
"""

import os
import shutil
from typing import Callable, Optional

from ..log.log_util import log_error, log_info
from ..unity.config import SkillzConfig

FRAMEWORK_NAME = "Skillz.framework"
SUPPORT_EMAIL = "integrations@skillz.com"


def copy_folder(old_path: str, new_path: str) -> bool:
    """
    Recursively copy the contents of old_path into new_path.

    Returns:
        False if old_path (or any of its subdirectories) does not exist
    """
    if not os.path.isdir(old_path):
        return False
    os.makedirs(new_path, exist_ok=True)

    for entry in sorted(os.listdir(old_path)):
        src = os.path.join(old_path, entry)
        dst = os.path.join(new_path, entry)
        if os.path.isdir(src):
            if not copy_folder(src, dst):
                return False
        else:
            shutil.copy2(src, dst)

    return True


class SdkFileInstaller:
    """Locate Skillz.framework and copy it next to the Xcode project."""

    def __init__(
        self,
        export_path: str,
        assets_path: Optional[str] = None,
        config: Optional[SkillzConfig] = None,
        prompt: Callable[[str], str] = input,
    ):
        self.export_path = export_path
        self.assets_path = assets_path
        self.config = config or SkillzConfig()
        self.prompt = prompt

    @property
    def destination(self) -> str:
        return os.path.join(self.export_path, FRAMEWORK_NAME)

    def plugin_sdk_path(self) -> Optional[str]:
        if not self.assets_path:
            return None
        return os.path.join(self.assets_path, "Plugins", "iOS", FRAMEWORK_NAME)

    def locate_sdk(self) -> Optional[str]:
        """
        Find the framework to copy.

        Returns:
            The framework path, or None if the user canceled the prompt
        """
        ask_for_path = True
        sdk_path = ".dummy"
        auto_build = self.config.auto_build
        if auto_build.enabled:
            if os.path.isdir(auto_build.sdk_path):
                ask_for_path = False
                sdk_path = auto_build.sdk_path
            else:
                log_error(
                    f"[SDK] Skillz auto-build failed! Couldn't find the directory '{auto_build.sdk_path}'; "
                    "please locate it manually."
                )

        special_sdk_path = self.plugin_sdk_path()
        if special_sdk_path and os.path.isdir(special_sdk_path):
            log_info(f"[SDK] Adding {FRAMEWORK_NAME} found at '{special_sdk_path}'")
            return special_sdk_path

        while ask_for_path and os.path.basename(os.path.normpath(sdk_path)) != FRAMEWORK_NAME:
            sdk_path = self.prompt(f"Select the {FRAMEWORK_NAME} folder (empty to cancel): ").strip()
            if sdk_path == "":
                return None
            sdk_path = os.path.expanduser(sdk_path)

        return sdk_path

    def install(self) -> bool:
        """
        Copy the SDK framework into the export.

        Returns:
            False if copying failed; True if copied or canceled by the user
        """
        sdk_path = self.locate_sdk()
        if sdk_path is None:
            log_info(
                f"[SDK] You canceled the auto-copying of the '{FRAMEWORK_NAME}'. "
                f"You must copy it yourself into '{self.export_path}' before building the XCode project."
            )
            return True

        new_dir = self.destination
        try:
            if os.path.isdir(new_dir):
                shutil.rmtree(new_dir)
            if not copy_folder(sdk_path, new_dir):
                if os.path.isdir(new_dir):
                    shutil.rmtree(new_dir)
                raise IOError("Couldn't copy the .framework contents")
        except OSError as e:
            self.print_sdk_file_error(e, sdk_path)
            return False

        log_info(f"[SDK] Copied '{sdk_path}' to '{new_dir}'")
        return True

    def print_sdk_file_error(self, e: Exception, sdk_path: str):
        log_error(
            f"[SDK] Skillz SDK setup failed! Failed to copy the Skillz SDK files. "
            f"Please manually copy '{sdk_path}' to '{self.export_path}/'. "
            f"If this error persists, please contact {SUPPORT_EMAIL}.\n\nError: {e}"
        )

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
Podfile patching for Unity iOS exports.

Unity writes a Podfile next to the exported Xcode project. The Skillz
framework ships a postprocess.sh that must run as a build phase of the main
target, and the pods project has to build arm64 only with bitcode disabled.
"""

import os
from typing import List

from ..context.result import CliResult
from ..log.log_util import log_info, log_warning

PODFILE_NAME = "Podfile"

MAIN_TARGET_LINE = "target 'Unity-iPhone' do"

SCRIPT_PHASE_LINES = [
    "  script_phase :name => 'Skillz Postprocess', :script => 'if [ -e \"${BUILT_PRODUCTS_DIR}/${FRAMEWORKS_FOLDER_PATH}/Skillz.framework/postprocess.sh\" ]; then",
    "    /bin/sh \"${BUILT_PRODUCTS_DIR}/${FRAMEWORKS_FOLDER_PATH}/Skillz.framework/postprocess.sh\"",
    "  fi'",
]

POST_INSTALL_LINES = [
    "post_install do |installer|",
    "  installer.pods_project.build_configurations.each do |config|",
    "    config.build_settings['EXCLUDED_ARCHS[sdk=iphonesimulator*]'] = 'arm64'",
    "    config.build_settings['ARCHS'] = 'arm64'",
    "    config.build_settings['ENABLE_BITCODE'] = 'NO'",
    "  end",
    "end",
]

MODIFIED_FOOTER = "# This podfile has been modified by the Skillz export"


class PodfilePatcher:
    """Add the Skillz script phase and post_install block to a Podfile."""

    def __init__(self, podfile_path: str):
        self.podfile_path = podfile_path

    @classmethod
    def for_export(cls, export_path: str) -> "PodfilePatcher":
        return cls(os.path.join(export_path, PODFILE_NAME))

    def read_lines(self) -> List[str]:
        with open(self.podfile_path, "r", encoding="utf-8") as f:
            return f.read().splitlines()

    def write_lines(self, lines: List[str]):
        with open(self.podfile_path, "w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")

    def apply(self, lines: List[str]) -> List[str]:
        """
        Return the patched lines.

        Raises:
            ValueError: if the main target line is missing
        """
        try:
            index = lines.index(MAIN_TARGET_LINE)
        except ValueError:
            raise ValueError(f"Could not find \"{MAIN_TARGET_LINE}\"")

        patched = lines[: index + 1] + SCRIPT_PHASE_LINES + lines[index + 1:]
        patched.extend(POST_INSTALL_LINES)
        patched.append(MODIFIED_FOOTER)
        return patched

    def patch(self) -> CliResult:
        """
        Patch the Podfile in place.

        Returns:
            CliResult with value True if the file was written, False if it was
            already patched; error message if the Podfile could not be patched
        """
        if not os.path.isfile(self.podfile_path):
            msg = f"[Podfile] No Podfile at '{self.podfile_path}'"
            log_warning(msg)
            return CliResult.failure(msg)

        lines = self.read_lines()
        if MODIFIED_FOOTER in lines:
            log_info(f"[Podfile] '{self.podfile_path}' was already modified by the Skillz export")
            return CliResult.success(False)

        try:
            patched = self.apply(lines)
        except ValueError as e:
            msg = f"[Podfile] {e} in '{self.podfile_path}'"
            log_warning(msg)
            return CliResult.failure(msg)

        self.write_lines(patched)
        log_info(f"[Podfile] Added Skillz script phase and post_install block to '{self.podfile_path}'")
        return CliResult.success(True)

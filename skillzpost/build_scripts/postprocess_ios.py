#!/usr/bin/env python3
# -- coding: utf-8 --
#
# postprocess_ios.py
# skillzpost
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
Post-build processing of a Unity iOS export.

Unity runs post-process callbacks in priority order after writing the Xcode
project. Two hooks are provided here:

- post_process_podfile (priority 45): right before `pod install`, adds the
  Skillz script phase and the post_install block to the Podfile.
- on_post_process_build (priority 9090): edits the Xcode project (bitcode,
  build settings, frameworks), patches Skillz+Unity.mm on old editors and
  stamps the build time into MainApp/main.mm.

A `.skillzTouch` file in the export marks an export as processed. Appending
to an existing export therefore leaves the project alone.

Usage:
    python3 -m skillzpost.build_scripts.postprocess_ios <export_path> [--build-target iOS] [--unity-version 2019.4.1f1]
"""

import os
import sys
from datetime import datetime
from typing import Optional

from skillzpost.utils.context.result import CliResult
from skillzpost.utils.log.log_util import log_error, log_info, log_warning
from skillzpost.utils.unity.build_target import (
    UnityVersion,
    has_unity_framework,
    is_ios_build_target,
    needs_legacy_source_patch,
    system_is_macos,
)
from skillzpost.utils.unity.config import SkillzConfig
from skillzpost.utils.xcode.podfile import PodfilePatcher
from skillzpost.utils.xcode.project_settings import XCODE_PROJECT_RELATIVE_PATH, XcodeProjectSettings
from skillzpost.utils.xcode import sources

# Unity callback priorities; lower runs first
PODFILE_CALLBACK_ORDER = 45
PROJECT_CALLBACK_ORDER = 9090

# Tracks whether a build is appending or replacing
CHECK_APPEND_FILE_NAME = ".skillzTouch"


def post_process_podfile(build_target, export_path: str) -> CliResult:
    """Patch the Podfile of an iOS export; other targets are ignored."""
    if not is_ios_build_target(build_target):
        return CliResult.success(False)

    try:
        return PodfilePatcher.for_export(export_path).patch()
    except (OSError, UnicodeDecodeError) as e:
        msg = f"[Podfile] Failed to patch the Podfile: {e}"
        log_error(msg)
        return CliResult.failure(msg)


def check_append_file(export_path: str) -> str:
    return os.path.join(export_path, CHECK_APPEND_FILE_NAME)


def edit_xcode_project(
    export_path: str,
    assets_path: Optional[str],
    unity_version: Optional[UnityVersion],
    config: SkillzConfig,
):
    """Apply all project.pbxproj changes and save. Raises on any failure."""
    xcode_project_path = os.path.join(export_path, XCODE_PROJECT_RELATIVE_PATH)

    with XcodeProjectSettings.load(xcode_project_path, config) as xcode_project_settings:
        xcode_project_settings.disable_bitcode()
        xcode_project_settings.modify_miscellaneous()
        xcode_project_settings.add_frameworks()

        if has_unity_framework(unity_version):
            xcode_project_settings.add_unity_framework()

        if needs_legacy_source_patch(unity_version):
            if assets_path:
                xcode_project_settings.add_source_file(sources.assets_skillz_unity_source(assets_path))
            else:
                log_warning("[Skillz] Unity Assets path unknown, Skillz+Unity.mm not added to the project")
            skillz_unity_path = sources.exported_skillz_unity_source(export_path)
            sources.set_allow_skillz_exit(skillz_unity_path, config.settings.allow_skillz_exit)
            sources.set_game_has_sync_bot(skillz_unity_path, config.settings.has_sync_bot)


def on_post_process_build(
    build_target,
    export_path: str,
    assets_path: Optional[str] = None,
    unity_version: Optional[UnityVersion] = None,
    config: Optional[SkillzConfig] = None,
    now: Optional[datetime] = None,
) -> CliResult:
    """
    Set up the exported Xcode project for Skillz.

    Returns:
        CliResult with value True if the export was processed, False if it was
        skipped as already processed; error message on failure
    """
    # Unity 4 uses 'iPhone' for the enum value; Unity 5 changes it to 'iOS'.
    if not is_ios_build_target(build_target):
        msg = "Skillz cannot be set up for a platform other than iOS."
        log_warning(msg)
        return CliResult.failure(msg)

    if not system_is_macos():
        msg = "Skillz cannot be set up for XCode automatically on a platform other than OSX."
        log_error(msg)
        return CliResult.failure(msg)

    if not os.path.isdir(export_path):
        msg = f"Export directory '{export_path}' does not exist."
        log_error(msg)
        return CliResult.failure(msg)

    # An existing marker means this is an append build; nothing to modify.
    marker = check_append_file(export_path)
    if os.path.exists(marker):
        log_info(f"[Skillz] '{export_path}' was already set up for Skillz, skipping")
        return CliResult.success(False)

    try:
        open(marker, "w").close()
    except OSError as e:
        msg = f"Could not create '{marker}': {e}"
        log_error(msg)
        return CliResult.failure(msg)

    config = config or SkillzConfig()
    try:
        edit_xcode_project(export_path, assets_path, unity_version, config)
    except Exception as e:
        msg = "Skillz automated XCode editing failed!"
        log_error(f"{msg} {type(e).__name__}: {e}")
        return CliResult.failure(msg)

    try:
        sources.add_timestamp(export_path, now)
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to add the build timestamp: {e}"
        log_error(msg)
        return CliResult.failure(msg)

    log_info(f"[Skillz] Finished setting up '{export_path}'")
    return CliResult.success(True)


def run_all(
    build_target,
    export_path: str,
    assets_path: Optional[str] = None,
    unity_version: Optional[UnityVersion] = None,
    config: Optional[SkillzConfig] = None,
) -> CliResult:
    """
    Run both hooks in Unity's callback order.

    A Podfile failure is logged and does not stop the project step, matching
    how Unity keeps invoking later callbacks. The result fails if either hook
    failed.
    """
    hooks = [
        (PODFILE_CALLBACK_ORDER, lambda: post_process_podfile(build_target, export_path)),
        (
            PROJECT_CALLBACK_ORDER,
            lambda: on_post_process_build(build_target, export_path, assets_path, unity_version, config),
        ),
    ]
    results = [hook() for _, hook in sorted(hooks, key=lambda item: item[0])]
    failures = [r.get_error() for r in results if r.is_failure()]
    if failures:
        return CliResult.failure("; ".join(failures))
    return results[-1]


# Command-line interface for the post-process
#
# Usage:
#   python -m skillzpost.build_scripts.postprocess_ios build/iOS  # Both hooks
#   python -m skillzpost.build_scripts.postprocess_ios build/iOS --podfile-only  # Podfile hook only
#   python -m skillzpost.build_scripts.postprocess_ios build/iOS --unity-version 4.7.2  # Legacy editor
if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Post-process a Unity iOS export for Skillz",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("export_path", help="Directory Unity exported the Xcode project to")
    parser.add_argument("--build-target", default="iOS", help="Unity build target (default: iOS)")
    parser.add_argument("--assets-path", default=None, help="Unity project Assets directory")
    parser.add_argument("--unity-version", default=None, help="Unity editor version, e.g. 2019.4.1f1")
    parser.add_argument("--podfile-only", action="store_true", help="Only patch the Podfile")

    args = parser.parse_args()

    if args.podfile_only:
        result = post_process_podfile(args.build_target, args.export_path)
    else:
        version = UnityVersion.parse(args.unity_version) if args.unity_version else None
        result = run_all(args.build_target, args.export_path, args.assets_path, version)
    sys.exit(0 if result.is_success() else 1)

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

"""In-place patches of generated Objective-C sources."""

import os
from datetime import datetime
from typing import Optional

from ..log.log_util import log_info, log_warning

SKILLZ_UNITY_SOURCE = "Skillz+Unity.mm"
SKILLZ_UNITY_RELATIVE_DIR = os.path.join("Skillz", "Internal", "Build", "iOS", "IncludeInXcode")

MAIN_SOURCE_RELATIVE_PATH = os.path.join("MainApp", "main.mm")
RETURN_ANCHOR = "return 0;"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def exported_skillz_unity_source(export_path: str) -> str:
    """Path of Skillz+Unity.mm after Unity copied it into the export."""
    return os.path.join(export_path, "Libraries", SKILLZ_UNITY_RELATIVE_DIR, SKILLZ_UNITY_SOURCE)


def assets_skillz_unity_source(assets_path: str) -> str:
    """Path of Skillz+Unity.mm inside the Unity project's Assets folder."""
    return os.path.join(assets_path, SKILLZ_UNITY_RELATIVE_DIR, SKILLZ_UNITY_SOURCE)


def _yes_no(flag: bool) -> str:
    return "YES" if flag else "NO"


def replace_in_first_line(path: str, anchor: str, replacement: str) -> bool:
    """
    Replace `anchor` on the first line that contains it.

    Returns:
        False, with a warning logged, if the file or the anchor is missing
    """
    if not os.path.isfile(path):
        log_warning(f"[Skillz] Could not find '{path}'!")
        return False

    # newline="" keeps CRLF line endings as they are
    with open(path, "r", encoding="utf-8", newline="") as f:
        lines = f.read().splitlines(keepends=True)

    for index, line in enumerate(lines):
        if anchor in line:
            break
    else:
        log_warning(f"[Skillz] Could not find '{anchor}'!")
        return False

    lines[index] = lines[index].replace(anchor, replacement)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("".join(lines))
    return True


def set_allow_skillz_exit(skillz_unity_path: str, allow_exit: bool) -> bool:
    log_info(f"[Skillz] Setting allowExit at '{skillz_unity_path}'")
    return replace_in_first_line(skillz_unity_path, "allowExit:YES", f"allowExit:{_yes_no(allow_exit)}")


def set_game_has_sync_bot(skillz_unity_path: str, has_sync_bot: bool) -> bool:
    log_info(f"[Skillz] Setting game has sync bot at '{skillz_unity_path}'")
    return replace_in_first_line(
        skillz_unity_path, "setGameHasSyncBot:NO", f"setGameHasSyncBot:{_yes_no(has_sync_bot)}"
    )


def add_timestamp(export_path: str, now: Optional[datetime] = None) -> bool:
    """
    Log the build time from main() of the exported app.

    The first `return 0;` in MainApp/main.mm is preceded by an NSLog call.
    """
    file_path = os.path.join(export_path, MAIN_SOURCE_RELATIVE_PATH)
    if not os.path.isfile(file_path):
        log_warning(f"[Skillz] Could not find '{file_path}', build timestamp not added")
        return False

    with open(file_path, "r", encoding="utf-8", newline="") as f:
        contents = f.read()

    if RETURN_ANCHOR not in contents:
        log_warning(f"[Skillz] Could not find '{RETURN_ANCHOR}' in '{file_path}'")
        return False

    line_ending = "\r\n" if "\r\n" in contents else "\n"
    stamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
    contents = contents.replace(
        RETURN_ANCHOR, f"NSLog(@\"Build Time = {stamp}\");{line_ending}\t\t{RETURN_ANCHOR}", 1
    )

    with open(file_path, "w", encoding="utf-8", newline="") as f:
        f.write(contents)
    log_info(f"[Skillz] Added build timestamp {stamp} to '{file_path}'")
    return True

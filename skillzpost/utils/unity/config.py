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
Skillz post-process configuration handler.

Reads SKILLZ.toml from the Unity project root. Every key is optional:

    [settings]
    allow_skillz_exit = true
    has_sync_bot = false

    [auto_build]
    enabled = false
    is_portrait = false
    sdk_path = "${HOME}/Downloads/sdk_ios_10.1.19/Skillz.framework"

    [xcode]
    main_target = "Unity-iPhone"
    frameworks = ["StoreKit", "WebKit"]
    weak_frameworks = ["UserNotifications"]
    libraries = ["libz.tbd"]
    other_ldflags = ["-ObjC"]

    [xcode.build_settings]
    CLANG_ENABLE_MODULES = "YES"
"""

import os
import re
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

if sys.version_info >= (3, 11, 0, "alpha", 7):
    import tomllib
else:
    import tomli as tomllib

from ..log.log_util import log_error, log_warning

CONFIG_FILE_NAME = "SKILLZ.toml"

DEFAULT_SDK_PATH = "/Users/myUsername/Downloads/sdk_ios_10.1.19/Skillz.framework"

DEFAULT_MAIN_TARGET = "Unity-iPhone"

DEFAULT_FRAMEWORKS = [
    "AdSupport",
    "AudioToolbox",
    "AVFoundation",
    "CFNetwork",
    "CoreGraphics",
    "CoreLocation",
    "CoreMotion",
    "CoreTelephony",
    "CoreText",
    "MessageUI",
    "MobileCoreServices",
    "PassKit",
    "QuartzCore",
    "Security",
    "StoreKit",
    "SystemConfiguration",
    "WebKit",
]

DEFAULT_WEAK_FRAMEWORKS = [
    "Contacts",
    "SafariServices",
    "UserNotifications",
]

DEFAULT_LIBRARIES = [
    "libc++.tbd",
    "libsqlite3.tbd",
    "libz.tbd",
]

DEFAULT_OTHER_LDFLAGS = ["-ObjC"]

DEFAULT_BUILD_SETTINGS = {
    "CLANG_ENABLE_MODULES": "YES",
    "ALWAYS_EMBED_SWIFT_STANDARD_LIBRARIES": "YES",
    "GCC_ENABLE_OBJC_EXCEPTIONS": "YES",
}


@dataclass
class SkillzSettings:
    """Runtime switches baked into Skillz+Unity.mm."""
    allow_skillz_exit: bool = True
    has_sync_bot: bool = False


@dataclass
class AutoBuildSettings:
    """Unattended builds: use these values instead of prompting."""
    enabled: bool = False
    is_portrait: bool = False
    sdk_path: str = DEFAULT_SDK_PATH


@dataclass
class XcodeSettings:
    """What gets added to the exported Xcode project."""
    main_target: str = DEFAULT_MAIN_TARGET
    frameworks: List[str] = field(default_factory=lambda: list(DEFAULT_FRAMEWORKS))
    weak_frameworks: List[str] = field(default_factory=lambda: list(DEFAULT_WEAK_FRAMEWORKS))
    libraries: List[str] = field(default_factory=lambda: list(DEFAULT_LIBRARIES))
    other_ldflags: List[str] = field(default_factory=lambda: list(DEFAULT_OTHER_LDFLAGS))
    build_settings: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_BUILD_SETTINGS))


class SkillzConfig:
    """Handle skillzpost configuration."""

    def __init__(self, config: Optional[Dict[str, Any]] = None, config_path: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config: Configuration dictionary as parsed from SKILLZ.toml
            config_path: Where the dictionary came from, for display only
        """
        self.raw_config = config or {}
        self.config_path = config_path

        settings_config = self.raw_config.get('settings', {})
        self.settings = SkillzSettings(
            allow_skillz_exit=bool(settings_config.get('allow_skillz_exit', True)),
            has_sync_bot=bool(settings_config.get('has_sync_bot', False)),
        )

        auto_build_config = self.raw_config.get('auto_build', {})
        self.auto_build = AutoBuildSettings(
            enabled=bool(auto_build_config.get('enabled', False)),
            is_portrait=bool(auto_build_config.get('is_portrait', False)),
            sdk_path=self._expand_env(auto_build_config.get('sdk_path', DEFAULT_SDK_PATH)),
        )

        self.xcode = self._parse_xcode_settings()

    @classmethod
    def load(cls, config_path: Optional[str] = None, unity_project_dir: Optional[str] = None) -> "SkillzConfig":
        """
        Load configuration from a TOML file.

        Args:
            config_path: Explicit path to the TOML file
            unity_project_dir: Unity project root searched for SKILLZ.toml

        Returns:
            The loaded configuration, or defaults if the file is missing or invalid
        """
        if not config_path:
            config_path = os.path.join(unity_project_dir or os.getcwd(), CONFIG_FILE_NAME)

        if not os.path.isfile(config_path):
            log_warning(f"{CONFIG_FILE_NAME} not found at {config_path}, using default configuration values")
            return cls()

        try:
            with open(config_path, 'rb') as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            log_error(f"Failed to parse {config_path}: {e}")
            log_error("Using default configuration values")
            return cls()

        return cls(data, config_path)

    def _expand_env(self, value: str) -> str:
        """
        Expand environment variables in configuration values.

        Supports ${VAR_NAME} and $VAR_NAME syntax.
        """
        if not isinstance(value, str):
            return value

        # Pattern for ${VAR_NAME}
        pattern1 = re.compile(r'\$\{([^}]+)\}')
        value = pattern1.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

        # Pattern for $VAR_NAME
        pattern2 = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
        value = pattern2.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

        return value

    def _expand_list(self, values, default: List[str]) -> List[str]:
        if values is None:
            return list(default)
        if isinstance(values, str):
            values = [v.strip() for v in values.split(',') if v.strip()]
        return [self._expand_env(v) for v in values]

    def _parse_xcode_settings(self) -> XcodeSettings:
        """Parse Xcode project settings from config."""
        xcode_config = self.raw_config.get('xcode', {})

        build_settings = dict(DEFAULT_BUILD_SETTINGS)
        for key, value in xcode_config.get('build_settings', {}).items():
            if isinstance(value, bool):
                value = "YES" if value else "NO"
            build_settings[key] = self._expand_env(str(value))

        return XcodeSettings(
            main_target=self._expand_env(xcode_config.get('main_target', DEFAULT_MAIN_TARGET)),
            frameworks=self._expand_list(xcode_config.get('frameworks'), DEFAULT_FRAMEWORKS),
            weak_frameworks=self._expand_list(xcode_config.get('weak_frameworks'), DEFAULT_WEAK_FRAMEWORKS),
            libraries=self._expand_list(xcode_config.get('libraries'), DEFAULT_LIBRARIES),
            other_ldflags=self._expand_list(xcode_config.get('other_ldflags'), DEFAULT_OTHER_LDFLAGS),
            build_settings=build_settings,
        )

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Validate the configuration.

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        errors = []

        if not self.xcode.main_target:
            errors.append("xcode.main_target is required")

        for name in self.xcode.frameworks + self.xcode.weak_frameworks:
            if name.endswith('.framework'):
                errors.append(f"Framework '{name}' must be given without the .framework suffix")

        both = set(self.xcode.frameworks) & set(self.xcode.weak_frameworks)
        for name in sorted(both):
            errors.append(f"Framework '{name}' is listed as both strong and weak")

        for name in self.xcode.libraries:
            if not (name.endswith('.tbd') or name.endswith('.dylib')):
                errors.append(f"Library '{name}' must be a .tbd or .dylib name")

        if self.auto_build.enabled and os.path.basename(self.auto_build.sdk_path) != 'Skillz.framework':
            errors.append(f"auto_build.sdk_path must point at Skillz.framework: {self.auto_build.sdk_path}")

        return len(errors) == 0, errors

    def get_config_summary(self) -> str:
        """Get a summary of the configuration for display."""
        lines = [
            f"  Config File: {self.config_path or '(defaults)'}",
            f"  Allow Skillz Exit: {self.settings.allow_skillz_exit}",
            f"  Has Sync Bot: {self.settings.has_sync_bot}",
        ]

        if self.auto_build.enabled:
            lines.append(f"  Auto Build: Enabled")
            lines.append(f"    Portrait: {self.auto_build.is_portrait}")
            lines.append(f"    SDK Path: {self.auto_build.sdk_path}")
        else:
            lines.append(f"  Auto Build: Disabled")

        lines.append(f"  Xcode Main Target: {self.xcode.main_target}")
        lines.append(f"    Frameworks: {', '.join(self.xcode.frameworks)}")
        if self.xcode.weak_frameworks:
            lines.append(f"    Weak Frameworks: {', '.join(self.xcode.weak_frameworks)}")
        lines.append(f"    Libraries: {', '.join(self.xcode.libraries)}")
        lines.append(f"    OTHER_LDFLAGS: {' '.join(self.xcode.other_ldflags)}")
        for key, value in self.xcode.build_settings.items():
            lines.append(f"    {key} = {value}")

        return '\n'.join(lines)

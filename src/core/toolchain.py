"""Toolchain environment (Flutter Gradle plugin metadata).

The plugin exposes SDK levels and the app version to the build script. Here
they are read from `local.properties` and overridden by explicit settings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from core.config import AppSettings
from core.domain.errors import MalformedConfigEntry
from core.domain.models import BuildProperties, SdkVersions, ToolchainEnvironment

logger = logging.getLogger(__name__)

# Defaults of the Flutter Gradle plugin (FlutterExtension).
FLUTTER_COMPILE_SDK = 35
FLUTTER_MIN_SDK = 21
FLUTTER_TARGET_SDK = 35
FLUTTER_NDK_VERSION = "26.3.11579264"

DEFAULT_VERSION_CODE = 1
DEFAULT_VERSION_NAME = "1.0"

T = TypeVar("T")


def _int_entry(local: BuildProperties, key: str) -> int | None:
    raw = local.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise MalformedConfigEntry(
            reason=f"{key} must be an integer, got {raw!r}",
            source=local.source,
        ) from exc


def _str_entry(local: BuildProperties, key: str) -> str | None:
    raw = local.get(key)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _path_entry(local: BuildProperties, key: str) -> Path | None:
    raw = _str_entry(local, key)
    return Path(raw) if raw else None


def _first(*values: T | None) -> T | None:
    for value in values:
        if value is not None:
            return value
    return None


def load_toolchain_environment(local: BuildProperties, settings: AppSettings) -> ToolchainEnvironment:
    """Build the toolchain environment.

    Precedence per value: settings, then local.properties, then plugin default.
    """

    sdk = SdkVersions(
        compile_sdk=_first(
            settings.compile_sdk, _int_entry(local, "flutter.compileSdkVersion"), FLUTTER_COMPILE_SDK
        ),
        min_sdk=_first(settings.min_sdk, _int_entry(local, "flutter.minSdkVersion"), FLUTTER_MIN_SDK),
        target_sdk=_first(
            settings.target_sdk, _int_entry(local, "flutter.targetSdkVersion"), FLUTTER_TARGET_SDK
        ),
        ndk_version=_first(settings.ndk_version, _str_entry(local, "flutter.ndkVersion"), FLUTTER_NDK_VERSION),
    )

    env = ToolchainEnvironment(
        sdk=sdk,
        version_code=_first(settings.version_code, _int_entry(local, "flutter.versionCode"), DEFAULT_VERSION_CODE),
        version_name=_first(settings.version_name, _str_entry(local, "flutter.versionName"), DEFAULT_VERSION_NAME),
        flutter_sdk=_path_entry(local, "flutter.sdk"),
        android_sdk=_path_entry(local, "sdk.dir"),
    )
    logger.debug(
        "Toolchain: compileSdk=%d minSdk=%d targetSdk=%d ndk=%s version=%s (%d)",
        sdk.compile_sdk,
        sdk.min_sdk,
        sdk.target_sdk,
        sdk.ndk_version,
        env.version_name,
        env.version_code,
    )
    return env

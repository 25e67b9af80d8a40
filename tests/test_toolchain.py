from pathlib import Path

import pytest
from pydantic import ValidationError

from core.domain.errors import MalformedConfigEntry
from core.domain.models import BuildProperties
from core.toolchain import (
    DEFAULT_VERSION_CODE,
    DEFAULT_VERSION_NAME,
    FLUTTER_COMPILE_SDK,
    FLUTTER_MIN_SDK,
    FLUTTER_NDK_VERSION,
    FLUTTER_TARGET_SDK,
    load_toolchain_environment,
)


def _local(**entries):
    return BuildProperties(entries=entries)


class TestLoadToolchainEnvironment:
    """SDK levels and version precedence: settings > local.properties > plugin defaults."""

    def test_plugin_defaults(self, make_settings):
        env = load_toolchain_environment(BuildProperties(), make_settings())

        assert env.sdk.compile_sdk == FLUTTER_COMPILE_SDK
        assert env.sdk.min_sdk == FLUTTER_MIN_SDK
        assert env.sdk.target_sdk == FLUTTER_TARGET_SDK
        assert env.sdk.ndk_version == FLUTTER_NDK_VERSION
        assert env.version_code == DEFAULT_VERSION_CODE
        assert env.version_name == DEFAULT_VERSION_NAME
        assert env.flutter_sdk is None
        assert env.android_sdk is None

    def test_local_properties_override_defaults(self, make_settings):
        local = _local(
            **{
                "flutter.minSdkVersion": "23",
                "flutter.compileSdkVersion": "34",
                "flutter.targetSdkVersion": "34",
                "flutter.versionCode": " 12 ",
                "flutter.versionName": "2.0.1",
                "flutter.sdk": "/opt/flutter",
                "sdk.dir": "/opt/android-sdk",
            }
        )

        env = load_toolchain_environment(local, make_settings())

        assert (env.sdk.compile_sdk, env.sdk.min_sdk, env.sdk.target_sdk) == (34, 23, 34)
        assert env.version_code == 12
        assert env.version_name == "2.0.1"
        assert env.flutter_sdk == Path("/opt/flutter")
        assert env.android_sdk == Path("/opt/android-sdk")

    def test_settings_override_local_properties(self, make_settings):
        local = _local(**{"flutter.minSdkVersion": "23", "flutter.versionName": "2.0.1"})

        env = load_toolchain_environment(local, make_settings(min_sdk=26, version_name="3.0.0"))

        assert env.sdk.min_sdk == 26
        assert env.version_name == "3.0.0"

    def test_settings_from_environment(self, make_settings, monkeypatch):
        monkeypatch.setenv("BUILDSIGN_TARGET_SDK", "36")
        monkeypatch.setenv("BUILDSIGN_COMPILE_SDK", "36")

        env = load_toolchain_environment(BuildProperties(), make_settings())

        assert env.sdk.target_sdk == 36
        assert env.sdk.compile_sdk == 36

    def test_non_integer_entry_is_malformed(self, make_settings):
        with pytest.raises(MalformedConfigEntry, match="flutter.versionCode"):
            load_toolchain_environment(_local(**{"flutter.versionCode": "one"}), make_settings())

    def test_min_sdk_above_target_is_rejected(self, make_settings):
        with pytest.raises(ValidationError, match="minSdk"):
            load_toolchain_environment(BuildProperties(), make_settings(min_sdk=40))

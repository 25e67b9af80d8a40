import json
import shlex
from pathlib import Path

import pytest

from adapters.gradle_args import (
    INJECTED_KEY_ALIAS,
    INJECTED_STORE_FILE,
    INJECTED_KEY_PASSWORD,
    INJECTED_STORE_PASSWORD,
    gradle_command,
    injected_signing_args,
    render_command,
)
from adapters.json_exporter import build_target_payload, export_build_target_json
from core.domain.models import BuildVariant
from core.services.resolver import ConfigResolver, debug_signing_profile

from conftest import SIGNING_VALUES


@pytest.fixture
def target(write_key_properties, make_settings):
    write_key_properties()
    return ConfigResolver.from_settings(make_settings(application_id="com.example.app")).resolve()


class TestJsonExporter:
    """JSON export of the resolved build target."""

    def test_passwords_are_redacted_by_default(self, target, tmp_path):
        path = export_build_target_json(target=target, output_path=tmp_path / "out" / "target.json")

        text = path.read_text(encoding="utf-8")
        data = json.loads(text)
        assert SIGNING_VALUES["storePassword"] not in text
        assert SIGNING_VALUES["keyPassword"] not in text
        assert data["signing_configs"]["release"]["store_password"] == "***"
        assert data["build_types"]["release"]["signing"]["key_password"] == "***"
        assert data["signing_configs"]["release"]["key_alias"] == "upload"

    def test_reveal_secrets(self, target):
        data = build_target_payload(target, reveal_secrets=True)

        assert data["signing_configs"]["release"]["store_password"] == SIGNING_VALUES["storePassword"]

    def test_payload_fields(self, target):
        data = build_target_payload(target)

        assert data["application_id"] == "com.example.app"
        assert data["java_version"] == "17"
        assert data["jvm_target"] == "17"
        assert data["sdk"]["min_sdk"] == 21
        assert data["build_types"]["release"]["minify_enabled"] is False


class TestGradleArgs:
    """AGP injected signing properties."""

    def test_injected_args_for_release(self, target, android_dir):
        app_dir = android_dir / "app"
        args = injected_signing_args(target.signing_configs[BuildVariant.RELEASE], app_dir)

        expected_store = (app_dir / "upload-keystore.jks").resolve()
        assert args[0] == f"-P{INJECTED_STORE_FILE}={expected_store}"
        assert f"-P{INJECTED_KEY_ALIAS}=upload" in args
        assert len(args) == 4

    def test_no_args_for_debug_identity(self):
        assert injected_signing_args(debug_signing_profile(), Path("app")) == []

    def test_gradle_command(self, target, android_dir):
        command = gradle_command(target, BuildVariant.RELEASE, android_dir / "app")

        assert command[:2] == ["./gradlew", "assembleRelease"]
        assert len(command) == 6
        assert gradle_command(target, BuildVariant.DEBUG, android_dir / "app") == ["./gradlew", "assembleDebug"]

    def test_passwords_are_masked_unless_revealed(self, target, android_dir):
        profile = target.signing_configs[BuildVariant.RELEASE]
        app_dir = android_dir / "app"

        masked = injected_signing_args(profile, app_dir)
        revealed = injected_signing_args(profile, app_dir, reveal_secrets=True)

        assert f"-P{INJECTED_STORE_PASSWORD}=***" in masked
        assert f"-P{INJECTED_KEY_PASSWORD}=***" in masked
        assert f"-P{INJECTED_STORE_PASSWORD}={SIGNING_VALUES['storePassword']}" in revealed

    def test_rendered_command_splits_back_to_arguments(self, target, android_dir):
        command = gradle_command(target, BuildVariant.RELEASE, android_dir / "app", reveal_secrets=True)

        assert shlex.split(render_command(command)) == command

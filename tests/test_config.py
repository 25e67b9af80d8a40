from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import AppSettings, get_user_config_dir
from core.domain.models import BuildVariant, JavaVersion


class TestAppSettings:
    """Environment-driven settings and derived declarations."""

    def test_defaults(self):
        settings = AppSettings(_env_file=None)

        assert settings.android_dir == Path("android")
        assert settings.key_properties_path == Path("android") / "key.properties"
        assert settings.local_properties_path == Path("android") / "local.properties"
        assert settings.app_dir == Path("android") / "app"
        assert settings.java_version is JavaVersion.VERSION_17
        assert settings.release_signing_config is BuildVariant.RELEASE
        assert settings.strict_signing

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("BUILDSIGN_JAVA_VERSION", "11")
        monkeypatch.setenv("BUILDSIGN_RELEASE_SIGNING_CONFIG", "debug")
        monkeypatch.setenv("BUILDSIGN_STRICT_SIGNING", "false")
        monkeypatch.setenv("BUILDSIGN_APPLICATION_ID", "com.example.vlone_blog_app")

        settings = AppSettings(_env_file=None)

        assert settings.java_version is JavaVersion.VERSION_11
        assert settings.release_signing_config is BuildVariant.DEBUG
        assert not settings.strict_signing
        assert settings.application_id == "com.example.vlone_blog_app"

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("BUILDSIGN_KEY_PROPERTIES_FILE=signing/key.properties\n", encoding="utf-8")

        settings = AppSettings(_env_file=env_file, android_dir=tmp_path)

        assert settings.key_properties_path == tmp_path / "signing" / "key.properties"

    def test_unsupported_java_version(self):
        with pytest.raises(ValidationError):
            AppSettings(_env_file=None, java_version="8")

    def test_declarations(self):
        settings = AppSettings(
            _env_file=None,
            application_id="com.example.app",
            namespace="com.example.ns",
            release_minify=True,
            release_shrink_resources=True,
        )

        declarations = settings.declarations()

        assert declarations.effective_namespace == "com.example.ns"
        release = declarations.build_types[BuildVariant.RELEASE]
        assert release.signing_config is BuildVariant.RELEASE
        assert release.minify_enabled and release.shrink_resources
        assert declarations.build_types[BuildVariant.DEBUG].signing_config is BuildVariant.DEBUG

    def test_shrink_without_minify_is_rejected(self):
        settings = AppSettings(_env_file=None, release_shrink_resources=True)

        with pytest.raises(ValidationError):
            settings.declarations()

    def test_user_config_dir_honours_xdg(self, monkeypatch, tmp_path):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_user_config_dir() == tmp_path / "buildsign"

"""Core configuration.

Why here:
- Centralises environment variables (pydantic-settings) without polluting the
  CLI.
- Gives the resolver a single, immutable source of truth for the static build
  declarations (language level, signing choice per build type).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import (
    BuildDeclarations,
    BuildTypeDeclaration,
    BuildVariant,
    JavaVersion,
)


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies).

    Goal: CI machines and release engineers can keep signing-related settings
    (e.g. `BUILDSIGN_KEY_PROPERTIES_FILE`) outside the repository, next to the
    keystore, instead of in a project `.env` that risks being committed.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "buildsign"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "buildsign"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "buildsign"
    return Path.home() / ".config" / "buildsign"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Central application settings.

    Every field can be set with a `BUILDSIGN_` environment variable, a `.env`
    file in the working directory or the per-user `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDSIGN_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first, then user-wide config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    android_dir: Path = Field(
        default=Path("android"),
        description="Root Gradle project directory (holds key.properties).",
    )
    app_module: str = Field(
        default="app",
        min_length=1,
        description="Application module directory inside android_dir.",
    )
    key_properties_file: Path = Field(
        default=Path("key.properties"),
        description="Signing properties file, relative to android_dir.",
    )
    local_properties_file: Path = Field(
        default=Path("local.properties"),
        description="Toolchain properties file, relative to android_dir.",
    )

    application_id: str = Field(
        default="com.example.app",
        min_length=1,
        description="Application identifier.",
    )
    namespace: str | None = Field(
        default=None,
        description="Kotlin/Java namespace (defaults to application_id).",
    )
    java_version: JavaVersion = Field(
        default=JavaVersion.VERSION_17,
        description="Java source/target compatibility and Kotlin jvmTarget.",
    )
    multidex_enabled: bool = Field(default=True)

    release_signing_config: BuildVariant = Field(
        default=BuildVariant.RELEASE,
        description="Signing profile used by the release build type.",
    )
    release_minify: bool = Field(default=False)
    release_shrink_resources: bool = Field(default=False)
    strict_signing: bool = Field(
        default=True,
        description="Validate release signing credentials before handing off to the toolchain.",
    )

    compile_sdk: int | None = Field(default=None, ge=1)
    min_sdk: int | None = Field(default=None, ge=1)
    target_sdk: int | None = Field(default=None, ge=1)
    ndk_version: str | None = Field(default=None)
    version_code: int | None = Field(default=None, ge=1)
    version_name: str | None = Field(default=None)

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI.",
    )

    @property
    def key_properties_path(self) -> Path:
        return self.android_dir / self.key_properties_file

    @property
    def local_properties_path(self) -> Path:
        return self.android_dir / self.local_properties_file

    @property
    def app_dir(self) -> Path:
        return self.android_dir / self.app_module

    def declarations(self) -> BuildDeclarations:
        return BuildDeclarations(
            application_id=self.application_id,
            namespace=self.namespace,
            java_version=self.java_version,
            multidex_enabled=self.multidex_enabled,
            build_types={
                BuildVariant.DEBUG: BuildTypeDeclaration(signing_config=BuildVariant.DEBUG),
                BuildVariant.RELEASE: BuildTypeDeclaration(
                    signing_config=self.release_signing_config,
                    minify_enabled=self.release_minify,
                    shrink_resources=self.release_shrink_resources,
                ),
            },
        )

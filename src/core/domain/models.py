"""Domain models (Pydantic v2).

Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to file I/O or the CLI.
- Every record is frozen: built once per build invocation, never mutated.

Note:
- These models describe *what* the build configuration is, not *how* it is
  read from disk.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


# Property keys recognised in key.properties.
STORE_FILE = "storeFile"
STORE_PASSWORD = "storePassword"
KEY_ALIAS = "keyAlias"
KEY_PASSWORD = "keyPassword"

SIGNING_KEYS: tuple[str, ...] = (STORE_FILE, STORE_PASSWORD, KEY_ALIAS, KEY_PASSWORD)

REDACTED = "***"


class BuildVariant(str, Enum):
    """Named build configurations understood by the toolchain."""

    DEBUG = "debug"
    RELEASE = "release"

    def task_suffix(self) -> str:
        """Suffix used in Gradle task names (`assembleRelease`)."""

        return self.value.capitalize()


class JavaVersion(str, Enum):
    """Supported Java/Kotlin language levels."""

    VERSION_11 = "11"
    VERSION_17 = "17"


class BuildProperties(BaseModel):
    """Key/value pairs loaded from an optional properties file.

    Lookups never raise: a missing file is an empty instance and a missing key
    is `None`.
    """

    model_config = ConfigDict(frozen=True)

    entries: dict[str, str] = Field(
        default_factory=dict,
        description="Parsed entries, values kept verbatim.",
    )
    source: Path | None = Field(
        default=None,
        description="File the entries were read from (None when absent).",
    )

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.entries.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)


class SigningProfile(BaseModel):
    """Identity material used by the toolchain to sign an artifact."""

    model_config = ConfigDict(frozen=True)

    name: BuildVariant = Field(
        ...,
        description="Signing config name (the variant it was resolved for).",
    )
    store_file: str = Field(
        default="",
        description="Keystore path as written in key.properties ('' when absent).",
    )
    store_password: str | None = Field(default=None, description="Keystore password.")
    key_alias: str | None = Field(default=None, description="Alias of the key inside the keystore.")
    key_password: str | None = Field(default=None, description="Password of the key alias.")
    toolchain_managed: bool = Field(
        default=False,
        description="True for the toolchain's built-in debug identity.",
    )

    def missing_fields(self) -> list[str]:
        """Property keys whose value is empty or absent, in declaration order."""

        values = {
            STORE_FILE: self.store_file,
            STORE_PASSWORD: self.store_password,
            KEY_ALIAS: self.key_alias,
            KEY_PASSWORD: self.key_password,
        }
        return [key for key in SIGNING_KEYS if not values[key]]

    def resolve_store_file(self, base_dir: Path) -> Path | None:
        """Resolve `store_file` the way Gradle's `file()` does.

        Relative paths are anchored at the application module directory.
        """

        if not self.store_file:
            return None
        path = Path(self.store_file).expanduser()
        if not path.is_absolute():
            path = base_dir / path
        return path

    def redacted(self) -> dict[str, object]:
        data = self.model_dump(mode="json")
        for key in ("store_password", "key_password"):
            if data.get(key):
                data[key] = REDACTED
        return data


class SdkVersions(BaseModel):
    """Platform API levels handed to the toolchain."""

    model_config = ConfigDict(frozen=True)

    compile_sdk: int = Field(..., ge=1, description="compileSdk API level.")
    min_sdk: int = Field(..., ge=1, description="minSdk API level.")
    target_sdk: int = Field(..., ge=1, description="targetSdk API level.")
    ndk_version: str = Field(..., min_length=1, description="NDK version string.")

    @model_validator(mode="after")
    def _check_order(self) -> "SdkVersions":
        if self.min_sdk > self.target_sdk:
            raise ValueError(
                f"minSdk ({self.min_sdk}) cannot be greater than targetSdk ({self.target_sdk})"
            )
        return self


class ToolchainEnvironment(BaseModel):
    """Metadata provided by the Flutter Gradle plugin and local.properties."""

    model_config = ConfigDict(frozen=True)

    sdk: SdkVersions
    version_code: int = Field(default=1, ge=1)
    version_name: str = Field(default="1.0", min_length=1)
    flutter_sdk: Path | None = None
    android_sdk: Path | None = None


class BuildTypeDeclaration(BaseModel):
    """Static per-build-type flags, as written in a build script."""

    model_config = ConfigDict(frozen=True)

    signing_config: BuildVariant = Field(
        ...,
        description="Which signing profile the build type uses.",
    )
    minify_enabled: bool = False
    shrink_resources: bool = False

    @model_validator(mode="after")
    def _shrink_requires_minify(self) -> "BuildTypeDeclaration":
        if self.shrink_resources and not self.minify_enabled:
            raise ValueError("Removing unused resources requires minify to be enabled")
        return self


def _default_build_types() -> dict[BuildVariant, BuildTypeDeclaration]:
    return {
        BuildVariant.DEBUG: BuildTypeDeclaration(signing_config=BuildVariant.DEBUG),
        BuildVariant.RELEASE: BuildTypeDeclaration(signing_config=BuildVariant.RELEASE),
    }


class BuildDeclarations(BaseModel):
    """Static declarations of the application module."""

    model_config = ConfigDict(frozen=True)

    application_id: str = Field(..., min_length=1)
    namespace: str | None = Field(
        default=None,
        description="Kotlin/Java namespace; defaults to the application id.",
    )
    java_version: JavaVersion = JavaVersion.VERSION_17
    multidex_enabled: bool = True
    build_types: dict[BuildVariant, BuildTypeDeclaration] = Field(
        default_factory=_default_build_types,
    )

    @property
    def effective_namespace(self) -> str:
        return self.namespace or self.application_id


class BuildTypeConfig(BaseModel):
    """A build type bound to its signing profile and optimisation flags."""

    model_config = ConfigDict(frozen=True)

    variant: BuildVariant
    signing: SigningProfile
    minify_enabled: bool = False
    shrink_resources: bool = False


class BuildTarget(BaseModel):
    """Fully resolved configuration consumed by the external build toolchain."""

    model_config = ConfigDict(frozen=True)

    application_id: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)
    sdk: SdkVersions
    version_code: int = Field(..., ge=1)
    version_name: str = Field(..., min_length=1)
    java_version: JavaVersion
    multidex_enabled: bool = True
    signing_configs: dict[BuildVariant, SigningProfile] = Field(default_factory=dict)
    build_types: dict[BuildVariant, BuildTypeConfig] = Field(default_factory=dict)

    @property
    def jvm_target(self) -> str:
        """Kotlin `jvmTarget`, which mirrors the Java language level."""

        return self.java_version.value

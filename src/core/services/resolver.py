"""Build configuration resolution.

`ConfigResolver` is built once per build invocation from `AppSettings`. It
reads the optional signing properties and the toolchain properties exactly
once and keeps the resulting immutable values; nothing is stored at module
level. The free functions below are the individual resolution steps and can
be used on their own.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from adapters.properties_file import load_properties
from core.config import AppSettings
from core.domain.errors import BuildConfigError, MissingSigningCredential
from core.domain.models import (
    KEY_ALIAS,
    KEY_PASSWORD,
    STORE_FILE,
    STORE_PASSWORD,
    BuildDeclarations,
    BuildProperties,
    BuildTarget,
    BuildTypeConfig,
    BuildVariant,
    SigningProfile,
    ToolchainEnvironment,
)
from core.interfaces.properties_source import PropertiesLoader
from core.toolchain import load_toolchain_environment

logger = logging.getLogger(__name__)

# Identity of the Android toolchain's generated debug keystore.
DEBUG_STORE_PASSWORD = "android"
DEBUG_KEY_ALIAS = "androiddebugkey"
DEBUG_KEY_PASSWORD = "android"


def default_debug_keystore() -> Path:
    """Location of the toolchain-generated debug keystore."""

    user_home = os.environ.get("ANDROID_USER_HOME")
    if user_home:
        return Path(user_home) / "debug.keystore"
    return Path.home() / ".android" / "debug.keystore"


def debug_signing_profile(keystore: Path | None = None) -> SigningProfile:
    return SigningProfile(
        name=BuildVariant.DEBUG,
        store_file=str(keystore or default_debug_keystore()),
        store_password=DEBUG_STORE_PASSWORD,
        key_alias=DEBUG_KEY_ALIAS,
        key_password=DEBUG_KEY_PASSWORD,
        toolchain_managed=True,
    )


def resolve_signing_profile(
    properties: BuildProperties,
    variant: BuildVariant,
    *,
    debug_keystore: Path | None = None,
) -> SigningProfile:
    """Resolve the signing profile of `variant`.

    `release` reads the four signing keys; a missing `storeFile` becomes an
    empty path, other missing keys stay `None`. `debug` uses the toolchain's
    debug identity and does not look at `properties`. Never raises.
    """

    if BuildVariant(variant) is BuildVariant.DEBUG:
        return debug_signing_profile(debug_keystore)

    return SigningProfile(
        name=BuildVariant.RELEASE,
        store_file=properties.get(STORE_FILE) or "",
        store_password=properties.get(STORE_PASSWORD),
        key_alias=properties.get(KEY_ALIAS),
        key_password=properties.get(KEY_PASSWORD),
    )


def select_build_type_config(
    variant: BuildVariant,
    declarations: BuildDeclarations,
    signing_configs: Mapping[BuildVariant, SigningProfile],
) -> BuildTypeConfig:
    """Bind a build type to its declared signing profile and flags."""

    variant = BuildVariant(variant)
    declaration = declarations.build_types.get(variant)
    if declaration is None:
        raise BuildConfigError(f"No build type declared for variant '{variant.value}'")

    signing = signing_configs.get(declaration.signing_config)
    if signing is None:
        raise BuildConfigError(
            f"Build type '{variant.value}' uses undefined signing config "
            f"'{declaration.signing_config.value}'"
        )

    return BuildTypeConfig(
        variant=variant,
        signing=signing,
        minify_enabled=declaration.minify_enabled,
        shrink_resources=declaration.shrink_resources,
    )


def validate_signing_profile(profile: SigningProfile, app_dir: Path) -> None:
    """Fail fast when a profile cannot be used for signing."""

    if profile.toolchain_managed:
        return

    missing = profile.missing_fields()
    if missing:
        raise MissingSigningCredential(profile=profile.name.value, missing=missing)

    store = profile.resolve_store_file(app_dir)
    if store is None or not store.is_file():
        raise MissingSigningCredential(
            profile=profile.name.value,
            missing=[],
            detail=f"keystore not found at {store}",
        )


class ConfigResolver:
    """Resolves signing profiles and the build target of one build invocation."""

    def __init__(
        self,
        *,
        properties: BuildProperties,
        declarations: BuildDeclarations,
        toolchain: ToolchainEnvironment,
        app_dir: Path,
        debug_keystore: Path | None = None,
    ) -> None:
        self.properties = properties
        self.declarations = declarations
        self.toolchain = toolchain
        self.app_dir = app_dir
        self.debug_keystore = debug_keystore

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        loader: PropertiesLoader = load_properties,
    ) -> "ConfigResolver":
        properties = loader(settings.key_properties_path)
        local = loader(settings.local_properties_path)
        if properties.source is None:
            logger.info("No signing properties at %s", settings.key_properties_path)
        return cls(
            properties=properties,
            declarations=settings.declarations(),
            toolchain=load_toolchain_environment(local, settings),
            app_dir=settings.app_dir,
        )

    def signing_profile(self, variant: BuildVariant) -> SigningProfile:
        return resolve_signing_profile(self.properties, variant, debug_keystore=self.debug_keystore)

    def signing_configs(self) -> dict[BuildVariant, SigningProfile]:
        return {variant: self.signing_profile(variant) for variant in BuildVariant}

    def build_type_config(self, variant: BuildVariant) -> BuildTypeConfig:
        return select_build_type_config(variant, self.declarations, self.signing_configs())

    def resolve(self, *, strict: bool = True) -> BuildTarget:
        """Resolve the full build target.

        With `strict`, every build type signed with a non-toolchain profile is
        validated before the target is returned.
        """

        signing_configs = self.signing_configs()
        build_types = {
            variant: select_build_type_config(variant, self.declarations, signing_configs)
            for variant in self.declarations.build_types
        }

        for config in build_types.values():
            if strict:
                validate_signing_profile(config.signing, self.app_dir)
            elif config.signing.missing_fields():
                logger.warning(
                    "Build type '%s' signing config is missing %s",
                    config.variant.value,
                    ", ".join(config.signing.missing_fields()),
                )

        return BuildTarget(
            application_id=self.declarations.application_id,
            namespace=self.declarations.effective_namespace,
            sdk=self.toolchain.sdk,
            version_code=self.toolchain.version_code,
            version_name=self.toolchain.version_name,
            java_version=self.declarations.java_version,
            multidex_enabled=self.declarations.multidex_enabled,
            signing_configs=signing_configs,
            build_types=build_types,
        )

"""Gradle command-line rendering.

The Android Gradle Plugin accepts signing material as injected project
properties (`-Pandroid.injected.signing.*`), which overrides the signing
config of the build script.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from core.domain.models import REDACTED, BuildTarget, BuildVariant, SigningProfile

INJECTED_STORE_FILE = "android.injected.signing.store.file"
INJECTED_STORE_PASSWORD = "android.injected.signing.store.password"
INJECTED_KEY_ALIAS = "android.injected.signing.key.alias"
INJECTED_KEY_PASSWORD = "android.injected.signing.key.password"


def injected_signing_args(
    profile: SigningProfile,
    app_dir: Path,
    *,
    reveal_secrets: bool = False,
) -> list[str]:
    """`-P` arguments for `profile`; none for the toolchain's debug identity.

    Passwords are masked unless `reveal_secrets` is set.
    """

    if profile.toolchain_managed:
        return []

    def _secret(value: str | None) -> str:
        if value and not reveal_secrets:
            return REDACTED
        return value or ""

    store = profile.resolve_store_file(app_dir)
    values = {
        INJECTED_STORE_FILE: str(store.resolve()) if store is not None else "",
        INJECTED_STORE_PASSWORD: _secret(profile.store_password),
        INJECTED_KEY_ALIAS: profile.key_alias or "",
        INJECTED_KEY_PASSWORD: _secret(profile.key_password),
    }
    return [f"-P{key}={value}" for key, value in values.items()]


def gradle_command(
    target: BuildTarget,
    variant: BuildVariant,
    app_dir: Path,
    *,
    gradlew: str = "./gradlew",
    reveal_secrets: bool = False,
) -> list[str]:
    config = target.build_types[variant]
    return [
        gradlew,
        f"assemble{variant.task_suffix()}",
        *injected_signing_args(config.signing, app_dir, reveal_secrets=reveal_secrets),
    ]


def render_command(command: list[str]) -> str:
    """Shell-quoted command line, safe to paste into a POSIX shell."""

    return shlex.join(command)

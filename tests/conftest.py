"""Shared fixtures: temporary Android project layouts and isolated settings."""

import sys
from pathlib import Path

import pytest

# Add src/ to the path (src layout, works without an editable install)
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import AppSettings  # noqa: E402

SIGNING_VALUES = {
    "storeFile": "upload-keystore.jks",
    "storePassword": "s3cret pass",
    "keyAlias": "upload",
    "keyPassword": "k3y pass",
}


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep BUILDSIGN_* variables and the developer's keystore out of tests."""
    import os

    for name in list(os.environ):
        if name.upper().startswith("BUILDSIGN_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ANDROID_USER_HOME", str(tmp_path / ".android-user"))


@pytest.fixture
def android_dir(tmp_path):
    """Empty Gradle root project with an `app` module."""
    root = tmp_path / "android"
    (root / "app").mkdir(parents=True)
    return root


@pytest.fixture
def write_key_properties(android_dir):
    def _write(values=None, *, text=None, keystore=True):
        path = android_dir / "key.properties"
        if text is None:
            values = SIGNING_VALUES if values is None else values
            text = "".join(f"{k}={v}\n" for k, v in values.items())
        path.write_text(text, encoding="utf-8")
        if keystore:
            (android_dir / "app" / "upload-keystore.jks").write_bytes(b"\xfe\xed\xfe\xed")
        return path

    return _write


@pytest.fixture
def make_settings(android_dir):
    def _make(**overrides):
        return AppSettings(_env_file=None, android_dir=android_dir, **overrides)

    return _make

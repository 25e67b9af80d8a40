"""JSON export of the resolved build target.

Why JSON:
- The external toolchain (or a CI step) can consume the resolved values
  without importing Python.
- Passwords are masked unless explicitly revealed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import BuildTarget


def build_target_payload(target: BuildTarget, *, reveal_secrets: bool = False) -> dict[str, Any]:
    payload = target.model_dump(mode="json")
    payload["jvm_target"] = target.jvm_target
    if not reveal_secrets:
        payload["signing_configs"] = {
            name.value: profile.redacted() for name, profile in target.signing_configs.items()
        }
        for name, config in target.build_types.items():
            payload["build_types"][name.value]["signing"] = config.signing.redacted()
    return payload


def dumps_build_target(target: BuildTarget, *, reveal_secrets: bool = False) -> str:
    payload = build_target_payload(target, reveal_secrets=reveal_secrets)
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_build_target_json(
    *,
    target: BuildTarget,
    output_path: Path,
    reveal_secrets: bool = False,
) -> Path:
    """Export `BuildTarget` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_build_target(target, reveal_secrets=reveal_secrets), encoding="utf-8")
    return output_path

"""Reading and writing `key=value` properties files.

Supported format (subset of Java properties, no escapes):
- `#` / `!` comment lines and blank lines are ignored.
- Every other line is `key=value`; the key is trimmed, the value is kept
  verbatim after the first `=`.
- A duplicated key keeps the last value.

Anything else is a `MalformedConfigEntry`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from core.domain.errors import MalformedConfigEntry
from core.domain.models import BuildProperties

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", "!")


def parse_properties(text: str, *, source: Path | None = None) -> dict[str, str]:
    entries: dict[str, str] = {}
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith(_COMMENT_PREFIXES):
            continue
        if "=" not in line:
            raise MalformedConfigEntry(
                reason="expected 'key=value' (no '=' separator)",
                source=source,
                line_number=line_number,
                line=line,
            )
        key, value = line.split("=", 1)
        key = key.strip()
        if not key:
            raise MalformedConfigEntry(
                reason="empty key",
                source=source,
                line_number=line_number,
                line=line,
            )
        if key in entries:
            logger.debug("Duplicate key %r at line %d overrides the previous value", key, line_number)
        entries[key] = value
    return entries


def load_properties(path: Path) -> BuildProperties:
    """Load a properties file; a missing file is an empty configuration."""

    if not path.exists():
        logger.debug("Properties file %s not found, using empty configuration", path)
        return BuildProperties()

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedConfigEntry(reason=f"not valid UTF-8 ({exc.reason})", source=path) from exc

    entries = parse_properties(text, source=path)
    logger.debug("Loaded %d entries from %s: %s", len(entries), path, ", ".join(sorted(entries)))
    return BuildProperties(entries=entries, source=path)


def write_properties(path: Path, values: Mapping[str, str | None]) -> Path:
    """Create or update a properties file, merging with existing entries."""

    for key, value in values.items():
        if value is None:
            continue
        if "\n" in value or "\r" in value:
            raise ValueError(f"Value for {key!r} cannot contain line breaks")
        stripped = key.strip()
        if (
            not stripped
            or "=" in key
            or "\n" in key
            or "\r" in key
            or stripped.startswith(_COMMENT_PREFIXES)
        ):
            raise ValueError(f"Invalid property key {key!r}")

    path.parent.mkdir(parents=True, exist_ok=True)

    existing = load_properties(path).entries if path.exists() else {}
    merged = dict(existing)
    merged.update({k.strip(): v for k, v in values.items() if v is not None})

    lines = ["# Release signing configuration. Do not commit this file."]
    for key in sorted(merged):
        lines.append(f"{key}={merged[key]}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.debug("Wrote %d entries to %s", len(merged), path)
    return path

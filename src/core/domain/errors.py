"""Build configuration errors.

Core code only raises these; the CLI reports them and maps them to a
non-zero exit code.
"""

from __future__ import annotations

from pathlib import Path


class BuildConfigError(Exception):
    """Base class for every configuration failure surfaced to the toolchain."""


class MalformedConfigEntry(BuildConfigError):
    """A properties entry that cannot be parsed."""

    def __init__(
        self,
        *,
        reason: str,
        source: Path | None = None,
        line_number: int | None = None,
        line: str | None = None,
    ) -> None:
        self.reason = reason
        self.source = source
        self.line_number = line_number
        self.line = line

        where = str(source) if source is not None else "<properties>"
        if line_number is not None:
            where = f"{where}:{line_number}"
        super().__init__(f"{where}: {reason}")


class MissingSigningCredential(BuildConfigError):
    """A signing profile that cannot be used to sign an artifact."""

    def __init__(self, *, profile: str, missing: list[str], detail: str | None = None) -> None:
        self.profile = profile
        self.missing = list(missing)
        self.detail = detail

        parts: list[str] = []
        if self.missing:
            parts.append("missing " + ", ".join(self.missing))
        if detail:
            parts.append(detail)
        super().__init__(f"Signing config '{profile}' is incomplete: " + "; ".join(parts))

"""Contract for properties loaders.

Why Protocol:
- The resolver only needs "path in, BuildProperties out"; any callable with
  that shape (the file adapter, an in-memory fake in tests) fits.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import BuildProperties


@runtime_checkable
class PropertiesLoader(Protocol):
    """Minimal contract for a properties source.

    Design rules:
    - A missing source is an empty `BuildProperties`, never an error.
    - Malformed content raises `MalformedConfigEntry`.
    """

    def __call__(self, path: Path) -> BuildProperties:
        ...

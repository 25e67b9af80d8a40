"""Run script.

Why it exists:
- Runs the CLI with `python -m main` from `src/` during development.
- Keeps a plain entry point next to the `buildsign` console script, which is
  handy inside CI images where the package is not installed.
"""

from __future__ import annotations

import sys

# Workaround for UnicodeEncodeError on Windows terminals/CI (cp1252 vs utf-8).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()

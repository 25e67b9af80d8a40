"""Doctor command for environment diagnostics."""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.config import AppSettings
from core.domain.errors import BuildConfigError
from core.domain.models import BuildVariant
from core.services.resolver import ConfigResolver, default_debug_keystore

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings: AppSettings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()

    table = Table(title="buildsign Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    failures = 0

    try:
        resolver = ConfigResolver.from_settings(settings)
    except (BuildConfigError, ValidationError) as exc:
        table.add_row("Properties", "FAIL", "see below")
        _console.print(table)
        _console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    # Signing (only required when the release build type uses the release profile)
    uses_release = settings.release_signing_config is BuildVariant.RELEASE
    fail = "FAIL" if uses_release else "UNUSED"

    key_path = settings.key_properties_path
    if resolver.properties.source is not None:
        table.add_row("key.properties", "OK", escape(str(key_path)))
    else:
        table.add_row("key.properties", fail, escape(f"{key_path} -> run `buildsign setup-signing`"))
        failures += int(uses_release)

    release = resolver.signing_profile(BuildVariant.RELEASE)
    missing = release.missing_fields()
    if missing:
        table.add_row("Release credentials", fail, "missing " + ", ".join(missing))
        failures += int(uses_release)
    else:
        table.add_row("Release credentials", "OK", escape(f"alias {release.key_alias}"))

    store = release.resolve_store_file(settings.app_dir)
    if store is not None and store.is_file():
        table.add_row("Keystore", "OK", escape(str(store)))
    else:
        table.add_row("Keystore", fail, escape(f"not found: {store}") if store else "storeFile not set")
        failures += int(uses_release)

    debug_store = default_debug_keystore()
    table.add_row(
        "Debug keystore",
        "OK" if debug_store.is_file() else "OPTIONAL",
        escape(str(debug_store)) if debug_store.is_file() else "generated by the toolchain on first debug build",
    )

    # Toolchain
    toolchain = resolver.toolchain
    if settings.local_properties_path.exists():
        table.add_row("local.properties", "OK", escape(str(settings.local_properties_path)))
    else:
        table.add_row("local.properties", "OPTIONAL", "not found -> plugin defaults")
    table.add_row("Flutter SDK", "OK" if toolchain.flutter_sdk else "UNKNOWN", escape(str(toolchain.flutter_sdk or "-")))
    table.add_row("Android SDK", "OK" if toolchain.android_sdk else "UNKNOWN", escape(str(toolchain.android_sdk or "-")))
    table.add_row(
        "SDK levels",
        "OK",
        f"compile {toolchain.sdk.compile_sdk} / min {toolchain.sdk.min_sdk} / target {toolchain.sdk.target_sdk}",
    )
    table.add_row("Java level", "OK", settings.java_version.value)

    _console.print(table)

    if failures:
        _console.print(
            "\n[yellow]Note:[/yellow] release builds will fail to sign until the issues above are fixed."
        )
        raise typer.Exit(code=1)

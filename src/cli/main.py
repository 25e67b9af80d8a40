"""buildsign CLI (Typer).

Thin layer: builds `AppSettings`, delegates to `ConfigResolver` and renders
results with Rich. It is the only layer that turns configuration errors into
exit codes.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from adapters.gradle_args import gradle_command, render_command
from adapters.json_exporter import dumps_build_target, export_build_target_json
from adapters.properties_file import write_properties
from cli import doctor
from cli.ui_components import build_signing_table, build_target_table, build_types_table, print_banner
from core.config import AppSettings
from core.domain.errors import BuildConfigError
from core.domain.models import KEY_ALIAS, KEY_PASSWORD, STORE_FILE, STORE_PASSWORD, BuildTarget, BuildVariant
from core.logging_setup import configure_logging
from core.services.resolver import ConfigResolver

app = typer.Typer(
    no_args_is_help=True,
    help="Resolve Android build and signing configuration for the build toolchain.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


class ExportFormat(str, Enum):
    JSON = "json"
    GRADLE = "gradle"


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


def _fail(exc: Exception) -> typer.Exit:
    _err_console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
    return typer.Exit(code=1)


def _resolve(settings: AppSettings, *, strict: bool) -> BuildTarget:
    try:
        return ConfigResolver.from_settings(settings).resolve(strict=strict)
    except (BuildConfigError, ValidationError) as exc:
        raise _fail(exc) from exc


@app.callback()
def main(
    ctx: typer.Context,
    android_dir: Path | None = typer.Option(
        None,
        "--android-dir",
        help="Root Gradle project directory (default: ./android or BUILDSIGN_ANDROID_DIR).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging."),
) -> None:
    overrides: dict[str, object] = {}
    if android_dir is not None:
        overrides["android_dir"] = android_dir
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        raise _fail(exc) from exc

    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


@app.command()
def show(
    ctx: typer.Context,
    strict: bool = typer.Option(True, "--strict/--no-strict", help="Validate release signing eagerly."),
    reveal_secrets: bool = typer.Option(False, "--reveal-secrets", help="Print passwords in clear."),
    banner: bool = typer.Option(True, "--banner/--no-banner"),
) -> None:
    """Show the resolved build target."""

    settings = _settings(ctx)
    target = _resolve(settings, strict=strict and settings.strict_signing)

    if banner:
        print_banner(_console)
    _console.print(build_target_table(target))
    _console.print(build_signing_table(list(target.signing_configs.values()), reveal_secrets=reveal_secrets))
    _console.print(build_types_table(list(target.build_types.values())))


@app.command()
def check(ctx: typer.Context) -> None:
    """Validate the configuration eagerly; exit 1 when a build would fail to sign."""

    target = _resolve(_settings(ctx), strict=True)
    variants = ", ".join(variant.value for variant in target.build_types)
    _console.print(f"[green]OK[/green] {target.application_id} ({variants})")


@app.command()
def export(
    ctx: typer.Context,
    fmt: ExportFormat = typer.Option(ExportFormat.JSON, "--format", "-f", case_sensitive=False),
    output: Path | None = typer.Option(None, "--output", "-o", help="JSON output file (default: stdout)."),
    variant: BuildVariant = typer.Option(BuildVariant.RELEASE, "--variant", case_sensitive=False),
    reveal_secrets: bool = typer.Option(False, "--reveal-secrets", help="Include passwords in clear (JSON and Gradle output)."),
    strict: bool = typer.Option(True, "--strict/--no-strict"),
) -> None:
    """Export the resolved configuration for the toolchain."""

    settings = _settings(ctx)
    target = _resolve(settings, strict=strict and settings.strict_signing)

    if fmt is ExportFormat.GRADLE:
        command = gradle_command(target, variant, settings.app_dir, reveal_secrets=reveal_secrets)
        typer.echo(render_command(command))
        return

    if output is None:
        typer.echo(dumps_build_target(target, reveal_secrets=reveal_secrets), nl=False)
        return

    path = export_build_target_json(target=target, output_path=output, reveal_secrets=reveal_secrets)
    _console.print(f"[green]Saved build target to:[/green] {path}")


@app.command(name="setup-signing")
def setup_signing(ctx: typer.Context) -> None:
    """Interactive release signing setup (writes key.properties)."""

    settings = _settings(ctx)

    store_file = typer.prompt("Keystore path (relative to the app module or absolute)").strip()
    key_alias = typer.prompt("Key alias", default="upload", show_default=True).strip()
    store_password = typer.prompt("Keystore password", hide_input=True, confirmation_prompt=False)
    key_password = typer.prompt(
        "Key password (empty: same as keystore)",
        default="",
        show_default=False,
        hide_input=True,
    )

    if not store_file or not key_alias:
        raise typer.BadParameter("keystore path and key alias are required")

    try:
        path = write_properties(
            settings.key_properties_path,
            {
                STORE_FILE: store_file,
                STORE_PASSWORD: store_password,
                KEY_ALIAS: key_alias,
                KEY_PASSWORD: key_password or store_password,
            },
        )
    except (BuildConfigError, ValueError) as exc:
        raise _fail(exc) from exc

    _console.print(f"[green]Saved signing config to:[/green] {path}")


def run() -> None:
    app()

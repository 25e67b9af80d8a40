"""CLI UI components (Rich).

Keeps the command functions free of rendering details so tables and panels
can be shared between commands.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import BuildTarget, BuildTypeConfig, SigningProfile


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped by machine-readable commands)."""

    title = Text("buildsign", style="bold cyan")
    subtitle = Text("Android build & signing configuration", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _show(value: object) -> str:
    if value is None or value == "":
        return "[red]<absent>[/red]"
    return escape(str(value))


def build_target_table(target: BuildTarget) -> Table:
    table = Table(title="Build Target")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")

    table.add_row("applicationId", escape(target.application_id))
    table.add_row("namespace", escape(target.namespace))
    table.add_row("compileSdk", str(target.sdk.compile_sdk))
    table.add_row("minSdk", str(target.sdk.min_sdk))
    table.add_row("targetSdk", str(target.sdk.target_sdk))
    table.add_row("ndkVersion", escape(target.sdk.ndk_version))
    table.add_row("versionCode", str(target.version_code))
    table.add_row("versionName", escape(target.version_name))
    table.add_row("Java level", target.java_version.value)
    table.add_row("jvmTarget", target.jvm_target)
    table.add_row("multiDex", "yes" if target.multidex_enabled else "no")
    return table


def build_signing_table(profiles: list[SigningProfile], *, reveal_secrets: bool = False) -> Table:
    table = Table(title="Signing Configs")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("storeFile", style="magenta")
    table.add_column("keyAlias", style="white")
    table.add_column("Passwords", style="white")
    table.add_column("Source", style="dim")

    for profile in profiles:
        data = profile.model_dump() if reveal_secrets else profile.redacted()
        passwords = f"{_show(data['store_password'])} / {_show(data['key_password'])}"
        source = "toolchain" if profile.toolchain_managed else "key.properties"
        table.add_row(profile.name.value, _show(profile.store_file), _show(profile.key_alias), passwords, source)
    return table


def build_types_table(configs: list[BuildTypeConfig]) -> Table:
    table = Table(title="Build Types")
    table.add_column("Build type", style="cyan", no_wrap=True)
    table.add_column("Signing", style="white")
    table.add_column("Minify", style="green")
    table.add_column("Shrink resources", style="green")

    for config in configs:
        table.add_row(
            config.variant.value,
            config.signing.name.value,
            "yes" if config.minify_enabled else "no",
            "yes" if config.shrink_resources else "no",
        )
    return table

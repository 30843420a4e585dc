#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import sys

import typer

from . import command_registry
from .api import console, console_err
from .core.common import _get_version, _run_cli
from .core.types import ExtractArgs
from .flows.extract import run_extract
from .startup import run_startup

app = typer.Typer(add_completion=False, help="Steam Guard secret extractor CLI.")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"steamguard-extractor {_get_version()}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        help="Use this TOML config file.",
        rich_help_panel="Global",
    ),
    workdir: str | None = typer.Option(
        None,
        "--workdir",
        help="Working directory for tools and backup artifacts.",
        rich_help_panel="Global",
    ),
    apk: str | None = typer.Option(
        None,
        "--apk",
        help="Legacy Steam APK to install (skips the APK search).",
        rich_help_panel="Global",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show full tracebacks instead of one-line errors.",
        rich_help_panel="Debug",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Hide non-error output (the exported URIs are always printed).",
        rich_help_panel="Global",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output.",
        rich_help_panel="Accessibility",
    ),
    no_animations: bool = typer.Option(
        False,
        "--no-animations",
        help="Reduce motion by disabling spinners and animated updates.",
        rich_help_panel="Accessibility",
    ),
    init_config: bool = typer.Option(
        False,
        "--init-config",
        help="Copy defaults to the user config directory and exit.",
        is_eager=True,
        rich_help_panel="Config",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
        rich_help_panel="Info",
    ),
) -> None:
    _ = version
    try:
        should_exit = run_startup(
            no_color=no_color,
            no_animations=no_animations,
            debug=debug,
            init_config=init_config,
        )
    except (OSError, RuntimeError, ValueError) as exc:
        console_err.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=2)
    if should_exit:
        raise typer.Exit()
    ctx.ensure_object(dict)
    ctx.obj.update(
        {
            "config": config,
            "workdir": workdir,
            "apk": apk,
            "debug": debug,
            "quiet": quiet,
            "no_color": no_color,
            "no_animations": no_animations,
        }
    )
    if ctx.invoked_subcommand is None:
        if not sys.stdin.isatty():
            console_err.print(
                "[red]Error:[/red] The extraction flow needs an interactive terminal. "
                "Run `steamguard-extractor --help` for available commands."
            )
            raise typer.Exit(code=2)
        args = ExtractArgs(
            config=config,
            workdir=workdir,
            apk=apk,
            quiet=quiet,
            no_color=no_color,
            no_animations=no_animations,
        )
        _run_cli(lambda: run_extract(args), debug=debug)


command_registry.register(app)


def main() -> None:
    app()

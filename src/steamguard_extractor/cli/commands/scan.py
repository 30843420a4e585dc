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

import typer

from ..core.common import _ctx_value, _run_cli
from ..core.types import ScanArgs
from ..flows.scan import run_scan


def register(app: typer.Typer) -> None:
    app.command(
        help=(
            "Print Steam Guard secrets from an already extracted backup.\n\n"
            "Examples:\n"
            "  steamguard-extractor scan ./steam_guard_extractor_work/extracted\n"
            "  steamguard-extractor scan backup.tar\n"
        )
    )(scan)


def scan(
    ctx: typer.Context,
    path: str = typer.Argument(
        ...,
        help="Extracted backup directory or flat backup.tar archive.",
    ),
    package_id: str | None = typer.Option(
        None,
        "--package-id",
        help="Android package whose files are searched.",
        rich_help_panel="Inputs",
    ),
) -> None:
    args = ScanArgs(
        path=path,
        config=_ctx_value(ctx, "config"),
        package_id=package_id,
        quiet=bool(_ctx_value(ctx, "quiet")),
        no_color=bool(_ctx_value(ctx, "no_color")),
        no_animations=bool(_ctx_value(ctx, "no_animations")),
    )
    debug = bool(_ctx_value(ctx, "debug"))
    _run_cli(lambda: run_scan(args), debug=debug)

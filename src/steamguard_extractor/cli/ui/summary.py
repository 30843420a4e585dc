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

from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape

from ...core.models import SecretRecord
from ...recovery.uris import detail_rows, export_lines
from . import build_action_list, build_kv_table, console, console_err, panel


def print_secret_report(records: Sequence[SecretRecord], *, quiet: bool) -> None:
    """Show each recovered record on stderr and write its export lines to stdout.

    The detail panels are suppressed by ``quiet``; the export lines never are.
    """
    for index, record in enumerate(records, start=1):
        if not quiet:
            console_err.print()
            rows = [(label, escape(value)) for label, value in detail_rows(record)]
            title = f"Secret {index}/{len(records)}: {record.source_path.name}"
            console_err.print(panel(escape(title), build_kv_table(rows), style="secret"))
        for line in export_lines(record):
            console.print(line, markup=False, highlight=False, soft_wrap=True)


def print_cleanup_summary(removed: Sequence[Path], *, quiet: bool) -> None:
    if quiet:
        return
    if not removed:
        console.print("[subtitle]Nothing to remove.[/subtitle]")
        return
    items = [str(path) for path in removed]
    console.print(panel("Removed", build_action_list(items)))


def print_completion_panel(title: str, items: Sequence[str], *, quiet: bool) -> None:
    if quiet:
        return
    console.print()
    console.print(panel(title, build_action_list(items), style="success"))

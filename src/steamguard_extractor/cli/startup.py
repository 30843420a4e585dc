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

import functools
from collections.abc import Callable
from pathlib import Path

from rich.progress import Progress, TaskID
from rich.traceback import install as install_rich_traceback

from ..config import AppConfig, init_user_config
from ..tools.fetch import ProgressCallback
from .api import configure_ui, console, progress


def run_startup(
    *,
    no_color: bool,
    no_animations: bool,
    debug: bool,
    init_config: bool,
) -> bool:
    configure_ui(no_color=no_color, no_animations=no_animations)
    if debug:
        install_rich_traceback(show_locals=True)
    if init_config:
        config_path = init_user_config()
        console.print(f"User config ready at {config_path}")
        return True
    return False


def apply_ui_defaults(
    config: AppConfig,
    *,
    quiet: bool,
    no_color: bool,
    no_animations: bool,
) -> bool:
    """Merge the [ui] config section into the command-line flags; return effective quiet."""
    quiet = quiet or config.ui.quiet
    configure_ui(
        no_color=no_color or config.ui.no_color,
        no_animations=no_animations or config.ui.no_animations,
    )
    return quiet


def _progress_update(
    progress: Progress,
    task_id: TaskID | None,
    completed: int | None,
    total: int | None,
    description: str | None,
) -> None:
    if task_id is None:
        return
    if total is not None:
        progress.update(task_id, total=total)
    if description:
        progress.update(task_id, description=description)
    if completed is not None:
        progress.update(task_id, completed=completed)


def _progress_finalize(progress: Progress, task_id: TaskID) -> None:
    task = progress.tasks[task_id]
    if task.total is None:
        progress.update(task_id, total=task.completed or 1, completed=task.completed or 1)
    else:
        progress.update(task_id, completed=task.total)


def run_with_progress(
    description: str,
    fetch: Callable[[ProgressCallback | None], Path],
    *,
    quiet: bool,
) -> Path:
    """Run a download step under a transient progress bar."""
    with progress(quiet=quiet) as progress_bar:
        task_id = None
        if progress_bar is not None:
            task_id = progress_bar.add_task(description, total=None)
        progress_cb = (
            functools.partial(_progress_update, progress_bar, task_id) if progress_bar else None
        )
        result = fetch(progress_cb)
        if progress_bar is not None and task_id is not None:
            _progress_finalize(progress_bar, task_id)
    return result

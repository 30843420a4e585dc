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

import shutil
import tarfile
from collections.abc import Callable
from pathlib import Path

from ..core.errors import ExpandFailed, ToolCommandError, UnpackFailed, UserAbort
from ..tools.process import run_tool

PasswordPrompt = Callable[[], str | None]


def _non_empty_file(path: Path) -> bool:
    try:
        return path.is_file() and path.stat().st_size > 0
    except OSError:
        return False


def expand_archive(archive: Path, dest: Path) -> Path:
    """Expand ``archive`` into a freshly created ``dest`` directory."""
    try:
        if dest.exists():
            shutil.rmtree(dest)
        dest.mkdir(parents=True)
        with tarfile.open(archive) as handle:
            handle.extractall(dest, filter="data")
    except (OSError, tarfile.TarError) as exc:
        raise ExpandFailed(
            f"Failed to expand {archive}: {exc}",
            hint="The unpacked archive looks damaged; create a new backup.",
        ) from exc
    return dest


class ArchivePipeline:
    def __init__(
        self,
        *,
        java: Path,
        abe_jar: Path,
        backup_path: Path,
        archive_path: Path,
        tree_dir: Path,
        timeout: float | None = None,
    ) -> None:
        self.java = java
        self.abe_jar = abe_jar
        self.backup_path = backup_path
        self.archive_path = archive_path
        self.tree_dir = tree_dir
        self.timeout = timeout

    def unpack_command(self, password: str | None) -> list[str | Path]:
        cmd: list[str | Path] = [
            self.java,
            "-jar",
            self.abe_jar,
            "unpack",
            self.backup_path,
            self.archive_path,
        ]
        if password:
            cmd.append(password)
        return cmd

    def unpack(self, password: str | None = None) -> bool:
        self.archive_path.unlink(missing_ok=True)
        try:
            result = run_tool(self.unpack_command(password), timeout=self.timeout)
        except ToolCommandError:
            return False
        return result.returncode == 0 and _non_empty_file(self.archive_path)

    def unpack_with_password_fallback(
        self,
        ask_password: PasswordPrompt,
        *,
        password: str | None = None,
    ) -> Path:
        if self.unpack(password):
            return self.archive_path
        if password:
            raise UnpackFailed(
                "Still failed to unpack. Wrong password or corrupted backup.",
            )
        supplied = ask_password()
        if supplied is None:
            raise UserAbort(
                "Failed to unpack the backup with abe.jar.",
                hint="If you set a backup password on the phone, re-run and provide it.",
            )
        if not self.unpack(supplied):
            raise UnpackFailed(
                "Still failed to unpack. Wrong password or corrupted backup.",
                hint="Re-run and create a new backup, leaving the password blank on the phone.",
            )
        return self.archive_path

    def expand(self) -> Path:
        return expand_archive(self.archive_path, self.tree_dir)

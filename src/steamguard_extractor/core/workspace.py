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
from dataclasses import dataclass
from pathlib import Path

DEFAULT_WORKDIR_NAME = "steam_guard_extractor_work"


@dataclass(frozen=True)
class Workspace:
    """Working directory owned by one run, with its well-known sub-paths."""

    root: Path

    @classmethod
    def at(cls, path: str | Path) -> Workspace:
        return cls(root=Path(path).expanduser().resolve())

    @property
    def backup_path(self) -> Path:
        return self.root / "backup.ab"

    @property
    def archive_path(self) -> Path:
        return self.root / "backup.tar"

    @property
    def tree_dir(self) -> Path:
        return self.root / "extracted"

    @property
    def jre_dir(self) -> Path:
        return self.root / "jre"

    @property
    def jre_download_path(self) -> Path:
        return self.root / "temurin-jre.download"

    @property
    def platform_tools_dir(self) -> Path:
        return self.root / "platform-tools"

    @property
    def platform_tools_download_path(self) -> Path:
        return self.root / "platform-tools.zip"

    @property
    def abe_path(self) -> Path:
        return self.root / "abe.jar"

    def ensure(self) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def artifact_paths(self) -> tuple[Path, ...]:
        return (self.backup_path, self.archive_path, self.tree_dir)

    def tool_paths(self) -> tuple[Path, ...]:
        return (
            self.jre_dir,
            self.jre_download_path,
            self.platform_tools_dir,
            self.platform_tools_download_path,
            self.abe_path,
        )

    def cleanup(self, *, include_tools: bool = True) -> list[Path]:
        targets = list(self.artifact_paths())
        if include_tools:
            targets.extend(self.tool_paths())
        removed: list[Path] = []
        for path in targets:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            elif path.exists() or path.is_symlink():
                path.unlink()
            else:
                continue
            removed.append(path)
        return removed

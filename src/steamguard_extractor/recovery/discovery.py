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

from pathlib import Path

from ..core.errors import StructureMissing
from ..core.models import SecretRecord
from .parser import parse_secret_file

CANDIDATE_PATTERN = "Steamguard-*"


def files_dir(tree: Path, package_id: str) -> Path:
    return tree / "apps" / package_id / "f"


def locate_files_dir(tree: Path, package_id: str) -> Path:
    path = files_dir(tree, package_id)
    if not path.is_dir():
        raise StructureMissing(
            f"Expected directory not found: {path}",
            hint="The backup does not contain the app's private files. "
            "Make sure the legacy app was installed and fully closed before the backup.",
            stage="files-dir",
        )
    return path


def find_candidate_files(directory: Path) -> list[Path]:
    return sorted(path for path in directory.glob(CANDIDATE_PATTERN) if path.is_file())


def discover_secrets(tree: Path, package_id: str) -> list[SecretRecord]:
    directory = locate_files_dir(tree, package_id)
    candidates = find_candidate_files(directory)
    if not candidates:
        raise StructureMissing(
            f"No {CANDIDATE_PATTERN} files found in {directory}. The backup may be incomplete.",
            hint="Redo the 'Please Help' steps on the phone, close the app fully, and back up again.",
            stage="candidates",
        )

    records: list[SecretRecord] = []
    for path in candidates:
        try:
            raw = path.read_bytes()
        except OSError:
            continue
        record = parse_secret_file(raw, path)
        if record.found:
            records.append(record)

    if not records:
        raise StructureMissing(
            f"No secrets found. Inspect files under: {directory}",
            stage="secrets",
        )
    return records

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

import tarfile
import tempfile
from pathlib import Path

from ...archive.pipeline import expand_archive
from ...config import load_app_config
from ...core.models import SecretRecord
from ...recovery.discovery import discover_secrets
from ..api import print_info, print_secret_report, status
from ..core.types import ScanArgs
from ..startup import apply_ui_defaults


def scan_path(path: Path, package_id: str, *, quiet: bool) -> list[SecretRecord]:
    """Discover secrets in an extracted backup tree or a flat ``.tar`` archive."""
    if path.is_dir():
        return discover_secrets(path, package_id)
    if not path.is_file():
        raise FileNotFoundError(f"path not found: {path}")
    if not tarfile.is_tarfile(path):
        raise ValueError(f"not a directory or tar archive: {path}")
    with tempfile.TemporaryDirectory(prefix="steamguard-scan-") as tmp:
        with status(f"Expanding {path.name}...", quiet=quiet):
            tree = expand_archive(path, Path(tmp) / "extracted")
        return discover_secrets(tree, package_id)


def run_scan(args: ScanArgs) -> int:
    config = load_app_config(args.config)
    quiet = apply_ui_defaults(
        config,
        quiet=args.quiet,
        no_color=args.no_color,
        no_animations=args.no_animations,
    )
    package_id = args.package_id or config.app.package_id
    path = Path(args.path).expanduser()
    print_info(f"Scanning {path} for {package_id}", quiet=quiet)
    records = scan_path(path, package_id, quiet=quiet)
    print_secret_report(records, quiet=quiet)
    return 0

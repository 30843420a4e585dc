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

from .app import app as app, main as main
from .core.types import ExtractArgs as ExtractArgs, ScanArgs as ScanArgs
from .flows.extract import (
    InteractiveBackupOperator as InteractiveBackupOperator,
    RecoveryFlowController as RecoveryFlowController,
    run_extract as run_extract,
)
from .flows.scan import run_scan as run_scan, scan_path as scan_path

__all__ = [
    "ExtractArgs",
    "InteractiveBackupOperator",
    "RecoveryFlowController",
    "ScanArgs",
    "app",
    "main",
    "run_extract",
    "run_scan",
    "scan_path",
]

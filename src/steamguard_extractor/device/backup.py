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

"""Bounded retry loop around ``adb backup``.

When the app is only backgrounded, Android hands back a ~1 KB placeholder
instead of the app data. The loop detects that by size, and between attempts
the operator may ask for the app to be relaunched and force-closed so the
in-app steps can be redone.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..core.errors import BackupInvalid
from ..core.models import BackupArtifact, BackupAttempt, BackupStatus

DEFAULT_MAX_ATTEMPTS = 5
MIN_BACKUP_SIZE = 2048


class BackupBridge(Protocol):
    def create_backup(self, package_id: str, dest: str | Path) -> bool: ...

    def launch(self, package_id: str) -> None: ...

    def force_stop(self, package_id: str) -> None: ...


class BackupOperator(Protocol):
    def confirm_app_closed(self, attempt: int, max_attempts: int) -> bool: ...

    def report_attempt(self, attempt: BackupAttempt) -> None: ...

    def offer_recovery(self, attempt: BackupAttempt) -> bool: ...

    def await_recovery_steps(self) -> None: ...


def classify_backup(
    tool_ok: bool,
    path: Path,
    *,
    min_size: int = MIN_BACKUP_SIZE,
) -> tuple[BackupStatus, int | None]:
    if not tool_ok:
        return BackupStatus.TOOL_FAILED, None
    try:
        size = path.stat().st_size
    except FileNotFoundError:
        return BackupStatus.TOOL_FAILED, None
    if size < min_size:
        return BackupStatus.TOO_SMALL, size
    return BackupStatus.VALID, size


class BackupOrchestrator:
    def __init__(
        self,
        bridge: BackupBridge,
        operator: BackupOperator,
        *,
        package_id: str,
        dest: Path,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        min_size: int = MIN_BACKUP_SIZE,
    ) -> None:
        if max_attempts <= 0:
            raise ValueError("max_attempts must be a positive integer")
        self.bridge = bridge
        self.operator = operator
        self.package_id = package_id
        self.dest = dest
        self.max_attempts = max_attempts
        self.min_size = min_size
        self.attempts: list[BackupAttempt] = []

    def attempt_once(self, number: int) -> BackupAttempt:
        if not self.operator.confirm_app_closed(number, self.max_attempts):
            return BackupAttempt(number=number, status=BackupStatus.SKIPPED)
        self.dest.unlink(missing_ok=True)
        tool_ok = self.bridge.create_backup(self.package_id, self.dest)
        status, size = classify_backup(tool_ok, self.dest, min_size=self.min_size)
        return BackupAttempt(number=number, status=status, size=size)

    def run_recovery(self) -> None:
        self.bridge.launch(self.package_id)
        self.operator.await_recovery_steps()
        self.bridge.force_stop(self.package_id)

    def run(self) -> BackupArtifact:
        for number in range(1, self.max_attempts + 1):
            attempt = self.attempt_once(number)
            self.attempts.append(attempt)
            self.operator.report_attempt(attempt)
            if attempt.ok and attempt.size is not None:
                return BackupArtifact(path=self.dest, size=attempt.size)
            if attempt.status is BackupStatus.SKIPPED or number == self.max_attempts:
                continue
            if self.operator.offer_recovery(attempt):
                self.run_recovery()
        raise BackupInvalid(
            f"Could not create a valid backup after {self.max_attempts} attempts.",
            hint="Fully close the app (swipe it away) before confirming, "
            "and leave the backup password blank on the phone.",
            attempts=self.max_attempts,
        )

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

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BackupStatus(str, Enum):
    VALID = "valid"
    TOO_SMALL = "too_small"
    TOOL_FAILED = "tool_failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class BackupAttempt:
    number: int
    status: BackupStatus
    size: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is BackupStatus.VALID


@dataclass(frozen=True)
class BackupArtifact:
    path: Path
    size: int


@dataclass(frozen=True)
class SecretFields:
    """Raw string fields pulled out of one Steamguard file."""

    uri: str | None = None
    account_name: str | None = None
    steamid: str | None = None
    shared_secret: str | None = None
    identity_secret: str | None = None

    def is_empty(self) -> bool:
        return not any(
            (self.uri, self.account_name, self.steamid, self.shared_secret, self.identity_secret)
        )


@dataclass(frozen=True)
class SecretRecord:
    source_path: Path
    account_name: str | None = None
    numeric_id: str | None = None
    raw_uri: str | None = None
    shared_secret_b64: str | None = None
    identity_secret_b64: str | None = None
    totp_secret: str | None = None

    @property
    def found(self) -> bool:
        return bool(
            self.totp_secret
            or self.shared_secret_b64
            or self.identity_secret_b64
            or self.raw_uri
        )


@dataclass(frozen=True)
class Device:
    serial: str
    state: str

    @property
    def authorized(self) -> bool:
        return self.state == "device"


@dataclass(frozen=True)
class Toolchain:
    java: Path
    adb: Path
    abe_jar: Path

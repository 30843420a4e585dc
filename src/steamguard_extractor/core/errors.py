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

"""Fatal conditions of the extraction flow.

Every stage failure aborts the run. Per-file parse problems never show up here;
the parser absorbs them and reports missing fields as ``None``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal


@dataclass
class ExtractorError(RuntimeError):
    message: str
    hint: str | None = field(default=None, kw_only=True)

    def __str__(self) -> str:
        return self.message


class UserAbort(ExtractorError):
    pass


class ToolUnavailable(ExtractorError):
    pass


@dataclass
class ToolCommandError(ExtractorError):
    cmd: Sequence[str] = field(default=(), kw_only=True)
    returncode: int | None = field(default=None, kw_only=True)
    stderr: str = field(default="", kw_only=True)

    def __str__(self) -> str:
        detail = self.stderr.strip() or self.message
        if self.returncode is None:
            return f"{self.cmd[0] if self.cmd else 'tool'} failed: {detail}"
        return f"{self.cmd[0] if self.cmd else 'tool'} failed (exit {self.returncode}): {detail}"


@dataclass
class DeviceNotReady(ExtractorError):
    reason: Literal["none", "unauthorized"] = field(default="none", kw_only=True)


class InstallFailed(ExtractorError):
    pass


@dataclass
class BackupInvalid(ExtractorError):
    attempts: int = field(default=0, kw_only=True)


class UnpackFailed(ExtractorError):
    pass


class ExpandFailed(ExtractorError):
    pass


@dataclass
class StructureMissing(ExtractorError):
    stage: Literal["files-dir", "candidates", "secrets"] = field(
        default="files-dir", kw_only=True
    )

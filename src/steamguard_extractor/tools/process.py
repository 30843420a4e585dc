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

import subprocess
from collections.abc import Sequence
from pathlib import Path

from ..core.errors import ToolCommandError, ToolUnavailable


def run_tool(
    cmd: Sequence[str | Path],
    *,
    timeout: float | None = None,
    capture: bool = True,
    check: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run an external tool synchronously.

    ``capture=False`` lets the tool talk to the terminal directly (adb backup
    prints its "unlock your device" notice that way). A timeout surfaces as
    ``ToolCommandError`` with no return code.
    """
    args = [str(part) for part in cmd]
    output = subprocess.PIPE if capture else None
    try:
        result = subprocess.run(
            args,
            stdout=output,
            stderr=output,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (FileNotFoundError, PermissionError) as exc:
        raise ToolUnavailable(
            f"cannot execute {args[0]}: {exc.strerror or exc}",
            hint="Remove the working directory's tool folders to download them again, "
            "or point the config at a local copy.",
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise ToolCommandError(
            f"timed out after {timeout:g}s",
            cmd=args,
            returncode=None,
        ) from exc
    if check and result.returncode != 0:
        raise ToolCommandError(
            "unknown error",
            cmd=args,
            returncode=result.returncode,
            stderr=(result.stderr or result.stdout or "") if capture else "",
        )
    return result

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

from ..core.errors import DeviceNotReady, ToolCommandError
from ..core.models import Device
from ..tools.process import run_tool

LAUNCHER_CATEGORY = "android.intent.category.LAUNCHER"


def parse_devices(output: str) -> list[Device]:
    devices: list[Device] = []
    for line in output.splitlines():
        line = line.strip()
        if not line or line.startswith("List of devices") or line.startswith("*"):
            continue
        parts = line.split()
        if len(parts) < 2:
            continue
        devices.append(Device(serial=parts[0], state=parts[1]))
    return devices


class AdbBridge:
    def __init__(self, adb_path: str | Path, *, timeout: float | None = None) -> None:
        self.adb_path = Path(adb_path)
        self.timeout = timeout

    def _run(self, *args: str | Path, capture: bool = True, check: bool = False):
        return run_tool(
            [self.adb_path, *args],
            timeout=self.timeout,
            capture=capture,
            check=check,
        )

    def _run_quietly(self, *args: str | Path) -> bool:
        try:
            return self._run(*args).returncode == 0
        except ToolCommandError:
            return False

    def restart_server(self) -> None:
        self._run_quietly("kill-server")
        self._run_quietly("start-server")

    def list_devices(self) -> list[Device]:
        result = self._run("devices", check=True)
        return parse_devices(result.stdout or "")

    def require_authorized_device(self) -> list[Device]:
        devices = self.list_devices()
        authorized = [device for device in devices if device.authorized]
        if authorized:
            return authorized
        if any(device.state == "unauthorized" for device in devices):
            raise DeviceNotReady(
                "Device is connected but unauthorized.",
                hint="Unlock the phone and accept the USB debugging prompt, then re-run.",
                reason="unauthorized",
            )
        raise DeviceNotReady(
            "No authorized devices found.",
            hint="Check the cable and that USB debugging is enabled in Developer Options.",
            reason="none",
        )

    def install(self, apk: str | Path, *, bypass_low_target_sdk: bool = True) -> bool:
        args: list[str | Path] = ["install"]
        if bypass_low_target_sdk:
            args.append("--bypass-low-target-sdk-block")
        args.append(apk)
        try:
            return self._run(*args, capture=False).returncode == 0
        except ToolCommandError:
            return False

    def launch(self, package_id: str) -> None:
        self._run_quietly("shell", "monkey", "-p", package_id, "-c", LAUNCHER_CATEGORY, "1")

    def force_stop(self, package_id: str) -> None:
        self._run_quietly("shell", "am", "force-stop", package_id)

    def create_backup(self, package_id: str, dest: str | Path) -> bool:
        try:
            result = self._run("backup", "-f", dest, "-noapk", package_id, capture=False)
        except ToolCommandError:
            return False
        return result.returncode == 0

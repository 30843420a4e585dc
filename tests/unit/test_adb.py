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

import subprocess
import unittest
from pathlib import Path
from unittest import mock

from steamguard_extractor.core.errors import DeviceNotReady, ToolCommandError
from steamguard_extractor.device.adb import LAUNCHER_CATEGORY, AdbBridge, parse_devices

ADB = Path("/tools/platform-tools/adb")
DEVICES_OUTPUT = """\
* daemon not running; starting now at tcp:5037
* daemon started successfully
List of devices attached
R58M123ABC\tdevice
emulator-5554\tunauthorized

"""


def _completed(returncode: int = 0, stdout: str = "") -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess([], returncode, stdout, "")


class TestParseDevices(unittest.TestCase):
    def test_parses_serial_and_state(self) -> None:
        devices = parse_devices(DEVICES_OUTPUT)
        self.assertEqual(
            [(d.serial, d.state) for d in devices],
            [("R58M123ABC", "device"), ("emulator-5554", "unauthorized")],
        )
        self.assertEqual([d.authorized for d in devices], [True, False])

    def test_empty_listing(self) -> None:
        self.assertEqual(parse_devices("List of devices attached\n\n"), [])


class TestAdbBridge(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("steamguard_extractor.device.adb.run_tool")
        self.run_tool = patcher.start()
        self.addCleanup(patcher.stop)
        self.bridge = AdbBridge(ADB, timeout=30)

    def test_require_authorized_device(self) -> None:
        self.run_tool.return_value = _completed(stdout=DEVICES_OUTPUT)
        devices = self.bridge.require_authorized_device()
        self.assertEqual([d.serial for d in devices], ["R58M123ABC"])
        self.run_tool.assert_called_once_with(
            [ADB, "devices"], timeout=30, capture=True, check=True
        )

    def test_unauthorized_only(self) -> None:
        self.run_tool.return_value = _completed(
            stdout="List of devices attached\nabc\tunauthorized\n"
        )
        with self.assertRaises(DeviceNotReady) as ctx:
            self.bridge.require_authorized_device()
        self.assertEqual(ctx.exception.reason, "unauthorized")

    def test_no_devices(self) -> None:
        self.run_tool.return_value = _completed(stdout="List of devices attached\n")
        with self.assertRaises(DeviceNotReady) as ctx:
            self.bridge.require_authorized_device()
        self.assertEqual(ctx.exception.reason, "none")
        self.assertIsNotNone(ctx.exception.hint)

    def test_offline_device_is_not_usable(self) -> None:
        self.run_tool.return_value = _completed(stdout="List of devices attached\nabc\toffline\n")
        with self.assertRaises(DeviceNotReady) as ctx:
            self.bridge.require_authorized_device()
        self.assertEqual(ctx.exception.reason, "none")

    def test_create_backup_command(self) -> None:
        self.run_tool.return_value = _completed()
        dest = Path("/work/backup.ab")
        self.assertTrue(self.bridge.create_backup("com.example", dest))
        self.run_tool.assert_called_once_with(
            [ADB, "backup", "-f", dest, "-noapk", "com.example"],
            timeout=30,
            capture=False,
            check=False,
        )

    def test_create_backup_failure_and_timeout(self) -> None:
        self.run_tool.return_value = _completed(returncode=1)
        self.assertFalse(self.bridge.create_backup("com.example", "backup.ab"))
        self.run_tool.side_effect = ToolCommandError("timed out", cmd=["adb"], returncode=None)
        self.assertFalse(self.bridge.create_backup("com.example", "backup.ab"))

    def test_install_uses_sdk_bypass(self) -> None:
        self.run_tool.return_value = _completed()
        self.assertTrue(self.bridge.install("steam.apk"))
        args = self.run_tool.call_args.args[0]
        self.assertEqual(args, [ADB, "install", "--bypass-low-target-sdk-block", "steam.apk"])
        self.bridge.install("steam.apk", bypass_low_target_sdk=False)
        self.assertEqual(self.run_tool.call_args.args[0], [ADB, "install", "steam.apk"])

    def test_launch_and_force_stop_ignore_failures(self) -> None:
        self.run_tool.side_effect = [
            ToolCommandError("boom", cmd=["adb"], returncode=1),
            _completed(returncode=255),
        ]
        self.bridge.launch("com.example")
        self.bridge.force_stop("com.example")
        calls = [call.args[0] for call in self.run_tool.call_args_list]
        self.assertEqual(
            calls,
            [
                [ADB, "shell", "monkey", "-p", "com.example", "-c", LAUNCHER_CATEGORY, "1"],
                [ADB, "shell", "am", "force-stop", "com.example"],
            ],
        )

    def test_restart_server(self) -> None:
        self.run_tool.return_value = _completed(returncode=1)
        self.bridge.restart_server()
        calls = [call.args[0][1] for call in self.run_tool.call_args_list]
        self.assertEqual(calls, ["kill-server", "start-server"])


if __name__ == "__main__":
    unittest.main()

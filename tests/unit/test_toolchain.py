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

import os
import subprocess
import unittest
from pathlib import Path
from unittest import mock

from test_support import temp_directory, temp_env

from steamguard_extractor.config import AppConfig, ToolDefaults
from steamguard_extractor.core.errors import ToolCommandError, ToolUnavailable
from steamguard_extractor.core.workspace import Workspace
from steamguard_extractor.tools import toolchain


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x")
    return path


def _no_fetch(description: str, _fetch) -> Path:
    raise AssertionError(f"unexpected download: {description}")


class TestToolchain(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch(
            "steamguard_extractor.tools.toolchain.run_tool",
            return_value=subprocess.CompletedProcess([], 0, "", 'openjdk version "11"'),
        )
        self.run_tool = patcher.start()
        self.addCleanup(patcher.stop)
        env = mock.patch.dict(os.environ, {}, clear=False)
        env.start()
        self.addCleanup(env.stop)
        for name in (toolchain.JAVA_PATH_ENV, toolchain.ADB_PATH_ENV, toolchain.ABE_PATH_ENV):
            os.environ.pop(name, None)

    def test_env_overrides_win(self) -> None:
        with temp_directory() as tmp:
            java = _touch(tmp / "bin" / "java")
            adb = _touch(tmp / "bin" / "adb")
            abe = _touch(tmp / "abe.jar")
            overrides = {
                toolchain.JAVA_PATH_ENV: str(java),
                toolchain.ADB_PATH_ENV: str(adb),
                toolchain.ABE_PATH_ENV: str(abe),
            }
            config = AppConfig(tools=ToolDefaults(adb_path="/configured/adb"))
            with temp_env(overrides):
                result = toolchain.ensure_toolchain(
                    Workspace.at(tmp / "work"), config, runner=_no_fetch
                )
        self.assertEqual((result.java, result.adb, result.abe_jar), (java, adb, abe))
        self.run_tool.assert_called_once_with([java, "-version"], timeout=None, check=True)

    def test_configured_path_must_exist(self) -> None:
        with temp_directory() as tmp:
            config = AppConfig(tools=ToolDefaults(java_path=str(tmp / "missing-java")))
            with self.assertRaises(ToolUnavailable) as ctx:
                toolchain.ensure_toolchain(Workspace.at(tmp), config, runner=_no_fetch)
        self.assertIn("missing-java", str(ctx.exception))
        self.assertIn(toolchain.JAVA_PATH_ENV, ctx.exception.hint)

    def test_provisioned_tools_are_reused(self) -> None:
        with temp_directory() as tmp:
            workspace = Workspace.at(tmp)
            java_name = "java.exe" if os.name == "nt" else "java"
            adb_name = "adb.exe" if os.name == "nt" else "adb"
            java = _touch(workspace.jre_dir / "jdk-11-jre" / "bin" / java_name)
            adb = _touch(workspace.platform_tools_dir / adb_name)
            _touch(workspace.abe_path)
            result = toolchain.ensure_toolchain(workspace, AppConfig(), runner=_no_fetch)
        self.assertEqual(result.java, java)
        self.assertEqual(result.adb, adb)
        self.assertEqual(result.abe_jar, workspace.abe_path)

    def test_missing_tools_are_downloaded_in_order(self) -> None:
        fetched: list[str] = []

        def _runner(description: str, fetch) -> Path:
            fetched.append(description)
            return Path("/downloaded") / str(len(fetched))

        with temp_directory() as tmp:
            toolchain.ensure_toolchain(Workspace.at(tmp), AppConfig(), runner=_runner)
        self.assertEqual(len(fetched), 3)
        self.assertIn("JRE", fetched[0])
        self.assertIn("Platform-Tools", fetched[1])
        self.assertIn("Backup Extractor", fetched[2])

    def test_download_failure_becomes_tool_unavailable(self) -> None:
        def _runner(_description: str, _fetch) -> Path:
            raise RuntimeError("failed to download https://x: HTTP 503 Service Unavailable")

        with temp_directory() as tmp:
            with self.assertRaises(ToolUnavailable) as ctx:
                toolchain.ensure_toolchain(Workspace.at(tmp), AppConfig(), runner=_runner)
        self.assertIn("HTTP 503", str(ctx.exception))

    def test_unrunnable_java(self) -> None:
        self.run_tool.side_effect = ToolCommandError("x", cmd=["java"], returncode=1)
        with self.assertRaises(ToolUnavailable):
            toolchain.verify_java(Path("java"))


if __name__ == "__main__":
    unittest.main()

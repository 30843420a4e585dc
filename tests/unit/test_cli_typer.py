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

import re
import unittest
from unittest import mock

from test_support import (
    TEST_OTPAUTH_LINE,
    TEST_SECRET_JSON,
    TEST_STEAM_LINE,
    make_tar,
    temp_directory,
    write_steamguard_tree,
)
from typer.testing import CliRunner

from steamguard_extractor.cli import app
from steamguard_extractor.config.installer import DEFAULT_CONFIG_PATH

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")


def _strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


class TestCliTyper(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        patcher = mock.patch("steamguard_extractor.cli.app.run_startup", return_value=False)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _invoke(self, args: list[str]):
        return self.runner.invoke(app, ["--config", str(DEFAULT_CONFIG_PATH), *args])

    def test_root_info_commands(self) -> None:
        cases = (
            {"args": ["--help"], "contains": ("scan", "--workdir", "--apk")},
            {"args": ["--version"], "contains": ("steamguard-extractor",)},
        )
        for case in cases:
            with self.subTest(args=case["args"]):
                result = self.runner.invoke(app, case["args"])
                self.assertEqual(result.exit_code, 0)
                output = _strip_ansi(result.output)
                for expected in case["contains"]:
                    self.assertIn(expected, output)

    def test_root_no_subcommand_non_tty_references_help(self) -> None:
        with mock.patch("steamguard_extractor.cli.app.sys.stdin.isatty", return_value=False):
            result = self.runner.invoke(app, [])
        self.assertEqual(result.exit_code, 2)
        self.assertIn("steamguard-extractor --help", _strip_ansi(result.output))

    def test_root_no_subcommand_runs_extract_flow(self) -> None:
        with mock.patch("steamguard_extractor.cli.app.sys") as sys_mock:
            sys_mock.stdin.isatty.return_value = True
            with mock.patch("steamguard_extractor.cli.app.run_extract", return_value=0) as run:
                result = self.runner.invoke(app, ["--workdir", "/tmp/sg", "--apk", "a.apk"])
        self.assertEqual(result.exit_code, 0)
        args = run.call_args.args[0]
        self.assertEqual((args.workdir, args.apk), ("/tmp/sg", "a.apk"))

    def test_interrupted_flow_exits_130(self) -> None:
        with mock.patch("steamguard_extractor.cli.app.sys") as sys_mock:
            sys_mock.stdin.isatty.return_value = True
            with mock.patch(
                "steamguard_extractor.cli.app.run_extract",
                side_effect=KeyboardInterrupt,
            ):
                result = self.runner.invoke(app, [])
        self.assertEqual(result.exit_code, 130)

    def test_scan_extracted_tree(self) -> None:
        with temp_directory() as tree:
            write_steamguard_tree(tree, {"Steamguard-1": TEST_SECRET_JSON})
            result = self._invoke(["--quiet", "scan", str(tree)])
        self.assertEqual(result.exit_code, 0, result.output)
        lines = _strip_ansi(result.stdout).splitlines()
        self.assertEqual(lines, [TEST_STEAM_LINE, TEST_OTPAUTH_LINE])

    def test_scan_tar_archive(self) -> None:
        with temp_directory() as tmp:
            source = tmp / "source"
            write_steamguard_tree(source, {"Steamguard-1": TEST_SECRET_JSON})
            archive = make_tar(source, tmp / "backup.tar")
            result = self._invoke(["scan", str(archive)])
        self.assertEqual(result.exit_code, 0, result.output)
        stdout = _strip_ansi(result.stdout)
        self.assertIn(TEST_STEAM_LINE, stdout)
        self.assertIn(TEST_OTPAUTH_LINE, stdout)

    def test_scan_errors_exit_2(self) -> None:
        with temp_directory() as tmp:
            (tmp / "notes.txt").write_text("hello", encoding="utf-8")
            cases = (
                ([str(tmp)], "Expected directory not found"),
                ([str(tmp / "missing")], "path not found"),
                ([str(tmp / "notes.txt")], "not a directory or tar archive"),
                ([str(tmp), "--package-id", "com.other"], "Expected directory not found"),
            )
            for args, message in cases:
                with self.subTest(args=args):
                    result = self._invoke(["scan", *args])
                    self.assertEqual(result.exit_code, 2)
                    self.assertIn(message, _strip_ansi(result.output))


if __name__ == "__main__":
    unittest.main()

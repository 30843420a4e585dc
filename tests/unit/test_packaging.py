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

import tarfile
import tomllib
import unittest
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _minimum_python() -> tuple[int, ...]:
    with PYPROJECT.open("rb") as handle:
        requirement = tomllib.load(handle)["project"]["requires-python"]
    return tuple(int(part) for part in requirement.removeprefix(">=").split("."))


class TestPackaging(unittest.TestCase):
    def test_minimum_python_supports_tar_data_filter(self) -> None:
        # extractall(filter="data") first shipped in 3.11.4.
        self.assertGreaterEqual(_minimum_python(), (3, 11, 4))
        self.assertTrue(hasattr(tarfile, "data_filter"))

    def test_default_config_is_packaged(self) -> None:
        with PYPROJECT.open("rb") as handle:
            data = tomllib.load(handle)
        package_data = data["tool"]["setuptools"]["package-data"]["steamguard_extractor"]
        self.assertIn("config/*.toml", package_data)


if __name__ == "__main__":
    unittest.main()

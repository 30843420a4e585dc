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

import webbrowser
from collections.abc import Iterable, Sequence
from pathlib import Path

from ...core.errors import InstallFailed, ToolUnavailable
from ...device.adb import AdbBridge
from ..api import (
    print_info,
    print_instructions,
    print_ok,
    prompt_choice_list,
    prompt_continue,
    prompt_yes_no,
)
from ..core.log import _warn


def find_apks(dirs: Iterable[Path]) -> list[Path]:
    """Return the ``*.apk`` files lying directly in any of ``dirs``."""
    found: set[Path] = set()
    for directory in dirs:
        if not directory.is_dir():
            continue
        for candidate in directory.glob("*.apk"):
            if candidate.is_file():
                found.add(candidate.resolve())
    return sorted(found)


def search_dirs(workdir: Path, extra: Sequence[str], *, cwd: Path | None = None) -> list[Path]:
    dirs = [workdir, cwd or Path.cwd()]
    dirs.extend(Path(entry).expanduser() for entry in extra)
    unique: list[Path] = []
    for directory in dirs:
        resolved = directory.resolve()
        if resolved not in unique:
            unique.append(resolved)
    return unique


def require_apk(path: str | Path) -> Path:
    apk = Path(path).expanduser()
    if not apk.is_file():
        raise ToolUnavailable(
            f"APK not found: {apk}",
            hint="Pass the legacy Steam APK with --apk or drop it into the working directory.",
        )
    return apk


def choose_apk(dirs: Sequence[Path], *, download_url: str, quiet: bool) -> Path:
    browser_opened = False
    while True:
        candidates = find_apks(dirs)
        if not candidates:
            _warn("No APKs found in: " + ", ".join(str(d) for d in dirs))
            print_instructions(
                "Legacy Steam 2.1.4 APK",
                [
                    f"Download it from: {download_url}",
                    f"Place the APK into: {dirs[0]}",
                ],
                quiet=False,
            )
            if not browser_opened:
                browser_opened = True
                try:
                    webbrowser.open(download_url)
                except webbrowser.Error:
                    _warn("Could not open a browser; copy the download link above.")
            prompt_continue()
            continue
        if len(candidates) == 1:
            print_ok(f"Found single APK: {candidates[0]}", quiet=quiet)
            return candidates[0]
        choice = prompt_choice_list(
            [(str(path), str(path)) for path in candidates],
            default=str(candidates[0]),
            title="Found APK(s). Pick one",
        )
        selected = Path(choice)
        if not selected.is_file():
            _warn(f"APK vanished: {selected}")
            continue
        print_ok(f"Using APK: {selected}", quiet=quiet)
        return selected


def install_with_retry(bridge: AdbBridge, apk: Path, *, quiet: bool) -> int:
    """Install ``apk``, re-trying while the operator confirms the on-phone override.

    Returns the number of failed attempts before the install went through.
    """
    print_instructions(
        "Install legacy Steam",
        [
            "We will run: adb install --bypass-low-target-sdk-block <apk>",
            "If your phone shows an 'older version' warning, tap "
            "'More info' -> 'Install anyway' (unlock if needed), then retry here.",
        ],
        quiet=quiet,
    )
    failures = 0
    while not bridge.install(apk):
        failures += 1
        _warn(f"Install attempt #{failures} failed.")
        retry = prompt_yes_no(
            "Did you tap 'More info' -> 'Install anyway' on the phone and want to retry?",
            default=False,
        )
        if not retry:
            raise InstallFailed("Install did not complete. Cannot continue.")
    print_info("Legacy Steam installed.", quiet=quiet)
    return failures

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

import functools
import os
from collections.abc import Callable
from pathlib import Path

from ..config.loader import AppConfig
from ..core.errors import ToolCommandError, ToolUnavailable
from ..core.models import Toolchain
from ..core.workspace import Workspace
from .fetch import (
    ProgressCallback,
    download_abe,
    download_jre,
    download_platform_tools,
    find_java_binary,
)
from .process import run_tool

JAVA_PATH_ENV = "STEAMGUARD_JAVA_PATH"
ADB_PATH_ENV = "STEAMGUARD_ADB_PATH"
ABE_PATH_ENV = "STEAMGUARD_ABE_PATH"

Fetcher = Callable[[ProgressCallback | None], Path]
FetchRunner = Callable[[str, Fetcher], Path]


def _run_fetch_directly(_description: str, fetch: Fetcher) -> Path:
    return fetch(None)


def _configured_path(env_name: str, configured: str | None) -> Path | None:
    override = os.environ.get(env_name)
    if override:
        return Path(override).expanduser()
    if configured:
        return Path(configured).expanduser()
    return None


def _require_file(path: Path, *, label: str, env_name: str) -> Path:
    if not path.is_file():
        raise ToolUnavailable(
            f"{label} not found at {path}",
            hint=f"Fix the configured path or unset {env_name} to download it automatically.",
        )
    return path


def _provisioned_adb(workspace: Workspace) -> Path | None:
    adb = workspace.platform_tools_dir / ("adb.exe" if os.name == "nt" else "adb")
    return adb if adb.is_file() else None


def _provisioned_java(workspace: Workspace) -> Path | None:
    if not workspace.jre_dir.is_dir():
        return None
    return find_java_binary(workspace.jre_dir)


def _fetch(runner: FetchRunner, description: str, fetch: Fetcher, *, label: str) -> Path:
    try:
        return runner(description, fetch)
    except (OSError, RuntimeError) as exc:
        if isinstance(exc, ToolUnavailable):
            raise
        raise ToolUnavailable(
            f"Failed to provision {label}: {exc}",
            hint="Check your internet connection, or configure a local path in the config file.",
        ) from exc


def resolve_java(workspace: Workspace, config: AppConfig, runner: FetchRunner) -> Path:
    configured = _configured_path(JAVA_PATH_ENV, config.tools.java_path)
    if configured is not None:
        return _require_file(configured, label="java", env_name=JAVA_PATH_ENV)
    existing = _provisioned_java(workspace)
    if existing is not None:
        return existing
    fetch = functools.partial(
        _download_jre_with_progress,
        url_template=config.sources.jre_url,
        dest_dir=workspace.jre_dir,
        archive_path=workspace.jre_download_path,
    )
    return _fetch(runner, "Downloading Temurin JRE 11...", fetch, label="the Java runtime")


def _download_jre_with_progress(
    progress_cb: ProgressCallback | None,
    *,
    url_template: str,
    dest_dir: Path,
    archive_path: Path,
) -> Path:
    return download_jre(
        url_template=url_template,
        dest_dir=dest_dir,
        archive_path=archive_path,
        progress_cb=progress_cb,
    )


def _download_platform_tools_with_progress(
    progress_cb: ProgressCallback | None,
    *,
    url_template: str,
    dest_root: Path,
    archive_path: Path,
) -> Path:
    return download_platform_tools(
        url_template=url_template,
        dest_root=dest_root,
        archive_path=archive_path,
        progress_cb=progress_cb,
    )


def _download_abe_with_progress(
    progress_cb: ProgressCallback | None,
    *,
    url: str,
    dest: Path,
) -> Path:
    return download_abe(url=url, dest=dest, progress_cb=progress_cb)


def resolve_adb(workspace: Workspace, config: AppConfig, runner: FetchRunner) -> Path:
    configured = _configured_path(ADB_PATH_ENV, config.tools.adb_path)
    if configured is not None:
        return _require_file(configured, label="adb", env_name=ADB_PATH_ENV)
    existing = _provisioned_adb(workspace)
    if existing is not None:
        return existing
    fetch = functools.partial(
        _download_platform_tools_with_progress,
        url_template=config.sources.platform_tools_url,
        dest_root=workspace.root,
        archive_path=workspace.platform_tools_download_path,
    )
    return _fetch(runner, "Downloading Android Platform-Tools...", fetch, label="adb")


def resolve_abe(workspace: Workspace, config: AppConfig, runner: FetchRunner) -> Path:
    configured = _configured_path(ABE_PATH_ENV, config.tools.abe_path)
    if configured is not None:
        return _require_file(configured, label="abe.jar", env_name=ABE_PATH_ENV)
    if workspace.abe_path.is_file() and workspace.abe_path.stat().st_size > 0:
        return workspace.abe_path
    fetch = functools.partial(
        _download_abe_with_progress,
        url=config.sources.abe_url,
        dest=workspace.abe_path,
    )
    return _fetch(runner, "Downloading Android Backup Extractor...", fetch, label="abe.jar")


def verify_java(java: Path, *, timeout: float | None = None) -> None:
    try:
        run_tool([java, "-version"], timeout=timeout, check=True)
    except ToolCommandError as exc:
        raise ToolUnavailable(
            f"Java is not runnable: {exc}",
            hint="Delete the jre folder in the working directory to download it again.",
        ) from exc


def ensure_toolchain(
    workspace: Workspace,
    config: AppConfig,
    *,
    runner: FetchRunner | None = None,
) -> Toolchain:
    runner = runner or _run_fetch_directly
    workspace.ensure()
    java = resolve_java(workspace, config, runner)
    verify_java(java, timeout=config.tools.timeout)
    adb = resolve_adb(workspace, config, runner)
    abe_jar = resolve_abe(workspace, config, runner)
    return Toolchain(java=java, adb=adb, abe_jar=abe_jar)

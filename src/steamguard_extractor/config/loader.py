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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ..core.workspace import DEFAULT_WORKDIR_NAME
from ..device.backup import DEFAULT_MAX_ATTEMPTS, MIN_BACKUP_SIZE
from .installer import resolve_config_path

DEFAULT_PACKAGE_ID = "com.valvesoftware.android.steam.community"
DEFAULT_APK_DOWNLOAD_URL = (
    "https://www.apkmirror.com/apk/valve-corporation/steam/"
    "steam-2-1-4-release/steam-2-1-4-android-apk-download/"
)
DEFAULT_JRE_URL = (
    "https://api.adoptium.net/v3/binary/latest/11/ga/{os}/{arch}/jre/hotspot/normal/eclipse"
)
DEFAULT_PLATFORM_TOOLS_URL = (
    "https://dl.google.com/android/repository/platform-tools-latest-{os}.zip"
)
DEFAULT_ABE_URL = (
    "https://github.com/nelenkov/android-backup-extractor/releases/download/"
    "master-20221109063121-8fdfc5e/abe.jar"
)


@dataclass(frozen=True)
class AppDefaults:
    package_id: str = DEFAULT_PACKAGE_ID
    apk_download_url: str = DEFAULT_APK_DOWNLOAD_URL


@dataclass(frozen=True)
class WorkspaceDefaults:
    dir: str | None = None
    apk_search_dirs: tuple[str, ...] = ()

    def resolve_dir(self, base: Path) -> Path:
        if self.dir:
            return Path(self.dir).expanduser()
        return base / DEFAULT_WORKDIR_NAME


@dataclass(frozen=True)
class BackupDefaults:
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    min_size: int = MIN_BACKUP_SIZE


@dataclass(frozen=True)
class ToolDefaults:
    timeout: float | None = None
    java_path: str | None = None
    adb_path: str | None = None
    abe_path: str | None = None


@dataclass(frozen=True)
class SourceDefaults:
    jre_url: str = DEFAULT_JRE_URL
    platform_tools_url: str = DEFAULT_PLATFORM_TOOLS_URL
    abe_url: str = DEFAULT_ABE_URL


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False
    no_animations: bool = False


@dataclass(frozen=True)
class AppConfig:
    app: AppDefaults = field(default_factory=AppDefaults)
    workspace: WorkspaceDefaults = field(default_factory=WorkspaceDefaults)
    backup: BackupDefaults = field(default_factory=BackupDefaults)
    tools: ToolDefaults = field(default_factory=ToolDefaults)
    sources: SourceDefaults = field(default_factory=SourceDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)
    source_path: Path | None = None


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return parse_app_config(data, source_path=config_path)


def parse_app_config(data: dict[str, object], *, source_path: Path | None = None) -> AppConfig:
    return AppConfig(
        app=_parse_app_defaults(_get_dict(data, "app")),
        workspace=_parse_workspace_defaults(_get_dict(data, "workspace")),
        backup=_parse_backup_defaults(_get_dict(data, "backup")),
        tools=_parse_tool_defaults(_get_dict(data, "tools")),
        sources=_parse_source_defaults(_get_dict(data, "sources")),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
        source_path=source_path,
    )


def _parse_app_defaults(cfg: dict[str, object]) -> AppDefaults:
    package_id = _parse_optional_unset_str(cfg.get("package_id"), field="app.package_id")
    download_url = _parse_optional_unset_str(
        cfg.get("apk_download_url"), field="app.apk_download_url"
    )
    return AppDefaults(
        package_id=package_id or DEFAULT_PACKAGE_ID,
        apk_download_url=download_url or DEFAULT_APK_DOWNLOAD_URL,
    )


def _parse_workspace_defaults(cfg: dict[str, object]) -> WorkspaceDefaults:
    return WorkspaceDefaults(
        dir=_parse_optional_unset_str(cfg.get("dir"), field="workspace.dir"),
        apk_search_dirs=_parse_str_list(
            cfg.get("apk_search_dirs"), field="workspace.apk_search_dirs"
        ),
    )


def _parse_backup_defaults(cfg: dict[str, object]) -> BackupDefaults:
    max_attempts = _parse_optional_positive_int(
        cfg.get("max_attempts"), field="backup.max_attempts"
    )
    min_size = _parse_optional_positive_int(cfg.get("min_size"), field="backup.min_size")
    return BackupDefaults(
        max_attempts=DEFAULT_MAX_ATTEMPTS if max_attempts is None else max_attempts,
        min_size=MIN_BACKUP_SIZE if min_size is None else min_size,
    )


def _parse_tool_defaults(cfg: dict[str, object]) -> ToolDefaults:
    return ToolDefaults(
        timeout=_parse_optional_timeout(cfg.get("timeout"), field="tools.timeout"),
        java_path=_parse_optional_unset_str(cfg.get("java_path"), field="tools.java_path"),
        adb_path=_parse_optional_unset_str(cfg.get("adb_path"), field="tools.adb_path"),
        abe_path=_parse_optional_unset_str(cfg.get("abe_path"), field="tools.abe_path"),
    )


def _parse_source_defaults(cfg: dict[str, object]) -> SourceDefaults:
    jre_url = _parse_optional_unset_str(cfg.get("jre_url"), field="sources.jre_url")
    platform_tools_url = _parse_optional_unset_str(
        cfg.get("platform_tools_url"), field="sources.platform_tools_url"
    )
    abe_url = _parse_optional_unset_str(cfg.get("abe_url"), field="sources.abe_url")
    return SourceDefaults(
        jre_url=jre_url or DEFAULT_JRE_URL,
        platform_tools_url=platform_tools_url or DEFAULT_PLATFORM_TOOLS_URL,
        abe_url=abe_url or DEFAULT_ABE_URL,
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
        no_animations=_parse_bool(
            cfg.get("no_animations"),
            field="ui.no_animations",
            default=False,
        ),
    )


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_unset_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_str_list(value: object, *, field: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ValueError(f"{field} must be a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"{field} must be a list of strings")
        if item.strip():
            items.append(item.strip())
    return tuple(items)


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_optional_positive_int(value: object, *, field: str) -> int | None:
    if value is None:
        return None
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return parsed


def _parse_optional_timeout(value: object, *, field: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"{field} must be a number of seconds")
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ValueError(f"{field} must be a number of seconds") from exc
    if parsed < 0:
        raise ValueError(f"{field} must be 0 or a positive number of seconds")
    return parsed or None


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")

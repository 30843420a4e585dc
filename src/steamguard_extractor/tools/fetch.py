#!/usr/bin/env python3
from __future__ import annotations

import os
import platform
import shutil
import ssl
import sys
import tarfile
import time
import urllib.error
import urllib.request
import zipfile
from collections.abc import Callable
from pathlib import Path

import certifi

ProgressCallback = Callable[[int | None, int | None, str | None], None]

_USER_AGENT = "steamguard-extractor"
_CHUNK_SIZE = 64 * 1024
_JRE_PLATFORMS = {
    ("linux", "x64"),
    ("linux", "aarch64"),
    ("mac", "x64"),
    ("mac", "aarch64"),
    ("windows", "x64"),
}


def host_platform() -> str:
    if sys.platform == "win32":
        return "windows"
    if sys.platform == "darwin":
        return "darwin"
    if sys.platform.startswith("linux"):
        return "linux"
    raise RuntimeError(f"unsupported platform: {sys.platform}")


def host_arch() -> str:
    machine = platform.machine().lower()
    if machine in ("x86_64", "amd64"):
        return "x64"
    if machine in ("arm64", "aarch64"):
        return "aarch64"
    raise RuntimeError(f"unsupported architecture: {machine}")


def jre_download_spec(url_template: str) -> tuple[str, str]:
    """Return ``(url, archive_kind)`` for the Temurin JRE on this host."""
    try:
        os_name = {"darwin": "mac"}.get(host_platform(), host_platform())
        arch = host_arch()
    except RuntimeError as exc:
        supported = ", ".join(sorted(f"{name}-{cpu}" for name, cpu in _JRE_PLATFORMS))
        raise RuntimeError(
            f"{exc}. Supported: {supported}. Set STEAMGUARD_JAVA_PATH to a local java binary."
        ) from exc
    if (os_name, arch) not in _JRE_PLATFORMS:
        supported = ", ".join(sorted(f"{name}-{cpu}" for name, cpu in _JRE_PLATFORMS))
        raise RuntimeError(
            f"no Temurin JRE build for {os_name}-{arch}. Supported: {supported}. "
            "Set STEAMGUARD_JAVA_PATH to a local java binary."
        )
    archive_kind = "zip" if os_name == "windows" else "tar.gz"
    return url_template.format(os=os_name, arch=arch), archive_kind


def platform_tools_download_spec(url_template: str) -> str:
    try:
        os_name = host_platform()
    except RuntimeError as exc:
        raise RuntimeError(f"{exc}. Set STEAMGUARD_ADB_PATH to a local adb binary.") from exc
    return url_template.format(os=os_name)


def download_file(url: str, dest: Path, *, progress_cb: ProgressCallback | None = None) -> None:
    request = urllib.request.Request(url, headers={"User-Agent": _USER_AGENT})
    context = ssl.create_default_context(cafile=certifi.where())
    for attempt in range(1, 4):
        try:
            with urllib.request.urlopen(request, timeout=60, context=context) as resp:
                total = _content_length(resp)
                _copy_with_progress(resp, dest, total=total, progress_cb=progress_cb)
            if dest.stat().st_size == 0:
                raise RuntimeError("empty download")
            return
        except Exception as exc:
            if attempt < 3:
                time.sleep(1.5 * attempt)
                continue
            detail = str(exc)
            if isinstance(exc, urllib.error.HTTPError):
                detail = f"HTTP {exc.code} {exc.reason}"
            elif isinstance(exc, urllib.error.URLError):
                detail = str(exc.reason)
            raise RuntimeError(f"failed to download {url}: {detail}") from exc


def _content_length(resp) -> int | None:
    value = resp.headers.get("Content-Length")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _copy_with_progress(
    resp,
    dest: Path,
    *,
    total: int | None,
    progress_cb: ProgressCallback | None,
) -> None:
    done = 0
    if progress_cb is not None:
        progress_cb(0, total, None)
    with open(dest, "wb") as handle:
        if progress_cb is None:
            shutil.copyfileobj(resp, handle)
            return
        while True:
            chunk = resp.read(_CHUNK_SIZE)
            if not chunk:
                break
            handle.write(chunk)
            done += len(chunk)
            progress_cb(done, total, None)


def extract_tar(archive_path: Path, dest: Path) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    with tarfile.open(archive_path, "r:*") as archive:
        archive.extractall(dest, filter="data")


def extract_zip(archive_path: Path, dest: Path) -> None:
    dest.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(archive_path) as archive:
        archive.extractall(dest)


def make_executable(path: Path) -> None:
    if os.name != "nt":
        os.chmod(path, 0o755)


def find_java_binary(root: Path) -> Path | None:
    name = "java.exe" if os.name == "nt" else "java"
    candidates = sorted(
        (path for path in root.rglob(name) if path.parent.name == "bin" and path.is_file()),
        key=lambda path: (len(path.parts), path.as_posix()),
    )
    return candidates[0] if candidates else None


def download_jre(
    *,
    url_template: str,
    dest_dir: Path,
    archive_path: Path,
    progress_cb: ProgressCallback | None = None,
) -> Path:
    url, archive_kind = jre_download_spec(url_template)
    download_file(url, archive_path, progress_cb=progress_cb)
    if dest_dir.exists():
        shutil.rmtree(dest_dir)
    if archive_kind == "zip":
        extract_zip(archive_path, dest_dir)
    else:
        extract_tar(archive_path, dest_dir)
    java = find_java_binary(dest_dir)
    if java is None:
        raise RuntimeError("Could not locate the java binary after extraction")
    make_executable(java)
    return java


def download_platform_tools(
    *,
    url_template: str,
    dest_root: Path,
    archive_path: Path,
    progress_cb: ProgressCallback | None = None,
) -> Path:
    url = platform_tools_download_spec(url_template)
    download_file(url, archive_path, progress_cb=progress_cb)
    tools_dir = dest_root / "platform-tools"
    if tools_dir.exists():
        shutil.rmtree(tools_dir)
    extract_zip(archive_path, dest_root)
    adb = tools_dir / ("adb.exe" if os.name == "nt" else "adb")
    if not adb.is_file():
        raise RuntimeError("adb not found after extracting platform-tools")
    make_executable(adb)
    return adb


def download_abe(*, url: str, dest: Path, progress_cb: ProgressCallback | None = None) -> Path:
    download_file(url, dest, progress_cb=progress_cb)
    return dest

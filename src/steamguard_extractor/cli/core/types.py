#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ExtractArgs:
    """Typed container for the interactive extraction run."""

    config: str | None = None
    workdir: str | None = None
    apk: str | None = None
    quiet: bool = False
    no_color: bool = False
    no_animations: bool = False


@dataclass
class ScanArgs:
    path: str
    config: str | None = None
    package_id: str | None = None
    quiet: bool = False
    no_color: bool = False
    no_animations: bool = False

#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import scan as scan_command


def register(app: typer.Typer) -> None:
    scan_command.register(app)

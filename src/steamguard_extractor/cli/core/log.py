#!/usr/bin/env python3
from __future__ import annotations

from rich.markup import escape

from ..ui import console_err


def _warn(message: str, *, hint: str | None = None) -> None:
    """Print an operator warning to stderr; warnings are never silenced by --quiet."""
    console_err.print(f"[warning]Warning:[/warning] {escape(message)}")
    if hint:
        console_err.print(f"  [subtitle]{escape(hint)}[/subtitle]")

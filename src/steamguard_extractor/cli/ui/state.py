#!/usr/bin/env python3
from __future__ import annotations

import sys
from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme


def isatty(stream) -> bool:
    try:
        return bool(stream is not None and stream.isatty())
    except (OSError, ValueError, AttributeError):
        return False


THEME = Theme(
    {
        "title": "bold cyan",
        "subtitle": "dim",
        "accent": "cyan",
        "success": "green",
        "warning": "yellow",
        "rule": "blue",
        "panel": "cyan",
        "secret": "bold magenta",
    }
)


@dataclass
class WizardState:
    total_steps: int
    step: int = 0
    quiet: bool = False

    def advance(self) -> str:
        self.step += 1
        return f"Step {self.step}/{self.total_steps}"


@dataclass
class UIContext:
    console: Console
    console_err: Console
    animations_enabled: bool = True
    wizard_state: WizardState | None = None


def _build_console(*, stderr: bool) -> Console:
    raw = (sys.__stderr__ or sys.stderr) if stderr else (sys.__stdout__ or sys.stdout)
    return Console(stderr=stderr, theme=THEME, force_terminal=isatty(raw))


DEFAULT_CONTEXT = UIContext(
    console=_build_console(stderr=False),
    console_err=_build_console(stderr=True),
)


def get_context() -> UIContext:
    return DEFAULT_CONTEXT

#!/usr/bin/env python3
from __future__ import annotations

import sys
from collections.abc import Sequence
from contextlib import contextmanager

from rich import box
from rich.live import Live
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.rule import Rule
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from .prompts import (
    prompt_choice_list,
    prompt_continue,
    prompt_required_secret,
    prompt_yes_no,
)
from .state import UIContext, WizardState, get_context, isatty

DEFAULT_CONTEXT = get_context()
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def configure_ui(
    *,
    no_color: bool,
    no_animations: bool,
    context: UIContext | None = None,
) -> None:
    context = _resolve_context(context)
    context.animations_enabled = not no_animations
    context.console.no_color = no_color
    context.console_err.no_color = no_color


@contextmanager
def wizard_flow(*, total_steps: int, quiet: bool, context: UIContext | None = None):
    context = _resolve_context(context)
    previous = context.wizard_state
    context.wizard_state = WizardState(total_steps=total_steps, quiet=quiet)
    try:
        yield context.wizard_state
    finally:
        context.wizard_state = previous


@contextmanager
def wizard_stage(title: str, *, context: UIContext | None = None):
    context = _resolve_context(context)
    state = context.wizard_state
    if state is not None and not state.quiet:
        step_label = f"{state.advance()} - {title}"
        context.console.print()
        context.console.print(Rule(Text(step_label, style="title"), style="rule", align="left"))
    yield


@contextmanager
def progress(*, quiet: bool, context: UIContext | None = None):
    context = _resolve_context(context)
    if quiet:
        yield None
        return
    force_render = isatty(sys.__stdout__ or sys.stdout)
    if context.animations_enabled:
        progress_bar = Progress(
            SpinnerColumn(style="accent"),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            DownloadColumn(),
            TimeElapsedColumn(),
            console=context.console,
            transient=True,
            disable=not force_render,
        )
    else:
        progress_bar = Progress(
            TextColumn("[progress.description]{task.description}"),
            console=context.console,
            transient=True,
            refresh_per_second=2,
            disable=not force_render,
        )
    with progress_bar:
        yield progress_bar


@contextmanager
def status(message: str, *, quiet: bool, context: UIContext | None = None):
    context = _resolve_context(context)
    if quiet:
        yield None
        return
    if not context.animations_enabled:
        context.console.print(f"[subtitle]{message}[/subtitle]")
        yield None
        return
    spinner = Spinner("dots", text=Text(message, style="subtitle"))
    with Live(
        spinner,
        console=context.console,
        transient=False,
        refresh_per_second=12,
    ) as live:
        try:
            yield live
        finally:
            live.update(Text(f"✓ {message}", style="success"), refresh=True)


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def build_action_list(items: Sequence[str]) -> Table:
    table = Table.grid(padding=(0, 1))
    table.add_column(no_wrap=True)
    table.add_column()
    for item in items:
        table.add_row("-", Text(item))
    return table


def panel(title: str, renderable, *, style: str = "panel") -> Panel:
    return Panel(
        renderable,
        title=title,
        title_align="left",
        border_style=style,
        box=box.ROUNDED,
        padding=(1, 2),
    )


def print_info(message: str, *, quiet: bool = False) -> None:
    if quiet:
        return
    console.print(f"[accent]>[/accent] {message}")


def print_ok(message: str, *, quiet: bool = False) -> None:
    if quiet:
        return
    console.print(f"[success]✓[/success] {message}")


def print_instructions(title: str, items: Sequence[str], *, quiet: bool) -> None:
    if quiet:
        return
    console.print(panel(title, build_action_list(items)))


__all__ = [
    "build_action_list",
    "build_kv_table",
    "configure_ui",
    "console",
    "console_err",
    "panel",
    "print_info",
    "print_instructions",
    "print_ok",
    "progress",
    "prompt_choice_list",
    "prompt_continue",
    "prompt_required_secret",
    "prompt_yes_no",
    "status",
    "wizard_flow",
    "wizard_stage",
]

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

from collections.abc import Sequence

import questionary
from rich.rule import Rule

from .state import UIContext, get_context

QUESTIONARY_STYLE = questionary.Style(
    [
        ("question", "bold"),
        ("answer", "bold"),
        ("pointer", "bold"),
        ("highlighted", "reverse"),
        ("instruction", "fg:ansibrightblack"),
    ]
)


def _ask(question: questionary.Question):
    value = question.ask()
    if value is None:
        raise KeyboardInterrupt
    return value


def _separator(context: UIContext | None) -> None:
    (context or get_context()).console.print(Rule(style="rule"))


def prompt_yes_no(prompt: str, *, default: bool = False, context: UIContext | None = None) -> bool:
    _separator(context)
    return _ask(questionary.confirm(prompt, default=default, qmark="", style=QUESTIONARY_STYLE))


def prompt_continue(prompt: str = "Press Enter to continue...") -> None:
    _ask(questionary.text(prompt, qmark="", style=QUESTIONARY_STYLE))


def prompt_required_secret(prompt: str, *, context: UIContext | None = None) -> str:
    """Ask for a hidden value until a non-empty one is entered."""
    context = context or get_context()
    _separator(context)
    while True:
        value = _ask(questionary.password(prompt, qmark="", style=QUESTIONARY_STYLE))
        if value:
            return value
        context.console_err.print("[warning]Password cannot be empty.[/warning]")


def prompt_choice_list(
    items: Sequence[tuple[str, str]],
    *,
    default: str | None,
    title: str = "Select an option",
) -> str:
    if not items:
        raise ValueError("A list of choices needs to be provided.")
    choices = [questionary.Choice(title=label, value=key) for key, label in items]
    return _ask(
        questionary.select(
            title,
            choices=choices,
            default=default,
            qmark="",
            pointer=">",
            style=QUESTIONARY_STYLE,
        )
    )

"""
session.py
The interactive session: where prompts are read from and output goes.

One Session is created per run and handed to every step, instead of the
input stream and spinner living in module globals.
"""
from dataclasses import dataclass, field
from typing import Callable, Optional

import click
from rich.console import Console
from rich.markup import escape

from k8s_loader.spinner import Spinner


@dataclass
class Session:
    console: Console = field(default_factory=Console)
    read:    Optional[Callable[[], str]] = None
    spinner: Spinner = field(init=False)

    def __post_init__(self):
        self.spinner = Spinner(self.console)

    def ask(self, question: str, default: Optional[str] = None) -> str:
        """
        Ask one question and return the stripped answer.
        An empty answer returns `default` when given.
        """
        if self.read is None:
            answer = click.prompt(
                click.style(question, fg="yellow"),
                default="" if default is None else default,
                show_default=False,
                prompt_suffix="",
            )
        else:
            self.console.print(f"[yellow]{escape(question)}[/yellow]", end="")
            try:
                answer = self.read()
            except EOFError:
                answer = ""
        answer = answer.strip()
        if not answer and default is not None:
            return default
        return answer

    def confirm(self, question: str, default: bool = True) -> bool:
        if self.read is None:
            return click.confirm(
                click.style(question, fg="yellow"),
                default=default,
                show_default=False,
                prompt_suffix="",
            )
        answer = self.ask(question, default="y" if default else "n")
        return answer.lower() in ("y", "yes")

    def close(self):
        self.spinner.stop()

    # ── Output helpers ────────────────────────────────────────────────────────

    def info(self, text: str):
        self.console.print(f"[cyan]{escape(text)}[/cyan]", highlight=False)

    def heading(self, text: str):
        self.console.print(f"[magenta]{escape(text)}[/magenta]", highlight=False)

    def success(self, text: str):
        self.console.print(f"[green]{escape(text)}[/green]", highlight=False)

    def error(self, text: str):
        self.console.print(f"[red]{escape(text)}[/red]", highlight=False)

    def plain(self, text: str):
        self.console.print(text, markup=False, highlight=False)

    def command(self, text: str):
        self.success(f"\n> {text}")

"""Terminal output helpers built on click.style."""

from __future__ import annotations

import click

CHECK = "✓"
CROSS = "✗"
WARN = "⚠"
INFO = "ℹ"
ARROW = "→"


def success(message: str) -> str:
    return f"{click.style(CHECK, fg='green')} {message}"


def error(message: str) -> str:
    return f"{click.style(CROSS, fg='red')} {click.style(message, fg='red')}"


def warning(message: str) -> str:
    return f"{click.style(WARN, fg='yellow')} {click.style(message, fg='yellow')}"


def info(message: str) -> str:
    return f"{click.style(INFO, fg='blue')} {message}"


def arrow(message: str) -> str:
    return f"{click.style(ARROW, fg='cyan')} {message}"


def title(text: str) -> str:
    return click.style(text, fg="cyan", bold=True)


def bold(text: str) -> str:
    return click.style(text, bold=True)


def dim(text: str) -> str:
    return click.style(text, dim=True)


def command(text: str) -> str:
    return click.style(text, fg="cyan")


def flag(text: str) -> str:
    return click.style(text, fg="yellow")


def box(heading: str, lines: list[str]) -> str:
    """Render a rounded box around ``heading`` and ``lines``; widths ignore ANSI codes."""
    width = max([len(heading), *(len(click.unstyle(line)) for line in lines)]) + 4
    hr = "─" * width
    out = [f"╭{hr}╮", f"│  {bold(heading)}{' ' * max(0, width - len(heading) - 2)}│", f"├{hr}┤"]
    for line in lines:
        pad = max(0, width - len(click.unstyle(line)) - 2)
        out.append(f"│  {line}{' ' * pad}│")
    out.append(f"╰{hr}╯")
    return "\n".join(out)

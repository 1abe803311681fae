"""Shared pieces for the markdown document validators."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import click

from agent_kit import output


def estimate_tokens(text: str) -> int:
    """Approximate token count: ~4 characters per token."""
    return math.ceil(len(text) / 4)


@dataclass
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    info: list[str] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return not self.errors


def format_sections(result: ValidationResult, info_label: str = "INFO") -> list[str]:
    """Bullet sections for errors, warnings and info, skipping empty ones."""
    lines: list[str] = []
    for label, items, style in (
        (f"{output.CROSS} ERRORS:", result.errors, "red"),
        (f"{output.WARN} WARNINGS:", result.warnings, "yellow"),
        (f"{output.INFO} {info_label}:", result.info, "cyan"),
    ):
        if items:
            lines.append(click.style(label, fg=style))
            lines.extend(f"   - {item}" for item in items)
            lines.append("")
    return lines

"""AGENTS.md and README snippet generation."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from agent_kit.models import AkConfig, Skill

AGENTS_MD = "AGENTS.md"
PROJECT_URL = "https://github.com/YOUR_ORG/agent-kit"

_STRUCTURE = """\
## Project Structure

```
docs/
├── ideas/     # Brainstorm outputs
├── plans/     # Implementation plans
└── adrs/      # Architectural Decision Records
```
"""

_FOOTER = """\
## Commands

Use `/help` in Claude Code to see available commands.

## Configuration

See `.ak/config.json` for agent-kit configuration.
"""


def _skill_bullets(skills: Sequence[Skill]) -> list[str]:
    return [f"- **{s.name}**: {s.description}" for s in skills]


def render_agents_md(skills: Sequence[Skill]) -> str:
    lines = [
        "# AGENTS.md",
        "",
        f"This project uses [agent-kit]({PROJECT_URL}) for AI agent configuration.",
        "",
        "## Available Skills",
        "",
        "The following skills are available to AI agents:",
        "",
        *_skill_bullets(skills),
        "",
        _STRUCTURE,
        _FOOTER,
    ]
    return "\n".join(lines)


def generate_agents_md(working_dir: str | Path, config: AkConfig, skills: Sequence[Skill]) -> Path:
    """Write AGENTS.md at the project root, replacing any existing file."""
    path = Path(working_dir) / AGENTS_MD
    path.write_text(render_agents_md(skills), encoding="utf-8")
    return path


def generate_readme_section(skills: Sequence[Skill]) -> str:
    lines = [
        "## AI Agent Skills",
        "",
        "This project includes the following AI agent skills:",
        "",
        *_skill_bullets(skills),
        "",
        "Skills are automatically invoked by compatible AI coding agents.",
        "",
    ]
    return "\n".join(lines)

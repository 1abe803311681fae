"""Update planning for ``ak update``.

Nothing is downloaded or replaced yet; the flow reports what an update would
touch so users can run ``ak init --force`` themselves.
"""

from __future__ import annotations

from pathlib import Path

from agent_kit.config import load_config, package_version
from agent_kit.installer import CANONICAL_SKILLS_DIR


def installed_skills(working_dir: str | Path) -> list[str]:
    skills_dir = Path(working_dir) / CANONICAL_SKILLS_DIR
    if not skills_dir.is_dir():
        return []
    return sorted(p.name for p in skills_dir.iterdir() if (p / "SKILL.md").is_file())


def plan_update(working_dir: str | Path, skills_only: bool = False, cli_only: bool = False) -> dict:
    """Describe the steps an update would run.

    Returns dict with version, config_version, installed and steps.
    """
    config = load_config(working_dir)
    steps: list[str] = []
    if not cli_only:
        steps.append("Check for new skills in repository")
        steps.append("Download and install updated skills")
    if not skills_only:
        steps.append("Check package index for CLI updates")
        steps.append("Suggest upgrade command if available")
    return {
        "version": package_version(),
        "config_version": config.version if config else None,
        "source": config.source.repo if config else None,
        "installed": installed_skills(working_dir),
        "steps": steps,
    }

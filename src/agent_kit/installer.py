"""Install skills into a project and write Claude permission/settings files.

Skills live once under .github/skills/<name>/SKILL.md. Claude reads
.claude/skills/<name>, which is a relative symlink to the canonical directory
(or a copy of it when symlinks are not an option).
"""

from __future__ import annotations

import enum
import json
import logging
import os
import shutil
from collections.abc import Iterable, Sequence
from pathlib import Path

from agent_kit.errors import InstallError
from agent_kit.models import AkConfig, Command, Skill

logger = logging.getLogger(__name__)

CANONICAL_SKILLS_DIR = Path(".github/skills")
CLAUDE_SKILLS_DIR = Path(".claude/skills")
CLAUDE_SETTINGS_LOCAL = Path(".claude/settings.local.json")
CLAUDE_SETTINGS = Path(".claude/settings.json")

INSTALL_DIRS = (
    ".github/skills",
    ".claude/skills",
    ".claude/commands",
    "docs/ideas",
    "docs/plans",
    "docs/adrs",
    ".ak",
)

# ── Permission bundles for .claude/settings.local.json ──
DEFAULT_PERMISSIONS: dict[str, tuple[str, ...]] = {
    "allow": (
        "Bash(git status:*)",
        "Bash(git diff:*)",
        "Bash(git log:*)",
        "Bash(git show:*)",
        "Bash(git branch:*)",
        "Bash(git checkout:*)",
        "Bash(git switch:*)",
        "Bash(git add:*)",
        "Bash(git commit:*)",
        "Bash(git stash:*)",
        "Bash(git fetch:*)",
        "Bash(git pull:*)",
        "Bash(git push:*)",
        "Bash(git rev-parse:*)",
        "Bash(ls:*)",
        "Bash(mkdir:*)",
    ),
    "deny": (),
    "ask": (
        "Bash(git push --force:*)",
        "Bash(git push -f:*)",
        "Bash(git reset --hard:*)",
        "Bash(rm -rf:*)",
    ),
}

BUN_PERMISSIONS = ("Bash(bun install:*)", "Bash(bun run:*)", "Bash(bun test:*)", "Bash(bunx:*)")
NODE_PERMISSIONS = ("Bash(npm install:*)", "Bash(npm run:*)", "Bash(npm test:*)", "Bash(npx:*)")
PYTHON_PERMISSIONS = ("Bash(uv run:*)", "Bash(uv sync:*)", "Bash(pytest:*)", "Bash(python -m pytest:*)")
CODEX_PERMISSIONS = ("Bash(codex:*)", "Bash(codex exec:*)")

_RUNTIME_MARKERS = (
    (("bun.lockb", "bun.lock"), BUN_PERMISSIONS),
    (("package.json",), NODE_PERMISSIONS),
    (("pyproject.toml", "setup.py", "requirements.txt"), PYTHON_PERMISSIONS),
)


class LinkMode(enum.Enum):
    """How .claude/skills/<name> refers to the canonical skill directory."""

    SYMLINK = "symlink"
    COPY = "copy"


def _check_skill_name(name: str) -> None:
    if not name.strip() or "/" in name or "\\" in name or ".." in name:
        raise InstallError(f"Invalid skill name: {name!r}")


def ensure_dirs(working_dir: Path, dirs: Iterable[str]) -> None:
    for rel in dirs:
        (working_dir / rel).mkdir(parents=True, exist_ok=True)


def install_skills(
    working_dir: str | Path,
    config: AkConfig,
    skills: Sequence[Skill],
    commands: Sequence[Command] = (),
    link_mode: LinkMode = LinkMode.SYMLINK,
) -> None:
    """Write skills to the canonical location and link them for Claude.

    Stops on the first I/O error; files already written stay in place.
    """
    root = Path(working_dir)
    for skill in skills:
        _check_skill_name(skill.name)

    ensure_dirs(root, INSTALL_DIRS)

    if config.targets.copilot or config.targets.claude:
        for skill in skills:
            skill_dir = root / CANONICAL_SKILLS_DIR / skill.name
            skill_dir.mkdir(parents=True, exist_ok=True)
            (skill_dir / "SKILL.md").write_text(skill.content, encoding="utf-8")
            logger.debug("Wrote %s", skill_dir / "SKILL.md")

    if config.targets.claude:
        for skill in skills:
            link_skill(root, skill.name, link_mode)

    if commands:
        logger.info("Skipping %d commands: command installation is not supported yet", len(commands))


def link_skill(root: Path, name: str, link_mode: LinkMode = LinkMode.SYMLINK) -> bool:
    """Point .claude/skills/<name> at the canonical directory. Never replaces an existing entry.

    Returns True when a new link (or copy) was created.
    """
    claude_path = root / CLAUDE_SKILLS_DIR / name
    canonical = root / CANONICAL_SKILLS_DIR / name

    # is_symlink catches dangling links, which exists() reports as missing
    if claude_path.is_symlink() or claude_path.exists():
        logger.debug("Keeping existing %s", claude_path)
        return False

    claude_path.parent.mkdir(parents=True, exist_ok=True)
    if link_mode is LinkMode.COPY:
        shutil.copytree(canonical, claude_path)
    else:
        target = os.path.relpath(canonical, claude_path.parent)
        os.symlink(target, claude_path, target_is_directory=True)
    return True


def detect_runtime_permissions(working_dir: str | Path) -> list[str]:
    """Pick runtime permission bundles from marker files in the project root."""
    root = Path(working_dir)
    result: list[str] = []
    for markers, bundle in _RUNTIME_MARKERS:
        if any((root / m).exists() for m in markers):
            result.extend(bundle)
    return result


def _dedupe(*groups: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(item for group in groups for item in group))


def build_claude_permissions(
    additional_allow: Iterable[str] = (),
    skills: Iterable[str] = (),
) -> dict[str, list[str]]:
    return {
        "allow": _dedupe(DEFAULT_PERMISSIONS["allow"], additional_allow, (f"Skill({s})" for s in skills)),
        "deny": _dedupe(DEFAULT_PERMISSIONS["deny"]),
        "ask": _dedupe(DEFAULT_PERMISSIONS["ask"]),
    }


def create_claude_settings_local(
    working_dir: str | Path,
    additional_allow: Iterable[str] = (),
    skills: Iterable[str] = (),
) -> Path:
    """Write .claude/settings.local.json with allow/deny/ask permission lists."""
    path = Path(working_dir) / CLAUDE_SETTINGS_LOCAL
    path.parent.mkdir(parents=True, exist_ok=True)
    settings = {"permissions": build_claude_permissions(additional_allow, skills)}
    path.write_text(json.dumps(settings, indent=2) + "\n", encoding="utf-8")
    return path


def create_claude_settings(working_dir: str | Path, config: AkConfig) -> Path:
    """Write .claude/settings.json with the delegation defaults used by the plan and review skills."""
    path = Path(working_dir) / CLAUDE_SETTINGS
    path.parent.mkdir(parents=True, exist_ok=True)
    d = config.defaults
    settings = {
        "agent-kit": {"version": config.version, "installed": True},
        "implement-plan": {
            "mode": d.plan_execution_mode,
            "checkpointInterval": d.checkpoint_interval,
            "reviewTool": d.review_tool,
            "reviewModel": d.review_model,
            "reviewReasoning": d.review_reasoning,
        },
        "review-code": {"tool": d.review_tool, "model": d.review_model, "reasoning": d.review_reasoning},
    }
    path.write_text(json.dumps(settings, indent=2) + "\n", encoding="utf-8")
    return path

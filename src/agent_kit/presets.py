"""Initialization presets.

A preset picks which skills, commands, target platforms and default settings
``ak init`` installs. The table is built once at import and never mutated;
custom presets are derived from a base entry with :func:`build_preset_from_config`.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from agent_kit.errors import AgentKitError, PresetNotFoundError
from agent_kit.models import Preset, Targets

DEFAULT_PRESET = "standard"

_ALL_SKILLS = (
    "brainstorm",
    "create-plan",
    "create-adr",
    "implement-plan",
    "review-plan",
    "review-code",
    "doc-contents",
)
_CORE_SKILLS = ("brainstorm", "create-plan", "implement-plan", "review-code", "doc-contents")

# Shown by `ak help skills`
SKILL_CATALOGUE: Mapping[str, str] = MappingProxyType(
    {
        "brainstorm": "Interactive ideation with structured questioning",
        "create-plan": "Create detailed TDD implementation plans",
        "create-adr": "Generate Architectural Decision Records",
        "implement-plan": "Autonomous plan execution with reviews",
        "review-plan": "Review plans before execution",
        "review-code": "Review code changes with high reasoning",
        "doc-contents": "Generate project documentation",
    }
)


def _preset(
    name: str,
    description: str,
    skills: Iterable[str],
    commands: Iterable[str],
    targets: tuple[bool, bool, bool],
    defaults: dict[str, Any],
    create_dirs: Iterable[str] = (),
) -> Preset:
    claude, copilot, agents_md = targets
    return Preset(
        name=name,
        description=description,
        skills=tuple(dict.fromkeys(skills)),
        commands=tuple(dict.fromkeys(commands)),
        targets=Targets(claude=claude, copilot=copilot, agents_md=agents_md),
        defaults=MappingProxyType(dict(defaults)),
        create_dirs=tuple(create_dirs),
    )


_PRESET_LIST = (
    _preset(
        "full",
        "Complete setup with all skills and integrations",
        _ALL_SKILLS,
        _ALL_SKILLS,
        (True, True, True),
        {"reviewTool": "codex", "reviewReasoning": "high", "planExecutionMode": "autonomous"},
        ("docs/ideas", "docs/plans", "docs/adrs"),
    ),
    _preset(
        "standard",
        "Recommended setup with core skills (default)",
        _CORE_SKILLS,
        _CORE_SKILLS,
        (True, True, True),
        {"reviewTool": "codex", "reviewReasoning": "high", "planExecutionMode": "autonomous"},
        ("docs/ideas", "docs/plans"),
    ),
    _preset(
        "minimal",
        "Lightweight setup with AGENTS.md only",
        ("brainstorm", "doc-contents"),
        ("brainstorm", "doc-contents"),
        (False, False, True),
        {"reviewTool": "native", "planExecutionMode": "manual"},
    ),
    _preset(
        "claude",
        "Optimized for Claude Code with full skill set",
        _ALL_SKILLS,
        _ALL_SKILLS,
        (True, False, True),
        {
            "reviewTool": "claude",
            "reviewModel": "claude-sonnet-4-5-20250929",
            "reviewReasoning": "high",
            "planExecutionMode": "autonomous",
        },
        ("docs/ideas", "docs/plans", "docs/adrs"),
    ),
    # Copilot has no slash commands
    _preset(
        "copilot",
        "Optimized for GitHub Copilot and VS Code",
        _CORE_SKILLS,
        (),
        (False, True, True),
        {"reviewTool": "native", "planExecutionMode": "checkpoint"},
        ("docs/ideas", "docs/plans"),
    ),
    # Codex reads the Agent Skills layout under .github/skills, hence the copilot target
    _preset(
        "codex",
        "Optimized for OpenAI Codex CLI",
        ("brainstorm", "create-plan", "implement-plan", "review-plan", "review-code", "doc-contents"),
        (),
        (False, True, True),
        {"reviewTool": "codex", "reviewModel": "gpt-5", "reviewReasoning": "high", "planExecutionMode": "autonomous"},
        ("docs/ideas", "docs/plans", "docs/adrs"),
    ),
    _preset(
        "planning",
        "Focus on ideation, planning, and documentation",
        ("brainstorm", "create-plan", "create-adr", "doc-contents"),
        ("brainstorm", "create-plan", "create-adr", "doc-contents"),
        (True, True, True),
        {"reviewTool": "native", "planExecutionMode": "manual"},
        ("docs/ideas", "docs/plans", "docs/adrs"),
    ),
    _preset(
        "review",
        "Focus on code review with Codex CLI delegation",
        ("review-plan", "review-code"),
        ("review-plan", "review-code"),
        (True, True, True),
        {"reviewTool": "codex", "reviewModel": "gpt-5", "reviewReasoning": "high"},
    ),
    _preset(
        "execution",
        "Focus on autonomous plan execution with reviews",
        ("create-plan", "implement-plan", "review-plan", "review-code"),
        ("create-plan", "implement-plan", "review-plan", "review-code"),
        (True, True, True),
        {"reviewTool": "codex", "reviewReasoning": "high", "planExecutionMode": "autonomous", "checkpointInterval": 3},
        ("docs/plans",),
    ),
)

PRESETS: Mapping[str, Preset] = MappingProxyType({p.name: p for p in _PRESET_LIST})


def get_preset(name: str) -> Preset | None:
    return PRESETS.get(name)


def list_presets() -> list[Preset]:
    return list(PRESETS.values())


def preset_names() -> list[str]:
    return list(PRESETS)


def _name_list(custom: Mapping[str, Any], key: str) -> list[str]:
    """A list-valued preset key. A bare string counts as a one-item list."""
    value = custom.get(key)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise AgentKitError(f"Invalid preset: '{key}' must be a list of names")
    return list(value)


def _names(custom: Mapping[str, Any], key: str) -> set[str]:
    return set(_name_list(custom, key))


def build_preset_from_config(custom: Mapping[str, Any]) -> Preset:
    """Derive a preset from a base entry plus additive/subtractive changes.

    Recognised keys: ``extends`` (base preset, default "standard"), ``name``,
    ``description``, ``addSkills``/``removeSkills``, ``addCommands``/``removeCommands``,
    ``targets`` and ``defaults`` (shallow merges) and ``createDirs`` (replaces).
    Skill and command sets come back sorted.
    """
    base_name = custom.get("extends") or DEFAULT_PRESET
    base = get_preset(base_name)
    if base is None:
        raise PresetNotFoundError(base_name)

    skills = (set(base.skills) | _names(custom, "addSkills")) - _names(custom, "removeSkills")
    commands = (set(base.commands) | _names(custom, "addCommands")) - _names(custom, "removeCommands")
    targets = Targets.from_dict({**base.targets.to_dict(), **(custom.get("targets") or {})})
    defaults = {**base.defaults, **(custom.get("defaults") or {})}
    create_dirs = _name_list(custom, "createDirs") if "createDirs" in custom else list(base.create_dirs)

    return Preset(
        name=custom.get("name") or f"{base.name}-custom",
        description=custom.get("description") or base.description,
        skills=tuple(sorted(skills)),
        commands=tuple(sorted(commands)),
        targets=targets,
        defaults=MappingProxyType(defaults),
        create_dirs=tuple(create_dirs),
    )


def load_preset_file(path: str | Path) -> Preset:
    """Build a custom preset from a JSON or YAML file."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise AgentKitError(f"Invalid preset file {path}: {e}") from e
    if not isinstance(data, dict):
        raise AgentKitError(f"Invalid preset file {path}: expected a mapping")
    return build_preset_from_config(data)


def validate_preset(preset: Preset, available: Iterable[str]) -> list[str]:
    """Return the preset's skill names that the content source does not provide."""
    return sorted(set(preset.skills) - set(available))

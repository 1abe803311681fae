"""Project initialization: resolve preset, fetch, install, generate, save config."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import httpx

from agent_kit.config import DEFAULT_CONFIG, config_path, load_config, merge_config, save_config
from agent_kit.errors import AgentKitError, PresetNotFoundError
from agent_kit.fetcher import FetchOptions, fetch_content
from agent_kit.generator import generate_agents_md
from agent_kit.installer import (
    CODEX_PERMISSIONS,
    LinkMode,
    create_claude_settings,
    create_claude_settings_local,
    detect_runtime_permissions,
    ensure_dirs,
    install_skills,
)
from agent_kit.models import AkConfig, Preset, Skill
from agent_kit.presets import DEFAULT_PRESET, get_preset, load_preset_file, validate_preset

logger = logging.getLogger(__name__)


def resolve_preset(name: str | None = None, preset_file: str | Path | None = None) -> Preset:
    if preset_file:
        return load_preset_file(preset_file)
    name = name or DEFAULT_PRESET
    preset = get_preset(name)
    if preset is None:
        raise PresetNotFoundError(name)
    return preset


def build_config(preset: Preset, base: AkConfig | None = None) -> AkConfig:
    """Apply a preset's targets and defaults on top of an existing (or the default) config."""
    return merge_config(
        base or DEFAULT_CONFIG,
        {"targets": preset.targets.to_dict(), "defaults": dict(preset.defaults)},
    )


def wanted_skill_names(preset: Preset, config: AkConfig) -> list[str]:
    """Preset skills plus config ``include``, minus config ``exclude``."""
    names = dict.fromkeys([*preset.skills, *config.include])
    return [n for n in names if n not in set(config.exclude)]


def select_skills(skills: Sequence[Skill], preset: Preset, config: AkConfig) -> list[Skill]:
    wanted = set(wanted_skill_names(preset, config))
    return [s for s in skills if s.name in wanted]


def init_project(
    working_dir: str | Path,
    preset: Preset,
    use_local: bool = False,
    content_path: str | Path = "content",
    force: bool = False,
    link_mode: LinkMode = LinkMode.SYMLINK,
    client: httpx.Client | None = None,
) -> dict:
    """Initialize agent-kit in ``working_dir``.

    Returns stats dict with preset, skills, missing, files.
    """
    root = Path(working_dir).resolve()
    existing = load_config(root)
    if existing is not None and not force:
        raise AgentKitError(f"agent-kit is already initialized ({config_path(root)}). Use --force to reinitialize.")

    config = build_config(preset, existing)
    stats: dict = {"preset": preset.name, "skills": [], "missing": [], "files": []}

    options = FetchOptions(
        repo=config.source.repo,
        branch=config.source.branch,
        path=config.source.path,
        use_local=use_local,
        local_path=content_path,
    )
    fetched = fetch_content(options, names=wanted_skill_names(preset, config), client=client)

    missing = validate_preset(preset, (s.name for s in fetched.skills))
    if missing:
        logger.warning("Preset '%s' skills not available from source: %s", preset.name, ", ".join(missing))
    stats["missing"] = missing

    skills = select_skills(fetched.skills, preset, config)
    stats["skills"] = [s.name for s in skills]

    ensure_dirs(root, preset.create_dirs)
    install_skills(root, config, skills, fetched.commands, link_mode=link_mode)

    if config.targets.claude:
        additional = detect_runtime_permissions(root)
        if config.defaults.review_tool == "codex":
            additional.extend(CODEX_PERMISSIONS)
        stats["files"].append(create_claude_settings_local(root, additional, [s.name for s in skills]))
        stats["files"].append(create_claude_settings(root, config))

    if config.targets.agents_md:
        stats["files"].append(generate_agents_md(root, config, skills))

    stats["files"].append(save_config(config, root))
    logger.info("Initialized %s with preset '%s' (%d skills)", root, preset.name, len(skills))
    return stats

"""Data model: skills, commands, presets and the persisted project config."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

REVIEW_TOOLS = ("codex", "claude", "native")
REASONING_LEVELS = ("low", "medium", "high")
EXECUTION_MODES = ("autonomous", "checkpoint", "manual")


@dataclass(frozen=True)
class Skill:
    name: str
    description: str
    content: str
    license: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CommandArgument:
    name: str
    description: str
    required: bool = False


@dataclass(frozen=True)
class Command:
    name: str
    description: str
    content: str
    arguments: tuple[CommandArgument, ...] = ()


@dataclass
class Source:
    repo: str
    branch: str
    path: str

    def to_dict(self) -> dict[str, Any]:
        return {"repo": self.repo, "branch": self.branch, "path": self.path}


@dataclass(frozen=True)
class Targets:
    claude: bool = True
    copilot: bool = True
    agents_md: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"claude": self.claude, "copilot": self.copilot, "agentsMd": self.agents_md}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Targets:
        base = cls()
        return cls(
            claude=bool(data.get("claude", base.claude)),
            copilot=bool(data.get("copilot", base.copilot)),
            agents_md=bool(data.get("agentsMd", base.agents_md)),
        )


@dataclass
class Defaults:
    """Delegation defaults written into the config and Claude settings."""

    review_tool: str = "codex"
    review_model: str = "gpt-5"
    review_reasoning: str = "high"
    plan_execution_mode: str = "autonomous"
    checkpoint_interval: int = 5

    def to_dict(self) -> dict[str, Any]:
        return {
            "reviewTool": self.review_tool,
            "reviewModel": self.review_model,
            "reviewReasoning": self.review_reasoning,
            "planExecutionMode": self.plan_execution_mode,
            "checkpointInterval": self.checkpoint_interval,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Defaults:
        base = cls()
        return cls(
            review_tool=data.get("reviewTool", base.review_tool),
            review_model=data.get("reviewModel", base.review_model),
            review_reasoning=data.get("reviewReasoning", base.review_reasoning),
            plan_execution_mode=data.get("planExecutionMode", base.plan_execution_mode),
            checkpoint_interval=int(data.get("checkpointInterval", base.checkpoint_interval)),
        )


@dataclass
class SkillOverride:
    tool: str | None = None
    model: str | None = None
    reasoning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in (("tool", self.tool), ("model", self.model), ("reasoning", self.reasoning)) if v}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SkillOverride:
        return cls(tool=data.get("tool"), model=data.get("model"), reasoning=data.get("reasoning"))


@dataclass
class AkConfig:
    """Contents of .ak/config.json. JSON keys are camelCase, attributes snake_case."""

    version: str
    source: Source
    targets: Targets
    defaults: Defaults
    overrides: dict[str, SkillOverride] = field(default_factory=dict)
    exclude: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "source": self.source.to_dict(),
            "targets": self.targets.to_dict(),
            "defaults": self.defaults.to_dict(),
            "overrides": {name: o.to_dict() for name, o in self.overrides.items()},
            "exclude": list(self.exclude),
            "include": list(self.include),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AkConfig:
        source = data.get("source") or {}
        return cls(
            version=str(data.get("version", "")),
            source=Source(
                repo=source.get("repo", ""),
                branch=source.get("branch", "main"),
                path=source.get("path", "content"),
            ),
            targets=Targets.from_dict(data.get("targets") or {}),
            defaults=Defaults.from_dict(data.get("defaults") or {}),
            overrides={name: SkillOverride.from_dict(o) for name, o in (data.get("overrides") or {}).items()},
            exclude=list(data.get("exclude") or []),
            include=list(data.get("include") or []),
        )


@dataclass(frozen=True)
class Preset:
    """A named bundle of skills, commands, targets and default overrides.

    ``defaults`` is partial and keyed like the JSON config (``reviewTool`` ...).
    """

    name: str
    description: str
    skills: tuple[str, ...]
    commands: tuple[str, ...]
    targets: Targets
    defaults: dict[str, Any] = field(default_factory=dict)
    create_dirs: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "skills": list(self.skills),
            "commands": list(self.commands),
            "targets": self.targets.to_dict(),
            "defaults": dict(self.defaults),
            "createDirs": list(self.create_dirs),
        }

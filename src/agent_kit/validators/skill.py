"""Skill validator: checks Agent Skills directories against the SKILL.md conventions.

Usage:
    ak-validate-skill content/skills/plan-create
    ak-validate-skill --all content/skills
"""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Any

import click

from agent_kit import output
from agent_kit.errors import FrontmatterError
from agent_kit.fetcher import SKILL_FILE, parse_frontmatter
from agent_kit.validators.common import ValidationResult, estimate_tokens

MAX_NAME_LENGTH = 64
MAX_DESCRIPTION_LENGTH = 1024
BODY_TOKEN_LIMIT = 5000
RESERVED_WORDS = ("anthropic", "claude")
COMPANION_DIRS = ("assets", "references", "scripts")

_NAME_PATTERN = re.compile(r"^[a-z0-9-]+$")
_XML_TAG = re.compile(r"<[^>]+>")
_TRIGGER = re.compile(r"use when|use for|when you|if you|use this", re.IGNORECASE)
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def _read_skill(skill_md: Path) -> tuple[dict[str, Any], str]:
    content = skill_md.read_text(encoding="utf-8")
    try:
        frontmatter, body = parse_frontmatter(content)
    except FrontmatterError:
        frontmatter, body = {}, content
    # Multi-line descriptions (``description: >``) come back as one paragraph
    if isinstance(frontmatter.get("description"), str):
        frontmatter["description"] = " ".join(frontmatter["description"].split())
    return frontmatter, body


def _check_name(name: Any, result: ValidationResult) -> None:
    if not name:
        result.errors.append("Missing 'name' in frontmatter")
        return
    name = str(name)
    result.stats["skill"] = name
    if len(name) > MAX_NAME_LENGTH:
        result.errors.append(f"Name exceeds {MAX_NAME_LENGTH} characters ({len(name)})")
    if not _NAME_PATTERN.match(name):
        result.errors.append("Name must be lowercase letters, numbers, and hyphens only")
    if any(word in name for word in RESERVED_WORDS):
        result.errors.append("Name cannot contain reserved words: 'anthropic', 'claude'")
    if _XML_TAG.search(name):
        result.errors.append("Name cannot contain XML tags")


def _check_description(description: Any, result: ValidationResult) -> None:
    if not description:
        result.errors.append("Missing 'description' in frontmatter")
        return
    description = str(description)
    if len(description) > MAX_DESCRIPTION_LENGTH:
        result.errors.append(f"Description exceeds {MAX_DESCRIPTION_LENGTH} characters ({len(description)})")
    if _XML_TAG.search(description):
        result.errors.append("Description cannot contain XML tags")
    if not _TRIGGER.search(description):
        result.warnings.append("Description should include trigger conditions (e.g., 'Use when...')")


def _check_links(skill_dir: Path, body: str, result: ValidationResult) -> None:
    files: list[str] = result.stats["files"]
    for text, target in _LINK.findall(body):
        if target.startswith(("http://", "https://", "#", "mailto:")):
            continue
        link_path = target.split("#", 1)[0]
        if not (skill_dir / link_path).exists():
            result.errors.append(f'Broken link: {target} (referenced as "{text}")')
            continue
        rel = link_path.removeprefix("./")
        if rel not in files:
            files.append(rel)


def _check_command(skill_dir: Path, name: str, result: ValidationResult) -> None:
    """Skills under content/skills ship an ``ak-<name>.md`` slash command in content/commands."""
    is_agent_kit = skill_dir.parent.name == "skills" and skill_dir.parent.parent.name == "content"
    commands_dir = skill_dir.parent.parent / "commands"
    command_file = commands_dir / (f"ak-{name}.md" if is_agent_kit else f"{name}.md")

    if not command_file.is_file():
        if is_agent_kit:
            result.warnings.append(f"No slash command found. Expected: {command_file.name}")
            result.warnings.append("agent-kit commands must use 'ak-' prefix: ak-{skill-name}.md")
        else:
            result.warnings.append(f"No slash command found at {command_file.name}")
    else:
        text = command_file.read_text(encoding="utf-8")
        if f"skills/{name}/{SKILL_FILE}" not in text:
            result.warnings.append("Command does not reference the skill's SKILL.md")
        result.stats["files"].append(f"command: {command_file.name}")

    if is_agent_kit and commands_dir.is_dir():
        for f in sorted(commands_dir.iterdir()):
            if f.suffix == ".md" and not f.name.startswith(("ak-", ".")):
                result.warnings.append(f"Command '{f.name}' in content/commands/ should use 'ak-' prefix")


def validate_skill(skill_dir: str | Path) -> ValidationResult:
    skill_dir = Path(skill_dir)
    result = ValidationResult(stats={"skill": "", "path": str(skill_dir), "lines": 0, "tokens": 0, "files": []})

    skill_md = skill_dir / SKILL_FILE
    if not skill_md.is_file():
        result.errors.append(f"{SKILL_FILE} not found")
        return result
    result.stats["files"].append(SKILL_FILE)

    frontmatter, body = _read_skill(skill_md)
    result.stats["lines"] = len(skill_md.read_text(encoding="utf-8").split("\n"))
    result.stats["tokens"] = estimate_tokens(body)

    _check_name(frontmatter.get("name"), result)
    _check_description(frontmatter.get("description"), result)

    if result.stats["tokens"] > BODY_TOKEN_LIMIT:
        result.warnings.append(
            f"{SKILL_FILE} body is ~{result.stats['tokens']} tokens (recommended < {BODY_TOKEN_LIMIT})"
        )
    if not re.search(r"##\s*(Example|Usage)", body, re.IGNORECASE):
        result.warnings.append("No examples or usage section found")
    if not re.search(r"##\s*(Purpose|Overview|What|About)", body, re.IGNORECASE):
        result.info.append("Consider adding a Purpose or Overview section")
    if not re.search(r"##\s*Related\s*Skills?", body, re.IGNORECASE):
        result.info.append("Consider adding a Related Skills section")

    _check_links(skill_dir, body, result)

    if frontmatter.get("name"):
        _check_command(skill_dir, str(frontmatter["name"]), result)

    if not frontmatter.get("license"):
        result.info.append("Consider adding a license field")
    metadata = frontmatter.get("metadata")
    if not (isinstance(metadata, dict) and metadata.get("version")):
        result.info.append("Consider adding version to metadata")

    for sub in COMPANION_DIRS:
        sub_dir = skill_dir / sub
        if sub_dir.is_dir():
            for name in sorted(f.name for f in sub_dir.iterdir() if not f.name.startswith(".")):
                rel = f"{sub}/{name}"
                # linked files were already recorded by _check_links
                if rel not in result.stats["files"]:
                    result.stats["files"].append(rel)

    return result


def format_skill_report(result: ValidationResult) -> str:
    name = result.stats.get("skill") or "unknown"
    lines = [
        "",
        output.box(f"Skill Validation: {name}", []),
        "",
        click.style("PASSED", fg="green") if result.passed else click.style("FAILED", fg="red"),
        "",
        f"Errors:   {len(result.errors)}",
        f"Warnings: {len(result.warnings)}",
        f"Info:     {len(result.info)}",
        "",
    ]
    for label, items, style in (
        ("Errors (must fix):", result.errors, "red"),
        ("Warnings (should fix):", result.warnings, "yellow"),
        ("Suggestions:", result.info, "cyan"),
    ):
        if items:
            lines.append(click.style(label, fg=style))
            lines.extend(f"   • {item}" for item in items)
            lines.append("")

    files = result.stats.get("files", [])
    lines.append(output.dim("Files checked:"))
    if files:
        lines.append(output.dim(f"   ✓ {files[0]} ({result.stats['lines']} lines, ~{result.stats['tokens']} tokens)"))
        lines.extend(output.dim(f"   ✓ {f}") for f in files[1:])
    lines.append("")
    return "\n".join(lines)


def format_summary(results: list[ValidationResult]) -> str:
    passed = sum(1 for r in results if r.passed)
    failed = len(results) - passed
    lines = ["", output.box("Skill Validation Summary", []), "", f"Skills checked: {len(results)}", ""]
    for r in results:
        mark = click.style(output.CHECK, fg="green") if r.passed else click.style(output.CROSS, fg="red")
        name = (r.stats.get("skill") or "unknown").ljust(20)
        lines.append(f"{mark} {name} {output.dim(f'{len(r.errors)} errors, {len(r.warnings)} warnings')}")
    failed_text = click.style(f"{failed} failed", fg="red") if failed else "0 failed"
    lines += ["", f"Overall: {click.style(f'{passed} passed', fg='green')}, {failed_text}", ""]
    return "\n".join(lines)


def validate_all(skills_dir: str | Path) -> list[ValidationResult]:
    root = Path(skills_dir)
    return [validate_skill(p) for p in sorted(root.iterdir()) if p.is_dir() and not p.name.startswith(".")]


@click.command("skill")
@click.argument("skill_path", type=click.Path(exists=True, file_okay=False))
@click.option("--all", "validate_every", is_flag=True, help="Validate every skill directory under SKILL_PATH")
def main(skill_path: str, validate_every: bool):
    """Validate a skill directory (or every skill under a directory with --all)."""
    if validate_every:
        results = validate_all(skill_path)
        for r in results:
            click.echo(format_skill_report(r))
        click.echo(format_summary(results))
    else:
        results = [validate_skill(skill_path)]
        click.echo(format_skill_report(results[0]))

    if any(not r.passed for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Tests for agent_kit.validators.skill."""

from __future__ import annotations

from click.testing import CliRunner

from agent_kit.validators.skill import main, validate_all, validate_skill

GOOD_SKILL = """\
---
name: my-skill
description: Writes reports. Use when the user asks for a report.
license: MIT
metadata:
  version: "1.0"
---

# My Skill

## Overview

Writes reports.

## Usage

See the [guide](references/guide.md) and [docs](https://example.com).

## Related Skills

- brainstorm
"""


def _make_skill(root, name="my-skill", text=GOOD_SKILL, command=True):
    skill_dir = root / "content" / "skills" / name
    (skill_dir / "references").mkdir(parents=True)
    (skill_dir / "references" / "guide.md").write_text("# Guide\n")
    (skill_dir / "SKILL.md").write_text(text)
    if command:
        commands = root / "content" / "commands"
        commands.mkdir(parents=True, exist_ok=True)
        (commands / f"ak-{name}.md").write_text(f"Read content/skills/{name}/SKILL.md and follow it.\n")
    return skill_dir


class TestValidateSkill:
    def test_good_skill_is_clean(self, tmp_path):
        result = validate_skill(_make_skill(tmp_path))
        assert result.errors == []
        assert result.warnings == []
        assert result.info == []
        assert result.stats["skill"] == "my-skill"
        assert result.stats["files"] == ["SKILL.md", "references/guide.md", "command: ak-my-skill.md"]

    def test_missing_skill_md(self, tmp_path):
        result = validate_skill(tmp_path)
        assert result.errors == ["SKILL.md not found"]

    def test_missing_frontmatter_fields(self, tmp_path):
        result = validate_skill(_make_skill(tmp_path, text="# No frontmatter\n"))
        assert "Missing 'name' in frontmatter" in result.errors
        assert "Missing 'description' in frontmatter" in result.errors

    def test_bad_name(self, tmp_path):
        text = GOOD_SKILL.replace("name: my-skill", "name: My_Skill")
        errors = validate_skill(_make_skill(tmp_path, text=text)).errors
        assert errors == ["Name must be lowercase letters, numbers, and hyphens only"]

    def test_reserved_word(self, tmp_path):
        text = GOOD_SKILL.replace("name: my-skill", "name: claude-helper")
        errors = validate_skill(_make_skill(tmp_path, text=text)).errors
        assert "Name cannot contain reserved words: 'anthropic', 'claude'" in errors

    def test_long_description(self, tmp_path):
        text = GOOD_SKILL.replace("Writes reports. Use when", "x" * 1100 + " Use when")
        errors = validate_skill(_make_skill(tmp_path, text=text)).errors
        assert any(e.startswith("Description exceeds 1024 characters") for e in errors)

    def test_description_without_trigger(self, tmp_path):
        text = GOOD_SKILL.replace("Use when the user asks for a report.", "Nice.")
        warnings = validate_skill(_make_skill(tmp_path, text=text)).warnings
        assert "Description should include trigger conditions (e.g., 'Use when...')" in warnings

    def test_broken_link(self, tmp_path):
        text = GOOD_SKILL.replace("references/guide.md", "references/missing.md")
        errors = validate_skill(_make_skill(tmp_path, text=text)).errors
        assert errors == ['Broken link: references/missing.md (referenced as "guide")']

    def test_missing_command_warns_with_prefix_hint(self, tmp_path):
        warnings = validate_skill(_make_skill(tmp_path, command=False)).warnings
        assert "No slash command found. Expected: ak-my-skill.md" in warnings
        assert "agent-kit commands must use 'ak-' prefix: ak-{skill-name}.md" in warnings

    def test_unprefixed_command_in_content_warns(self, tmp_path):
        skill_dir = _make_skill(tmp_path)
        (tmp_path / "content" / "commands" / "other.md").write_text("x")
        warnings = validate_skill(skill_dir).warnings
        assert "Command 'other.md' in content/commands/ should use 'ak-' prefix" in warnings

    def test_suggestions_for_missing_optional_fields(self, tmp_path):
        text = GOOD_SKILL.replace("license: MIT\n", "").replace('metadata:\n  version: "1.0"\n', "")
        info = validate_skill(_make_skill(tmp_path, text=text)).info
        assert "Consider adding a license field" in info
        assert "Consider adding version to metadata" in info

    def test_fixture_skill_outside_content_tree(self, fixtures_dir):
        result = validate_skill(fixtures_dir / "skills" / "test-skill")
        assert result.passed
        assert "No slash command found at test-skill.md" in result.warnings


class TestValidateAll:
    def test_checks_every_skill(self, tmp_path):
        _make_skill(tmp_path, "alpha")
        _make_skill(tmp_path, "beta")
        results = validate_all(tmp_path / "content" / "skills")
        assert [r.stats["skill"] for r in results] == ["my-skill", "my-skill"]
        assert [r.stats["path"].rsplit("/", 1)[-1] for r in results] == ["alpha", "beta"]


class TestSkillCommand:
    def test_valid_skill_exits_zero(self, tmp_path):
        result = CliRunner().invoke(main, [str(_make_skill(tmp_path))])
        assert result.exit_code == 0, result.output
        assert "PASSED" in result.output
        assert "Skill Validation: my-skill" in result.output

    def test_all_with_failure_exits_one(self, tmp_path):
        _make_skill(tmp_path, "good")
        (tmp_path / "content" / "skills" / "empty").mkdir()
        result = CliRunner().invoke(main, ["--all", str(tmp_path / "content" / "skills")])
        assert result.exit_code == 1
        assert "Skill Validation Summary" in result.output
        assert "1 passed" in result.output
        assert "1 failed" in result.output

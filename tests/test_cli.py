"""Tests for the ``ak`` click CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from agent_kit.cli import main
from agent_kit.flows.doctor import PASS, CheckResult

PRESET_YAML = """\
extends: standard
name: fixture
removeSkills: [brainstorm, create-plan, implement-plan, review-code, doc-contents]
addSkills: [test-skill]
createDirs: [docs/ideas]
"""


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def preset_file(tmp_path):
    path = tmp_path / "fixture-preset.yaml"
    path.write_text(PRESET_YAML)
    return path


def _init_args(fixtures_dir, preset_file, *extra):
    return ["init", "--yes", "--local", "--content-dir", str(fixtures_dir), "--preset-file", str(preset_file), *extra]


class TestGroup:
    def test_version_flag(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("agent-kit v")

    def test_version_command(self, runner):
        result = runner.invoke(main, ["version"])
        assert result.exit_code == 0
        assert result.output.startswith("agent-kit v")

    def test_no_args_prints_help(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "ak help skills" in result.output


class TestUsageErrors:
    def test_unknown_command_exits_one(self, runner):
        result = runner.invoke(main, ["bogus"])
        assert result.exit_code == 1
        assert "No such command 'bogus'" in result.output

    def test_unknown_subcommand_option_exits_one(self, runner):
        result = runner.invoke(main, ["init", "--nope"])
        assert result.exit_code == 1
        assert "No such option: --nope" in result.output

    def test_unknown_group_option_exits_one(self, runner):
        result = runner.invoke(main, ["--nope"])
        assert result.exit_code == 1
        assert "No such option: --nope" in result.output

    def test_unknown_validate_subcommand_exits_one(self, runner):
        result = runner.invoke(main, ["validate", "bogus"])
        assert result.exit_code == 1


class TestHelp:
    def test_help_init_lists_options(self, runner):
        result = runner.invoke(main, ["help", "init"])
        assert result.exit_code == 0
        assert "--preset" in result.output
        assert "--list-presets" in result.output

    def test_help_skills(self, runner):
        result = runner.invoke(main, ["help", "skills"])
        assert result.exit_code == 0
        assert "brainstorm" in result.output
        assert "review-code" in result.output

    def test_help_without_topic(self, runner):
        result = runner.invoke(main, ["help"])
        assert result.exit_code == 0
        assert "doctor" in result.output

    def test_unknown_topic(self, runner):
        result = runner.invoke(main, ["help", "bogus"])
        assert result.exit_code == 1
        assert "Unknown topic: bogus" in result.output


class TestInitPresets:
    def test_list_presets(self, runner):
        result = runner.invoke(main, ["init", "--list-presets"])
        assert result.exit_code == 0
        assert "Available Presets" in result.output
        assert "standard" in result.output
        assert "(default)" in result.output

    def test_preset_info(self, runner):
        result = runner.invoke(main, ["init", "--preset-info", "claude"])
        assert result.exit_code == 0
        assert "Preset: claude" in result.output
        assert "claude-sonnet-4-5-20250929" in result.output

    def test_unknown_preset(self, runner, project):
        result = runner.invoke(main, ["init", "--preset", "nope", "--yes"])
        assert result.exit_code == 1
        assert "Unknown preset: nope" in result.output
        assert not (project / ".ak").exists()

    def test_unknown_preset_info(self, runner):
        result = runner.invoke(main, ["init", "--preset-info", "nope"])
        assert result.exit_code == 1
        assert "Unknown preset: nope" in result.output


class TestInit:
    def test_installs_fixture_skill(self, runner, project, fixtures_dir, preset_file):
        result = runner.invoke(main, _init_args(fixtures_dir, preset_file))
        assert result.exit_code == 0, result.output
        assert "Created .ak/config.json" in result.output
        assert "agent-kit initialized!" in result.output
        assert (project / ".claude/skills/test-skill").is_symlink()
        assert "test-skill" in (project / "AGENTS.md").read_text()

    def test_content_dir_from_env(self, runner, project, fixtures_dir, preset_file):
        args = ["init", "--yes", "--local", "--preset-file", str(preset_file)]
        result = runner.invoke(main, args, env={"AGENT_KIT_CONTENT_DIR": str(fixtures_dir)})
        assert result.exit_code == 0, result.output
        assert (project / ".github/skills/test-skill/SKILL.md").is_file()

    def test_second_init_fails_without_force(self, runner, project, fixtures_dir, preset_file):
        runner.invoke(main, _init_args(fixtures_dir, preset_file))
        result = runner.invoke(main, _init_args(fixtures_dir, preset_file))
        assert result.exit_code == 1
        assert "Command failed: init" in result.output
        assert "already initialized" in result.output

    def test_force(self, runner, project, fixtures_dir, preset_file):
        runner.invoke(main, _init_args(fixtures_dir, preset_file))
        result = runner.invoke(main, _init_args(fixtures_dir, preset_file, "--force"))
        assert result.exit_code == 0, result.output

    def test_copy_skills(self, runner, project, fixtures_dir, preset_file):
        result = runner.invoke(main, _init_args(fixtures_dir, preset_file, "--copy-skills"))
        assert result.exit_code == 0, result.output
        copied = project / ".claude/skills/test-skill"
        assert copied.is_dir() and not copied.is_symlink()

    def test_declined_confirmation_aborts(self, runner, project, fixtures_dir, preset_file):
        args = ["init", "--local", "--content-dir", str(fixtures_dir), "--preset-file", str(preset_file)]
        result = runner.invoke(main, args, input="n\n")
        assert result.exit_code == 1
        assert "Selected preset: fixture" in result.output
        assert not (project / ".ak/config.json").exists()

    def test_reports_unavailable_skills(self, runner, project, fixtures_dir):
        result = runner.invoke(main, ["init", "--yes", "--local", "--content-dir", str(fixtures_dir)])
        assert result.exit_code == 0, result.output
        assert "Not available from source" in result.output
        assert json.loads((project / ".ak/config.json").read_text())["version"] == "1.0.0"


class TestDoctor:
    def test_uninitialized_project_fails(self, runner, project):
        with patch("agent_kit.flows.doctor.check_codex", return_value=CheckResult(PASS, "Codex CLI available")):
            result = runner.invoke(main, ["doctor"])
        assert result.exit_code == 1
        assert ".github/skills/ missing" in result.output

    def test_initialized_project_passes(self, runner, project, fixtures_dir, preset_file):
        runner.invoke(main, _init_args(fixtures_dir, preset_file))
        with patch("agent_kit.flows.doctor.check_codex", return_value=CheckResult(PASS, "Codex CLI available")):
            result = runner.invoke(main, ["doctor"])
        assert result.exit_code == 0, result.output
        assert "All checks passed!" in result.output


class TestUpdate:
    def test_prints_planned_steps(self, runner, project):
        result = runner.invoke(main, ["update", "--skills-only"])
        assert result.exit_code == 0
        assert "Download and install updated skills" in result.output
        assert "Check package index" not in result.output
        assert "run 'ak init' first" in result.output


class TestValidateGroup:
    def test_subcommands_registered(self, runner):
        result = runner.invoke(main, ["validate", "--help"])
        assert result.exit_code == 0
        for name in ("plan", "skill", "contents"):
            assert name in result.output

"""Tests for agent_kit.flows.update."""

from __future__ import annotations

from agent_kit.config import DEFAULT_CONFIG, save_config
from agent_kit.flows.update import installed_skills, plan_update


class TestInstalledSkills:
    def test_empty(self, tmp_path):
        assert installed_skills(tmp_path) == []

    def test_only_dirs_with_skill_md(self, tmp_path):
        for name in ("b", "a"):
            d = tmp_path / ".github/skills" / name
            d.mkdir(parents=True)
            (d / "SKILL.md").write_text("x")
        (tmp_path / ".github/skills/empty").mkdir()
        assert installed_skills(tmp_path) == ["a", "b"]


class TestPlanUpdate:
    def test_uninitialized_project(self, tmp_path):
        plan = plan_update(tmp_path)
        assert plan["config_version"] is None
        assert len(plan["steps"]) == 4

    def test_reads_config(self, tmp_path):
        save_config(DEFAULT_CONFIG, tmp_path)
        plan = plan_update(tmp_path)
        assert plan["config_version"] == "1.0.0"
        assert plan["source"] == "github:YOUR_ORG/agent-kit"

    def test_skills_only(self, tmp_path):
        steps = plan_update(tmp_path, skills_only=True)["steps"]
        assert steps == ["Check for new skills in repository", "Download and install updated skills"]

    def test_cli_only(self, tmp_path):
        steps = plan_update(tmp_path, cli_only=True)["steps"]
        assert steps == ["Check package index for CLI updates", "Suggest upgrade command if available"]

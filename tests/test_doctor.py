"""Tests for agent_kit.flows.doctor."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

from agent_kit.flows.doctor import (
    FAIL,
    PASS,
    REQUIRED_DIRS,
    WARN,
    check_codex,
    check_dirs,
    check_files,
    check_skill_links,
    run_checks,
    summarize,
)


class TestChecks:
    def test_missing_dirs_fail(self, tmp_path):
        results = check_dirs(tmp_path)
        assert len(results) == len(REQUIRED_DIRS)
        assert all(r.status == FAIL for r in results)

    def test_present_dirs_pass(self, tmp_path):
        for d in REQUIRED_DIRS:
            (tmp_path / d).mkdir(parents=True)
        assert all(r.status == PASS for r in check_dirs(tmp_path))

    def test_missing_files_warn(self, tmp_path):
        results = check_files(tmp_path)
        assert all(r.status == WARN for r in results)
        assert results[0].details == "Run 'ak init' to create"

    def test_broken_skill_link_fails(self, tmp_path):
        skills = tmp_path / ".claude/skills"
        skills.mkdir(parents=True)
        (skills / "gone").symlink_to(tmp_path / "nowhere", target_is_directory=True)
        results = check_skill_links(tmp_path)
        assert len(results) == 1
        assert results[0].status == FAIL
        assert "gone" in results[0].message

    def test_healthy_links_report_nothing(self, tmp_path):
        (tmp_path / ".github/skills/a").mkdir(parents=True)
        (tmp_path / ".claude/skills").mkdir(parents=True)
        (tmp_path / ".claude/skills/a").symlink_to("../../.github/skills/a", target_is_directory=True)
        assert check_skill_links(tmp_path) == []


class TestCheckCodex:
    @patch("agent_kit.flows.doctor.subprocess.run")
    def test_available(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0)
        assert check_codex().status == PASS

    @patch("agent_kit.flows.doctor.subprocess.run", side_effect=FileNotFoundError)
    def test_not_installed(self, mock_run):
        result = check_codex()
        assert result.status == WARN
        assert result.details == "Optional for review delegation"

    @patch("agent_kit.flows.doctor.subprocess.run", side_effect=subprocess.TimeoutExpired("codex", 10))
    def test_timeout(self, mock_run):
        assert check_codex().status == WARN


class TestRunChecks:
    @patch("agent_kit.flows.doctor.subprocess.run", side_effect=FileNotFoundError)
    def test_summary_counts(self, mock_run, tmp_path):
        counts = summarize(run_checks(tmp_path))
        assert counts == {PASS: 0, WARN: 4, FAIL: len(REQUIRED_DIRS)}

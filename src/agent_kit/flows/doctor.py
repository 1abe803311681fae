"""Installation health checks for ``ak doctor``."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from agent_kit.config import CONFIG_DIR, CONFIG_FILE
from agent_kit.installer import CLAUDE_SETTINGS_LOCAL, CLAUDE_SKILLS_DIR

PASS = "pass"
WARN = "warn"
FAIL = "fail"

REQUIRED_DIRS = (".github/skills", ".claude/skills", ".claude/commands", "docs/ideas", "docs/plans", "docs/adrs")
EXPECTED_FILES = (f"{CONFIG_DIR}/{CONFIG_FILE}", str(CLAUDE_SETTINGS_LOCAL), "AGENTS.md")


@dataclass
class CheckResult:
    status: str
    message: str
    details: str | None = None


def check_dirs(root: Path) -> list[CheckResult]:
    return [
        CheckResult(PASS, f"{d}/ exists") if (root / d).is_dir() else CheckResult(FAIL, f"{d}/ missing")
        for d in REQUIRED_DIRS
    ]


def check_files(root: Path) -> list[CheckResult]:
    return [
        CheckResult(PASS, f"{f} exists")
        if (root / f).is_file()
        else CheckResult(WARN, f"{f} missing", "Run 'ak init' to create")
        for f in EXPECTED_FILES
    ]


def check_skill_links(root: Path) -> list[CheckResult]:
    """Flag .claude/skills entries whose symlink target is gone."""
    skills_dir = root / CLAUDE_SKILLS_DIR
    if not skills_dir.is_dir():
        return []
    broken = sorted(p.name for p in skills_dir.iterdir() if p.is_symlink() and not p.exists())
    if not broken:
        return []
    return [CheckResult(FAIL, f"Broken skill links: {', '.join(broken)}", "Re-run 'ak init --force'")]


def check_codex() -> CheckResult:
    try:
        result = subprocess.run(["codex", "--version"], capture_output=True, text=True, timeout=10)
        if result.returncode == 0:
            return CheckResult(PASS, "Codex CLI available")
    except (subprocess.TimeoutExpired, FileNotFoundError):
        pass
    return CheckResult(WARN, "Codex CLI not found", "Optional for review delegation")


def run_checks(working_dir: str | Path) -> list[CheckResult]:
    root = Path(working_dir)
    return [*check_dirs(root), *check_files(root), *check_skill_links(root), check_codex()]


def summarize(results: list[CheckResult]) -> dict[str, int]:
    counts = {PASS: 0, WARN: 0, FAIL: 0}
    for r in results:
        counts[r.status] += 1
    return counts

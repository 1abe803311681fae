"""Plan validator: checks implementation plans written by the create-plan skill.

Checks:
  - token count (warn > 3000, error > 5000)
  - filename format NNNN_feature-name.md
  - required sections and Testing Strategy subsections
  - status field, diagram, phases, tasks, checklist items

Usage:
    ak-validate-plan docs/plans/0042_user-auth.md
"""

from __future__ import annotations

import re
import sys
from pathlib import Path

import click

from agent_kit.validators.common import ValidationResult, estimate_tokens, format_sections

TOKEN_LIMIT_OPTIMAL = 3000
TOKEN_LIMIT_ERROR = 5000

REQUIRED_SECTIONS = ("Overview", "Goals", "Testing Strategy", "Dependency Graph", "Checklist")
STATUSES = ("DRAFT", "IN_PROGRESS", "COMPLETE", "ABANDONED")

FILENAME_PATTERN = re.compile(r"^\d{4}[A-Z]?_[\w-]+\.md$")
STATUS_PATTERN = re.compile(rf"\*\*Status:\*\*\s*({'|'.join(STATUSES)})", re.IGNORECASE)

MERMAID_TYPES = (
    "graph",
    "sequenceDiagram",
    "stateDiagram",
    "classDiagram",
    "erDiagram",
    "gantt",
    "pie",
    "flowchart",
)
_MERMAID_BLOCK = re.compile(r"```mermaid(.*?)```", re.DOTALL | re.IGNORECASE)
_ASCII_DIAGRAM = re.compile(r"[─│┌┐└┘├┤┬┴┼▼▲►◄→←↓↑]")

_PHASE = re.compile(r"^## Phase \d+:", re.MULTILINE)
_TASK = re.compile(r"^### \d+\.\d+", re.MULTILINE)
_FILE_REF = re.compile(r"(?:CREATE|MODIFY|DELETE):\s*`([^`]+)`")
_FILES_TABLE = re.compile(r"\| Action \| File \| Purpose \|", re.IGNORECASE)
_E2E = re.compile(r"e2e|end.to.end|playwright|cypress", re.IGNORECASE)


def _section_pattern(name: str, level: int = 2) -> re.Pattern[str]:
    return re.compile(rf"^{'#' * level}\s+{re.escape(name)}", re.MULTILINE | re.IGNORECASE)


def has_mermaid_diagram(content: str) -> bool:
    return any(
        re.search(rf"\b{kind}", block.group(1), re.IGNORECASE)
        for block in _MERMAID_BLOCK.finditer(content)
        for kind in MERMAID_TYPES
    )


def validate_plan_text(content: str, file_name: str) -> ValidationResult:
    result = ValidationResult()
    tokens = estimate_tokens(content)
    line_count = len(content.split("\n"))
    result.stats = {"lines": line_count, "tokens": tokens}

    if FILENAME_PATTERN.match(file_name):
        result.info.append("Filename format: OK")
    else:
        result.errors.append(
            f"Invalid filename format: {file_name}. Expected: NNNN_feature-name.md (e.g., 0042_user-auth.md)"
        )

    if tokens > TOKEN_LIMIT_ERROR:
        result.errors.append(f"Token count ~{tokens} exceeds hard limit of {TOKEN_LIMIT_ERROR}. Split into subplans.")
    elif tokens > TOKEN_LIMIT_OPTIMAL:
        result.warnings.append(
            f"Token count ~{tokens} exceeds optimal limit of {TOKEN_LIMIT_OPTIMAL}. Consider splitting."
        )
    else:
        result.info.append(f"Token count: ~{tokens} ({line_count} lines)")

    status = STATUS_PATTERN.search(content)
    if status:
        result.info.append(f"Status: {status.group(1)}")
    else:
        result.errors.append("Missing or invalid Status field. Expected: DRAFT, IN_PROGRESS, COMPLETE, or ABANDONED")

    for section in REQUIRED_SECTIONS:
        if not _section_pattern(section).search(content):
            result.errors.append(f"Missing required section: ## {section}")

    has_mermaid = has_mermaid_diagram(content)
    if has_mermaid or _ASCII_DIAGRAM.search(content):
        result.info.append(f"Diagram: {'Mermaid' if has_mermaid else 'ASCII'}")
    else:
        result.warnings.append("No diagram detected. Add a Mermaid or ASCII diagram.")

    phases = _PHASE.findall(content)
    if phases:
        result.info.append(f"Phases found: {len(phases)}")
    else:
        result.warnings.append("No phases found. Expected: ## Phase N: {Name}")

    tasks = _TASK.findall(content)
    if tasks:
        result.info.append(f"Tasks found: {len(tasks)}")
    else:
        result.warnings.append("No tasks found. Expected: ### N.N {Task Name}")

    if not _FILES_TABLE.search(content):
        result.warnings.append("Missing Files Summary table")

    commits = content.count("**Commit:**")
    if tasks and commits and commits < len(tasks):
        result.warnings.append(f"Only {commits} commit messages for {len(tasks)} tasks")

    referenced = _FILE_REF.findall(content)
    result.stats["files"] = referenced
    if referenced:
        result.info.append(f"File references: {len(referenced)}")

    checklist = content.count("- [ ]")
    if checklist:
        result.info.append(f"Checklist items: {checklist}")
    else:
        result.warnings.append("No checklist items found")

    if _section_pattern("Testing Strategy").search(content):
        has_automated = _section_pattern("Automated Tests", 3).search(content) is not None
        has_manual = _section_pattern("Manual Validation", 3).search(content) is not None
        if not has_automated:
            result.errors.append('Testing Strategy missing "### Automated Tests" subsection')
        if not has_manual:
            result.errors.append('Testing Strategy missing "### Manual Validation" subsection')
        if has_automated and not _E2E.search(content):
            result.warnings.append("No E2E tests mentioned. E2E tests are preferred for validating user flows.")
        if has_automated and has_manual:
            result.info.append("Testing Strategy: Complete (automated + manual)")

    return result


def validate_plan(path: str | Path) -> ValidationResult:
    path = Path(path)
    if not path.is_file():
        return ValidationResult(errors=[f"File not found: {path}"])
    return validate_plan_text(path.read_text(encoding="utf-8"), path.name)


def format_plan_report(result: ValidationResult) -> str:
    lines = ["", "=== Plan Validation Results ===", "", *format_sections(result)]
    if result.passed and not result.warnings:
        lines.append(click.style("PASSED: Plan is valid", fg="green"))
    elif result.passed:
        lines.append(click.style(f"PASSED with {len(result.warnings)} warning(s)", fg="yellow"))
    else:
        lines.append(
            click.style(f"FAILED: {len(result.errors)} error(s), {len(result.warnings)} warning(s)", fg="red")
        )
    lines.append("")
    return "\n".join(lines)


@click.command("plan")
@click.argument("plan_file", type=click.Path(dir_okay=False))
def main(plan_file: str):
    """Validate an implementation plan (NNNN_feature-name.md)."""
    result = validate_plan(plan_file)
    click.echo(format_plan_report(result))
    if not result.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Validates that CONTENTS.md files link every entry of their directory.

Output (JSON):
    {"valid": bool, "results": [{"contentsPath": str, "missing": [str], "extra": [str]}]}

Usage:
    ak-validate-contents [path]
"""

from __future__ import annotations

import json
import os
import re
import sys
from pathlib import Path

import click

CONTENTS_FILE = "CONTENTS.md"
IGNORED = frozenset({CONTENTS_FILE, ".git", ".DS_Store", "node_modules", ".claude"})

# [name](./path) in tables or inline text
_LOCAL_LINK = re.compile(r"\[([^\]]+)\]\(\./([^)]+)\)")


def find_contents_files(root: Path) -> list[Path]:
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in IGNORED)
        if CONTENTS_FILE in filenames:
            found.append(Path(dirpath) / CONTENTS_FILE)
    return found


def extract_linked_paths(content: str) -> set[str]:
    return {m.group(2).rstrip("/") for m in _LOCAL_LINK.finditer(content)}


def directory_entries(directory: Path) -> set[str]:
    try:
        return {p.name for p in directory.iterdir() if p.name not in IGNORED}
    except OSError:
        return set()


def validate_contents_file(contents_path: Path) -> dict:
    linked = extract_linked_paths(contents_path.read_text(encoding="utf-8"))
    entries = directory_entries(contents_path.parent)
    return {
        "contentsPath": str(contents_path),
        "missing": sorted(entries - linked),
        # nested links only need their top-level component to exist
        "extra": sorted(link for link in linked if link.split("/")[0] not in entries),
    }


def validate_contents_tree(root: str | Path) -> dict:
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Directory not found: {root}")
    results = [validate_contents_file(p) for p in find_contents_files(root)]
    valid = all(not r["missing"] and not r["extra"] for r in results)
    return {"valid": valid, "results": results}


@click.command("contents")
@click.argument("path", required=False, default=".")
def main(path: str):
    """Check every CONTENTS.md under PATH against its directory listing."""
    try:
        report = validate_contents_tree(path)
    except OSError as e:
        click.echo(json.dumps({"error": str(e)}), err=True)
        sys.exit(1)
    click.echo(json.dumps(report, indent=2))
    if not report["valid"]:
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Skill content fetcher: reads SKILL.md documents from a local content tree or GitHub raw content."""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import yaml

from agent_kit.errors import FetchError, FrontmatterError
from agent_kit.models import Command, Skill

logger = logging.getLogger(__name__)

GITHUB_RAW_BASE = "https://raw.githubusercontent.com"
SKILL_FILE = "SKILL.md"

# ── HTTP ──
FETCH_TIMEOUT_S = 10.0
FETCH_MAX_ATTEMPTS = 3
FETCH_BASE_BACKOFF_S = 0.5
FETCH_MAX_BACKOFF_S = 4.0

_FRONTMATTER_RE = re.compile(r"\A---\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n(.*))?\Z", re.DOTALL)
_FLAT_LINE_RE = re.compile(r"^([\w-]+):\s*(.*)$")
_KNOWN_FIELDS = ("name", "description", "license", "metadata")
_BLOCK_INDICATORS = ("", "|", "|-", ">", ">-")


@dataclass
class FetchOptions:
    repo: str
    branch: str
    path: str
    use_local: bool = False
    local_path: str | Path = "content"


@dataclass
class FetchResult:
    skills: list[Skill] = field(default_factory=list)
    commands: list[Command] = field(default_factory=list)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _load_nested(key: str, indicator: str, lines: list[str]) -> Any:
    """YAML-load one key whose value is an indented block (``metadata:`` or ``description: >``)."""
    try:
        data = yaml.safe_load("\n".join([f"{key}: {indicator}", *lines]))
    except yaml.YAMLError as e:
        raise FrontmatterError(f"Invalid SKILL.md: cannot parse '{key}' block: {e}") from e
    return data.get(key) if isinstance(data, dict) else None


def _scan_flat(block: str) -> dict[str, Any]:
    """Line-by-line ``key: value`` scan. Values are kept as written, minus matching quotes.

    Only a key with an empty value (or a ``|``/``>`` indicator) followed by
    indented lines is handed to YAML.
    """
    result: dict[str, Any] = {}
    lines = block.splitlines()
    i = 0
    while i < len(lines):
        m = _FLAT_LINE_RE.match(lines[i])
        i += 1
        if not m:
            continue
        key, value = m.group(1), m.group(2).strip()
        nested: list[str] = []
        while i < len(lines) and (lines[i][:1] in (" ", "\t") or not lines[i].strip()):
            nested.append(lines[i])
            i += 1
        if value in _BLOCK_INDICATORS and any(line.strip() for line in nested):
            result[key] = _load_nested(key, value, nested)
        else:
            result[key] = _unquote(value)
    return result


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into its frontmatter mapping and body.

    Raises FrontmatterError when the document does not start with a
    ``---`` delimited block.
    """
    m = _FRONTMATTER_RE.match(content)
    if not m:
        raise FrontmatterError("Invalid SKILL.md: missing frontmatter")
    return _scan_flat(m.group(1)), m.group(2) or ""


def parse_skill_md(content: str) -> Skill:
    """Parse a SKILL.md document. ``Skill.content`` is the input text unchanged."""
    data, _body = parse_frontmatter(content)

    name = data.get("name")
    description = data.get("description")
    if name is None or not str(name).strip():
        raise FrontmatterError("Invalid SKILL.md: frontmatter is missing 'name'")
    if description is None or not str(description).strip():
        raise FrontmatterError(f"Invalid SKILL.md: skill '{name}' is missing 'description'")

    metadata: dict[str, Any] = {}
    if isinstance(data.get("metadata"), dict):
        metadata.update(data["metadata"])
    metadata.update({k: v for k, v in data.items() if k not in _KNOWN_FIELDS})

    license_ = data.get("license")
    return Skill(
        name=str(name).strip(),
        description=str(description).strip(),
        content=content,
        license=str(license_) if license_ is not None else None,
        metadata=metadata,
    )


def fetch_content(
    options: FetchOptions,
    names: Iterable[str] | None = None,
    client: httpx.Client | None = None,
) -> FetchResult:
    """Collect skills from the configured source.

    ``names`` limits a remote fetch to those skills; raw content has no
    directory listing, so a remote fetch without names returns nothing.
    """
    if options.use_local:
        return fetch_local_content(options.local_path)
    return fetch_github_content(options, names or (), client=client)


def fetch_local_content(base_path: str | Path) -> FetchResult:
    skills_root = Path(base_path) / "skills"
    if not skills_root.is_dir():
        logger.warning("Skills directory not found: %s", skills_root)
        return FetchResult()

    skills: list[Skill] = []
    for entry in sorted(p for p in skills_root.iterdir() if p.is_dir()):
        skill_md = entry / SKILL_FILE
        if not skill_md.is_file():
            logger.debug("No %s in %s, skipping", SKILL_FILE, entry)
            continue
        skills.append(parse_skill_md(skill_md.read_text(encoding="utf-8")))

    logger.info("Loaded %d skills from %s", len(skills), skills_root)
    return FetchResult(skills=skills)


def compute_backoff(attempt: int) -> float:
    """Exponential backoff: 0.5s, 1s, 2s, 4s cap."""
    delay = FETCH_BASE_BACKOFF_S * (2.0 ** max(0, attempt - 1))
    return min(delay, FETCH_MAX_BACKOFF_S)


def raw_url(repo: str, branch: str, path: str) -> str:
    org_repo = repo.removeprefix("github:").strip("/")
    return f"{GITHUB_RAW_BASE}/{org_repo}/{branch}/{path.strip('/')}"


def fetch_file(repo: str, branch: str, path: str, client: httpx.Client | None = None) -> str:
    """GET one raw file, retrying timeouts, transport errors, 429 and 5xx.

    A 404 raises FileNotFoundError; any other 4xx or exhausted retries raise FetchError.
    """
    url = raw_url(repo, branch, path)
    own_client = client is None
    if own_client:
        client = httpx.Client(timeout=FETCH_TIMEOUT_S, follow_redirects=True)
    try:
        last_error = ""
        for attempt in range(1, FETCH_MAX_ATTEMPTS + 1):
            try:
                response = client.get(url)
            except httpx.TransportError as e:
                last_error = str(e) or type(e).__name__
            else:
                if response.status_code == 404:
                    raise FileNotFoundError(url)
                if response.status_code < 400:
                    return response.text
                if response.status_code != 429 and response.status_code < 500:
                    raise FetchError(f"Failed to fetch {url}: HTTP {response.status_code}")
                last_error = f"HTTP {response.status_code}"

            if attempt < FETCH_MAX_ATTEMPTS:
                delay = compute_backoff(attempt)
                logger.warning("Fetch transient failure: url=%s error=%s retry_in=%.1fs", url, last_error, delay)
                time.sleep(delay)
        raise FetchError(f"Failed to fetch {url} after {FETCH_MAX_ATTEMPTS} attempts: {last_error}")
    finally:
        if own_client:
            client.close()


def fetch_github_content(
    options: FetchOptions,
    names: Iterable[str],
    client: httpx.Client | None = None,
) -> FetchResult:
    names = list(dict.fromkeys(names))
    if not names:
        logger.warning("No skill names requested from %s; nothing to fetch", options.repo)
        return FetchResult()

    skills: list[Skill] = []
    for name in sorted(names):
        path = f"{options.path.strip('/')}/skills/{name}/{SKILL_FILE}"
        try:
            text = fetch_file(options.repo, options.branch, path, client=client)
        except FileNotFoundError:
            logger.warning("Skill '%s' not found in %s@%s", name, options.repo, options.branch)
            continue
        skills.append(parse_skill_md(text))
    return FetchResult(skills=skills)

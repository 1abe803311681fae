"""Exception types raised by agent-kit library code. The CLI turns these into exit code 1."""

from __future__ import annotations


class AgentKitError(Exception):
    """Base class for all agent-kit errors."""


class PresetNotFoundError(AgentKitError):
    def __init__(self, name: str):
        super().__init__(f"preset not found: {name}")
        self.name = name


class FrontmatterError(AgentKitError):
    """A skill document has no frontmatter block, or the block is unusable."""


class FetchError(AgentKitError):
    """Remote content could not be fetched."""


class InstallError(AgentKitError):
    """A skill could not be installed into the project."""


class ConfigError(AgentKitError):
    """The project config file exists but cannot be read."""

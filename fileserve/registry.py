"""
Sources of known project paths.

The locator only ever asks "which absolute project paths exist?"; the real
answer comes from the Claude config file, tests use StaticRegistry.
"""

import json
import logging
import os
from typing import Optional, Protocol

from fileserve.services.locator import encode_project_name

logger = logging.getLogger(__name__)


class ProjectRegistry(Protocol):
    def known_project_paths(self) -> list[str]:
        ...


class StaticRegistry:
    def __init__(self, paths: list[str]) -> None:
        self._paths = list(paths)

    def known_project_paths(self) -> list[str]:
        return list(self._paths)


class ClaudeConfigRegistry:
    """
    Reads project paths from ``<home>/.claude.json``.

    With ``require_history`` a path only counts when its conversation history
    directory ``<home>/.claude/projects/<encoded name>`` exists as well.
    """

    def __init__(self, home_dir: Optional[str], require_history: bool = True) -> None:
        self.home_dir = home_dir
        self.require_history = require_history

    def known_project_paths(self) -> list[str]:
        if not self.home_dir or self.home_dir == "~":
            logger.warning("Home directory unavailable; no projects can be resolved")
            return []

        config_path = os.path.join(self.home_dir, ".claude.json")
        try:
            with open(config_path, "r", encoding="utf-8") as fh:
                config = json.load(fh)
        except FileNotFoundError:
            logger.info("No Claude config at %s", config_path)
            return []
        except (OSError, ValueError) as exc:
            logger.warning("Failed to read Claude config %s: %s", config_path, exc)
            return []

        projects = config.get("projects") if isinstance(config, dict) else None
        if not isinstance(projects, dict):
            return []

        paths = list(projects.keys())
        if self.require_history:
            paths = [p for p in paths if self._has_history(p)]
        return paths

    def _has_history(self, project_path: str) -> bool:
        history_dir = os.path.join(self.home_dir, ".claude", "projects", encode_project_name(project_path))
        return os.path.isdir(history_dir)

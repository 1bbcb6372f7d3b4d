"""
Maps an encoded project name back to the project's absolute root.

There is no stored reverse mapping: every known project path is re-encoded
and compared. The encoding is lossy, so two paths can collide; the first
registry entry wins.
"""

import logging
import re
from typing import TYPE_CHECKING

from fileserve.errors import NotFound, UnsafeProjectName
from fileserve.schemas import ProjectRoot

if TYPE_CHECKING:
    from fileserve.registry import ProjectRegistry

logger = logging.getLogger(__name__)

_ENCODE_CHARS = re.compile(r"[/\\:.]")
_UNSAFE_NAME_CHARS = re.compile(r'[<>:"|?*\x00-\x1f/\\]')


def encode_project_name(project_path: str) -> str:
    """'/Users/me/tmp/' -> '-Users-me-tmp'"""
    normalized = project_path[:-1] if project_path.endswith("/") else project_path
    return _ENCODE_CHARS.sub("-", normalized)


def is_safe_project_name(encoded_name: str) -> bool:
    if not encoded_name:
        return False
    return _UNSAFE_NAME_CHARS.search(encoded_name) is None


class ProjectLocator:
    def __init__(self, registry: "ProjectRegistry") -> None:
        self.registry = registry

    def resolve(self, encoded_name: str) -> ProjectRoot:
        if not is_safe_project_name(encoded_name):
            logger.info("Rejected unsafe project name %r", encoded_name)
            raise UnsafeProjectName("Invalid project name")

        for project_path in self.registry.known_project_paths():
            if encode_project_name(project_path) == encoded_name:
                root = project_path.rstrip("/") or "/"
                return ProjectRoot(encoded_name=encoded_name, absolute_path=root)

        logger.warning("No project matches %r", encoded_name)
        raise NotFound("Project not found")

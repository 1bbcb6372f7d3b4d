"""
Confines caller-supplied relative paths under a project root.

Two layers: ``check_relative_path`` rejects traversal attempts outright, and
``safe_resolve`` drops empty, "." and ".." segments so its output stays
textually under the root whatever it is given. Symlinks are not followed or
checked.
"""

import logging

from fileserve.errors import InvalidPath

logger = logging.getLogger(__name__)


def check_relative_path(raw_path: str) -> None:
    """Raise InvalidPath if ``raw_path`` contains '..' or starts with '/'."""
    if ".." in raw_path or raw_path.startswith("/"):
        logger.info("Rejected traversal attempt: %r", raw_path)
        raise InvalidPath("Access denied: Invalid path")


def safe_resolve(root: str, raw_path: str) -> str:
    parts = [p for p in raw_path.lstrip("/").split("/") if p not in ("", ".", "..")]
    return root.rstrip("/") + "/" + "/".join(parts)


def confine(root: str, raw_path: str) -> str:
    """Boundary check, then resolution. No filesystem access happens here."""
    check_relative_path(raw_path)
    return safe_resolve(root, raw_path)

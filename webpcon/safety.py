import os
import logging
from typing import Callable

from .config import PROJECT_MARKERS, MAX_PATH_DEPTH

logger = logging.getLogger(__name__)


def confirm(prompt: str = "Continue? (y/N): ") -> bool:
    """
    Ask the user on stdin; only "y" or "yes" counts as agreement
    """
    try:
        answer = input(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def path_depth(abs_path: str) -> int:
    """Number of "/"-separated segments, the leading empty one included"""
    return len(abs_path.replace(os.sep, "/").split("/"))


def has_project_marker(abs_path: str) -> bool:
    return any(os.path.exists(os.path.join(abs_path, marker)) for marker in PROJECT_MARKERS)


def is_safe_path(path: str, confirm: Callable[[], bool] = confirm) -> bool:
    """
    Guard against running on a filesystem root or on a suspiciously deep folder
    
    This is a best-effort heuristic, not a security boundary.
    
    Args:
        path: Path given on the command line
        confirm: Callback asked when the path looks risky
        
    Returns:
        bool: Whether the operation may proceed
    """
    try:
        abs_path = os.path.abspath(path)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot resolve path {path}: {str(e)}")
        return False

    if abs_path == "/" or len(abs_path) <= 3:
        print(f"Path appears to be root or drive ({abs_path})")
        return confirm()

    depth = path_depth(abs_path)
    if depth > MAX_PATH_DEPTH and not has_project_marker(abs_path):
        print(f"Folder is too deep ({depth} levels) and no project files found.")
        return confirm()

    return True

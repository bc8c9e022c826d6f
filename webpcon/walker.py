import os
import logging
from typing import Iterator, AbstractSet

from .config import SKIP_DIRS, SKIP_FILES

logger = logging.getLogger(__name__)


def _log_walk_error(error: OSError):
    logger.warning(f"⚠️ Cannot read {error.filename}: {error.strerror or error}")


def walk_files(
    root: str,
    skip_dirs: AbstractSet[str] = SKIP_DIRS,
    skip_files: AbstractSet[str] = SKIP_FILES
) -> Iterator[str]:
    """
    Recursively yield the files under root
    
    Excluded directories are not descended into, whatever their depth.
    Unreadable entries are logged and skipped so the rest of the tree
    is still visited.
    
    Args:
        root: Directory to walk
        skip_dirs: Directory base names to prune
        skip_files: File base names to ignore
        
    Yields:
        str: Path of every remaining file, in sorted order
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames[:] = sorted(d for d in dirnames if d not in skip_dirs)

        for filename in sorted(filenames):
            path = os.path.join(dirpath, filename)
            if filename in skip_files:
                logger.info(f"⏭️ Skipping excluded file: {path}")
                continue
            yield path

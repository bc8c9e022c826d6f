import os
import logging
from typing import Tuple

from .backup_manager import BackupManager
from .converter import is_image
from .image_converter import webp_path_for

logger = logging.getLogger(__name__)


def revert_file(backup_path: str, manager: BackupManager) -> str:
    """
    Delete the generated WebP (if any) and copy the original back
    
    Returns:
        str: The restored original path
    """
    original_path = manager.original_path_for(backup_path)
    webp_path = webp_path_for(original_path)

    if os.path.exists(webp_path):
        os.remove(webp_path)
        logger.info(f"🗑️ Deleted: {webp_path}")

    return manager.restore(backup_path)


def revert_images(root: str) -> Tuple[int, int]:
    """
    Restore every backed-up image of a project
    
    The backup tree is left in place, so reverting again is harmless.
    
    Args:
        root: Project directory
        
    Returns:
        Tuple[int, int]: (restored files, failed files)
        
    Raises:
        FileNotFoundError: The project has no backup tree
    """
    manager = BackupManager(root)
    success_count = 0
    fail_count = 0

    for backup_path in manager.iter_backups():
        if not is_image(backup_path):
            continue

        rel_path = os.path.relpath(backup_path, manager.backup_root)
        try:
            revert_file(backup_path, manager)
            logger.info(f"✅ Restored: {rel_path}")
            success_count += 1
        except Exception as e:
            logger.error(f"❌ Failed to restore {rel_path}: {str(e)}")
            fail_count += 1

    return success_count, fail_count

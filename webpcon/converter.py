import os
import logging
from typing import Tuple

from .backup_manager import BackupManager
from .config import CACHE_DIR_NAME, IMAGE_EXTENSIONS
from .gif_pipeline import convert_animated_gif, count_frames
from .image_converter import convert_static, webp_path_for
from .walker import walk_files

logger = logging.getLogger(__name__)


def is_image(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in IMAGE_EXTENSIONS


def convert_file(path: str, manager: BackupManager, enable_gif: bool = False) -> str:
    """
    Back up one image and write its WebP replacement
    
    Args:
        path: Image inside the project
        manager: Backup manager of the project root
        enable_gif: Use the animated pipeline for multi-frame GIFs
        
    Returns:
        str: Path of the written WebP
    """
    ext = os.path.splitext(path)[1].lower()
    webp_path = webp_path_for(path)

    backup_path = manager.backup(path)

    if ext == ".gif" and enable_gif and count_frames(backup_path) > 1:
        cache_dir = os.path.join(manager.root, CACHE_DIR_NAME)
        convert_animated_gif(backup_path, webp_path, cache_dir)
    else:
        convert_static(backup_path, ext, webp_path)

    return webp_path


def convert_images(root: str, enable_gif: bool = False) -> Tuple[int, int]:
    """
    Convert every image under root to WebP, moving originals to the backup tree
    
    Args:
        root: Project directory
        enable_gif: Turn on the experimental animated GIF pipeline
        
    Returns:
        Tuple[int, int]: (converted files, failed files)
    """
    if not os.path.isdir(root):
        raise NotADirectoryError(f"Not a directory: {root}")

    manager = BackupManager(root)
    success_count = 0
    fail_count = 0

    for path in walk_files(manager.root):
        if not is_image(path):
            continue

        rel_path = os.path.relpath(path, manager.root)
        logger.info(f"🔄 Converting: {rel_path}")
        try:
            webp_path = convert_file(path, manager, enable_gif)
            logger.info(f"✅ Converted: {rel_path} -> {os.path.basename(webp_path)}")
            success_count += 1
        except Exception as e:
            logger.error(f"❌ Failed to convert {rel_path}: {str(e)}")
            fail_count += 1

    return success_count, fail_count

import os
import logging
from dataclasses import dataclass
from typing import Dict, List

from .backup_manager import BackupManager
from .converter import is_image
from .image_converter import webp_path_for

logger = logging.getLogger(__name__)


@dataclass
class BackupEntry:
    rel_path: str
    backup_path: str
    original_path: str
    webp_path: str
    has_webp: bool
    has_original: bool

    @property
    def state(self) -> str:
        """converted, restored or missing_output"""
        if self.has_webp:
            return "converted"
        if self.has_original:
            return "restored"
        return "missing_output"


def backup_status(root: str) -> List[BackupEntry]:
    """
    Describe every backed-up image of a project
    
    Args:
        root: Project directory
        
    Returns:
        List[BackupEntry]: One entry per backup file, empty when there is no backup tree
    """
    manager = BackupManager(root)
    if not manager.exists():
        logger.info(f"No backup directory in {manager.root}")
        return []

    entries = []
    for backup_path in manager.iter_backups():
        if not is_image(backup_path):
            continue
        original_path = manager.original_path_for(backup_path)
        webp_path = webp_path_for(original_path)
        entries.append(BackupEntry(
            rel_path=os.path.relpath(backup_path, manager.backup_root),
            backup_path=backup_path,
            original_path=original_path,
            webp_path=webp_path,
            has_webp=os.path.exists(webp_path),
            has_original=os.path.exists(original_path),
        ))
    return entries


def summarize(entries: List[BackupEntry]) -> Dict[str, int]:
    summary = {"total": len(entries), "converted": 0, "restored": 0, "missing_output": 0}
    for entry in entries:
        summary[entry.state] += 1
    return summary

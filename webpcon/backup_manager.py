import os
import shutil
import logging
from typing import Iterator

from .config import BACKUP_DIR_NAME
from .walker import walk_files

logger = logging.getLogger(__name__)


class BackupManager:
    """
    Keeps originals recoverable by mirroring them under the backup root
    
    The backup location of a file is always derived from its path relative
    to the project root; nothing is persisted besides the files themselves.
    """
    
    def __init__(self, root: str, backup_dir_name: str = BACKUP_DIR_NAME):
        """
        Args:
            root: Project root being converted or reverted
            backup_dir_name: Name of the backup directory under root
        """
        self.root = os.path.abspath(root)
        self.backup_root = os.path.join(self.root, backup_dir_name)
    
    def backup_path_for(self, path: str) -> str:
        """Backup location mirroring path's position under the project root"""
        rel_path = os.path.relpath(os.path.abspath(path), self.root)
        return os.path.join(self.backup_root, rel_path)
    
    def original_path_for(self, backup_path: str) -> str:
        """Original location of a file stored in the backup tree"""
        rel_path = os.path.relpath(os.path.abspath(backup_path), self.backup_root)
        return os.path.join(self.root, rel_path)
    
    def backup(self, path: str) -> str:
        """
        Move a file into the backup tree before it is converted
        
        Any failure propagates: without a backup the file must not be touched.
        
        Args:
            path: File inside the project root
            
        Returns:
            str: The backup path, which becomes the read source for conversion
        """
        backup_path = self.backup_path_for(path)
        os.makedirs(os.path.dirname(backup_path), exist_ok=True)
        shutil.move(path, backup_path)
        logger.info(f"💾 Moved to backup: {os.path.relpath(backup_path, self.backup_root)}")
        return backup_path
    
    def restore(self, backup_path: str) -> str:
        """
        Copy a backed-up file back to its original location
        
        The backup itself is kept, so restoring twice gives the same result.
        
        Returns:
            str: The restored original path
        """
        original_path = self.original_path_for(backup_path)
        os.makedirs(os.path.dirname(original_path), exist_ok=True)
        shutil.copy2(backup_path, original_path)
        return original_path
    
    def exists(self) -> bool:
        return os.path.isdir(self.backup_root)
    
    def iter_backups(self) -> Iterator[str]:
        """
        Yield every file stored in the backup tree
        
        Raises:
            FileNotFoundError: The project has no backup tree
        """
        if not self.exists():
            raise FileNotFoundError(f"Backup directory not found: {self.backup_root}")
        return walk_files(self.backup_root, skip_dirs=frozenset(), skip_files=frozenset())
    
    def __repr__(self) -> str:
        return f"BackupManager(root={self.root!r}, backup_root={self.backup_root!r})"

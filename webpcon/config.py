import os
import logging
from types import MappingProxyType
from typing import Optional

TOOL_NAME = "webpcon"

# Layout inside the project being converted
BACKUP_DIR_NAME = f".{TOOL_NAME}_backup"
CACHE_DIR_NAME = f".{TOOL_NAME}_cache"

# Extension -> Pillow format used to pick the decoder
DECODER_FORMATS = MappingProxyType({
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
    ".bmp": "BMP",
    ".gif": "GIF",  # first frame only unless the animated pipeline is enabled
    ".tiff": "TIFF",
})

IMAGE_EXTENSIONS = frozenset(DECODER_FORMATS)

SKIP_DIRS = frozenset({
    ".git",
    BACKUP_DIR_NAME,
    CACHE_DIR_NAME,
    "node_modules",
    "dist",
})

SKIP_FILES = frozenset({
    "favicon.ico",
    "icon-192x192.png",
    "icon-512x512.png",
    "logo-icon-192x192.png",
    "logo-icon-512x512.png",
    "icon-template.svg",
})

PROJECT_MARKERS = ("package.json", "vite.config.ts", "index.html")
MAX_PATH_DEPTH = 10

STATIC_QUALITY = 80
FRAME_QUALITY = 60

# GIF delays are centiseconds, WebP durations are milliseconds
DELAY_SCALE = 10
BACKGROUND_SENTINEL = (255, 255, 255, 255)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_log_level() -> int:
    """
    Log level from WEBPCON_LOG_LEVEL, falling back to INFO for unknown names
    """
    name = os.getenv("WEBPCON_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_log_file() -> Optional[str]:
    """Optional log file path from WEBPCON_LOG_FILE"""
    return os.getenv("WEBPCON_LOG_FILE") or None

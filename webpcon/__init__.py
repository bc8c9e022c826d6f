"""
webpcon: convert project images to WebP with reversible backups
"""

__version__ = "0.1.0"

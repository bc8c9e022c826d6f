#!/usr/bin/env python3
"""
Show which images of a project are currently converted, restored or orphaned
"""

import sys
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from webpcon.config import get_log_level
from webpcon.status import backup_status, summarize

STATE_MARKERS = {
    "converted": "✅",
    "restored": "↩️ ",
    "missing_output": "⚠️ ",
}


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("Usage:")
        print("  check_status.py <project-path>")
        return 0

    logging.basicConfig(level=get_log_level())

    root = args[0]
    entries = backup_status(root)
    if not entries:
        print("No backups found")
        return 0

    print(f"Found {len(entries)} backed-up images:")
    print("-" * 50)
    for entry in entries:
        print(f"{STATE_MARKERS[entry.state]} {entry.rel_path} ({entry.state})")
    print("-" * 50)

    summary = summarize(entries)
    print(f"Converted: {summary['converted']}")
    print(f"Restored: {summary['restored']}")
    print(f"Missing output: {summary['missing_output']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

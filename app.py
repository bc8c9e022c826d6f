#!/usr/bin/env python3
"""
webpcon command line entry point

    webpcon <project-path>            convert images to WebP
    webpcon <project-path> revert     restore the original images
    --enable-gif / --gif              (anywhere) animated GIF -> animated WebP
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from webpcon.config import LOG_FORMAT, TOOL_NAME, get_log_file, get_log_level
from webpcon.converter import convert_images
from webpcon.revert import revert_images
from webpcon.safety import is_safe_path

logger = logging.getLogger(__name__)


def setup_logging():
    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = get_log_file()
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=get_log_level(), format=LOG_FORMAT, handlers=handlers)


def print_usage():
    print("Usage:")
    print(f"  {TOOL_NAME} <project-path>\t\t# Convert to WebP")
    print(f"  {TOOL_NAME} <project-path> revert\t# Revert to original")
    print(f"  {TOOL_NAME} <project-path> --enable-gif\t# Keep GIF animations (experimental)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=TOOL_NAME, description="Convert project images to WebP and back")
    parser.add_argument("path", nargs="?", help="Project directory")
    parser.add_argument("mode", nargs="?", choices=["revert"], help='"revert" restores the originals')
    parser.add_argument(
        "--enable-gif", "--gif",
        dest="enable_gif",
        action="store_true",
        help="Convert multi-frame GIFs to animated WebP (experimental)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """主函数"""
    args = build_parser().parse_intermixed_args(argv)

    if not args.path:
        print_usage()
        return 0

    setup_logging()

    if not is_safe_path(args.path):
        print("⚠️  Path is too broad or suspicious. Operation cancelled.")
        return 0

    try:
        if args.mode == "revert":
            restored, failed = revert_images(args.path)
            logger.info(f"Revert finished: {restored} restored, {failed} failed")
            print(f"✅ Revert finished: {restored} restored, {failed} failed")
        else:
            converted, failed = convert_images(args.path, enable_gif=args.enable_gif)
            logger.info(f"Conversion finished: {converted} converted, {failed} failed")
            print(f"✅ Conversion finished: {converted} converted, {failed} failed")
    except Exception as e:
        logger.error(f"{TOOL_NAME} failed: {str(e)}")
        print(f"❌ {TOOL_NAME} failed: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

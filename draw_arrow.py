#!/usr/bin/env python
"""
Simple CLI for rendering curved arrow connectors
Usage: python draw_arrow.py {init,render,list} ...
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional

from curved_arrow.cli import (
    setup_argument_parser,
    run_init_command,
    run_render_command,
    print_catalog
)


def setup_logging(log_file: Optional[Path] = None, log_level: str = 'INFO') -> None:
    """
    Configure logging to the console and optionally to a file

    Args:
        log_file: Path to log file (None for console only)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    formatter = logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, log_level.upper()))
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger('curved_arrow').setLevel(logging.DEBUG)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the curved_arrow CLI"""
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    if args.command == 'init':
        return run_init_command(force=args.force, path=args.path)

    if args.command == 'list':
        print_catalog(args.catalog)
        return 0

    # render
    if not Path(args.scene_file).exists():
        print(f"Scene file not found: {args.scene_file}")
        print("Usage: python draw_arrow.py render SCENE_FILE [--format svg|json]")
        return 1

    setup_logging(Path(args.log_file) if args.log_file else None, log_level=args.log_level)
    logger = logging.getLogger(__name__)
    logger.debug(f"Rendering scene: {args.scene_file}")

    return run_render_command(args.scene_file, output=args.output, output_format=args.format)


if __name__ == '__main__':
    sys.exit(main())

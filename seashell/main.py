#!/usr/bin/env python3
"""
SeaShell - A small interactive command interpreter

This is the main entry point for SeaShell.

Features:
- Commands resolved on PATH and run in child processes
- Input and output redirection (<, >, >>)
- A two-stage pipeline (|)
- Background execution (&)
- Built-in exit and cd

Author: SeaShell Project
Version: 1.0.0
"""

import argparse
import sys
from typing import List, Optional

from seashell import __version__
from seashell.core.config_loader import ConfigLoader
from seashell.exceptions import ConfigException
from seashell.logger import Logger, LogLevel
from seashell.shell.shell import Shell


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='seashell',
        description='A small interactive command interpreter.'
    )
    parser.add_argument(
        '--config',
        metavar='PATH',
        help='JSON configuration file'
    )
    parser.add_argument(
        '--log-level',
        metavar='LEVEL',
        help='override logging.level (DEBUG, INFO, WARNING, ERROR, CRITICAL)'
    )
    parser.add_argument(
        '--no-banner',
        action='store_true',
        help='do not print the welcome banner'
    )
    parser.add_argument(
        '-c',
        dest='command',
        metavar='COMMAND',
        help='run a single command line and exit with its status'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for SeaShell.

    Startup sequence:
    1. Load configuration
    2. Initialize logging
    3. Run one command (-c) or the interactive loop
    """
    args = build_arg_parser().parse_args(argv)

    loader = ConfigLoader()
    try:
        if args.config:
            loader.load(args.config)
        if args.log_level:
            loader.set('logging.level', args.log_level)
        if args.no_banner:
            loader.set('shell.show_banner', False)
    except ConfigException as e:
        print(f"seashell: {e}", file=sys.stderr)
        return 2

    config = loader.config

    Logger.initialize(
        level=LogLevel.from_name(config.logging.level),
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors,
        console_output=config.logging.console_output,
    )

    shell = Shell(config)

    if args.command is not None:
        return shell.execute_line(args.command)

    try:
        return shell.run()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())

# provisioner/cli_handler.py
# -*- coding: utf-8 -*-
"""
Handles Command Line Interface (CLI) interactions for the provisioner.
"""

import argparse
from typing import List, Optional

from .config_loader import CONFIG_FILE_DEFAULT
from .engine.errors import ModeSelectionError

MODE_COLLECT = "collect"
MODE_INSTALL = "install"
MODE_REQUIRED_MESSAGE = "Specify either the -Install or -Collect parameter."

USAGE_TEXT = """\
Usage: provision.py (-Collect | -Install) [-Quiet]

Copies the test tool reference assemblies, build extensions and the
registration utility from a development machine to a build machine.

  -Collect   Run on a machine with the tools installed. Copies every
             required file into the staging directory (Files/ next to
             this script).
  -Install   Run on the build machine with the staging directory from a
             previous -Collect. Copies the files into place, publishes the
             reference assembly directory and registers assemblies in the
             component store. Requires administrator rights.
  -Quiet     Only report warnings and errors.

Additional options:
  --config FILE       YAML configuration file (default: provision.yaml).
  --staging-dir DIR   Use DIR instead of the default staging directory.
  --log-file FILE     Also write a JSON-lines log to FILE.
  -v, --verbose       Show debug output.
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser. Help is printed from USAGE_TEXT instead of argparse."""
    parser = argparse.ArgumentParser(
        prog="provision.py",
        usage=USAGE_TEXT,
        add_help=False,
    )
    parser.add_argument("-Collect", "--collect", action="store_true", dest="collect")
    parser.add_argument("-Install", "--install", action="store_true", dest="install")
    parser.add_argument("-Quiet", "--quiet", action="store_true", dest="quiet")
    parser.add_argument("-h", "-Help", "--help", action="store_true", dest="help")
    parser.add_argument("--config", default=CONFIG_FILE_DEFAULT)
    parser.add_argument("--staging-dir", dest="staging_dir")
    parser.add_argument("--log-file", dest="log_file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.

    Returns:
        Parsed arguments.
    """
    return build_parser().parse_args(args)


def select_mode(collect: bool, install: bool, quiet: bool) -> Optional[str]:
    """
    Decide which mode to run from the three switches.

    Args:
        collect: -Collect was given.
        install: -Install was given.
        quiet: -Quiet was given.

    Returns:
        MODE_COLLECT or MODE_INSTALL, or None when usage should be printed.

    Raises:
        ModeSelectionError: If no single mode was chosen in quiet mode,
            where usage text cannot be shown.
    """
    if collect != install:
        return MODE_COLLECT if collect else MODE_INSTALL
    if quiet:
        raise ModeSelectionError(MODE_REQUIRED_MESSAGE)
    return None


def print_usage() -> None:
    print(USAGE_TEXT)

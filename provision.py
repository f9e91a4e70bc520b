#!/usr/bin/env python3
"""
Entry point for the build host provisioner.

    provision.py -Collect    gather files on a development machine
    provision.py -Install    install gathered files on a build machine
"""

import sys
from typing import List, Optional

from common.logging_config import setup_logging
from provisioner.cli_handler import (
    MODE_COLLECT,
    parse_args,
    print_usage,
    select_mode,
)
from provisioner.config_loader import load_app_settings
from provisioner.engine.errors import ProvisioningError
from provisioner.modes import run_collect, run_install


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the provisioner.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parsed_args = parse_args(args)

    logger = setup_logging(
        "provisioner",
        verbose=parsed_args.verbose,
        quiet=parsed_args.quiet,
        log_file_path=parsed_args.log_file,
    )

    if parsed_args.help:
        print_usage()
        return 0

    try:
        mode = select_mode(
            parsed_args.collect, parsed_args.install, parsed_args.quiet
        )
        if mode is None:
            print_usage()
            return 0

        app_settings = load_app_settings(
            cli_args=parsed_args,
            config_file_path=parsed_args.config,
            current_logger=logger,
        )

        if mode == MODE_COLLECT:
            run_collect(app_settings, logger)
        else:
            run_install(app_settings, logger)
        return 0

    except ProvisioningError as e:
        logger.critical(f"🔥 {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing external tools and logging their output.
"""

import logging
import subprocess
from typing import Dict, List, Optional, Union

from provisioner.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def log_message(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Write one provisioning trace line.

    `level` is a logging level name; unknown names, including "success",
    are logged at INFO.
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Returns the log symbols from the settings, or the defaults."""
    if app_settings and app_settings.symbols:
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def run_command(
    command: Union[List[str], str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    text: bool = True,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Run an external tool such as `reg` or the registration utility.

    The command line is logged at DEBUG before it runs. Captured stdout is
    logged at DEBUG on success; on failure the return code, stdout and
    stderr are logged as errors and the exception is re-raised.

    Args:
        command: Argument list. A string is accepted but split on whitespace,
            so paths containing spaces must be passed as a list.
        app_settings: Settings providing log symbols.
        check: Raise CalledProcessError on a non-zero exit code.
        capture_output: Capture stdout and stderr.
        text: Decode the captured streams as text.
        current_logger: Logger to use instead of the module logger.
        cwd: Working directory for the tool.

    Raises:
        subprocess.CalledProcessError: Non-zero exit and `check` is True.
        FileNotFoundError: The executable does not exist.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if isinstance(command, str):
        log_message(
            f"{symbols.get('warning', '!')} Running string command '{command}'. Consider list format.",
            "warning",
            effective_logger,
            app_settings,
        )
        command_to_run = command.split()
        command_to_log_str = command
    else:
        command_to_run = list(command)
        command_to_log_str = subprocess.list2cmdline(command_to_run)

    log_message(
        f"{symbols.get('gear', '⚙️')} Executing: {command_to_log_str} {f'(in {cwd})' if cwd else ''}",
        "debug",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            capture_output=capture_output,
            text=text,
            cwd=cwd,
        )
        if capture_output and result.stdout and result.stdout.strip():
            log_message(
                f"   stdout: {result.stdout.strip()}",
                "debug",
                effective_logger,
                app_settings,
            )
        return result
    except subprocess.CalledProcessError as e:
        cmd_executed_str = (
            subprocess.list2cmdline(e.cmd)
            if isinstance(e.cmd, list)
            else str(e.cmd)
        )
        log_message(
            f"{symbols.get('error', '❌')} Command `{cmd_executed_str}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        if e.stdout and hasattr(e.stdout, "strip") and e.stdout.strip():
            log_message(
                f"   stdout: {e.stdout.strip()}",
                "error",
                effective_logger,
                app_settings,
            )
        if e.stderr and hasattr(e.stderr, "strip") and e.stderr.strip():
            log_message(
                f"   stderr: {e.stderr.strip()}",
                "error",
                effective_logger,
                app_settings,
            )
        raise
    except FileNotFoundError as e:
        log_message(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise

# common/orchestrator.py
# -*- coding: utf-8 -*-
"""
Runs a provisioning mode as an ordered list of named steps.

Steps share a `context` dictionary. The first step that raises ends the
process with exit status 1; files already copied or registered by earlier
steps stay in place.
"""

import logging
import sys
from typing import Any, Callable, Dict, List, NamedTuple, NoReturn, Optional

from provisioner.engine.errors import ProvisioningError


class Task(NamedTuple):
    name: str
    func: Callable[..., Any]
    args: List[Any]
    kwargs: Dict[str, Any]


class Orchestrator:
    """Sequential step runner for the collect and install modes."""

    def __init__(
        self,
        app_settings: Any,
        orchestrator_logger: Optional[logging.Logger] = None,
    ):
        self.app_settings = app_settings
        self.logger = orchestrator_logger or logging.getLogger(__name__)
        self.tasks: List[Task] = []
        self.context: Dict[str, Any] = {}

    def add_task(
        self,
        name: str,
        func: Callable[..., Any],
        args: Optional[List[Any]] = None,
        kwargs: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Queue a step.

        Args:
            name: Label used in progress and failure messages.
            func: Called as `func(*args, **kwargs, context=..., app_settings=...)`.
            args: Positional arguments for `func`.
            kwargs: Keyword arguments for `func`.
        """
        self.tasks.append(Task(name, func, list(args or []), dict(kwargs or {})))
        self.logger.debug(f"Queued step '{name}'.")

    def run(self) -> bool:
        """
        Run every queued step in order.

        Each step's return value is stored in `context["<name>_result"]`.

        Returns:
            True once the last step has completed.
        """
        total = len(self.tasks)
        self.logger.info(f"Running {total} provisioning steps.")
        for position, task in enumerate(self.tasks, start=1):
            self.logger.info(f"--- Step {position}/{total}: {task.name} ---")
            try:
                result = task.func(
                    *task.args,
                    **task.kwargs,
                    context=self.context,
                    app_settings=self.app_settings,
                )
            except ProvisioningError as e:
                self.logger.critical(f"🔥 Step '{task.name}' failed: {e}")
                self._halt()
            except Exception as e:
                self.logger.critical(
                    f"🔥 Step '{task.name}' failed unexpectedly: {e}", exc_info=True
                )
                self._halt()

            self.context[f"{task.name}_result"] = result
            self.logger.info(f"✅ {task.name} done.")

        self.logger.info("✨ All provisioning steps completed.")
        return True

    def _halt(self) -> NoReturn:
        self.logger.error("Provisioning stopped. Later steps were not run.")
        sys.exit(1)

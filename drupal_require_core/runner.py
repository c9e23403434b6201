"""Sequential, fail-fast execution of a command plan."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable

from .plan import CommandPlan, CommandStep, PlanCommand

logger = logging.getLogger(__name__)

# Exit statuses a shell reports for commands it can't start
SYNTAX_ERROR = 2
COMMAND_NOT_EXECUTABLE = 126
COMMAND_NOT_FOUND = 127


@dataclass
class RunResult:
    """Result of running a command plan."""
    success: bool
    completed: list[PlanCommand] = field(default_factory=list)
    failed_command: PlanCommand | None = None
    returncode: int = 0
    start_time: datetime = field(default_factory=datetime.now)
    end_time: datetime | None = None

    @property
    def duration(self) -> float:
        """Return duration in seconds."""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0


# Called with each command just before it starts
CommandCallback = Callable[[PlanCommand], None]


class PlanRunner:
    """Runs plan commands one at a time inside a project directory."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir

    async def run(
        self,
        plan: CommandPlan,
        callback: CommandCallback | None = None,
    ) -> RunResult:
        """
        Run every command in order, stopping at the first failure.

        Args:
            plan: Commands to execute
            callback: Optional hook invoked before each command starts

        Returns:
            RunResult describing how far the plan got
        """
        result = RunResult(success=False)

        for command in plan:
            if callback:
                callback(command)

            returncode = await self._run_command(command)
            if returncode != 0:
                logger.error(
                    "%s failed with status %d: %s", command.label, returncode, command
                )
                result.failed_command = command
                result.returncode = returncode
                result.end_time = datetime.now()
                return result

            result.completed.append(command)

        result.success = True
        result.end_time = datetime.now()
        logger.info("All %d commands completed in %.1fs", len(result.completed), result.duration)
        return result

    async def _run_command(self, command: PlanCommand) -> int:
        """Run each step of a command; a failing step skips the rest."""
        for step in command.steps:
            returncode = await self._run_step(step)
            if returncode != 0:
                return returncode
        return 0

    async def _run_step(self, step: CommandStep) -> int:
        """Run one step with the terminal attached and return its exit status.

        Steps that can't be started get the status a shell would report.
        """
        try:
            argv = step.argv
        except ValueError as e:
            logger.error("Cannot parse command prefix %r: %s", step.prefix, e)
            return SYNTAX_ERROR

        logger.debug("Executing %s in %s", argv, self.project_dir)

        try:
            # stdio is inherited so Composer and Drush can still prompt
            process = await asyncio.create_subprocess_exec(
                *argv,
                cwd=self.project_dir,
            )
        except FileNotFoundError:
            logger.error("Executable not found: %s", argv[0])
            return COMMAND_NOT_FOUND
        except OSError as e:
            logger.error("Cannot execute %s: %s", argv[0], e)
            return COMMAND_NOT_EXECUTABLE

        returncode = await process.wait()
        logger.debug("Exit status %d for %s", returncode, argv)
        return returncode

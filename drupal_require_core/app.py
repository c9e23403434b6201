"""CLI workflow for updating drupal/core-* requirements using Rich."""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from .manifest import (
    CORE_PREFIX,
    MANIFEST_NAME,
    CoreDependencies,
    ManifestError,
    find_core_dependencies,
    load_manifest,
)
from .plan import CommandPlan, PlanCommand, build_plan
from .runner import PlanRunner
from .utils.logging import setup_logging

USAGE = (
    "Usage: drupal-require-core <drupal-core-version> [<project-directory>] [<command-prefix>]",
    "If <project-directory> is not provided, the current directory is assumed.",
    "If <command-prefix> is not provided, commands will run directly.",
)

CONFIRM_PROMPT = "Do you want to run these commands now? (y/N): "


class DrupalRequireCoreCLI:
    """Previews and applies a drupal/core-* version bump for one project."""

    def __init__(
        self,
        version: str | None,
        project_dir: Path | str | None = None,
        prefix: str = "",
        verbose: bool = False,
        dry_run: bool = False,
        assume_yes: bool = False,
        console: Console | None = None,
    ) -> None:
        self.version = version
        self.project_dir = Path(project_dir) if project_dir else Path.cwd()
        self.prefix = prefix or ""
        self.verbose = verbose
        self.dry_run = dry_run
        self.assume_yes = assume_yes
        self.console = console or Console()
        self._logger = setup_logging(self.project_dir, version, verbose)

    def run(self) -> int:
        """Run the update workflow and return the process exit code."""
        try:
            return self._run()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Interrupted[/]")
            return 130

    def _run(self) -> int:
        if not self.version:
            self._print_usage()
            return 1

        if not self.project_dir.is_dir():
            self._print_error(f"Directory {self.project_dir} does not exist.")
            return 1

        self._logger.info("Project directory: %s", self.project_dir)

        try:
            manifest = load_manifest(self.project_dir)
            dependencies = find_core_dependencies(manifest, self.version)
        except ManifestError as e:
            self._logger.error("%s", e)
            self._print_error(str(e))
            return 1

        if dependencies.is_empty:
            self._logger.warning("No %s* entries in %s", CORE_PREFIX, self.project_dir)
            self._print_plain(f"No {CORE_PREFIX}* dependencies found in {MANIFEST_NAME}")
            return 1

        self._print_dependencies(dependencies)

        plan = build_plan(dependencies, self.prefix)
        for line in plan.lines():
            self._logger.debug("Planned: %s", line)
        self._print_plan(plan)

        if self.dry_run:
            self._logger.info("Dry run, nothing executed")
            return 0

        if not self._confirm():
            self._logger.info("Run declined by operator")
            self._print_plain("You can copy and run the commands manually if needed.")
            return 0

        return self._execute(plan, dependencies.constraint)

    def _print_usage(self) -> None:
        for line in USAGE:
            self._print_plain(line)

    def _print_error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/] {escape(message)}", highlight=False, soft_wrap=True)

    def _print_plain(self, text: str = "") -> None:
        """Print text literally, without Rich markup or wrapping."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def _print_dependencies(self, dependencies: CoreDependencies) -> None:
        """Print the matched entries for both sections."""
        self._print_plain(
            f"The following dependencies will be updated to {dependencies.constraint}:"
        )
        self._print_plain()
        self.console.print("[bold]Normal dependencies:[/]")
        for entry in dependencies.require:
            self._print_plain(str(entry))
        self._print_plain()
        self.console.print("[bold]Dev dependencies:[/]")
        for entry in dependencies.require_dev:
            self._print_plain(str(entry))
        self._print_plain()

    def _print_plan(self, plan: CommandPlan) -> None:
        self._print_plain("The following inline commands will be executed:")
        self._print_plain()
        for line in plan.lines():
            self._print_plain(line)
        self._print_plain()

    def _confirm(self) -> bool:
        """Ask the operator to go ahead; only "y" or "Y" counts as yes."""
        if self.assume_yes:
            self._logger.info("Confirmation skipped (--yes)")
            return True

        try:
            answer = self.console.input(CONFIRM_PROMPT, markup=False)
        except EOFError:
            self._print_plain()
            return False

        return answer.strip().lower() == "y"

    def _on_command_start(self, command: PlanCommand) -> None:
        self._logger.info("Running %s: %s", command.label, command)
        self._print_plain(f"Running: {command}")

    def _execute(self, plan: CommandPlan, constraint: str) -> int:
        """Run the plan and report the first failure, if any."""
        runner = PlanRunner(self.project_dir)
        result = asyncio.run(runner.run(plan, callback=self._on_command_start))

        if not result.success:
            self._print_plain(f"Command failed: {result.failed_command}")
            return 1

        self.console.print(
            f"[green]✓[/] Drupal core packages now require [bold]{constraint}[/]",
            highlight=False,
        )
        return 0

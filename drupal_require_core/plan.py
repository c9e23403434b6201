"""The fixed Composer/Drush command plan."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Iterator

from .manifest import CoreDependencies, MatchedEntry

UPDATE_FLAG = "--update-with-all-dependencies"


@dataclass(frozen=True)
class CommandStep:
    """A single external tool invocation, optionally wrapped by a prefix."""
    args: tuple[str, ...]
    prefix: str = ""

    @property
    def argv(self) -> list[str]:
        """Argument vector with the prefix split the way a shell would."""
        return [*shlex.split(self.prefix), *self.args]

    def __str__(self) -> str:
        command = " ".join(self.args)
        if self.prefix:
            return f"{self.prefix} {command}"
        return command


@dataclass(frozen=True)
class PlanCommand:
    """One plan entry: steps run in order, each only if the previous succeeded."""
    label: str
    steps: tuple[CommandStep, ...]

    def __str__(self) -> str:
        return " && ".join(str(step) for step in self.steps)


@dataclass(frozen=True)
class CommandPlan:
    """The four commands applying a core update, in execution order."""
    commands: tuple[PlanCommand, ...]

    def __iter__(self) -> Iterator[PlanCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def lines(self) -> list[str]:
        """Return each command as it would be typed into a shell."""
        return [str(command) for command in self.commands]


def _require_args(entries: list[MatchedEntry], dev: bool = False) -> tuple[str, ...]:
    args = ["composer", "require"]
    if dev:
        args.append("--dev")
    args.extend(str(entry) for entry in entries)
    args.append(UPDATE_FLAG)
    return tuple(args)


def build_plan(dependencies: CoreDependencies, prefix: str = "") -> CommandPlan:
    """
    Build the command plan for a set of matched dependencies.

    Args:
        dependencies: Matched drupal/core-* entries
        prefix: Optional wrapper command such as "lando" or "ddev"

    Returns:
        The four-command plan

    Raises:
        ValueError: If no dependencies matched
    """
    if dependencies.is_empty:
        raise ValueError("Cannot build a plan without drupal/core-* dependencies")

    def step(*args: str) -> CommandStep:
        return CommandStep(args=args, prefix=prefix)

    return CommandPlan(commands=(
        PlanCommand(
            label="Refresh Composer install",
            steps=(step("composer", "clear-cache"), step("composer", "install")),
        ),
        PlanCommand(
            label="Require core packages",
            steps=(CommandStep(_require_args(dependencies.require), prefix),),
        ),
        PlanCommand(
            label="Require core dev packages",
            steps=(CommandStep(_require_args(dependencies.require_dev, dev=True), prefix),),
        ),
        PlanCommand(
            label="Update database and export config",
            steps=(
                step("drush", "updb"),
                step("drush", "cr"),
                step("drush", "cex", "-y"),
            ),
        ),
    ))

"""
Output reporting module.

Provides formatted console output with configurable verbosity.
"""

import sys
from typing import List
from enum import Enum

from .builder import StageResult, StageStatus


class OutputLevel(Enum):
    """Output verbosity levels."""
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2


class Reporter:
    """
    Handles formatted output for kmodsetup operations.

    Build tool output is not routed through here; make writes straight
    to the terminal.
    """

    def __init__(self, level: OutputLevel = OutputLevel.NORMAL):
        """
        Initialize the reporter.

        Args:
            level: Output verbosity level
        """
        self.level = level

    def print_banner(self, version: str) -> None:
        """Print the program name and version."""
        if self.level == OutputLevel.QUIET:
            return

        print(f"kmodsetup v{version}")

    def print_step(self, message: str) -> None:
        """
        Print a progress message, only in verbose mode.

        Args:
            message: Message to display
        """
        if self.level != OutputLevel.VERBOSE:
            return

        print(message)

    def print_module_version(self, env_var: str, version: str) -> None:
        """
        Print the exported module version variable.

        Args:
            env_var: Name of the exported variable
            version: Its value
        """
        if self.level == OutputLevel.QUIET:
            return

        print(f"{env_var}={version}")

    def print_discovery_miss(self, package: str, env_var: str) -> None:
        """
        Warn that no module directory was found in the package listing.

        Args:
            package: Package that was queried
            env_var: Variable that is exported empty
        """
        if self.level == OutputLevel.QUIET:
            return

        print(
            f"Warning: no /usr/lib/modules/<version>/ entry found for package "
            f"'{package}', exporting empty {env_var}",
            file=sys.stderr,
        )

    def print_command(self, command: List[str], dry_run: bool = False) -> None:
        """
        Print the command that will be executed.

        Args:
            command: Command as list of arguments
            dry_run: Whether this is a dry run
        """
        if self.level == OutputLevel.QUIET:
            return

        cmd_str = " ".join(command)
        if dry_run:
            print(f"[DRY RUN] Would execute: {cmd_str}")
        else:
            print(f"Executing: {cmd_str}")

    def print_stage_result(self, result: StageResult) -> None:
        """
        Print the outcome of a clean or build stage.

        Args:
            result: Stage outcome
        """
        if self.level == OutputLevel.QUIET:
            return

        if result.status == StageStatus.SUCCESS:
            if self.level == OutputLevel.VERBOSE:
                print(f"  [ok] {result.stage}")
        elif result.status == StageStatus.FAILED:
            if result.stage == "clean":
                print(f"make clean exited with status {result.exit_code}, continuing", file=sys.stderr)
            else:
                print(f"make exited with status {result.exit_code}", file=sys.stderr)
        elif result.status == StageStatus.SKIPPED:
            if self.level == OutputLevel.VERBOSE:
                print(f"  [skipped] {result.stage}")

    def print_summary(self, exit_code: int, dry_run: bool = False) -> None:
        """
        Print final summary.

        Args:
            exit_code: Program exit code
            dry_run: Whether this was a dry run
        """
        if self.level == OutputLevel.QUIET:
            return

        print()
        if dry_run:
            print("[DRY RUN] No commands were executed.")
        elif exit_code == 0:
            print("Build completed successfully.")
        else:
            print(f"Build failed with exit code {exit_code}.")

"""
Build tool invocation module.

Provides functionality to clean and build the setup project with make.
"""

import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .utils import COMMAND_NOT_FOUND, available_jobs, shell_exit_status


MAKE_BINARY = "make"


class StageStatus(Enum):
    """Status of a build stage."""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StageResult:
    """
    Outcome of a single build tool invocation.

    Attributes:
        stage: Stage name ('clean' or 'build')
        command: Command that was (or would have been) executed
        exit_code: Exit status in shell convention, None if not executed
    """
    stage: str
    command: List[str]
    exit_code: Optional[int] = None

    @property
    def status(self) -> StageStatus:
        if self.exit_code is None:
            return StageStatus.SKIPPED
        if self.exit_code == 0:
            return StageStatus.SUCCESS
        return StageStatus.FAILED


def generate_clean_command() -> List[str]:
    """
    Generate the make command that removes build artifacts.

    Returns:
        List[str]: Command as list of arguments
    """
    return [MAKE_BINARY, "clean"]


def generate_build_command(jobs: Optional[int] = None) -> List[str]:
    """
    Generate the make command for the default target.

    Args:
        jobs: Number of parallel jobs, detected at call time if None

    Returns:
        List[str]: Command as list of arguments

    Raises:
        ValueError: If jobs is not a positive integer
    """
    if jobs is None:
        jobs = available_jobs()

    if jobs < 1:
        raise ValueError(f"Job count must be positive, got {jobs}")

    return [MAKE_BINARY, "-j", str(jobs)]


def _execute_make(cmd: List[str]) -> int:
    """
    Execute a make command with output visible to the user.

    Args:
        cmd: make command to execute

    Returns:
        int: Exit status in shell convention (127 if make is missing)
    """
    try:
        result = subprocess.run(
            cmd,
            check=False,  # Exit code is the caller's business
        )
    except FileNotFoundError:
        return COMMAND_NOT_FOUND

    return shell_exit_status(result.returncode)


def run_clean(dry_run: bool = False) -> StageResult:
    """
    Run 'make clean' in the current directory.

    The exit code is recorded but never raised on: a failed clean must
    not keep the build from running.

    Args:
        dry_run: If True, return the command without executing it

    Returns:
        StageResult: Clean stage outcome
    """
    cmd = generate_clean_command()
    if dry_run:
        return StageResult("clean", cmd)

    return StageResult("clean", cmd, _execute_make(cmd))


def run_build(jobs: Optional[int] = None, dry_run: bool = False) -> StageResult:
    """
    Run 'make -j <jobs>' in the current directory.

    Args:
        jobs: Number of parallel jobs, detected at call time if None
        dry_run: If True, return the command without executing it

    Returns:
        StageResult: Build stage outcome; its exit_code is the program's

    Raises:
        ValueError: If jobs is not a positive integer
    """
    cmd = generate_build_command(jobs)
    if dry_run:
        return StageResult("build", cmd)

    return StageResult("build", cmd, _execute_make(cmd))

"""
Utility functions.

Shared helper functions used across kmodsetup modules.
"""

import os
import subprocess
from typing import List, Tuple


# Exit status a shell reports for a command it could not find
COMMAND_NOT_FOUND = 127


def run_command(cmd: List[str]) -> Tuple[int, str, str]:
    """
    Run a command and capture output.

    Output is decoded leniently: bytes that are not valid UTF-8 become
    U+FFFD instead of raising, so one odd file name in a listing does not
    hide the lines around it.

    Args:
        cmd: Command as list of arguments

    Returns:
        Tuple[int, str, str]: (exit_code, stdout, stderr)

    Raises:
        FileNotFoundError: If the executable does not exist
    """
    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        errors="replace",
        check=False,
    )
    return result.returncode, result.stdout, result.stderr


def available_jobs() -> int:
    """
    Detect the number of processors available to this process.

    Honors the CPU affinity mask where the platform exposes one, so a
    process pinned to a subset of cores (taskset, cgroups) gets that
    subset's size rather than the machine total.

    Returns:
        int: Available processor count, at least 1
    """
    try:
        count = len(os.sched_getaffinity(0))
    except AttributeError:
        # sched_getaffinity() not available on macOS/Windows
        count = os.cpu_count() or 1

    return max(count, 1)


def shell_exit_status(returncode: int) -> int:
    """
    Map a subprocess return code onto the status a shell would report.

    subprocess reports death by signal N as -N, a shell reports 128 + N.

    Args:
        returncode: Return code from subprocess

    Returns:
        int: Exit status in the 0-255 shell convention
    """
    if returncode < 0:
        return 128 - returncode
    return returncode

"""
Module version detection.

Queries the package manager for the files owned by the kernel headers
package and extracts the installed kernel module version from them.
"""

import re
from typing import Iterable, List

from .utils import run_command


DEFAULT_PACKAGE = "linux-headers"
MODULES_PREFIX = "/usr/lib/modules/"

# Greedy prefix: a line naming the modules directory twice yields the
# segment after the last occurrence.
# Example: linux-headers /usr/lib/modules/6.6.1-arch1/build/ -> 6.6.1-arch1
_MODULE_DIR_PATTERN = re.compile(r'.*' + re.escape(MODULES_PREFIX) + r'([^/]*)/')


def query_package_files(package: str = DEFAULT_PACKAGE) -> List[str]:
    """
    List the files owned by an installed package.

    Runs 'pacman -Ql <package>', which prints one '<package> <path>' pair
    per line.

    Args:
        package: Package name to query (e.g., 'linux-headers')

    Returns:
        List[str]: Output lines, empty if the package is not installed
            or pacman is unavailable
    """
    try:
        returncode, stdout, _ = run_command(["pacman", "-Ql", package])
    except FileNotFoundError:
        # No pacman on this system, nothing to list
        return []

    if returncode != 0:
        return []

    return stdout.splitlines()


def extract_module_version(lines: Iterable[str]) -> str:
    """
    Extract the module version from package file listing lines.

    The first line containing '/usr/lib/modules/<version>/' wins; later
    matches are ignored.

    Examples:
        'linux-headers /usr/lib/modules/6.6.1-arch1/build/' -> '6.6.1-arch1'
        'linux-headers /usr/include/' -> no match

    Args:
        lines: Lines from the package file listing

    Returns:
        str: Module version, or '' if no line matches
    """
    for line in lines:
        match = _MODULE_DIR_PATTERN.match(line)
        if match:
            return match.group(1)

    return ""


def get_module_version(package: str = DEFAULT_PACKAGE) -> str:
    """
    Detect the installed kernel module version.

    Args:
        package: Package whose files are searched

    Returns:
        str: Module version (e.g., '6.6.1-arch1'), or '' if not found
    """
    return extract_module_version(query_package_files(package))

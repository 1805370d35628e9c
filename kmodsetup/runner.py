"""
Setup runner module.

Runs the setup stages in order: discover the module version, publish it
to the environment, enter the build directory, then clean and build.
"""

import os
from dataclasses import dataclass
from typing import MutableMapping, Optional

from .builder import (
    StageResult,
    generate_build_command,
    generate_clean_command,
    run_build,
    run_clean,
)
from .detector import DEFAULT_PACKAGE, get_module_version
from .reporter import OutputLevel, Reporter
from .utils import available_jobs


DEFAULT_DIRECTORY = "/setup"
DEFAULT_ENV_VAR = "LINUX_MODULES"


@dataclass
class SetupConfig:
    """
    Parameters of a setup run.

    Attributes:
        package: Package whose file list names the module directory
        directory: Directory holding the Makefile
        env_var: Environment variable receiving the module version
        jobs: Parallel make jobs, detected at build time if None
        dry_run: Print the make commands instead of running them
    """
    package: str = DEFAULT_PACKAGE
    directory: str = DEFAULT_DIRECTORY
    env_var: str = DEFAULT_ENV_VAR
    jobs: Optional[int] = None
    dry_run: bool = False


@dataclass
class SetupResult:
    """
    Result of a setup run.

    Attributes:
        module_version: Discovered module version ('' on a miss)
        clean: Clean stage outcome
        build: Build stage outcome
        exit_code: Program exit code
    """
    module_version: str
    clean: StageResult
    build: StageResult
    exit_code: int


def publish_module_version(
    env_var: str,
    version: str,
    env: Optional[MutableMapping[str, str]] = None,
) -> None:
    """
    Export the module version so child processes inherit it.

    An empty version is exported as an empty variable.

    Args:
        env_var: Variable name (e.g., 'LINUX_MODULES')
        version: Module version
        env: Environment to update, os.environ if None
    """
    if env is None:
        env = os.environ
    env[env_var] = version


def change_directory(directory: str) -> None:
    """
    Make the build directory the current working directory.

    Args:
        directory: Directory to enter

    Raises:
        RuntimeError: If the directory does not exist or is not accessible
    """
    try:
        os.chdir(directory)
    except OSError as e:
        raise RuntimeError(f"Cannot change to build directory {directory}: {e.strerror or e}")


def check_directory(directory: str) -> None:
    """
    Verify the build directory exists without entering it.

    Raises:
        RuntimeError: If the directory does not exist
    """
    if not os.path.isdir(directory):
        raise RuntimeError(f"Build directory {directory} does not exist")


def run_setup(config: SetupConfig, reporter: Optional[Reporter] = None) -> SetupResult:
    """
    Run the setup stages.

    A clean failure never stops the build; the build's exit code becomes
    the result's exit code. In dry-run mode the directory is checked but
    not entered and make is not invoked.

    Args:
        config: Run parameters
        reporter: Output handler, silent if None

    Returns:
        SetupResult: Outcome of every stage

    Raises:
        RuntimeError: If the build directory cannot be entered
        ValueError: If config.jobs is not a positive integer
    """
    if reporter is None:
        reporter = Reporter(OutputLevel.QUIET)

    if config.jobs is not None and config.jobs < 1:
        raise ValueError(f"Job count must be positive, got {config.jobs}")

    # Step 1: Discover
    reporter.print_step(f"Querying files of package {config.package}...")
    module_version = get_module_version(config.package)

    # Step 2: Publish
    publish_module_version(config.env_var, module_version)
    if not module_version:
        reporter.print_discovery_miss(config.package, config.env_var)
    reporter.print_module_version(config.env_var, module_version)

    # Step 3: Chdir
    if config.dry_run:
        check_directory(config.directory)
    else:
        reporter.print_step(f"Entering directory {config.directory}")
        change_directory(config.directory)

    # Step 4: Clean, exit code ignored
    reporter.print_command(generate_clean_command(), dry_run=config.dry_run)
    clean = run_clean(dry_run=config.dry_run)
    reporter.print_stage_result(clean)

    # Step 5: Build
    jobs = config.jobs if config.jobs is not None else available_jobs()
    reporter.print_command(generate_build_command(jobs), dry_run=config.dry_run)
    build = run_build(jobs=jobs, dry_run=config.dry_run)
    reporter.print_stage_result(build)

    exit_code = 0 if config.dry_run else build.exit_code
    reporter.print_summary(exit_code, dry_run=config.dry_run)

    return SetupResult(
        module_version=module_version,
        clean=clean,
        build=build,
        exit_code=exit_code,
    )

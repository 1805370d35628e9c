"""
Command-line interface for kmodsetup.

Provides argument parsing and runs the setup workflow.
"""

import sys
import argparse
from typing import Optional

from . import __version__
from .detector import DEFAULT_PACKAGE
from .runner import DEFAULT_DIRECTORY, DEFAULT_ENV_VAR, SetupConfig, run_setup
from .reporter import Reporter, OutputLevel


def _positive_int(value: str) -> int:
    """Argument type for a strictly positive integer."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid job count: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"job count must be at least 1, got {number}")
    return number


def _env_var_name(value: str) -> str:
    """Argument type for a name os.environ accepts."""
    if not value or "=" in value or "\0" in value:
        raise argparse.ArgumentTypeError(f"invalid environment variable name: {value!r}")
    return value


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="kmodsetup",
        description="Export the installed kernel module version and build the setup project",
        epilog="Example: kmodsetup --dry-run  # See what would be run",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--package",
        default=DEFAULT_PACKAGE,
        help=f"Package whose file list names the module directory (default: {DEFAULT_PACKAGE})",
    )

    parser.add_argument(
        "-C", "--directory",
        default=DEFAULT_DIRECTORY,
        help=f"Directory containing the Makefile (default: {DEFAULT_DIRECTORY})",
    )

    parser.add_argument(
        "--env-var",
        type=_env_var_name,
        default=DEFAULT_ENV_VAR,
        help=f"Environment variable receiving the module version (default: {DEFAULT_ENV_VAR})",
    )

    parser.add_argument(
        "-j", "--jobs",
        type=_positive_int,
        default=None,
        help="Parallel make jobs (default: number of available processors)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be run without changing directory or invoking make",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )

    return parser


def _setup_reporter(args) -> Reporter:
    """
    Set up reporter based on command-line arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        Reporter: Configured reporter instance
    """
    if args.quiet:
        output_level = OutputLevel.QUIET
    elif args.verbose:
        output_level = OutputLevel.VERBOSE
    else:
        output_level = OutputLevel.NORMAL

    return Reporter(output_level)


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI.

    Runs with the built-in defaults when given no arguments.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        int: Exit code:
            make's exit status after a full run
            0 = dry run completed
            1 = aborted before the build (e.g., missing build directory)
            2 = invalid command-line usage
    """
    parser = create_parser()

    if argv is None:
        argv = sys.argv[1:]

    args = parser.parse_args(argv)

    if args.quiet and args.verbose:
        parser.error("--quiet and --verbose cannot be used together")

    config = SetupConfig(
        package=args.package,
        directory=args.directory,
        env_var=args.env_var,
        jobs=args.jobs,
        dry_run=args.dry_run,
    )

    try:
        reporter = _setup_reporter(args)
        reporter.print_banner(__version__)

        result = run_setup(config, reporter)
        return result.exit_code

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())

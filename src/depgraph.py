"""depgraph - Extract flattened dependency graphs from Pipenv projects.

    Returns:
        int: Exit code
"""
import logging
import os
import sys

from args import parse_args
from buildtools import pipenv
from cli_config import ConfigError, apply_cli_overrides, apply_config, load_config
from common.errors import DecodeError, ExecutionError
from common.logging_utils import (
    add_file_handler,
    configure_logging,
    extra_context,
    is_debug_enabled,
    set_console_level,
)
from constants import ExitCodes
from graph.export import export_csv, export_json, to_json

logger = logging.getLogger(__name__)


def _output_format(args):
    """Pick the export format from --format, then the output extension."""
    if getattr(args, "OUTPUT_FORMAT", None):
        return args.OUTPUT_FORMAT
    output = getattr(args, "OUTPUT", None)
    if output and output.lower().endswith(".csv"):
        return "csv"
    return "json"


def collect_projects(directories, recursive=False):
    """Expand the requested directories into Pipenv project directories.

    Non-recursive scans keep the given directory even without a Pipfile so
    that pipenv reports the problem itself.
    """
    projects = []
    for dir_name in directories:
        if not recursive:
            if not os.path.isdir(dir_name):
                raise FileNotFoundError(f"Directory not found: {dir_name}")
            projects.append(dir_name)
            continue
        found = pipenv.find_pipenv_projects(dir_name, recursive=True)
        if not found:
            logger.warning("No Pipenv projects found under %s", dir_name)
        projects.extend(found)
    return projects


def extract_graphs(projects):
    """Run the pipenv strategy for every project.

    Returns:
        list: (directory, DependencyGraph) pairs in project order.

    Raises:
        ExecutionError: If pipenv cannot produce a report.
        DecodeError: If a report cannot be decoded.
    """
    results = []
    for dir_name in projects:
        dep_graph = pipenv.new(dir_name).deps()
        logger.info(
            "%s: %d direct, %d total packages",
            dir_name, len(dep_graph.direct), len(dep_graph.transitive),
        )
        results.append((dir_name, dep_graph))
    return results


def write_output(args, results):
    """Write results to --output, or JSON to stdout."""
    direct_only = bool(getattr(args, "DIRECT_ONLY", False))
    output = getattr(args, "OUTPUT", None)
    if not output:
        sys.stdout.write(to_json(results, direct_only) + "\n")
        return
    if _output_format(args) == "csv":
        export_csv(results, output, direct_only)
    else:
        export_json(results, output, direct_only)


def _setup_logging(args):
    configure_logging(getattr(args, "LOG_LEVEL", None))
    if getattr(args, "QUIET", False):
        set_console_level(logging.ERROR)
    if getattr(args, "LOG_FILE", None):
        add_file_handler(args.LOG_FILE)
        logger.info("Logging to file: %s", args.LOG_FILE)


def run(argv=None):
    """Run the CLI and return its exit code."""
    args = parse_args(argv)
    _setup_logging(args)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        apply_config(load_config(getattr(args, "CONFIG", None)))
        apply_cli_overrides(args)
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    try:
        projects = collect_projects(args.FROM_SRC, recursive=args.RECURSIVE)
        results = extract_graphs(projects)
        write_output(args, results)
    except ExecutionError as e:
        logger.error("%s", e.describe())
        return ExitCodes.EXECUTION_ERROR.value
    except DecodeError as e:
        logger.error("%s", e.describe())
        return ExitCodes.DECODE_ERROR.value
    except OSError as e:
        logger.error("%s", e)
        return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit", component="cli", action="main", outcome="success"
            )
        )
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()

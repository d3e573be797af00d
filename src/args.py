"""Argument parsing functionality for depgraph."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="depgraph",
        description=(
            "depgraph - Extract flattened dependency graphs from Pipenv projects"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--directory",
                        dest="FROM_SRC",
                        help="Project directory to extract dependencies from (repeatable)",
                        action="append",
                        type=str,
                        required=True)
    parser.add_argument("-r", "--recursive",
                        dest="RECURSIVE",
                        help="Discover Pipenv projects in subdirectories.",
                        action="store_true")
    parser.add_argument("--direct-only",
                        dest="DIRECT_ONLY",
                        help="Only report direct dependencies.",
                        action="store_true")

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output file (JSON or CSV). Prints JSON to stdout when omitted.",
                        action="store",
                        type=str)
    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or csv). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS)

    parser.add_argument("--pipenv-bin",
                        dest="PIPENV_BINARY",
                        help="Path to the pipenv executable",
                        action="store",
                        type=str)
    parser.add_argument("--timeout",
                        dest="PIPENV_TIMEOUT",
                        help="Seconds to wait for `pipenv graph` before giving up",
                        action="store",
                        type=int)

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log errors to the console.",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or YML)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)

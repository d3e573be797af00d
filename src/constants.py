"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    EXECUTION_ERROR = 2
    DECODE_ERROR = 4


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    OUTPUT_FORMATS = ["json", "csv"]

    PIPFILE = "Pipfile"
    PIPFILE_LOCK = "Pipfile.lock"
    PIPENV_BINARY = "pipenv"
    PIPENV_GRAPH_ARGS = ["graph", "--json-tree"]
    PIPENV_TIMEOUT_SEC = 300

    # Directories never descended into when discovering projects recursively
    DISCOVERY_SKIP_DIRS = ["node_modules", "__pycache__", "site-packages", "venv", ".venv"]

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    ENV_LOG_LEVEL = "DEPGRAPH_LOG_LEVEL"

    CONFIG_FILE_NAMES = ["depgraph.yml", "depgraph.yaml"]
    ENV_XDG_CONFIG_HOME = "XDG_CONFIG_HOME"

    DOCS_LINK_PIPENV = (
        "https://github.com/fossas/fossa-cli/blob/master/docs/integrations/python.md#strategy-string"
    )
    DOCS_LINK_PIPENV_GRAPH = "https://pipenv.pypa.io/en/latest/cli.html#graph"

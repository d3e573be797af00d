"""Runs ``pipenv graph --json-tree`` and turns its output into a graph."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from common.errors import ExecutionError
from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants
from graph.models import DependencyGraph
from buildtools.pipenv.flatten import flatten
from buildtools.pipenv.tree import decode

logger = logging.getLogger(__name__)

GraphFunc = Callable[[str], str]


def _command(binary: Optional[str] = None) -> List[str]:
    return [binary or Constants.PIPENV_BINARY] + list(Constants.PIPENV_GRAPH_ARGS)


def _execution_error(dirname: str, cmd: List[str], message: str, cause: BaseException) -> ExecutionError:
    return ExecutionError(
        message,
        cause=cause,
        troubleshooting=(
            f"Could not run `{' '.join(cmd)}` within the directory `{dirname}`. "
            "Try running this command and ensure that Pipenv is installed correctly."
        ),
        link=Constants.DOCS_LINK_PIPENV,
    )


def graph_json(dirname: str, binary: Optional[str] = None, timeout: Optional[float] = None) -> str:
    """Return the output of ``pipenv graph --json-tree`` run in ``dirname``.

    Args:
        dirname: Project directory containing the Pipfile.
        binary: Pipenv executable; defaults to ``Constants.PIPENV_BINARY``.
        timeout: Seconds before the command is abandoned; defaults to
            ``Constants.PIPENV_TIMEOUT_SEC``.

    Returns:
        Captured standard output.

    Raises:
        ExecutionError: If the command cannot be started, times out or exits
            with a non-zero status.
    """
    cmd = _command(binary)
    limit = timeout if timeout is not None else Constants.PIPENV_TIMEOUT_SEC
    logger.info("Running: %s (in %s)", " ".join(cmd), dirname)

    with Timer() as t:
        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                cwd=dirname,
                capture_output=True,
                text=True,
                timeout=limit,
                check=True,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise _execution_error(
                dirname, cmd, f"Command exited with status {e.returncode}: {stderr}", e
            ) from e
        except subprocess.TimeoutExpired as e:
            raise _execution_error(dirname, cmd, f"Command timed out after {limit} seconds", e) from e
        except OSError as e:
            raise _execution_error(dirname, cmd, f"Command could not be started: {e}", e) from e

    if is_debug_enabled(logger):
        logger.debug(
            "Command finished",
            extra=extra_context(
                event="subprocess",
                component="pipenv_client",
                action="graph",
                outcome="success",
                duration_ms=t.duration_ms(),
                target=dirname,
            ),
        )
    return result.stdout


@dataclass
class Pipenv:
    """A Pipenv project and the function used to produce its tree report.

    ``graph`` is swappable so callers (and tests) can supply the report
    without running pipenv.
    """

    dirname: str
    graph: GraphFunc = field(default=graph_json)

    def deps(self) -> DependencyGraph:
        """Dependency graph of the project.

        Raises:
            ExecutionError: If the report could not be produced.
            DecodeError: If the report could not be decoded.
        """
        raw = self.graph(self.dirname)
        return flatten(decode(raw))


def new(dirname: str, binary: Optional[str] = None, timeout: Optional[float] = None) -> Pipenv:
    """Pipenv instance that calls the pipenv build tool."""
    return Pipenv(dirname=dirname, graph=lambda d: graph_json(d, binary=binary, timeout=timeout))

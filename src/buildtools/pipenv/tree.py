"""Decoder for the ``pipenv graph --json-tree`` report.

Turns the raw JSON text into a forest of ``TreeNode`` values. Ordering is
preserved at every level and repeated subtrees are kept as they appear;
deduplication is the flattener's job.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Union

from common.errors import DecodeError
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants
from graph.models import TreeNode
from buildtools.pipenv.schema import first_error

logger = logging.getLogger(__name__)

_TROUBLESHOOTING = (
    "The following output could not be un-marshalled into JSON:\n{raw}\n"
    "try running the command on your own and check for any errors"
)


def _decode_error(raw: Union[str, bytes], message: str, cause: Optional[BaseException] = None) -> DecodeError:
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    return DecodeError(
        message,
        raw=raw,
        cause=cause,
        troubleshooting=_TROUBLESHOOTING.format(raw=text),
        link=Constants.DOCS_LINK_PIPENV_GRAPH,
    )


def _build_forest(data: List[Dict[str, Any]]) -> List[TreeNode]:
    # Children come after their parent in pre-order, so building in reverse
    # pre-order always finds them already built.
    order: List[Dict[str, Any]] = []
    stack = list(reversed(data))
    while stack:
        entry = stack.pop()
        order.append(entry)
        stack.extend(reversed(entry.get("dependencies") or []))

    built: Dict[int, TreeNode] = {}
    for entry in reversed(order):
        children = entry.get("dependencies") or []
        built[id(entry)] = TreeNode(
            package=entry["package_name"],
            resolved=entry["installed_version"],
            target=entry.get("required_version") or "",
            dependencies=tuple(built[id(child)] for child in children),
        )
    return [built[id(entry)] for entry in data]


def decode(raw: Union[str, bytes]) -> List[TreeNode]:
    """Decode a JSON tree report into its root nodes.

    Args:
        raw: Captured output of ``pipenv graph --json-tree``.

    Returns:
        Root TreeNodes in report order.

    Raises:
        DecodeError: If the text is not valid JSON or does not match the
            expected report shape. No partial forest is returned.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        data = json.loads(text)
    except RecursionError as e:
        raise _decode_error(raw, "Dependency tree is nested too deeply to parse", e) from e
    except (UnicodeDecodeError, ValueError, TypeError) as e:
        raise _decode_error(raw, f"Could not parse dependency tree: {e}", e) from e

    problem = first_error(data)
    if problem is not None:
        message, error = problem
        raise _decode_error(raw, message, error) from error

    roots = _build_forest(data)

    if is_debug_enabled(logger):
        logger.debug(
            "Decoded dependency tree",
            extra=extra_context(
                event="decode",
                component="pipenv_tree",
                action="decode",
                outcome="success",
                count=len(roots),
            ),
        )
    return roots

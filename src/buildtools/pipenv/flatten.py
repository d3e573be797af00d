"""Flatten a decoded dependency tree into a deduplicated graph.

Roots and descendants follow different rules when an Identity repeats:

  * a root always (re)writes its own record, so the last root occurrence
    wins;
  * a descendant whose Identity is already recorded is skipped together
    with its whole subtree, so the first occurrence in pre-order wins.

Downstream consumers rely on this exact output, so both rules are kept.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from graph.models import (
    DependencyGraph,
    Ecosystem,
    Identity,
    ImportEdge,
    PackageRecord,
    TreeNode,
)

logger = logging.getLogger(__name__)


def identity_of(node: TreeNode) -> Identity:
    """Identity for a Python package node."""
    return Identity(ecosystem=Ecosystem.PYTHON, name=node.package, revision=node.resolved)


def package_imports(children: Sequence[TreeNode]) -> Tuple[ImportEdge, ...]:
    """Edges to immediate children; transitive edges carry no target."""
    return tuple(ImportEdge(resolved=identity_of(child)) for child in children)


def _record(node: TreeNode) -> PackageRecord:
    return PackageRecord(id=identity_of(node), imports=package_imports(node.dependencies))


def direct_imports(roots: Sequence[TreeNode]) -> List[ImportEdge]:
    """One edge per root, in order, duplicates included."""
    return [ImportEdge(resolved=identity_of(root), target=root.target) for root in roots]


def _flatten_deep(graph: Dict[Identity, PackageRecord], parent: TreeNode) -> None:
    # Reversed pushes keep the pop order pre-order, left to right
    stack: List[TreeNode] = list(reversed(parent.dependencies))
    while stack:
        node = stack.pop()
        node_id = identity_of(node)
        if node_id in graph:
            continue
        graph[node_id] = _record(node)
        stack.extend(reversed(node.dependencies))


def transitive_packages(roots: Sequence[TreeNode]) -> Dict[Identity, PackageRecord]:
    """Every package reachable from ``roots`` mapped to its own record."""
    graph: Dict[Identity, PackageRecord] = {}
    for root in roots:
        graph[identity_of(root)] = _record(root)
        _flatten_deep(graph, root)
    return graph


def flatten(roots: Sequence[TreeNode]) -> DependencyGraph:
    """Build the direct dependency list and the flattened package map.

    Args:
        roots: Top-level nodes of a decoded tree report.

    Returns:
        DependencyGraph for the project.
    """
    dep_graph = DependencyGraph(
        direct=direct_imports(roots),
        transitive=transitive_packages(roots),
    )
    if is_debug_enabled(logger):
        logger.debug(
            "Flattened dependency tree",
            extra=extra_context(
                event="flatten",
                component="pipenv_flatten",
                action="flatten",
                direct_count=len(dep_graph.direct),
                package_count=len(dep_graph.transitive),
            ),
        )
    return dep_graph

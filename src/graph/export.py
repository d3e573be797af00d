"""Render dependency graphs as JSON or CSV."""
from __future__ import annotations

import csv
import json
import logging
from typing import Any, Dict, List, Sequence, Tuple

from graph.models import DependencyGraph

logger = logging.getLogger(__name__)

# (project directory, graph extracted from it)
ProjectGraph = Tuple[str, DependencyGraph]

CSV_HEADERS = ["directory", "type", "name", "revision", "direct", "target", "imports"]


def graph_to_dict(results: Sequence[ProjectGraph], direct_only: bool = False) -> Dict[str, Any]:
    """JSON-ready representation of one or more project graphs.

    Args:
        results: Project directories paired with their graphs.
        direct_only: Leave out the transitive package list.
    """
    projects = []
    for directory, dep_graph in results:
        rendered = dep_graph.to_dict()
        entry: Dict[str, Any] = {"directory": directory, "direct": rendered["direct"]}
        if not direct_only:
            entry["transitive"] = rendered["transitive"]
        projects.append(entry)
    return {"projects": projects}


def to_json(results: Sequence[ProjectGraph], direct_only: bool = False) -> str:
    return json.dumps(graph_to_dict(results, direct_only), ensure_ascii=False, indent=4)


def csv_rows(results: Sequence[ProjectGraph], direct_only: bool = False) -> List[List[str]]:
    """Header plus one row per package.

    A package listed as a direct dependency more than once reports the
    target of its first listing.
    """
    rows = [list(CSV_HEADERS)]
    for directory, dep_graph in results:
        targets: Dict[Any, str] = {}
        for edge in dep_graph.direct:
            targets.setdefault(edge.resolved, edge.target)

        if direct_only:
            records = [dep_graph.transitive.get(i) for i in targets]
            ids = list(targets)
        else:
            records = dep_graph.packages()
            ids = [r.id for r in records]

        for ident, record in zip(ids, records):
            imports = ";".join(str(e.resolved) for e in record.imports) if record else ""
            rows.append([
                directory,
                ident.ecosystem.value,
                ident.name,
                ident.revision,
                str(ident in targets),
                targets.get(ident, ""),
                imports,
            ])
    return rows


def export_json(results: Sequence[ProjectGraph], path: str, direct_only: bool = False) -> None:
    """Exports the graphs to a JSON file.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(path, "w", encoding="utf-8") as file:
        file.write(to_json(results, direct_only))
    logger.info("JSON file has been successfully exported at: %s", path)


def export_csv(results: Sequence[ProjectGraph], path: str, direct_only: bool = False) -> None:
    """Exports the graphs to a CSV file.

    Raises:
        OSError: If the file cannot be written.
    """
    with open(path, "w", newline="", encoding="utf-8") as file:
        csv.writer(file).writerows(csv_rows(results, direct_only))
    logger.info("CSV file has been successfully exported at: %s", path)

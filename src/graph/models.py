"""Data models for flattened dependency graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class Ecosystem(Enum):
    """Enum for package ecosystems an Identity can belong to."""
    PYTHON = "pip"


@dataclass(frozen=True)
class Identity:
    """Stable key for one package within a graph."""
    ecosystem: Ecosystem
    name: str
    revision: str

    def __str__(self) -> str:
        return f"{self.name}@{self.revision}"

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.ecosystem.value, "name": self.name, "revision": self.revision}


@dataclass(frozen=True)
class TreeNode:
    """One entry of a decoded dependency tree report."""
    package: str
    resolved: str
    target: str = ""
    dependencies: Tuple["TreeNode", ...] = ()


@dataclass(frozen=True)
class ImportEdge:
    """Reference to another package; only direct edges carry a target."""
    resolved: Identity
    target: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"target": self.target, "resolved": self.resolved.to_dict()}


@dataclass(frozen=True)
class PackageRecord:
    """A package and the edges to its immediate dependencies."""
    id: Identity
    imports: Tuple[ImportEdge, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id.to_dict(), "imports": [i.to_dict() for i in self.imports]}


@dataclass
class DependencyGraph:
    """Direct dependencies plus every reachable package keyed by Identity."""
    direct: List[ImportEdge] = field(default_factory=list)
    transitive: Dict[Identity, PackageRecord] = field(default_factory=dict)

    def packages(self) -> List[PackageRecord]:
        """Records in insertion order."""
        return list(self.transitive.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "direct": [edge.to_dict() for edge in self.direct],
            "transitive": [record.to_dict() for record in self.transitive.values()],
        }

"""Pipenv build tool support: tree decoding, flattening and command client."""

from buildtools.pipenv.client import Pipenv, graph_json, new
from buildtools.pipenv.discovery import find_pipenv_projects
from buildtools.pipenv.flatten import direct_imports, flatten, transitive_packages
from buildtools.pipenv.tree import decode

__all__ = [
    "Pipenv",
    "decode",
    "direct_imports",
    "find_pipenv_projects",
    "flatten",
    "graph_json",
    "new",
    "transitive_packages",
]

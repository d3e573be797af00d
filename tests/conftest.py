"""Shared fixtures for depgraph tests."""

import json

import pytest

from constants import Constants


@pytest.fixture(autouse=True)
def restore_pipenv_constants():
    """Config and CLI overrides mutate Constants; undo them after each test."""
    binary = Constants.PIPENV_BINARY
    timeout = Constants.PIPENV_TIMEOUT_SEC
    yield
    Constants.PIPENV_BINARY = binary
    Constants.PIPENV_TIMEOUT_SEC = timeout


def _dep(name, version, required="", children=None):
    return {
        "package_name": name,
        "installed_version": version,
        "required_version": required,
        "dependencies": children or [],
    }


@pytest.fixture
def requests_tree():
    """A realistic `pipenv graph --json-tree` report."""
    return json.dumps([
        _dep("requests", "2.31.0", "*", [
            _dep("certifi", "2023.7.22", ">=2017.4.17"),
            _dep("charset-normalizer", "3.3.0", ">=2,<4"),
            _dep("idna", "3.4", ">=2.5,<4"),
            _dep("urllib3", "2.0.6", ">=1.21.1,<3"),
        ]),
        _dep("flask", "3.0.0", "==3.0.0", [
            _dep("click", "8.1.7", ">=8.1.3", [_dep("colorama", "0.4.6", "*")]),
            _dep("itsdangerous", "2.1.2", ">=2.1.2"),
        ]),
    ])

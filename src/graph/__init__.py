"""Dependency graph models and exporters."""

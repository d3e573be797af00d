"""Build tool integrations."""

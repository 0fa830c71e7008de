"""Shared pytest configuration."""
pytest_plugins = ["eiffel_broadcaster.testing.fixtures"]

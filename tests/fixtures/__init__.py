"""
Test fixtures for govuk tests.

This package contains reusable fixtures and helpers, registered globally
through pytest_plugins in tests/conftest.py.
"""

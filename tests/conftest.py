"""
Centralized test configuration and fixtures for pgtest.

This module:
1. Configures logging for test runs
2. Enables the pgtest pytest plugin (session database, connections, assertions)
3. Marks integration tests and skips them when Docker is not available
"""

import logging

import pytest

from pgtest.testing.docker_manager import DockerTestManager

pytest_plugins = ["pgtest.testing.plugin", "pytester"]

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logging.getLogger("pgtest").setLevel(logging.DEBUG)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "docker: mark test as requiring Docker")


def pytest_collection_modifyitems(config, items):
    """Mark tests by location and skip Docker tests without a daemon."""
    docker_items = []
    for item in items:
        # Add integration and docker markers for tests in integration directory
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.docker)
            docker_items.append(item)

    if docker_items and not DockerTestManager.is_available():
        skip_docker = pytest.mark.skip(reason="Docker daemon not available")
        for item in docker_items:
            item.add_marker(skip_docker)

"""
pgtest Testing Infrastructure

Docker container management and the caller-owned TestDatabase handle.
The pytest fixtures live in pgtest.testing.plugin and are opt-in.
"""

from .docker_manager import ContainerSetupError, DockerTestManager
from .test_database import TestDatabase, TestDatabaseNotStartedError

__all__ = [
    'ContainerSetupError',
    'DockerTestManager',
    'TestDatabase',
    'TestDatabaseNotStartedError'
]

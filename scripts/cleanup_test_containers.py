#!/usr/bin/env python3
"""
Utility script to clean up pgtest database containers.
Run this if a test run was interrupted before its teardown ran.

Usage:
    python scripts/cleanup_test_containers.py [--dry-run] [--docker-url URL]
"""

import sys
import argparse
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pgtest.testing.docker_manager import ContainerSetupError, DockerTestManager


def cleanup_test_containers(dry_run=False, docker_url=None):
    """Remove every container started by pgtest."""
    manager = DockerTestManager(base_url=docker_url)

    print("🧹 Cleaning up pgtest containers...")
    try:
        names = manager.cleanup_orphaned_test_containers(dry_run=dry_run)
    finally:
        manager.close()

    for name in names:
        if dry_run:
            print(f"  [DRY RUN] Would remove container: {name}")
        else:
            print(f"  Removed container: {name}")

    print("\n✅ Cleanup complete!")
    if dry_run:
        print("  This was a dry run - no containers were actually removed.")
    else:
        print(f"  Containers removed: {len(names)}")
    return names


def main():
    parser = argparse.ArgumentParser(
        description="Remove PostgreSQL test containers left behind by pgtest"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be removed without removing anything"
    )
    parser.add_argument(
        "--docker-url",
        help="Docker daemon URL (defaults to DOCKER_HOST or the local socket)"
    )
    args = parser.parse_args()

    try:
        cleanup_test_containers(dry_run=args.dry_run, docker_url=args.docker_url)
    except ContainerSetupError as e:
        print(f"\n❌ {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\n⚠️  Cleanup interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()

# tests/conftest.py
import os
import sys

import pytest

# Ensure repository root is on PYTHONPATH for tests
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom CLI options for this repo.

    --unit-stubs: run only hermetic tests that use the in-memory manager fake
    or mocked drivers, skipping anything marked as needing a live database.
    """
    parser.addoption(
        "--unit-stubs",
        action="store_true",
        default=False,
        help="Run unit tests with stubs/mocks; ignore tests needing a live Neo4j.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """When --unit-stubs is passed, skip tests marked ``integration`` or ``slow``."""
    if not config.getoption("--unit-stubs"):
        return

    skip_marker = pytest.mark.skip(reason="skipped by --unit-stubs")
    heavy_markers = {"integration", "slow"}
    for item in items:
        for m in item.iter_markers():
            if m.name in heavy_markers:
                item.add_marker(skip_marker)
                break

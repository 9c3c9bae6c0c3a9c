"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/                  # Fast, isolated tests (mocks, no database)
    │   ├── application/       # Services and commands against mocked repos
    │   ├── config/
    │   ├── domain/
    │   ├── presentation/
    │   └── vela_identity/     # Token codec and password hasher
    ├── vela_identity/         # Repositories against SQLite (aiosqlite)
    └── integration/api/       # HTTP scenarios through the FastAPI app

Environment Variables:
    RUN_INTEGRATION=1    Run @pytest.mark.integration tests

Pytest Options:
    --run-integration    Run integration tests
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from vela_config import clear_settings_cache

PROJECT_ROOT = Path(__file__).resolve().parents[1]

# Load the test env file when present (never the developer's .env.dev)
TEST_ENV_FILE = PROJECT_ROOT / "config" / ".env.test"
if TEST_ENV_FILE.exists():
    load_dotenv(TEST_ENV_FILE)


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run tests marked with @pytest.mark.integration",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: Tests against an external database server (auto-skipped)",
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests unless explicitly enabled."""
    run_integration = config.getoption("--run-integration") or os.environ.get(
        "RUN_INTEGRATION",
        "",
    ).lower() in ("1", "true", "yes")

    if run_integration:
        return

    skip_integration = pytest.mark.skip(
        reason="Integration test - run with --run-integration or RUN_INTEGRATION=1",
    )
    for item in items:
        if "integration" in {mark.name for mark in item.iter_markers()}:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def fresh_settings_cache():
    """Keep cached settings from leaking between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()

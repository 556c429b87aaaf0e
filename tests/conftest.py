"""Pytest configuration and fixtures for all tests."""

import pytest
import yaml

from bleedair.core.logging_system import initialize_logging, shutdown_logging


@pytest.fixture(scope="session", autouse=True)
def initialize_test_logging(tmp_path_factory: pytest.TempPathFactory):
    """Send log output of the whole session to a temporary directory.

    Console output is limited to errors so test output stays readable.
    """
    log_dir = tmp_path_factory.mktemp("logs")
    config_path = log_dir / "logging.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "level": "DEBUG",
                "log_dir": str(log_dir),
                "combined_log": {"enabled": True, "filename": "bleedair.log"},
                "console": {"enabled": True, "level": "ERROR"},
            }
        )
    )

    initialize_logging(config_path=config_path, use_platform_dir=False)

    yield

    shutdown_logging()

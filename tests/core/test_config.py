"""Tests for the YAML configuration loader."""

from pathlib import Path

import pytest

from bleedair.core.config import ConfigError, ConfigLoader


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "pneumatic.yaml"
    path.write_text(
        "pneumatic:\n"
        "  valve_transfer_speed: 3.0\n"
        "  prv_pid:\n"
        "    ki: 0.01\n"
        "    setpoint_psi: 46.0\n"
        "logging:\n"
        "  level: INFO\n"
    )
    return path


class TestConfigLoader:
    """Test loading and querying configuration."""

    def test_dot_notation(self, config_file: Path) -> None:
        """Test nested access with dots."""
        config = ConfigLoader.load(config_file)

        assert config.get("pneumatic.prv_pid.setpoint_psi") == 46.0
        assert config.get("pneumatic.valve_transfer_speed") == 3.0

    def test_missing_key_default(self, config_file: Path) -> None:
        """Test default for missing keys."""
        config = ConfigLoader.load(config_file)

        assert config.get("pneumatic.hpv_pid.kp", default=0.05) == 0.05
        assert config.get("logging.level.name") is None

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that an empty file is an empty configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert ConfigLoader.load(path).get("pneumatic") is None

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test missing file error."""
        with pytest.raises(ConfigError, match="not found"):
            ConfigLoader.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML error."""
        path = tmp_path / "broken.yaml"
        path.write_text("pneumatic: [unclosed")

        with pytest.raises(ConfigError, match="Failed to load configuration"):
            ConfigLoader.load(path)

    def test_root_must_be_mapping(self, tmp_path: Path) -> None:
        """Test that a list at the root is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ConfigError, match="must be a mapping"):
            ConfigLoader.load(path)

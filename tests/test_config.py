"""Tests for the configuration module."""

import json
import tempfile
from pathlib import Path

import pytest

from unittask.config import (
    LoggingConfig,
    ProjectConfig,
    TaskConfig,
    TestsConfig,
    UnitTaskConfig,
    create_example_config,
    get_default_config,
)


class TestProjectConfig:
    """Tests for ProjectConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = ProjectConfig()
        assert config.name == "my-project"
        assert config.description == ""


class TestTestsConfig:
    """Tests for TestsConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = TestsConfig()
        assert config.start_directory == "tests"
        assert config.pattern == "test*.py"
        assert config.top_level_directory is None

    def test_empty_pattern_rejected(self):
        """Test that the pattern cannot be blank."""
        with pytest.raises(ValueError):
            TestsConfig(pattern="  ")

    def test_get_absolute_paths(self):
        """Test getting absolute paths from config."""
        config = TestsConfig(top_level_directory=".")

        with tempfile.TemporaryDirectory() as tmpdir:
            base_dir = Path(tmpdir)
            paths = config.get_absolute_paths(base_dir)

            assert paths["start_directory"].is_absolute()
            assert str(paths["start_directory"]).endswith("tests")
            assert paths["top_level_directory"] == base_dir.resolve()

    def test_get_absolute_paths_without_top_level(self):
        """Test the top-level directory is omitted when unset."""
        paths = TestsConfig().get_absolute_paths("/project")
        assert set(paths) == {"start_directory"}


class TestTaskConfig:
    """Tests for TaskConfig."""

    def test_default_timeout(self):
        """Test the default timeout is twenty seconds."""
        assert TaskConfig().timeout_seconds == 20.0

    def test_timeout_validation(self):
        """Test that timeout must be positive."""
        with pytest.raises(ValueError):
            TaskConfig(timeout_seconds=0)


class TestLoggingConfig:
    """Tests for LoggingConfig."""

    def test_level_case_insensitive(self):
        """Test that level names are normalized."""
        assert LoggingConfig(level="trace").level == "TRACE"

    def test_level_validation(self):
        """Test that only known levels are accepted."""
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")


class TestUnitTaskConfig:
    """Tests for UnitTaskConfig."""

    def test_default_config(self):
        """Test creating a default configuration."""
        config = get_default_config()
        assert config.tests.start_directory == "tests"
        assert config.task.timeout_seconds == 20.0
        assert config.logging.level == "INFO"

    def test_from_file(self):
        """Test loading configuration from a file."""
        config_data = {
            "project": {"name": "test-project"},
            "tests": {"start_directory": "unit", "pattern": "*_test.py"},
            "task": {"timeout_seconds": 5},
        }

        with tempfile.NamedTemporaryFile(mode="w", suffix=".json", delete=False) as f:
            json.dump(config_data, f)
            f.flush()

            config = UnitTaskConfig.from_file(f.name)
            assert config.project.name == "test-project"
            assert config.tests.pattern == "*_test.py"
            assert config.task.timeout_seconds == 5.0
            assert config.logging.level == "INFO"

    def test_from_file_not_found(self):
        """Test loading from non-existent file raises error."""
        with pytest.raises(FileNotFoundError):
            UnitTaskConfig.from_file("/nonexistent/path.json")

    def test_to_file(self):
        """Test saving configuration to a file."""
        config = get_default_config()
        config.project.name = "saved-project"

        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            config.to_file(path)

            loaded = UnitTaskConfig.from_file(path)
            assert loaded.project.name == "saved-project"

    def test_create_example_config(self):
        """Test creating an example configuration file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "example.json"
            result = create_example_config(path)

            assert result == path
            with open(path) as f:
                data = json.load(f)
                assert set(data) == {"project", "tests", "task", "logging"}

    def test_find_config_file_walks_up(self, tmp_path):
        """Test the nearest configuration file in a parent directory is found."""
        (tmp_path / ".unittask.json").write_text("{}")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert UnitTaskConfig.find_config_file(nested) == tmp_path.resolve() / ".unittask.json"

    def test_find_config_file_missing(self, tmp_path):
        """Test a missing configuration file raises."""
        with pytest.raises(FileNotFoundError):
            UnitTaskConfig.find_config_file(tmp_path)

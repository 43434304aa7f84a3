"""Configuration management for UnitTask."""

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from unittask.logs import LEVELS

CONFIG_NAMES = ["unittask.json", ".unittask.json"]


class ProjectConfig(BaseModel):
    """Project identification and metadata."""

    name: str = Field(default="my-project", description="Project name for identification")
    description: str = Field(default="", description="Brief description of the project")


class TestsConfig(BaseModel):
    """Where and how to discover unittest modules."""

    __test__ = False

    start_directory: str = Field(default="tests", description="Directory to start discovery in")
    pattern: str = Field(default="test*.py", description="Filename pattern of test modules")
    top_level_directory: Optional[str] = Field(
        default=None, description="Top-level directory of the project (import root)"
    )

    @field_validator("start_directory", "pattern")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v

    def get_absolute_paths(self, base_dir: Path | str | None = None) -> dict[str, Path]:
        """Get absolute paths for the discovery directories."""
        if base_dir is None:
            base_dir = Path.cwd()
        else:
            base_dir = Path(base_dir)

        paths = {"start_directory": (base_dir / self.start_directory).resolve()}
        if self.top_level_directory is not None:
            paths["top_level_directory"] = (base_dir / self.top_level_directory).resolve()
        return paths


class TaskConfig(BaseModel):
    """Task execution configuration."""

    timeout_seconds: float = Field(
        default=20.0, description="Seconds to wait for a test run to finish"
    )

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


class LoggingConfig(BaseModel):
    """Console logging configuration."""

    level: str = Field(default="INFO", description="Minimum level to display")
    show_time: bool = Field(default=True, description="Prefix log lines with a timestamp")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        if v.upper() not in LEVELS:
            raise ValueError(f"Level must be one of: {sorted(LEVELS)}")
        return v.upper()


class UnitTaskConfig(BaseModel):
    """Main configuration for UnitTask."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    tests: TestsConfig = Field(default_factory=TestsConfig)
    task: TaskConfig = Field(default_factory=TaskConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "UnitTaskConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def find_config_file(cls, start_dir: Path | str | None = None) -> Path:
        """Find the nearest configuration file, searching up the directory tree."""
        if start_dir is None:
            start_dir = Path.cwd()
        else:
            start_dir = Path(start_dir)

        current = start_dir.resolve()
        for directory in (current, *current.parents):
            for name in CONFIG_NAMES:
                config_path = directory / name
                if config_path.exists():
                    return config_path

        raise FileNotFoundError(
            "No configuration file found. Create unittask.json or run 'unittask init'"
        )

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)


def get_default_config() -> UnitTaskConfig:
    """Return a default configuration."""
    return UnitTaskConfig(
        project=ProjectConfig(name="my-project"),
        tests=TestsConfig(start_directory="tests", pattern="test*.py"),
        task=TaskConfig(timeout_seconds=20.0),
    )


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.project.description = "Brief description of your project"
    config.to_file(output_path)
    return output_path
